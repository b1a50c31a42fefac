from __future__ import annotations

from typing import List, Sequence, Tuple

from .board import CASCADE_BASE, Board
from .cards import DECK, Card

RAND_MAX_32 = (1 << 31) - 1


class ClassicRand:
    """The classic Microsoft C rand(): a 31-bit LCG returning 15-bit draws.

    Reproduces the original Microsoft FreeCell deals for a given game number.
    Each instance holds its own register.
    """

    def __init__(self, seed: int = 0) -> None:
        self.state = seed

    def srand(self, seed: int) -> None:
        self.state = seed

    def rand(self) -> int:
        self.state = (self.state * 214013 + 2531011) & RAND_MAX_32
        return self.state >> 16


def shuffle(seed: int, ordered: Sequence[Card] = DECK) -> Tuple[Card, ...]:
    """Shuffles the ordered deck for the given game number."""
    rng = ClassicRand(seed)
    deck: List[int] = list(range(52))
    deal: List[int] = []
    remainder = 52
    for _ in range(52):
        j = rng.rand() % remainder
        deal.append(deck[j])
        remainder -= 1
        deck[j] = deck[remainder]  # remove the dealt card
    return tuple(ordered[cid] for cid in deal)


def deal_board(seed: int) -> Board:
    """Deals the shuffled deck across the 8 cascades, row by row."""
    locs = [0] * 52
    for pos, card in enumerate(shuffle(seed)):
        locs[card.id] = pos + CASCADE_BASE
    return Board(tuple(locs))


def deal_key(deal: Sequence[Card]) -> str:
    return "".join(c.sym for c in deal)


def dump_deal(deal: Sequence[Card]) -> str:
    """Deal as eight cards per line, in the order published deal lists use."""
    syms = [c.sym for c in deal]
    return "\n".join(" ".join(syms[i:i + 8]) for i in range(0, len(syms), 8))
