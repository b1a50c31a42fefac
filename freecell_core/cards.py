from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

# card color
BLK = 0
RED = 1

# card suit
CLB = 0
DMD = 1
HRT = 2
SPD = 3

# card rank
ACES = 0
TWOS = 1
THRE = 2
FOUR = 3
FIVE = 4
SIXS = 5
SEVN = 6
EGHT = 7
NINE = 8
TENS = 9
JACK = 10
QUEN = 11
KING = 12

# card ids for the cards the rules refer to by name
AC, AD, AH, AS = 0, 1, 2, 3
KC, KD, KH, KS = 48, 49, 50, 51

NO_CARD = 999  # empty slot / no selection

SUIT_SYMS = "CDHS"
RANK_SYMS = "A23456789TJQK"


@dataclass(frozen=True)
class Card:
    """A standard playing card. Suit, rank and color are derived from the id."""
    id: int
    suit: int   # club, diamond, heart, spade
    rank: int   # ace=0 .. king=12
    color: int  # black, red
    sym: str    # rank then suit, eg: "TD"

    def __str__(self) -> str:
        return self.sym


def _make_card(cid: int) -> Card:
    suit = cid % 4
    rank = cid // 4
    color = RED if suit in (DMD, HRT) else BLK
    return Card(id=cid, suit=suit, rank=rank, color=color, sym=RANK_SYMS[rank] + SUIT_SYMS[suit])


# Sorted deck: AC AD AH AS 2C 2D ... KS. Used to build every shuffled deal.
DECK: Tuple[Card, ...] = tuple(_make_card(cid) for cid in range(52))

INVALID_CARD = Card(id=NO_CARD, suit=NO_CARD, rank=NO_CARD, color=NO_CARD, sym="--")

_BY_SYM: Dict[str, Card] = {c.sym: c for c in DECK}


def is_card(cid: int) -> bool:
    return 0 <= cid <= KS


def get_card(cid: int) -> Card:
    """Returns the catalog card for cid, or INVALID_CARD for anything else."""
    if is_card(cid):
        return DECK[cid]
    return INVALID_CARD


def card_from_sym(sym: str) -> Card:
    """Looks up a card by symbol, eg: '7h', 'TD' or '10D'."""
    s = sym.strip().upper()
    if s.startswith("10"):
        s = "T" + s[2:]
    card = _BY_SYM.get(s)
    if card is None:
        raise ValueError(f"unknown card symbol: {sym!r}")
    return card
