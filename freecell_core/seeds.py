from __future__ import annotations

import bisect
from typing import Sequence, Tuple

# 1 million games starting at game 0.
MAX_SEED = 999_999
SEED_DIGITS = 6

# Ordered list of unsolvable games.
# From: https://cards.fandom.com/wiki/FreeCell#Unsolvable_Combinations
UNSOLVABLE_GAMES: Tuple[int, ...] = (
    11_982, 146_692, 186_216, 455_889,
    495_505, 512_118, 517_776, 781_948,
)


def is_game_solvable(seed: int) -> bool:
    """False only for the known unsolvable deals."""
    i = bisect.bisect_left(UNSOLVABLE_GAMES, seed)
    return not (i < len(UNSOLVABLE_GAMES) and UNSOLVABLE_GAMES[i] == seed)


def check_seed(seed: int) -> int:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise ValueError(f"game number must be an integer, got {seed!r}")
    if seed < 0 or seed > MAX_SEED:
        raise ValueError(f"game number {seed} outside 0..{MAX_SEED}")
    return seed


def next_seed(seed: int) -> int:
    return min(seed + 1, MAX_SEED)


def previous_seed(seed: int) -> int:
    return max(seed - 1, 0)


def format_seed(seed: int) -> str:
    return f"{seed:0{SEED_DIGITS}d}"


def parse_seed_digits(digits: Sequence[str]) -> Tuple[str, int]:
    """Display text and value for a partially typed game number.

    Missing leading digits show as '_', eg: ['4', '2'] -> ('____42', 42).
    """
    if len(digits) > SEED_DIGITS:
        raise ValueError(f"at most {SEED_DIGITS} digits")
    num = ""
    for d in digits:
        if len(d) != 1 or d not in "0123456789":
            raise ValueError(f"not a digit: {d!r}")
        num += d
    display = "_" * (SEED_DIGITS - len(num)) + num
    return display, int(num) if num else 0
