from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .cards import DECK, INVALID_CARD, NO_CARD, Card, card_from_sym, get_card

logger = logging.getLogger(__name__)

# Board locations. Each card id maps to exactly one of these.
#   freecells    0,1,2,3 - empty, or a single card.
#   foundations  4,5,6,7 - empty, or the foundation top card.
#   cascade 1    8,16,24,...,160 -- space for 20 cards in a cascade.
#   ...
#   cascade 8    15,23,31,...,167
FC = 4  # club foundation, built up ACE to KING
FD = 5  # diamond foundation
FH = 6  # heart foundation
FS = 7  # spade foundation

CASCADE_BASE = 8
CASCADES = 8
CASCADE_ROWS = 20
MAX_BOARD_ID = 167

# Buried foundation cards are stored as their foundation location plus this.
HIDDEN_CARD = 9999

# Empty piles are picked as 100+pileID.
EMPTY_PILE1 = 100
EMPTY_PILE16 = 115

FREECELL_PILES = (0, 1, 2, 3)
FOUNDATION_PILES = (FC, FD, FH, FS)
CASCADE_PILES = (8, 9, 10, 11, 12, 13, 14, 15)

Locations = Tuple[int, ...]


def is_freecell(loc: int) -> bool:
    return 0 <= loc <= 3


def is_foundation(loc: int) -> bool:
    return FC <= loc <= FS


def is_cascade(loc: int) -> bool:
    return CASCADE_BASE <= loc <= MAX_BOARD_ID


def is_hidden(loc: int) -> bool:
    return loc >= HIDDEN_CARD


def is_empty_pile_pick(pick: int) -> bool:
    return EMPTY_PILE1 <= pick <= EMPTY_PILE16


def empty_pile_pick(pile_id: int) -> int:
    """UI pick id for the empty pile pile_id (0-15)."""
    return EMPTY_PILE1 + pile_id


@dataclass(frozen=True)
class Location:
    """Decoded view of an encoded board location."""
    kind: str  # 'freecell', 'foundation', 'cascade', 'hidden'
    pile: int  # freecell 0-3, foundation suit 0-3, cascade column 0-7
    row: int = 0  # cascade row 0-19, 0 is the first dealt card


def decode_location(loc: int) -> Optional[Location]:
    """Returns the tagged form of loc, or None for values no card can hold.

    Cascade rows count from 0: loc // 8 is 1 for the first row of cards, so
    the row is loc // 8 - 1 and locations 8..15 are row 0.
    """
    if is_freecell(loc):
        return Location("freecell", loc)
    if is_foundation(loc):
        return Location("foundation", loc - FC)
    if is_cascade(loc):
        return Location("cascade", loc % CASCADES, loc // CASCADES - 1)
    if is_hidden(loc) and is_foundation(loc - HIDDEN_CARD):
        return Location("hidden", loc - HIDDEN_CARD - FC)
    return None


@dataclass(frozen=True)
class Board:
    """Board location for each of the 52 card ids. Boards are values: moves build new ones."""
    locations: Locations

    def __post_init__(self) -> None:
        if len(self.locations) != 52:
            raise ValueError(f"board needs 52 locations, got {len(self.locations)}")

    def __getitem__(self, cid: int) -> int:
        return self.locations[cid]

    def __iter__(self):
        return iter(self.locations)

    def __len__(self) -> int:
        return 52

    def as_list(self) -> List[int]:
        return list(self.locations)

    def moved(self, changes: Mapping[int, int]) -> 'Board':
        """Returns a copy of the board with the given card ids relocated."""
        locs = list(self.locations)
        for cid, loc in changes.items():
            locs[cid] = loc
        return Board(tuple(locs))

    def card_at(self, loc: int) -> int:
        """Card id at the given board location, or NO_CARD if nothing is there."""
        for cid, bid in enumerate(self.locations):
            if bid == loc:
                return cid
        return NO_CARD

    def is_last_in_cascade(self, cid: int) -> bool:
        loc = self.locations[cid]
        if is_cascade(loc):
            return self.card_at(loc + CASCADES) == NO_CARD
        return False

    def last_in_cascade(self, column: int) -> Card:
        """Top (exposed) card of cascade column 0-7. Cascades can be empty."""
        for cid, loc in enumerate(self.locations):
            if self.is_last_in_cascade(cid) and loc % CASCADES == column:
                return DECK[cid]
        return INVALID_CARD

    def empty_pile(self, pile_id: int) -> bool:
        """True if nothing is in pile 0-15. A cascade is empty if its first row is free."""
        if 0 <= pile_id <= 15:
            return pile_id not in self.locations
        logger.error("invalid pile ID: %s", pile_id)
        return False

    def _count_empty(self, piles: Iterable[int]) -> int:
        return sum(1 for p in piles if self.empty_pile(p))

    def empty_freecells(self) -> int:
        return self._count_empty(FREECELL_PILES)

    def empty_cascades(self) -> int:
        return self._count_empty(CASCADE_PILES)

    def foundation_top(self, suit: int) -> Card:
        return get_card(self.card_at(FC + suit))

    def cascade(self, column: int) -> List[Card]:
        """Cards in cascade column from first dealt to exposed."""
        cards: List[Card] = []
        loc = CASCADE_BASE + column
        cid = self.card_at(loc)
        while cid != NO_CARD and len(cards) < CASCADE_ROWS:
            cards.append(DECK[cid])
            loc += CASCADES
            cid = self.card_at(loc)
        return cards

    @classmethod
    def from_layout(
        cls,
        cascades: Sequence[Sequence[str]] = (),
        freecells: Sequence[Optional[str]] = (),
        foundations: Sequence[Optional[str]] = (),
    ) -> 'Board':
        """Builds a board from card symbols.

        cascades: up to 8 columns, each listed from first dealt to exposed.
        freecells: up to 4 entries, None for an empty cell.
        foundations: up to 4 top cards, any order, None or omitted for empty.
        Cards not placed are hidden beneath their suit's foundation.
        """
        if len(cascades) > CASCADES or len(freecells) > 4 or len(foundations) > 4:
            raise ValueError("too many piles in layout")
        placed: Dict[int, int] = {}

        def put(sym: str, loc: int) -> None:
            card = card_from_sym(sym)
            if card.id in placed:
                raise ValueError(f"card placed twice: {card.sym}")
            placed[card.id] = loc

        for i, sym in enumerate(freecells):
            if sym:
                put(sym, i)
        for sym in foundations:
            if sym:
                suit = card_from_sym(sym).suit
                if FC + suit in placed.values():
                    raise ValueError(f"two tops for foundation {suit}")
                put(sym, FC + suit)
        for col, cards in enumerate(cascades):
            if len(cards) > CASCADE_ROWS:
                raise ValueError(f"cascade {col} is too tall")
            for row, sym in enumerate(cards):
                put(sym, CASCADE_BASE + col + row * CASCADES)
        locs = [placed.get(c.id, FC + c.suit + HIDDEN_CARD) for c in DECK]
        return cls(tuple(locs))

    def pretty(self) -> str:
        """Text rendering: freecells and foundations on top, then cascade rows."""
        top = [get_card(self.card_at(loc)).sym for loc in range(8)]
        lines = [" ".join(top[:4]) + " | " + " ".join(top[4:])]
        columns = [self.cascade(c) for c in range(CASCADES)]
        depth = max((len(c) for c in columns), default=0)
        for row in range(depth):
            cells = [col[row].sym if row < len(col) else "  " for col in columns]
            lines.append(" ".join(cells).rstrip())
        return "\n".join(lines)


def check_board(board: Board) -> List[str]:
    """Lists invariant problems with a board. Empty when the board is consistent."""
    problems: List[str] = []
    seen: Dict[int, int] = {}
    for cid, loc in enumerate(board.locations):
        if decode_location(loc) is None:
            problems.append(f"{DECK[cid].sym} has invalid location {loc}")
            continue
        if is_hidden(loc):
            continue
        if loc in seen:
            problems.append(f"{DECK[cid].sym} and {DECK[seen[loc]].sym} share location {loc}")
        seen[loc] = cid
    for loc in seen:
        if is_cascade(loc) and loc >= CASCADE_BASE + CASCADES and (loc - CASCADES) not in seen:
            problems.append(f"gap below location {loc}")
    for suit, pile in enumerate(FOUNDATION_PILES):
        if pile not in seen and any(loc == pile + HIDDEN_CARD for loc in board.locations):
            problems.append(f"foundation {suit} has buried cards but no top")
    for loc, cid in seen.items():
        if is_foundation(loc):
            continue
        card = DECK[cid]
        top = seen.get(FC + card.suit)
        if top is not None and card.rank <= DECK[top].rank:
            problems.append(f"{card.sym} is out of play below foundation top {DECK[top].sym}")
    return problems
