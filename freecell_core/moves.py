from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .board import (
    CASCADE_PILES,
    CASCADES,
    EMPTY_PILE1,
    EMPTY_PILE16,
    FC,
    HIDDEN_CARD,
    Board,
    is_cascade,
    is_empty_pile_pick,
    is_foundation,
    is_freecell,
)
from .cards import ACES, NO_CARD, SPD, Card, get_card, is_card

logger = logging.getLogger(__name__)

MAX_SELECTED_RUN = 10  # loop guard when walking a selected run
MAX_SEQUENCE = 13  # loop guard when validating a picked sequence


def next_in_sequence(a: Card, b: Card) -> bool:
    """True if b can sit on a in a cascade: one rank lower and the opposite color."""
    return b.rank == a.rank - 1 and b.color != a.color


def is_next_in_foundation(suit: int, top: Card, card: Card) -> bool:
    """True if card is the next card for the suit's foundation whose top card is top."""
    if suit > SPD:
        logger.error("is_next_in_foundation invalid suit: %s", suit)
        return False
    on_empty = top.id == NO_CARD and card.suit == suit and card.rank == ACES
    on_card = top.id != NO_CARD and card.suit == suit and card.rank == top.rank + 1
    return on_empty or on_card


def movable_stack_size(board: Board, empty_cascade_used: bool) -> int:
    """Maximum number of cards that can move together.

    Uses the conservative single-empty-cascade doubling rather than
    pow(2, empty cascades). When the move target is itself an empty cascade
    it no longer counts as a spare.
    """
    free = board.empty_freecells()
    empty = board.empty_cascades()
    if empty <= 0:
        return free + 1
    if empty_cascade_used:
        empty -= 1
    if empty > 0:
        return 2 * (free + 1 + (empty - 1))
    return free + 1


def selected_run(board: Board, selected: int) -> List[int]:
    """The selected card followed by the run stacked on it in its cascade."""
    if not is_card(selected):
        return []
    run = [selected]
    loc = board[selected]
    if is_cascade(loc):
        cid = selected
        nxt = board.card_at(loc + CASCADES)
        while nxt != NO_CARD and next_in_sequence(get_card(cid), get_card(nxt)):
            if len(run) >= MAX_SELECTED_RUN:
                logger.error("selected run loop safety trigger at %s", get_card(nxt).sym)
                break
            run.append(nxt)
            cid = nxt
            nxt = board.card_at(board[cid] + CASCADES)
    return run


def can_move_to_cascade(board: Board, cid: int) -> bool:
    """True if the card can be placed on the exposed card of some cascade."""
    card = get_card(cid)
    for column in range(CASCADES):
        last = board.last_in_cascade(column)
        if last.id != NO_CARD and next_in_sequence(last, card):
            return True
    return False


def get_sequence(board: Board, cid: int) -> List[int]:
    """The movable sequence starting at cid, or [] if there is none.

    A cascade sequence must run to the exposed card and fit within the
    movable stack size. A freecell card is a sequence of one.
    """
    loc = board[cid]
    if is_freecell(loc):
        return [cid]
    if not is_cascade(loc):
        return []
    seq = [cid]
    nxt = board.card_at(loc + CASCADES)
    while nxt != NO_CARD and next_in_sequence(get_card(cid), get_card(nxt)):
        if len(seq) >= MAX_SEQUENCE:
            logger.error("get_sequence loop safety trigger at %s", get_card(nxt).sym)
            break
        seq.append(nxt)
        cid = nxt
        nxt = board.card_at(board[cid] + CASCADES)

    # the sequence must end with the last card in the cascade
    if board.card_at(board[seq[-1]] + CASCADES) != NO_CARD:
        return []
    needs_empty_cascade = not can_move_to_cascade(board, seq[0])
    if len(seq) > movable_stack_size(board, needs_empty_cascade):
        return []
    return seq


def can_select_card(board: Board, pick: int) -> bool:
    """True if pick is a card that can be picked up and has somewhere to go."""
    if not is_card(pick):
        return False
    loc = board[pick]
    # foundation cards can never be picked up
    if not (is_cascade(loc) or is_freecell(loc)):
        return False
    seq = get_sequence(board, pick)
    if not seq:
        return False
    card = get_card(seq[0])
    if len(seq) == 1:
        if board.empty_freecells() > 0:
            return True
        if is_next_in_foundation(card.suit, board.foundation_top(card.suit), card):
            return True
    if board.empty_cascades() > 0:
        return True
    return can_move_to_cascade(board, seq[0])


def can_place_card(board: Board, selected: int, pick: int) -> bool:
    """True if the selected card (and its run) can be placed on pick.

    pick is a card id, or EMPTY_PILE1+pileID for an empty pile.
    """
    selects = selected_run(board, selected)
    if not selects:
        return False
    s = get_card(selects[0])

    if is_empty_pile_pick(pick):
        pile_id = pick - EMPTY_PILE1
        if is_freecell(pile_id):
            return len(selects) == 1 and board.empty_pile(pile_id)
        if is_foundation(pile_id):
            return (
                len(selects) == 1
                and s.suit == pile_id - FC
                and s.rank == ACES
                and board.empty_pile(pile_id)
            )
        return board.empty_pile(pile_id) and len(selects) <= movable_stack_size(board, True)

    if is_card(pick):
        p = get_card(pick)
        loc = board[pick]
        if is_foundation(loc):
            return len(selects) == 1 and is_next_in_foundation(loc - FC, p, s)
        if is_cascade(loc):
            return board.is_last_in_cascade(pick) and next_in_sequence(p, s)
        # freecell and buried cards take nothing
        return False

    logger.error("invalid place pick: %s", pick)
    return False


def can_interact(board: Board, selected: int, pick: int) -> bool:
    """Picking a card when nothing is selected, otherwise placing the selection."""
    if is_card(selected):
        return can_place_card(board, selected, pick)
    return can_select_card(board, pick)


def _stack_from(board: Board, seq: List[int], first_loc: int) -> Board:
    changes = {}
    loc = first_loc
    for cid in seq:
        changes[cid] = loc
        loc += CASCADES
    return board.moved(changes)


def place_selection(board: Board, selected: int, pick: int) -> Optional[Board]:
    """Moves the selection onto pick. Returns the new board, or None if nothing moved."""
    seq = selected_run(board, selected)
    if not seq:
        return None
    s = get_card(seq[0])
    if is_cascade(board[seq[-1]]) and not board.is_last_in_cascade(seq[-1]):
        # the run stopped short of the exposed card, moving it would leave a gap
        logger.error("aborting move of %s: run of %d cards does not reach the exposed card", s.sym, len(seq))
        return None

    if is_empty_pile_pick(pick):
        pile_id = pick - EMPTY_PILE1
        if not board.empty_pile(pile_id):
            return None
        if is_freecell(pile_id):
            if len(seq) == 1:
                return board.moved({s.id: pile_id})
            return None
        if is_foundation(pile_id):
            if len(seq) == 1 and s.suit == pile_id - FC and s.rank == ACES:
                return board.moved({s.id: pile_id})
            return None
        # the empty cascade is consumed by the move, so recheck the stack size
        if len(seq) > movable_stack_size(board, True):
            logger.error("aborting sequence move of %d cards to cascade %d", len(seq), pile_id - CASCADE_PILES[0])
            return None
        return _stack_from(board, seq, pile_id)

    if is_card(pick):
        p = get_card(pick)
        loc = board[pick]
        if is_foundation(loc) and len(seq) == 1:
            if is_next_in_foundation(loc - FC, p, s):
                # bury the old top, the selected card is the new foundation top
                return board.moved({p.id: loc + HIDDEN_CARD, s.id: loc})
            return None
        if is_cascade(loc) and board.is_last_in_cascade(pick) and next_in_sequence(p, s):
            return _stack_from(board, seq, loc + CASCADES)
    return None


def legal_targets(board: Board, selected: int) -> List[int]:
    """Every pick id the current selection could be placed on."""
    if not is_card(selected):
        return []
    picks = [cid for cid in range(52) if cid != selected]
    picks.extend(range(EMPTY_PILE1, EMPTY_PILE16 + 1))
    return [p for p in picks if can_place_card(board, selected, p)]


def auto_move(board: Board) -> Optional[Tuple[Board, Card]]:
    """Promotes at most one safe card to its foundation.

    A candidate (freecell card or exposed cascade card) moves up when its rank
    is one or two above the lowest foundation top, and it is next for its suit.
    While any foundation is empty only aces and twos qualify.
    """
    tops = [board.foundation_top(suit) for suit in range(4)]
    min_rank = -1  # one of the foundations is empty
    if all(t.id != NO_CARD for t in tops):
        min_rank = min(t.rank for t in tops)

    candidates = [get_card(board.card_at(cell)) for cell in range(4)]
    candidates += [board.last_in_cascade(column) for column in range(CASCADES)]
    for c in candidates:
        if c.id == NO_CARD:
            continue
        if c.rank != min_rank + 1 and c.rank != min_rank + 2:
            continue
        top = tops[c.suit]
        if is_next_in_foundation(c.suit, top, c):
            changes = {c.id: FC + c.suit}
            if top.id != NO_CARD:
                changes[top.id] = board[top.id] + HIDDEN_CARD
            return board.moved(changes), c
    return None
