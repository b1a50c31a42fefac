from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .board import FC, FD, FH, FS, Board
from .cards import KC, KD, KH, KS, NO_CARD, is_card
from .deal import deal_board
from .history import MoveHistory
from . import moves
from . import seeds

logger = logging.getLogger(__name__)


class GameSession:
    """One game of FreeCell: the board, the player's selection and the move history.

    Collaborators feed it discrete actions (new game, pick, undo, auto move)
    and read back the board and selection to redraw.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = 0
        self.selected = NO_CARD
        self.history = MoveHistory()
        self._board: Optional[Board] = None
        if seed is not None:
            self.new_game(seed)

    # ----- game setup -----

    def new_game(self, seed: int) -> None:
        """Deals the game for the given game number."""
        self.start_from(deal_board(seeds.check_seed(seed)), seed)

    def start_from(self, board: Board, seed: int = 0) -> None:
        """Starts a game from an arbitrary position, which becomes the first snapshot."""
        self.seed = seed
        self.clear_selected()
        self._board = board
        self.history.reset()
        self.history.record(board)

    def restore(self, seed: int, snapshots: Sequence[Board], undos: int = 0, selected: int = NO_CARD) -> None:
        """Rebuilds a session saved as its history snapshots, eg: by the JSON API."""
        if not snapshots:
            raise ValueError("history needs at least the initial deal")
        if undos < 0:
            raise ValueError("undo count cannot be negative")
        self.start_from(snapshots[0], seed)
        for board in snapshots[1:]:
            self.history.record(board)
        self.history.undos = undos
        self._board = snapshots[-1]
        # a saved selection only survives if the card could be picked up now
        if moves.can_select_card(self._board, selected):
            self.selected = selected
        elif selected != NO_CARD:
            logger.warning("dropping unselectable saved selection: %s", selected)

    # ----- queries -----

    @property
    def board(self) -> Board:
        if self._board is None:
            raise RuntimeError("no game started")
        return self._board

    def previous_board(self) -> Board:
        return self.history.previous()

    def is_game_won(self) -> bool:
        b = self.board
        return b[KC] == FC and b[KD] == FD and b[KH] == FH and b[KS] == FS

    def is_game_solvable(self, seed: Optional[int] = None) -> bool:
        return seeds.is_game_solvable(self.seed if seed is None else seed)

    def move_count(self) -> int:
        """Score for the game so far, not counting the deal."""
        return max(0, self.history.count() - 1)

    def get_selected(self) -> List[int]:
        """Selected card followed by its cascade run. Empty when nothing is selected."""
        return moves.selected_run(self.board, self.selected)

    def is_selected(self, cid: int) -> bool:
        return cid in self.get_selected()

    def is_selection_active(self) -> bool:
        return is_card(self.selected)

    def can_interact(self, pick: int) -> bool:
        return moves.can_interact(self.board, self.selected, pick)

    def legal_targets(self) -> List[int]:
        return moves.legal_targets(self.board, self.selected)

    # ----- actions -----

    def clear_selected(self) -> None:
        self.selected = NO_CARD

    def undo(self) -> None:
        self.clear_selected()
        self._board = self.history.undo()

    def interact(self, pick: int) -> bool:
        """Handles a pick: a card id 0-51 or an empty pile 100-115.

        Picks a card when nothing is selected, otherwise tries to place the
        selection on pick. Returns True if any card moved.
        """
        if not self.can_interact(pick):
            previous = self.selected
            self.clear_selected()
            # try selecting the pick instead, unless it was the selected card
            if pick != previous and is_card(pick) and self.can_interact(pick):
                self.selected = pick
            return False

        if self.is_selection_active():
            selected = self.selected
            self.clear_selected()
            placed = moves.place_selection(self.board, selected, pick)
            if placed is None:
                return False
            self._commit(placed)
            return True

        if is_card(pick):
            self.selected = pick
        return False

    def auto_move_card(self) -> bool:
        """Moves one safe card to a foundation. Returns True if a card moved.

        Does nothing until the player has made a move.
        """
        if self.history.count() < 2:
            return False
        result = moves.auto_move(self.board)
        if result is None:
            return False
        board, card = result
        self._commit(board)
        if self.is_selected(card.id):
            self.clear_selected()
        logger.debug("auto moved %s", card.sym)
        return True

    def auto_move_all(self) -> int:
        """Repeats auto_move_card until nothing moves. Returns the number of cards moved."""
        moved = 0
        while self.auto_move_card():
            moved += 1
        return moved

    def _commit(self, board: Board) -> None:
        self._board = board
        self.history.record(board)
        if self.is_game_won():
            logger.info("game complete: seed=%s score=%s", seeds.format_seed(self.seed), self.move_count())
