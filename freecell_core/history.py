from __future__ import annotations

from typing import List

from .board import Board


class MoveHistory:
    """Stack of board snapshots, one per committed move, for undo and scoring.

    The initial deal is always kept: undo never pops the last snapshot.
    """

    def __init__(self) -> None:
        self.stack: List[Board] = []
        self.undos = 0

    def __len__(self) -> int:
        return len(self.stack)

    def record(self, board: Board) -> None:
        self.stack.append(board)

    def undo(self) -> Board:
        """Pops the latest move and returns the board to restore."""
        if len(self.stack) > 1:
            self.stack.pop()
            self.undos += 1
        return self.stack[-1]

    def reset(self) -> None:
        self.stack = []
        self.undos = 0

    def count(self) -> int:
        """Moves made so far. Each undo removes a snapshot but costs two moves."""
        return len(self.stack) + self.undos * 2

    def current(self) -> Board:
        return self.stack[-1]

    def previous(self) -> Board:
        """Board before the latest move, or the current board if nothing moved."""
        if len(self.stack) > 1:
            return self.stack[-2]
        return self.stack[-1]
