from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import numpy as np

from .board import Board
from .pieces import PieceRandomizer, PieceType, Shape, create_piece, rotate_matrix


logger = logging.getLogger(__name__)


class DropResult(Enum):
    FALLING = "falling"
    LOCKED = "locked"


class PieceController:
    """Owns the active piece and moves it across the board.

    Every move is checked against the board; rejected moves leave the piece
    exactly where it was.
    """

    def __init__(self, board: Board, randomizer: Optional[PieceRandomizer] = None) -> None:
        self.board = board
        self.randomizer = randomizer or PieceRandomizer()
        self.shape: Optional[Shape] = None
        self.x = 0
        self.y = 0
        self.next_type: Optional[PieceType] = None

    def reset(self) -> None:
        self.shape = None
        self.x = 0
        self.y = 0
        self.next_type = None

    def _require_shape(self) -> Shape:
        if self.shape is None:
            raise RuntimeError("No active piece; call spawn() first")
        return self.shape

    def spawn(self) -> bool:
        """Promote the preview piece to the top centre of the board.

        Returns False when the new piece overlaps settled cells, which ends
        the game.
        """
        if self.next_type is None:
            self.next_type = self.randomizer.next_type()
        kind = self.next_type
        self.next_type = self.randomizer.next_type()
        self.shape = create_piece(kind)
        self.y = 0
        self.x = self.board.width // 2 - self.shape.shape[1] // 2
        blocked = self.board.collides(self.shape, self.x, self.y)
        if blocked:
            logger.debug("Spawn of %s blocked at (%d, %d)", kind.name, self.x, self.y)
        return not blocked

    def move(self, direction: int) -> bool:
        shape = self._require_shape()
        new_x = self.x + direction
        if self.board.collides(shape, new_x, self.y):
            return False
        self.x = new_x
        return True

    def soft_drop(self) -> DropResult:
        shape = self._require_shape()
        if self.board.collides(shape, self.x, self.y + 1):
            return DropResult.LOCKED
        self.y += 1
        return DropResult.FALLING

    def hard_drop(self) -> int:
        """Descend until blocked; returns the number of rows travelled."""
        rows = 0
        while self.soft_drop() is DropResult.FALLING:
            rows += 1
        return rows

    def rotate(self, direction: int) -> bool:
        """Rotate, shifting sideways by +1, -2, +3, ... until the piece fits.

        Shifts up to the piece width in magnitude are tried; if none fits the
        piece keeps its previous matrix and column.
        """
        shape = self._require_shape()
        rotated = rotate_matrix(shape, direction)
        x = self.x
        offset = 1
        while self.board.collides(rotated, x, self.y):
            if abs(offset) > rotated.shape[1]:
                return False
            x += offset
            offset = -(offset + (1 if offset > 0 else -1))
        self.shape = rotated
        self.x = x
        return True

    def lock(self) -> None:
        self.board.merge(self._require_shape(), self.x, self.y)

    def cells(self) -> np.ndarray:
        """Copy of the active shape, or an empty matrix before the first spawn."""
        if self.shape is None:
            return np.zeros((0, 0), dtype=np.int8)
        return self.shape.copy()
