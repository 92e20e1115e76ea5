from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .collision import collides, occupied_cells
from .rules import ScoringRules


BOARD_WIDTH = 10
BOARD_HEIGHT = 20


@dataclass
class SweepResult:
    score: int
    lines: int


class Board:
    """Fixed 10x20 arena of settled cells.

    Row 0 is the top. 0 marks an empty cell and 1-7 the identity of the piece
    that filled it.
    """

    def __init__(self) -> None:
        self.width = BOARD_WIDTH
        self.height = BOARD_HEIGHT
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def collides(self, shape: np.ndarray, x: int, y: int) -> bool:
        return collides(self.grid, shape, x, y)

    def merge(self, shape: np.ndarray, x: int, y: int) -> None:
        """Write the nonzero cells of `shape` into the board at (x, y)."""
        if self.collides(shape, x, y):
            raise ValueError(f"Cannot merge piece at ({x}, {y}): cells are blocked")
        for bx, by in occupied_cells(shape, x, y):
            self.grid[by, bx] = shape[by - y, bx - x]

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != 0))

    def sweep_full_rows(self, rules: Optional[ScoringRules] = None) -> SweepResult:
        """Remove full rows bottom-up and drop everything above them by one.

        Row 0 is never examined. The k-th row removed in this pass scores
        base * multiplier ** (k - 1).
        """
        rules = rules or ScoringRules()
        score = 0
        lines = 0
        row = self.height - 1
        while row > 0:
            if not self.is_row_full(row):
                row -= 1
                continue
            # Re-check the same index, it now holds the row that was above
            remaining = np.delete(self.grid, row, axis=0)
            self.grid = np.vstack((np.zeros((1, self.width), dtype=np.int8), remaining))
            lines += 1
            score += rules.score_for_row(lines)
        return SweepResult(score=score, lines=lines)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
