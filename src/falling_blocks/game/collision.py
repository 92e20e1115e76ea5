from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np


def occupied_cells(shape: np.ndarray, x: int, y: int) -> Iterator[Tuple[int, int]]:
    """Yield board coordinates (col, row) of the nonzero cells of `shape` at (x, y)."""
    rows, cols = np.nonzero(shape)
    for dy, dx in zip(rows.tolist(), cols.tolist()):
        yield x + dx, y + dy


def collides(grid: np.ndarray, shape: np.ndarray, x: int, y: int) -> bool:
    """True if any occupied cell of `shape` at (x, y) is off the board or on a filled cell.

    Columns and rows outside the grid both count as blocked.
    """
    height, width = grid.shape
    for bx, by in occupied_cells(shape, x, y):
        if not (0 <= bx < width and 0 <= by < height):
            return True
        if grid[by, bx] != 0:
            return True
    return False
