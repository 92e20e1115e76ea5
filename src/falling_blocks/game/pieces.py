from __future__ import annotations

import random
from enum import IntEnum
from typing import Optional, Protocol, Sequence, Union

import numpy as np


class PieceType(IntEnum):
    T = 1
    O = 2
    L = 3
    J = 4
    I = 5
    S = 6
    Z = 7


Shape = np.ndarray

# Order used when drawing a random piece
PIECE_LETTERS = "TJLOSZI"


BASE_SHAPES = {
    PieceType.T: np.array([[0, 0, 0], [1, 1, 1], [0, 1, 0]], dtype=np.int8),
    PieceType.O: np.array([[2, 2], [2, 2]], dtype=np.int8),
    PieceType.L: np.array([[0, 3, 0], [0, 3, 0], [0, 3, 3]], dtype=np.int8),
    PieceType.J: np.array([[0, 4, 0], [0, 4, 0], [4, 4, 0]], dtype=np.int8),
    PieceType.I: np.array(
        [[0, 5, 0, 0], [0, 5, 0, 0], [0, 5, 0, 0], [0, 5, 0, 0]], dtype=np.int8
    ),
    PieceType.S: np.array([[0, 6, 6], [6, 6, 0], [0, 0, 0]], dtype=np.int8),
    PieceType.Z: np.array([[7, 7, 0], [0, 7, 7], [0, 0, 0]], dtype=np.int8),
}


def piece_type_from(kind: Union[PieceType, str]) -> PieceType:
    """Resolve a piece type from an enum member or its one-letter name."""
    if isinstance(kind, PieceType):
        return kind
    if isinstance(kind, str) and kind in PieceType.__members__:
        return PieceType[kind]
    raise ValueError(f"Unknown piece type: {kind!r}")


def create_piece(kind: Union[PieceType, str]) -> Shape:
    """Return a fresh shape matrix for `kind`.

    Nonzero entries all carry the piece identity (1-7). Unknown types raise
    ValueError since they can only come from a programming error.
    """
    return BASE_SHAPES[piece_type_from(kind)].copy()


def rotate_matrix(shape: Shape, direction: int) -> Shape:
    """Transpose then reverse rows (direction > 0) or row order (direction < 0).

    The input is left untouched so a rejected rotation needs no undo.
    """
    transposed = shape.T
    if direction > 0:
        return np.ascontiguousarray(transposed[:, ::-1])
    return np.ascontiguousarray(transposed[::-1, :])


class ChoiceSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


class PieceRandomizer:
    """Uniform draw over the 7 piece types, with no history or bag."""

    def __init__(self, rng: Optional[ChoiceSource] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def next_type(self) -> PieceType:
        return piece_type_from(self.rng.choice(PIECE_LETTERS))
