"""Game module for Falling Blocks.

Exports the simulation core:
- Board: fixed 10x20 arena with merge and row sweeping
- collides: legality check shared by every move
- PieceType / create_piece / rotate_matrix: piece factory and rotation
- PieceController: active piece movement, rotation with wall kicks, drops
- ScoringRules: line clear scoring
- GameSession: timer-driven game loop and host interface
"""

from .board import Board, SweepResult
from .collision import collides
from .pieces import PieceRandomizer, PieceType, create_piece, rotate_matrix
from .controller import DropResult, PieceController
from .rules import ScoringRules, illustration_tier
from .core import Command, GameConfig, GameSession, SessionSnapshot, SessionState

__all__ = [
    "Board",
    "SweepResult",
    "collides",
    "PieceRandomizer",
    "PieceType",
    "create_piece",
    "rotate_matrix",
    "DropResult",
    "PieceController",
    "ScoringRules",
    "illustration_tier",
    "Command",
    "GameConfig",
    "GameSession",
    "SessionSnapshot",
    "SessionState",
]
