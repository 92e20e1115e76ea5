from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Optional, Tuple

import numpy as np

from .board import Board
from .controller import DropResult, PieceController
from .pieces import PieceRandomizer, PieceType
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    START_OR_ROTATE = 5
    HARD_DROP = 6
    PAUSE = 7


class SessionState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    initial_drop_interval_ms: float = 1000.0
    speed_ramp_locks: int = 10
    speed_ramp_factor: float = 0.9


@dataclass(frozen=True)
class SessionSnapshot:
    board: np.ndarray
    piece: np.ndarray
    position: Tuple[int, int]
    next_piece: Optional[PieceType]
    score: int
    lines: int
    game_over: bool
    running: bool
    paused: bool = False


class GameSession:
    """One game: board, active piece, score and the timer that drives gravity.

    The host feeds frame timestamps through `on_frame` and key commands
    through `on_input`; both run to completion before returning.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        on_game_over: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.board = Board()
        self.controller = PieceController(self.board, PieceRandomizer(self.rng))
        self.on_game_over = on_game_over
        self.state = SessionState.NOT_STARTED
        self.score = 0
        self.lines = 0
        self.pieces_locked = 0
        self.drop_interval = self.config.initial_drop_interval_ms
        self.drop_counter = 0.0
        self.speed_ramp_counter = 0
        self._last_frame: Optional[float] = None

    # ---------- Lifecycle ----------
    def start(self) -> None:
        self.board.reset()
        self.controller.reset()
        self.score = 0
        self.lines = 0
        self.pieces_locked = 0
        self.drop_interval = self.config.initial_drop_interval_ms
        self.drop_counter = 0.0
        self.speed_ramp_counter = 0
        self._last_frame = None
        self.state = SessionState.RUNNING
        logger.info("Game started")
        if not self.controller.spawn():
            self._end_game()

    def restart(self) -> None:
        self.start()

    def toggle_pause(self) -> None:
        if self.state is SessionState.RUNNING:
            self.state = SessionState.PAUSED
        elif self.state is SessionState.PAUSED:
            self.state = SessionState.RUNNING
            # Time spent paused does not count towards the next drop
            self._last_frame = None

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def game_over(self) -> bool:
        return self.state is SessionState.GAME_OVER

    # ---------- Timing ----------
    def on_frame(self, timestamp_ms: float) -> None:
        if self._last_frame is None:
            elapsed = 0.0
        else:
            elapsed = max(0.0, timestamp_ms - self._last_frame)
        self._last_frame = timestamp_ms
        self.tick(elapsed)

    def tick(self, elapsed_ms: float) -> None:
        if self.state is not SessionState.RUNNING:
            return
        self.drop_counter += elapsed_ms
        if self.drop_counter > self.drop_interval:
            self._drop()

    # ---------- Input ----------
    def on_input(self, command: Command) -> None:
        if command is Command.START_OR_ROTATE and self.state in (
            SessionState.NOT_STARTED,
            SessionState.GAME_OVER,
        ):
            self.start()
            return
        if command is Command.PAUSE:
            self.toggle_pause()
            return
        if self.state is not SessionState.RUNNING:
            return

        if command is Command.MOVE_LEFT:
            self.controller.move(-1)
        elif command is Command.MOVE_RIGHT:
            self.controller.move(1)
        elif command is Command.SOFT_DROP:
            self._drop()
        elif command is Command.ROTATE_CW:
            self.controller.rotate(1)
        elif command in (Command.ROTATE_CCW, Command.START_OR_ROTATE):
            self.controller.rotate(-1)
        elif command is Command.HARD_DROP:
            self.controller.hard_drop()
            self._lock()
            self.drop_counter = 0.0

    # ---------- Internals ----------
    def _drop(self) -> None:
        if self.controller.soft_drop() is DropResult.LOCKED:
            self._lock()
        self.drop_counter = 0.0

    def _lock(self) -> None:
        self.controller.lock()
        self.pieces_locked += 1
        spawned = self.controller.spawn()
        result = self.board.sweep_full_rows(self.rules)
        if result.lines:
            logger.debug("Cleared %d rows for %d points", result.lines, result.score)
        self.score += result.score
        self.lines += result.lines
        self.speed_ramp_counter += 1
        if self.speed_ramp_counter >= self.config.speed_ramp_locks:
            self.drop_interval *= self.config.speed_ramp_factor
            self.speed_ramp_counter = 0
            logger.debug("Drop interval now %.1f ms", self.drop_interval)
        if not spawned:
            self._end_game()

    def _end_game(self) -> None:
        self.state = SessionState.GAME_OVER
        logger.info("Game over: score=%d lines=%d", self.score, self.lines)
        if self.on_game_over is not None:
            self.on_game_over(self.score)

    # ---------- Read-only views ----------
    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            board=self.board.clone_state(),
            piece=self.controller.cells(),
            position=(self.controller.x, self.controller.y),
            next_piece=self.controller.next_type,
            score=self.score,
            lines=self.lines,
            game_over=self.game_over,
            running=self.running,
            paused=self.state is SessionState.PAUSED,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the board
        state = self.board.clone_state()
        shape = self.controller.shape
        if shape is None or self.game_over:
            return state
        px, py = self.controller.x, self.controller.y
        for dy, dx in zip(*np.nonzero(shape)):
            x, y = px + int(dx), py + int(dy)
            if 0 <= y < self.board.height and 0 <= x < self.board.width:
                # Negative marks the falling piece
                state[y, x] = -int(shape[dy, dx])
        return state
