from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, GameConfig, GameSession
from falling_blocks.game.board import BOARD_HEIGHT, BOARD_WIDTH


class FallingBlocksEnv(gym.Env):
    """
    The game session exposed one frame per step.

    Actions (7 total):
      0: No input
      1: Move Left
      2: Move Right
      3: Rotate CW
      4: Rotate CCW
      5: Soft Drop
      6: Hard Drop

    Each step applies the input, then advances the session clock by
    `frame_ms` so gravity keeps running. Reward is the score gained.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACTION_COMMANDS: Tuple[Optional[Command], ...] = (
        None,
        Command.MOVE_LEFT,
        Command.MOVE_RIGHT,
        Command.ROTATE_CW,
        Command.ROTATE_CCW,
        Command.SOFT_DROP,
        Command.HARD_DROP,
    )

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        frame_ms: float = 100.0,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.session = GameSession(self.config)

        self.observation_space = spaces.Dict(
            {
                # Settled cells 1..7, falling piece as -1..-7
                "board": spaces.Box(low=-7, high=7, shape=(BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8),
                # 0 when no preview is available
                "next_piece": spaces.Discrete(8),
            }
        )
        self.action_space = spaces.Discrete(len(self.ACTION_COMMANDS))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_type = self.session.controller.next_type
        return {
            "board": self.session.get_state().astype(np.int8),
            "next_piece": int(next_type) if next_type is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "lines": self.session.lines,
            "pieces_locked": self.session.pieces_locked,
            "drop_interval": self.session.drop_interval,
        }

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[dict] = None,
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        if seed is None and self._np_random is None:
            seed = self.config.random_seed
        super().reset(seed=seed)
        # Later unseeded resets continue from the seeded np_random stream
        rng_seed = int(self.np_random.integers(2**31))
        self.session = GameSession(self.config, rng=random.Random(rng_seed))
        self.session.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = self.ACTION_COMMANDS[int(action)]
        score_before = self.session.score

        if command is not None:
            self.session.on_input(command)
        self.session.tick(self.frame_ms)

        self._steps += 1
        reward = float(self.session.score - score_before)
        terminated = bool(self.session.game_over)
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        from falling_blocks.visualization.renderer import BACKGROUND, color_for_value

        board = self.session.get_state()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                color = color_for_value(v) if v else BACKGROUND
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
