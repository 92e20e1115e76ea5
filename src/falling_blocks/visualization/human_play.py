from __future__ import annotations

import argparse
import logging
from typing import Dict, List

import pygame

from falling_blocks.game import Command, GameConfig, GameSession
from falling_blocks.scores import DEFAULT_SCORES_PATH, HighScoreTable
from .renderer import Renderer


logger = logging.getLogger(__name__)


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_q: Command.START_OR_ROTATE,
    pygame.K_w: Command.ROTATE_CW,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.PAUSE,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--scores", type=str, default=DEFAULT_SCORES_PATH,
                   help="JSON file holding the top-10 scores")
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(seed: int | None = None, scores_path: str = DEFAULT_SCORES_PATH,
        cell_size: int = 30, fps: int = 60) -> None:
    table = HighScoreTable(scores_path)
    ranking: List[int] = table.load()

    def save_score(score: int) -> None:
        nonlocal ranking
        ranking = table.merge(score)
        try:
            table.save(ranking)
        except OSError as e:
            logger.warning("Could not save scores to %s: %s", scores_path, e)

    session = GameSession(GameConfig(random_seed=seed), on_game_over=save_score)
    renderer = Renderer(cell_size=cell_size)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size((20, 10)), pygame.RESIZABLE)
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    renderer.resize(event.w, event.h)
                    screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            session.on_input(command)

            session.on_frame(float(pygame.time.get_ticks()))
            renderer.draw(screen, session.snapshot(), ranking)
            clock.tick(fps)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="[FALLING_BLOCKS] %(asctime)s - %(message)s")
    run(seed=args.seed, scores_path=args.scores, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
