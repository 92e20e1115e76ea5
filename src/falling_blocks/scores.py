from __future__ import annotations

import json
import logging
import os
from typing import List


logger = logging.getLogger(__name__)

DEFAULT_SCORES_PATH = os.path.join(os.path.expanduser("~"), ".falling_blocks", "scores.json")


class HighScoreTable:
    """Top-N final scores kept as a JSON list, highest first.

    A missing or unreadable file is treated as an empty history.
    """

    def __init__(self, path: str = DEFAULT_SCORES_PATH, limit: int = 10) -> None:
        self.path = path
        self.limit = int(limit)

    def load(self) -> List[int]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.warning("Could not read scores from %s: %s", self.path, e)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring malformed scores file %s", self.path)
            return []
        scores = [int(s) for s in data if isinstance(s, (int, float)) and not isinstance(s, bool)]
        return sorted(scores, reverse=True)[: self.limit]

    def merge(self, score: int) -> List[int]:
        scores = self.load()
        scores.append(int(score))
        scores.sort(reverse=True)
        return scores[: self.limit]

    def save(self, scores: List[int]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(scores, fh)

    def record(self, score: int) -> List[int]:
        """Merge `score` into the stored list and persist the result."""
        scores = self.merge(score)
        self.save(scores)
        logger.info("Recorded score %d (%d entries)", score, len(scores))
        return scores
