from __future__ import annotations

from dataclasses import dataclass


# Score needed to reach stages 2..5; below the first entry the stage is 1
STAGE_THRESHOLDS: tuple[int, ...] = (2000, 4000, 8000, 16000)


@dataclass
class ScoringRules:
    line_clear_base: int = 100
    combo_multiplier: int = 2

    def score_for_row(self, index: int) -> int:
        """Score of the `index`-th row (1-based) cleared within one sweep."""
        if index <= 0:
            return 0
        return self.line_clear_base * self.combo_multiplier ** (index - 1)

    def score_for_lines(self, lines: int) -> int:
        return sum(self.score_for_row(k) for k in range(1, lines + 1))


def illustration_tier(score: int) -> int:
    """Stage 1-5 shown beside the board; 1000 points still counts as stage 1."""
    tier = 1
    for threshold in STAGE_THRESHOLDS:
        if score >= threshold:
            tier += 1
    return tier
