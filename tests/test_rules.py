import pytest

from falling_blocks.game import ScoringRules, illustration_tier


@pytest.mark.parametrize("index,points", [(1, 100), (2, 200), (3, 400), (4, 800)])
def test_row_scores_double(index, points):
    assert ScoringRules().score_for_row(index) == points


@pytest.mark.parametrize("lines,total", [(0, 0), (1, 100), (2, 300), (3, 700), (4, 1500)])
def test_total_for_lines(lines, total):
    assert ScoringRules().score_for_lines(lines) == total


@pytest.mark.parametrize(
    "score,tier",
    [(0, 1), (999, 1), (1000, 1), (1999, 1), (2000, 2), (4000, 3), (8000, 4), (16000, 5), (99999, 5)],
)
def test_illustration_tier(score, tier):
    assert illustration_tier(score) == tier
