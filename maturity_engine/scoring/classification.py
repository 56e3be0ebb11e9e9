"""Maps a 0-100 framework score onto a maturity level."""

from __future__ import annotations

from collections.abc import Sequence

from maturity_engine.models.framework import MaturityLevel
from maturity_engine.scoring.aggregation import round_half_up
from maturity_engine.utils.errors import ScoreClassificationError


def classify(score: float, levels: Sequence[MaturityLevel]) -> MaturityLevel:
    """Return the first maturity level whose band contains *score*.

    Bands are authored as inclusive integer ranges (0-25, 26-50, ...),
    so the score is rounded half-up before the lookup and levels are
    scanned in ascending ``level`` order.

    Raises:
        ScoreClassificationError: If no band contains the rounded score.
    """
    rounded = round_half_up(score)
    for level in sorted(levels, key=lambda lvl: lvl.level):
        if level.contains(rounded):
            return level
    raise ScoreClassificationError(score, levels)


def highest_level(levels: Sequence[MaturityLevel]) -> MaturityLevel:
    """The top maturity level of a table."""
    return max(levels, key=lambda lvl: lvl.level)
