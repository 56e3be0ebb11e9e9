"""Mean and weighted-mean helpers shared by every scoring level.

Unscored inputs are represented as ``None`` and excluded, so a
skipped category or section never drags its parent toward zero.
"""

from __future__ import annotations

import math
from collections.abc import Iterable


def mean(values: Iterable[float]) -> float | None:
    """Arithmetic mean, or ``None`` for an empty input."""
    items = list(values)
    if not items:
        return None
    return math.fsum(items) / len(items)


def weighted_mean(items: Iterable[tuple[float | None, float]]) -> float | None:
    """Weighted mean over ``(value, weight)`` pairs.

    Pairs whose value is ``None`` contribute neither value nor weight.
    Weights are normalised by the sum of the remaining weights, so
    they need not add up to any particular total.

    Returns:
        The weighted mean, or ``None`` when no pair carries a value.
    """
    products: list[float] = []
    weights: list[float] = []
    for value, weight in items:
        if value is None:
            continue
        products.append(value * weight)
        weights.append(weight)

    total_weight = math.fsum(weights)
    if not weights or total_weight <= 0:
        return None
    return math.fsum(products) / total_weight


def clamp_percent(score: float | None) -> float | None:
    """Pin a percentage into [0, 100], absorbing float rounding drift."""
    if score is None:
        return None
    return min(100.0, max(0.0, score))


# Weighted means of exact halves (62.5, 75.5) can land one ulp low.
_DRIFT_DIGITS = 9


def round_half_up(score: float) -> int:
    """Round to the nearest integer, halves upward.

    Accumulated float drift is discarded first, so a weighted mean
    that is mathematically 62.5 rounds to 63 even when it arrives
    as ``62.49999999999999``.
    """
    return math.floor(round(score, _DRIFT_DIGITS) + 0.5)



def completion_rate(answered: int, total: int) -> int:
    """Integer percentage of answered questions (0 when there are none)."""
    if total <= 0:
        return 0
    return round_half_up(answered / total * 100)
