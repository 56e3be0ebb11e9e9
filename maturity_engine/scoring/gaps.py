"""Gap analysis over a finished score report.

Two views are produced: weak categories below a fixed threshold, and
per-section distance to a target maturity level with a rough effort
and timeframe estimate.
"""

from __future__ import annotations

from maturity_engine.models.framework import Framework
from maturity_engine.models.report import (
    CategoryGap,
    GapEffort,
    GapPriority,
    ScoreReport,
    SectionGap,
)
from maturity_engine.scoring.aggregation import round_half_up
from maturity_engine.scoring.classification import highest_level


def category_gaps(report: ScoreReport, threshold: float = 75.0, limit: int = 10) -> list[CategoryGap]:
    """Scored categories below *threshold*, weakest first.

    Ties keep framework order.  At most *limit* gaps are returned.
    """
    gaps: list[CategoryGap] = []
    for section in report.sections:
        for category in section.categories:
            if category.score is None or category.score >= threshold:
                continue
            gaps.append(
                CategoryGap(
                    section_id=section.section_id,
                    section_name=section.name,
                    category_id=category.category_id,
                    category_name=category.name,
                    score=category.score,
                    answered=category.answered,
                    total=category.total,
                    priority=section.priority,
                )
            )
    gaps.sort(key=lambda gap: gap.score)
    return gaps[: max(0, limit)]


def _gap_priority(gap: int) -> GapPriority:
    if gap > 50:
        return "critical"
    if gap > 30:
        return "high"
    if gap > 15:
        return "medium"
    return "low"


def _gap_effort(gap: int) -> GapEffort:
    if gap > 40:
        return "high"
    if gap > 20:
        return "medium"
    return "low"


def _gap_timeframe(gap: int) -> str:
    if gap > 40:
        return "6-12 months"
    if gap > 20:
        return "3-6 months"
    return "1-3 months"


def section_gaps(
    report: ScoreReport,
    framework: Framework,
    target_level: int | None = None,
) -> list[SectionGap]:
    """Distance from each scored section to a target maturity level.

    Args:
        report: Report produced by :func:`score` for *framework*.
        framework: The framework the report was scored against.
        target_level: ``level`` number of the target maturity level.
            Defaults to the framework's highest level.

    Returns:
        One :class:`SectionGap` per scored section that sits below
        the target level's ``min_score``, in framework order.

    Raises:
        ValueError: If *target_level* is not defined by *framework*.
    """
    if target_level is None:
        target = highest_level(framework.maturity_levels)
    else:
        target = framework.find_level(target_level)
        if target is None:
            raise ValueError(
                f"framework '{framework.id}' has no maturity level {target_level}"
            )

    gaps: list[SectionGap] = []
    for section in report.sections:
        if section.score is None:
            continue
        current = round_half_up(section.score)
        gap = max(0, target.min_score - current)
        if gap == 0:
            continue
        gaps.append(
            SectionGap(
                section_id=section.section_id,
                section_name=section.name,
                current_score=current,
                target_score=target.min_score,
                gap=gap,
                priority=_gap_priority(gap),
                estimated_effort=_gap_effort(gap),
                timeframe=_gap_timeframe(gap),
            )
        )
    return gaps
