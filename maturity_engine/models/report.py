"""Pydantic models for score reports and gap analysis."""

from __future__ import annotations

from typing import Literal

import pydantic

from maturity_engine.models.framework import MaturityLevel, Priority
from maturity_engine.utils.serialization import snake_to_camel

_REPORT_CONFIG = pydantic.ConfigDict(
    alias_generator=snake_to_camel,
    populate_by_name=True,
    frozen=True,
)

GapPriority = Literal["low", "medium", "high", "critical"]

GapEffort = Literal["low", "medium", "high"]


class CategoryScore(pydantic.BaseModel):
    """Score for a single category.

    ``score`` is a 0-100 percentage, or ``None`` when none of the
    category's questions were answered.
    """

    model_config = _REPORT_CONFIG

    section_id: str
    category_id: str
    name: str = ""
    weight: float
    score: float | None = None
    answered: int = 0
    total: int = 0


class SectionScore(pydantic.BaseModel):
    """Weighted score for a section and its categories."""

    model_config = _REPORT_CONFIG

    section_id: str
    name: str = ""
    weight: float
    priority: Priority = "medium"
    score: float | None = None
    answered: int = 0
    total: int = 0
    completion_rate: int = 0
    categories: tuple[CategoryScore, ...] = ()


class ScoreReport(pydantic.BaseModel):
    """Complete result of scoring one answer set against a framework.

    Unscored levels (nothing answered beneath them) carry ``None``
    rather than 0 so that skipped content is never mistaken for a
    zero-maturity result.
    """

    model_config = _REPORT_CONFIG

    framework_id: str
    framework_version: str
    overall_score: float | None = None
    rounded_score: int | None = None
    maturity_level: MaturityLevel | None = None
    sections: tuple[SectionScore, ...] = ()
    unanswered: tuple[str, ...] = ()
    answered_count: int = 0
    total_questions: int = 0
    completion_rate: int = 0

    @property
    def is_scored(self) -> bool:
        return self.overall_score is not None

    def section(self, section_id: str) -> SectionScore | None:
        """Return the score for *section_id*, or ``None`` if absent."""
        for section in self.sections:
            if section.section_id == section_id:
                return section
        return None

    def category(self, section_id: str, category_id: str) -> CategoryScore | None:
        """Return the score for a category, or ``None`` if absent."""
        section = self.section(section_id)
        if section is None:
            return None
        for category in section.categories:
            if category.category_id == category_id:
                return category
        return None

    def category_scores(self) -> list[CategoryScore]:
        """Flatten every category score in framework order."""
        return [category for section in self.sections for category in section.categories]


class CategoryGap(pydantic.BaseModel):
    """A category scoring below the gap threshold."""

    model_config = _REPORT_CONFIG

    section_id: str
    section_name: str
    category_id: str
    category_name: str
    score: float
    answered: int
    total: int
    priority: Priority


class SectionGap(pydantic.BaseModel):
    """Distance between a section's score and a target maturity level."""

    model_config = _REPORT_CONFIG

    section_id: str
    section_name: str
    current_score: int
    target_score: int
    gap: int
    priority: GapPriority
    estimated_effort: GapEffort
    timeframe: str
