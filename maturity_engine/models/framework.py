"""Pydantic models for framework definitions.

A framework is authored as camelCase JSON (``maturityLevels``,
``minScore``) and parsed once at catalog load.  Every model is
frozen and every list is a tuple, so a loaded catalog cannot be
mutated by the code that scores against it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Literal

import pydantic

from maturity_engine.utils.serialization import snake_to_camel

Priority = Literal["low", "medium", "high", "critical"]

RiskLevel = Literal["low", "medium", "high", "critical"]

Complexity = Literal["basic", "intermediate", "advanced"]

ChangeImpact = Literal["minor", "major", "breaking"]

_CATALOG_CONFIG = pydantic.ConfigDict(
    alias_generator=snake_to_camel,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)


class Option(pydantic.BaseModel):
    """One selectable answer to a question."""

    model_config = _CATALOG_CONFIG

    value: pydantic.StrictInt
    label: str
    description: str = ""
    risk_level: RiskLevel | None = None
    recommended_actions: tuple[str, ...] = ()


class Question(pydantic.BaseModel):
    """A single control question.

    Only ``id`` and the option values take part in scoring; the
    text, guidance, references and examples are carried for display.
    """

    model_config = _CATALOG_CONFIG

    id: str = pydantic.Field(min_length=1)
    text: str = ""
    guidance: str = ""
    priority: Priority = "medium"
    references: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    options: tuple[Option, ...] = pydantic.Field(min_length=1)

    @pydantic.model_validator(mode="after")
    def _check_option_range(self) -> Question:
        if len({option.value for option in self.options}) < 2:
            raise ValueError(f"question '{self.id}' needs at least two distinct option values")
        return self

    @property
    def valid_values(self) -> frozenset[int]:
        """Option values an answer to this question may take."""
        return frozenset(option.value for option in self.options)

    @property
    def min_value(self) -> int:
        return min(option.value for option in self.options)

    @property
    def max_value(self) -> int:
        return max(option.value for option in self.options)

    def normalize(self, value: int) -> float:
        """Map an option value onto [0, 1] using this question's own range."""
        low = self.min_value
        return (value - low) / (self.max_value - low)


class Category(pydantic.BaseModel):
    """A weighted group of questions inside a section."""

    model_config = _CATALOG_CONFIG

    id: str = pydantic.Field(min_length=1)
    name: str = ""
    description: str = ""
    weight: float = pydantic.Field(default=1.0, gt=0)
    questions: tuple[Question, ...] = ()


class Section(pydantic.BaseModel):
    """A weighted group of categories (a CSF function, a CMMC domain)."""

    model_config = _CATALOG_CONFIG

    id: str = pydantic.Field(min_length=1)
    name: str = ""
    description: str = ""
    weight: float = pydantic.Field(gt=0)
    priority: Priority = "medium"
    estimated_time: int | None = None
    categories: tuple[Category, ...] = ()

    @pydantic.model_validator(mode="after")
    def _check_unique_categories(self) -> Section:
        duplicates = _duplicates(category.id for category in self.categories)
        if duplicates:
            raise ValueError(f"section '{self.id}' has duplicate category ids: {', '.join(duplicates)}")
        return self


class MaturityLevel(pydantic.BaseModel):
    """A named band of the 0-100 score range (inclusive bounds)."""

    model_config = _CATALOG_CONFIG

    level: int
    name: str
    description: str = ""
    color: str = ""
    min_score: int = pydantic.Field(ge=0, le=100)
    max_score: int = pydantic.Field(ge=0, le=100)
    characteristics: tuple[str, ...] = ()
    typical_organizations: tuple[str, ...] = ()
    next_steps: tuple[str, ...] = ()

    @pydantic.model_validator(mode="after")
    def _check_bounds(self) -> MaturityLevel:
        if self.min_score > self.max_score:
            raise ValueError(
                f"maturity level {self.level} has minScore {self.min_score} above maxScore {self.max_score}"
            )
        return self

    def contains(self, score: float) -> bool:
        return self.min_score <= score <= self.max_score


class FrameworkChange(pydantic.BaseModel):
    """A changelog entry for a framework revision."""

    model_config = _CATALOG_CONFIG

    version: str
    date: str
    changes: tuple[str, ...] = ()
    impact: ChangeImpact = "minor"


class Framework(pydantic.BaseModel):
    """A complete questionnaire definition with its maturity-level table."""

    model_config = _CATALOG_CONFIG

    id: str = pydantic.Field(min_length=1)
    name: str
    description: str = ""
    version: str
    complexity: Complexity = "intermediate"
    estimated_time: int = pydantic.Field(default=0, ge=0)
    industry: tuple[str, ...] = ()
    prerequisites: tuple[str, ...] = ()
    certification_body: str | None = None
    last_updated: str | None = None
    change_log: tuple[FrameworkChange, ...] = ()
    related_frameworks: tuple[str, ...] = ()
    applicable_regulations: tuple[str, ...] = ()
    sections: tuple[Section, ...] = ()
    maturity_levels: tuple[MaturityLevel, ...] = pydantic.Field(min_length=1)

    @pydantic.model_validator(mode="after")
    def _check_structure(self) -> Framework:
        duplicates = _duplicates(section.id for section in self.sections)
        if duplicates:
            raise ValueError(f"duplicate section ids: {', '.join(duplicates)}")

        # Question ids must be unique framework-wide so answers are unambiguous.
        duplicates = _duplicates(question.id for question in self.iter_questions())
        if duplicates:
            raise ValueError(f"duplicate question ids: {', '.join(duplicates)}")

        previous: MaturityLevel | None = None
        for current in self.maturity_levels:
            if previous is not None:
                if current.level <= previous.level:
                    raise ValueError("maturity levels must be listed in strictly ascending level order")
                if current.min_score <= previous.max_score:
                    raise ValueError(
                        f"maturity levels {previous.level} and {current.level} overlap "
                        f"({previous.min_score}-{previous.max_score} / {current.min_score}-{current.max_score})"
                    )
            previous = current
        return self

    def iter_questions(self) -> Iterator[Question]:
        """Yield every question in section, category, question order."""
        for section in self.sections:
            for category in section.categories:
                yield from category.questions

    @property
    def question_count(self) -> int:
        return sum(1 for _ in self.iter_questions())

    def find_question(self, question_id: str) -> Question | None:
        """Return the first question with *question_id*, or ``None``."""
        for question in self.iter_questions():
            if question.id == question_id:
                return question
        return None

    def find_level(self, level: int) -> MaturityLevel | None:
        """Return the maturity level numbered *level*, or ``None``."""
        for maturity_level in self.maturity_levels:
            if maturity_level.level == level:
                return maturity_level
        return None


def maturity_band_gaps(levels: Sequence[MaturityLevel]) -> list[tuple[int, int]]:
    """Return the integer score ranges in [0, 100] that no band covers.

    Args:
        levels: Maturity levels in any order.

    Returns:
        Inclusive ``(start, end)`` ranges, ascending.  Empty when the
        bands are contiguous over the whole scale.
    """
    gaps: list[tuple[int, int]] = []
    cursor = 0
    for band in sorted(levels, key=lambda lvl: lvl.min_score):
        if band.min_score > cursor:
            gaps.append((cursor, band.min_score - 1))
        cursor = max(cursor, band.max_score + 1)
    if cursor <= 100:
        gaps.append((cursor, 100))
    return gaps


def _duplicates(ids: Iterable[str]) -> list[str]:
    """Return ids that occur more than once, in first-seen order."""
    seen: set[str] = set()
    repeated: list[str] = []
    for item in ids:
        if item in seen and item not in repeated:
            repeated.append(item)
        seen.add(item)
    return repeated
