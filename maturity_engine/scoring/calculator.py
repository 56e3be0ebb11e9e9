"""Maturity score calculator.

Validates the answer set, then aggregates bottom-up:

- **Question**: the selected value normalised onto [0, 1] with the
  question's own option range, ``(value - min) / (max - min)``.
- **Category**: unweighted mean of its answered questions, x 100.
- **Section**: category scores weighted by category ``weight``.
- **Framework**: section scores weighted by section ``weight``.

Weights are normalised over the scored children only.  Anything with
no answers beneath it is unscored (``None``) and left out of its
parent's average instead of counting as zero.  The framework score is
then classified against the maturity-level table.

The calculation is pure: same framework and answers, same report.
"""

from __future__ import annotations

from collections.abc import Iterable

from maturity_engine.models import answers as answer_models
from maturity_engine.models.framework import Category, Framework, Section
from maturity_engine.models.report import CategoryScore, ScoreReport, SectionScore
from maturity_engine.scoring import aggregation, classification, validation


def _score_category(
    section: Section,
    category: Category,
    answer_set: dict[str, int],
    unanswered: list[str],
) -> CategoryScore:
    """Average the normalised answers of one category."""
    fractions: list[float] = []
    for question in category.questions:
        value = answer_set.get(question.id)
        if value is None:
            if question.id not in unanswered:
                unanswered.append(question.id)
            continue
        fractions.append(question.normalize(value))

    fraction = aggregation.mean(fractions)
    return CategoryScore(
        section_id=section.id,
        category_id=category.id,
        name=category.name,
        weight=category.weight,
        score=aggregation.clamp_percent(None if fraction is None else fraction * 100),
        answered=len(fractions),
        total=len(category.questions),
    )


def _score_section(
    section: Section,
    answer_set: dict[str, int],
    unanswered: list[str],
) -> SectionScore:
    """Weight the category scores of one section."""
    categories = tuple(
        _score_category(section, category, answer_set, unanswered)
        for category in section.categories
    )
    answered = sum(c.answered for c in categories)
    total = sum(c.total for c in categories)
    return SectionScore(
        section_id=section.id,
        name=section.name,
        weight=section.weight,
        priority=section.priority,
        score=aggregation.clamp_percent(
            aggregation.weighted_mean((c.score, c.weight) for c in categories)
        ),
        answered=answered,
        total=total,
        completion_rate=aggregation.completion_rate(answered, total),
        categories=categories,
    )


# ── Public API ──────────────────────────────────────────────


def score(
    framework: Framework,
    answers: answer_models.AnswerSet | Iterable[answer_models.Answer],
) -> ScoreReport:
    """Score an answer set against a framework.

    Args:
        framework: A validated framework, typically from the registry.
        answers: Question id to selected option value, or a sequence
            of :class:`Answer` pairs.  Ids the framework does not
            define are ignored.

    Returns:
        A :class:`ScoreReport` with category, section and overall
        scores, the maturity level, and the unanswered question ids.

    Raises:
        AnswerValidationError: If an answer value is not one of its
            question's option values.  No report is produced.
        ScoreClassificationError: If the overall score falls into no
            maturity band.
    """
    answer_set = answer_models.as_answer_set(answers)
    validation.validate_answers(framework, answer_set)

    unanswered: list[str] = []
    sections = tuple(_score_section(section, answer_set, unanswered) for section in framework.sections)

    overall = aggregation.clamp_percent(
        aggregation.weighted_mean((s.score, s.weight) for s in sections)
    )
    rounded = None
    maturity_level = None
    if overall is not None:
        rounded = aggregation.round_half_up(overall)
        maturity_level = classification.classify(overall, framework.maturity_levels)

    answered_count = sum(s.answered for s in sections)
    total_questions = sum(s.total for s in sections)

    return ScoreReport(
        framework_id=framework.id,
        framework_version=framework.version,
        overall_score=overall,
        rounded_score=rounded,
        maturity_level=maturity_level,
        sections=sections,
        unanswered=tuple(unanswered),
        answered_count=answered_count,
        total_questions=total_questions,
        completion_rate=aggregation.completion_rate(answered_count, total_questions),
    )
