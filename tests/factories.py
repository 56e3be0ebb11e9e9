"""Raw framework definitions shared by fixtures and property tests."""

from __future__ import annotations

from typing import Any

QUARTILE_LEVELS: list[dict[str, Any]] = [
    {"level": 1, "name": "Partial", "minScore": 0, "maxScore": 25},
    {"level": 2, "name": "Risk Informed", "minScore": 26, "maxScore": 50},
    {"level": 3, "name": "Repeatable", "minScore": 51, "maxScore": 75},
    {"level": 4, "name": "Adaptive", "minScore": 76, "maxScore": 100},
]


def options(*values: int) -> list[dict[str, Any]]:
    return [{"value": v, "label": f"Option {v}"} for v in values]


def question(question_id: str, *values: int) -> dict[str, Any]:
    return {"id": question_id, "text": f"Question {question_id}?", "options": options(*(values or (0, 1, 2, 3)))}


def single_question() -> dict[str, Any]:
    """One section, one category, one question with options 0-3."""
    return {
        "id": "single",
        "name": "Single Question",
        "version": "1.0",
        "sections": [
            {
                "id": "s1",
                "name": "Only Section",
                "weight": 1,
                "categories": [{"id": "c1", "name": "Only Category", "weight": 1, "questions": [question("q1")]}],
            }
        ],
        "maturityLevels": QUARTILE_LEVELS,
    }


def two_sections(section_scale: float = 1.0, category_scale: float = 1.0) -> dict[str, Any]:
    """Two weighted sections; ``q4`` uses the option range 1-5.

    Section weights are 2 and 1, category weights inside ``s1`` are 1
    and 3.  The scale factors multiply every weight of that level.
    """
    return {
        "id": "two-sections",
        "name": "Two Sections",
        "version": "2.1",
        "sections": [
            {
                "id": "s1",
                "name": "Govern",
                "weight": 2 * section_scale,
                "priority": "high",
                "categories": [
                    {"id": "c1", "name": "Policy", "weight": 1 * category_scale, "questions": [question("q1"), question("q2")]},
                    {"id": "c2", "name": "Oversight", "weight": 3 * category_scale, "questions": [question("q3")]},
                ],
            },
            {
                "id": "s2",
                "name": "Protect",
                "weight": 1 * section_scale,
                "priority": "critical",
                "categories": [
                    {"id": "c3", "name": "Access", "weight": 1 * category_scale, "questions": [question("q4", 1, 2, 3, 4, 5)]},
                ],
            },
        ],
        "maturityLevels": QUARTILE_LEVELS,
    }
