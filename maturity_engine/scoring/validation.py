"""Answer validation, run before any aggregation."""

from __future__ import annotations

from collections.abc import Mapping

from maturity_engine.models.framework import Framework, Question
from maturity_engine.utils.errors import AnswerValidationError


def is_valid_answer(question: Question, value: object) -> bool:
    """Whether *value* is one of *question*'s option values.

    Bools are rejected even though ``True == 1``.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value in question.valid_values


def validate_answers(framework: Framework, answers: Mapping[str, object]) -> None:
    """Check every answer that targets a question of *framework*.

    Questions are visited in framework order, so the reported
    question is deterministic when several answers are invalid.
    Answers for ids the framework does not define are ignored.

    Raises:
        AnswerValidationError: On the first invalid answer.
    """
    for question in framework.iter_questions():
        if question.id not in answers:
            continue
        value = answers[question.id]
        if not is_valid_answer(question, value):
            raise AnswerValidationError(framework.id, question.id, value, question.valid_values)
