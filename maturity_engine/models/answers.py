"""Caller-supplied answers for one assessment session."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pydantic

from maturity_engine.utils.errors import DuplicateAnswerError
from maturity_engine.utils.serialization import snake_to_camel

AnswerSet = Mapping[str, int]


class Answer(pydantic.BaseModel):
    """A single (question id, selected option value) pair."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True, frozen=True
    )

    question_id: str
    value: pydantic.StrictInt


def as_answer_set(answers: AnswerSet | Iterable[Answer]) -> dict[str, int]:
    """Normalise answers into a question-id keyed mapping.

    Raises:
        DuplicateAnswerError: If a sequence of pairs answers the same
            question twice.
    """
    if isinstance(answers, Mapping):
        return dict(answers)

    answer_set: dict[str, int] = {}
    for answer in answers:
        if answer.question_id in answer_set:
            raise DuplicateAnswerError(answer.question_id)
        answer_set[answer.question_id] = answer.value
    return answer_set
