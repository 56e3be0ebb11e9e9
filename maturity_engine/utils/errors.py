"""
Error types raised by the scoring engine and catalog loader, plus
helpers for consistent error message extraction.

Registry lookups never raise; they degrade to the fallback framework.
Everything defined here is fail-closed: the caller must fix the
offending answer or catalog entry, retrying cannot change the result.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from maturity_engine.models.framework import MaturityLevel


class MaturityEngineError(Exception):
    """Base class for all engine errors."""


class CatalogError(MaturityEngineError):
    """A catalog entry could not be parsed into a valid framework."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid framework definition in {source}: {reason}")


class AnswerValidationError(MaturityEngineError):
    """An answer value is not one of its question's option values.

    Attributes:
        framework_id: Framework the answers were scored against.
        question_id: The question whose answer is invalid.
        value: The rejected value, exactly as supplied.
        valid_values: Sorted option values the question accepts.
    """

    def __init__(
        self,
        framework_id: str,
        question_id: str,
        value: object,
        valid_values: Iterable[int],
    ) -> None:
        self.framework_id = framework_id
        self.question_id = question_id
        self.value = value
        self.valid_values = tuple(sorted(valid_values))
        super().__init__(
            f"Invalid answer for question '{question_id}' in framework "
            f"'{framework_id}': {value!r} is not one of {list(self.valid_values)}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable diagnostic payload."""
        return {
            "error": "AnswerValidationError",
            "message": str(self),
            "frameworkId": self.framework_id,
            "questionId": self.question_id,
            "value": self.value if isinstance(self.value, (int, float, str, bool)) or self.value is None else repr(self.value),
            "validValues": list(self.valid_values),
        }


class DuplicateAnswerError(MaturityEngineError):
    """A sequence of answer pairs answers one question more than once."""

    def __init__(self, question_id: str) -> None:
        self.question_id = question_id
        super().__init__(f"Question '{question_id}' is answered more than once")


class ScoreClassificationError(MaturityEngineError):

    """A framework score falls outside every maturity band.

    This always points at a gap in an authored maturity-level
    table, never at a problem with the answers.
    """

    def __init__(self, score: float, levels: Sequence[MaturityLevel]) -> None:
        self.score = score
        self.levels = tuple(levels)
        bands = ", ".join(f"{lvl.level}:{lvl.name}[{lvl.min_score}-{lvl.max_score}]" for lvl in self.levels)
        super().__init__(f"Score {score} does not fall into any maturity level ({bands or 'no levels defined'})")

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable diagnostic payload."""
        return {
            "error": "ScoreClassificationError",
            "message": str(self),
            "score": self.score,
            "levels": [
                {
                    "level": lvl.level,
                    "name": lvl.name,
                    "minScore": lvl.min_score,
                    "maxScore": lvl.max_score,
                }
                for lvl in self.levels
            ],
        }


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.

    Falls back to the exception class name when the message is empty.
    """
    if isinstance(error, Exception):
        return str(error) or type(error).__name__
    return "Unknown error"
