"""
Immutable, in-memory collection of validated framework definitions.

A ``Catalog`` is built once by the loader and shared read-only by the
registry and the service.  Entries that failed schema validation are
kept by id in ``rejected`` so lookups can tell "malformed" apart from
"unknown".
"""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Iterator, Mapping

from maturity_engine.models.framework import Framework


@dataclasses.dataclass(frozen=True)
class Catalog:
    """Frameworks in registration order plus load-time rejections."""

    frameworks: tuple[Framework, ...] = ()
    rejected: Mapping[str, str] = dataclasses.field(default_factory=dict)
    assessment_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Freeze the caller's mapping so the catalog stays read-only.
        object.__setattr__(self, "rejected", types.MappingProxyType(dict(self.rejected)))

    def __len__(self) -> int:
        return len(self.frameworks)

    def __iter__(self) -> Iterator[Framework]:
        return iter(self.frameworks)

    def __contains__(self, framework_id: object) -> bool:
        return any(framework.id == framework_id for framework in self.frameworks)

    def get(self, framework_id: str) -> Framework | None:
        """Return the framework registered under *framework_id*, or ``None``."""
        for framework in self.frameworks:
            if framework.id == framework_id:
                return framework
        return None

    def ids(self) -> list[str]:
        return [framework.id for framework in self.frameworks]

    def assessment_frameworks(self) -> list[Framework]:
        """Featured frameworks for starting a new assessment, in manifest order."""
        featured = (self.get(framework_id) for framework_id in self.assessment_ids)
        return [framework for framework in featured if framework is not None]
