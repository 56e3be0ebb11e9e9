"""Shared fixtures for the test suite."""

from __future__ import annotations

import json
import pathlib
from collections.abc import Callable, Iterator
from typing import Any
from unittest import mock

import factories
import pytest

from maturity_engine import config, main
from maturity_engine.data import loader
from maturity_engine.models.framework import Framework
from maturity_engine.utils import logger

# ── Framework Factories ─────────────────────────────────────────


@pytest.fixture()
def single_question_framework() -> Framework:
    return Framework.model_validate(factories.single_question())


@pytest.fixture()
def two_section_framework() -> Framework:
    return Framework.model_validate(factories.two_sections())


@pytest.fixture()
def gapped_framework() -> Framework:
    """Maturity bands that leave 41-59 uncovered; options 0-2 score 50."""
    raw = factories.single_question()
    raw["id"] = "gapped"
    raw["sections"][0]["categories"][0]["questions"] = [factories.question("q1", 0, 1, 2)]
    raw["maturityLevels"] = [
        {"level": 1, "name": "Low", "minScore": 0, "maxScore": 40},
        {"level": 2, "name": "High", "minScore": 60, "maxScore": 100},
    ]
    return Framework.model_validate(raw)


# ── Catalog Directories ─────────────────────────────────────────


@pytest.fixture()
def write_catalog(tmp_path: pathlib.Path) -> Callable[..., pathlib.Path]:
    """Write framework files plus an ``index.json`` into *tmp_path*.

    Values may be dicts (dumped as JSON), or raw strings and bytes
    written as-is.
    """

    def _write(frameworks: dict[str, Any], assessment: list[str] | None = None) -> pathlib.Path:
        for filename, raw in frameworks.items():
            if isinstance(raw, bytes):
                (tmp_path / filename).write_bytes(raw)
                continue
            content = raw if isinstance(raw, str) else json.dumps(raw)
            (tmp_path / filename).write_text(content, encoding="utf-8")
        manifest = {"frameworks": list(frameworks), "assessment": assessment or []}
        (tmp_path / "index.json").write_text(json.dumps(manifest), encoding="utf-8")
        return tmp_path

    return _write


# ── Logging and Global State ────────────────────────────────────


@pytest.fixture()
def sink() -> mock.MagicMock:
    """A logger double that records every call."""
    return mock.MagicMock(spec=logger.Logger)


@pytest.fixture(autouse=True)
def _reset_state() -> Iterator[None]:
    """Isolate the cached catalog, settings, registry and log buffer."""
    loader.reset_catalog_cache()
    config.get_settings.cache_clear()
    main.get_registry.cache_clear()
    logger.clear_log_buffer()
    yield
    loader.reset_catalog_cache()
    config.get_settings.cache_clear()
    main.get_registry.cache_clear()
    main.app.dependency_overrides.clear()
