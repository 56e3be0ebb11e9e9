"""Tests for maturity_engine.utils.serialization: catalog key aliases."""

from __future__ import annotations

import json

import pytest

from maturity_engine.data import loader
from maturity_engine.models.framework import Framework, MaturityLevel
from maturity_engine.utils.serialization import snake_to_camel


class TestSnakeToCamel:
    @pytest.mark.parametrize(
        ("field", "key"),
        [
            ("min_score", "minScore"),
            ("max_score", "maxScore"),
            ("maturity_levels", "maturityLevels"),
            ("risk_level", "riskLevel"),
            ("overall_score", "overallScore"),
            ("typical_organizations", "typicalOrganizations"),
            ("sections", "sections"),
        ],
    )
    def test_catalog_keys(self, field: str, key: str) -> None:
        assert snake_to_camel(field) == key

    def test_inner_capitals_kept(self) -> None:
        assert snake_to_camel("nist_csfV2") == "nistCsfV2"

    def test_doubled_underscore_collapses(self) -> None:
        assert snake_to_camel("estimated__time") == "estimatedTime"

    def test_empty_string(self) -> None:
        assert snake_to_camel("") == ""


class TestModelAliases:
    def test_maturity_level_dumps_catalog_keys(self) -> None:
        level = MaturityLevel(level=3, name="Repeatable", min_score=51, max_score=75)
        assert set(level.model_dump(by_alias=True, exclude_none=True)) >= {"level", "name", "minScore", "maxScore"}

    def test_bundled_keys_are_model_aliases(self) -> None:
        raw = json.loads((loader._DATA_DIR / "cmmc.json").read_text(encoding="utf-8"))
        aliases = {field.alias or name for name, field in Framework.model_fields.items()}
        assert set(raw) <= aliases
