"""Tests for maturity_engine.scoring.gaps: category and section gap analysis."""

from __future__ import annotations

import pytest

from maturity_engine.models.framework import Framework
from maturity_engine.scoring import category_gaps, score, section_gaps


class TestCategoryGaps:
    def test_weakest_first(self, two_section_framework: Framework) -> None:
        report = score(two_section_framework, {"q1": 3, "q2": 0, "q3": 2, "q4": 2})
        gaps = category_gaps(report)
        # c1 = 50, c2 = 66.7, c3 = 25
        assert [g.category_id for g in gaps] == ["c3", "c1", "c2"]
        assert gaps[0].section_name == "Protect"
        assert gaps[0].priority == "critical"
        assert gaps[0].score == pytest.approx(25.0)

    def test_threshold_and_limit(self, two_section_framework: Framework) -> None:
        report = score(two_section_framework, {"q1": 3, "q2": 0, "q3": 2, "q4": 2})
        assert [g.category_id for g in category_gaps(report, threshold=60)] == ["c3", "c1"]
        assert [g.category_id for g in category_gaps(report, limit=1)] == ["c3"]

    def test_unscored_categories_skipped(self, two_section_framework: Framework) -> None:
        report = score(two_section_framework, {"q1": 0})
        gaps = category_gaps(report)
        assert [g.category_id for g in gaps] == ["c1"]
        assert gaps[0].answered == 1
        assert gaps[0].total == 2

    def test_ties_keep_framework_order(self, two_section_framework: Framework) -> None:
        report = score(two_section_framework, {"q1": 0, "q2": 0, "q3": 0, "q4": 1})
        assert [g.category_id for g in category_gaps(report)] == ["c1", "c2", "c3"]


class TestSectionGaps:
    def test_default_target_is_highest_level(self, two_section_framework: Framework) -> None:
        report = score(two_section_framework, {"q1": 3, "q2": 0, "q3": 2, "q4": 2})
        gaps = section_gaps(report, two_section_framework)
        # s1 = 62.5 -> 63, s2 = 25; Adaptive starts at 76
        assert [(g.section_id, g.current_score, g.gap) for g in gaps] == [("s1", 63, 13), ("s2", 25, 51)]
        assert gaps[0].target_score == 76

    @pytest.mark.parametrize(
        ("answer", "current", "gap", "priority", "effort", "timeframe"),
        [
            (5, 100, None, None, None, None),
            (4, 75, 1, "low", "low", "1-3 months"),
            (3, 50, 26, "medium", "medium", "3-6 months"),
            (2, 25, 51, "critical", "high", "6-12 months"),
        ],
    )
    def test_bands(
        self,
        two_section_framework: Framework,
        answer: int,
        current: int,
        gap: int | None,
        priority: str | None,
        effort: str | None,
        timeframe: str | None,
    ) -> None:
        report = score(two_section_framework, {"q4": answer})
        gaps = section_gaps(report, two_section_framework, target_level=4)
        if gap is None:
            assert gaps == []
            return
        (only,) = gaps
        assert only.current_score == current
        assert only.gap == gap
        assert only.priority == priority
        assert only.estimated_effort == effort
        assert only.timeframe == timeframe

    def test_high_priority_band(self, single_question_framework: Framework) -> None:
        # 33.3 -> 33, target 76 -> gap 43
        gaps = section_gaps(score(single_question_framework, {"q1": 1}), single_question_framework)
        assert gaps[0].gap == 43
        assert gaps[0].priority == "high"
        assert gaps[0].estimated_effort == "high"

    def test_lower_target(self, two_section_framework: Framework) -> None:
        report = score(two_section_framework, {"q1": 1, "q4": 2})
        gaps = section_gaps(report, two_section_framework, target_level=2)
        # s1 = 33 clears 26, s2 = 25 falls one short
        assert [g.section_id for g in gaps] == ["s2"]
        assert gaps[0].gap == 1

    def test_unknown_level(self, single_question_framework: Framework) -> None:
        report = score(single_question_framework, {"q1": 1})
        with pytest.raises(ValueError, match="no maturity level 9"):
            section_gaps(report, single_question_framework, target_level=9)
