"""Property-based tests for scoring and resolution invariants."""

from __future__ import annotations

import factories
import pytest
from hypothesis import given
from hypothesis import strategies as st

from maturity_engine.data import loader
from maturity_engine.models.framework import Framework
from maturity_engine.registry import FrameworkRegistry, fallback
from maturity_engine.scoring import aggregation, classification, score

FRAMEWORK = Framework.model_validate(factories.two_sections())

# question id -> (section id, category id)
LOCATIONS = {
    q.id: (section.id, category.id)
    for section in FRAMEWORK.sections
    for category in section.categories
    for q in category.questions
}


# Every question may be left unanswered or given any of its option values.
answer_sets = st.fixed_dictionaries(
    {},
    optional={q.id: st.sampled_from(sorted(q.valid_values)) for q in FRAMEWORK.iter_questions()},
)

positive_weights = st.floats(min_value=0.01, max_value=1000, allow_nan=False, allow_infinity=False)


class TestScoreBounds:
    @given(answers=answer_sets)
    def test_every_level_within_bounds(self, answers: dict[str, int]) -> None:
        report = score(FRAMEWORK, answers)
        values = [report.overall_score]
        values += [s.score for s in report.sections]
        values += [c.score for c in report.category_scores()]
        for value in values:
            assert value is None or 0.0 <= value <= 100.0

    @given(answers=answer_sets)
    def test_unscored_only_without_answers(self, answers: dict[str, int]) -> None:
        report = score(FRAMEWORK, answers)
        assert (report.overall_score is None) == (len(answers) == 0)
        assert set(report.unanswered) | set(answers) == {q.id for q in FRAMEWORK.iter_questions()}


class TestWeightScaling:
    @given(answers=answer_sets, section_scale=positive_weights, category_scale=positive_weights)
    def test_uniform_scaling_preserves_scores(
        self, answers: dict[str, int], section_scale: float, category_scale: float
    ) -> None:
        scaled = Framework.model_validate(factories.two_sections(section_scale, category_scale))
        original = score(FRAMEWORK, answers)
        rescored = score(scaled, answers)

        pairs = [(original.overall_score, rescored.overall_score)]
        pairs += [(s.score, rescored.section(s.section_id).score) for s in original.sections]
        for before, after in pairs:
            if before is None:
                assert after is None
            else:
                assert after == pytest.approx(before, abs=1e-9)


class TestMonotonicity:
    @given(answers=answer_sets, data=st.data())
    def test_raising_one_answer_never_lowers_score(self, answers: dict[str, int], data: st.DataObject) -> None:
        question = data.draw(st.sampled_from(list(FRAMEWORK.iter_questions())))
        current = answers.get(question.id, question.min_value)
        higher = data.draw(st.sampled_from(sorted(v for v in question.valid_values if v >= current)))
        section_id, category_id = LOCATIONS[question.id]

        before = score(FRAMEWORK, {**answers, question.id: current})
        after = score(FRAMEWORK, {**answers, question.id: higher})

        category_before = before.category(section_id, category_id).score
        assert after.category(section_id, category_id).score >= category_before - 1e-9
        assert after.section(section_id).score >= before.section(section_id).score - 1e-9
        assert after.overall_score >= before.overall_score - 1e-9



class TestClassificationCoverage:
    @given(value=st.floats(min_value=0, max_value=100, allow_nan=False))
    def test_contiguous_bands_always_classify(self, value: float) -> None:
        levels = fallback.fallback_framework().maturity_levels
        level = classification.classify(value, levels)
        assert level.contains(aggregation.round_half_up(value))

    @given(answers=answer_sets)
    def test_scored_reports_always_have_level(self, answers: dict[str, int]) -> None:
        report = score(FRAMEWORK, answers)
        if report.is_scored:
            assert report.maturity_level is not None
            assert report.maturity_level.contains(report.rounded_score)


class TestResolveIdempotence:
    @given(framework_id=st.one_of(st.none(), st.text(max_size=30), st.sampled_from(loader.get_catalog().ids())))
    def test_repeat_lookups_agree(self, framework_id: str | None) -> None:
        registry = FrameworkRegistry(loader.get_catalog())
        first = registry.resolve(framework_id)
        assert registry.resolve(framework_id) == first
        assert first.id == framework_id or registry.is_fallback(first) or not framework_id
