"""Unit tests for heuristic scorers (prism.analyzer.scoring).

Tests cover:
- completeness_score arithmetic and the fixed denominator
- check_completeness gap categories and priorities
- with_additional_gaps score recomputation
- validate_component deductions and clamping
- business_value_score keyword rubric
- validate_user_story for valid and invalid shapes
"""

from __future__ import annotations

import pytest

from prism.analyzer.models import ExtractedEntities, Gap, GapPriority
from prism.analyzer.rules import extract_entities
from prism.analyzer.scoring import (
    TOTAL_CHECKS,
    business_value_score,
    check_completeness,
    completeness_score,
    validate_component,
    validate_user_story,
    with_additional_gaps,
)


# ---------------------------------------------------------------------------
# Completeness
# ---------------------------------------------------------------------------


class TestCompletenessScore:
    @pytest.mark.unit
    def test_no_gaps(self):
        assert completeness_score(0) == 100.0

    @pytest.mark.unit
    def test_three_gaps(self):
        assert completeness_score(3) == pytest.approx(70.0)

    @pytest.mark.unit
    def test_never_negative(self):
        assert completeness_score(TOTAL_CHECKS + 5) == 0.0


class TestCheckCompleteness:
    @pytest.mark.unit
    def test_empty_text_has_all_three_gaps(self):
        analysis = check_completeness("", ExtractedEntities())
        assert [g.category for g in analysis.gaps] == [
            "Actor Definition",
            "Acceptance Criteria",
            "Non-Functional Requirements",
        ]
        assert [g.priority for g in analysis.gaps] == [
            GapPriority.CRITICAL,
            GapPriority.HIGH,
            GapPriority.MEDIUM,
        ]
        assert analysis.completeness_score == pytest.approx(70.0)
        assert len(analysis.missing_actors) == 1
        assert len(analysis.missing_success_criteria) == 1
        assert len(analysis.missing_nf_considerations) == 1

    @pytest.mark.unit
    def test_user_story_has_actor(self, user_story):
        analysis = check_completeness(user_story, extract_entities(user_story))
        assert analysis.missing_actors == []
        assert len(analysis.gaps) == 2
        assert analysis.completeness_score == pytest.approx(80.0)

    @pytest.mark.unit
    def test_complete_requirement(self):
        text = "The user can export data. Acceptance: export completes; performance under 2s."
        analysis = check_completeness(text, extract_entities(text))
        assert analysis.gaps == []
        assert analysis.completeness_score == 100.0

    @pytest.mark.unit
    def test_keywords_are_case_insensitive(self):
        text = "SUCCESS means the SECURITY review passed"
        analysis = check_completeness(text, ExtractedEntities(actors=["reviewer"]))
        assert analysis.gaps == []

    @pytest.mark.unit
    def test_additional_gaps_recompute_score(self):
        analysis = check_completeness("", ExtractedEntities())
        extra = [
            Gap(category="Error Handling", priority=GapPriority.HIGH),
            Gap(category="Data Retention"),
        ]
        merged = with_additional_gaps(analysis, extra)
        assert len(merged.gaps) == 5
        assert merged.gaps[-1].category == "Data Retention"
        assert merged.completeness_score == pytest.approx(50.0)
        # The original analysis is left untouched.
        assert len(analysis.gaps) == 3


# ---------------------------------------------------------------------------
# User-story components
# ---------------------------------------------------------------------------


class TestValidateComponent:
    @pytest.mark.unit
    def test_good_actor(self):
        result = validate_component("registered customer", "actor")
        assert result.is_valid is True
        assert result.score == 100.0

    @pytest.mark.unit
    def test_actor_without_role_is_soft_check(self):
        result = validate_component("guest", "actor")
        assert result.is_valid is True
        assert result.score == 90.0
        assert result.issues == []
        assert len(result.suggestions) == 1

    @pytest.mark.unit
    def test_empty_component_clamps_to_zero(self):
        result = validate_component("", "actor")
        assert result.is_valid is False
        assert result.score == 0.0
        assert "actor is empty" in result.issues

    @pytest.mark.unit
    def test_short_simple_goal(self):
        result = validate_component("go", "goal")
        assert result.is_valid is False
        assert result.score == 30.0
        assert result.issues == ["goal is too vague", "Goal seems too simple"]

    @pytest.mark.unit
    def test_vague_terms(self):
        result = validate_component("something", "actor")
        assert result.is_valid is False
        assert result.score == 60.0
        assert "Contains vague terms" in result.issues

    @pytest.mark.unit
    def test_reason_without_value(self):
        result = validate_component("it looks nice", "reason")
        assert result.is_valid is False
        assert result.score == 75.0
        assert result.issues == ["Business value unclear"]


class TestBusinessValueScore:
    @pytest.mark.unit
    def test_neutral_reason(self):
        assert business_value_score("I can be efficient") == 50.0

    @pytest.mark.unit
    def test_cost_counts_twice_and_clamps(self):
        # save, reduce, cost (+30), time (+15), cost again (+20)
        assert business_value_score("we save time and reduce cost") == 100.0

    @pytest.mark.unit
    def test_experience_and_keywords(self):
        score = business_value_score("improve user experience and revenue")
        assert score == 85.0

    @pytest.mark.unit
    def test_short_reason_penalty(self):
        assert business_value_score("faster") == 20.0

    @pytest.mark.unit
    def test_justification_penalty(self):
        assert business_value_score("just because I said so") == 30.0

    @pytest.mark.unit
    def test_lower_bound(self):
        assert business_value_score("just") == 0.0


# ---------------------------------------------------------------------------
# User stories
# ---------------------------------------------------------------------------


class TestValidateUserStory:
    @pytest.mark.unit
    def test_valid_story(self):
        result = validate_user_story("As a user, I want to login, so that I can be efficient")
        assert result.is_valid_format is True
        assert result.actor_quality.is_valid is True
        assert result.goal_quality.is_valid is True
        assert result.reason_quality.is_valid is True
        assert result.business_value_score == 50.0
        assert result.recommendations == []

    @pytest.mark.unit
    def test_not_a_story(self):
        result = validate_user_story("The system must work")
        assert result.is_valid_format is False
        assert result.actor_quality.score == 0.0
        assert result.goal_quality.score == 0.0
        assert result.reason_quality.score == 0.0
        assert result.business_value_score == 0.0
        assert result.recommendations
        assert "As a [user]" in result.recommendations[0]

    @pytest.mark.unit
    def test_story_without_commas(self):
        result = validate_user_story(
            "As an admin I want to add items so that it will reduce cost"
        )
        assert result.is_valid_format is True
        assert result.actor_quality.score == 100.0
        assert result.goal_quality.is_valid is True
        # reduce (+10), cost (+10 keyword, +20 money)
        assert result.business_value_score == 90.0

    @pytest.mark.unit
    def test_reason_spans_lines(self):
        result = validate_user_story(
            "As a customer, I want to export reports, so that I can\nsave time"
        )
        assert result.is_valid_format is True
        # save (+10), time (+15)
        assert result.business_value_score == 75.0

    @pytest.mark.unit
    def test_invalid_components_collect_recommendations(self):
        result = validate_user_story("as a guest, i want stuff, so that ok")
        assert result.is_valid_format is True
        assert result.goal_quality.is_valid is False
        assert result.reason_quality.is_valid is False
        assert "Replace vague terms with specific descriptions" in result.recommendations
        assert "Explain the benefit or value this provides" in result.recommendations
