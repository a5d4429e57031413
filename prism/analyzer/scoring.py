"""Heuristic scorers: completeness, user-story quality and business value.

These are intentionally coarse, explainable rubrics built from fixed keyword
checks and fixed deductions. They are pure functions of the requirement text
(and, for completeness, the extracted entities).
"""

from __future__ import annotations

from .models import (
    CompletenessAnalysis,
    ExtractedEntities,
    Gap,
    GapPriority,
    UserStoryValidation,
    ValidationResult,
)
from .patterns import USER_STORY_PATTERN


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Fixed denominator of the completeness rubric. LLM-sourced gaps lower the
# score but never change this value.
TOTAL_CHECKS = 10

_SUCCESS_KEYWORDS = ("success", "acceptance", "criteria")
_NF_KEYWORDS = ("performance", "security", "usability", "reliability", "scalability")

_COMPONENT_VAGUE_TERMS = ("thing", "stuff", "something", "anything", "everything")
_ACTOR_ROLE_KEYWORDS = ("user", "admin", "customer", "system")
_REASON_VALUE_KEYWORDS = ("can", "will", "able", "benefit")

_VALUE_KEYWORDS = (
    "save", "increase", "improve", "reduce", "efficiency", "productivity", "revenue", "cost",
)

USER_STORY_TEMPLATE = "'As a [user], I want [goal], so that [reason]'"


# ---------------------------------------------------------------------------
# Completeness
# ---------------------------------------------------------------------------

def completeness_score(gap_count: int) -> float:
    """Score in ``[0, 100]`` given the number of identified gaps."""
    missing = min(gap_count, TOTAL_CHECKS)
    return (TOTAL_CHECKS - missing) / TOTAL_CHECKS * 100.0


def check_completeness(text: str, entities: ExtractedEntities) -> CompletenessAnalysis:
    """Run the three baseline completeness checks.

    1. At least one actor was extracted.
    2. The text mentions success, acceptance or criteria.
    3. The text mentions a quality attribute (performance, security, ...).

    Each failed check contributes one :class:`Gap`.
    """
    lower = text.lower()
    gaps: list[Gap] = []
    missing_actors: list[str] = []
    missing_success_criteria: list[str] = []
    missing_nf_considerations: list[str] = []

    if not entities.actors:
        missing_actors.append("No actors identified - who will perform these actions?")
        gaps.append(Gap(
            category="Actor Definition",
            description="No clear actors identified in the requirement",
            suggestions=[
                "Specify who will perform the actions (e.g., 'user', 'administrator', 'system')",
                "Define user roles and permissions",
            ],
            priority=GapPriority.CRITICAL,
        ))

    if not any(keyword in lower for keyword in _SUCCESS_KEYWORDS):
        missing_success_criteria.append("No success criteria or acceptance criteria specified")
        gaps.append(Gap(
            category="Acceptance Criteria",
            description="Missing clear success criteria",
            suggestions=[
                "Add 'Given-When-Then' scenarios",
                "Define measurable outcomes",
                "Specify validation criteria",
            ],
            priority=GapPriority.HIGH,
        ))

    if not any(keyword in lower for keyword in _NF_KEYWORDS):
        missing_nf_considerations.append("No non-functional requirements considered")
        gaps.append(Gap(
            category="Non-Functional Requirements",
            description="Missing performance, security, or other quality attributes",
            suggestions=[
                "Consider performance requirements (response time, throughput)",
                "Define security requirements (authentication, authorization)",
                "Specify usability requirements (user experience)",
            ],
            priority=GapPriority.MEDIUM,
        ))

    return CompletenessAnalysis(
        missing_actors=missing_actors,
        missing_success_criteria=missing_success_criteria,
        missing_nf_considerations=missing_nf_considerations,
        completeness_score=completeness_score(len(gaps)),
        gaps=gaps,
    )


def with_additional_gaps(analysis: CompletenessAnalysis, extra: list[Gap]) -> CompletenessAnalysis:
    """Append *extra* gaps and recompute the score over the combined list."""
    gaps = analysis.gaps + list(extra)
    return analysis.model_copy(
        update={"gaps": gaps, "completeness_score": completeness_score(len(gaps))}
    )


# ---------------------------------------------------------------------------
# User stories
# ---------------------------------------------------------------------------

def _clamp(score: float) -> float:
    return max(0.0, min(100.0, score))


def validate_component(component: str, component_type: str) -> ValidationResult:
    """Score one user-story component, starting at 100 with fixed deductions.

    Args:
        component: The captured actor, goal or reason text.
        component_type: ``"actor"``, ``"goal"`` or ``"reason"``.
    """
    issues: list[str] = []
    suggestions: list[str] = []
    score = 100.0
    lower = component.lower()

    if not component:
        issues.append(f"{component_type} is empty")
        suggestions.append(f"Provide a clear {component_type}")
        score = 0.0
    elif len(component) < 3:
        issues.append(f"{component_type} is too vague")
        suggestions.append(f"Be more specific about the {component_type}")
        score -= 50

    if any(term in lower for term in _COMPONENT_VAGUE_TERMS):
        issues.append("Contains vague terms")
        suggestions.append("Replace vague terms with specific descriptions")
        score -= 30

    if component_type == "actor":
        # Soft check: a suggestion only, the component stays valid.
        if not any(role in lower for role in _ACTOR_ROLE_KEYWORDS):
            suggestions.append(
                "Consider specifying the user role (e.g., 'customer', 'administrator')"
            )
            score -= 10
    elif component_type == "goal":
        if " " not in component:
            issues.append("Goal seems too simple")
            suggestions.append("Provide more detail about what the user wants to accomplish")
            score -= 20
    elif component_type == "reason":
        if not any(keyword in lower for keyword in _REASON_VALUE_KEYWORDS):
            issues.append("Business value unclear")
            suggestions.append("Explain the benefit or value this provides")
            score -= 25

    return ValidationResult(
        is_valid=not issues,
        score=_clamp(score),
        issues=issues,
        suggestions=suggestions,
    )


def business_value_score(reason: str) -> float:
    """Estimate the business value expressed by a user story's reason.

    Base 50, +10 per value keyword, +15 for "time", +20 for "money"/"cost",
    +15 for "user experience"/"satisfaction", -30 if shorter than 10
    characters, -20 for "just"/"because". "cost" counts both as a value
    keyword and as a money mention.
    """
    lower = reason.lower()
    score = 50.0

    score += 10 * sum(1 for keyword in _VALUE_KEYWORDS if keyword in lower)

    if "time" in lower:
        score += 15
    if "money" in lower or "cost" in lower:
        score += 20
    if "user experience" in lower or "satisfaction" in lower:
        score += 15

    if len(reason) < 10:
        score -= 30
    if "just" in lower or "because" in lower:
        score -= 20

    return _clamp(score)


def _invalid_story() -> UserStoryValidation:
    return UserStoryValidation(
        is_valid_format=False,
        actor_quality=ValidationResult(
            is_valid=False,
            score=0.0,
            issues=["Not in user story format"],
            suggestions=[f"Use format: {USER_STORY_TEMPLATE}"],
        ),
        goal_quality=ValidationResult(
            is_valid=False,
            score=0.0,
            issues=["Goal not identified"],
            suggestions=["Specify what the user wants to achieve"],
        ),
        reason_quality=ValidationResult(
            is_valid=False,
            score=0.0,
            issues=["Business reason not provided"],
            suggestions=["Explain the business value or benefit"],
        ),
        business_value_score=0.0,
        recommendations=[f"Convert to proper user story format: {USER_STORY_TEMPLATE}"],
    )


def validate_user_story(text: str) -> UserStoryValidation:
    """Check *text* against the canonical user-story shape and score it."""
    match = USER_STORY_PATTERN.search(text)
    if not match:
        return _invalid_story()

    actor, goal, reason = (part.strip() for part in match.groups())

    actor_quality = validate_component(actor, "actor")
    goal_quality = validate_component(goal, "goal")
    reason_quality = validate_component(reason, "reason")

    recommendations: list[str] = []
    for quality in (actor_quality, goal_quality, reason_quality):
        if not quality.is_valid:
            recommendations.extend(quality.suggestions)

    return UserStoryValidation(
        is_valid_format=True,
        actor_quality=actor_quality,
        goal_quality=goal_quality,
        reason_quality=reason_quality,
        business_value_score=business_value_score(reason),
        recommendations=recommendations,
    )
