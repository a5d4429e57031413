"""Pydantic v2 models for the Prism analysis engine.

Defines the value tree returned by an analysis: ambiguities, extracted
entities, completeness gaps, user-story validation, non-functional
requirement suggestions and the generated artifacts. Every model is plain
data and round-trips through ``model_dump_json`` / ``model_validate_json``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """Ambiguity severity, ordered Low < Medium < High < Critical."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Map a model-supplied severity string, defaulting to ``LOW``."""
        try:
            return cls(value)
        except ValueError:
            return cls.LOW


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


class GapPriority(str, Enum):
    """Priority of a completeness gap."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, value: str) -> "GapPriority":
        """Map a model-supplied priority string, defaulting to ``LOW``."""
        try:
            return cls(value)
        except ValueError:
            return cls.LOW


class NfrCategory(str, Enum):
    """Quality attribute a non-functional requirement addresses."""
    PERFORMANCE = "Performance"
    SECURITY = "Security"
    USABILITY = "Usability"
    RELIABILITY = "Reliability"
    SCALABILITY = "Scalability"
    MAINTAINABILITY = "Maintainability"
    COMPATIBILITY = "Compatibility"
    ACCESSIBILITY = "Accessibility"

    @classmethod
    def parse(cls, value: str) -> "NfrCategory":
        """Map a model-supplied category string, defaulting to ``PERFORMANCE``."""
        try:
            return cls(value)
        except ValueError:
            return cls.PERFORMANCE


class NfrPriority(str, Enum):
    """MoSCoW priority of a non-functional requirement."""
    MUST_HAVE = "MustHave"
    SHOULD_HAVE = "ShouldHave"
    COULD_HAVE = "CouldHave"
    WONT_HAVE = "WontHave"

    @classmethod
    def parse(cls, value: str) -> "NfrPriority":
        """Map a model-supplied priority string, defaulting to ``SHOULD_HAVE``."""
        try:
            return cls(value)
        except ValueError:
            return cls.SHOULD_HAVE


# ---------------------------------------------------------------------------
# Ambiguities & Entities
# ---------------------------------------------------------------------------

class Ambiguity(BaseModel):
    """A phrase judged unclear, with the reason and how to fix it."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="The ambiguous phrase as it appears in the input")
    reason: str = Field(..., description="Why the phrase is ambiguous")
    suggestions: list[str] = Field(default_factory=list, description="Remediation hints")
    severity: Severity = Field(default=Severity.LOW)


def _sorted_unique(values: list[str]) -> list[str]:
    return sorted(set(values))


class ExtractedEntities(BaseModel):
    """Actors, actions and objects found in a requirement.

    Each list is kept sorted ascending with no duplicates; the invariant is
    enforced on construction, so build a new instance (see :meth:`merge`)
    instead of mutating the lists.
    """
    model_config = ConfigDict(frozen=True)

    actors: list[str] = Field(default_factory=list, description="Who performs actions")
    actions: list[str] = Field(default_factory=list, description="What is done")
    objects: list[str] = Field(default_factory=list, description="What is acted upon")

    @field_validator("actors", "actions", "objects")
    @classmethod
    def _normalise(cls, values: list[str]) -> list[str]:
        return _sorted_unique(values)

    def merge(self, other: "ExtractedEntities") -> "ExtractedEntities":
        """Return the union of both entity sets."""
        return ExtractedEntities(
            actors=self.actors + other.actors,
            actions=self.actions + other.actions,
            objects=self.objects + other.objects,
        )

    def is_empty(self) -> bool:
        return not (self.actors or self.actions or self.objects)


# ---------------------------------------------------------------------------
# Completeness
# ---------------------------------------------------------------------------

class Gap(BaseModel):
    """An identified absence in requirement completeness."""
    model_config = ConfigDict(frozen=True)

    category: str = Field(..., description="Gap category, e.g. 'Actor Definition'")
    description: str = Field(default="", description="What is missing")
    suggestions: list[str] = Field(default_factory=list)
    priority: GapPriority = Field(default=GapPriority.LOW)


class CompletenessAnalysis(BaseModel):
    """Coarse, explainable completeness rubric for a requirement."""
    missing_actors: list[str] = Field(default_factory=list)
    missing_success_criteria: list[str] = Field(default_factory=list)
    missing_nf_considerations: list[str] = Field(default_factory=list)
    completeness_score: float = Field(default=100.0, ge=0.0, le=100.0)
    gaps: list[Gap] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# User Story Validation
# ---------------------------------------------------------------------------

class ValidationResult(BaseModel):
    """Quality score for one user-story component (actor, goal or reason)."""
    is_valid: bool = Field(default=False)
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class UserStoryValidation(BaseModel):
    """Result of checking text against 'As a X, I want Y, so that Z'."""
    is_valid_format: bool = Field(default=False)
    actor_quality: ValidationResult = Field(default_factory=ValidationResult)
    goal_quality: ValidationResult = Field(default_factory=ValidationResult)
    reason_quality: ValidationResult = Field(default_factory=ValidationResult)
    business_value_score: float = Field(default=0.0, ge=0.0, le=100.0)
    recommendations: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Non-Functional Requirements
# ---------------------------------------------------------------------------

class NonFunctionalRequirement(BaseModel):
    """A suggested non-functional requirement."""
    model_config = ConfigDict(frozen=True)

    category: NfrCategory = Field(...)
    requirement: str = Field(..., description="The NFR statement")
    rationale: str = Field(default="")
    acceptance_criteria: list[str] = Field(default_factory=list)
    priority: NfrPriority = Field(default=NfrPriority.SHOULD_HAVE)


# ---------------------------------------------------------------------------
# Generated Artifacts
# ---------------------------------------------------------------------------

class UmlDiagrams(BaseModel):
    """PlantUML source for the three generated diagrams."""
    use_case: Optional[str] = None
    sequence: Optional[str] = None
    class_diagram: Optional[str] = None


class TestCases(BaseModel):
    """Test-case stubs derived from extracted actions."""
    happy_path: list[str] = Field(default_factory=list)
    negative_cases: list[str] = Field(default_factory=list)
    edge_cases: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Top-Level Result
# ---------------------------------------------------------------------------

class AnalysisResult(BaseModel):
    """Complete result of analysing one requirement text."""
    ambiguities: list[Ambiguity] = Field(default_factory=list)
    entities: ExtractedEntities = Field(default_factory=ExtractedEntities)
    uml_diagrams: Optional[UmlDiagrams] = None
    pseudocode: Optional[str] = None
    test_cases: Optional[TestCases] = None
    improved_requirements: Optional[str] = None
    completeness_analysis: Optional[CompletenessAnalysis] = None
    user_story_validation: Optional[UserStoryValidation] = None
    nfr_suggestions: Optional[list[NonFunctionalRequirement]] = None

    def ambiguities_by_severity(self) -> dict[Severity, list[Ambiguity]]:
        """Group ambiguities for display, most severe first."""
        grouped: dict[Severity, list[Ambiguity]] = {}
        for severity in sorted(Severity, reverse=True):
            matching = [a for a in self.ambiguities if a.severity == severity]
            if matching:
                grouped[severity] = matching
        return grouped
