"""Prism rule-based analyzer.

Deterministic ambiguity detection, entity extraction and heuristic scoring
over raw requirement text. Uses pure regex and keyword rules -- no AI calls.

Usage::

    from prism.analyzer import detect_ambiguities, extract_entities

    entities = extract_entities("As a user, I want to login to access my account")
    print(entities.actors, entities.actions, entities.objects)
"""

from prism.analyzer.models import (
    Ambiguity,
    AnalysisResult,
    CompletenessAnalysis,
    ExtractedEntities,
    Gap,
    GapPriority,
    NfrCategory,
    NfrPriority,
    NonFunctionalRequirement,
    Severity,
    TestCases,
    UmlDiagrams,
    UserStoryValidation,
    ValidationResult,
)
from prism.analyzer.nfr import baseline_nfrs
from prism.analyzer.rules import detect_ambiguities, extract_entities
from prism.analyzer.scoring import (
    business_value_score,
    check_completeness,
    validate_user_story,
)

__all__ = [
    "detect_ambiguities",
    "extract_entities",
    "check_completeness",
    "validate_user_story",
    "business_value_score",
    "baseline_nfrs",
    "Ambiguity",
    "AnalysisResult",
    "CompletenessAnalysis",
    "ExtractedEntities",
    "Gap",
    "GapPriority",
    "NfrCategory",
    "NfrPriority",
    "NonFunctionalRequirement",
    "Severity",
    "TestCases",
    "UmlDiagrams",
    "UserStoryValidation",
    "ValidationResult",
]
