"""Rule-based ambiguity detection and entity extraction.

Pure, deterministic functions over the patterns in
:mod:`prism.analyzer.patterns`. They never raise and need no network, so
their output is always available as the fallback for LLM augmentation.
"""

from __future__ import annotations

import re
from typing import Optional

from prism.config import AnalysisConfig

from .models import Ambiguity, ExtractedEntities, Severity
from .patterns import (
    ACTION_PATTERNS,
    ACTOR_PATTERNS,
    CONDITIONAL_INCOMPLETE_PATTERN,
    OBJECT_PATTERNS,
    PASSIVE_VOICE_PATTERN,
    VAGUE_TERM_PATTERNS,
    compile_custom_rules,
)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VAGUE_REASON = "Vague or subjective term that lacks specific criteria"
VAGUE_SUGGESTIONS = [
    "Define specific metrics or thresholds",
    "Provide measurable criteria",
]

PASSIVE_REASON = "Passive voice hides the responsible actor"
PASSIVE_SUGGESTIONS = [
    "Specify who is responsible for the action",
    "Use active voice instead",
]

CONDITIONAL_REASON = "Conditional logic does not define every branch"
CONDITIONAL_SUGGESTIONS = [
    "Describe the expected behaviour for each condition",
    "State explicitly what happens in the alternative case",
]

CUSTOM_RULE_REASON = "Matches a project-specific ambiguity rule"
CUSTOM_RULE_SUGGESTIONS = ["Review the phrase against your team's writing guidelines"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _matches(
    pattern: re.Pattern[str],
    text: str,
    reason: str,
    suggestions: list[str],
    severity: Severity,
) -> list[Ambiguity]:
    """One ambiguity per occurrence of *pattern* in *text*."""
    return [
        Ambiguity(
            text=match.group(0),
            reason=reason,
            suggestions=list(suggestions),
            severity=severity,
        )
        for match in pattern.finditer(text)
    ]


def _collect(patterns: tuple[re.Pattern[str], ...], text: str) -> list[str]:
    """Lower-cased full matches of every pattern, in pattern order."""
    found: list[str] = []
    for pattern in patterns:
        found.extend(match.group(0).lower() for match in pattern.finditer(text))
    return found


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def detect_ambiguities(text: str, settings: Optional[AnalysisConfig] = None) -> list[Ambiguity]:
    """Flag vague terms and responsibility-hiding passive voice in *text*.

    Occurrences are not de-duplicated: a word repeated three times yields
    three ambiguities, and a span may be reported by both detectors.

    Args:
        text: Raw requirement text.
        settings: Optional analyzer settings enabling the conditional
            detector and project-specific rules.

    Returns:
        Vague-term matches (``Medium``) followed by passive-voice matches
        (``High``), then any opt-in matches.
    """
    ambiguities: list[Ambiguity] = []

    for pattern in VAGUE_TERM_PATTERNS:
        ambiguities.extend(
            _matches(pattern, text, VAGUE_REASON, VAGUE_SUGGESTIONS, Severity.MEDIUM)
        )

    ambiguities.extend(
        _matches(PASSIVE_VOICE_PATTERN, text, PASSIVE_REASON, PASSIVE_SUGGESTIONS, Severity.HIGH)
    )

    if settings is None:
        return ambiguities

    if settings.detect_incomplete_conditionals:
        ambiguities.extend(
            _matches(
                CONDITIONAL_INCOMPLETE_PATTERN,
                text,
                CONDITIONAL_REASON,
                CONDITIONAL_SUGGESTIONS,
                Severity.MEDIUM,
            )
        )

    for pattern in compile_custom_rules(settings.custom_rules):
        ambiguities.extend(
            _matches(pattern, text, CUSTOM_RULE_REASON, CUSTOM_RULE_SUGGESTIONS, Severity.LOW)
        )

    return ambiguities


def extract_entities(text: str) -> ExtractedEntities:
    """Extract actors, actions and objects from fixed vocabularies.

    Matches are lower-cased and otherwise kept as captured (``"want to
    login"`` stays a single action). Sorting and de-duplication happen once,
    when the :class:`ExtractedEntities` is built.
    """
    return ExtractedEntities(
        actors=_collect(ACTOR_PATTERNS, text),
        actions=_collect(ACTION_PATTERNS, text),
        objects=_collect(OBJECT_PATTERNS, text),
    )
