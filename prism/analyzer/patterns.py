"""Compiled regular expressions used by the rule-based analyzer.

All patterns are case-sensitive; requirement text is matched as written.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Ambiguity patterns
# ---------------------------------------------------------------------------

VAGUE_TERM_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(fast|quick|slow|easy|hard|user-friendly|robust|scalable|efficient)\b"),
    re.compile(r"\b(better|worse|good|bad|nice|great|awesome)\b"),
    re.compile(r"\b(many|few|some|several|various|multiple)\b"),
)

PASSIVE_VOICE_PATTERN = re.compile(
    r"\b(should be|will be|must be|needs to be|ought to be)\s+\w+ed\b"
)

# Only applied when AnalysisConfig.detect_incomplete_conditionals is set.
CONDITIONAL_INCOMPLETE_PATTERN = re.compile(r"\bif\b.*\bwithout\b.*\belse\b")

# ---------------------------------------------------------------------------
# Entity vocabularies
# ---------------------------------------------------------------------------

ACTOR_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(user|admin|administrator|customer|client|system|service)\b"),
    re.compile(r"\b(as a|as an)\s+(\w+)"),
)

ACTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(create|update|delete|add|remove|login|logout|register|submit|send|receive)\b"),
    re.compile(r"\b(want to|need to|should|must|will|can)\s+(\w+)"),
)

OBJECT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(account|profile|password|email|data|file|document|report|dashboard)\b"),
    re.compile(r"\b(shopping cart|order|product|item|category)\b"),
)

# ---------------------------------------------------------------------------
# User story shape
# ---------------------------------------------------------------------------

USER_STORY_PATTERN = re.compile(
    r"as\s+(?:a|an)\s+([^,]+),?\s+i\s+want\s+([^,]+?),?\s+so\s+that\s+(.+)",
    re.IGNORECASE | re.DOTALL,
)


def compile_custom_rules(rules: list[str]) -> list[re.Pattern[str]]:
    """Compile user-supplied ambiguity rules.

    Raises:
        re.error: If any rule is not a valid regular expression.
    """
    return [re.compile(rule) for rule in rules]
