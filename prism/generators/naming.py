"""Identifier helpers shared by the diagram and pseudocode templates.

Entity strings are free text (``"want to login"``, ``"user profile"``), so
every conversion splits on whitespace rather than on case boundaries.
"""

from __future__ import annotations


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_pascal_case(value: str) -> str:
    """Convert ``user profile`` to ``UserProfile``."""
    return "".join(_capitalize(word) for word in value.split())


def to_camel_case(value: str) -> str:
    """Convert ``want to login`` to ``wantToLogin``."""
    words = value.split()
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


def to_snake_case(value: str) -> str:
    """Convert ``Log-In now`` to ``log_in_now``."""
    return value.lower().replace(" ", "_").replace("-", "_")


def to_diagram_id(value: str) -> str:
    """PlantUML alias for a quoted display name; case is preserved."""
    return value.replace(" ", "_").replace("-", "_")
