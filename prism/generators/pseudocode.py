"""Implementation skeletons generated from extracted entities.

Two styles are available: ``python`` and a generic Java-like style used for
any other language name. Each action becomes a function (or service method)
following the same seven steps: validate the actor, check permission,
validate input, execute, update object state, log, and catch-and-log errors.
"""

from __future__ import annotations

from typing import Optional

from prism.analyzer.models import ExtractedEntities

from .templates import get_renderer

PYTHON_STYLE = "python"
GENERIC_STYLE = "generic"

_TEMPLATES = {
    PYTHON_STYLE: "pseudocode/python.py.j2",
    GENERIC_STYLE: "pseudocode/generic.java.j2",
}


def resolve_style(language: Optional[str]) -> str:
    """Map a requested language to one of the two supported styles."""
    if language and language.strip().lower() == PYTHON_STYLE:
        return PYTHON_STYLE
    return GENERIC_STYLE


def generate_pseudocode(entities: ExtractedEntities, language: Optional[str] = None) -> str:
    template = _TEMPLATES[resolve_style(language)]
    return get_renderer().render(
        template,
        {
            "actors": entities.actors,
            "actions": entities.actions,
            "objects": entities.objects,
        },
    )
