"""Turn raw LLM replies into Prism models.

Providers return free text that should contain a JSON object, frequently
wrapped in Markdown code fences. :func:`extract_json_text` strips the first
fence pair; the facet parsers then validate the payload strictly against the
shape requested by :mod:`prism.llm.prompts`. Any failure raises
:class:`~prism.errors.ParseError` carrying the raw reply.

Enum-valued fields are lenient: unknown severities and gap priorities map to
``Low``, unknown NFR categories to ``Performance`` and unknown NFR
priorities to ``ShouldHave``.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from prism.analyzer.models import (
    Ambiguity,
    ExtractedEntities,
    Gap,
    GapPriority,
    NfrCategory,
    NfrPriority,
    NonFunctionalRequirement,
    Severity,
)
from prism.errors import ParseError

_Payload = TypeVar("_Payload", bound=BaseModel)


# ---------------------------------------------------------------------------
# Wire payloads
# ---------------------------------------------------------------------------

class _AmbiguityItem(BaseModel):
    text: str
    reason: str
    suggestions: list[str]
    severity: str


class _AmbiguityPayload(BaseModel):
    ambiguities: list[_AmbiguityItem]


class _EntityPayload(BaseModel):
    actors: list[str]
    actions: list[str]
    objects: list[str]


class _GapItem(BaseModel):
    category: str
    description: str
    suggestions: list[str]
    priority: str


class _GapPayload(BaseModel):
    gaps: list[_GapItem]


class _NfrItem(BaseModel):
    category: str
    requirement: str
    rationale: str
    acceptance_criteria: list[str]
    priority: str


class _NfrPayload(BaseModel):
    nfrs: list[_NfrItem]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def extract_json_text(response: str) -> str:
    """Return the JSON candidate inside *response*.

    The content of the first fenced block (opened with ```` ```json ```` or a
    bare ```` ``` ````) wins; without fences the whole reply is used. The
    result is trimmed.
    """
    if "```json" in response:
        return response.split("```json", 1)[1].split("```", 1)[0].strip()
    if "```" in response:
        return response.split("```")[1].strip()
    return response.strip()


def _load(response: str, schema: type[_Payload], facet: str) -> _Payload:
    payload = extract_json_text(response)
    try:
        return schema.model_validate_json(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise ParseError(
            f"Failed to parse LLM response for {facet}: {first['msg']} at {location}",
            raw=response,
            facet=facet,
        ) from exc


# ---------------------------------------------------------------------------
# Facet parsers
# ---------------------------------------------------------------------------

def parse_ambiguities(response: str) -> list[Ambiguity]:
    parsed = _load(response, _AmbiguityPayload, "ambiguities")
    return [
        Ambiguity(
            text=item.text,
            reason=item.reason,
            suggestions=item.suggestions,
            severity=Severity.parse(item.severity),
        )
        for item in parsed.ambiguities
    ]


def parse_entities(response: str) -> ExtractedEntities:
    parsed = _load(response, _EntityPayload, "entities")
    return ExtractedEntities(
        actors=parsed.actors,
        actions=parsed.actions,
        objects=parsed.objects,
    )


def parse_gaps(response: str) -> list[Gap]:
    parsed = _load(response, _GapPayload, "gaps")
    return [
        Gap(
            category=item.category,
            description=item.description,
            suggestions=item.suggestions,
            priority=GapPriority.parse(item.priority),
        )
        for item in parsed.gaps
    ]


def parse_nfrs(response: str) -> list[NonFunctionalRequirement]:
    parsed = _load(response, _NfrPayload, "nfrs")
    return [
        NonFunctionalRequirement(
            category=NfrCategory.parse(item.category),
            requirement=item.requirement,
            rationale=item.rationale,
            acceptance_criteria=item.acceptance_criteria,
            priority=NfrPriority.parse(item.priority),
        )
        for item in parsed.nfrs
    ]
