"""Prism analysis engine.

Runs the rule-based analyzer, augments each facet with an LLM when one is
configured, and assembles the :class:`AnalysisResult`:

Stage 1: DETECT   -- Rule-based ambiguities and entities, then their LLM
                     attempts concurrently.
Stage 2: GENERATE -- Requested diagrams, pseudocode, test cases and
                     user-story validation over the merged entities, then
                     the completeness, NFR and improvement LLM attempts
                     concurrently.

Every facet follows the same policy: the deterministic result is computed
first; the LLM is tried only when configured; a successful reply is merged,
a failed one is reported as a warning and the deterministic result is kept.

Usage::

    from prism import AnalysisOptions, AnalysisPreset, analyze_sync

    report = analyze_sync(text, options=AnalysisOptions.from_preset(AnalysisPreset.FULL))
    for warning in report.warnings:
        ...
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from prism.analyzer.models import (
    Ambiguity,
    AnalysisResult,
    CompletenessAnalysis,
    ExtractedEntities,
    NonFunctionalRequirement,
)
from prism.analyzer.nfr import baseline_nfrs
from prism.analyzer.rules import detect_ambiguities, extract_entities
from prism.analyzer.scoring import check_completeness, validate_user_story, with_additional_gaps
from prism.config import Config
from prism.errors import LlmError, ParseError
from prism.generators import generate_pseudocode, generate_test_cases, generate_uml
from prism.llm import LlmGateway, parse_ambiguities, parse_entities, parse_gaps, parse_nfrs
from prism.llm.prompts import (
    ambiguity_prompt,
    completeness_prompt,
    entity_prompt,
    improvement_prompt,
    nfr_prompt,
)
from prism.utils import print_warning

T = TypeVar("T")

IMPROVEMENT_NOTES_HEADER = "<!-- PRISM IMPROVEMENT NOTES -->"


# ---------------------------------------------------------------------------
# Result and option types
# ---------------------------------------------------------------------------


@dataclass
class FacetOutcome(Generic[T]):
    """Result of one facet: the value plus whether the LLM contributed.

    Attributes:
        value: Deterministic or merged result.
        augmented: ``True`` when an LLM reply was merged into *value*.
        warnings: Augmentation failures, in the order they occurred.
    """

    value: T
    augmented: bool = False
    warnings: list[str] = field(default_factory=list)


class AnalysisPreset(str, Enum):
    BASIC = "basic"
    STANDARD = "standard"
    FULL = "full"
    REPORT = "report"


class AnalysisOptions(BaseModel):
    """Which optional artifacts an analysis should produce."""

    uml: bool = False
    pseudocode: bool = False
    tests: bool = False
    improve: bool = False
    nfr: bool = False
    completeness: bool = False
    user_story: bool = False
    pseudo_lang: Optional[str] = Field(default=None, description="'python' or any other style name")

    @classmethod
    def from_preset(cls, preset: AnalysisPreset | str) -> "AnalysisOptions":
        preset = AnalysisPreset(preset)
        if preset == AnalysisPreset.STANDARD:
            return cls(uml=True, pseudocode=True, tests=True)
        if preset == AnalysisPreset.FULL:
            return cls(
                uml=True, pseudocode=True, tests=True,
                improve=True, nfr=True, completeness=True,
            )
        if preset == AnalysisPreset.REPORT:
            return cls(uml=True, tests=True, improve=True, completeness=True)
        return cls()


class AnalysisReport(BaseModel):
    """An :class:`AnalysisResult` plus what happened while producing it."""

    result: AnalysisResult
    warnings: list[str] = Field(default_factory=list)
    augmented: list[str] = Field(default_factory=list, description="Facets with merged LLM output")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _gateway_for(config: Config, gateway: Optional[LlmGateway]) -> LlmGateway:
    return gateway if gateway is not None else LlmGateway(config.llm)


def _fallback_warning(facet: str, exc: Exception) -> str:
    message = f"AI {facet} failed, using rule-based result: {exc}"
    print_warning(message)
    return message


def annotated_copy(text: str, ambiguities: list[Ambiguity]) -> str:
    """Return *text* followed by an HTML comment block listing *ambiguities*."""
    lines = [
        text,
        "",
        IMPROVEMENT_NOTES_HEADER,
        "<!-- AI not configured. Manual improvements recommended: -->",
    ]
    for index, ambiguity in enumerate(ambiguities, start=1):
        lines.append(f"<!-- {index}: {ambiguity.text} - {ambiguity.reason} -->")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Facets
# ---------------------------------------------------------------------------


async def augment_ambiguities(
    text: str,
    config: Config,
    gateway: Optional[LlmGateway] = None,
) -> FacetOutcome[list[Ambiguity]]:
    """Rule-based ambiguities with any LLM findings appended.

    LLM findings are not deduplicated against the rule-based ones.
    """
    ambiguities = detect_ambiguities(text, config.analysis)
    gateway = _gateway_for(config, gateway)
    if not gateway.is_configured:
        return FacetOutcome(ambiguities)

    try:
        extra = parse_ambiguities(await gateway.call(ambiguity_prompt(text)))
    except (LlmError, ParseError) as exc:
        return FacetOutcome(ambiguities, warnings=[_fallback_warning("ambiguity detection", exc)])
    return FacetOutcome(ambiguities + extra, augmented=True)


async def augment_entities(
    text: str,
    config: Config,
    gateway: Optional[LlmGateway] = None,
) -> FacetOutcome[ExtractedEntities]:
    """Rule-based entities unioned with the LLM's, kept sorted and unique."""
    entities = extract_entities(text)
    gateway = _gateway_for(config, gateway)
    if not gateway.is_configured:
        return FacetOutcome(entities)

    try:
        extra = parse_entities(await gateway.call(entity_prompt(text)))
    except (LlmError, ParseError) as exc:
        return FacetOutcome(entities, warnings=[_fallback_warning("entity extraction", exc)])
    return FacetOutcome(entities.merge(extra), augmented=True)


async def analyze_completeness(
    text: str,
    entities: ExtractedEntities,
    config: Config,
    gateway: Optional[LlmGateway] = None,
) -> FacetOutcome[CompletenessAnalysis]:
    """Baseline completeness checks plus LLM-identified gaps.

    The score is recomputed over the combined gap list.
    """
    analysis = check_completeness(text, entities)
    gateway = _gateway_for(config, gateway)
    if not gateway.is_configured:
        return FacetOutcome(analysis)

    try:
        gaps = parse_gaps(await gateway.call(completeness_prompt(text, entities)))
    except (LlmError, ParseError) as exc:
        return FacetOutcome(analysis, warnings=[_fallback_warning("completeness analysis", exc)])
    return FacetOutcome(with_additional_gaps(analysis, gaps), augmented=True)


async def suggest_nfrs(
    text: str,
    entities: ExtractedEntities,
    config: Config,
    gateway: Optional[LlmGateway] = None,
) -> FacetOutcome[list[NonFunctionalRequirement]]:
    """Keyword-driven NFR baseline with LLM suggestions appended."""
    nfrs = baseline_nfrs(entities)
    gateway = _gateway_for(config, gateway)
    if not gateway.is_configured:
        return FacetOutcome(nfrs)

    try:
        extra = parse_nfrs(await gateway.call(nfr_prompt(text, entities)))
    except (LlmError, ParseError) as exc:
        return FacetOutcome(nfrs, warnings=[_fallback_warning("NFR generation", exc)])
    return FacetOutcome(nfrs + extra, augmented=True)


async def improve_requirements(
    text: str,
    ambiguities: list[Ambiguity],
    config: Config,
    gateway: Optional[LlmGateway] = None,
    strict: bool = False,
) -> FacetOutcome[str]:
    """Rewrite *text* so that every known ambiguity is resolved.

    Without an LLM the annotated copy is returned. With one, a failed call
    raises when *strict* is set; otherwise it is reported as a warning and
    the annotated copy is returned.

    Raises:
        LlmError: The LLM call failed and *strict* is ``True``.
    """
    gateway = _gateway_for(config, gateway)
    if not gateway.is_configured:
        return FacetOutcome(annotated_copy(text, ambiguities))

    try:
        improved = await gateway.call(improvement_prompt(text, ambiguities))
    except LlmError as exc:
        if strict:
            raise
        return FacetOutcome(
            annotated_copy(text, ambiguities),
            warnings=[_fallback_warning("requirement improvement", exc)],
        )
    return FacetOutcome(improved.strip(), augmented=True)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


async def _skipped() -> None:
    return None


async def analyze(
    text: str,
    config: Optional[Config] = None,
    options: Optional[AnalysisOptions] = None,
    gateway: Optional[LlmGateway] = None,
) -> AnalysisReport:
    """Analyze one requirement text.

    Always completes with at least the rule-based result; LLM shortfalls are
    collected in :attr:`AnalysisReport.warnings`.

    Args:
        text: Raw requirement text.
        config: Provider and analysis settings. Defaults to an unconfigured
            :class:`Config`, i.e. rule-based analysis only.
        options: Artifacts to generate. Defaults to none.
        gateway: Gateway override; built from ``config.llm`` when omitted.
    """
    config = config or Config()
    options = options or AnalysisOptions()
    gateway = _gateway_for(config, gateway)

    warnings: list[str] = []
    augmented: list[str] = []

    def _collect(name: str, outcome: Optional[FacetOutcome]) -> None:
        if outcome is None:
            return
        warnings.extend(outcome.warnings)
        if outcome.augmented:
            augmented.append(name)

    # -- Stage 1: detect ---------------------------------------------------
    ambiguity_outcome, entity_outcome = await asyncio.gather(
        augment_ambiguities(text, config, gateway),
        augment_entities(text, config, gateway),
    )
    _collect("ambiguities", ambiguity_outcome)
    _collect("entities", entity_outcome)

    ambiguities = ambiguity_outcome.value
    entities = entity_outcome.value
    result = AnalysisResult(ambiguities=ambiguities, entities=entities)

    # -- Stage 2: generate -------------------------------------------------
    if options.uml:
        result.uml_diagrams = generate_uml(entities)
    if options.pseudocode:
        result.pseudocode = generate_pseudocode(entities, options.pseudo_lang)
    if options.tests:
        result.test_cases = generate_test_cases(entities)
    if options.user_story:
        result.user_story_validation = validate_user_story(text)

    completeness_outcome, nfr_outcome, improvement_outcome = await asyncio.gather(
        analyze_completeness(text, entities, config, gateway) if options.completeness else _skipped(),
        suggest_nfrs(text, entities, config, gateway) if options.nfr else _skipped(),
        improve_requirements(text, ambiguities, config, gateway) if options.improve else _skipped(),
    )
    _collect("completeness", completeness_outcome)
    _collect("nfrs", nfr_outcome)
    _collect("improvement", improvement_outcome)

    if completeness_outcome is not None:
        result.completeness_analysis = completeness_outcome.value
    if nfr_outcome is not None:
        result.nfr_suggestions = nfr_outcome.value
    if improvement_outcome is not None:
        result.improved_requirements = improvement_outcome.value

    return AnalysisReport(result=result, warnings=warnings, augmented=augmented)


def analyze_sync(
    text: str,
    config: Optional[Config] = None,
    options: Optional[AnalysisOptions] = None,
    gateway: Optional[LlmGateway] = None,
) -> AnalysisReport:
    """Blocking wrapper around :func:`analyze` for non-async callers."""
    return asyncio.run(analyze(text, config=config, options=options, gateway=gateway))
