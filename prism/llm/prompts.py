"""Prompt templates for LLM augmentation.

Each facet prompt asks for one specific JSON shape; the parsers in
:mod:`prism.llm.parsing` accept exactly that shape. The wording can change
freely, the requested schema cannot.
"""

from __future__ import annotations

import textwrap

from prism.analyzer.models import Ambiguity, ExtractedEntities

SYSTEM_INSTRUCTION = (
    "You are an expert software requirements analyst. "
    "Provide detailed, accurate analysis in the requested JSON format."
)

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_AMBIGUITY_PROMPT = textwrap.dedent("""\
    Analyze the following requirement text for ambiguities, vague terms, and
    unclear specifications. Look for terms that lack specific criteria,
    passive voice that hides responsibility, incomplete conditional logic,
    and any other sources of potential miscommunication.

    Requirement text:
    {text}

    Please provide a JSON response with the following structure:
    {{
        "ambiguities": [
            {{
                "text": "the ambiguous phrase",
                "reason": "why it's ambiguous",
                "suggestions": ["suggestion 1", "suggestion 2"],
                "severity": "High|Medium|Low|Critical"
            }}
        ]
    }}
""")

_ENTITY_PROMPT = textwrap.dedent("""\
    Extract the key entities from the following requirement text. Identify:
    1. Actors (who performs actions - users, administrators, systems, services)
    2. Actions (what is being done - verbs like create, update, delete, login)
    3. Objects (what is being acted upon - nouns like account, profile, data)

    Requirement text:
    {text}

    Please provide a JSON response with the following structure:
    {{
        "actors": ["actor1", "actor2"],
        "actions": ["action1", "action2"],
        "objects": ["object1", "object2"]
    }}
""")

_COMPLETENESS_PROMPT = textwrap.dedent("""\
    Analyze the following requirement for completeness and identify gaps.
    Consider missing actors, undefined success criteria, missing
    non-functional requirements, and other completeness issues.

    Requirement: {text}

    {entities}

    Please identify gaps and provide suggestions in the following JSON format:
    {{
        "gaps": [
            {{
                "category": "category name",
                "description": "what is missing",
                "suggestions": ["suggestion 1", "suggestion 2"],
                "priority": "Critical|High|Medium|Low"
            }}
        ]
    }}
""")

_NFR_PROMPT = textwrap.dedent("""\
    Based on the following functional requirement, generate relevant
    non-functional requirements (NFRs) for performance, security, usability,
    reliability, scalability, maintainability, compatibility, and
    accessibility.

    Functional Requirement: {text}

    {entities}

    Generate NFRs in the following JSON format:
    {{
        "nfrs": [
            {{
                "category": "Performance|Security|Usability|Reliability|Scalability|Maintainability|Compatibility|Accessibility",
                "requirement": "specific NFR statement",
                "rationale": "why this NFR is needed",
                "acceptance_criteria": ["criterion 1", "criterion 2"],
                "priority": "MustHave|ShouldHave|CouldHave|WontHave"
            }}
        ]
    }}
""")

_IMPROVEMENT_PROMPT = textwrap.dedent("""\
    You are a requirements improvement specialist. Please rewrite the
    following requirements to fix all identified ambiguities and make them
    clearer, more specific, and more actionable.

    ORIGINAL REQUIREMENTS:
    {text}

    IDENTIFIED ISSUES TO FIX:
    {issues}

    INSTRUCTIONS:
    1. Rewrite the requirements to address all identified issues
    2. Make vague terms specific and measurable
    3. Replace passive voice with active voice
    4. Add missing details and clarifications
    5. Ensure requirements are testable and implementable
    6. Maintain the original intent and scope
    7. Use clear, professional language
    8. Keep the same overall structure and format

    Please provide ONLY the improved requirements text, without explanations or comments.
""")


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _entity_summary(entities: ExtractedEntities) -> str:
    return (
        "Identified entities:\n"
        f"- Actors: {entities.actors}\n"
        f"- Actions: {entities.actions}\n"
        f"- Objects: {entities.objects}"
    )


def ambiguity_prompt(text: str) -> str:
    return _AMBIGUITY_PROMPT.format(text=text)


def entity_prompt(text: str) -> str:
    return _ENTITY_PROMPT.format(text=text)


def completeness_prompt(text: str, entities: ExtractedEntities) -> str:
    return _COMPLETENESS_PROMPT.format(text=text, entities=_entity_summary(entities))


def nfr_prompt(text: str, entities: ExtractedEntities) -> str:
    return _NFR_PROMPT.format(text=text, entities=_entity_summary(entities))


def improvement_prompt(text: str, ambiguities: list[Ambiguity]) -> str:
    """Ask for a rewrite of *text* that resolves every known ambiguity."""
    issues = "\n\n".join(
        f"- Issue: '{a.text}'\n  Problem: {a.reason}\n  Suggestions: {', '.join(a.suggestions)}"
        for a in ambiguities
    )
    return _IMPROVEMENT_PROMPT.format(text=text, issues=issues or "- None detected")


def with_system_instruction(prompt: str) -> str:
    """Prefix *prompt* for providers without a separate system role."""
    return f"{SYSTEM_INSTRUCTION}\n\n{prompt}"
