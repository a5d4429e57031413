"""Prism LLM gateway.

Provider dispatch (OpenAI/Azure, Gemini, Claude, Ollama), facet prompt
templates and strict JSON response parsing.
"""

from prism.llm.gateway import LlmGateway
from prism.llm.parsing import (
    extract_json_text,
    parse_ambiguities,
    parse_entities,
    parse_gaps,
    parse_nfrs,
)
from prism.llm.providers import PROVIDERS, LlmProvider

__all__ = [
    "LlmGateway",
    "LlmProvider",
    "PROVIDERS",
    "extract_json_text",
    "parse_ambiguities",
    "parse_entities",
    "parse_gaps",
    "parse_nfrs",
]
