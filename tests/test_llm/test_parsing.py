"""Unit tests for LLM reply parsing (prism.llm.parsing).

Tests cover:
- extract_json_text fence handling
- Facet parsers on well-formed replies
- Lenient enum mapping
- ParseError on malformed or mis-shaped replies, with the raw reply kept
"""

from __future__ import annotations

import json

import pytest

from prism.analyzer.models import GapPriority, NfrCategory, NfrPriority, Severity
from prism.errors import ParseError
from prism.llm.parsing import (
    extract_json_text,
    parse_ambiguities,
    parse_entities,
    parse_gaps,
    parse_nfrs,
)


# ---------------------------------------------------------------------------
# extract_json_text
# ---------------------------------------------------------------------------


class TestExtractJsonText:
    @pytest.mark.unit
    def test_json_fence(self):
        response = 'Sure!\n```json\n{"a": 1}\n```\nDone.'
        assert extract_json_text(response) == '{"a": 1}'

    @pytest.mark.unit
    def test_bare_fence(self):
        response = 'Result:\n```\n{"a": 2}\n```'
        assert extract_json_text(response) == '{"a": 2}'

    @pytest.mark.unit
    def test_first_fence_wins(self):
        response = '```json\n{"a": 1}\n```\n```json\n{"a": 2}\n```'
        assert extract_json_text(response) == '{"a": 1}'

    @pytest.mark.unit
    def test_no_fence_is_trimmed(self):
        assert extract_json_text('  {"a": 3}\n') == '{"a": 3}'

    @pytest.mark.unit
    def test_unterminated_fence(self):
        assert extract_json_text('```json\n{"a": 4}') == '{"a": 4}'


# ---------------------------------------------------------------------------
# Facet parsers
# ---------------------------------------------------------------------------


class TestParseAmbiguities:
    @pytest.mark.unit
    def test_valid(self, facet_replies):
        ambiguities = parse_ambiguities(facet_replies["ambiguities"])
        assert len(ambiguities) == 1
        assert ambiguities[0].text == "user-friendly"
        assert ambiguities[0].severity == Severity.HIGH

    @pytest.mark.unit
    def test_unknown_severity_is_low(self):
        reply = json.dumps({
            "ambiguities": [
                {"text": "soon", "reason": "no date", "suggestions": [], "severity": "Blocker"}
            ]
        })
        assert parse_ambiguities(reply)[0].severity == Severity.LOW

    @pytest.mark.unit
    def test_empty_list(self):
        assert parse_ambiguities('{"ambiguities": []}') == []

    @pytest.mark.unit
    def test_missing_key_raises(self):
        reply = '{"issues": []}'
        with pytest.raises(ParseError) as exc_info:
            parse_ambiguities(reply)
        assert exc_info.value.raw == reply
        assert exc_info.value.facet == "ambiguities"

    @pytest.mark.unit
    def test_missing_field_raises(self):
        reply = json.dumps({"ambiguities": [{"text": "fast", "reason": "vague"}]})
        with pytest.raises(ParseError):
            parse_ambiguities(reply)


class TestParseEntities:
    @pytest.mark.unit
    def test_fenced_reply(self, facet_replies):
        entities = parse_entities(facet_replies["entities"])
        assert entities.actors == ["operator", "system"]
        assert entities.actions == ["monitor"]
        assert entities.objects == ["dashboard"]

    @pytest.mark.unit
    def test_result_is_sorted_and_unique(self):
        reply = json.dumps({"actors": ["b", "a", "b"], "actions": [], "objects": []})
        assert parse_entities(reply).actors == ["a", "b"]

    @pytest.mark.unit
    def test_not_json(self):
        reply = "I could not find any entities, sorry."
        with pytest.raises(ParseError) as exc_info:
            parse_entities(reply)
        assert exc_info.value.raw == reply
        assert "Raw response" in str(exc_info.value)


class TestParseGaps:
    @pytest.mark.unit
    def test_unknown_priority_is_low(self, facet_replies):
        gaps = parse_gaps(facet_replies["completeness"])
        assert gaps[0].category == "Error Handling"
        assert gaps[0].priority == GapPriority.LOW

    @pytest.mark.unit
    def test_wrong_type_raises(self):
        with pytest.raises(ParseError):
            parse_gaps('{"gaps": "none"}')


class TestParseNfrs:
    @pytest.mark.unit
    def test_lenient_enums(self, facet_replies):
        nfrs = parse_nfrs(facet_replies["nfrs"])
        assert nfrs[0].category == NfrCategory.PERFORMANCE
        assert nfrs[0].priority == NfrPriority.SHOULD_HAVE
        assert nfrs[0].requirement == "All requests shall be traced"

    @pytest.mark.unit
    def test_known_enums(self):
        reply = json.dumps({
            "nfrs": [{
                "category": "Usability",
                "requirement": "Forms shall be keyboard navigable",
                "rationale": "Power users",
                "acceptance_criteria": [],
                "priority": "CouldHave",
            }]
        })
        nfr = parse_nfrs(reply)[0]
        assert nfr.category == NfrCategory.USABILITY
        assert nfr.priority == NfrPriority.COULD_HAVE
