"""Unit tests for test-case stub generation (prism.generators.test_cases)."""

from __future__ import annotations

import pytest

from prism.analyzer.models import ExtractedEntities
from prism.generators.test_cases import generate_test_cases


class TestGenerateTestCases:
    @pytest.mark.unit
    def test_counts_per_action(self, sample_entities):
        cases = generate_test_cases(sample_entities)
        assert len(cases.happy_path) == 2
        assert len(cases.negative_cases) == 4
        assert len(cases.edge_cases) == 4

    @pytest.mark.unit
    def test_phrases(self):
        cases = generate_test_cases(ExtractedEntities(actions=["submit"]))
        assert cases.happy_path == ["Test successful execution of submit"]
        assert cases.negative_cases == [
            "Test submit with invalid input",
            "Test submit without proper authorization",
        ]
        assert cases.edge_cases == [
            "Test submit with empty/null values",
            "Test submit with maximum input size",
        ]

    @pytest.mark.unit
    def test_follows_action_order(self):
        cases = generate_test_cases(ExtractedEntities(actions=["update", "create"]))
        assert cases.happy_path == [
            "Test successful execution of create",
            "Test successful execution of update",
        ]

    @pytest.mark.unit
    def test_no_actions(self):
        cases = generate_test_cases(ExtractedEntities(actors=["user"]))
        assert cases.happy_path == []
        assert cases.negative_cases == []
        assert cases.edge_cases == []
