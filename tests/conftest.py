"""Shared pytest fixtures for the Prism test suite.

Provides reusable fixtures for:
- Sample requirement texts
- LLM-enabled and LLM-free configurations
- Canned provider replies per facet
- A patched ``httpx.AsyncClient`` that answers like an OpenAI endpoint
"""

from __future__ import annotations

import json
import textwrap
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from prism.analyzer.models import ExtractedEntities
from prism.config import Config, LlmConfig, Provider


# ---------------------------------------------------------------------------
# Requirement texts
# ---------------------------------------------------------------------------

@pytest.fixture
def vague_requirement() -> str:
    return "The system should be fast and user-friendly"


@pytest.fixture
def user_story() -> str:
    return "As a user, I want to login to access my account"


@pytest.fixture
def requirements_document() -> str:
    """A multi-line requirement set touching every analyzer rule."""
    return textwrap.dedent("""\
        The admin can create a report and delete a report.
        The customer must be notified when an order is updated.
        Search should be fast for many users.
        The user can login with an email and password.
    """)


@pytest.fixture
def sample_entities() -> ExtractedEntities:
    return ExtractedEntities(
        actors=["admin", "user"],
        actions=["create", "login"],
        objects=["account", "report"],
    )


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def offline_config() -> Config:
    """No provider configured: rule-based analysis only."""
    return Config()


@pytest.fixture
def openai_config() -> Config:
    return Config(
        llm=LlmConfig(
            provider=Provider.OPENAI,
            api_key="sk-test-key-1234567890",
            model="gpt-4",
        )
    )


# ---------------------------------------------------------------------------
# Canned facet replies
# ---------------------------------------------------------------------------

AMBIGUITY_REPLY = json.dumps({
    "ambiguities": [
        {
            "text": "user-friendly",
            "reason": "No usability target is given",
            "suggestions": ["Define a task completion time"],
            "severity": "High",
        }
    ]
})

# Entities arrive fenced, the way chat models usually answer.
ENTITY_REPLY = "Here you go:\n```json\n" + json.dumps({
    "actors": ["operator", "system"],
    "actions": ["monitor"],
    "objects": ["dashboard"],
}) + "\n```\nLet me know if you need more."

GAP_REPLY = json.dumps({
    "gaps": [
        {
            "category": "Error Handling",
            "description": "No behaviour defined for failures",
            "suggestions": ["Describe error messages"],
            "priority": "Urgent",
        }
    ]
})

NFR_REPLY = json.dumps({
    "nfrs": [
        {
            "category": "Observability",
            "requirement": "All requests shall be traced",
            "rationale": "Operators need to diagnose latency",
            "acceptance_criteria": ["Trace ids in every log line"],
            "priority": "Mandatory",
        }
    ]
})

IMPROVEMENT_REPLY = "  The system shall respond within 200 ms for 95% of requests.  \n"

ALL_REPLIES: dict[str, str] = {
    "ambiguities": AMBIGUITY_REPLY,
    "entities": ENTITY_REPLY,
    "completeness": GAP_REPLY,
    "nfrs": NFR_REPLY,
    "improvement": IMPROVEMENT_REPLY,
}

# A phrase unique to each facet prompt, checked in this order.
_FACET_MARKERS = (
    ("improvement", "requirements improvement specialist"),
    ("completeness", "for completeness and identify gaps"),
    ("nfrs", "(NFRs)"),
    ("entities", "Extract the key entities"),
    ("ambiguities", "for ambiguities"),
)


def facet_of(prompt: str) -> str:
    for facet, marker in _FACET_MARKERS:
        if marker in prompt:
            return facet
    return "unknown"


def openai_body(content: str) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def make_mock_client(post: Any) -> AsyncMock:
    """AsyncMock standing in for ``httpx.AsyncClient`` as a context manager."""
    mock_client = AsyncMock()
    mock_client.post = AsyncMock(side_effect=post)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


def json_response(data: Any, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = data
    response.raise_for_status = MagicMock()
    return response


def error_response(status_code: int, body: str) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = body
    response.raise_for_status = MagicMock(
        side_effect=httpx.HTTPStatusError(
            f"HTTP {status_code}", request=MagicMock(), response=response
        )
    )
    return response


# ---------------------------------------------------------------------------
# Mock OpenAI endpoint
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_openai():
    """Factory patching httpx.AsyncClient with an OpenAI-shaped responder.

    Each request is routed by the facet its prompt asks for. Facets missing
    from *replies* get an HTTP 500.

    Usage:
        def test_something(mock_openai):
            with mock_openai(facet_replies) as client_cls:
                ...
    """

    def factory(replies: dict[str, str]):
        async def mock_post(url: str, **kwargs: Any) -> MagicMock:
            prompt = kwargs["json"]["messages"][-1]["content"]
            facet = facet_of(prompt)
            if facet not in replies:
                return error_response(500, f"no reply configured for {facet}")
            return json_response(openai_body(replies[facet]))

        return patch("httpx.AsyncClient", return_value=make_mock_client(mock_post))

    return factory


@pytest.fixture
def facet_replies() -> dict[str, str]:
    """A well-formed reply for every facet (mutable copy)."""
    return dict(ALL_REPLIES)


@pytest.fixture
def mock_http():
    """Factory patching httpx.AsyncClient with fixed responses in order.

    Usage:
        def test_something(mock_http):
            with mock_http(responses.json({...})) as client_cls:
                ...
            client = client_cls.return_value
            client.post.call_args  # inspect the request
    """

    def factory(*responses: Any):
        queue = list(responses)

        async def mock_post(url: str, **kwargs: Any) -> MagicMock:
            item = queue.pop(0)
            if isinstance(item, Exception):
                raise item
            return item

        mock_client = make_mock_client(mock_post)
        mock_client.get = AsyncMock(side_effect=mock_post)
        return patch("httpx.AsyncClient", return_value=mock_client)

    return factory


@pytest.fixture
def responses():
    """Builders for canned ``httpx.Response`` stand-ins."""

    class _Builders:
        json = staticmethod(json_response)
        error = staticmethod(error_response)
        openai = staticmethod(lambda content: json_response(openai_body(content)))

    return _Builders
