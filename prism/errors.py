"""Exception hierarchy for the Prism engine.

Rule-based analysis never raises. Everything below is raised by the LLM
gateway, the response parser or the configuration layer, and is caught at
the facet boundary in :mod:`prism.engine` unless the caller explicitly asked
for an LLM-only result.
"""

from __future__ import annotations


class PrismError(Exception):
    """Base class for every error raised by Prism."""


class ConfigurationError(PrismError):
    """Missing or invalid provider settings."""


class LlmError(PrismError):
    """Raised when an LLM provider call cannot produce text."""

    def __init__(self, message: str, provider: str = "") -> None:
        self.provider = provider
        super().__init__(message)


class NotConfiguredError(LlmError, ConfigurationError):
    """No credentials (or no provider) are configured for LLM calls."""


class RequestFailedError(LlmError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, message: str, provider: str = "", status_code: int = 0, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message, provider)


class TransportError(LlmError):
    """Connection, timeout or (de)serialisation failure talking to a provider."""


class IncompleteResponseError(LlmError):
    """The provider replied but the reply is unfinished or carries no text."""


class ParseError(PrismError):
    """An LLM response could not be parsed into the requested JSON shape.

    The raw text is kept on the exception for diagnostics.
    """

    def __init__(self, message: str, raw: str, facet: str = "") -> None:
        self.raw = raw
        self.facet = facet
        super().__init__(f"{message}. Raw response: {raw}")
