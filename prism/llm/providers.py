"""Wire contracts for the supported LLM providers.

Each provider knows how to build its HTTP request and how to pull the
generated text out of the JSON reply. Transport (timeouts, status codes,
connection errors) is handled once in :class:`prism.llm.gateway.LlmGateway`.
"""

from __future__ import annotations

from typing import Any

from prism.config import LlmConfig, Provider
from prism.errors import IncompleteResponseError, TransportError

from .prompts import SYSTEM_INSTRUCTION, with_system_instruction

TEMPERATURE = 0.1
MAX_TOKENS = 2000


class LlmProvider:
    """Base class for one provider's request/response schema."""

    label = "LLM"
    default_url = ""

    def __init__(self, config: LlmConfig) -> None:
        self.config = config

    def endpoint(self) -> str:
        return self.config.base_url or self.default_url

    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def params(self) -> dict[str, str]:
        return {}

    def payload(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    def extract_text(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    def _shape_error(self, exc: Exception) -> TransportError:
        return TransportError(
            f"Unexpected {self.label} response shape: {exc}", provider=self.label
        )

    def _require_text(self, value: Any) -> str:
        """Reject replies whose text field is null or not a string."""
        if not isinstance(value, str):
            raise IncompleteResponseError(
                f"{self.label} reply carries no text", provider=self.label
            )
        return value


class OpenAIProvider(LlmProvider):
    """OpenAI-compatible chat completions (also used for Azure OpenAI)."""

    label = "OpenAI"
    default_url = "https://api.openai.com/v1/chat/completions"

    def headers(self) -> dict[str, str]:
        return {**super().headers(), "Authorization": f"Bearer {self.config.api_key}"}

    def payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }

    def extract_text(self, data: dict[str, Any]) -> str:
        try:
            choices = data["choices"]
            if not choices:
                raise IncompleteResponseError("No response from LLM", provider=self.label)
            return self._require_text(choices[0]["message"]["content"])
        except (KeyError, TypeError, IndexError) as exc:
            raise self._shape_error(exc) from exc


class AzureProvider(OpenAIProvider):
    """Azure OpenAI; same schema, the endpoint comes from ``base_url``."""

    label = "Azure OpenAI"


class GeminiProvider(LlmProvider):
    """Google ``generateContent``; the API key travels as a query parameter."""

    label = "Gemini"

    def endpoint(self) -> str:
        return (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            f"{self.config.model}:generateContent"
        )

    def params(self) -> dict[str, str]:
        return {"key": self.config.api_key or ""}

    def payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": with_system_instruction(prompt)}]}],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "maxOutputTokens": MAX_TOKENS,
            },
        }

    def extract_text(self, data: dict[str, Any]) -> str:
        try:
            candidates = data["candidates"]
            if not candidates or not candidates[0]["content"]["parts"]:
                raise IncompleteResponseError("No response from Gemini", provider=self.label)
            return self._require_text(candidates[0]["content"]["parts"][0]["text"])
        except (KeyError, TypeError, IndexError) as exc:
            raise self._shape_error(exc) from exc


class ClaudeProvider(LlmProvider):
    """Anthropic messages API."""

    label = "Claude"
    anthropic_version = "2023-06-01"

    def endpoint(self) -> str:
        return "https://api.anthropic.com/v1/messages"

    def headers(self) -> dict[str, str]:
        return {
            **super().headers(),
            "x-api-key": self.config.api_key or "",
            "anthropic-version": self.anthropic_version,
        }

    def payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": with_system_instruction(prompt)}],
        }

    def extract_text(self, data: dict[str, Any]) -> str:
        try:
            content = data["content"]
            if not content:
                raise IncompleteResponseError("No response from Claude", provider=self.label)
            return self._require_text(content[0]["text"])
        except (KeyError, TypeError, IndexError) as exc:
            raise self._shape_error(exc) from exc


class OllamaProvider(LlmProvider):
    """Local Ollama single-shot ``/api/generate``; no authentication."""

    label = "Ollama"
    default_url = "http://localhost:11434/api/generate"

    def payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.config.model,
            "prompt": with_system_instruction(prompt),
            "stream": False,
        }

    def extract_text(self, data: dict[str, Any]) -> str:
        """Return ``"response"``; a reply without ``done: true`` is a failure."""
        try:
            if not data.get("done", False):
                raise IncompleteResponseError("Ollama response not complete", provider=self.label)
            return self._require_text(data["response"])
        except (KeyError, AttributeError) as exc:
            raise self._shape_error(exc) from exc

    def server_root(self) -> str:
        """Base URL of the Ollama server, derived from the generate endpoint."""
        url = self.endpoint().rstrip("/")
        for suffix in ("/api/generate", "/api"):
            if url.endswith(suffix):
                return url[: -len(suffix)]
        return url


PROVIDERS: dict[Provider, type[LlmProvider]] = {
    Provider.OPENAI: OpenAIProvider,
    Provider.AZURE: AzureProvider,
    Provider.GEMINI: GeminiProvider,
    Provider.CLAUDE: ClaudeProvider,
    Provider.OLLAMA: OllamaProvider,
}
