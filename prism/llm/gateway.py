"""Provider-agnostic async gateway for LLM calls.

Wraps the provider HTTP APIs behind a single ``call(prompt) -> str`` with
proper timeout handling and a typed error taxonomy. One outbound request is
issued per call; each call opens its own ``httpx.AsyncClient`` so concurrent
facet calls never share connection state.

Typical usage::

    gateway = LlmGateway(config.llm)
    if gateway.is_configured:
        text = await gateway.call("Summarise this requirement ...")
"""

from __future__ import annotations

import httpx

from prism.config import LlmConfig, Provider
from prism.errors import NotConfiguredError, RequestFailedError, TransportError

from .providers import PROVIDERS, LlmProvider, OllamaProvider


class LlmGateway:
    """Dispatches prompts to the configured provider.

    Parameters
    ----------
    config:
        Provider, credential, model, endpoint override and timeout. Treated
        as read-only.
    """

    def __init__(self, config: LlmConfig) -> None:
        self.config = config

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our timeout."""
        return httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout, connect=10.0))

    def provider(self) -> LlmProvider:
        """Instantiate the wire contract for the configured provider.

        Raises:
            NotConfiguredError: If no provider is selected.
        """
        if self.config.provider == Provider.NONE:
            raise NotConfiguredError("No LLM provider configured")
        return PROVIDERS[self.config.provider](self.config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_configured(self) -> bool:
        """Whether augmentation should be attempted at all."""
        return self.config.has_credentials

    async def call(self, prompt: str) -> str:
        """Send *prompt* and return the generated text.

        Raises:
            NotConfiguredError: No provider or no credential.
            RequestFailedError: The provider returned a non-success status;
                the message includes the response body.
            TransportError: Connection failure, timeout, or an undecodable
                reply.
            IncompleteResponseError: The reply carries no text or is marked
                unfinished.
        """
        if not self.is_configured:
            raise NotConfiguredError(
                "No API key configured", provider=self.config.provider.value
            )
        provider = self.provider()

        try:
            async with self._client() as client:
                response = await client.post(
                    provider.endpoint(),
                    headers=provider.headers(),
                    params=provider.params(),
                    json=provider.payload(prompt),
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text
            raise RequestFailedError(
                f"{provider.label} API request failed (HTTP {exc.response.status_code}): {body}",
                provider=provider.label,
                status_code=exc.response.status_code,
                body=body,
            ) from exc
        except httpx.ConnectError as exc:
            raise TransportError(
                f"Cannot connect to {provider.label} at {provider.endpoint()}: {exc}",
                provider=provider.label,
            ) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to {provider.label} timed out after {self.config.timeout}s.",
                provider=provider.label,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{provider.label} transport error: {exc}", provider=provider.label
            ) from exc
        except ValueError as exc:
            raise TransportError(
                f"{provider.label} returned a non-JSON body: {exc}", provider=provider.label
            ) from exc

        return provider.extract_text(data)

    # ------------------------------------------------------------------
    # Ollama helpers
    # ------------------------------------------------------------------

    def _ollama(self) -> OllamaProvider:
        return OllamaProvider(self.config)

    async def is_available(self) -> bool:
        """Return ``True`` if the Ollama server responds to ``/api/tags``."""
        try:
            async with self._client() as client:
                response = await client.get(f"{self._ollama().server_root()}/api/tags")
                return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def list_models(self) -> list[str]:
        """Return the names of all locally-available Ollama models.

        Parses the ``/api/tags`` response and returns a sorted list of model
        name strings. Returns an empty list if the server is unreachable or
        the reply is malformed; entries without a string name are skipped.
        """
        try:
            async with self._client() as client:
                response = await client.get(f"{self._ollama().server_root()}/api/tags")
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError):
            return []
        models = (data.get("models") or []) if isinstance(data, dict) else []
        if not isinstance(models, list):
            return []
        names = (m.get("name") for m in models if isinstance(m, dict))
        return sorted(name for name in names if isinstance(name, str) and name)
