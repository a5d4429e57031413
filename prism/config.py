"""Prism configuration.

Typed configuration for the analysis engine and its optional LLM provider.
All settings use Pydantic v2 models so they are validated at construction
time and serialise to/from JSON, YAML or environment variables without
boiler-plate.

A ``Config`` is read-only for the duration of an analysis and is passed
explicitly into every entry point in :mod:`prism.engine`.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from prism.utils import load_structured, save_structured


class Provider(str, Enum):
    """Supported LLM providers."""

    NONE = "none"
    OPENAI = "openai"
    AZURE = "azure"
    GEMINI = "gemini"
    CLAUDE = "claude"
    OLLAMA = "ollama"


# Providers that authenticate with an API key.
KEYED_PROVIDERS = frozenset({Provider.OPENAI, Provider.AZURE, Provider.GEMINI, Provider.CLAUDE})

_PROVIDER_DEFAULTS: dict[Provider, tuple[Optional[str], str]] = {
    Provider.OPENAI: ("https://api.openai.com/v1/chat/completions", "gpt-4"),
    Provider.GEMINI: ("https://generativelanguage.googleapis.com/v1beta/models", "gemini-1.5-pro"),
    Provider.CLAUDE: ("https://api.anthropic.com/v1/messages", "claude-3-sonnet-20240229"),
    Provider.OLLAMA: ("http://localhost:11434/api/generate", "llama3.1:latest"),
}


class LlmConfig(BaseModel):
    """Connection settings for the optional LLM provider."""

    provider: Provider = Field(default=Provider.NONE)
    api_key: Optional[str] = Field(default=None, description="Provider credential")
    model: str = Field(default="")
    base_url: Optional[str] = Field(default=None, description="Override for the provider endpoint")
    timeout: int = Field(default=30, gt=0, description="Per-request timeout in seconds")

    @property
    def has_credentials(self) -> bool:
        """Whether a usable credential is present for the configured provider.

        Ollama runs locally without authentication, so it only needs to be
        selected. Selecting it alone enables network calls to the Ollama
        endpoint, even with no ``api_key`` set.
        """
        if self.provider == Provider.OLLAMA:
            return True
        if self.provider == Provider.NONE:
            return False
        return bool(self.api_key)


class AnalysisConfig(BaseModel):
    """Tuning knobs for the rule-based analyzer."""

    custom_rules: list[str] = Field(
        default_factory=list,
        description="Extra regular expressions reported as low-severity ambiguities",
    )
    ambiguity_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    enable_interactive: bool = Field(default=True)
    detect_incomplete_conditionals: bool = Field(
        default=False, description="Flag 'if ... without ... else' constructs"
    )

    @field_validator("custom_rules")
    @classmethod
    def _rules_compile(cls, rules: list[str]) -> list[str]:
        for rule in rules:
            try:
                re.compile(rule)
            except re.error as exc:
                raise ValueError(f"Invalid custom rule {rule!r}: {exc}") from exc
        return rules


class SettingsReport(BaseModel):
    """Outcome of :meth:`Config.validate_settings`."""

    is_valid: bool = True
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class Config(BaseModel):
    """Global Prism configuration."""

    llm: LlmConfig = Field(default_factory=LlmConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)

    # ------------------------------------------------------------------
    # Provider helpers
    # ------------------------------------------------------------------

    def set_provider(self, provider: Provider | str) -> None:
        """Select *provider* and apply its default endpoint and model.

        Azure has no public default endpoint, so the user's ``base_url`` is
        kept as-is.
        """
        provider = Provider(provider)
        self.llm.provider = provider
        if provider == Provider.AZURE:
            if not self.llm.model:
                self.llm.model = "gpt-4"
            return
        if provider == Provider.NONE:
            self.llm.base_url = None
            return
        base_url, model = _PROVIDER_DEFAULTS[provider]
        self.llm.base_url = base_url
        if not self.llm.model:
            self.llm.model = model

    def is_ai_configured(self) -> bool:
        """Return ``True`` when LLM augmentation can be attempted."""
        return self.llm.has_credentials and bool(self.llm.model)

    def _detect_legacy_provider(self) -> bool:
        """Infer a provider for configs written before the field existed.

        Returns:
            ``True`` if the provider was changed.
        """
        if self.llm.provider != Provider.NONE or not self.llm.api_key:
            return False
        if "gemini" in self.llm.model:
            self.set_provider(Provider.GEMINI)
        elif "gpt" in self.llm.model:
            self.set_provider(Provider.OPENAI)
        elif self.llm.base_url and "azure" in self.llm.base_url:
            self.set_provider(Provider.AZURE)
        else:
            return False
        return True

    def validate_settings(self) -> SettingsReport:
        """Check the configuration for problems without touching the network."""
        issues: list[str] = []
        warnings: list[str] = []
        llm = self.llm

        if llm.api_key is not None:
            if not llm.api_key:
                issues.append("API key is empty")
            elif len(llm.api_key) < 10:
                warnings.append("API key seems too short")
        elif llm.provider in KEYED_PROVIDERS:
            issues.append("API key is required for the selected provider")

        if llm.provider in (Provider.OPENAI, Provider.GEMINI, Provider.CLAUDE) and not llm.model:
            issues.append(f"Model name is required for {llm.provider.value}")
        if llm.provider == Provider.OPENAI and llm.api_key and not llm.api_key.startswith("sk-"):
            warnings.append("OpenAI API keys typically start with 'sk-'")
        if llm.provider == Provider.AZURE and not llm.base_url:
            issues.append("Base URL is required for Azure OpenAI")
        if llm.provider == Provider.NONE:
            warnings.append(
                "AI features are disabled. Configure a provider to enable AI-powered analysis"
            )

        if llm.timeout > 300:
            warnings.append("Timeout is very high (>5 minutes), consider reducing it")

        return SettingsReport(is_valid=not issues, issues=issues, warnings=warnings)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def default_path() -> Path:
        """Location of the user-level config file."""
        return Path.home() / ".prism" / "config.yml"

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration as JSON or YAML (by file suffix).

        Args:
            path: Destination file. Defaults to :meth:`default_path`.

        Returns:
            The path where the file was written.
        """
        target = path or self.default_path()
        return save_structured(self.model_dump(mode="json"), target)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load a previously-saved configuration.

        A missing file yields the defaults. Legacy files without a provider
        get one inferred from the model name or base URL.

        Args:
            path: The JSON/YAML file to read. Defaults to :meth:`default_path`.

        Returns:
            A validated ``Config`` instance.
        """
        source = Path(path) if path else cls.default_path()
        if not source.exists():
            return cls()
        config = cls.model_validate(load_structured(source))
        config._detect_legacy_provider()
        return config

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PRISM_PROVIDER, PRISM_API_KEY, PRISM_MODEL, PRISM_BASE_URL,
            PRISM_TIMEOUT.
        """
        llm_kwargs: dict[str, Any] = {}
        if os.environ.get("PRISM_PROVIDER"):
            llm_kwargs["provider"] = os.environ["PRISM_PROVIDER"].lower()
        if os.environ.get("PRISM_API_KEY"):
            llm_kwargs["api_key"] = os.environ["PRISM_API_KEY"]
        if os.environ.get("PRISM_MODEL"):
            llm_kwargs["model"] = os.environ["PRISM_MODEL"]
        if os.environ.get("PRISM_BASE_URL"):
            llm_kwargs["base_url"] = os.environ["PRISM_BASE_URL"]
        if os.environ.get("PRISM_TIMEOUT"):
            llm_kwargs["timeout"] = int(os.environ["PRISM_TIMEOUT"])

        config = cls(llm=LlmConfig(**llm_kwargs))
        if config.llm.provider != Provider.NONE and not config.llm.model:
            base_url = config.llm.base_url
            config.set_provider(config.llm.provider)
            if base_url:
                config.llm.base_url = base_url
        return config
