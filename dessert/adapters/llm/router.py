"""Provider selection for the AI gateway."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from ...config.loader import ConfigurationError
from ...config.models import LLMProviderConfig
from .base import BaseLLMAdapter
from .claude import ClaudeAdapter
from .gemini import GeminiAdapter
from .openai import OpenAIAdapter

if TYPE_CHECKING:
    from ...application.cancellation import CancellationToken

logger = logging.getLogger(__name__)

PROVIDERS: dict[str, type[BaseLLMAdapter]] = {
    "openai": OpenAIAdapter,
    "claude": ClaudeAdapter,
    "gemini": GeminiAdapter,
}


def create_llm_adapter(
    provider: str,
    *,
    base_url: str | None = None,
    timeout: float = 180.0,
    max_retries: int = 0,
    http_client: httpx.Client | None = None,
) -> BaseLLMAdapter:
    """Create the adapter registered for ``provider``.

    Raises:
        ConfigurationError: If the provider is not one of openai, claude, gemini
    """
    key = (provider or "").strip().lower()
    adapter_cls = PROVIDERS.get(key)
    if adapter_cls is None:
        raise ConfigurationError(
            f"Unsupported AI provider '{provider}'. "
            f"Supported providers: {', '.join(PROVIDERS)}"
        )
    return adapter_cls(
        base_url=base_url,
        timeout=timeout,
        max_retries=max_retries,
        http_client=http_client,
    )


class LLMRouter:
    """Routes generation requests to the configured provider adapter."""

    def __init__(
        self,
        config: LLMProviderConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = config or LLMProviderConfig()
        base_urls = {
            "openai": self.config.openai_base_url,
            "claude": self.config.claude_base_url,
            "gemini": self.config.gemini_base_url,
        }
        self._adapter = create_llm_adapter(
            self.config.provider,
            base_url=base_urls.get(self.config.provider),
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
            http_client=http_client,
        )
        logger.debug("Routing AI requests to %s", self.config.provider)

    @classmethod
    def from_config(
        cls, config: LLMProviderConfig, http_client: httpx.Client | None = None
    ) -> LLMRouter:
        return cls(config, http_client=http_client)

    @property
    def provider(self) -> str:
        return self._adapter.provider

    @property
    def adapter(self) -> BaseLLMAdapter:
        return self._adapter

    def generate(
        self,
        prompt: str,
        model: str,
        api_key: str,
        cancellation: CancellationToken | None = None,
    ) -> str:
        return self._adapter.generate(prompt, model, api_key, cancellation)
