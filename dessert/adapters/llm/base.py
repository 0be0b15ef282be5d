"""Base adapter for AI providers with shared helpers.

This module centralizes what every provider adapter does the same way:
- Cancellation checks around the single network call
- Request constants (output token cap, temperature)
- Uniform logging of provider/model context
- Normalization of provider failures into ``ProviderError``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from ...ports.llm_error import EmptyGenerationError, ProviderError

if TYPE_CHECKING:
    from ...application.cancellation import CancellationToken

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 8192
TEMPERATURE = 0.0
DEFAULT_TIMEOUT = 180.0


class BaseLLMAdapter:
    """Shared foundations for concrete provider adapters.

    Subclasses implement ``_send`` and raise ``ProviderError`` from it. The
    public ``generate`` wraps the call with the cancellation checks: once
    before the request goes out and once right after the response arrives.
    The call itself is never interrupted.
    """

    provider: str = ""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            base_url: Override of the provider's API base URL
            timeout: Transport timeout in seconds
            max_retries: SDK-level retry count (0 sends exactly one request)
            http_client: Injected HTTP client; the adapter never closes it
        """
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self._http_client = http_client

    def generate(
        self,
        prompt: str,
        model: str,
        api_key: str,
        cancellation: CancellationToken | None = None,
    ) -> str:
        """Send ``prompt`` to ``model`` and return the generated text.

        Raises:
            ProviderError: On transport failure, non-success status or malformed body
            EmptyGenerationError: When the provider returned no text
            GenerationCancelled: When cancelled before or during the request
        """
        if cancellation is not None:
            cancellation.raise_if_cancelled(f"{self.provider} request")

        logger.info("Requesting test from %s (model=%s)", self.provider, model)
        logger.debug("Prompt size: %d chars", len(prompt))

        text = self._send(prompt, model, api_key)

        if cancellation is not None:
            cancellation.raise_if_cancelled(f"{self.provider} response")

        logger.info("Received %d chars from %s", len(text), self.provider)
        return text

    def _send(self, prompt: str, model: str, api_key: str) -> str:
        raise NotImplementedError

    # ----------------
    # Error normalizers
    # ----------------
    def _error(
        self,
        message: str,
        model: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> ProviderError:
        error = ProviderError(
            message=message,
            provider=self.provider,
            model=model,
            status_code=status_code,
            body=body,
        )
        logger.error("%s", error)
        return error

    def _empty(self, model: str, body: str | None = None) -> EmptyGenerationError:
        error = EmptyGenerationError(
            message=f"No generated text in {self.provider} response",
            provider=self.provider,
            model=model,
            body=body,
        )
        logger.error("%s", error)
        return error
