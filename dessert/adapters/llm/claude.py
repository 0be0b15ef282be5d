"""Anthropic Claude messages adapter using the official SDK."""

from __future__ import annotations

import logging

import anthropic
from anthropic import Anthropic
from anthropic.types import Message

from .base import MAX_OUTPUT_TOKENS, BaseLLMAdapter

logger = logging.getLogger(__name__)

CLAUDE_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_VERSION = "2023-06-01"


class ClaudeAdapter(BaseLLMAdapter):
    """
    Claude-style provider.

    Sends one user message to ``/v1/messages`` with the ``x-api-key`` and
    ``anthropic-version`` headers and returns the first content block's text.
    """

    provider = "claude"

    def _create_client(self, api_key: str) -> Anthropic:
        return Anthropic(
            api_key=api_key,
            base_url=self.base_url or CLAUDE_BASE_URL,
            timeout=self.timeout,
            max_retries=self.max_retries,
            default_headers={"anthropic-version": ANTHROPIC_VERSION},
            http_client=self._http_client,
        )

    def _send(self, prompt: str, model: str, api_key: str) -> str:
        client = self._create_client(api_key)
        try:
            raw = client.messages.with_raw_response.create(
                model=model,
                max_tokens=MAX_OUTPUT_TOKENS,
                messages=[{"role": "user", "content": prompt}],
            )
            http_response = raw.http_response
            try:
                message = raw.parse()
            except ValueError as e:
                raise self._error(
                    f"Malformed Claude response: {e}",
                    model,
                    status_code=http_response.status_code,
                    body=http_response.text,
                ) from e
        except anthropic.APIStatusError as e:
            raise self._error(
                "Claude API request failed",
                model,
                status_code=e.status_code,
                body=e.response.text,
            ) from e
        except anthropic.APIError as e:
            raise self._error(f"Claude API error: {e}", model) from e
        finally:
            if self._http_client is None:
                client.close()

        # Non-JSON bodies come back from parse() as plain text
        if not isinstance(message, Message):
            raise self._error(
                "Malformed Claude response",
                model,
                status_code=http_response.status_code,
                body=http_response.text,
            )

        blocks = message.content or []
        text = getattr(blocks[0], "text", None) if blocks else None
        if not text:
            raise self._empty(model, body=http_response.text)

        logger.debug("Claude stop_reason=%s", message.stop_reason)
        return text
