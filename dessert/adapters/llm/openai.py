"""OpenAI chat-completions adapter using the official SDK."""

from __future__ import annotations

import logging

import openai
from openai import OpenAI
from openai.types.chat import ChatCompletion

from .base import MAX_OUTPUT_TOKENS, TEMPERATURE, BaseLLMAdapter

logger = logging.getLogger(__name__)

OPENAI_BASE_URL = "https://api.openai.com/v1"


class OpenAIAdapter(BaseLLMAdapter):
    """
    OpenAI-style provider.

    Sends one user message to ``/chat/completions`` with bearer auth and
    returns the first choice's message content.
    """

    provider = "openai"

    def _create_client(self, api_key: str) -> OpenAI:
        return OpenAI(
            api_key=api_key,
            base_url=self.base_url or OPENAI_BASE_URL,
            timeout=self.timeout,
            max_retries=self.max_retries,
            http_client=self._http_client,
        )

    def _send(self, prompt: str, model: str, api_key: str) -> str:
        client = self._create_client(api_key)
        try:
            raw = client.chat.completions.with_raw_response.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=MAX_OUTPUT_TOKENS,
                temperature=TEMPERATURE,
            )
            http_response = raw.http_response
            try:
                response = raw.parse()
            except ValueError as e:
                raise self._error(
                    f"Malformed OpenAI response: {e}",
                    model,
                    status_code=http_response.status_code,
                    body=http_response.text,
                ) from e
        except openai.APIStatusError as e:
            raise self._error(
                "OpenAI API request failed",
                model,
                status_code=e.status_code,
                body=e.response.text,
            ) from e
        except openai.APIError as e:
            raise self._error(f"OpenAI API error: {e}", model) from e
        finally:
            if self._http_client is None:
                client.close()

        # Non-JSON bodies come back from parse() as plain text
        if not isinstance(response, ChatCompletion):
            raise self._error(
                "Malformed OpenAI response",
                model,
                status_code=http_response.status_code,
                body=http_response.text,
            )

        choices = response.choices or []
        content = choices[0].message.content if choices else None
        if not content:
            raise self._empty(model, body=http_response.text)

        logger.debug("OpenAI finish_reason=%s", choices[0].finish_reason)
        return content
