"""Google Gemini generateContent adapter over plain httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .base import MAX_OUTPUT_TOKENS, TEMPERATURE, BaseLLMAdapter

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"


class GeminiAdapter(BaseLLMAdapter):
    """
    Gemini-style provider.

    Posts ``contents``/``generationConfig`` to
    ``/v1beta/models/<model>:generateContent`` with the key as a query
    parameter and returns the first candidate's first part's text.
    """

    provider = "gemini"

    def _endpoint(self, model: str) -> str:
        base = (self.base_url or GEMINI_BASE_URL).rstrip("/")
        return f"{base}/v1beta/models/{model}:generateContent"

    @staticmethod
    def _payload(prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": MAX_OUTPUT_TOKENS,
                "temperature": TEMPERATURE,
            },
        }

    def _post(self, client: httpx.Client, prompt: str, model: str, api_key: str) -> httpx.Response:
        return client.post(
            self._endpoint(model),
            params={"key": api_key},
            json=self._payload(prompt),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    def _send(self, prompt: str, model: str, api_key: str) -> str:
        try:
            if self._http_client is not None:
                response = self._post(self._http_client, prompt, model, api_key)
            else:
                with httpx.Client() as client:
                    response = self._post(client, prompt, model, api_key)
        except httpx.HTTPError as e:
            raise self._error(f"Gemini request failed: {e}", model) from e

        if response.status_code != 200:
            raise self._error(
                "Gemini API request failed",
                model,
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise self._error(
                "Malformed Gemini response",
                model,
                status_code=response.status_code,
                body=response.text,
            ) from e

        text = self._first_text(data)
        if not text:
            raise self._empty(model, body=response.text)
        return text

    @staticmethod
    def _first_text(data: Any) -> str | None:
        try:
            return data["candidates"][0]["content"]["parts"][0].get("text")
        except (KeyError, IndexError, TypeError, AttributeError):
            return None
