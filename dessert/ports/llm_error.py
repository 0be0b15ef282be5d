"""Unified error type for AI provider failures.

This module defines `ProviderError`, a provider-agnostic exception that all
LLM adapters raise at their public boundary. It preserves the original
provider exception via Python's exception chaining (``from e``) and carries
the HTTP status and raw response body so a failed run can be reproduced.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.models import DessertError


@dataclass
class ProviderError(DessertError):
    """Provider-agnostic generation error with normalized context.

    Attributes:
        message: Human-friendly error summary.
        provider: Provider key ("openai", "claude", "gemini").
        model: The model identifier used for the request.
        status_code: HTTP status code if a response was received.
        body: Raw response body if one was received.
    """

    message: str
    provider: str | None = None
    model: str | None = None
    status_code: int | None = None
    body: str | None = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.provider:
            parts.append(f"provider={self.provider}")
        if self.model:
            parts.append(f"model={self.model}")
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        ctx = " ".join(parts)
        text = f"{self.message} ({ctx})" if ctx else self.message
        if self.body:
            text = f"{text} - {self.body}"
        return text


@dataclass
class EmptyGenerationError(ProviderError):
    """The provider answered successfully but returned no generated text."""
