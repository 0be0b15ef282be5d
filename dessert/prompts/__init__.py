"""
Prompt templates and builder with versioning.

This package builds the provider-neutral instruction sent to the AI
gateway from a debugger capture.
"""

from __future__ import annotations

from .builder import BUILD_SYSTEM_INSTRUCTIONS, PromptBuilder, PromptError, sanitize_code

__all__ = [
    "BUILD_SYSTEM_INSTRUCTIONS",
    "PromptBuilder",
    "PromptError",
    "sanitize_code",
]
