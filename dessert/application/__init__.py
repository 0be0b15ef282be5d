"""
Application layer for dessert.

This module contains the use case that ties the debugger capture, the
prompt assembly, the AI provider call and the test file write together.
"""

from .cancellation import CancellationToken, GenerationCancelled
from .generate_usecase import GenerateTestUseCase

__all__ = ["CancellationToken", "GenerationCancelled", "GenerateTestUseCase"]
