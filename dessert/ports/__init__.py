"""
Port interfaces for the dessert system.

This module contains the interface definitions using Python Protocols
to define contracts between the application layer, the adapters and the
external debugger host.
"""

from .debugger_port import ChildrenNode, FramePort, ProjectPort, SessionPort, ValueHandle
from .llm_error import EmptyGenerationError, ProviderError
from .llm_port import LLMPort
from .progress_port import NullProgress, ProgressPort

__all__ = [
    "ChildrenNode",
    "FramePort",
    "ProjectPort",
    "SessionPort",
    "ValueHandle",
    "LLMPort",
    "ProviderError",
    "EmptyGenerationError",
    "ProgressPort",
    "NullProgress",
]
