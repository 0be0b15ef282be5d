"""
Port interfaces for the debugger host.

The IDE layer is not part of dessert. It hands the pipeline objects that
satisfy these protocols: a paused session, the selected stack frame and
the project it belongs to.
"""

from abc import abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol


class ValueHandle(Protocol):
    """A single variable value living in the debuggee."""

    @abstractmethod
    def compute_value(self) -> Any:
        """Evaluate the value; ``None`` when the host cannot render it."""


class ChildrenNode(Protocol):
    """Receiver for the asynchronous children computation of a frame."""

    @abstractmethod
    def add_children(
        self, children: Sequence[tuple[str, ValueHandle]], last: bool
    ) -> None:
        """Deliver a batch of (name, value) pairs; ``last`` ends the enumeration."""

    @abstractmethod
    def too_many_children(self, remaining: int) -> None:
        """The host stopped enumerating; ``remaining`` children were skipped."""

    @abstractmethod
    def set_already_sorted(self, already_sorted: bool) -> None:
        """Ordering hint from the host, carries no data."""

    @abstractmethod
    def set_error_message(self, message: str) -> None:
        """The host failed to enumerate the children."""


class FramePort(Protocol):
    """A paused stack frame."""

    @property
    @abstractmethod
    def source_file(self) -> Path | None:
        """Absolute path of the frame's source file, if known."""

    @property
    @abstractmethod
    def line(self) -> int:
        """1-based line number the frame is paused at."""

    @abstractmethod
    def compute_children(self, node: ChildrenNode) -> None:
        """Start enumerating local variables, reporting to ``node``."""


class SessionPort(Protocol):
    """The debugging session owning the frame."""

    @property
    @abstractmethod
    def is_paused(self) -> bool:
        """Whether execution is currently suspended."""


class ProjectPort(Protocol):
    """The project opened in the host."""

    @property
    @abstractmethod
    def base_path(self) -> Path | None:
        """Project root directory."""
