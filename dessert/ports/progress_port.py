"""Port interface for progress reporting."""

from abc import abstractmethod
from typing import Protocol


class ProgressPort(Protocol):
    """Receives stage updates from a running pipeline."""

    @abstractmethod
    def update(self, message: str, fraction: float) -> None:
        """Report the current stage and completed fraction (0.0 to 1.0)."""


class NullProgress:
    """Progress sink used when the caller does not display progress."""

    def update(self, message: str, fraction: float) -> None:
        return None
