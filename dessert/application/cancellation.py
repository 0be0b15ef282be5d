"""
Cooperative cancellation for a capture-to-write run.

A run is cancelled from outside the pipeline (a Cancel button, Ctrl-C) by
flipping a single flag. The pipeline polls the flag at fixed points and
never blocks on it.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class GenerationCancelled(Exception):
    """Raised when a run stops because cancellation was requested.

    Not a ``DessertError``: it passes through error-reporting wrappers
    unchanged.
    """

    def __init__(self, stage: str = "") -> None:
        super().__init__(f"Generation cancelled{f' during {stage}' if stage else ''}")
        self.stage = stage


class CancellationToken:
    """A single "run cancelled" flag, set once and polled by the pipeline."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if not self._cancelled:
            logger.debug("Cancellation requested")
        self._cancelled = True

    def raise_if_cancelled(self, stage: str = "") -> None:
        """Abort the current run if cancellation has been requested."""
        if self._cancelled:
            logger.info("Run cancelled%s", f" before {stage}" if stage else "")
            raise GenerationCancelled(stage)
