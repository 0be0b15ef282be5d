"""
Bounded, time-limited extraction of a paused frame's local variables.

Debugger hosts compute frame children asynchronously and report them through
a callback node. Value computation in the debuggee can hang (lazy or remote
values), so the enumeration runs on a worker thread and the caller waits on
a completion signal with a deadline. Whatever was collected when the
deadline passes is returned.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field

from ...domain.models import DessertError
from ...ports.debugger_port import ChildrenNode, FramePort, ValueHandle

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 3.0
MAX_VARIABLES = 20
MAX_VALUE_CHARS = 200
RECEIVER_NAMES = frozenset({"this", "self"})

COULD_NOT_EXTRACT = "<could not extract>"
EXTRACTION_ERROR = "<extraction error>"


class ExtractionError(DessertError):
    """A variable value could not be computed or rendered."""

    pass


@dataclass
class VariableSnapshot:
    """Result of one extraction: the variables plus how the enumeration ended."""

    variables: dict[str, str] = field(default_factory=dict)
    error: str | None = None
    timed_out: bool = False


def render_value(handle: ValueHandle, name: str) -> str:
    """Render one value, degrading to a placeholder on failure."""
    try:
        value = handle.compute_value()
        if value is None:
            return COULD_NOT_EXTRACT
        text = str(value)
    except Exception as e:
        err = ExtractionError(f"Failed to extract value for '{name}': {e}")
        logger.warning("%s", err)
        return EXTRACTION_ERROR

    # Quote once, after cutting long values down.
    body = text[1:-1] if _is_quoted(text) else text
    if len(body) > MAX_VALUE_CHARS:
        body = body[:MAX_VALUE_CHARS] + "..."
    return f'"{body}"'


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text.startswith('"') and text.endswith('"')


class _VariableCollector(ChildrenNode):
    """Children node that accumulates rendered variables until told to stop."""

    def __init__(self, max_variables: int) -> None:
        self._max_variables = max_variables
        self._variables: dict[str, str] = {}
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._closed = False
        self.error: str | None = None

    def _accepting(self) -> bool:
        with self._lock:
            return not self._closed and len(self._variables) < self._max_variables

    def add_children(
        self, children: Sequence[tuple[str, ValueHandle]], last: bool
    ) -> None:
        for name, handle in children:
            if not self._accepting():
                break
            if name in RECEIVER_NAMES:
                continue
            rendered = render_value(handle, name)
            with self._lock:
                if self._closed or len(self._variables) >= self._max_variables:
                    break
                self._variables[name] = rendered

        if last or not self._accepting():
            self._done.set()

    def too_many_children(self, remaining: int) -> None:
        logger.debug("Debugger reported %d more children than it will enumerate", remaining)
        self._done.set()

    def set_already_sorted(self, already_sorted: bool) -> None:
        return None

    def set_error_message(self, message: str) -> None:
        logger.warning("Debugger failed to enumerate frame variables: %s", message)
        self.error = message
        self._done.set()

    def wait(self, timeout: float) -> bool:
        return self._done.wait(timeout)

    def close(self) -> dict[str, str]:
        """Stop accepting late children and return a copy of what was collected."""
        with self._lock:
            self._closed = True
            return dict(self._variables)


class VariableExtractor:
    """
    Reads a bounded snapshot of local variables from a live frame.

    The implicit receiver is skipped, at most ``max_variables`` entries are
    kept in extraction order, and the call returns within ``timeout``
    seconds even if the host never reports completion.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_variables: int = MAX_VARIABLES,
    ) -> None:
        self.timeout = timeout
        self.max_variables = max_variables

    def extract(self, frame: FramePort) -> dict[str, str]:
        """Return the ordered name to rendered value mapping."""
        return self.snapshot(frame).variables

    def snapshot(self, frame: FramePort) -> VariableSnapshot:
        """Extract variables and report whether the enumeration failed or timed out."""
        collector = _VariableCollector(self.max_variables)
        worker = threading.Thread(
            target=self._enumerate,
            args=(frame, collector),
            name="dessert-variable-extractor",
            daemon=True,
        )
        worker.start()

        completed = collector.wait(self.timeout)
        variables = collector.close()
        if not completed:
            logger.warning(
                "Variable extraction timed out after %.1f seconds, keeping %d variable(s)",
                self.timeout,
                len(variables),
            )
        else:
            logger.debug("Extracted %d variable(s)", len(variables))

        return VariableSnapshot(
            variables=variables, error=collector.error, timed_out=not completed
        )

    @staticmethod
    def _enumerate(frame: FramePort, collector: _VariableCollector) -> None:
        try:
            frame.compute_children(collector)
        except Exception as e:
            collector.set_error_message(str(e) or type(e).__name__)
