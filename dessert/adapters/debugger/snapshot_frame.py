"""
Debugger host adapter backed by a JSON frame snapshot.

Lets the pipeline run outside an IDE: a snapshot file records the paused
location and already-rendered variable values, e.g.::

    {
      "source_file": "app/src/main/kotlin/pkg/Foo.kt",
      "line": 42,
      "variables": {"count": 3, "name": "\\"bob\\""}
    }

Relative ``source_file`` paths are resolved against the project root.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ...domain.models import DessertError
from ...ports.debugger_port import ChildrenNode

logger = logging.getLogger(__name__)


class SnapshotError(DessertError):
    """Raised when a frame snapshot cannot be loaded."""

    pass


class FrameSnapshot(BaseModel):
    """Validated content of a snapshot file."""

    source_file: str = Field(..., description="Path of the paused source file")
    line: int = Field(default=1, ge=0, description="1-based paused line")
    variables: dict[str, Any] = Field(
        default_factory=dict, description="Variable name to value, in frame order"
    )


class StaticValue:
    """Value handle whose value is already known."""

    def __init__(self, value: Any) -> None:
        self._value = value

    def compute_value(self) -> Any:
        return self._value


class SnapshotFrame:
    """Frame that delivers all recorded variables in a single final batch."""

    def __init__(self, source_file: Path, line: int, variables: dict[str, Any]) -> None:
        self._source_file = source_file
        self._line = line
        self._variables = variables

    @property
    def source_file(self) -> Path | None:
        return self._source_file

    @property
    def line(self) -> int:
        return self._line

    def compute_children(self, node: ChildrenNode) -> None:
        children: Sequence[tuple[str, StaticValue]] = [
            (name, StaticValue(value)) for name, value in self._variables.items()
        ]
        node.add_children(children, last=True)


class SnapshotSession:
    """A session that is always paused at the snapshot."""

    @property
    def is_paused(self) -> bool:
        return True


class SnapshotProject:
    def __init__(self, base_path: Path) -> None:
        self._base_path = base_path

    @property
    def base_path(self) -> Path | None:
        return self._base_path


def load_snapshot(
    snapshot_path: str | Path, project_root: str | Path
) -> tuple[SnapshotFrame, SnapshotSession, SnapshotProject]:
    """Load a snapshot file into frame, session and project objects.

    Raises:
        SnapshotError: If the file is missing, not JSON or not a valid snapshot
    """
    snapshot_path = Path(snapshot_path)
    root = Path(project_root).resolve()
    try:
        raw = json.loads(snapshot_path.read_text(encoding="utf-8"))
        snapshot = FrameSnapshot(**raw)
    except OSError as e:
        raise SnapshotError(f"Failed to read snapshot {snapshot_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in snapshot {snapshot_path}: {e}") from e
    except (ValidationError, TypeError) as e:
        raise SnapshotError(f"Invalid snapshot {snapshot_path}: {e}") from e

    source = Path(snapshot.source_file)
    if not source.is_absolute():
        source = root / source

    logger.debug(
        "Loaded snapshot for %s:%d with %d variable(s)",
        source,
        snapshot.line,
        len(snapshot.variables),
    )
    frame = SnapshotFrame(source, snapshot.line, snapshot.variables)
    return frame, SnapshotSession(), SnapshotProject(root)
