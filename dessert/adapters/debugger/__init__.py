"""
Debugger adapters.

Variable extraction from a live frame and a snapshot-backed host used when
the pipeline runs outside an IDE.
"""

from .snapshot_frame import (
    FrameSnapshot,
    SnapshotError,
    SnapshotFrame,
    SnapshotProject,
    SnapshotSession,
    StaticValue,
    load_snapshot,
)
from .variable_extractor import (
    COULD_NOT_EXTRACT,
    EXTRACTION_ERROR,
    ExtractionError,
    VariableExtractor,
    VariableSnapshot,
    render_value,
)

__all__ = [
    "COULD_NOT_EXTRACT",
    "EXTRACTION_ERROR",
    "ExtractionError",
    "FrameSnapshot",
    "SnapshotError",
    "SnapshotFrame",
    "SnapshotProject",
    "SnapshotSession",
    "StaticValue",
    "VariableExtractor",
    "VariableSnapshot",
    "load_snapshot",
    "render_value",
]
