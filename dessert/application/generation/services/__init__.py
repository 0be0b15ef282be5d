"""
Generation services.

Focused, testable services used by the generate use case: project and
source inspection, test path resolution and capture formatting.
"""

from .capture_formatter import CaptureFormatter, format_capture
from .path_resolver import PathResolver
from .project_inspector import ProjectInspector
from .source_inspector import SourceInspector

__all__ = [
    "CaptureFormatter",
    "PathResolver",
    "ProjectInspector",
    "SourceInspector",
    "format_capture",
]
