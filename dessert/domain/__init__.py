"""Domain models and errors for dessert."""

from .models import (
    BuildSystem,
    CapturedFrame,
    DebugSessionError,
    DessertError,
    FilesystemError,
    ProjectContext,
    SourceLanguage,
    TestFileTarget,
    UnsupportedLanguageError,
)

__all__ = [
    "BuildSystem",
    "CapturedFrame",
    "DebugSessionError",
    "DessertError",
    "FilesystemError",
    "ProjectContext",
    "SourceLanguage",
    "TestFileTarget",
    "UnsupportedLanguageError",
]
