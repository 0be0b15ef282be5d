"""
Domain models for the dessert system.

This module contains the core domain models using Pydantic for validation
and serialization. These models describe a single capture-to-write run:
the languages and build systems we understand, the captured debugger frame,
the inspected project and the resolved destination of the generated test.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DessertError(Exception):
    """Base exception for dessert domain errors."""

    pass


class DebugSessionError(DessertError):
    """Raised when there is no paused session or usable stack frame."""

    pass


class UnsupportedLanguageError(DessertError):
    """Raised when the paused frame points at a file we cannot generate tests for."""

    pass


class FilesystemError(DessertError):
    """Raised when a required filesystem write (directory or file) fails."""

    pass


class SourceLanguage(str, Enum):
    """Enumeration of source languages tests can be generated for."""

    KOTLIN = "kotlin"
    JAVA = "java"
    SCALA = "scala"

    @property
    def extension(self) -> str:
        """File extension without the leading dot."""
        return _EXTENSIONS[self]

    @property
    def source_dir(self) -> str:
        """Directory name used under ``src/main`` and ``src/test``."""
        return self.value

    @property
    def test_suffix(self) -> str:
        return "Test"

    @classmethod
    def from_file_name(cls, file_name: str) -> "SourceLanguage | None":
        """Detect the language from a file name, ``None`` when unsupported."""
        for language in cls:
            if file_name.endswith(f".{language.extension}"):
                return language
        return None


_EXTENSIONS = {
    SourceLanguage.KOTLIN: "kt",
    SourceLanguage.JAVA: "java",
    SourceLanguage.SCALA: "scala",
}


class BuildSystem(str, Enum):
    """Enumeration of build systems detected from project root markers."""

    GRADLE = "gradle"
    MAVEN = "maven"
    SBT = "sbt"
    BAZEL = "bazel"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Human-readable name shown in captures and prompts."""
        return _BUILD_LABELS[self]


_BUILD_LABELS = {
    BuildSystem.GRADLE: "Gradle",
    BuildSystem.MAVEN: "Maven",
    BuildSystem.SBT: "SBT",
    BuildSystem.BAZEL: "Bazel",
    BuildSystem.UNKNOWN: "Unknown",
}


class CapturedFrame(BaseModel):
    """
    Snapshot of a paused stack frame.

    Variables keep their extraction order. The snapshot is built once per
    run and discarded after the prompt is assembled.
    """

    model_config = ConfigDict(frozen=True)

    source_file_name: str = Field(..., description="Base name of the source file")
    source_line: int = Field(..., description="1-based line the frame is paused at")
    method_signature: str = Field(
        default="unknown", description="Enclosing method declaration text"
    )
    variables: dict[str, str] = Field(
        default_factory=dict, description="Rendered local variables in extraction order"
    )
    file_content: str = Field(default="", description="Source file text at capture time")
    variables_error: str | None = Field(
        default=None, description="Reason the whole variable extraction failed"
    )

    @field_validator("source_line")
    @classmethod
    def validate_source_line(cls, v: int) -> int:
        """Line numbers are never negative."""
        if v < 0:
            raise ValueError("source_line must not be negative")
        return v

    @property
    def language(self) -> SourceLanguage | None:
        return SourceLanguage.from_file_name(self.source_file_name)


class ProjectContext(BaseModel):
    """Read-only facts about the host project gathered from the filesystem."""

    model_config = ConfigDict(frozen=True)

    base_path: Path = Field(..., description="Project root directory")
    build_system: BuildSystem = Field(default=BuildSystem.UNKNOWN)
    build_descriptor_text: str = Field(
        default="", description="Text of the build descriptor(s), empty if unreadable"
    )
    is_multi_target: bool = Field(
        default=False, description="Whether the project is a multiplatform layout"
    )
    package_name: str = Field(
        default="", description="Package declared by the paused source file"
    )


class TestFileTarget(BaseModel):
    """Destination of the generated test and any content already there."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(frozen=True)

    absolute_path: Path = Field(..., description="Absolute path of the test file")
    existing_content: str | None = Field(
        default=None, description="Current file content when the file exists"
    )

    @property
    def is_merge(self) -> bool:
        """True when the prompt should extend an existing test file."""
        return bool(self.existing_content)

    def describe(self) -> dict[str, Any]:
        return {
            "path": str(self.absolute_path),
            "mode": "extend" if self.is_merge else "create",
        }
