"""
Project inspection service for build system and layout detection.

This service analyzes the project root to determine:
- Which build system owns the project (Gradle, Maven, SBT, Bazel)
- Whether the project is a Kotlin multiplatform (multi-target) layout
- The text of the build descriptor(s), used as prompt context

All checks are plain filesystem predicates so they can be exercised
against temporary directories without any IDE host.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ....domain.models import BuildSystem, ProjectContext
from .source_inspector import SourceInspector

logger = logging.getLogger(__name__)

GRADLE_MARKERS = ("build.gradle.kts", "build.gradle", "settings.gradle.kts", "settings.gradle")
MAVEN_MARKERS = ("pom.xml",)
SBT_MARKERS = ("build.sbt",)
BAZEL_WORKSPACE_MARKERS = ("WORKSPACE", "WORKSPACE.bazel")
BAZEL_BUILD_MARKERS = ("BUILD", "BUILD.bazel")

MULTIPLATFORM_TOKEN = "multiplatform"
SHARED_MODULE = "shared"


class ProjectInspector:
    """
    Service for detecting the build system and module layout of a project.

    Detection precedence is fixed: Gradle, then Maven, then SBT, then Bazel.
    Co-located markers (a Gradle wrapper inside a Bazel repository, say)
    resolve to the earlier entry.
    """

    @staticmethod
    def detect_build_system(project_root: Path) -> BuildSystem:
        """
        Detect the build system from marker files in the project root.

        Args:
            project_root: Root directory of the project

        Returns:
            The first matching BuildSystem, or BuildSystem.UNKNOWN
        """
        root = Path(project_root)

        if _any_exists(root, GRADLE_MARKERS):
            build_system = BuildSystem.GRADLE
        elif _any_exists(root, MAVEN_MARKERS):
            build_system = BuildSystem.MAVEN
        elif _any_exists(root, SBT_MARKERS):
            build_system = BuildSystem.SBT
        elif _any_exists(root, BAZEL_WORKSPACE_MARKERS) and _any_exists(
            root, BAZEL_BUILD_MARKERS
        ):
            build_system = BuildSystem.BAZEL
        else:
            logger.debug("Could not detect build system in %s", root)
            return BuildSystem.UNKNOWN

        logger.debug("Detected %s build system in %s", build_system.label, root)
        return build_system

    @staticmethod
    def is_multiplatform(project_root: Path) -> bool:
        """
        Check whether the project is a multiplatform layout.

        A ``shared`` module is required. Either signal is sufficient: its
        build script (or the root ``build.gradle.kts``) mentions
        multiplatform, or a ``shared/src/commonTest`` directory exists.
        """
        root = Path(project_root)
        shared_dir = root / SHARED_MODULE
        if not shared_dir.is_dir():
            return False

        shared_build = shared_dir / "build.gradle.kts"
        root_build = root / "build.gradle.kts"
        if shared_build.exists():
            build_text = _read_text(shared_build)
        elif root_build.exists():
            build_text = _read_text(root_build)
        else:
            build_text = ""

        declares_multiplatform = MULTIPLATFORM_TOKEN in build_text
        has_common_test = (shared_dir / "src" / "commonTest").is_dir()

        logger.debug(
            "Multiplatform detection: declared=%s, commonTest=%s",
            declares_multiplatform,
            has_common_test,
        )
        return declares_multiplatform or has_common_test

    @staticmethod
    def read_build_descriptor(project_root: Path, build_system: BuildSystem) -> str:
        """
        Read the build descriptor text for the detected build system.

        Unreadable files degrade to empty text. For Bazel the WORKSPACE,
        root BUILD and ``.bazelproject`` files are concatenated, each under
        a ``=== name ===`` heading.
        """
        root = Path(project_root)

        if build_system == BuildSystem.GRADLE:
            return _read_first(root, ("build.gradle.kts", "build.gradle"))
        if build_system == BuildSystem.MAVEN:
            return _read_first(root, ("pom.xml",))
        if build_system == BuildSystem.SBT:
            return _read_first(root, ("build.sbt",))
        if build_system == BuildSystem.BAZEL:
            sections: list[str] = []
            for candidates in (
                ("WORKSPACE.bazel", "WORKSPACE"),
                ("BUILD.bazel", "BUILD"),
                (".bazelproject",),
            ):
                for name in candidates:
                    path = root / name
                    if path.is_file():
                        sections.append(f"=== {name} ===")
                        sections.append(_read_text(path))
                        break
            return "\n\n".join(sections)
        return ""

    @staticmethod
    def inspect(project_root: Path, source_text: str = "") -> ProjectContext:
        """Build the full project context for one run."""
        root = Path(project_root)
        build_system = ProjectInspector.detect_build_system(root)
        return ProjectContext(
            base_path=root,
            build_system=build_system,
            build_descriptor_text=ProjectInspector.read_build_descriptor(root, build_system),
            is_multi_target=ProjectInspector.is_multiplatform(root),
            package_name=SourceInspector.extract_package_name(source_text),
        )


def _any_exists(root: Path, names: tuple[str, ...]) -> bool:
    return any((root / name).exists() for name in names)


def _read_first(root: Path, names: tuple[str, ...]) -> str:
    for name in names:
        path = root / name
        if path.is_file():
            return _read_text(path)
    return ""


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Failed to read build file %s: %s", path, e)
        return ""
