"""
Test path resolution service.

Computes where the generated test for a paused source file lives inside the
host project's test tree:

- Bazel: a ``generated`` directory beside the source file
- Multiplatform Kotlin: ``shared/src/<variant>Test/kotlin/generated``
- Everything else: ``<module>/src/test/<language>/generated``, where the
  module is whatever precedes ``/src/main/<language>/`` in the source path

If a test file already exists at the resolved location its content is
returned so the prompt can ask for an extension instead of a new file.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from ....domain.models import (
    BuildSystem,
    FilesystemError,
    SourceLanguage,
    TestFileTarget,
)

logger = logging.getLogger(__name__)

GENERATED_DIR = "generated"

# Ordered: the first tag present in the source path wins.
SOURCE_SET_TAGS: tuple[tuple[str, str], ...] = (
    ("desktopMain", "desktopTest"),
    ("androidMain", "androidTest"),
    ("iosMain", "iosTest"),
    ("jvmMain", "jvmTest"),
    ("jsMain", "jsTest"),
    ("commonMain", "commonTest"),
)
DEFAULT_TEST_SOURCE_SET = "commonTest"


class PathResolver:
    """
    Service for resolving the generated test file of a source file.

    Resolution is deterministic and idempotent: the same inputs give the
    same path, and the target directory is created on every call.
    """

    def resolve(
        self,
        source_path: Path,
        project_root: Path,
        language: SourceLanguage,
        build_system: BuildSystem,
        is_multi_target: bool = False,
    ) -> TestFileTarget:
        """
        Resolve the test file for ``source_path``.

        Args:
            source_path: Absolute path of the source file under edit
            project_root: Project root directory
            language: Language of the source file
            build_system: Detected build system
            is_multi_target: Whether the project is a multiplatform layout

        Returns:
            TestFileTarget with the absolute path and any existing content

        Raises:
            FilesystemError: If the test directory cannot be created
        """
        source_path = Path(source_path)
        project_root = Path(project_root)

        test_dir = self.test_directory(
            source_path, project_root, language, build_system, is_multi_target
        )
        try:
            test_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create test directory {test_dir}: {e}") from e

        test_file = (test_dir / self.test_file_name(source_path, language)).absolute()
        logger.debug("Resolved test file %s", test_file)

        return TestFileTarget(
            absolute_path=test_file, existing_content=_read_existing(test_file)
        )

    def test_directory(
        self,
        source_path: Path,
        project_root: Path,
        language: SourceLanguage,
        build_system: BuildSystem,
        is_multi_target: bool = False,
    ) -> Path:
        """Compute the test directory without touching the filesystem."""
        if build_system == BuildSystem.BAZEL:
            # Package-colocated, independent of src/main conventions.
            return Path(source_path).parent / GENERATED_DIR

        if is_multi_target and language == SourceLanguage.KOTLIN:
            source_set = self.test_source_set(source_path)
            return (
                Path(project_root)
                / "shared"
                / "src"
                / source_set
                / language.source_dir
                / GENERATED_DIR
            )

        return self._module_test_directory(source_path, project_root, language)

    @staticmethod
    def test_file_name(source_path: Path, language: SourceLanguage) -> str:
        """``Foo.kt`` becomes ``FooTest.kt``."""
        name = Path(source_path).name
        suffix = f".{language.extension}"
        base = name[: -len(suffix)] if name.endswith(suffix) else Path(name).stem
        return f"{base}{language.test_suffix}.{language.extension}"

    @staticmethod
    def test_source_set(source_path: Path) -> str:
        """Map the multiplatform source set of ``source_path`` to its test variant."""
        normalized = _normalize(source_path)
        for main_tag, test_tag in SOURCE_SET_TAGS:
            if f"/{main_tag}/" in normalized:
                return test_tag
        logger.debug(
            "Could not determine source set from path %s, using %s",
            source_path,
            DEFAULT_TEST_SOURCE_SET,
        )
        return DEFAULT_TEST_SOURCE_SET

    @staticmethod
    def _module_test_directory(
        source_path: Path, project_root: Path, language: SourceLanguage
    ) -> Path:
        test_subpath = Path("src") / "test" / language.source_dir / GENERATED_DIR
        relative = _relative_to_root(source_path, project_root)
        marker = f"/src/main/{language.source_dir}/"

        index = f"/{relative}".find(marker)
        if index < 0:
            logger.debug(
                "No %s source root in %s, using project root", marker, source_path
            )
            return Path(project_root) / test_subpath

        # index is into the "/"-prefixed path
        module_path = relative[: max(index - 1, 0)]
        module_dir = Path(project_root) / module_path if module_path else Path(project_root)
        logger.debug("Module path for %s: '%s'", source_path, module_path)
        return module_dir / test_subpath


def _normalize(path: Path | str) -> str:
    return str(path).replace("\\", "/")


def _relative_to_root(source_path: Path, project_root: Path) -> str:
    """Root-relative POSIX path, or the full path for files outside the root."""
    source = _normalize(source_path)
    root = _normalize(project_root).rstrip("/")
    if root and source.startswith(root + "/"):
        return source[len(root) + 1 :]
    return str(PurePosixPath(source))


def _read_existing(test_file: Path) -> str | None:
    if not test_file.is_file():
        return None
    try:
        return test_file.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to read existing test file %s: %s", test_file, e)
        return None
