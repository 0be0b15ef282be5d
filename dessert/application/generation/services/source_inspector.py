"""
Source inspection helpers for the paused file.

Reads the source text and pulls out the few facts the prompt needs: the
language, the declared package and the signature of the method enclosing
the paused line.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ....domain.models import SourceLanguage, UnsupportedLanguageError

logger = logging.getLogger(__name__)

METHOD_SEARCH_LINES = 30
UNKNOWN_METHOD = "unknown"

_PACKAGE_PATTERN = re.compile(r"package\s+([\w.]+)")

_METHOD_PATTERNS: dict[SourceLanguage, re.Pattern[str]] = {
    SourceLanguage.KOTLIN: re.compile(
        r"(private\s+|public\s+|internal\s+)?fun\s+(\w+)\s*\([^)]*\)(\s*:\s*\w+)?"
    ),
    SourceLanguage.JAVA: re.compile(
        r"^((?:private|public|protected|static|final|synchronized|abstract)\s+)*"
        r"(?!(?:return|new|throw|else)\b)[\w<>\[\],.?]+\s+(\w+)\s*\([^)]*\)"
    ),
    SourceLanguage.SCALA: re.compile(
        r"(private\s+|protected\s+)?def\s+(\w+)\s*\([^)]*\)(\s*:\s*\w+)?"
    ),
}


class SourceInspector:
    """Static helpers over the paused source file."""

    @staticmethod
    def detect_language(file_name: str) -> SourceLanguage:
        """
        Detect the source language from a file name.

        Raises:
            UnsupportedLanguageError: For anything but .kt, .java and .scala
        """
        language = SourceLanguage.from_file_name(file_name)
        if language is None:
            raise UnsupportedLanguageError(
                "Unsupported file type. Only Kotlin (.kt), Java (.java), "
                "and Scala (.scala) files are supported."
            )
        logger.debug("Detected source language %s for %s", language.name, file_name)
        return language

    @staticmethod
    def read_source(path: Path | None) -> str:
        """Read the source file, degrading to empty text when unreadable."""
        if path is None:
            return ""
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Failed to read source file %s: %s", path, e)
            return ""

    @staticmethod
    def extract_package_name(text: str) -> str:
        """Return the first declared package, or an empty string."""
        match = _PACKAGE_PATTERN.search(text)
        return match.group(1) if match else ""

    @staticmethod
    def find_method_signature(text: str, line: int, language: SourceLanguage) -> str:
        """
        Find the declaration of the method enclosing ``line``.

        Scans upwards from the paused line over at most METHOD_SEARCH_LINES
        lines and returns the first declaration-looking match.

        Args:
            text: Full source text
            line: 1-based paused line
            language: Language of the source

        Returns:
            The matched signature text, or "unknown"
        """
        lines = text.splitlines()
        if not lines:
            return UNKNOWN_METHOD

        start = min(max(line - 1, 0), len(lines) - 1)
        stop = max(0, start - METHOD_SEARCH_LINES)
        pattern = _METHOD_PATTERNS[language]

        for index in range(start, stop - 1, -1):
            match = pattern.search(lines[index].strip())
            if match:
                signature = match.group(0).strip()
                logger.debug("Found %s method signature: %s", language.name, signature)
                return signature

        return UNKNOWN_METHOD
