"""
Writer adapter that overwrites the resolved test file.

The generated text is written exactly as received: no formatting pass,
no newline translation, no merging. Extending an existing file is the
model's job; the prompt carries the current content.
"""

import logging
from pathlib import Path

from ...domain.models import FilesystemError, TestFileTarget

logger = logging.getLogger(__name__)


class TestFileWriter:
    """Writes generated tests to disk."""

    __test__ = False  # not a pytest test class

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def write(self, target: TestFileTarget | Path, content: str) -> Path:
        """
        Overwrite the target file with ``content``.

        Args:
            target: Resolved destination (or a plain path)
            content: Generated test text, written verbatim

        Returns:
            Absolute path of the written file

        Raises:
            FilesystemError: If the directory or the file cannot be written
        """
        path = target.absolute_path if isinstance(target, TestFileTarget) else Path(target)
        path = path.absolute()

        try:
            data = content.encode(self.encoding)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to write test file {path}: {e}")
            raise FilesystemError(f"Failed to write test file {path}: {e}") from e

        logger.info(f"Wrote {len(content)} chars to {path}")
        return path
