"""Byte-for-byte file content comparison.

Provides the ContentComparer used by the reconciler to decide whether
a file present in both trees must be overwritten.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Read size for streaming comparison (64 KiB)
DEFAULT_CHUNK_SIZE = 64 * 1024


class ContentComparer:
    """Compares the contents of two existing files.

    Checks are ordered by cost:
    1. Different lengths: not equal, nothing is read.
    2. Same absolute path (case-insensitive): equal, nothing is read.
    3. Stream both files in fixed-size chunks and compare every byte,
       including a trailing chunk shorter than ``chunk_size``.

    Example:
        >>> comparer = ContentComparer(Path("src/a.txt"), Path("dst/a.txt"))
        >>> if not comparer.compare():
        ...     shutil.copy2("src/a.txt", "dst/a.txt")
    """

    def __init__(
        self,
        first: Path,
        second: Path,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Initialize the comparer.

        Args:
            first: Path of the source file.
            second: Path of the target file.
            chunk_size: Number of bytes read from each file per step.

        Raises:
            FileNotFoundError: If either path is not an existing file.
            ValueError: If chunk_size is not positive.
        """
        if chunk_size <= 0:
            msg = f"Chunk size must be positive, got {chunk_size}"
            raise ValueError(msg)

        self.first = Path(first).absolute()
        self.second = Path(second).absolute()
        self.chunk_size = chunk_size
        self._ensure_files_exist()

    def compare(self) -> bool:
        """Check whether both files have identical contents.

        Returns:
            True if the files are the same, False otherwise.
        """
        if self._is_different_length():
            return False
        if self._is_same_file():
            return True
        return self._contents_equal()

    def _contents_equal(self) -> bool:
        """Compare both files chunk by chunk."""
        with open(self.first, "rb") as f1, open(self.second, "rb") as f2:
            while True:
                chunk1 = f1.read(self.chunk_size)
                chunk2 = f2.read(self.chunk_size)
                if chunk1 != chunk2:
                    logger.debug("Contents differ: %s vs %s", self.first, self.second)
                    return False
                if not chunk1:
                    return True

    def _is_same_file(self) -> bool:
        """Check whether both paths name the same file, ignoring case."""
        return str(self.first).casefold() == str(self.second).casefold()

    def _is_different_length(self) -> bool:
        return self.first.stat().st_size != self.second.stat().st_size

    def _ensure_files_exist(self) -> None:
        for path in (self.first, self.second):
            if not path.is_file():
                msg = f"File does not exist: {path}"
                raise FileNotFoundError(msg)
