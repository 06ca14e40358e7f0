"""Recursive directory duplication.

Copies whole subtrees that exist only in the source. Destinations are
expected to be new: finding a file already in place is an error.
"""

import errno
import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_new_file(source: Path, destination: Path) -> None:
    """Copy a file to a destination that must not exist yet.

    Args:
        source: File to copy.
        destination: Path of the new file.

    Raises:
        FileExistsError: If something already exists at destination.
        OSError: If the copy itself fails.
    """
    if os.path.lexists(destination):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(destination))
    shutil.copy2(source, destination)


class TreeCopier:
    """Duplicates a directory subtree into a new destination.

    Errors (permission denied, disk full, name too long) propagate to
    the caller without retry.
    """

    def copy_tree(self, source: Path, destination: Path, recursive: bool = True) -> int:
        """Copy a directory and, optionally, all of its subdirectories.

        Args:
            source: Directory to duplicate.
            destination: Directory to create.
            recursive: If True, descend into subdirectories down to the leaves.

        Returns:
            Number of files copied.

        Raises:
            FileExistsError: If a file already exists under destination.
            OSError: On any other filesystem failure.
        """
        source = Path(source)
        destination = Path(destination)

        subdirectories: list[Path] = []
        files: list[Path] = []
        for child in sorted(source.iterdir()):
            if child.is_dir():
                subdirectories.append(child)
            elif child.is_file():
                files.append(child)

        destination.mkdir(parents=True, exist_ok=True)

        copied = 0
        for file in files:
            copy_new_file(file, destination / file.name)
            copied += 1

        if recursive:
            for subdirectory in subdirectories:
                copied += self.copy_tree(subdirectory, destination / subdirectory.name, True)

        logger.debug("Copied %d file(s) from %s to %s", copied, source, destination)
        return copied
