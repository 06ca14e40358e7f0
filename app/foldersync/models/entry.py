"""Filesystem entry models for directory mapping.

This module defines the data structures used to describe the immediate
children of a source and a target directory, and the name-keyed pairs
that link them during a synchronization pass.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Type of filesystem entry.

    Attributes:
        FILE: Regular file (or symlink to one).
        DIRECTORY: Directory (or symlink to one).
    """

    FILE = "file"
    DIRECTORY = "directory"


class PairStatus(str, Enum):
    """Classification of a mapped pair.

    Attributes:
        BOTH: Present in source and target. Action: compare or recurse.
        SOURCE_ONLY: Present only in source. Action: copy.
        TARGET_ONLY: Present only in target. Action: delete.
    """

    BOTH = "both"
    SOURCE_ONLY = "source_only"
    TARGET_ONLY = "target_only"


@dataclass(frozen=True, slots=True)
class Entry:
    """A file or directory read from the filesystem.

    Entries are snapshots taken while listing a directory. They are
    rebuilt on every pass and never cached across passes.

    Attributes:
        path: Absolute path of the entry.
        kind: File or directory.
        size: Byte length for files, None for directories.
    """

    path: Path
    kind: EntryKind
    size: int | None = None

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if self.kind == EntryKind.FILE and self.size is None:
            msg = f"File entry requires a size: {self.path}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Base name of the entry."""
        return self.path.name

    @property
    def exists(self) -> bool:
        """Check whether the entry still exists on disk."""
        if self.kind == EntryKind.DIRECTORY:
            return self.path.is_dir()
        return self.path.is_file()

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    @classmethod
    def from_path(cls, path: Path) -> Entry:
        """Build an entry by stat-ing a path.

        Args:
            path: Path to a file or directory.

        Returns:
            Entry describing the path.

        Raises:
            FileNotFoundError: If the path does not exist.
            ValueError: If the path is neither a file nor a directory.
        """
        st = path.stat()
        return cls._from_stat(path.absolute(), st)

    @classmethod
    def from_dir_entry(cls, dir_entry: os.DirEntry[str]) -> Entry:
        """Build an entry from an ``os.scandir`` result.

        Symbolic links are resolved, so a link to a directory is
        reported as a directory.

        Args:
            dir_entry: Result yielded by ``os.scandir``.

        Returns:
            Entry describing the directory entry.
        """
        st = dir_entry.stat(follow_symlinks=True)
        return cls._from_stat(Path(dir_entry.path).absolute(), st)

    @classmethod
    def from_link(cls, dir_entry: os.DirEntry[str]) -> Entry:
        """Build a file entry for a symbolic link itself.

        The link is not followed, so this works for dangling links, which
        are then handled (and removed) like plain files.

        Args:
            dir_entry: Symbolic link yielded by ``os.scandir``.

        Returns:
            File entry sized by the link itself.
        """
        st = dir_entry.stat(follow_symlinks=False)
        return cls(path=Path(dir_entry.path).absolute(), kind=EntryKind.FILE, size=st.st_size)

    @classmethod
    def _from_stat(cls, path: Path, st: os.stat_result) -> Entry:
        if stat.S_ISDIR(st.st_mode):
            return cls(path=path, kind=EntryKind.DIRECTORY)
        if stat.S_ISREG(st.st_mode):
            return cls(path=path, kind=EntryKind.FILE, size=st.st_size)
        msg = f"Unsupported entry type: {path}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class MappedPair:
    """Correspondence between a name and its entries on each side.

    At least one side is always present; the classification follows
    from which sides are populated.

    Attributes:
        name: Base name shared by both sides.
        source: Entry in the source directory, None if absent.
        target: Entry in the target directory, None if absent.
    """

    name: str
    source: Entry | None = None
    target: Entry | None = None

    def __post_init__(self) -> None:
        """Validate pair data after initialization."""
        if not self.name:
            msg = "Name cannot be empty"
            raise ValueError(msg)
        if self.source is None and self.target is None:
            msg = f"Mapped pair '{self.name}' has neither a source nor a target entry"
            raise ValueError(msg)

    @property
    def status(self) -> PairStatus:
        """Classify the pair by which sides are present."""
        if self.source is not None and self.target is not None:
            return PairStatus.BOTH
        if self.source is not None:
            return PairStatus.SOURCE_ONLY
        return PairStatus.TARGET_ONLY
