"""Name-keyed mapping of two directories' immediate children.

The DirectoryMapper lists one level of a source and a target directory
and pairs their files (and, separately, their subdirectories) by base
name, so every name lands in exactly one of: present in both, source
only, target only.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from foldersync.core.errors import DuplicateEntryError, ListingError
from foldersync.models.entry import Entry, EntryKind, MappedPair

logger = logging.getLogger(__name__)


class DirectoryMapper:
    """Builds name-keyed pairs between a source and a target directory.

    Only immediate children are listed (no recursion). Every call lists
    both directories afresh. Pairs are sorted by name so log output is
    stable; correctness never depends on order.
    """

    def map_files(self, source: Path, target: Path) -> list[MappedPair]:
        """Pair the immediate child files of two directories.

        Args:
            source: Source directory.
            target: Target directory.

        Returns:
            One MappedPair per file name found on either side.

        Raises:
            ListingError: If either directory cannot be listed.
            DuplicateEntryError: If a listing yields the same name twice.
        """
        return self._map(source, target, EntryKind.FILE)

    def map_directories(self, source: Path, target: Path) -> list[MappedPair]:
        """Pair the immediate subdirectories of two directories.

        Args:
            source: Source directory.
            target: Target directory.

        Returns:
            One MappedPair per subdirectory name found on either side.

        Raises:
            ListingError: If either directory cannot be listed.
            DuplicateEntryError: If a listing yields the same name twice.
        """
        return self._map(source, target, EntryKind.DIRECTORY)

    def _map(self, source: Path, target: Path, kind: EntryKind) -> list[MappedPair]:
        source_lookup = _build_lookup(source, self._list(source), kind)
        target_lookup = _build_lookup(target, self._list(target, keep_dangling=True), kind)

        names = sorted(source_lookup.keys() | target_lookup.keys())
        return [
            MappedPair(
                name=name,
                source=source_lookup.get(name),
                target=target_lookup.get(name),
            )
            for name in names
        ]

    def _list(self, directory: Path, *, keep_dangling: bool = False) -> list[Entry]:
        """List the immediate children of a directory.

        Special files (sockets, FIFOs, devices) are skipped. Dangling
        symlinks are skipped too, unless ``keep_dangling`` is set: the
        target side keeps them as file entries so they get removed or
        replaced like any stale file.

        Args:
            directory: Directory to list.
            keep_dangling: Report dangling symlinks instead of skipping them.

        Returns:
            Entries for the files and subdirectories found.

        Raises:
            ListingError: If the directory or one of its entries cannot be read.
        """
        entries: list[Entry] = []
        try:
            with os.scandir(directory) as it:
                for dir_entry in it:
                    try:
                        entries.append(Entry.from_dir_entry(dir_entry))
                    except FileNotFoundError:
                        if keep_dangling:
                            entries.append(Entry.from_link(dir_entry))
                        else:
                            logger.warning("Skipping dangling link: %s", dir_entry.path)
                    except ValueError:
                        logger.debug("Skipping special file: %s", dir_entry.path)
        except OSError as e:
            raise ListingError(Path(directory), e.strerror or str(e)) from e
        return entries


def _build_lookup(directory: Path, entries: list[Entry], kind: EntryKind) -> dict[str, Entry]:
    lookup: dict[str, Entry] = {}
    for entry in entries:
        if entry.kind != kind:
            continue
        if entry.name in lookup:
            raise DuplicateEntryError(Path(directory), entry.name)
        lookup[entry.name] = entry
    return lookup
