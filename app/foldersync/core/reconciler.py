"""One-way directory reconciliation.

This module provides the Reconciler, which mirrors a source directory
tree onto a target directory tree one level at a time: files first,
then subdirectories, recursing depth-first into directories present on
both sides.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from functools import partial
from pathlib import Path, PurePosixPath

from foldersync.core.comparer import ContentComparer
from foldersync.core.copier import TreeCopier, copy_new_file
from foldersync.core.errors import SyncOperationError
from foldersync.core.mapper import DirectoryMapper
from foldersync.models.entry import Entry, EntryKind, MappedPair
from foldersync.models.report import SyncAction, SyncActionType, SyncReport

ComparerFactory = Callable[[Path, Path], ContentComparer]

# (action, kind) -> (verb, success message, failure message)
_MESSAGES: dict[tuple[SyncActionType, EntryKind], tuple[str, str, str]] = {
    (SyncActionType.COPY, EntryKind.FILE): (
        "copying",
        "Copied %s from source to target",
        "Failed copying %s from source to target: %s",
    ),
    (SyncActionType.REPLACE, EntryKind.FILE): (
        "replacing",
        "Replaced %s in target with source file",
        "Failed replacing %s in target with source file: %s",
    ),
    (SyncActionType.DELETE, EntryKind.FILE): (
        "removing",
        "Removed %s from target",
        "Failed removing %s from target: %s",
    ),
    (SyncActionType.COPY, EntryKind.DIRECTORY): (
        "copying",
        "Copied %s and its contents from source to target",
        "Failed copying %s and its contents from source to target: %s",
    ),
    (SyncActionType.DELETE, EntryKind.DIRECTORY): (
        "removing",
        "Removed %s and its contents from target",
        "Failed removing %s and its contents from target: %s",
    ),
}

class Reconciler:
    """Mirrors a source tree onto a target tree.

    The reconciler holds no state between calls: every pass lists both
    trees afresh, so a pass always acts on the current filesystem. The
    first failing copy or delete is logged and raised, aborting the pass
    and leaving the target partially synchronized.

    Example:
        >>> reconciler = Reconciler()
        >>> report = reconciler.sync_contents(Path("/data/src"), Path("/backup/dst"))
        >>> print(report.copied, report.replaced, report.deleted)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        comparer: ComparerFactory = ContentComparer,
        mapper: DirectoryMapper | None = None,
        copier: TreeCopier | None = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the Reconciler.

        Args:
            logger: Sink for action and failure messages. Defaults to
                the ``foldersync.core.reconciler`` logger.
            comparer: Factory building a comparer for two file paths.
            mapper: Directory mapper, a fresh one by default.
            copier: Subtree copier, a fresh one by default.
            dry_run: If True, report what would change without changing it.
        """
        self._logger = logger or logging.getLogger(__name__)
        self._comparer = comparer
        self._mapper = mapper or DirectoryMapper()
        self._copier = copier or TreeCopier()
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def sync_contents(self, source_dir: Path, target_dir: Path) -> SyncReport:
        """Synchronize the target directory with the source directory.

        Args:
            source_dir: Root of the tree to mirror.
            target_dir: Root of the tree to update.

        Returns:
            SyncReport listing every action taken (or planned in dry-run).

        Raises:
            ListingError: If a directory cannot be listed.
            SyncOperationError: If a compare, copy, replace or delete fails.
        """
        source_dir = Path(source_dir)
        target_dir = Path(target_dir)
        self._logger.info("Starting synchronization: %s to %s", source_dir, target_dir)

        actions: list[SyncAction] = []
        self._sync_level(source_dir, target_dir, PurePosixPath(), actions)

        return SyncReport(
            source=str(source_dir),
            target=str(target_dir),
            actions=tuple(actions),
            dry_run=self._dry_run,
        )

    def _sync_level(
        self,
        source_dir: Path,
        target_dir: Path,
        relative: PurePosixPath,
        actions: list[SyncAction],
    ) -> None:
        """Synchronize one directory level, then recurse.

        All file actions of the level complete before any directory
        action starts. Each phase lists both directories afresh.
        """
        self._logger.debug("Synchronizing level: %s", relative.as_posix() or ".")

        claimed = self._sync_files(source_dir, target_dir, relative, actions)
        self._sync_directories(source_dir, target_dir, relative, actions, claimed)

    def _sync_files(
        self,
        source_dir: Path,
        target_dir: Path,
        relative: PurePosixPath,
        actions: list[SyncAction],
    ) -> set[str]:
        """Run the file phase for one level.

        Returns:
            Names of target directories replaced by a source file.
        """
        pairs = self._mapper.map_files(source_dir, target_dir)
        claimed: set[str] = set()

        for base, source, target in _in_both(pairs):
            name = _relative_name(relative, base)
            # A dangling link in the target has nothing to compare against
            if target.exists and self._files_equal(source, target, name):
                continue
            self._apply(
                actions,
                SyncActionType.REPLACE,
                EntryKind.FILE,
                name,
                partial(_replace_file, source.path, target.path),
            )

        for base, source in _source_only(pairs):
            name = _relative_name(relative, base)
            destination = target_dir / base

            if destination.is_dir():
                # Target holds a directory (or a link to one) under the name of a source file
                self._logger.debug("Directory %s in target is replaced by a file", name)
                claimed.add(base)
                self._apply(
                    actions,
                    SyncActionType.REPLACE,
                    EntryKind.FILE,
                    name,
                    partial(_replace_directory_with_file, source.path, destination),
                )
                continue

            self._apply(
                actions,
                SyncActionType.COPY,
                EntryKind.FILE,
                name,
                partial(copy_new_file, source.path, destination),
            )

        for base, target in _target_only(pairs):
            self._apply(
                actions,
                SyncActionType.DELETE,
                EntryKind.FILE,
                _relative_name(relative, base),
                target.path.unlink,
            )

        return claimed

    def _sync_directories(
        self,
        source_dir: Path,
        target_dir: Path,
        relative: PurePosixPath,
        actions: list[SyncAction],
        claimed: set[str],
    ) -> None:
        """Run the directory phase for one level."""
        pairs = self._mapper.map_directories(source_dir, target_dir)

        for base, source, target in _in_both(pairs):
            self._sync_level(source.path, target.path, relative / base, actions)

        for base, source in _source_only(pairs):
            self._apply(
                actions,
                SyncActionType.COPY,
                EntryKind.DIRECTORY,
                _relative_name(relative, base),
                partial(self._copier.copy_tree, source.path, target_dir / base),
            )

        for base, target in _target_only(pairs):
            if base in claimed:
                # Dry-run only: the file phase already planned this removal
                continue
            self._apply(
                actions,
                SyncActionType.DELETE,
                EntryKind.DIRECTORY,
                _relative_name(relative, base),
                partial(_remove_entry, target.path),
            )

    def _files_equal(self, source: Entry, target: Entry, name: str) -> bool:
        """Compare a file present on both sides.

        Raises:
            SyncOperationError: If either file vanished or cannot be read.
        """
        try:
            return self._comparer(source.path, target.path).compare()
        except OSError as e:
            self._logger.error("Failed comparing %s with source file: %s", name, e)
            raise SyncOperationError("comparing", name, str(e)) from e

    def _apply(
        self,
        actions: list[SyncAction],
        action_type: SyncActionType,
        kind: EntryKind,
        name: str,
        operation: Callable[[], object],
    ) -> None:
        """Run one mutation, log it and record it.

        Args:
            actions: Accumulator for the pass report.
            action_type: Copy, replace or delete.
            kind: File or directory.
            name: Relative path of the affected entry.
            operation: Callable performing the filesystem mutation.

        Raises:
            SyncOperationError: If the operation raises an OSError.
        """
        verb, done_message, failure_message = _MESSAGES[(action_type, kind)]

        if self._dry_run:
            self._logger.info("Dry-run: would %s %s %s", action_type.value, kind.value, name)
        else:
            try:
                operation()
            except OSError as e:
                self._logger.error(failure_message, name, e)
                raise SyncOperationError(verb, name, str(e)) from e
            self._logger.info(done_message, name)

        actions.append(
            SyncAction(action_type=action_type, kind=kind, path=name, dry_run=self._dry_run)
        )


def _in_both(pairs: list[MappedPair]) -> list[tuple[str, Entry, Entry]]:
    return [
        (p.name, p.source, p.target)
        for p in pairs
        if p.source is not None and p.target is not None
    ]


def _source_only(pairs: list[MappedPair]) -> list[tuple[str, Entry]]:
    return [(p.name, p.source) for p in pairs if p.source is not None and p.target is None]


def _target_only(pairs: list[MappedPair]) -> list[tuple[str, Entry]]:
    return [(p.name, p.target) for p in pairs if p.target is not None and p.source is None]


def _relative_name(relative: PurePosixPath, name: str) -> str:
    return (relative / name).as_posix()


def _remove_entry(path: Path) -> None:
    """Delete a target entry without following symlinks."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _replace_file(source: Path, destination: Path) -> None:
    # Links are replaced, never written through
    if destination.is_symlink():
        destination.unlink()
    shutil.copy2(source, destination)


def _replace_directory_with_file(source: Path, destination: Path) -> None:
    _remove_entry(destination)
    copy_new_file(source, destination)
