"""Synchronization action and report models.

This module defines data structures for the mutations performed (or
planned, in dry-run mode) during a synchronization pass.
"""

from dataclasses import dataclass
from enum import Enum

from foldersync.models.entry import EntryKind


class SyncActionType(Enum):
    """Type of mutation applied to the target tree.

    Attributes:
        COPY: Entry existed only in source and was copied to target.
        REPLACE: Target entry differed from source and was overwritten.
        DELETE: Entry existed only in target and was removed.
    """

    COPY = "copy"
    REPLACE = "replace"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class SyncAction:
    """A single mutation of the target tree.

    Attributes:
        action_type: The kind of mutation (copy, replace, or delete).
        kind: Whether a file or a whole directory was affected.
        path: Path relative to the synchronization root, using "/" separators.
        dry_run: True if the mutation was only planned, not applied.
    """

    action_type: SyncActionType
    kind: EntryKind
    path: str
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.path:
            msg = "Action path cannot be empty"
            raise ValueError(msg)

    @property
    def is_copy(self) -> bool:
        """Check if this is a copy action."""
        return self.action_type == SyncActionType.COPY

    @property
    def is_replace(self) -> bool:
        """Check if this is a replace action."""
        return self.action_type == SyncActionType.REPLACE

    @property
    def is_delete(self) -> bool:
        """Check if this is a delete action."""
        return self.action_type == SyncActionType.DELETE


@dataclass(frozen=True, slots=True)
class SyncReport:
    """Result of one synchronization pass.

    Attributes:
        source: Source root that was mirrored.
        target: Target root that was updated.
        actions: Mutations in the order they were applied.
        dry_run: True if no mutation was applied.
    """

    source: str
    target: str
    actions: tuple[SyncAction, ...] = ()
    dry_run: bool = False

    @property
    def copied(self) -> int:
        """Number of entries copied from source."""
        return sum(1 for a in self.actions if a.is_copy)

    @property
    def replaced(self) -> int:
        """Number of target entries overwritten."""
        return sum(1 for a in self.actions if a.is_replace)

    @property
    def deleted(self) -> int:
        """Number of target entries removed."""
        return sum(1 for a in self.actions if a.is_delete)

    @property
    def total_changes(self) -> int:
        return len(self.actions)

    @property
    def is_in_sync(self) -> bool:
        """Check if the pass found nothing to change.

        Returns:
            True if no actions were taken or planned.
        """
        return not self.actions

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the report.
        """
        return {
            "source": self.source,
            "target": self.target,
            "dry_run": self.dry_run,
            "in_sync": self.is_in_sync,
            "summary": {
                "copied": self.copied,
                "replaced": self.replaced,
                "deleted": self.deleted,
                "total": self.total_changes,
            },
            "actions": [
                {
                    "action": a.action_type.value,
                    "kind": a.kind.value,
                    "path": a.path,
                }
                for a in self.actions
            ],
        }
