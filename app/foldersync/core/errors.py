"""Exception hierarchy for foldersync.

Configuration errors are fatal at startup. Sync errors abort the
current pass only; the next scheduled pass starts from scratch.
"""

from pathlib import Path


class FolderSyncError(Exception):
    """Base exception for all foldersync errors."""


class ConfigurationError(FolderSyncError):
    """Raised when required settings are missing or roots do not exist."""


class SettingsError(FolderSyncError):
    """Base exception for settings file errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when an explicitly requested settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when a settings file cannot be parsed."""


class SyncError(FolderSyncError):
    """Base exception for failures during a synchronization pass."""


class ListingError(SyncError):
    """Raised when a directory cannot be enumerated."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot list directory {path}: {reason}")


class DuplicateEntryError(SyncError):
    """Raised when one directory listing yields the same name twice."""

    def __init__(self, directory: Path, name: str) -> None:
        self.directory = directory
        self.name = name
        super().__init__(f"Duplicate entry name '{name}' in {directory}")


class SyncOperationError(SyncError):
    """Raised when a single copy, replace or delete fails.

    Attributes:
        action: Description of the failed operation (e.g. "copying").
        name: Relative path of the entry that failed.
        reason: Underlying error text.
    """

    def __init__(self, action: str, name: str, reason: str) -> None:
        self.action = action
        self.name = name
        self.reason = reason
        super().__init__(f"Failed {action} {name}: {reason}")
