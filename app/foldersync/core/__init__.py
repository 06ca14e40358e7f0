"""Synchronization engine and service plumbing.

The engine (comparer, mapper, copier, reconciler) mirrors one tree onto
another; settings, logging and the worker host it as a scheduled service.
"""

from foldersync.core.comparer import ContentComparer
from foldersync.core.copier import TreeCopier, copy_new_file
from foldersync.core.errors import (
    ConfigurationError,
    DuplicateEntryError,
    FolderSyncError,
    ListingError,
    SettingsError,
    SettingsNotFoundError,
    SettingsParseError,
    SyncError,
    SyncOperationError,
)
from foldersync.core.mapper import DirectoryMapper
from foldersync.core.reconciler import Reconciler

__all__ = [
    "ConfigurationError",
    "ContentComparer",
    "DirectoryMapper",
    "DuplicateEntryError",
    "FolderSyncError",
    "ListingError",
    "Reconciler",
    "SettingsError",
    "SettingsNotFoundError",
    "SettingsParseError",
    "SyncError",
    "SyncOperationError",
    "TreeCopier",
    "copy_new_file",
]
