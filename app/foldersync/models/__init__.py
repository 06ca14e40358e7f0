"""Data models for foldersync.

This module exports the core data structures used throughout the application.
"""

from foldersync.models.entry import Entry, EntryKind, MappedPair, PairStatus
from foldersync.models.report import SyncAction, SyncActionType, SyncReport

__all__ = [
    "Entry",
    "EntryKind",
    "MappedPair",
    "PairStatus",
    "SyncAction",
    "SyncActionType",
    "SyncReport",
]
