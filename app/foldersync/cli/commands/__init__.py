"""CLI commands for foldersync.

This package contains all subcommand implementations.
"""

from foldersync.cli.commands import config, run, sync

__all__ = ["config", "run", "sync"]
