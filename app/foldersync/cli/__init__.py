"""CLI package for foldersync.

This package contains the Typer application and all subcommands.
"""

from foldersync.cli.main import app

__all__ = ["app"]
