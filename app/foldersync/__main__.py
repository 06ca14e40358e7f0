"""Allow running foldersync as ``python -m foldersync``."""

from foldersync.cli.main import app

if __name__ == "__main__":
    app()
