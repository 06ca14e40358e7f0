"""Path management for foldersync.

This module provides the settings location, following the XDG Base
Directory Specification, and the default log file location.

Defaults:
- Config: ~/.config/foldersync/config.toml
- Log file: ./SyncLogs/default.log (relative to the working directory)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "foldersync"

DEFAULT_LOG_DIR_NAME = "SyncLogs"
DEFAULT_LOG_FILE_NAME = "default.log"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/foldersync/ (or XDG_CONFIG_HOME/foldersync/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the default settings file path.

    Returns:
        Path to ~/.config/foldersync/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_default_log_path() -> Path:
    """Get the default log file path.

    Resolved against the current working directory at call time.

    Returns:
        Path to <cwd>/SyncLogs/default.log.
    """
    return Path.cwd() / DEFAULT_LOG_DIR_NAME / DEFAULT_LOG_FILE_NAME


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_log_dir(log_file: Path) -> Path:
    """Create the parent directory of a log file if it doesn't exist.

    Args:
        log_file: Path of the log file.

    Returns:
        Path to the log directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(log_file.parent, "log")
