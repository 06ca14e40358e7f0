"""Synchronization settings and their TOML file.

This module provides the settings model consumed by the scheduled
worker and the functions that load it from, and save it to, a TOML
file. Command-line options override file values.

Settings are stored in ~/.config/foldersync/config.toml by default:

    source_path = "/data/photos"
    target_path = "/mnt/backup/photos"
    sync_interval = 600
    log_file_path = "/var/log/foldersync/sync.log"
"""

import os
import tomllib
from datetime import timedelta
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from foldersync.core.errors import (
    ConfigurationError,
    SettingsError,
    SettingsNotFoundError,
    SettingsParseError,
)
from foldersync.core.paths import get_default_log_path, get_settings_path

DEFAULT_SYNC_INTERVAL = timedelta(minutes=10)

_REQUIRED = ("source_path", "target_path")


class SyncSettings(BaseModel):
    """Settings for the scheduled synchronization worker.

    Attributes:
        source_path: Root of the tree to mirror. Must exist at startup.
        target_path: Root of the tree to update. Must exist at startup.
        sync_interval: Delay between the end of one pass and the start of
            the next (default: 10 minutes).
        log_file_path: Log file (default: <cwd>/SyncLogs/default.log).
        stop_on_error: Stop the worker when a pass fails instead of
            waiting for the next pass.
    """

    model_config = ConfigDict(extra="forbid")

    source_path: Annotated[Path, Field(description="Directory to mirror")]
    target_path: Annotated[Path, Field(description="Directory kept identical to source")]
    sync_interval: Annotated[
        timedelta,
        Field(description="Delay between passes (seconds or ISO 8601 duration)"),
    ] = DEFAULT_SYNC_INTERVAL
    log_file_path: Annotated[
        Path,
        Field(default_factory=get_default_log_path, description="Log file path"),
    ]
    stop_on_error: Annotated[
        bool,
        Field(description="Stop the worker after a failed pass"),
    ] = False

    @field_validator("sync_interval")
    @classmethod
    def validate_interval(cls, v: timedelta) -> timedelta:
        """Reject zero or negative intervals."""
        if v.total_seconds() <= 0:
            msg = f"sync_interval must be positive, got {v}"
            raise ValueError(msg)
        return v


def load_settings(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> SyncSettings:
    """Load settings from a TOML file and apply overrides.

    When ``path`` is None the default settings file is read if it
    exists; a missing default file is not an error as long as the
    overrides supply the required values. An explicit ``path`` must exist.

    Args:
        path: Settings file to read. If None, uses the default path.
        overrides: Values taking precedence over the file. None values
            are ignored.

    Returns:
        Validated SyncSettings.

    Raises:
        SettingsNotFoundError: If an explicit settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        ConfigurationError: If source_path or target_path is missing.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    data: dict[str, Any] = {}
    if settings_path.exists():
        data = _read_toml(settings_path)
    elif path is not None:
        raise SettingsNotFoundError(f"Settings file not found: {settings_path}")

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    missing = [key for key in _REQUIRED if not data.get(key)]
    if missing:
        raise ConfigurationError(f"{' and '.join(missing)} must be provided")

    try:
        return SyncSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}") from e


def save_settings(settings: SyncSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The settings to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def settings_to_dict(settings: SyncSettings) -> dict[str, Any]:
    """Convert settings to a dictionary suitable for TOML serialization.

    Paths become strings and the interval becomes a number of seconds.

    Args:
        settings: The settings to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    seconds = settings.sync_interval.total_seconds()
    return {
        "source_path": str(settings.source_path),
        "target_path": str(settings.target_path),
        "sync_interval": int(seconds) if seconds.is_integer() else seconds,
        "log_file_path": str(settings.log_file_path),
        "stop_on_error": settings.stop_on_error,
    }


def validate_roots(settings: SyncSettings) -> None:
    """Check that both synchronization roots exist and are disjoint.

    Args:
        settings: Settings naming the roots.

    Raises:
        ConfigurationError: If either root is missing or not a directory,
            or if one root is the other or lies inside it.
    """
    if not settings.source_path.is_dir():
        raise ConfigurationError(f"Source directory doesn't exist: {settings.source_path}")
    if not settings.target_path.is_dir():
        raise ConfigurationError(f"Target directory doesn't exist: {settings.target_path}")

    source = settings.source_path.resolve()
    target = settings.target_path.resolve()
    if source == target:
        raise ConfigurationError(f"Source and target are the same directory: {source}")
    if target.is_relative_to(source):
        raise ConfigurationError(f"Target directory {target} is inside the source {source}")
    if source.is_relative_to(target):
        raise ConfigurationError(f"Source directory {source} is inside the target {target}")


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e
