"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

TreeLayout = dict[str, "bytes | str | TreeLayout"]


def _build(root: Path, layout: TreeLayout) -> None:
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        path = root / name
        if isinstance(value, dict):
            _build(path, value)
        elif isinstance(value, bytes):
            path.write_bytes(value)
        else:
            path.write_text(value)


def _snapshot(root: Path) -> dict[str, bytes | None]:
    result: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        result[rel] = None if path.is_dir() else path.read_bytes()
    return result


@pytest.fixture
def make_tree() -> Callable[[Path, TreeLayout], Path]:
    """Build a directory tree from a nested dict.

    Keys are names; dict values are subdirectories, str/bytes values are
    file contents.
    """

    def _make(root: Path, layout: TreeLayout) -> Path:
        _build(root, layout)
        return root

    return _make


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes | None]]:
    """Map every relative path under a root to its bytes (None for directories)."""
    return _snapshot


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Empty source root."""
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Empty target root."""
    path = tmp_path / "target"
    path.mkdir()
    return path


@pytest.fixture
def sample_source(make_tree: Callable[[Path, TreeLayout], Path], source_dir: Path) -> Path:
    """Source tree with nested directories and files of varied sizes."""
    return make_tree(
        source_dir,
        {
            "a.txt": "0123456789",
            "empty.bin": b"",
            "odd.bin": bytes(range(13)),
            "sub": {
                "b.txt": "hello",
                "deep": {"c.txt": "nested", "deeper": {"d.bin": b"\x00" * 100}},
            },
            "empty_dir": {},
        },
    )


@pytest.fixture(autouse=True)
def reset_foldersync_logger() -> Iterator[None]:
    """Restore the ``foldersync`` logger after tests that configure it."""
    yield
    logger = logging.getLogger("foldersync")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home
