"""Unit tests for run command.

Tests for the scheduled worker command: settings resolution, logging
setup, signal handling, and failure exit codes.
"""

import signal
from collections.abc import Callable, Iterator
from datetime import timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from foldersync.cli.main import app
from foldersync.core.errors import SyncOperationError
from typer.testing import CliRunner

runner = CliRunner()

Snapshot = Callable[[Path], dict[str, bytes | None]]


def _run_args(source: Path, target: Path, log_file: Path, *extra: str) -> list[str]:
    return ["run", "-s", str(source), "-t", str(target), "-l", str(log_file), *extra]


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    """Log file location inside the test directory."""
    return tmp_path / "logs" / "sync.log"


@pytest.fixture
def mock_worker() -> Iterator[MagicMock]:
    """Patch SyncWorker in the run command."""
    with patch("foldersync.cli.commands.run.SyncWorker") as worker_cls:
        worker_cls.return_value.run.return_value = 1
        yield worker_cls


class TestRunHelp:
    """Tests for run command help."""

    def test_run_help(self) -> None:
        """Run command shows help with its flags."""
        result = runner.invoke(app, ["run", "--help"])

        assert result.exit_code == 0
        assert "--interval" in result.stdout
        assert "--log-file" in result.stdout
        assert "--once" in result.stdout
        assert "--stop-on-error" in result.stdout


class TestRunOnce:
    """Tests for run --once with a real worker."""

    def test_single_pass(
        self,
        sample_source: Path,
        target_dir: Path,
        log_file: Path,
        snapshot: Snapshot,
    ) -> None:
        """One pass mirrors the target and is written to the log file."""
        result = runner.invoke(
            app,
            [
                "run",
                "-s",
                str(sample_source),
                "-t",
                str(target_dir),
                "--log-file",
                str(log_file),
                "--once",
            ],
        )

        assert result.exit_code == 0
        assert snapshot(target_dir) == snapshot(sample_source)
        assert "Completed 1 synchronization pass(es)." in result.stdout

        content = log_file.read_text()
        assert "Starting SyncWorker with source" in content
        assert "Copied a.txt from source to target" in content
        assert "Copied sub and its contents from source to target" in content
        assert "is successfully completed (5 copied, 0 replaced, 0 deleted)" in content
        assert "Stopping SyncWorker..." in content

    def test_failed_pass_is_logged(
        self, source_dir: Path, target_dir: Path, log_file: Path
    ) -> None:
        """A failed pass is logged and, by default, not fatal."""
        (source_dir / "a.txt").write_text("x")

        with patch(
            "foldersync.core.reconciler.copy_new_file",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            result = runner.invoke(
                app,
                _run_args(source_dir, target_dir, log_file, "--once"),
            )

        assert result.exit_code == 0
        content = log_file.read_text()
        assert "Failed copying a.txt from source to target" in content
        assert "Failed to sync" in content


class TestRunSettings:
    """Tests for settings passed to the worker."""

    def test_cli_options_reach_worker(
        self, source_dir: Path, target_dir: Path, log_file: Path, mock_worker: MagicMock
    ) -> None:
        """Command-line options end up in the worker settings."""
        result = runner.invoke(
            app,
            [
                "run",
                "-s",
                str(source_dir),
                "-t",
                str(target_dir),
                "-l",
                str(log_file),
                "--interval",
                "2.5",
                "--stop-on-error",
            ],
        )

        assert result.exit_code == 0
        settings = mock_worker.call_args.args[0]
        assert settings.source_path == source_dir
        assert settings.sync_interval == timedelta(seconds=2.5)
        assert settings.stop_on_error is True
        assert settings.log_file_path == log_file
        mock_worker.return_value.run.assert_called_once_with(max_passes=None)

    def test_settings_file_values(
        self,
        source_dir: Path,
        target_dir: Path,
        log_file: Path,
        tmp_path: Path,
        mock_worker: MagicMock,
    ) -> None:
        """Values not given on the command line come from the settings file."""
        config = tmp_path / "config.toml"
        config.write_text(
            f'source_path = "{source_dir}"\n'
            f'target_path = "{target_dir}"\n'
            "sync_interval = 42\n"
            f'log_file_path = "{log_file}"\n'
            "stop_on_error = true\n"
        )

        result = runner.invoke(app, ["run", "--config", str(config), "--once"])

        assert result.exit_code == 0
        settings = mock_worker.call_args.args[0]
        assert settings.sync_interval == timedelta(seconds=42)
        assert settings.stop_on_error is True
        mock_worker.return_value.run.assert_called_once_with(max_passes=1)

    def test_log_directory_created(
        self, source_dir: Path, target_dir: Path, log_file: Path, mock_worker: MagicMock
    ) -> None:
        """The log file directory is created at startup."""
        runner.invoke(app, _run_args(source_dir, target_dir, log_file))

        assert log_file.parent.is_dir()


class TestRunSignals:
    """Tests for signal handling."""

    def test_sigterm_stops_worker(
        self, source_dir: Path, target_dir: Path, log_file: Path, mock_worker: MagicMock
    ) -> None:
        """SIGTERM asks the worker to stop."""

        def _deliver_sigterm(max_passes: int | None) -> int:
            handler = signal.getsignal(signal.SIGTERM)
            assert callable(handler)
            handler(signal.SIGTERM, None)
            return 1

        mock_worker.return_value.run.side_effect = _deliver_sigterm

        result = runner.invoke(
            app, _run_args(source_dir, target_dir, log_file)
        )

        assert result.exit_code == 0
        mock_worker.return_value.stop.assert_called_once()

    def test_handlers_restored(
        self, source_dir: Path, target_dir: Path, log_file: Path, mock_worker: MagicMock
    ) -> None:
        """Previous signal handlers are restored on exit."""
        before = signal.getsignal(signal.SIGINT)

        runner.invoke(app, _run_args(source_dir, target_dir, log_file))

        assert signal.getsignal(signal.SIGINT) is before


class TestRunErrors:
    """Tests for run error handling."""

    def test_missing_source_directory(
        self, tmp_path: Path, target_dir: Path, log_file: Path
    ) -> None:
        """A missing source directory is fatal at startup."""
        result = runner.invoke(
            app,
            _run_args(tmp_path / "missing", target_dir, log_file),
        )

        assert result.exit_code == 1
        assert "Source directory doesn't exist" in result.output

    def test_unusable_log_file(self, source_dir: Path, target_dir: Path, tmp_path: Path) -> None:
        """A log file that cannot be opened is fatal at startup."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        result = runner.invoke(
            app,
            _run_args(source_dir, target_dir, blocker / "sync.log"),
        )

        assert result.exit_code == 1
        assert "Cannot open log file" in result.output

    def test_stop_on_error_exit_code(
        self, source_dir: Path, target_dir: Path, log_file: Path, mock_worker: MagicMock
    ) -> None:
        """A pass error that stops the worker exits non-zero."""
        mock_worker.return_value.run.side_effect = SyncOperationError(
            "copying", "a.txt", "Permission denied"
        )

        result = runner.invoke(
            app,
            _run_args(source_dir, target_dir, log_file, "--stop-on-error"),
        )

        assert result.exit_code == 1
        assert "Sync failed" in result.output

    def test_invalid_interval(self, source_dir: Path, target_dir: Path) -> None:
        """A non-positive interval is rejected by the option parser."""
        result = runner.invoke(
            app, ["run", "-s", str(source_dir), "-t", str(target_dir), "--interval", "0"]
        )

        assert result.exit_code == 2
