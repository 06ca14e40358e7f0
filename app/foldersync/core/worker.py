"""Scheduled synchronization worker.

Runs synchronization passes on a fixed interval until stopped. Passes
never overlap: the next one is scheduled only after the previous one
has finished, successfully or not, plus the configured delay.
"""

from __future__ import annotations

import logging
import threading

from foldersync.core.errors import SyncError
from foldersync.core.reconciler import Reconciler
from foldersync.core.settings import SyncSettings, validate_roots
from foldersync.models.report import SyncReport


class SyncWorker:
    """Background worker performing one-way synchronization passes.

    A stop request cuts the inter-pass delay short; a pass already in
    progress runs to completion (or to its first failure).

    Example:
        >>> worker = SyncWorker(settings)
        >>> signal.signal(signal.SIGTERM, lambda *_: worker.stop())
        >>> worker.run()
    """

    def __init__(
        self,
        settings: SyncSettings,
        *,
        reconciler: Reconciler | None = None,
        stop_event: threading.Event | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the SyncWorker.

        Args:
            settings: Roots, interval and failure policy.
            reconciler: Reconciler to run each pass. Defaults to one
                sharing this worker's logger.
            stop_event: Event signalling shutdown. A new one by default.
            logger: Sink for worker messages. Defaults to the module logger.
        """
        self._settings = settings
        self._logger = logger or logging.getLogger(__name__)
        self._reconciler = reconciler or Reconciler(self._logger)
        self._stop_event = stop_event or threading.Event()

    @property
    def settings(self) -> SyncSettings:
        return self._settings

    @property
    def stopped(self) -> bool:
        """Check if a stop has been requested."""
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Request shutdown and interrupt the inter-pass delay."""
        self._stop_event.set()

    def validate(self) -> None:
        """Check that both roots exist.

        Raises:
            ConfigurationError: If the source or target directory is missing.
        """
        validate_roots(self._settings)

    def run_once(self) -> SyncReport:
        """Run a single synchronization pass.

        Returns:
            Report of the pass.

        Raises:
            SyncError: If the pass failed. The failure is logged first.
        """
        source = self._settings.source_path
        target = self._settings.target_path
        try:
            report = self._reconciler.sync_contents(source, target)
        except SyncError as e:
            self._logger.exception("Failed to sync: %s", e)
            raise

        self._logger.info(
            "Synchronization of %s to %s is successfully completed "
            "(%d copied, %d replaced, %d deleted)",
            source,
            target,
            report.copied,
            report.replaced,
            report.deleted,
        )
        return report

    def run(self, max_passes: int | None = None) -> int:
        """Run passes until stopped.

        A failed pass is logged and the worker waits for the next one,
        unless ``stop_on_error`` is set, in which case the error
        propagates and the worker stops.

        Args:
            max_passes: Stop after this many passes. None runs until
                :meth:`stop` is called.

        Returns:
            Number of passes run.

        Raises:
            ConfigurationError: If a root directory is missing at startup.
            SyncError: If a pass fails and ``stop_on_error`` is set.
        """
        self.validate()

        interval = self._settings.sync_interval
        self._logger.info(
            "Starting SyncWorker with source %s, target %s, interval %s, log file %s",
            self._settings.source_path,
            self._settings.target_path,
            interval,
            self._settings.log_file_path,
        )

        passes = 0
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except SyncError:
                if self._settings.stop_on_error:
                    self._logger.error("Stopping SyncWorker after failed pass")
                    raise
            passes += 1

            if max_passes is not None and passes >= max_passes:
                break
            self._stop_event.wait(interval.total_seconds())

        self._logger.info("Stopping SyncWorker...")
        return passes
