"""Logging configuration for the synchronization service.

Modules log through ``logging.getLogger(__name__)``; this module wires
the ``foldersync`` logger to a Rich console handler on stderr and a
plain-text log file.
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

from foldersync.core.paths import ensure_log_dir
from foldersync.utils.formatting import err_console

ROOT_LOGGER_NAME = "foldersync"

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    log_file: Path | None = None,
    *,
    verbose: bool = False,
    quiet: bool = False,
) -> logging.Logger:
    """Attach console and file handlers to the ``foldersync`` logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        log_file: File receiving the log; None disables file logging.
        verbose: Log DEBUG messages to both handlers.
        quiet: Only show warnings and errors on the console. The file
            still receives INFO messages.

    Returns:
        The configured ``foldersync`` logger.

    Raises:
        RuntimeError: If the log directory cannot be created.
        OSError: If the log file cannot be opened.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    base_level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(base_level)
    logger.propagate = False

    console_handler = RichHandler(
        console=err_console,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(logging.WARNING if quiet else base_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        ensure_log_dir(log_file)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        file_handler.setLevel(base_level)
        logger.addHandler(file_handler)

    return logger
