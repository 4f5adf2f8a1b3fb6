"""
Structured logging configuration for craftd.

Provides one place to configure logging for the command-line tools and any
service embedding the calculators, with separate output files per concern.
Construct a ``LoggingSetup`` at process start and call ``configure()`` once;
nothing here is configured at import time.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional

# Define logger names for different concerns
CALCULATIONS_LOGGER = "craftd.calculations"
PERFORMANCE_LOGGER = "craftd.performance"
ERROR_LOGGER = "craftd.errors"
DEBUG_LOGGER = "craftd.debug"

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(levelname)-8s %(message)s"

MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

COMBINED_LOG = "combined.log"
WARNINGS_LOG = "warnings_errors.log"
CALCULATIONS_LOG = "calculations.log"
PERFORMANCE_LOG = "performance_metrics.log"
DEBUG_LOG = "debug_detail.log"

LOG_FILES = [COMBINED_LOG, WARNINGS_LOG, CALCULATIONS_LOG, PERFORMANCE_LOG, DEBUG_LOG]


def clear_logs(log_dir: Path) -> None:
    """
    Delete the craftd log files in ``log_dir``.

    Args:
        log_dir: Directory containing log files to clear
    """
    for name in LOG_FILES:
        log_file = log_dir / name
        if log_file.exists():
            try:
                log_file.unlink()
            except OSError as e:
                logging.getLogger(__name__).warning(f"Could not delete {log_file}: {e}")


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
        mode="a",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


class LoggingSetup:
    """
    Owns the handlers craftd installs.

    Creates separate log files for different concerns:
    - combined.log: every message at INFO+ (DEBUG+ in debug mode)
    - warnings_errors.log: warnings and errors
    - calculations.log: the calculations logger (INFO+)
    - performance_metrics.log: the performance logger (INFO+)
    - debug_detail.log: the debug logger, only when ``debug=True``

    Warnings and above are also echoed to the console.
    """

    def __init__(self, log_dir: Path, debug: bool = False, clear_existing: bool = False,
                 console: bool = True):
        self.log_dir = Path(log_dir)
        self.debug = debug
        self.clear_existing = clear_existing
        self.console = console
        self._installed: List[tuple] = []
        self.configured = False

    def _install(self, logger: logging.Logger, handler: logging.Handler) -> None:
        logger.addHandler(handler)
        self._installed.append((logger, handler))

    def configure(self) -> "LoggingSetup":
        """Install handlers. Calling it again on a configured instance is a no-op."""
        if self.configured:
            return self

        self.log_dir.mkdir(parents=True, exist_ok=True)
        if self.clear_existing:
            clear_logs(self.log_dir)

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG if self.debug else logging.INFO)

        file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

        if self.console:
            console = logging.StreamHandler()
            console.setLevel(logging.WARNING)
            console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            self._install(root_logger, console)

        self._install(
            root_logger,
            _rotating_handler(
                self.log_dir / COMBINED_LOG,
                logging.DEBUG if self.debug else logging.INFO,
                file_formatter,
            ),
        )
        self._install(
            root_logger,
            _rotating_handler(self.log_dir / WARNINGS_LOG, logging.WARNING, file_formatter),
        )

        for name, filename in ((CALCULATIONS_LOGGER, CALCULATIONS_LOG), (PERFORMANCE_LOGGER, PERFORMANCE_LOG)):
            concern_logger = logging.getLogger(name)
            concern_logger.setLevel(logging.INFO)
            concern_logger.propagate = True  # Allow to bubble up to root
            self._install(
                concern_logger,
                _rotating_handler(self.log_dir / filename, logging.INFO, file_formatter),
            )

        if self.debug:
            debug_logger = logging.getLogger(DEBUG_LOGGER)
            debug_logger.setLevel(logging.DEBUG)
            debug_logger.propagate = True
            self._install(
                debug_logger,
                _rotating_handler(self.log_dir / DEBUG_LOG, logging.DEBUG, file_formatter),
            )

        self.configured = True
        return self

    def close(self) -> None:
        """Remove and close every handler this instance installed."""
        for logger, handler in reversed(self._installed):
            logger.removeHandler(handler)
            handler.close()
        self._installed.clear()
        self.configured = False

    def log_files(self) -> List[Path]:
        return [self.log_dir / name for name in LOG_FILES if (self.log_dir / name).exists()]

    def __enter__(self) -> "LoggingSetup":
        return self.configure()

    def __exit__(self, *exc) -> Optional[bool]:
        self.close()
        return None
