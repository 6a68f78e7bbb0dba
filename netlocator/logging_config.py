"""
Centralized logging configuration for NetLocator.

Each invocation is a short-lived process started by launchd, so the log file
is the only record of what a run decided. The file always receives DEBUG
records; the console follows the --debug flag.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from . import config


class NetLocatorLogger:
    """Centralized logger configuration for NetLocator."""

    _initialized = False
    _debug_enabled = False
    _log_file: Path = config.LOG_FILE

    @classmethod
    def setup(
        cls,
        debug: bool = False,
        force_reinit: bool = False,
    ) -> None:
        """
        Set up logging for the whole process.

        Args:
            debug: If True, the console handler emits DEBUG records
            force_reinit: If True, reinitialize even if already set up
        """
        if cls._initialized and not force_reinit:
            return

        root_logger = logging.getLogger()
        if root_logger.hasHandlers():
            root_logger.handlers.clear()

        cls._debug_enabled = debug
        root_logger.setLevel(logging.DEBUG)

        formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
        cls._add_file_handler(root_logger, formatter)
        cls._add_console_handler(root_logger, formatter)

        cls._initialized = True
        logging.getLogger(__name__).debug(
            f"NetLocator logging initialized (debug={'on' if debug else 'off'})"
        )

    @classmethod
    def _add_file_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        try:
            cls._log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(cls._log_file)
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)
        except OSError as e:
            # Console logging still works without the file
            print(f"Warning: Could not set up file logging: {e}", file=sys.stderr)

    @classmethod
    def _add_console_handler(cls, logger: logging.Logger, formatter: logging.Formatter) -> None:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.DEBUG if cls._debug_enabled else logging.INFO)
        logger.addHandler(console_handler)

    @classmethod
    def get_logger(cls, name: Optional[str] = None) -> logging.Logger:
        """Get a logger instance, initializing NetLocator logging on first use."""
        if not cls._initialized:
            cls.setup()

        return logging.getLogger(name)


# Convenience functions for easy import
def setup_logging(debug: bool = False, force_reinit: bool = False) -> None:
    """Set up logging. Wrapper for NetLocatorLogger.setup()."""
    NetLocatorLogger.setup(debug=debug, force_reinit=force_reinit)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance. Wrapper for NetLocatorLogger.get_logger()."""
    return NetLocatorLogger.get_logger(name)

