"""
Logging Configuration Module.

Sets up Lanechart's root logger: a size-rotated log file plus an optional
console stream. The debug level and the log directory can come from the
command line or from the LANECHART_DEBUG / LANECHART_LOG_DIR environment
variables (usually set through a .env file).
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Mapping, Optional

ENV_DEBUG = "LANECHART_DEBUG"
ENV_LOG_DIR = "LANECHART_LOG_DIR"

DEFAULT_LOG_DIR = "logs"
LOG_FILENAME = "lanechart.log"
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 5
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_TRUE_VALUES = ("1", "true", "yes", "on")


class SafeRotatingFileHandler(RotatingFileHandler):
    """
    Rotating handler that keeps writing when Windows holds the file open.
    """

    def doRollover(self) -> None:
        try:
            super().doRollover()
        except PermissionError:
            if sys.platform != "win32":
                raise


def debug_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Reads the debug switch from the environment.

    Args:
        environ: Mapping to read instead of os.environ.

    Returns:
        bool: True for 1/true/yes/on (case-insensitive).
    """
    env = os.environ if environ is None else environ
    return env.get(ENV_DEBUG, "").strip().lower() in _TRUE_VALUES


def log_dir_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    """The log directory, LANECHART_LOG_DIR when set."""
    env = os.environ if environ is None else environ
    return env.get(ENV_LOG_DIR, "").strip() or DEFAULT_LOG_DIR


def _file_handler(log_dir: str, formatter: logging.Formatter, level: int):
    try:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, LOG_FILENAME)
    except OSError as e:
        print(f"Failed to create log directory {log_dir}: {e}. Using cwd.")
        log_path = LOG_FILENAME

    try:
        handler = SafeRotatingFileHandler(
            log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
    except OSError as e:
        print(f"CRITICAL: Could not set up file logging: {e}")
        return None
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logging(
    debug_mode: Optional[bool] = None,
    log_to_console: bool = True,
    log_dir: Optional[str] = None,
) -> int:
    """
    Configures the root logger. Repeated calls replace earlier handlers.

    Args:
        debug_mode: DEBUG when True, INFO when False. None defers to
            LANECHART_DEBUG.
        log_to_console: Also log to stderr.
        log_dir: Directory of the rotating log file. None defers to
            LANECHART_LOG_DIR, then to "logs".

    Returns:
        int: The level that was applied.
    """
    if debug_mode is None:
        debug_mode = debug_from_env()
    if log_dir is None:
        log_dir = log_dir_from_env()

    level = logging.DEBUG if debug_mode else logging.INFO
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    file_handler = _file_handler(log_dir, formatter, level)
    if file_handler is not None:
        root_logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    return level


def get_logger(name: str) -> logging.Logger:
    """Returns the named logger (pass __name__)."""
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Flushes and closes every handler so the log file is released."""
    logging.shutdown()
