"""Logging configuration for git-task-keeper.

All loggers live under the ``git_task_keeper`` logger, so configuring it
leaves GitPython's own loggers alone. Console lines look like git's own
diagnostics (``warning: ...``); ``--debug`` adds timestamps, logger names
and a log file.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

PACKAGE_LOGGER = 'git_task_keeper'
DEBUG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def log_file_path() -> Path:
    """Location of the debug log, rewritten on every ``--debug`` run."""
    return Path.home() / '.git-task-keeper' / 'git-task-keeper.log'


class LevelPrefixFormatter(logging.Formatter):
    """Prefix each message with its lowercase level, coloured on a terminal."""

    COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__('%(message)s')
        self.stream = stream

    def use_color(self) -> bool:
        stream = self.stream or sys.stderr
        return hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record):
        message = super().format(record)
        prefix = f"{record.levelname.lower()}:"
        if self.use_color() and record.levelno in self.COLORS:
            prefix = f"{self.COLORS[record.levelno]}{prefix}{self.RESET}"
        return f"{prefix} {message}"


def _level_for(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        verbose: Show INFO messages
        debug: Show DEBUG messages with timestamps and copy them to
            ``log_file_path()``

    Returns:
        The configured package logger
    """
    level = _level_for(verbose, debug)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    if debug:
        console_handler.setFormatter(logging.Formatter(DEBUG_FORMAT, DATE_FORMAT))
    else:
        console_handler.setFormatter(LevelPrefixFormatter())
    package_logger.addHandler(console_handler)

    if debug:
        log_file = log_file_path()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(DEBUG_FORMAT, DATE_FORMAT))
        package_logger.addHandler(file_handler)
        package_logger.debug(f"Writing debug log to {log_file}")

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a module, placed under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
