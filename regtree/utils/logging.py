import logging
import os
import sys
from typing import Optional, Union

# Define log levels
TRACE = 5  # Per-element decoder chatter, below DEBUG
DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR

LEVELS = {
    "TRACE": TRACE,
    "DEBUG": DEBUG,
    "INFO": INFO,
    "WARNING": WARNING,
    "ERROR": ERROR,
}

logging.addLevelName(TRACE, "TRACE")


class TraceLogger(logging.Logger):
    """Logger with a TRACE level for following the decoder element by element"""

    def trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)


logging.setLoggerClass(TraceLogger)


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a level name such as "trace" or "DEBUG" into its numeric value."""
    if isinstance(level, int):
        return level
    if not level:
        return INFO
    return LEVELS.get(level.upper(), INFO)


def configure_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None):
    """
    Configure the root logger.

    The JSON tree is written to stdout, so log records always go to stderr.

    Args:
        level: Level name or number; LOG_LEVEL from the environment when omitted
        log_file: Optional path to an additional log file
    """
    if level is None:
        level = os.getenv("LOG_LEVEL")
    level = resolve_level(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug(f"Logging configured with level: {logging.getLevelName(level)}")
    if log_file:
        root_logger.debug(f"Logging to file: {log_file}")


def get_logger(name: str) -> TraceLogger:
    """Get a logger for a specific module"""
    return logging.getLogger(name)
