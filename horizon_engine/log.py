"""Engine and client loggers writing coloured lines to standard output."""

from __future__ import annotations

import logging
import sys

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

CORE_LOGGER_NAME = "HORIZON"
CLIENT_LOGGER_NAME = "APP"

_PATTERN = "[%(asctime)s] %(name)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"

_COLORS = {
    TRACE: "\x1b[37m",
    logging.DEBUG: "\x1b[36m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33;1m",
    logging.ERROR: "\x1b[31;1m",
    logging.CRITICAL: "\x1b[1;41m",
}
_RESET = "\x1b[0m"


class _ColorFormatter(logging.Formatter):
    def __init__(self, use_color: bool) -> None:
        super().__init__(_PATTERN, _DATE_FORMAT)
        self._use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self._use_color:
            return text
        color = _COLORS.get(record.levelno)
        if color is None:
            for level in sorted(_COLORS, reverse=True):
                if record.levelno >= level:
                    color = _COLORS[level]
                    break
        return f"{color}{text}{_RESET}" if color else text


class _EngineHandler(logging.StreamHandler):
    pass


def _configure(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if isinstance(handler, _EngineHandler):
            logger.removeHandler(handler)
    stream = sys.stdout
    handler = _EngineHandler(stream)
    isatty = getattr(stream, "isatty", None)
    handler.setFormatter(_ColorFormatter(bool(isatty and isatty())))
    logger.addHandler(handler)
    logger.setLevel(TRACE)
    logger.propagate = False
    return logger


def init() -> None:
    """Set up both loggers at trace level; calling again replaces the previous setup."""
    _configure(CORE_LOGGER_NAME)
    _configure(CLIENT_LOGGER_NAME)


def core_logger() -> logging.Logger:
    """The engine's own logger."""
    return logging.getLogger(CORE_LOGGER_NAME)


def client_logger() -> logging.Logger:
    """The logger for applications built on the engine."""
    return logging.getLogger(CLIENT_LOGGER_NAME)