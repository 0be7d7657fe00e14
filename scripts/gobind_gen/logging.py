"""
Logging setup

All generator loggers live under the gobind_gen namespace; configure_logging
installs console handlers on that namespace unless asked to reconfigure.
"""

import logging as _logging
import sys
from typing import Optional, Union

_LOGGER_NAMESPACE = "gobind_gen"

_DEFAULT_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

_COLOR_MAP = {
    _logging.DEBUG: "\033[36m",      # Cyan
    _logging.INFO: "\033[37m",       # Light gray
    _logging.WARNING: "\033[33m",    # Yellow
    _logging.ERROR: "\033[31m",      # Red
    _logging.CRITICAL: "\033[41m",   # Red background
}
_RESET = "\033[0m"


def _parse_level(value: Union[str, int, None], default: int) -> int:
    """Accept a level name, a numeric string or an int"""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    value = value.upper()
    if value.isdigit():
        return int(value)
    level = _logging.getLevelName(value)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


class _ColorFormatter(_logging.Formatter):
    """Wraps each record in an ANSI colour picked by level"""

    def __init__(self, fmt: str, use_color: bool) -> None:
        super().__init__(fmt=fmt)
        self.use_color = use_color

    def format(self, record: _logging.LogRecord) -> str:
        message = super().format(record)
        if self.use_color:
            color = _COLOR_MAP.get(record.levelno)
            if color:
                message = f"{color}{message}{_RESET}"
        return message


class _MaxLevelFilter(_logging.Filter):
    """Drops records above max_level"""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: _logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


def get_logger(name: Optional[str] = None) -> _logging.Logger:
    """Logger under the gobind_gen namespace

    Examples:
        get_logger() -> gobind_gen
        get_logger('field') -> gobind_gen.field
    """
    if name is None:
        return _logging.getLogger(_LOGGER_NAMESPACE)
    if name.startswith(_LOGGER_NAMESPACE):
        full_name = name
    else:
        full_name = f"{_LOGGER_NAMESPACE}.{name}"
    return _logging.getLogger(full_name)


def configure_logging(
    level: Union[str, int, None] = None,
    *,
    disable_color: bool = False,
    force_reconfigure: bool = False,
) -> _logging.Logger:
    """Send generator logs to stdout, errors and worse to stderr"""
    console_level = _parse_level(level, _logging.INFO)

    logger = get_logger()
    if logger.handlers and not force_reconfigure:
        return logger

    logger.handlers.clear()
    logger.setLevel(console_level)
    logger.propagate = False

    stdout_handler = _logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(console_level)
    stdout_handler.addFilter(_MaxLevelFilter(_logging.ERROR - 1))
    stdout_handler.setFormatter(_ColorFormatter(_DEFAULT_FORMAT, not disable_color and sys.stdout.isatty()))
    logger.addHandler(stdout_handler)

    stderr_handler = _logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(max(console_level, _logging.ERROR))
    stderr_handler.setFormatter(_ColorFormatter(_DEFAULT_FORMAT, not disable_color and sys.stderr.isatty()))
    logger.addHandler(stderr_handler)

    return logger


def is_configured() -> bool:
    """Whether configure_logging already installed handlers"""
    return bool(get_logger().handlers)
