"""
CM SAF Reader Logging Configuration

Every module of the package logs to a child of the ``cmsaf_reader`` logger
obtained through ``get_logger``. The package stays silent (NullHandler at
WARNING, or the level named by ``CMSAF_READER_LOG_LEVEL``) until
``setup_logging`` attaches handlers.
"""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Union

from .config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL_ENV
from .exceptions import ParameterError

LOGGER_NAME = 'cmsaf_reader'

LevelLike = Union[int, str]


# ============================================================================
# Level Handling
# ============================================================================

def parse_log_level(level: LevelLike) -> int:
    """
    Convert a level name or number to a logging level.

    Args:
        level: 'debug', 'INFO', logging.WARNING, ...

    Returns:
        int: Numeric logging level

    Raises:
        ParameterError: If the name is not a logging level
    """
    if isinstance(level, int):
        return level

    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ParameterError(
            "level", str(level), "Expected DEBUG, INFO, WARNING, ERROR or CRITICAL"
        )
    return value


def default_log_level() -> int:
    """Level from ``CMSAF_READER_LOG_LEVEL``, WARNING when unset."""
    configured = os.environ.get(LOG_LEVEL_ENV)
    if not configured:
        return logging.WARNING
    return parse_log_level(configured)


# ============================================================================
# Logger Setup
# ============================================================================

def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the package logger or one of its children.

    Args:
        name: Module path relative to the package, e.g. 'io.connection'.
              A full dotted name such as ``__name__`` is accepted too.

    Returns:
        logging.Logger: ``cmsaf_reader`` or ``cmsaf_reader.<name>``
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{LOGGER_NAME}.{name}')


def _build_handlers(log_file: Optional[Union[str, Path]]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))
    return handlers


def setup_logging(
    level: LevelLike = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None
) -> logging.Logger:
    """
    Send package log records to stdout and optionally to a file.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Logging level name or number
        log_file: Optional log file; parent directories are created
        format_string: Record format (default: time - name - level - message)
        date_format: Timestamp format

    Returns:
        logging.Logger: The configured ``cmsaf_reader`` logger

    Examples:
        >>> from cmsaf_reader import setup_logging
        >>> setup_logging('DEBUG')                       # while exploring a file
        >>> setup_logging(log_file='logs/cmsaf.log')      # keep a record
    """
    level = parse_log_level(level)
    formatter = logging.Formatter(
        format_string or LOG_FORMAT, datefmt=date_format or LOG_DATE_FORMAT
    )

    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    for handler in _build_handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False

    if log_file:
        logger.info("Logging to file: %s", log_file)
    return logger


def set_log_level(level: LevelLike) -> None:
    """
    Change the level of the package logger and its handlers.

    Examples:
        >>> from cmsaf_reader import set_log_level
        >>> set_log_level('ERROR')
    """
    level = parse_log_level(level)
    logger = get_logger()
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


_package_logger = get_logger()
if not _package_logger.handlers:
    _package_logger.addHandler(logging.NullHandler())
_package_logger.setLevel(default_log_level())
