"""Logging setup for the ``site-harvest`` command line.

The library itself never touches handlers: every module logs through
``logging.getLogger(LOGGER_NAME)`` and leaves output to the host
application. Only :mod:`site_harvest.cli` calls :func:`setup_logging`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Union

LOGGER_NAME: Final[str] = "SiteHarvest"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# rotate at 5 MiB, keep three old files
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUP_COUNT: Final[int] = 3

# marks handlers installed here so a second call replaces only those
_OWNED_ATTR: Final[str] = "_site_harvest_owned"

LevelT = Union[int, str]


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED_ATTR, True)
    return handler


def _build_handlers(log_file: Union[str, Path, None], fmt: str) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                Path(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        _owned(handler)
    return handlers


def setup_logging(
    level: LevelT = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Send project log records to stderr and, optionally, a rotating file.

    Stdout stays reserved for command output (JSON payloads). Handlers added by
    an earlier call are closed and replaced; handlers attached by anyone else
    are kept.
    """
    lg = get_logger()
    for handler in [h for h in lg.handlers if getattr(h, _OWNED_ATTR, False)]:
        lg.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(log_file, log_format):
        lg.addHandler(handler)
    lg.setLevel(level)
    lg.propagate = False
    return lg


__all__ = ["LOGGER_NAME", "DEFAULT_FORMAT", "get_logger", "setup_logging"]
