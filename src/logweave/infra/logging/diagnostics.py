from __future__ import annotations

"""
Package Diagnostics.

Routes the package's own log records (configuration decisions, handler
attachment) to stderr. The handler lives on the `logweave` logger, never
on the root logger, so host applications keep full control of theirs.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Dict

from logweave.infra.logging.handlers import _remove_our_handlers, _tag_handler

PACKAGE_LOGGER_NAME = "logweave"
_CONFIGURED_FLAG_ATTR: str = "_logweave_diagnostics_configured"

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Immutable specification of the diagnostics output.

    Attributes:
        level: Minimum severity level to print.
        fmt: Text format of each line.
    """
    level: str = "WARNING"
    fmt: str = "%(levelname)s | %(name)s | %(message)s"


def configure_diagnostics(cfg: DiagnosticsConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Idempotent unless `force` is set, in which case the previous handler
    is replaced.

    Returns:
        logging.Logger: The package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if getattr(package_logger, _CONFIGURED_FLAG_ATTR, False) and not force:
        return package_logger

    level_int = _parse_level(cfg.level)
    _remove_our_handlers(package_logger)

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(logging.Formatter(cfg.fmt))
    _tag_handler(sh)

    package_logger.addHandler(sh)
    package_logger.setLevel(level_int)
    setattr(package_logger, _CONFIGURED_FLAG_ATTR, True)
    return package_logger


def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)
