from __future__ import annotations

from .diagnostics import DiagnosticsConfig, configure_diagnostics
from .engine import build_appender, configure_categories, create_handler, release_categories
from .formatter import JsonLayoutFormatter, record_to_event
from .handlers import DateRollingFileHandler, create_size_rotating_handler

__all__ = [
    "DiagnosticsConfig",
    "configure_diagnostics",
    "build_appender",
    "configure_categories",
    "create_handler",
    "release_categories",
    "JsonLayoutFormatter",
    "record_to_event",
    "DateRollingFileHandler",
    "create_size_rotating_handler",
]
