from __future__ import annotations

from logweave.core.layout import LogEvent, render
from logweave.core.registry import LogManager
from logweave.core.rotation import is_valid_file_size
from logweave.domain.constants import (
    AppenderType,
    LogField,
    RotationFrequency,
    RotationType,
)
from logweave.domain.config import LoggerConfig, RotationSettings, load_options
from logweave.domain.errors import (
    DirectoryNotFoundError,
    DuplicateCategoryError,
    InvalidConfigurationError,
    InvalidFileSizeError,
    InvalidFrequencyError,
    LogweaveError,
    NoCategoriesRegisteredError,
)

__version__ = "1.0.0"

__all__ = [
    "LogManager",
    "LogEvent",
    "render",
    "is_valid_file_size",
    "AppenderType",
    "LogField",
    "RotationFrequency",
    "RotationType",
    "LoggerConfig",
    "RotationSettings",
    "load_options",
    "LogweaveError",
    "DuplicateCategoryError",
    "InvalidFileSizeError",
    "InvalidFrequencyError",
    "InvalidConfigurationError",
    "NoCategoriesRegisteredError",
    "DirectoryNotFoundError",
]
