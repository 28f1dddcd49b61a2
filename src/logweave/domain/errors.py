from __future__ import annotations

"""
Configuration Error Taxonomy.

Every error is raised synchronously while the loggers are being set up,
never while an event is being written. Each error also derives from the
matching builtin: ValueError for bad values, FileNotFoundError for paths.
"""


class LogweaveError(Exception):
    """Base class for all setup-time configuration failures."""


class DuplicateCategoryError(LogweaveError, ValueError):
    """A category name was registered more than once."""

    def __init__(self, category: str) -> None:
        super().__init__(f"Logger already initialized for the category: {category}")
        self.category = category


class InvalidFileSizeError(LogweaveError, ValueError):
    """A size-based rotation received an unusable max file size."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"max_file_size must be a valid log file size, received {value!r}. "
            "Expected: number (size in bytes) or number suffixed with K/M/G "
            "for kilo/mega/giga bytes"
        )
        self.value = value


class InvalidFrequencyError(LogweaveError, ValueError):
    """A time-based rotation received an unknown frequency."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"frequency must be valid, received {value!r}. Expected: monthly/daily/hourly"
        )
        self.value = value


class InvalidConfigurationError(LogweaveError, ValueError):
    """The configuration cannot be resolved into a known rotation strategy or shape."""


class NoCategoriesRegisteredError(LogweaveError, RuntimeError):
    """Loggers were requested before any category was registered."""

    def __init__(self) -> None:
        super().__init__("Logger must be initialized for at least 1 category")


class DirectoryNotFoundError(LogweaveError, FileNotFoundError):
    """The output directory of a category does not exist."""

    def __init__(self, directory: str) -> None:
        super().__init__(f"Specified directory '{directory}' does not exist!")
        self.directory = directory
