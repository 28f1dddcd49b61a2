from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides the immutable field registry used by the JSON layout, the
user-facing rotation vocabulary and its mapping onto the backend
rotation strategies, and the default values injected on configuration
resets.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple, Union

DEFAULT_LOGGER_CATEGORY = "app"
LOG_FILE_EXTENSION = ".log"


# -----------------------------------------------------------------------------
# FIELD REGISTRY
# -----------------------------------------------------------------------------

class LogField(str, Enum):
    """Closed set of loggable attributes, in rendering order."""
    TIMESTAMP = "timestamp"
    DATA = "data"
    LEVEL = "level"
    FILE = "file"
    FUNCTION = "function"
    LINE_NUMBER = "lineNumber"
    ID = "id"
    SERVER_IP = "serverIp"
    CONTEXT = "context"
    CATEGORY = "category"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Static description of a single log field.

    Attributes:
        name: Canonical key written to the JSON line.
        short_name: Compact alias used when short field names are enabled.
        is_base: Base fields are emitted unless explicitly disabled.
    """
    name: str
    short_name: str
    is_base: bool = False


_FIELD_TABLE: Tuple[FieldDescriptor, ...] = (
    FieldDescriptor(LogField.TIMESTAMP.value, "ts", is_base=True),
    FieldDescriptor(LogField.DATA.value, "dt", is_base=True),
    FieldDescriptor(LogField.LEVEL.value, "lvl"),
    FieldDescriptor(LogField.FILE.value, "fl"),
    FieldDescriptor(LogField.FUNCTION.value, "fn"),
    FieldDescriptor(LogField.LINE_NUMBER.value, "ln"),
    FieldDescriptor(LogField.ID.value, "id"),
    FieldDescriptor(LogField.SERVER_IP.value, "sIp"),
    FieldDescriptor(LogField.CONTEXT.value, "ctx"),
    FieldDescriptor(LogField.CATEGORY.value, "cat"),
)

LOG_FIELDS: Mapping[str, FieldDescriptor] = MappingProxyType(
    {descriptor.name: descriptor for descriptor in _FIELD_TABLE}
)

FIELD_SHORT_NAMES: Mapping[str, str] = MappingProxyType(
    {descriptor.name: descriptor.short_name for descriptor in _FIELD_TABLE}
)

BASE_FIELDS: FrozenSet[str] = frozenset(d.name for d in _FIELD_TABLE if d.is_base)

# Extra fields double as the allow-list for layout selection
EXTRA_FIELDS: FrozenSet[str] = frozenset(d.name for d in _FIELD_TABLE if not d.is_base)


# -----------------------------------------------------------------------------
# ROTATION VOCABULARY
# -----------------------------------------------------------------------------

class RotationType(str, Enum):
    """User-facing rotation kinds."""
    SIZE = "size"
    TIME = "time"


class AppenderType(str, Enum):
    """Backend rotation strategies understood by the handler factory."""
    FILE = "file"
    DATE_FILE = "dateFile"


class RotationFrequency(str, Enum):
    """Supported time-based rotation windows."""
    MONTHLY = "monthly"
    DAILY = "daily"
    HOURLY = "hourly"


ROTATION_TYPES_MAP: Mapping[str, AppenderType] = MappingProxyType({
    RotationType.SIZE.value: AppenderType.FILE,
    RotationType.TIME.value: AppenderType.DATE_FILE,
})

# strftime patterns; the rendered period becomes part of the backup file name
FREQUENCY_PATTERN_MAP: Mapping[str, str] = MappingProxyType({
    RotationFrequency.MONTHLY.value: "%m-%Y",
    RotationFrequency.DAILY.value: "%d-%m-%Y",
    RotationFrequency.HOURLY.value: "%d-%m-%Y-%H",
})

# Strategy-specific option names (attribute names on RotationSettings)
APPENDER_TYPE_OPTIONS: Mapping[AppenderType, Tuple[str, ...]] = MappingProxyType({
    AppenderType.FILE: ("backups", "max_log_size"),
    AppenderType.DATE_FILE: ("num_backups", "pattern", "always_include_pattern"),
})

DEFAULT_ROTATION_SETTINGS: Mapping[str, Union[str, int, bool]] = MappingProxyType({
    "strategy": AppenderType.DATE_FILE.value,
    "pattern": FREQUENCY_PATTERN_MAP[RotationFrequency.DAILY.value],
    "always_include_pattern": True,
    "num_backups": 90,
    "backups": 90,
    "max_log_size": "10M",
})

DEFAULT_FILE_NAME_SEP = "-"

FILE_SIZE_UNITS: Dict[str, int] = {
    "K": 1024,
    "M": 1024 ** 2,
    "G": 1024 ** 3,
}
