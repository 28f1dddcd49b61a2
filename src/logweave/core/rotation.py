from __future__ import annotations

"""
Rotation Policy Resolution.

Maps the user-facing rotation vocabulary (`size` / `time`) onto the two
backend strategies and keeps the rotation settings in a single,
consistent shape: switching strategy wipes every option of the previous
one before the new options are applied.
"""

import logging
import math
import re
from typing import Any, Mapping, Optional

from logweave.domain import constants as const
from logweave.domain.config import LoggerConfig, RotationSettings
from logweave.domain.errors import (
    InvalidConfigurationError,
    InvalidFileSizeError,
    InvalidFrequencyError,
)

logger = logging.getLogger(__name__)

_FILE_SIZE_RE = re.compile(r"^[1-9]+[0-9]*[KMG]$")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def apply_rotation_policy(config: LoggerConfig, options: Optional[Mapping[str, Any]] = None) -> None:
    """
    Update the rotation settings of `config` in place.

    Args:
        config: Target configuration.
        options: Canonical rotation options (type, backup_count,
                 max_file_size, frequency, archive_backups).

    Raises:
        InvalidFileSizeError: Size-based rotation with an invalid max size.
        InvalidFrequencyError: Time-based rotation with an unknown frequency.
        InvalidConfigurationError: The resolved strategy is unknown.
    """
    options = options or {}
    rotation = config.rotation

    requested = options.get("type")
    strategy = const.ROTATION_TYPES_MAP.get(requested) if isinstance(requested, str) else None
    if strategy is not None:
        if strategy != rotation.strategy:
            logger.debug(f"Rotation strategy switched: {rotation.strategy} -> {strategy.value}")
        rotation.strategy = strategy

    if rotation.strategy == const.AppenderType.FILE:
        _apply_size_options(rotation, options)
    elif rotation.strategy == const.AppenderType.DATE_FILE:
        _apply_time_options(rotation, options)
    else:
        raise InvalidConfigurationError("Invalid type found for logger configuration!")

    if options.get("archive_backups"):
        rotation.compress = True


def is_valid_file_size(value: Any) -> bool:
    """
    Return True if `value` is a usable max file size.

    Native numbers are whole sizes in bytes; floats must be finite and
    integral (`2048.0`). Strings must carry a K/M/G suffix: a bare
    numeric string such as "10" is rejected.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer() and value > 0
    return isinstance(value, str) and bool(_FILE_SIZE_RE.match(value))


def parse_file_size(value: Any) -> int:
    """
    Convert a valid file size into bytes.

    Raises:
        InvalidFileSizeError: `value` fails `is_valid_file_size`.
    """
    if not is_valid_file_size(value):
        raise InvalidFileSizeError(value)
    if isinstance(value, str):
        return int(value[:-1]) * const.FILE_SIZE_UNITS[value[-1]]
    return int(value)


def reset_rotation_options(rotation: RotationSettings, selected: const.AppenderType) -> None:
    """Load the defaults of `selected` and clear every option of the other strategy."""
    for option in const.APPENDER_TYPE_OPTIONS[selected]:
        setattr(rotation, option, const.DEFAULT_ROTATION_SETTINGS[option])

    opposite = (
        const.AppenderType.FILE
        if selected == const.AppenderType.DATE_FILE
        else const.AppenderType.DATE_FILE
    )
    for option in const.APPENDER_TYPE_OPTIONS[opposite]:
        setattr(rotation, option, None)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _apply_size_options(rotation: RotationSettings, options: Mapping[str, Any]) -> None:
    reset_rotation_options(rotation, const.AppenderType.FILE)

    if options.get("backup_count") is not None:
        rotation.backups = _as_int(options["backup_count"], "backup_count")

    max_file_size = options.get("max_file_size")
    if max_file_size is not None:
        if not is_valid_file_size(max_file_size):
            raise InvalidFileSizeError(max_file_size)
        rotation.max_log_size = max_file_size


def _apply_time_options(rotation: RotationSettings, options: Mapping[str, Any]) -> None:
    reset_rotation_options(rotation, const.AppenderType.DATE_FILE)

    if options.get("backup_count") is not None:
        rotation.num_backups = _as_int(options["backup_count"], "backup_count")

    frequency = options.get("frequency")
    if frequency is not None:
        pattern = const.FREQUENCY_PATTERN_MAP.get(frequency) if isinstance(frequency, str) else None
        if pattern is None:
            raise InvalidFrequencyError(frequency)
        rotation.pattern = pattern


def _as_int(value: Any, field: str) -> int:
    """Numeric coercion for backup counts ("5" -> 5)."""
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(
            f"Invalid field '{field}': expected an integer, received {value!r}."
        ) from e
