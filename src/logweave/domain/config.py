from __future__ import annotations

"""
Configuration Domain Models.

Defines the resolved per-category configuration and its rotation
settings, the factories producing fresh default instances, and the
loader used to read option documents from disk.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Union

from logweave.domain import constants as const
from logweave.domain.errors import InvalidConfigurationError
from logweave.infra.fs import get_project_root

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# CONFIGURATION MODELS
# -----------------------------------------------------------------------------

@dataclass
class RotationSettings:
    """
    Rotation policy of a single category.

    Only one strategy shape is populated at any time: size-based
    (`backups`, `max_log_size`) or time-based (`num_backups`, `pattern`,
    `always_include_pattern`). Fields of the inactive shape stay None.
    """
    strategy: const.AppenderType = const.AppenderType.DATE_FILE

    # Size-based shape
    backups: Optional[int] = None
    max_log_size: Optional[Union[int, float, str]] = None

    # Time-based shape
    num_backups: Optional[int] = None
    pattern: Optional[str] = None
    always_include_pattern: Optional[bool] = None

    keep_file_ext: bool = True
    compress: bool = False
    file_name_sep: str = const.DEFAULT_FILE_NAME_SEP

    def as_options(self) -> Dict[str, Any]:
        """Return the populated fields only, with the strategy as its plain value."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, const.AppenderType):
                value = value.value
            out[f.name] = value
        return out


@dataclass
class LoggerConfig:
    """
    Resolved settings for one logger category.

    Attributes:
        directory: Existing directory receiving the log file.
        file_name: Log file name without extension.
        layout: Field name -> emit flag, in registry order.
        enable_rotation: Gate for the rotation settings.
        short_field_names: Render short aliases instead of canonical keys.
        rotation: Strategy and strategy-specific options.
    """
    directory: str
    file_name: str = const.DEFAULT_LOGGER_CATEGORY
    layout: Dict[str, bool] = field(default_factory=dict)
    enable_rotation: bool = False
    short_field_names: bool = False
    rotation: RotationSettings = field(default_factory=RotationSettings)

    @property
    def log_path(self) -> str:
        return os.path.join(self.directory, f"{self.file_name}{const.LOG_FILE_EXTENSION}")


# -----------------------------------------------------------------------------
# FACTORIES
# -----------------------------------------------------------------------------

def get_default_layout() -> Dict[str, bool]:
    """Build the registry-ordered layout with base fields on and extras off."""
    return {name: descriptor.is_base for name, descriptor in const.LOG_FIELDS.items()}


def get_default_rotation_settings() -> RotationSettings:
    """Default time-based rotation: daily pattern, 90 backups."""
    defaults = const.DEFAULT_ROTATION_SETTINGS
    return RotationSettings(
        strategy=const.AppenderType(defaults["strategy"]),
        num_backups=int(defaults["num_backups"]),
        pattern=str(defaults["pattern"]),
        always_include_pattern=bool(defaults["always_include_pattern"]),
    )


def get_default_config() -> LoggerConfig:
    """
    Generate the hard-coded base configuration.

    Returns:
        LoggerConfig: A fresh instance; callers may mutate it freely.
    """
    return LoggerConfig(
        directory=get_project_root(),
        file_name=const.DEFAULT_LOGGER_CATEGORY,
        layout=get_default_layout(),
        enable_rotation=False,
        short_field_names=False,
        rotation=get_default_rotation_settings(),
    )


# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def load_options(path: str) -> Dict[str, Any]:
    """
    Read an options document (JSON object) from disk.

    Args:
        path: Location of the JSON file.

    Returns:
        Dict[str, Any]: The decoded document.

    Raises:
        InvalidConfigurationError: The file is unreadable or not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise InvalidConfigurationError(f"Unable to read options file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationError(
            f"Options file '{path}' must contain a JSON object, found {type(data).__name__}."
        )

    logger.debug(f"Options loaded from {path} ({len(data)} top-level keys).")
    return data
