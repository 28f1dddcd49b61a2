from __future__ import annotations

"""
Logging Engine Adapter.

Translates resolved category configurations into appender descriptions
and materializes them as handlers on the standard `logging` loggers.
Handler management is idempotent: re-applying a description replaces
the handlers previously installed by this package.
"""

import logging
from typing import Any, Dict, Mapping

from logweave.core.rotation import parse_file_size
from logweave.domain import constants as const
from logweave.domain.config import LoggerConfig
from logweave.domain.errors import InvalidConfigurationError
from logweave.infra.logging.formatter import JsonLayoutFormatter
from logweave.infra.logging.handlers import (
    DateRollingFileHandler,
    _remove_our_handlers,
    _tag_handler,
    create_size_rotating_handler,
)

logger = logging.getLogger(__name__)

PLAIN_APPENDER = "plain"
CATEGORY_LEVEL = logging.DEBUG


# ==============================================================================
# PUBLIC API
# ==============================================================================

def build_appender(category: str, config: LoggerConfig) -> Dict[str, Any]:
    """
    Describe the handler serving `category`.

    Rotation options are only carried when rotation is enabled; without
    rotation the category writes to a single plain file.

    Args:
        category: Category (logger) name.
        config: Resolved configuration of the category.

    Returns:
        Dict[str, Any]: Appender description (type, filename, layout, options).
    """
    appender: Dict[str, Any] = {
        "type": config.rotation.strategy.value if config.enable_rotation else PLAIN_APPENDER,
        "filename": config.log_path,
        "layout": {"type": category, "config": config},
    }

    if config.enable_rotation:
        for option, value in config.rotation.as_options().items():
            if option != "strategy":
                appender[option] = value

    return appender


def create_handler(appender: Mapping[str, Any]) -> logging.Handler:
    """
    Instantiate the handler described by `appender`, formatter included.

    Raises:
        InvalidConfigurationError: Unknown appender type.
    """
    kind = appender["type"]
    filename = appender["filename"]

    if kind == PLAIN_APPENDER:
        handler: logging.Handler = logging.FileHandler(filename, encoding="utf-8")
    elif kind == const.AppenderType.FILE.value:
        handler = create_size_rotating_handler(
            filename,
            parse_file_size(appender["max_log_size"]),
            appender["backups"],
            keep_file_ext=appender.get("keep_file_ext", True),
            compress=appender.get("compress", False),
        )
    elif kind == const.AppenderType.DATE_FILE.value:
        handler = DateRollingFileHandler(
            filename,
            appender["pattern"],
            appender["num_backups"],
            always_include_pattern=appender.get("always_include_pattern", True),
            keep_file_ext=appender.get("keep_file_ext", True),
            compress=appender.get("compress", False),
            file_name_sep=appender.get("file_name_sep", const.DEFAULT_FILE_NAME_SEP),
        )
    else:
        raise InvalidConfigurationError(f"Invalid appender type '{kind}'.")

    handler.setFormatter(JsonLayoutFormatter(appender["layout"]["config"]))
    _tag_handler(handler)
    return handler


def configure_categories(appenders: Mapping[str, Mapping[str, Any]]) -> Dict[str, logging.Logger]:
    """
    Install one handler per category and return the category loggers.

    All handlers are created before any logger is touched, so a failing
    description leaves the current setup intact.
    """
    handlers = {category: create_handler(appender) for category, appender in appenders.items()}

    result: Dict[str, logging.Logger] = {}
    for category, handler in handlers.items():
        category_logger = logging.getLogger(category)
        _remove_our_handlers(category_logger)
        category_logger.addHandler(handler)
        category_logger.setLevel(CATEGORY_LEVEL)
        category_logger.propagate = False
        result[category] = category_logger
        logger.debug(f"Category '{category}' attached to {appenders[category]['filename']}")

    return result


def release_categories(categories: Mapping[str, logging.Logger]) -> None:
    """Detach and close the handlers installed on `categories`."""
    for category_logger in categories.values():
        _remove_our_handlers(category_logger)
