from __future__ import annotations

"""
Logger Registry.

The coordinator owning the base configuration and the category map.
Categories are registered one at a time, either sharing the base
configuration or owning a deep copy with their overrides merged in, and
are materialized into standard loggers by `get_loggers`.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from logweave.core.merger import merge_options
from logweave.core.normalizer import canonicalize_options, is_non_empty_mapping
from logweave.domain import constants as const
from logweave.domain.config import LoggerConfig, get_default_config
from logweave.domain.errors import (
    DirectoryNotFoundError,
    DuplicateCategoryError,
    NoCategoriesRegisteredError,
)
from logweave.infra.fs import directory_exists
from logweave.infra.logging.engine import (
    build_appender,
    configure_categories,
    release_categories,
)

logger = logging.getLogger(__name__)


class LogManager:
    """
    Build JSON file loggers for named categories.

    Example:
        manager = LogManager({"directory": "/var/log/api", "enable_rotation": True})
        manager.register_category("app")
        manager.register_category("http", {"file_name": "http", "extra_log_fields": ["level"]})
        loggers = manager.get_loggers()
        loggers["http"].info({"data": "GET /clients/123"})
    """

    def __init__(self, options: Any = None) -> None:
        self._default: LoggerConfig = get_default_config()
        # None marks a category sharing the base configuration
        self._categories: Dict[str, Optional[LoggerConfig]] = {}
        self._loggers: Dict[str, logging.Logger] = {}

        merge_options(self._default, canonicalize_options(options))

    # --------------------------------------------------------------------------
    # Registration
    # --------------------------------------------------------------------------

    @property
    def default_config(self) -> LoggerConfig:
        return self._default

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    def register_category(self, name: str = const.DEFAULT_LOGGER_CATEGORY, overrides: Any = None) -> None:
        """
        Register `name` with the base configuration or a copy of it with `overrides`.

        Raises:
            DuplicateCategoryError: `name` is already registered.
            LogweaveError: The overrides hold an invalid rotation policy.
        """
        if name in self._categories:
            raise DuplicateCategoryError(name)

        overrides = canonicalize_options(overrides)
        if not is_non_empty_mapping(overrides):
            self._categories[name] = None
            logger.debug(f"Category '{name}' registered with the base configuration.")
            return

        config = copy.deepcopy(self._default)
        merge_options(config, overrides)
        self._categories[name] = config
        logger.debug(f"Category '{name}' registered with overrides: {sorted(overrides)}")

    def get_config(self, name: str) -> LoggerConfig:
        """
        Return the effective configuration of a registered category.

        Raises:
            KeyError: `name` is not registered.
        """
        return self._categories[name] or self._default

    # --------------------------------------------------------------------------
    # Materialization
    # --------------------------------------------------------------------------

    def get_appenders(self) -> Dict[str, Dict[str, Any]]:
        """
        Describe the handler of every registered category.

        Raises:
            NoCategoriesRegisteredError: Nothing was registered.
            DirectoryNotFoundError: A category directory does not exist.
        """
        if not self._categories:
            raise NoCategoriesRegisteredError()

        appenders: Dict[str, Dict[str, Any]] = {}
        for name in self._categories:
            config = self.get_config(name)
            if not directory_exists(config.directory):
                raise DirectoryNotFoundError(config.directory)
            appenders[name] = build_appender(name, config)
        return appenders

    def get_loggers(self) -> Dict[str, logging.Logger]:
        """
        Return one ready-to-use logger per registered category.

        Calling it again rebuilds the handlers without duplicating them.

        Raises:
            NoCategoriesRegisteredError: Nothing was registered.
            DirectoryNotFoundError: A category directory does not exist.
        """
        self._loggers = configure_categories(self.get_appenders())
        return dict(self._loggers)

    def shutdown(self) -> None:
        """Close the handlers installed by `get_loggers`."""
        release_categories(self._loggers)
        self._loggers = {}
