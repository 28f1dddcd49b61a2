from __future__ import annotations

"""
Configuration Merge Service.

Overlays a (partial) options mapping onto a resolved configuration.
Plain settings travel through an allow-listed recursive walk; the field
selection and the rotation policy use dedicated reset-then-apply merges.
"""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Union

from logweave.core.normalizer import is_non_empty_list, sanitize_options
from logweave.core.rotation import apply_rotation_policy
from logweave.domain import constants as const
from logweave.domain.config import LoggerConfig, get_default_layout

logger = logging.getLogger(__name__)

# A permission tree: True marks an assignable leaf, a nested dict allows
# recursion into the matching slot of the target.
PermissionTree = Dict[str, Union[bool, "PermissionTree"]]

DIRECT_CONFIG_UPDATES: PermissionTree = {
    "directory": True,
    "file_name": True,
    "enable_rotation": True,
    "short_field_names": True,
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def merge_options(config: LoggerConfig, options: Any) -> None:
    """
    Merge canonical `options` into `config` in place.

    Args:
        config: Target configuration (base or a category copy).
        options: Canonical options mapping; anything else is treated as empty.

    Raises:
        LogweaveError subclasses raised by the rotation policy resolver.
    """
    options = sanitize_options(options)

    for key, value in options.items():
        update_field(config, DIRECT_CONFIG_UPDATES, key, value)

    extra_fields = options.get("extra_log_fields")
    if is_non_empty_list(extra_fields):
        update_layout(config, extra_fields)

    if config.enable_rotation:
        apply_rotation_policy(config, sanitize_options(options.get("rotation_options")))


def update_field(target: Any, allowed: PermissionTree, key: str, value: Any) -> None:
    """
    Assign `value` to `key` on `target` if the permission tree allows it.

    Recurses field by field when the permission is a subtree and the value
    is a mapping. Keys outside the tree, and mappings sent to a leaf, are
    ignored.
    """
    permission = allowed.get(key) if isinstance(key, str) else None
    if not permission:
        return

    if isinstance(permission, dict):
        if isinstance(value, Mapping):
            slot = _get_slot(target, key)
            for sub_key, sub_value in value.items():
                update_field(slot, permission, sub_key, sub_value)
        return

    if isinstance(value, Mapping):
        return
    _set_slot(target, key, value)


def update_layout(config: LoggerConfig, requested: Iterable[Any]) -> None:
    """Reset the layout to registry defaults, then enable the requested extra fields."""
    reset_layout(config)
    for name in requested:
        if isinstance(name, str) and name in const.EXTRA_FIELDS:
            config.layout[name] = True
        else:
            logger.debug(f"Ignoring unknown extra log field: {name!r}")


def reset_layout(config: LoggerConfig) -> None:
    config.layout = get_default_layout()


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _get_slot(target: Any, key: str) -> Any:
    if isinstance(target, dict):
        return target.setdefault(key, {})
    return getattr(target, key)


def _set_slot(target: Any, key: str, value: Any) -> None:
    if isinstance(target, dict):
        target[key] = value
    elif dataclasses.is_dataclass(target) and hasattr(target, key):
        setattr(target, key, value)
