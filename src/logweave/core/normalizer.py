from __future__ import annotations

"""
Options Normalization.

Guards the merge logic against malformed input: anything that is not a
non-empty mapping becomes an empty options dict, and the camelCase
spellings accepted from JSON documents are translated to the canonical
snake_case keys.
"""

from collections.abc import Mapping
from typing import Any, Dict

# camelCase spelling -> canonical key
_OPTION_ALIASES: Dict[str, str] = {
    "fileName": "file_name",
    "enableRotation": "enable_rotation",
    "shortFieldNames": "short_field_names",
    "extraLogFields": "extra_log_fields",
    "rotationOptions": "rotation_options",
}

_ROTATION_OPTION_ALIASES: Dict[str, str] = {
    "backupCount": "backup_count",
    "maxFileSize": "max_file_size",
    "archiveBackups": "archive_backups",
}


def is_non_empty_mapping(value: Any) -> bool:
    """Return True if `value` is a mapping with at least one key."""
    return isinstance(value, Mapping) and len(value) > 0


def is_non_empty_list(value: Any) -> bool:
    """Return True if `value` is a list or tuple with at least one item."""
    return isinstance(value, (list, tuple)) and len(value) > 0


def sanitize_options(value: Any) -> Any:
    """
    Return `value` unchanged if it is a non-empty mapping, otherwise `{}`.

    Args:
        value: Untrusted options value.

    Returns:
        The original mapping or a new empty dict.
    """
    if not is_non_empty_mapping(value):
        return {}
    return value


def canonicalize_options(options: Any) -> Dict[str, Any]:
    """
    Translate camelCase option keys into their canonical spelling.

    Canonical keys win when both spellings are present. Unknown keys are
    kept as-is; the merge allow-list ignores them later.
    """
    options = sanitize_options(options)
    out = _rename_keys(options, _OPTION_ALIASES)

    rotation = out.get("rotation_options")
    if is_non_empty_mapping(rotation):
        out["rotation_options"] = _rename_keys(rotation, _ROTATION_OPTION_ALIASES)
    return out


def _rename_keys(source: Mapping, aliases: Dict[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in source.items():
        canonical = aliases.get(key, key)
        if canonical != key and canonical in source:
            continue
        out[canonical] = value
    return out
