from __future__ import annotations

"""
Unit tests for the static field registry and rotation vocabulary.
"""

import pytest

from logweave.domain import constants as const


def test_registry_declaration_order() -> None:
    """Rendering order follows the declaration order of the registry."""
    assert list(const.LOG_FIELDS) == [
        "timestamp", "data", "level", "file", "function",
        "lineNumber", "id", "serverIp", "context", "category",
    ]


def test_base_and_extra_fields_partition_the_registry() -> None:
    assert const.BASE_FIELDS == {"timestamp", "data"}
    assert const.EXTRA_FIELDS == set(const.LOG_FIELDS) - const.BASE_FIELDS


@pytest.mark.parametrize("name, short", [
    ("timestamp", "ts"),
    ("data", "dt"),
    ("level", "lvl"),
    ("lineNumber", "ln"),
    ("serverIp", "sIp"),
    ("category", "cat"),
])
def test_short_names(name: str, short: str) -> None:
    assert const.FIELD_SHORT_NAMES[name] == short
    assert 2 <= len(short) <= 4


def test_registry_is_immutable() -> None:
    with pytest.raises(TypeError):
        const.LOG_FIELDS["custom"] = const.FieldDescriptor("custom", "cu")  # type: ignore[index]


def test_rotation_vocabulary_maps_to_strategies() -> None:
    assert const.ROTATION_TYPES_MAP["size"] is const.AppenderType.FILE
    assert const.ROTATION_TYPES_MAP["time"] is const.AppenderType.DATE_FILE
    assert set(const.FREQUENCY_PATTERN_MAP) == {"monthly", "daily", "hourly"}
