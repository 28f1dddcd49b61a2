from __future__ import annotations

"""
Unit tests for the Layout Renderer.

Verifies:
1. Field selection, ordering and short names.
2. Per-field extraction rules.
3. Defensive rendering of incomplete payloads.
"""

import json
from datetime import datetime
from typing import Any, Dict

import pytest

from logweave.core.layout import LogEvent, format_timestamp, project_event, render
from logweave.domain import constants as const
from logweave.domain.config import LoggerConfig, get_default_config, get_default_layout


def _config(*fields: str, short: bool = False) -> LoggerConfig:
    cfg = get_default_config()
    cfg.layout = {name: name in fields for name in const.LOG_FIELDS}
    cfg.short_field_names = short
    return cfg


def _event(event_time: datetime, payload: Any = None, **kwargs: Any) -> LogEvent:
    defaults: Dict[str, Any] = {
        "start_time": event_time,
        "level": "INFO",
        "category": "app",
        "file_name": "/srv/app/handlers/users.py",
        "function_name": "get_user",
        "line_number": 42,
        "data": [payload if payload is not None else {"data": "hello"}],
    }
    defaults.update(kwargs)
    return LogEvent(**defaults)


# -----------------------------------------------------------------------------
# 1. Selection and naming
# -----------------------------------------------------------------------------

def test_short_names_render_in_registry_order(event_time: datetime) -> None:
    line = render(_config("timestamp", "level", short=True), _event(event_time))

    assert line == '{"ts":"2026-10-18 09:05:07.123","lvl":"INFO"}'


def test_default_layout_renders_base_fields(event_time: datetime) -> None:
    cfg = get_default_config()
    out = json.loads(render(cfg, _event(event_time)))

    assert list(out) == ["timestamp", "data"]
    assert out["data"] == "hello"


def test_order_ignores_layout_insertion_order(event_time: datetime) -> None:
    cfg = get_default_config()
    cfg.layout = {"category": True, "level": True, "timestamp": True}

    assert list(project_event(cfg, _event(event_time))) == ["timestamp", "level", "category"]


def test_unknown_layout_names_are_not_rendered(event_time: datetime) -> None:
    cfg = get_default_config()
    cfg.layout["tenant"] = True

    out = project_event(cfg, _event(event_time, {"data": "x", "tenant": "acme"}))
    assert "tenant" not in out


def test_every_field_has_a_short_name(event_time: datetime) -> None:
    cfg = _config(*const.LOG_FIELDS, short=True)
    out = project_event(cfg, _event(event_time))

    assert list(out) == [const.FIELD_SHORT_NAMES[name] for name in const.LOG_FIELDS]


# -----------------------------------------------------------------------------
# 2. Extraction rules
# -----------------------------------------------------------------------------

def test_attribution_and_host_fields(event_time: datetime, fake_server_ip: str) -> None:
    cfg = _config("level", "file", "function", "lineNumber", "serverIp", "category")
    out = project_event(cfg, _event(event_time, category="http", level="ERROR"))

    assert out == {
        "level": "ERROR",
        "file": "users.py",
        "function": "get_user",
        "lineNumber": 42,
        "serverIp": fake_server_ip,
        "category": "http",
    }


def test_payload_fields(event_time: datetime) -> None:
    cfg = _config("data", "id", "context")
    payload = {"data": "GET /clients/123", "id": 123456789, "context": "billing"}

    assert project_event(cfg, _event(event_time, payload)) == payload


def test_composite_payload_values_are_serialized(event_time: datetime) -> None:
    cfg = _config("data", "context")
    payload = {"data": {"key": "value"}, "context": ["a", 1]}

    line = render(cfg, _event(event_time, payload))

    assert '"data":"{\\"key\\":\\"value\\"}"' in line
    assert json.loads(line) == {"data": '{"key":"value"}', "context": '["a",1]'}


def test_unserializable_payload_values_fall_back_to_text(event_time: datetime) -> None:
    cyclic: list = []
    cyclic.append(cyclic)
    payload = {"data": {(1, 2): "x"}, "context": cyclic}

    out = json.loads(render(_config("data", "context"), _event(event_time, payload)))

    assert out == {"data": "{(1, 2): 'x'}", "context": "[[...]]"}


def test_non_ascii_is_kept(event_time: datetime) -> None:
    line = render(_config("data"), _event(event_time, {"data": "déjà vu"}))
    assert "déjà vu" in line


def test_format_timestamp_pads_milliseconds() -> None:
    assert format_timestamp(datetime(2026, 1, 2, 3, 4, 5, 7000)) == "2026-01-02 03:04:05.007"


# -----------------------------------------------------------------------------
# 3. Incomplete payloads
# -----------------------------------------------------------------------------

def test_missing_payload_property_renders_null(event_time: datetime) -> None:
    out = project_event(_config("data", "id"), _event(event_time, {"data": "x"}))
    assert out == {"data": "x", "id": None}


def test_text_payload_renders_message_as_data(event_time: datetime) -> None:
    event = _event(event_time, "plain text", message="plain text")
    out = project_event(_config("data", "id"), event)

    assert out == {"data": "plain text", "id": None}


def test_empty_payload_and_attribution(event_time: datetime) -> None:
    cfg = _config("data", "file", "function")
    event = _event(event_time, file_name=None, function_name=None, data=[])

    assert project_event(cfg, event) == {"data": None, "file": None, "function": None}


def test_render_does_not_mutate_config(event_time: datetime) -> None:
    cfg = _config("timestamp", "data")
    render(cfg, _event(event_time))

    assert cfg.layout == {**{k: False for k in get_default_layout()}, "timestamp": True, "data": True}
