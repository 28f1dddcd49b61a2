from __future__ import annotations

"""
JSON Layout Rendering.

Projects a single log event onto the fields enabled in a category's
layout and serializes the result as one compact JSON line. Rendering is
pure: it never touches the filesystem and never raises because a payload
property is missing.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from logweave.domain import constants as const
from logweave.domain.config import LoggerConfig
from logweave.infra.network import get_server_ip

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
_JSON_SEPARATORS = (",", ":")


@dataclass
class LogEvent:
    """
    Engine-neutral view of an emitted log event.

    Attributes:
        start_time: Local time the event was created.
        level: Severity label (e.g. "INFO").
        category: Category the event was emitted under.
        file_name: Source file of the call site, if known.
        function_name: Function of the call site, if known.
        line_number: Line of the call site, if known.
        data: Application payload; the first element carries the fields.
        message: Pre-formatted text used when the payload is not a mapping.
    """
    start_time: datetime
    level: str
    category: str
    file_name: Optional[str] = None
    function_name: Optional[str] = None
    line_number: Optional[int] = None
    data: List[Any] = field(default_factory=list)
    message: Optional[str] = None


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render(config: LoggerConfig, event: LogEvent) -> str:
    """
    Render `event` as a compact JSON object according to `config`.

    Args:
        config: Resolved category configuration.
        event: Event to render.

    Returns:
        str: One JSON object, without a trailing newline.
    """
    return dumps_compact(project_event(config, event))


def project_event(config: LoggerConfig, event: LogEvent) -> Dict[str, Any]:
    """Build the ordered field -> value mapping rendered for `event`."""
    layout: Dict[str, Any] = {}
    for name in const.LOG_FIELDS:
        if not config.layout.get(name):
            continue
        key = const.FIELD_SHORT_NAMES[name] if config.short_field_names else name
        layout[key] = _extract(name, event)
    return layout


def format_timestamp(moment: datetime) -> str:
    """Format as `YYYY-MM-DD HH:mm:ss.SSS`."""
    return f"{moment.strftime(TIMESTAMP_FORMAT)}.{moment.microsecond // 1000:03d}"


def dumps_compact(value: Any, **kwargs: Any) -> str:
    """JSON-encode without whitespace, keeping non-ASCII characters."""
    kwargs.setdefault("default", str)
    return json.dumps(value, separators=_JSON_SEPARATORS, ensure_ascii=False, **kwargs)


# -----------------------------------------------------------------------------
# FIELD EXTRACTION
# -----------------------------------------------------------------------------

def _extract(name: str, event: LogEvent) -> Any:
    if name == const.LogField.TIMESTAMP:
        return format_timestamp(event.start_time)
    if name == const.LogField.LEVEL:
        return event.level
    if name == const.LogField.CATEGORY:
        return event.category
    if name == const.LogField.SERVER_IP:
        return get_server_ip()
    if name == const.LogField.FILE:
        return os.path.basename(event.file_name) if event.file_name else None
    if name == const.LogField.FUNCTION:
        return event.function_name
    if name == const.LogField.LINE_NUMBER:
        return event.line_number
    return _payload_value(name, event)


def _payload_value(name: str, event: LogEvent) -> Any:
    payload = event.data[0] if event.data else None

    if not isinstance(payload, Mapping):
        # Plain-text logging: logger.info("message")
        if name == const.LogField.DATA:
            return event.message
        return None

    value = payload.get(name)
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return dumps_compact(value)
        except (TypeError, ValueError):
            # Non-string keys or circular references
            return str(value)
    return value
