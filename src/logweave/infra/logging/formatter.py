from __future__ import annotations

"""
JSON Layout Formatter.

Bridges the standard logging pipeline and the layout renderer: each
LogRecord is converted into a LogEvent and rendered with the category's
resolved configuration.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from logweave.core.layout import LogEvent, dumps_compact, project_event
from logweave.domain import constants as const
from logweave.domain.config import LoggerConfig
from logweave.infra.network import get_server_ip


def record_to_event(record: logging.LogRecord) -> LogEvent:
    """Build the engine-neutral event of a LogRecord."""
    payload = record.msg
    message = None if isinstance(payload, Mapping) else record.getMessage()
    return LogEvent(
        start_time=datetime.fromtimestamp(record.created),
        level=record.levelname,
        category=record.name,
        file_name=record.pathname,
        function_name=record.funcName,
        line_number=record.lineno,
        data=[payload],
        message=message,
    )


class JsonLayoutFormatter(JsonFormatter):
    """
    Render records as one JSON object per line using a LoggerConfig layout.

    The output is byte-for-byte what `logweave.core.layout.render` produces
    for the same event.
    """

    def __init__(self, config: LoggerConfig, **kwargs: Any) -> None:
        kwargs.setdefault("json_ensure_ascii", False)
        super().__init__(**kwargs)
        self.config = config
        # Warm the address cache so rendering never blocks on a lookup
        if config.layout.get(const.LogField.SERVER_IP.value):
            get_server_ip()

    def add_fields(
            self,
            log_record: Dict[str, Any],
            record: logging.LogRecord,
            message_dict: Dict[str, Any],
    ) -> None:
        log_record.update(project_event(self.config, record_to_event(record)))

    def jsonify_log_record(self, log_record: Dict[str, Any]) -> str:
        return dumps_compact(log_record)
