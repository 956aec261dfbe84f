"""Ready-made formatters that can be injected into either backend.

Why
---
Hosts occasionally need a record layout different from the field transformer's
JSON object (plain text lines for a Firehose-to-S3 archive, or an envelope with
timestamp and level). These formatters cover the common cases; anything
implementing :class:`EventFormatterPort` works the same way.

Contents
--------
* :func:`build_format_payload` - placeholder values for ``str.format`` templates.
* :class:`TemplateFormatter` - renders a template, optionally newline-terminated.
* :class:`JsonLinesFormatter` - envelope JSON object with a trailing newline.

System Role
-----------
Injected formatter output is written verbatim by both backends, so these
formatters own any framing they need.
"""

from __future__ import annotations

import json
from typing import Any

from lib_log_kinesis.application.ports.formatter import EventFormatterPort
from lib_log_kinesis.application.transform import coerce_value
from lib_log_kinesis.domain.events import LogEvent

DEFAULT_TEMPLATE = "{timestamp} {LEVEL:<8} {logger_name} {message}{fields_text}"


def build_format_payload(event: LogEvent) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_kinesis.domain.levels import LogLevel
    >>> event = LogEvent(LogLevel.WARNING, 'disk low', {'free': 3}, 'svc', datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    >>> payload = build_format_payload(event)
    >>> payload['LEVEL'], payload['fields_text'], payload['hh']
    ('WARNING', ' free=3', '03')
    """

    fields = dict(event.fields)
    fields_text = ""
    if fields:
        fields_text = " " + " ".join(f"{key}={value}" for key, value in sorted(fields.items()))

    level_text = event.level.severity.upper()
    return {
        "timestamp": event.timestamp.isoformat(),
        "YYYY": f"{event.timestamp.year:04d}",
        "MM": f"{event.timestamp.month:02d}",
        "DD": f"{event.timestamp.day:02d}",
        "hh": f"{event.timestamp.hour:02d}",
        "mm": f"{event.timestamp.minute:02d}",
        "ss": f"{event.timestamp.second:02d}",
        "level": event.level.severity,
        "LEVEL": level_text,
        "level_name": event.level.name,
        "logger_name": event.logger_name,
        "message": event.message,
        "fields": fields,
        "fields_text": fields_text,
    }


class TemplateFormatter(EventFormatterPort):
    """Render events through a ``str.format`` template.

    Examples
    --------
    >>> from lib_log_kinesis.domain.levels import LogLevel
    >>> formatter = TemplateFormatter("{LEVEL}: {message}")
    >>> formatter.format(LogEvent(LogLevel.ERROR, 'boom'))
    b'ERROR: boom\\n'
    """

    def __init__(self, template: str = DEFAULT_TEMPLATE, *, newline: bool = True) -> None:
        self._template = template
        self._newline = newline

    def format(self, event: LogEvent) -> bytes:
        text = self._template.format(**build_format_payload(event))
        if self._newline:
            text += "\n"
        return text.encode("utf-8")


class JsonLinesFormatter(EventFormatterPort):
    """Serialize the full event envelope as one JSON line.

    Unlike the field transformer, encoding errors raise ``TypeError`` (or
    ``ValueError`` for ``NaN`` and infinities) and therefore abort the write.
    """

    def format(self, event: LogEvent) -> bytes:
        envelope = event.to_dict()
        envelope["fields"] = {key: coerce_value(value) for key, value in envelope["fields"].items()}
        return (json.dumps(envelope, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False) + "\n").encode("utf-8")


__all__ = ["DEFAULT_TEMPLATE", "JsonLinesFormatter", "TemplateFormatter", "build_format_payload"]
