"""Domain event describing a structured log message.

Purpose
-------
Provide the transient record handed to the hook once per logging call.

Contents
--------
* :class:`LogEvent` dataclass with helper methods.
* Reserved field names used as per-event override channels.
* Utility functions ``_ensure_aware`` (timestamp validation) and ``_detach``
  (snapshot copies).

System Role
-----------
Sits in the domain layer so the hook, the backends, and the stdlib handler
bridge all manipulate the same plain data object.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel

STREAM_NAME_FIELD = "stream_name"
"""Field selecting the destination stream for a single event."""

PARTITION_KEY_FIELD = "partition_key"
"""Field selecting the partition key for a single event."""

MESSAGE_FIELD = "message"
"""Field carrying the human-readable text in the serialized payload."""


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _detach(value: Any) -> Any:
    """Deep-copy ``value``; objects that refuse copying are shared as-is."""
    try:
        return copy.deepcopy(value)
    except Exception:  # noqa: BLE001
        return value


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Log event handed to :meth:`KinesisHook.fire`.

    Attributes
    ----------
    level:
        :class:`LogLevel` severity associated with the event.
    message:
        Rendered message passed by the caller.
    fields:
        Shallow copy of caller-supplied key/value pairs. Insertion order is
        preserved but carries no meaning for the serialized payload.
    logger_name:
        Logical logger emitting the event (empty when fired directly).
    timestamp:
        Time of the event in timezone-aware UTC.

    Examples
    --------
    >>> source = {'user': 'alice'}
    >>> event = LogEvent(LogLevel.INFO, 'login', source)
    >>> source['user'] = 'mallory'
    >>> event.fields['user']
    'alice'
    """

    level: LogLevel
    message: str
    fields: dict[str, Any] = field(default_factory=dict)
    logger_name: str = ""
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "fields", dict(self.fields or {}))

    def snapshot(self) -> "LogEvent":
        """Return a copy whose field values are detached from this event.

        The asynchronous dispatch path hands the snapshot to the worker thread
        so callers may keep mutating ``fields``, including nested containers,
        after ``fire`` returns. Values that cannot be deep-copied (locks,
        sockets) are shared with the original.

        Examples
        --------
        >>> context = {'user': 'alice'}
        >>> detached = LogEvent(LogLevel.INFO, 'login', {'ctx': context}).snapshot()
        >>> context['user'] = 'mallory'
        >>> detached.fields['ctx']
        {'user': 'alice'}
        """

        return replace(self, fields={key: _detach(value) for key, value in self.fields.items()})

    def with_fields(self, **fields: Any) -> "LogEvent":
        """Return a copy with ``fields`` merged over the existing mapping."""

        merged = dict(self.fields)
        merged.update(fields)
        return replace(self, fields=merged)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event envelope to a dictionary with ISO8601 timestamps."""

        return {
            "timestamp": self.timestamp.isoformat(),
            "logger_name": self.logger_name,
            "level": self.level.severity,
            "message": self.message,
            "fields": dict(self.fields),
        }


__all__ = [
    "LogEvent",
    "MESSAGE_FIELD",
    "PARTITION_KEY_FIELD",
    "STREAM_NAME_FIELD",
]
