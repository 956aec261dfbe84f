"""Domain entities and value objects used by the Kinesis hook."""

from __future__ import annotations

from .events import MESSAGE_FIELD, PARTITION_KEY_FIELD, STREAM_NAME_FIELD, LogEvent
from .levels import DEFAULT_LEVELS, LogLevel

__all__ = [
    "DEFAULT_LEVELS",
    "LogEvent",
    "LogLevel",
    "MESSAGE_FIELD",
    "PARTITION_KEY_FIELD",
    "STREAM_NAME_FIELD",
]
