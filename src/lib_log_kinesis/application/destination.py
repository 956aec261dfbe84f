"""Destination resolver choosing stream name and partition key per event."""

from __future__ import annotations

from lib_log_kinesis.domain.events import PARTITION_KEY_FIELD, STREAM_NAME_FIELD, LogEvent


class DestinationResolver:
    """Derive the target stream and partition key for an event.

    Per-event overrides travel in the reserved ``stream_name`` and
    ``partition_key`` fields; values that are missing or not strings fall
    through to the hook defaults.

    Examples
    --------
    >>> from lib_log_kinesis.domain.levels import LogLevel
    >>> resolver = DestinationResolver('app-logs', default_partition_key='shardA')
    >>> event = LogEvent(LogLevel.INFO, 'boot')
    >>> resolver.stream_name(event), resolver.partition_key(event)
    ('app-logs', 'shardA')
    >>> resolver.default_partition_key = ''
    >>> resolver.partition_key(event)
    'boot'
    >>> resolver.stream_name(event.with_fields(stream_name='audit'))
    'audit'
    """

    def __init__(self, default_stream_name: str = "", *, default_partition_key: str = "") -> None:
        self.default_stream_name = default_stream_name
        self.default_partition_key = default_partition_key

    def stream_name(self, event: LogEvent) -> str:
        override = event.fields.get(STREAM_NAME_FIELD)
        if isinstance(override, str):
            return override
        return self.default_stream_name

    def partition_key(self, event: LogEvent) -> str:
        # Falling back to the message keeps identical messages on one shard.
        override = event.fields.get(PARTITION_KEY_FIELD)
        if isinstance(override, str):
            return override
        if self.default_partition_key:
            return self.default_partition_key
        return event.message


__all__ = ["DestinationResolver"]
