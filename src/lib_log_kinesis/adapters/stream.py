"""Delivery backend writing to a Kinesis data stream.

Purpose
-------
Send one ``PutRecord`` request per event to the direct-ingestion service.

Contents
--------
* :class:`StreamBackend` - concrete :class:`DeliveryBackendPort`.

System Role
-----------
Selected by the composition root when the hook runs in
:attr:`KinesisMode.STREAM`. The payload is sent without framing: consumers of
existing streams rely on byte-for-byte identical records.
"""

from __future__ import annotations

import logging

from lib_log_kinesis.application.destination import DestinationResolver
from lib_log_kinesis.application.ports.backend import DeliveryBackendPort
from lib_log_kinesis.application.ports.clients import KinesisClientPort
from lib_log_kinesis.application.ports.formatter import EventFormatterPort
from lib_log_kinesis.application.transform import FieldTransformer
from lib_log_kinesis.domain.events import LogEvent

from ._payload import render_formatted, render_transformed, require

LOGGER = logging.getLogger(__name__)


class StreamBackend(DeliveryBackendPort):
    """Write events to a Kinesis data stream via ``put_record``.

    Examples
    --------
    >>> class FakeKinesis:
    ...     def __init__(self):
    ...         self.calls = []
    ...     def put_record(self, **kwargs):
    ...         self.calls.append(kwargs)
    ...         return {'ShardId': 'shardId-000000000000', 'SequenceNumber': '1'}
    >>> from lib_log_kinesis.domain.levels import LogLevel
    >>> client = FakeKinesis()
    >>> backend = StreamBackend(client, resolver=DestinationResolver('app-logs'), transformer=FieldTransformer())
    >>> backend.write(LogEvent(LogLevel.INFO, 'boot'))
    >>> client.calls[0]
    {'StreamName': 'app-logs', 'PartitionKey': 'boot', 'Data': b'{"message":"boot"}'}
    """

    def __init__(
        self,
        client: KinesisClientPort,
        *,
        resolver: DestinationResolver,
        transformer: FieldTransformer,
        formatter: EventFormatterPort | None = None,
    ) -> None:
        require(client, "client")
        require(resolver, "resolver")
        require(transformer, "transformer")
        self._client = client
        self._resolver = resolver
        self._transformer = transformer
        self._formatter = formatter

    @property
    def client(self) -> KinesisClientPort:
        return self._client

    def write(self, event: LogEvent) -> None:
        """Send ``event``; formatter and transport exceptions propagate as-is."""
        require(event, "event")
        if self._formatter is not None:
            data = render_formatted(self._formatter, event)
        else:
            data = render_transformed(self._transformer, event)

        stream_name = self._resolver.stream_name(event)
        partition_key = self._resolver.partition_key(event)
        LOGGER.debug("put_record stream=%s partition_key=%s bytes=%d", stream_name, partition_key, len(data))
        self._client.put_record(StreamName=stream_name, PartitionKey=partition_key, Data=data)


__all__ = ["StreamBackend"]
