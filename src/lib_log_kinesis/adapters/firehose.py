"""Delivery backend writing to a Kinesis Firehose delivery stream.

Firehose concatenates records on the consumer side, so transformer output is
terminated with a single newline. Output of an injected formatter is trusted
as-is and sent without a separator.
"""

from __future__ import annotations

import logging

from lib_log_kinesis.application.destination import DestinationResolver
from lib_log_kinesis.application.ports.backend import DeliveryBackendPort
from lib_log_kinesis.application.ports.clients import FirehoseClientPort
from lib_log_kinesis.application.ports.formatter import EventFormatterPort
from lib_log_kinesis.application.transform import FieldTransformer
from lib_log_kinesis.domain.events import LogEvent

from ._payload import render_formatted, render_transformed, require

LOGGER = logging.getLogger(__name__)

RECORD_SEPARATOR = b"\n"


class FirehoseBackend(DeliveryBackendPort):
    """Write events to a Firehose delivery stream via ``put_record``."""

    def __init__(
        self,
        client: FirehoseClientPort,
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
    def client(self) -> FirehoseClientPort:
        return self._client

    def write(self, event: LogEvent) -> None:
        require(event, "event")
        if self._formatter is not None:
            data = render_formatted(self._formatter, event)
        else:
            data = render_transformed(self._transformer, event) + RECORD_SEPARATOR

        delivery_stream = self._resolver.stream_name(event)
        LOGGER.debug("put_record delivery_stream=%s bytes=%d", delivery_stream, len(data))
        self._client.put_record(DeliveryStreamName=delivery_stream, Record={"Data": data})


__all__ = ["FirehoseBackend", "RECORD_SEPARATOR"]
