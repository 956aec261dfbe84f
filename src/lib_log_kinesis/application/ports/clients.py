"""Ports mirroring the boto3 client calls issued by the backends.

Purpose
-------
Keep the backends testable: anything exposing the same ``put_record`` keyword
contract as the boto3 ``kinesis`` and ``firehose`` clients can be plugged in.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class KinesisClientPort(Protocol):
    """Subset of the boto3 ``kinesis`` client used by the stream backend."""

    def put_record(self, *, StreamName: str, Data: bytes, PartitionKey: str) -> Mapping[str, Any]:
        """Append one record to a Kinesis data stream."""


@runtime_checkable
class FirehoseClientPort(Protocol):
    """Subset of the boto3 ``firehose`` client used by the firehose backend."""

    def put_record(self, *, DeliveryStreamName: str, Record: Mapping[str, bytes]) -> Mapping[str, Any]:
        """Append one record to a Firehose delivery stream."""


__all__ = ["FirehoseClientPort", "KinesisClientPort"]
