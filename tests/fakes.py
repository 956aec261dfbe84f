"""In-memory stand-ins for the boto3 clients used by the backends."""

from __future__ import annotations

import threading
from typing import Any


class FakeKinesisClient:
    """Record ``put_record`` keyword arguments like a boto3 kinesis client."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[dict[str, Any]] = []
        self.error = error
        self.called = threading.Event()
        self._lock = threading.Lock()

    def put_record(self, **kwargs: Any) -> dict[str, Any]:
        with self._lock:
            self.calls.append(kwargs)
        self.called.set()
        if self.error is not None:
            raise self.error
        return {"ShardId": "shardId-000000000000", "SequenceNumber": str(len(self.calls))}


class FakeFirehoseClient(FakeKinesisClient):
    """Record ``put_record`` keyword arguments like a boto3 firehose client."""

    def put_record(self, **kwargs: Any) -> dict[str, Any]:
        super().put_record(**kwargs)
        return {"RecordId": f"rec-{len(self.calls)}", "Encrypted": False}


__all__ = ["FakeFirehoseClient", "FakeKinesisClient"]
