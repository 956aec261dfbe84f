"""Port describing the delivery backends behind the hook."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_kinesis.domain.events import LogEvent


@runtime_checkable
class DeliveryBackendPort(Protocol):
    """Write exactly one record per event to the streaming service."""

    def write(self, event: LogEvent) -> None:
        """Encode ``event`` and issue a single put-record call."""


__all__ = ["DeliveryBackendPort"]
