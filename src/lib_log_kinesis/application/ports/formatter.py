"""Port for formatters injected in place of the field transformer.

Purpose
-------
Let hosts decide the exact bytes written to the stream. When a formatter is
configured its output is used verbatim: no newline separator is appended, even
for Firehose delivery.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_kinesis.domain.events import LogEvent


@runtime_checkable
class EventFormatterPort(Protocol):
    """Render a log event into the record payload."""

    def format(self, event: LogEvent) -> bytes | str:
        """Return the payload for ``event``; ``str`` results are UTF-8 encoded."""


__all__ = ["EventFormatterPort"]
