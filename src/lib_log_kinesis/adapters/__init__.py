"""Adapter implementations for the Kinesis hook ports."""

from __future__ import annotations

from .firehose import FirehoseBackend
from .formatting import JsonLinesFormatter, TemplateFormatter
from .stream import StreamBackend

__all__ = [
    "FirehoseBackend",
    "JsonLinesFormatter",
    "StreamBackend",
    "TemplateFormatter",
]
