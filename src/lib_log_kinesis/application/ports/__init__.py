"""Protocols describing the seams between the hook and its collaborators."""

from __future__ import annotations

from .backend import DeliveryBackendPort
from .clients import FirehoseClientPort, KinesisClientPort
from .formatter import EventFormatterPort

__all__ = [
    "DeliveryBackendPort",
    "EventFormatterPort",
    "FirehoseClientPort",
    "KinesisClientPort",
]
