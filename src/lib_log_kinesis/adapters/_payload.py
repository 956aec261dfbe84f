"""Payload selection shared by the stream and firehose backends."""

from __future__ import annotations

from lib_log_kinesis.application.ports.formatter import EventFormatterPort
from lib_log_kinesis.application.transform import FieldTransformer
from lib_log_kinesis.domain.events import LogEvent
from lib_log_kinesis.errors import InvalidInputError


def require(value: object, name: str) -> None:
    """Raise :class:`InvalidInputError` when a collaborator is missing."""
    if value is None:
        raise InvalidInputError(f"{name} parameter cannot be None")


def render_formatted(formatter: EventFormatterPort, event: LogEvent) -> bytes:
    """Run the injected formatter; its exceptions propagate unchanged."""
    rendered = formatter.format(event)
    if isinstance(rendered, str):
        return rendered.encode("utf-8")
    return bytes(rendered)


def render_transformed(transformer: FieldTransformer, event: LogEvent) -> bytes:
    return transformer.transform(event)


__all__ = ["render_formatted", "render_transformed", "require"]
