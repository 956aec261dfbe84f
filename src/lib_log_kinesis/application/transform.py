"""Field transformer turning event fields into the JSON record payload.

Purpose
-------
Convert the caller-supplied fields of a :class:`LogEvent` into a UTF-8 JSON
object, honouring per-field ignore rules and custom filters.

Contents
--------
* :data:`FieldFilter` - contract of a per-field transform.
* :func:`coerce_value` - default coercion for values without a filter.
* :class:`FieldTransformer` - ignore/filter registry plus :meth:`transform`.

System Role
-----------
Shared by both delivery backends. Framing (e.g. Firehose's trailing newline)
is added by the backend, never here.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from lib_log_kinesis.domain.events import MESSAGE_FIELD, LogEvent
from lib_log_kinesis.errors import InvalidInputError

LOGGER = logging.getLogger(__name__)

FieldFilter = Callable[[Any], Any]
"""Accepts one field value and returns its replacement."""

_JSON_NATIVE = (str, int, float, bool, list, tuple, dict, type(None))


def _renders_text(value: Any) -> bool:
    """Return ``True`` when ``value``'s class provides its own ``__str__``."""

    return type(value).__str__ is not object.__str__


def coerce_value(value: Any) -> Any:
    """Apply the default coercion policy to a single field value.

    Examples
    --------
    >>> coerce_value(3)
    3
    >>> coerce_value(ValueError("bad input"))
    'bad input'
    >>> from datetime import date
    >>> coerce_value(date(2024, 1, 2))
    '2024-01-02'
    >>> marker = object()
    >>> coerce_value(marker) is marker
    True
    """

    if isinstance(value, _JSON_NATIVE):
        return value
    if isinstance(value, BaseException):
        return str(value)
    if _renders_text(value):
        return str(value)
    return value


class FieldTransformer:
    """Serialize event fields applying ignore, filter, then default coercion.

    The ignore set and filter map are plain containers mutated through
    :meth:`add_ignore` and :meth:`add_filter`. They are read without locking
    during dispatch, so register everything before the hook starts receiving
    events from several threads.

    Examples
    --------
    >>> from lib_log_kinesis.domain.levels import LogLevel
    >>> transformer = FieldTransformer(ignore=['password'], filters={'user': str.upper})
    >>> event = LogEvent(LogLevel.INFO, 'login', {'user': 'alice', 'password': 'x'})
    >>> transformer.transform(event)
    b'{"message":"login","user":"ALICE"}'
    """

    def __init__(
        self,
        *,
        ignore: Iterable[str] = (),
        filters: Mapping[str, FieldFilter] | None = None,
    ) -> None:
        self._ignore: set[str] = set()
        self._filters: dict[str, FieldFilter] = {}
        for name in ignore:
            self.add_ignore(name)
        for name, fn in (filters or {}).items():
            self.add_filter(name, fn)

    @property
    def ignored(self) -> frozenset[str]:
        return frozenset(self._ignore)

    @property
    def filters(self) -> Mapping[str, FieldFilter]:
        return dict(self._filters)

    def add_ignore(self, name: str) -> None:
        """Drop ``name`` from every payload, even when a filter is registered."""
        self._ignore.add(name)

    def add_filter(self, name: str, fn: FieldFilter) -> None:
        """Replace the value of field ``name`` with ``fn(value)``."""
        if not callable(fn):
            raise InvalidInputError(f"filter for field {name!r} must be callable, got {type(fn).__name__}")
        self._filters[name] = fn

    def build_payload(self, event: LogEvent) -> dict[str, Any]:
        """Return the mapping that :meth:`transform` serializes.

        The event's own field mapping is left untouched; ``message`` is
        synthesized from :attr:`LogEvent.message` when the caller did not set
        it.
        """

        fields: dict[str, Any] = dict(event.fields)
        if MESSAGE_FIELD not in fields:
            fields[MESSAGE_FIELD] = event.message

        payload: dict[str, Any] = {}
        for name, value in fields.items():
            if name in self._ignore:
                continue
            fn = self._filters.get(name)
            payload[name] = fn(value) if fn is not None else coerce_value(value)
        return payload

    def transform(self, event: LogEvent) -> bytes:
        """Serialize ``event`` into a UTF-8 JSON object without trailing framing.

        Values the JSON encoder cannot handle, including ``NaN`` and infinities,
        produce an empty payload rather than an exception; the failure is
        reported as a warning on this module's logger.
        """

        if event is None:
            raise InvalidInputError("event must not be None")
        payload = self.build_payload(event)
        try:
            text = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            LOGGER.warning("Dropping payload for %r: fields are not JSON serializable (%s)", event.message, exc)
            return b""
        return text.encode("utf-8")


__all__ = ["FieldFilter", "FieldTransformer", "coerce_value"]
