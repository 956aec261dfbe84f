"""Standard-library logging bridge for :class:`KinesisHook`.

Purpose
-------
Plug the hook into :mod:`logging` so applications keep calling
``logger.info("...", extra={...})`` while records flow to Kinesis.

Contents
--------
* :func:`event_from_record` - :class:`logging.LogRecord` → :class:`LogEvent`.
* :class:`KinesisHandler` - :class:`logging.Handler` gating on
  ``hook.levels()`` and calling ``hook.fire``.

System Role
-----------
The host-framework side of the hook contract. Records emitted by
``lib_log_kinesis`` itself are skipped so dispatch diagnostics never loop
back into the stream.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from lib_log_kinesis.domain.events import LogEvent
from lib_log_kinesis.domain.levels import LogLevel
from lib_log_kinesis.errors import InvalidInputError
from lib_log_kinesis.hook import KinesisHook

_PACKAGE_LOGGER = __name__.split(".", 1)[0]

_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}
"""Attributes every LogRecord carries; anything else arrived through ``extra``."""

ERROR_FIELD = "error"


def _is_own_record(record: logging.LogRecord) -> bool:
    return record.name == _PACKAGE_LOGGER or record.name.startswith(_PACKAGE_LOGGER + ".")


def event_from_record(record: logging.LogRecord) -> LogEvent:
    """Translate ``record`` into a :class:`LogEvent`.

    Examples
    --------
    >>> record = logging.makeLogRecord({'name': 'app', 'levelno': logging.WARNING, 'msg': 'low %s', 'args': ('disk',), 'user': 'alice'})
    >>> event = event_from_record(record)
    >>> event.level.name, event.message, event.fields
    ('WARNING', 'low disk', {'user': 'alice'})
    """

    fields: dict[str, Any] = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
    if record.exc_info and record.exc_info[1] is not None and ERROR_FIELD not in fields:
        fields[ERROR_FIELD] = record.exc_info[1]
    return LogEvent(
        level=LogLevel.from_python_level(record.levelno),
        message=record.getMessage(),
        fields=fields,
        logger_name=record.name,
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
    )


class KinesisHandler(logging.Handler):
    """Logging handler that forwards records through a :class:`KinesisHook`.

    The handler's own ``level`` still applies; on top of it only records whose
    severity is listed in ``hook.levels()`` are fired. Synchronous dispatch
    errors go through :meth:`logging.Handler.handleError`.
    """

    def __init__(self, hook: KinesisHook, level: int = logging.NOTSET) -> None:
        if hook is None:
            raise InvalidInputError("hook parameter cannot be None")
        super().__init__(level=level)
        self._hook = hook

    @property
    def hook(self) -> KinesisHook:
        return self._hook

    def emit(self, record: logging.LogRecord) -> None:
        if _is_own_record(record):
            return
        try:
            event = event_from_record(record)
            if event.level not in self._hook.levels():
                return
            self._hook.fire(event)
        except Exception:  # noqa: BLE001
            self.handleError(record)


__all__ = ["ERROR_FIELD", "KinesisHandler", "event_from_record"]
