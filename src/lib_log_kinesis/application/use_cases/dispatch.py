"""Use cases executing a backend write inline or on a detached thread.

Purpose
-------
Keep the two execution strategies of the hook side by side: a synchronous
call that lets every exception reach the caller, and a fire-and-forget spawn
that reports failures through logging and an optional diagnostic callback.

Contents
--------
* :data:`DiagnosticHook` - ``(name, payload)`` callback signature.
* :func:`dispatch_sync` - inline write.
* :func:`spawn_dispatch` - one daemon thread per event.

System Role
-----------
Invoked by :meth:`lib_log_kinesis.hook.KinesisHook.fire` and
:meth:`~lib_log_kinesis.hook.KinesisHook.submit`. Spawned writes carry no
ordering guarantee relative to each other or to later synchronous writes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from lib_log_kinesis.application.ports.backend import DeliveryBackendPort
from lib_log_kinesis.domain.events import LogEvent

LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


def dispatch_sync(backend: DeliveryBackendPort, event: LogEvent) -> None:
    """Write ``event`` on the calling thread; exceptions propagate unchanged."""

    backend.write(event)


def spawn_dispatch(
    backend: DeliveryBackendPort,
    event: LogEvent,
    *,
    diagnostic: DiagnosticHook = None,
) -> Future[None]:
    """Write ``event`` on a new daemon thread and return its completion future.

    The hook's ``fire`` discards the future, so a failure there is only
    visible through the ``lib_log_kinesis`` logger and ``diagnostic``. Daemon
    threads still running at interpreter exit are abandoned.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.messages = []
    ...     def write(self, event):
    ...         self.messages.append(event.message)
    >>> from lib_log_kinesis.domain.levels import LogLevel
    >>> backend = Recorder()
    >>> spawn_dispatch(backend, LogEvent(LogLevel.INFO, 'hello')).result(timeout=5)
    >>> backend.messages
    ['hello']
    """

    future: Future[None] = Future()
    future.set_running_or_notify_cancel()

    def _run() -> None:
        try:
            backend.write(event)
        except Exception as exc:  # noqa: BLE001
            _report_async_failure(event, exc, diagnostic)
            future.set_exception(exc)
        else:
            future.set_result(None)

    thread = threading.Thread(target=_run, name="lib_log_kinesis-dispatch", daemon=True)
    thread.start()
    return future


def _report_async_failure(event: LogEvent, exc: Exception, diagnostic: DiagnosticHook) -> None:
    """Log and surface asynchronous write failures the caller cannot observe."""

    LOGGER.error("Asynchronous Kinesis dispatch failed; record dropped", exc_info=exc)
    if diagnostic is None:
        return
    try:
        diagnostic(
            "async_dispatch_error",
            {"logger": event.logger_name, "level": event.level.name, "exception": repr(exc)},
        )
    except Exception as diagnostic_exc:  # noqa: BLE001
        LOGGER.error("Diagnostic hook raised while reporting async_dispatch_error", exc_info=diagnostic_exc)


__all__ = ["DiagnosticHook", "dispatch_sync", "spawn_dispatch"]
