"""Dispatch core invoked once per log event.

Purpose
-------
Implement the hook contract expected by a host logging framework:
``levels()`` tells the host which severities to forward and ``fire(event)``
hands one event to the active delivery backend.

Contents
--------
* :class:`KinesisHook` - dispatch state, setters, ``fire`` and ``submit``.

System Role
-----------
Sits between :class:`lib_log_kinesis.handler.KinesisHandler` (or any caller
holding a :class:`LogEvent`) and exactly one delivery backend chosen by the
composition root. The hook never inspects which backend it drives.

Thread safety
-------------
``fire`` may be called from many threads at once; the backend's boto3 client
is shared without extra locking. The setters are *not* synchronised: call
them while wiring the hook, before it starts receiving events. Mutating the
ignore set, filters, defaults, levels, or async flag during live dispatch is
undefined behaviour.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import Future

from lib_log_kinesis.application.destination import DestinationResolver
from lib_log_kinesis.application.ports.backend import DeliveryBackendPort
from lib_log_kinesis.application.transform import FieldFilter, FieldTransformer
from lib_log_kinesis.application.use_cases.dispatch import DiagnosticHook, dispatch_sync, spawn_dispatch
from lib_log_kinesis.domain.events import LogEvent
from lib_log_kinesis.domain.levels import DEFAULT_LEVELS, LogLevel
from lib_log_kinesis.errors import InvalidInputError


class KinesisHook:
    """Forward log events to Kinesis through a fixed delivery backend.

    Parameters
    ----------
    backend:
        Delivery backend built for this hook; never reassigned.
    resolver:
        :class:`DestinationResolver` shared with ``backend``.
    transformer:
        :class:`FieldTransformer` shared with ``backend``.
    levels:
        Severities returned by :meth:`levels`; defaults to
        :data:`DEFAULT_LEVELS`.
    run_async:
        When ``True`` :meth:`fire` returns immediately and writes on a
        background thread.
    diagnostic:
        Optional ``(name, payload)`` callback notified about asynchronous
        failures.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.events = []
    ...     def write(self, event):
    ...         self.events.append(event.message)
    >>> backend = Recorder()
    >>> hook = KinesisHook(backend, resolver=DestinationResolver('logs'), transformer=FieldTransformer())
    >>> hook.fire(LogEvent(LogLevel.INFO, 'ready'))
    >>> backend.events
    ['ready']
    >>> [level.name for level in hook.levels()]
    ['CRITICAL', 'ERROR', 'WARNING', 'INFO']
    """

    def __init__(
        self,
        backend: DeliveryBackendPort,
        *,
        resolver: DestinationResolver,
        transformer: FieldTransformer,
        levels: Iterable[LogLevel | str | int] = DEFAULT_LEVELS,
        run_async: bool = False,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        for value, name in ((backend, "backend"), (resolver, "resolver"), (transformer, "transformer")):
            if value is None:
                raise InvalidInputError(f"{name} parameter cannot be None")
        self._backend = backend
        self._resolver = resolver
        self._transformer = transformer
        self._levels: tuple[LogLevel, ...] = ()
        self.set_levels(levels)
        self._async = bool(run_async)
        self._diagnostic = diagnostic

    @property
    def backend(self) -> DeliveryBackendPort:
        return self._backend

    @property
    def resolver(self) -> DestinationResolver:
        return self._resolver

    @property
    def transformer(self) -> FieldTransformer:
        return self._transformer

    @property
    def is_async(self) -> bool:
        return self._async

    def levels(self) -> tuple[LogLevel, ...]:
        """Return the severities that should trigger :meth:`fire`."""
        return self._levels

    def set_levels(self, levels: Iterable[LogLevel | str | int]) -> None:
        """Replace the severities that trigger dispatch, preserving order."""
        resolved: list[LogLevel] = []
        for value in levels:
            level = LogLevel.coerce(value)
            if level not in resolved:
                resolved.append(level)
        self._levels = tuple(resolved)

    def set_stream_name(self, name: str) -> None:
        """Set the default destination used when events carry no override."""
        self._resolver.default_stream_name = name

    def set_partition_key(self, key: str) -> None:
        """Set the default partition key; an empty string restores the message fallback."""
        self._resolver.default_partition_key = key

    def add_ignore(self, name: str) -> None:
        """Never serialize field ``name``."""
        self._transformer.add_ignore(name)

    def add_filter(self, name: str, fn: FieldFilter) -> None:
        """Replace field ``name`` by ``fn(value)`` unless the field is ignored."""
        self._transformer.add_filter(name, fn)

    def set_async(self, enabled: bool) -> None:
        """Toggle fire-and-forget dispatch for subsequent :meth:`fire` calls."""
        self._async = bool(enabled)

    def fire(self, event: LogEvent) -> None:
        """Dispatch ``event`` to the backend.

        Synchronous mode raises whatever the backend raises (formatter errors,
        botocore ``ClientError``/``BotoCoreError``) without wrapping. In async
        mode the event is snapshotted, a thread is spawned, and ``None`` is
        returned at once; a later failure is only logged.
        """

        if event is None:
            raise InvalidInputError("event parameter cannot be None")
        if not self._async:
            dispatch_sync(self._backend, event)
            return
        spawn_dispatch(self._backend, event.snapshot(), diagnostic=self._diagnostic)

    def submit(self, event: LogEvent) -> Future[None]:
        """Dispatch ``event`` on a background thread and return its future.

        Use this instead of :meth:`fire` when the caller wants to wait for, or
        inspect, the outcome of an asynchronous write. It ignores the async
        flag and always runs in the background.
        """

        if event is None:
            raise InvalidInputError("event parameter cannot be None")
        return spawn_dispatch(self._backend, event.snapshot(), diagnostic=self._diagnostic)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(backend={type(self._backend).__name__}, "
            f"stream={self._resolver.default_stream_name!r}, async={self._async})"
        )


__all__ = ["KinesisHook"]
