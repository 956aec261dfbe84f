"""Composition helpers wiring settings, AWS clients, backends, and the hook.

Purpose
-------
Translate a :class:`HookConfig` (or an existing boto3 session/client) into a
ready :class:`KinesisHook`. Backend selection happens here, once, so the
dispatch core never branches on delivery mode.

Contents
--------
* :func:`build_backend` - mode → :class:`StreamBackend` / :class:`FirehoseBackend`.
* :func:`compose_hook` - resolver + transformer + backend + hook.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from lib_log_kinesis.adapters.firehose import FirehoseBackend
from lib_log_kinesis.adapters.stream import StreamBackend
from lib_log_kinesis.application.destination import DestinationResolver
from lib_log_kinesis.application.ports.backend import DeliveryBackendPort
from lib_log_kinesis.application.ports.formatter import EventFormatterPort
from lib_log_kinesis.application.transform import FieldTransformer
from lib_log_kinesis.application.use_cases.dispatch import DiagnosticHook
from lib_log_kinesis.domain.levels import DEFAULT_LEVELS, LogLevel
from lib_log_kinesis.hook import KinesisHook
from lib_log_kinesis.settings import KinesisMode

LOGGER = logging.getLogger(__name__)

_BACKENDS: dict[KinesisMode, type[StreamBackend] | type[FirehoseBackend]] = {
    KinesisMode.STREAM: StreamBackend,
    KinesisMode.FIREHOSE: FirehoseBackend,
}


def build_backend(
    mode: KinesisMode | str,
    client: Any,
    *,
    resolver: DestinationResolver,
    transformer: FieldTransformer,
    formatter: EventFormatterPort | None = None,
) -> DeliveryBackendPort:
    """Instantiate the backend class registered for ``mode``."""

    resolved_mode = KinesisMode.from_name(mode)
    backend_cls = _BACKENDS[resolved_mode]
    LOGGER.debug("Selected %s for mode %s", backend_cls.__name__, resolved_mode.value)
    return backend_cls(client, resolver=resolver, transformer=transformer, formatter=formatter)


def compose_hook(
    stream_name: str,
    *,
    mode: KinesisMode | str,
    client: Any,
    formatter: EventFormatterPort | None = None,
    levels: Iterable[LogLevel | str | int] = DEFAULT_LEVELS,
    run_async: bool = False,
    diagnostic: DiagnosticHook = None,
) -> KinesisHook:
    """Assemble a hook around an already constructed AWS client."""

    resolver = DestinationResolver(stream_name)
    transformer = FieldTransformer()
    backend = build_backend(mode, client, resolver=resolver, transformer=transformer, formatter=formatter)
    return KinesisHook(
        backend,
        resolver=resolver,
        transformer=transformer,
        levels=levels,
        run_async=run_async,
        diagnostic=diagnostic,
    )


__all__ = ["build_backend", "compose_hook"]
