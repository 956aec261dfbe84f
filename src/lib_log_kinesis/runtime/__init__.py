"""Factories that create ready-to-use Kinesis hooks.

Purpose
-------
Expose the stable entry points host applications call once at startup:
:func:`new` builds everything from a :class:`HookConfig`,
:func:`new_with_session` reuses a boto3 session the host already owns, and
:func:`new_with_client` accepts a pre-built client (tests, custom endpoints).

Construction errors (:class:`SessionInitError`, :class:`UnsupportedModeError`,
:class:`InvalidInputError`) are raised from these factories; no partially
initialised hook is ever returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from lib_log_kinesis.adapters.session import create_client, create_session, resolve_endpoint
from lib_log_kinesis.application.ports.formatter import EventFormatterPort
from lib_log_kinesis.application.use_cases.dispatch import DiagnosticHook
from lib_log_kinesis.domain.levels import DEFAULT_LEVELS, LogLevel
from lib_log_kinesis.errors import InvalidInputError
from lib_log_kinesis.hook import KinesisHook
from lib_log_kinesis.settings import HookConfig, KinesisMode

from ._composition import build_backend, compose_hook

LOGGER = logging.getLogger(__name__)


def new(
    stream_name: str,
    config: HookConfig,
    *,
    levels: Iterable[LogLevel | str | int] = DEFAULT_LEVELS,
    run_async: bool = False,
    diagnostic: DiagnosticHook = None,
) -> KinesisHook:
    """Create a hook whose session and client are derived from ``config``.

    Parameters
    ----------
    stream_name:
        Default stream (or delivery stream) name.
    config:
        Credentials, region, endpoint, mode, and optional formatter.
    levels, run_async, diagnostic:
        Initial dispatch state; see :class:`KinesisHook`.
    """

    if config is None:
        raise InvalidInputError("config parameter cannot be None")
    session = create_session(config)
    client = create_client(
        session,
        config.mode,
        endpoint=resolve_endpoint(config),
        client_config=config.client_config,
    )
    LOGGER.debug("Created %s hook for %r", config.mode.value, stream_name)
    return compose_hook(
        stream_name,
        mode=config.mode,
        client=client,
        formatter=config.formatter,
        levels=levels,
        run_async=run_async,
        diagnostic=diagnostic,
    )


def new_with_session(
    stream_name: str,
    session: Any,
    *,
    mode: KinesisMode | str = KinesisMode.STREAM,
    endpoint: str | None = None,
    formatter: EventFormatterPort | None = None,
    client_config: Any = None,
    levels: Iterable[LogLevel | str | int] = DEFAULT_LEVELS,
    run_async: bool = False,
    diagnostic: DiagnosticHook = None,
) -> KinesisHook:
    """Create a hook from an existing :class:`boto3.session.Session`."""

    if session is None:
        raise InvalidInputError("session parameter cannot be None")
    resolved_mode = KinesisMode.from_name(mode)
    client = create_client(session, resolved_mode, endpoint=endpoint, client_config=client_config)
    return compose_hook(
        stream_name,
        mode=resolved_mode,
        client=client,
        formatter=formatter,
        levels=levels,
        run_async=run_async,
        diagnostic=diagnostic,
    )


def new_with_client(
    stream_name: str,
    client: Any,
    *,
    mode: KinesisMode | str = KinesisMode.STREAM,
    formatter: EventFormatterPort | None = None,
    levels: Iterable[LogLevel | str | int] = DEFAULT_LEVELS,
    run_async: bool = False,
    diagnostic: DiagnosticHook = None,
) -> KinesisHook:
    """Create a hook around an already built ``kinesis``/``firehose`` client."""

    if client is None:
        raise InvalidInputError("client parameter cannot be None")
    return compose_hook(
        stream_name,
        mode=mode,
        client=client,
        formatter=formatter,
        levels=levels,
        run_async=run_async,
        diagnostic=diagnostic,
    )


__all__ = ["build_backend", "compose_hook", "new", "new_with_client", "new_with_session"]
