"""Environment-driven configuration for hooks and the CLI.

Purpose
-------
Let deployments configure the hook without code changes: values come from
process environment variables, optionally seeded from the nearest ``.env``
file.

Contents
--------
* :func:`enable_dotenv` - load ``.env`` once, never overriding real variables.
* :class:`HookSettings` - ``LOG_KINESIS_*`` variables parsed into typed values.
* :func:`build_handler_from_env` - settings → hook → :class:`KinesisHandler`.

System Role
-----------
Outer configuration shell. AWS-level fallbacks (``AWS_REGION``,
``AWS_ENDPOINT``, credential variables) stay in
:mod:`lib_log_kinesis.adapters.session`; this module only handles the
dispatcher's own knobs.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from lib_log_kinesis import runtime
from lib_log_kinesis.domain.levels import DEFAULT_LEVELS, LogLevel
from lib_log_kinesis.errors import InvalidInputError
from lib_log_kinesis.handler import KinesisHandler
from lib_log_kinesis.hook import KinesisHook
from lib_log_kinesis.settings import HookConfig, KinesisMode

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LIB_LOG_KINESIS_USE_DOTENV"
"""Truthy value asks the CLI to load ``.env`` before reading settings."""

ENV_PREFIX = "LOG_KINESIS_"
_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_LOCK = threading.Lock()
_DOTENV_PATH: Path | None = None
_DOTENV_LOADED = False

_CLIENT_OVERRIDES = frozenset({"mode", "formatter"})


def _env_bool(value: str | None, default: bool) -> bool:
    """Interpret ``1/true/yes/on`` style strings.

    Examples
    --------
    >>> _env_bool('On', default=False)
    True
    >>> _env_bool(None, default=True)
    True
    >>> _env_bool('0', default=True)
    False
    """
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def _parse_csv(raw: str | None) -> tuple[str, ...]:
    """Split comma-separated values, dropping blanks.

    Examples
    --------
    >>> _parse_csv(' password, token ,,')
    ('password', 'token')
    >>> _parse_csv(None)
    ()
    """
    if not raw:
        return ()
    return tuple(chunk.strip() for chunk in raw.split(",") if chunk.strip())


def dotenv_requested(flag: bool | None = None) -> bool:
    """Return whether ``.env`` loading is requested; an explicit flag wins."""
    if flag is not None:
        return flag
    return _env_bool(os.getenv(DOTENV_ENV_VAR), default=False)


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` (searching upward from the working directory).

    Variables already present in the environment keep precedence. Subsequent
    calls return the first result without touching the environment again.
    """

    global _DOTENV_LOADED, _DOTENV_PATH
    with _DOTENV_LOCK:
        if _DOTENV_LOADED:
            return _DOTENV_PATH
        found = find_dotenv(usecwd=True)
        if found:
            _DOTENV_PATH = Path(found).resolve()
            load_dotenv(_DOTENV_PATH, override=False)
            LOGGER.debug("Loaded environment defaults from %s", _DOTENV_PATH)
        _DOTENV_LOADED = True
        return _DOTENV_PATH


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_PATH
    with _DOTENV_LOCK:
        _DOTENV_LOADED = False
        _DOTENV_PATH = None


@dataclass(frozen=True, slots=True)
class HookSettings:
    """Dispatcher settings read from ``LOG_KINESIS_*`` variables."""

    stream_name: str = ""
    mode: KinesisMode = KinesisMode.STREAM
    partition_key: str = ""
    run_async: bool = False
    levels: tuple[LogLevel, ...] = DEFAULT_LEVELS
    ignore: tuple[str, ...] = ()
    access_key: str = ""
    secret_key: str = ""
    profile: str = ""
    region: str = ""
    endpoint: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "HookSettings":
        """Parse settings from ``environ`` (defaults to :data:`os.environ`).

        Examples
        --------
        >>> settings = HookSettings.from_env({'LOG_KINESIS_STREAM': 'logs', 'LOG_KINESIS_MODE': 'firehose', 'LOG_KINESIS_LEVELS': 'error,critical'})
        >>> settings.stream_name, settings.mode.value, [level.name for level in settings.levels]
        ('logs', 'firehose', ['ERROR', 'CRITICAL'])
        """

        env = os.environ if environ is None else environ

        def get(name: str) -> str:
            return (env.get(ENV_PREFIX + name) or "").strip()

        raw_levels = _parse_csv(get("LEVELS"))
        return cls(
            stream_name=get("STREAM"),
            mode=KinesisMode.from_name(get("MODE") or KinesisMode.STREAM.value),
            partition_key=get("PARTITION_KEY"),
            run_async=_env_bool(get("ASYNC"), default=False),
            levels=tuple(LogLevel.from_name(name) for name in raw_levels) if raw_levels else DEFAULT_LEVELS,
            ignore=_parse_csv(get("IGNORE")),
            access_key=get("ACCESS_KEY"),
            secret_key=get("SECRET_KEY"),
            profile=get("PROFILE"),
            region=get("REGION"),
            endpoint=get("ENDPOINT"),
        )

    def to_hook_config(self, **overrides: Any) -> HookConfig:
        """Return the :class:`HookConfig` part of these settings."""
        values: dict[str, Any] = {
            "access_key": self.access_key,
            "secret_key": self.secret_key,
            "region": self.region,
            "endpoint": self.endpoint,
            "mode": self.mode,
            "profile": self.profile,
        }
        values.update(overrides)
        return HookConfig(**values)

    def apply(self, hook: KinesisHook) -> KinesisHook:
        """Copy partition key and ignore list onto ``hook``."""
        if self.partition_key:
            hook.set_partition_key(self.partition_key)
        for name in self.ignore:
            hook.add_ignore(name)
        return hook


def build_hook_from_env(
    environ: Mapping[str, str] | None = None,
    *,
    client: Any = None,
    **config_overrides: Any,
) -> KinesisHook:
    """Create a hook from environment settings.

    ``config_overrides`` are forwarded to :class:`HookConfig` (e.g.
    ``formatter=``, ``region=``). ``client`` short-circuits session creation;
    only ``mode`` and ``formatter`` can apply to an injected client, so any
    other override raises :class:`InvalidInputError`.
    """

    settings = HookSettings.from_env(environ)
    if client is not None:
        unused = sorted(set(config_overrides) - _CLIENT_OVERRIDES)
        if unused:
            raise InvalidInputError(f"overrides {unused} have no effect on an injected client")
        hook = runtime.new_with_client(
            settings.stream_name,
            client,
            mode=config_overrides.get("mode", settings.mode),
            formatter=config_overrides.get("formatter"),
            levels=settings.levels,
            run_async=settings.run_async,
        )
    else:
        hook = runtime.new(
            settings.stream_name,
            settings.to_hook_config(**config_overrides),
            levels=settings.levels,
            run_async=settings.run_async,
        )
    return settings.apply(hook)


def build_handler_from_env(
    environ: Mapping[str, str] | None = None,
    *,
    client: Any = None,
    level: int = logging.NOTSET,
    **config_overrides: Any,
) -> KinesisHandler:
    """Return a :class:`KinesisHandler` wrapping :func:`build_hook_from_env`."""

    return KinesisHandler(build_hook_from_env(environ, client=client, **config_overrides), level=level)


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_PREFIX",
    "HookSettings",
    "build_handler_from_env",
    "build_hook_from_env",
    "dotenv_requested",
    "enable_dotenv",
]
