"""Log level abstraction shared by the hook, the handler, and the CLI.

Purpose
-------
Offer a domain-specific representation of log severities with helper
conversions from names and stdlib numeric levels.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
* :data:`DEFAULT_LEVELS` - severities a freshly created hook reacts to.

System Role
-----------
Used by :class:`lib_log_kinesis.hook.KinesisHook` to answer ``levels()`` and
by :class:`lib_log_kinesis.handler.KinesisHandler` to translate
:class:`logging.LogRecord` severities.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels used throughout the system."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured logging payloads."""

        return self.name.lower()

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this level."""

        return getattr(logging, self.name)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        if normalized == "WARN":
            normalized = "WARNING"
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`.

        Custom numeric levels registered through :func:`logging.addLevelName`
        floor to the nearest defined level; anything below ``DEBUG`` maps to
        ``DEBUG``.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.ERROR) is LogLevel.ERROR
        True
        >>> LogLevel.from_python_level(25) is LogLevel.INFO
        True
        >>> LogLevel.from_python_level(5) is LogLevel.DEBUG
        True
        """
        candidates = [member for member in cls if member.value <= level]
        if not candidates:
            return cls.DEBUG
        return max(candidates, key=lambda member: member.value)

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding exactly to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def coerce(cls, value: "LogLevel | str | int") -> "LogLevel":
        """Normalise enum members, names, and numeric levels into :class:`LogLevel`."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unsupported log level value: {value!r}")
        if isinstance(value, int):
            return cls.from_numeric(value)
        return cls.from_name(value)


DEFAULT_LEVELS: tuple[LogLevel, ...] = (
    LogLevel.CRITICAL,
    LogLevel.ERROR,
    LogLevel.WARNING,
    LogLevel.INFO,
)
"""Severities a new hook reacts to; copied into each hook at construction."""


__all__ = ["DEFAULT_LEVELS", "LogLevel"]
