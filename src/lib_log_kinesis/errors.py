"""Exception hierarchy raised by the Kinesis logging hook.

Purpose
-------
Name the failure classes a host application can observe when constructing or
firing a hook.

Contents
--------
* :class:`KinesisHookError` - common base.
* :class:`InvalidInputError` - missing event or collaborator.
* :class:`SessionInitError` - credentials/session/client could not be built.
* :class:`UnsupportedModeError` - unknown delivery mode.

System Role
-----------
Formatter failures and transport failures are deliberately absent: the
formatter's exception and botocore's ``ClientError``/``BotoCoreError`` reach
the caller unchanged so no information is lost in translation.
"""

from __future__ import annotations


class KinesisHookError(Exception):
    """Base class for errors raised by :mod:`lib_log_kinesis` itself."""


class InvalidInputError(KinesisHookError, ValueError):
    """Raised when an event or a required collaborator is ``None`` or malformed."""


class SessionInitError(KinesisHookError):
    """Raised when credentials, the boto3 session, or the client cannot be built."""


class UnsupportedModeError(KinesisHookError, ValueError):
    """Raised when a delivery mode other than ``stream``/``firehose`` is configured."""


__all__ = [
    "InvalidInputError",
    "KinesisHookError",
    "SessionInitError",
    "UnsupportedModeError",
]
