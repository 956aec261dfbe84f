"""Hook configuration values resolved once at construction time."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from lib_log_kinesis.application.ports.formatter import EventFormatterPort
from lib_log_kinesis.errors import UnsupportedModeError

if TYPE_CHECKING:
    from botocore.config import Config as BotocoreConfig


class KinesisMode(Enum):
    """Delivery modes supported by the hook."""

    STREAM = "stream"
    """Direct ingestion into a Kinesis data stream."""

    FIREHOSE = "firehose"
    """Buffered ingestion through a Firehose delivery stream."""

    @property
    def service_name(self) -> str:
        """Return the boto3 service identifier for this mode."""
        return "kinesis" if self is KinesisMode.STREAM else "firehose"

    @classmethod
    def from_name(cls, name: "str | KinesisMode") -> "KinesisMode":
        """Resolve ``name`` case-insensitively.

        Examples
        --------
        >>> KinesisMode.from_name('Firehose') is KinesisMode.FIREHOSE
        True
        >>> KinesisMode.from_name('queue')
        Traceback (most recent call last):
        ...
        lib_log_kinesis.errors.UnsupportedModeError: Unsupported delivery mode: 'queue' (expected 'stream' or 'firehose')
        """
        if isinstance(name, KinesisMode):
            return name
        if isinstance(name, str):
            normalized = name.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise UnsupportedModeError(f"Unsupported delivery mode: {name!r} (expected 'stream' or 'firehose')")


@dataclass(frozen=True, slots=True)
class HookConfig:
    """Immutable connection settings consumed by the composition root.

    Attributes
    ----------
    access_key, secret_key:
        Static credential pair, used when the environment provides none.
    region:
        Explicit AWS region; falls back to ``AWS_REGION`` then ``us-east-1``.
    endpoint:
        Explicit endpoint URL; falls back to ``AWS_ENDPOINT`` then the
        service default.
    mode:
        :class:`KinesisMode` selecting the delivery backend.
    formatter:
        Optional formatter whose output replaces the field transformer.
    profile:
        Profile read from the shared credentials file (last fallback).
    client_config:
        Optional :class:`botocore.config.Config` carrying timeouts and retry
        settings of the AWS client library.
    """

    access_key: str = ""
    secret_key: str = ""
    region: str = ""
    endpoint: str = ""
    mode: KinesisMode = KinesisMode.STREAM
    formatter: EventFormatterPort | None = None
    profile: str = ""
    client_config: "BotocoreConfig | None" = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", KinesisMode.from_name(self.mode))


__all__ = ["HookConfig", "KinesisMode"]
