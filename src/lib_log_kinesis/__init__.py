"""Forward Python log records to AWS Kinesis Data Streams or Firehose.

Typical wiring::

    import logging
    import lib_log_kinesis

    hook = lib_log_kinesis.new("app-logs", lib_log_kinesis.HookConfig(region="eu-west-1"))
    hook.add_ignore("password")
    logging.getLogger().addHandler(lib_log_kinesis.KinesisHandler(hook))

Configure the hook completely before attaching the handler; the setters are
not synchronised against concurrent dispatch.
"""

from __future__ import annotations

from .adapters import FirehoseBackend, JsonLinesFormatter, StreamBackend, TemplateFormatter
from .application import DestinationResolver, FieldTransformer
from .config import HookSettings, build_handler_from_env, build_hook_from_env, enable_dotenv
from .domain import DEFAULT_LEVELS, MESSAGE_FIELD, PARTITION_KEY_FIELD, STREAM_NAME_FIELD, LogEvent, LogLevel
from .errors import InvalidInputError, KinesisHookError, SessionInitError, UnsupportedModeError
from .handler import KinesisHandler
from .hook import KinesisHook
from .runtime import new, new_with_client, new_with_session
from .settings import HookConfig, KinesisMode

__all__ = [
    "DEFAULT_LEVELS",
    "DestinationResolver",
    "FieldTransformer",
    "FirehoseBackend",
    "HookConfig",
    "HookSettings",
    "InvalidInputError",
    "JsonLinesFormatter",
    "KinesisHandler",
    "KinesisHook",
    "KinesisHookError",
    "KinesisMode",
    "LogEvent",
    "LogLevel",
    "MESSAGE_FIELD",
    "PARTITION_KEY_FIELD",
    "STREAM_NAME_FIELD",
    "SessionInitError",
    "StreamBackend",
    "TemplateFormatter",
    "UnsupportedModeError",
    "build_handler_from_env",
    "build_hook_from_env",
    "enable_dotenv",
    "new",
    "new_with_client",
    "new_with_session",
]
