from __future__ import annotations

from typing import Any

import pytest

import lib_log_kinesis.runtime as runtime
from lib_log_kinesis.adapters.firehose import FirehoseBackend
from lib_log_kinesis.adapters.formatting import TemplateFormatter
from lib_log_kinesis.adapters.stream import StreamBackend
from lib_log_kinesis.application.destination import DestinationResolver
from lib_log_kinesis.application.transform import FieldTransformer
from lib_log_kinesis.domain.events import LogEvent
from lib_log_kinesis.domain.levels import DEFAULT_LEVELS, LogLevel
from lib_log_kinesis.errors import InvalidInputError, SessionInitError, UnsupportedModeError
from lib_log_kinesis.settings import HookConfig, KinesisMode
from tests.fakes import FakeFirehoseClient, FakeKinesisClient
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.mark.parametrize(
    ("mode", "expected"),
    [("stream", StreamBackend), (KinesisMode.FIREHOSE, FirehoseBackend)],
)
def test_build_backend_selects_class_by_mode(mode: Any, expected: type) -> None:
    backend = runtime.build_backend(mode, FakeKinesisClient(), resolver=DestinationResolver("x"), transformer=FieldTransformer())
    assert type(backend) is expected


def test_build_backend_rejects_unknown_modes() -> None:
    with pytest.raises(UnsupportedModeError, match="queue"):
        runtime.build_backend("queue", FakeKinesisClient(), resolver=DestinationResolver("x"), transformer=FieldTransformer())


def test_new_with_client_wires_a_stream_hook(kinesis_client: FakeKinesisClient) -> None:
    hook = runtime.new_with_client("app-logs", kinesis_client)
    assert isinstance(hook.backend, StreamBackend)
    assert hook.levels() == DEFAULT_LEVELS
    assert hook.is_async is False

    hook.fire(LogEvent(LogLevel.INFO, "boot"))
    assert kinesis_client.calls[0]["StreamName"] == "app-logs"


def test_new_with_client_wires_a_firehose_hook_with_formatter(firehose_client: FakeFirehoseClient) -> None:
    hook = runtime.new_with_client(
        "delivery",
        firehose_client,
        mode="firehose",
        formatter=TemplateFormatter("{message}", newline=False),
        levels=["error"],
    )
    hook.fire(LogEvent(LogLevel.ERROR, "boom"))
    assert firehose_client.calls == [{"DeliveryStreamName": "delivery", "Record": {"Data": b"boom"}}]
    assert hook.levels() == (LogLevel.ERROR,)


def test_hooks_do_not_share_state(kinesis_client: FakeKinesisClient) -> None:
    first = runtime.new_with_client("a", kinesis_client)
    second = runtime.new_with_client("b", kinesis_client)
    first.set_levels([LogLevel.DEBUG])
    first.add_ignore("password")
    assert second.levels() == DEFAULT_LEVELS
    assert second.transformer.ignored == frozenset()


@pytest.mark.parametrize("factory", ["new", "new_with_session", "new_with_client"])
def test_factories_reject_none_inputs(factory: str) -> None:
    with pytest.raises(InvalidInputError, match="cannot be None"):
        getattr(runtime, factory)("app-logs", None)


def test_new_builds_a_boto3_client_from_config() -> None:
    config = HookConfig(access_key="k", secret_key="s", region="eu-west-1", endpoint="http://localhost:4566", mode="firehose")
    hook = runtime.new("delivery", config)
    assert isinstance(hook.backend, FirehoseBackend)
    client = hook.backend.client
    assert client.meta.service_model.service_name == "firehose"
    assert client.meta.region_name == "eu-west-1"
    assert client.meta.endpoint_url == "http://localhost:4566"


def test_new_without_credentials_raises_session_init_error() -> None:
    with pytest.raises(SessionInitError):
        runtime.new("app-logs", HookConfig(region="eu-west-1"))


def test_new_with_session_uses_the_given_session() -> None:
    import boto3

    session = boto3.session.Session(aws_access_key_id="k", aws_secret_access_key="s", region_name="us-west-2")
    hook = runtime.new_with_session("app-logs", session, endpoint="http://localhost:4566")
    assert hook.backend.client.meta.region_name == "us-west-2"
    assert hook.backend.client.meta.service_model.service_name == "kinesis"


def test_hook_config_rejects_unknown_mode() -> None:
    with pytest.raises(UnsupportedModeError):
        HookConfig(mode="queue")  # type: ignore[arg-type]
