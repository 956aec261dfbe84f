from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from lib_log_kinesis import runtime
from lib_log_kinesis.domain.levels import LogLevel
from lib_log_kinesis.errors import InvalidInputError
from lib_log_kinesis.handler import ERROR_FIELD, KinesisHandler, event_from_record
from tests.fakes import FakeKinesisClient
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.fixture
def app_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("tests.handler.app")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


def test_records_are_fired_with_extra_fields(app_logger: logging.Logger, kinesis_client: FakeKinesisClient) -> None:
    app_logger.addHandler(KinesisHandler(runtime.new_with_client("app-logs", kinesis_client)))
    app_logger.warning("low %s", "disk", extra={"free_mb": 12})
    assert len(kinesis_client.calls) == 1
    assert json.loads(kinesis_client.calls[0]["Data"]) == {"free_mb": 12, "message": "low disk"}
    assert kinesis_client.calls[0]["PartitionKey"] == "low disk"


def test_levels_outside_the_hook_are_skipped(app_logger: logging.Logger, kinesis_client: FakeKinesisClient) -> None:
    app_logger.addHandler(KinesisHandler(runtime.new_with_client("app-logs", kinesis_client)))
    app_logger.debug("noise")
    assert kinesis_client.calls == []


def test_handler_level_still_applies(app_logger: logging.Logger, kinesis_client: FakeKinesisClient) -> None:
    app_logger.addHandler(KinesisHandler(runtime.new_with_client("app-logs", kinesis_client), level=logging.ERROR))
    app_logger.info("ignored")
    app_logger.error("kept")
    assert [call["PartitionKey"] for call in kinesis_client.calls] == ["kept"]


def test_exception_info_becomes_error_field(app_logger: logging.Logger, kinesis_client: FakeKinesisClient) -> None:
    app_logger.addHandler(KinesisHandler(runtime.new_with_client("app-logs", kinesis_client)))
    try:
        raise RuntimeError("disk full")
    except RuntimeError:
        app_logger.exception("write failed")
    assert json.loads(kinesis_client.calls[0]["Data"])[ERROR_FIELD] == "disk full"


def test_extra_error_field_is_not_overwritten() -> None:
    try:
        raise RuntimeError("disk full")
    except RuntimeError as exc:
        record = logging.LogRecord("app", logging.ERROR, __file__, 1, "failed", None, (type(exc), exc, exc.__traceback__))
    record.error = "custom"
    assert event_from_record(record).fields[ERROR_FIELD] == "custom"


def test_event_from_record_maps_metadata() -> None:
    record = logging.makeLogRecord({"name": "svc", "levelno": 25, "msg": "hi", "created": 0.0})
    event = event_from_record(record)
    assert event.level is LogLevel.INFO
    assert event.logger_name == "svc"
    assert event.fields == {}
    assert event.timestamp.year == 1970


def test_own_records_are_not_forwarded(kinesis_client: FakeKinesisClient) -> None:
    handler = KinesisHandler(runtime.new_with_client("app-logs", kinesis_client))
    handler.handle(logging.makeLogRecord({"name": "lib_log_kinesis.application.transform", "levelno": logging.WARNING, "msg": "x"}))
    assert kinesis_client.calls == []


def test_sync_errors_go_through_handle_error(
    app_logger: logging.Logger,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    handler = KinesisHandler(runtime.new_with_client("app-logs", FakeKinesisClient(error=ConnectionError("down"))))
    seen: list[logging.LogRecord] = []
    monkeypatch.setattr(handler, "handleError", seen.append)
    app_logger.addHandler(handler)
    app_logger.error("boom")
    assert [record.getMessage() for record in seen] == ["boom"]


def test_handler_requires_a_hook() -> None:
    with pytest.raises(InvalidInputError):
        KinesisHandler(None)  # type: ignore[arg-type]
