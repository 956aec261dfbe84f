from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from lib_log_kinesis.domain.events import LogEvent
from lib_log_kinesis.domain.levels import LogLevel
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_log_event_requires_timezone_aware_timestamp() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        LogEvent(LogLevel.INFO, "hello", timestamp=datetime(2025, 9, 23, 12, 0, 0))


def test_log_event_normalises_timestamp_to_utc() -> None:
    local = datetime(2025, 9, 23, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    event = LogEvent(LogLevel.INFO, "hello", timestamp=local)
    assert event.timestamp == datetime(2025, 9, 23, 12, 0, 0, tzinfo=timezone.utc)
    assert event.timestamp.tzinfo is timezone.utc


def test_default_timestamp_is_aware() -> None:
    event = LogEvent(LogLevel.INFO, "hello")
    assert event.timestamp.tzinfo is timezone.utc


def test_none_fields_become_an_empty_mapping() -> None:
    event = LogEvent(LogLevel.INFO, "hello", None)  # type: ignore[arg-type]
    assert event.fields == {}


def test_snapshot_detaches_the_field_mapping(sample_event: LogEvent) -> None:
    copy = sample_event.snapshot()
    sample_event.fields["user"] = "mallory"
    assert copy.fields["user"] == "alice"
    assert copy.message == sample_event.message
    assert copy.timestamp == sample_event.timestamp


def test_with_fields_merges_without_touching_the_original(sample_event: LogEvent) -> None:
    extended = sample_event.with_fields(partition_key="shardB", attempt=4)
    assert extended.fields == {"user": "alice", "attempt": 4, "partition_key": "shardB"}
    assert sample_event.fields == {"user": "alice", "attempt": 3}


def test_to_dict_serialises_the_envelope(sample_event: LogEvent) -> None:
    assert sample_event.to_dict() == {
        "timestamp": "2025-09-23T00:00:00+00:00",
        "logger_name": "tests",
        "level": "error",
        "message": "boom",
        "fields": {"user": "alice", "attempt": 3},
    }


def test_snapshot_detaches_nested_values() -> None:
    context = {"user": "alice", "roles": ["admin"]}
    event = LogEvent(LogLevel.INFO, "login", {"ctx": context})
    copy = event.snapshot()
    context["user"] = "mallory"
    context["roles"].append("root")
    assert copy.fields["ctx"] == {"user": "alice", "roles": ["admin"]}


def test_snapshot_shares_values_that_cannot_be_copied() -> None:
    lock = threading.Lock()
    event = LogEvent(LogLevel.INFO, "locked", {"lock": lock})
    assert event.snapshot().fields["lock"] is lock
