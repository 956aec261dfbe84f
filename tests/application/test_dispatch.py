from __future__ import annotations

import logging
import threading
from typing import Any

import pytest

from lib_log_kinesis.application.use_cases.dispatch import dispatch_sync, spawn_dispatch
from lib_log_kinesis.domain.events import LogEvent
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


class RecordingBackend:
    def __init__(self, error: Exception | None = None) -> None:
        self.events: list[LogEvent] = []
        self.threads: list[str] = []
        self.error = error

    def write(self, event: LogEvent) -> None:
        self.events.append(event)
        self.threads.append(threading.current_thread().name)
        if self.error is not None:
            raise self.error


def test_dispatch_sync_runs_on_the_calling_thread(sample_event: LogEvent) -> None:
    backend = RecordingBackend()
    dispatch_sync(backend, sample_event)
    assert backend.events == [sample_event]
    assert backend.threads == [threading.current_thread().name]


def test_dispatch_sync_propagates_backend_errors(sample_event: LogEvent) -> None:
    backend = RecordingBackend(RuntimeError("throttled"))
    with pytest.raises(RuntimeError, match="throttled"):
        dispatch_sync(backend, sample_event)


def test_spawn_dispatch_runs_on_a_daemon_thread(sample_event: LogEvent) -> None:
    backend = RecordingBackend()
    future = spawn_dispatch(backend, sample_event)
    assert future.result(timeout=5) is None
    assert backend.threads == ["lib_log_kinesis-dispatch"]


def test_spawn_dispatch_logs_and_reports_failures(sample_event: LogEvent, caplog: pytest.LogCaptureFixture) -> None:
    reports: list[tuple[str, dict[str, Any]]] = []
    backend = RecordingBackend(RuntimeError("throttled"))

    with caplog.at_level(logging.ERROR, logger="lib_log_kinesis.application.use_cases.dispatch"):
        future = spawn_dispatch(backend, sample_event, diagnostic=lambda name, payload: reports.append((name, payload)))
        with pytest.raises(RuntimeError, match="throttled"):
            future.result(timeout=5)

    assert any("Asynchronous Kinesis dispatch failed" in record.getMessage() for record in caplog.records)
    assert reports == [
        (
            "async_dispatch_error",
            {"logger": "tests", "level": "ERROR", "exception": "RuntimeError('throttled')"},
        )
    ]


def test_failing_diagnostic_is_contained(sample_event: LogEvent, caplog: pytest.LogCaptureFixture) -> None:
    def explode(name: str, payload: dict[str, Any]) -> None:
        raise RuntimeError("diagnostic down")

    with caplog.at_level(logging.ERROR, logger="lib_log_kinesis.application.use_cases.dispatch"):
        future = spawn_dispatch(RecordingBackend(ValueError("bad")), sample_event, diagnostic=explode)
        with pytest.raises(ValueError):
            future.result(timeout=5)

    assert any("Diagnostic hook raised" in record.getMessage() for record in caplog.records)
