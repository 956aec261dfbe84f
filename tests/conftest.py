from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from lib_log_kinesis.domain.events import LogEvent
from lib_log_kinesis.domain.levels import LogLevel
from tests.fakes import FakeFirehoseClient, FakeKinesisClient


@pytest.fixture
def kinesis_client() -> FakeKinesisClient:
    return FakeKinesisClient()


@pytest.fixture
def firehose_client() -> FakeFirehoseClient:
    return FakeFirehoseClient()


@pytest.fixture
def sample_event() -> LogEvent:
    return LogEvent(
        level=LogLevel.ERROR,
        message="boom",
        fields={"user": "alice", "attempt": 3},
        logger_name="tests",
        timestamp=datetime(2025, 9, 23, tzinfo=timezone.utc),
    )


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer AWS and LOG_KINESIS_* settings out of the tests."""

    for name in (
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_SESSION_TOKEN",
        "AWS_SECURITY_TOKEN",
        "AWS_CREDENTIAL_EXPIRATION",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "AWS_ENDPOINT",
        "AWS_PROFILE",
    ):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("LOG_KINESIS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "missing-credentials"))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "missing-config"))
