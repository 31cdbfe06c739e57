"""Notification log tests."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import pytest
from plan_metadata_engine.notification_log import LogMessage, MessageLog, MessageType


def test_messages_are_newest_first_and_bounded() -> None:
    log = MessageLog(capacity=3)

    for index in range(5):
        log.add_message(f"message {index}")

    assert [entry.message for entry in log.messages] == ["message 4", "message 3", "message 2"]
    assert log.capacity == 3


def test_default_capacity_keeps_one_hundred_messages() -> None:
    log = MessageLog()

    for index in range(150):
        log.add_message(str(index))

    assert len(log.messages) == 100
    assert log.messages[0].message == "149"


def test_recent_returns_requested_count() -> None:
    log = MessageLog()
    for index in range(15):
        log.add_message(str(index))

    assert [entry.message for entry in log.recent()] == [str(i) for i in range(14, 4, -1)]
    assert [entry.message for entry in log.recent(2)] == ["14", "13"]
    assert log.recent(0) == ()


def test_message_fields_are_recorded() -> None:
    log = MessageLog()

    entry = log.add_message("Plan updated", "success", "plan_update", {"plan_id": "P1"})

    assert entry.type == MessageType.SUCCESS
    assert entry.action == "plan_update"
    assert entry.details == {"plan_id": "P1"}
    assert entry.id
    assert entry.timestamp.tzinfo is not None


def test_clear_removes_all_messages() -> None:
    log = MessageLog()
    log.add_message("a")

    log.clear()

    assert log.messages == ()


def test_subscribers_receive_messages_until_unsubscribed() -> None:
    log = MessageLog()
    received: list[LogMessage] = []

    unsubscribe = log.subscribe(received.append)
    log.add_message("first")
    unsubscribe()
    log.add_message("second")
    unsubscribe()

    assert [entry.message for entry in received] == ["first"]


def test_messages_are_forwarded_to_logging(caplog: pytest.LogCaptureFixture) -> None:
    log = MessageLog()

    with caplog.at_level(logging.INFO, logger="plan_metadata_engine.notifications"):
        log.add_message("Import failed", MessageType.ERROR)

    assert [(record.levelno, record.getMessage()) for record in caplog.records] == [
        (logging.ERROR, "Import failed")
    ]


def test_invalid_capacity_and_type_are_rejected() -> None:
    with pytest.raises(ValueError):
        MessageLog(capacity=0)
    with pytest.raises(ValueError):
        MessageLog().add_message("x", "fatal")


def test_messages_are_timestamped_in_utc() -> None:
    before = datetime.now(UTC)

    entry = MessageLog().add_message("saved", MessageType.SUCCESS)

    assert entry.timestamp.utcoffset() == timedelta(0)
    assert before <= entry.timestamp <= datetime.now(UTC)
