"""Bounded in-memory log of user-facing notifications."""

from __future__ import annotations

import logging
import threading
import uuid
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

_LOGGER = logging.getLogger("plan_metadata_engine.notifications")
_LOGGER.addHandler(logging.NullHandler())

DEFAULT_CAPACITY = 100


class MessageType(str, Enum):
    """Severity of a notification."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


_LOG_LEVELS = {
    MessageType.SUCCESS: logging.INFO,
    MessageType.INFO: logging.INFO,
    MessageType.WARNING: logging.WARNING,
    MessageType.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class LogMessage:
    """One recorded notification."""

    message: str
    type: MessageType
    timestamp: datetime
    action: str | None = None
    details: Mapping[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


Subscriber = Callable[[LogMessage], None]


class MessageLog:
    """Keeps the most recent notifications, newest first."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be greater than zero")
        self._messages: deque[LogMessage] = deque(maxlen=capacity)
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._messages.maxlen or 0

    @property
    def messages(self) -> tuple[LogMessage, ...]:
        """All retained messages, newest first."""
        with self._lock:
            return tuple(self._messages)

    def add_message(
        self,
        message: str,
        type: MessageType | str = MessageType.INFO,  # pylint: disable=redefined-builtin
        action: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> LogMessage:
        """Record a notification and notify subscribers."""
        entry = LogMessage(
            message=message,
            type=MessageType(type),
            timestamp=datetime.now(UTC),
            action=action,
            details=dict(details or {}),
        )
        with self._lock:
            self._messages.appendleft(entry)
            subscribers = list(self._subscribers)
        _LOGGER.log(_LOG_LEVELS[entry.type], "%s", message, extra={"action": action})
        for callback in subscribers:
            callback(entry)
        return entry

    def recent(self, count: int = 10) -> tuple[LogMessage, ...]:
        """Return up to `count` messages, newest first."""
        with self._lock:
            return tuple(self._messages)[: max(count, 0)]

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback` for new messages; the returned callable unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe
