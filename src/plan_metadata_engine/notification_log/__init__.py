"""Notification log exports."""

from .message_log import DEFAULT_CAPACITY, LogMessage, MessageLog, MessageType

__all__ = ["DEFAULT_CAPACITY", "LogMessage", "MessageLog", "MessageType"]
