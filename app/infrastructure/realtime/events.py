"""Realtime event names and JSON payload builders."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from enum import Enum
from typing import Any, Final

from app.domain.entities import ConversationStatus, MessageRecord, Notification

EVENT_MESSAGE_RECEIVED: Final[str] = "message-received"
EVENT_CONVERSATION_STATUS_CHANGED: Final[str] = "conversation-status-changed"
EVENT_MESSAGE_READ: Final[str] = "message-read"
EVENT_NOTIFICATION: Final[str] = "notification"


def serialize_message_record(record: MessageRecord) -> dict[str, Any]:
    payload = asdict(record)
    _normalize_values(payload)
    return payload


def serialize_notification(notification: Notification) -> dict[str, Any]:
    payload = asdict(notification)
    _normalize_values(payload)
    return payload


def status_changed_payload(conversation_id: int, status: ConversationStatus) -> dict[str, Any]:
    return {"conversation_id": conversation_id, "status": status.value}


def message_read_payload(conversation_id: int) -> dict[str, Any]:
    return {"conversation_id": conversation_id}


def _normalize_values(data: dict[str, Any] | list[Any]) -> None:
    """Replace datetimes and enums nested in ``data`` with JSON-friendly values."""

    items = data.items() if isinstance(data, dict) else enumerate(data)
    for key, value in list(items):
        if isinstance(value, datetime):
            data[key] = value.isoformat()
        elif isinstance(value, Enum):
            data[key] = value.value
        elif isinstance(value, (dict, list)):
            _normalize_values(value)


__all__ = [
    "EVENT_CONVERSATION_STATUS_CHANGED",
    "EVENT_MESSAGE_READ",
    "EVENT_MESSAGE_RECEIVED",
    "EVENT_NOTIFICATION",
    "message_read_payload",
    "serialize_message_record",
    "serialize_notification",
    "status_changed_payload",
]
