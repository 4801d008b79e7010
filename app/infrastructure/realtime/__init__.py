"""Realtime push transport for the infrastructure layer."""

from .events import (
    EVENT_CONVERSATION_STATUS_CHANGED,
    EVENT_MESSAGE_READ,
    EVENT_MESSAGE_RECEIVED,
    EVENT_NOTIFICATION,
    message_read_payload,
    serialize_message_record,
    serialize_notification,
    status_changed_payload,
)
from .manager import UserConnectionManager, connection_manager
from .publisher import (
    RealtimeEventPublisher,
    dispatch_realtime_event,
    realtime_publisher,
)

__all__ = [
    "EVENT_CONVERSATION_STATUS_CHANGED",
    "EVENT_MESSAGE_READ",
    "EVENT_MESSAGE_RECEIVED",
    "EVENT_NOTIFICATION",
    "RealtimeEventPublisher",
    "UserConnectionManager",
    "connection_manager",
    "dispatch_realtime_event",
    "message_read_payload",
    "realtime_publisher",
    "serialize_message_record",
    "serialize_notification",
    "status_changed_payload",
]
