"""Aggregate application use cases."""

from .conversations import (
    accept_conversation,
    block_conversation,
    get_conversation,
    list_conversations,
    reject_conversation,
)
from .messages import list_messages, mark_conversation_read, send_message
from .notifications import (
    create_notification,
    list_unread_notifications,
    mark_notification_read,
    notify_application_status_changed,
    notify_followers_of_new_job,
)

__all__ = [
    "accept_conversation",
    "block_conversation",
    "create_notification",
    "get_conversation",
    "list_conversations",
    "list_messages",
    "list_unread_notifications",
    "mark_conversation_read",
    "mark_notification_read",
    "notify_application_status_changed",
    "notify_followers_of_new_job",
    "reject_conversation",
    "send_message",
]
