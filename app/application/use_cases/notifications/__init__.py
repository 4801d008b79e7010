"""Public helpers for emitting and reading notifications."""

from .events import (
    create_notification,
    notify_application_status_changed,
    notify_followers_of_new_job,
    notify_new_message,
)
from .inbox import (
    acknowledge_notifications,
    list_unread_notifications,
    mark_notification_read,
)

__all__ = [
    "acknowledge_notifications",
    "create_notification",
    "list_unread_notifications",
    "mark_notification_read",
    "notify_application_status_changed",
    "notify_followers_of_new_job",
    "notify_new_message",
]
