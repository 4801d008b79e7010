"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

NOTIFICATION_TYPE_APPLICATION_STATUS: Final[str] = "application-status-change"
NOTIFICATION_TYPE_NEW_MESSAGE: Final[str] = "new-message"
NOTIFICATION_TYPE_NEW_JOB_FROM_FOLLOWED_COMPANY: Final[str] = "new-job-from-followed-company"


@dataclass
class Notification:
    """At-rest message delivered to a specific user."""

    id: int | None
    user_id: int
    notification_type: str
    content: str
    link_to_action: str
    is_read: bool = False
    created_at: datetime | None = None


__all__ = [
    "NOTIFICATION_TYPE_APPLICATION_STATUS",
    "NOTIFICATION_TYPE_NEW_JOB_FROM_FOLLOWED_COMPANY",
    "NOTIFICATION_TYPE_NEW_MESSAGE",
    "Notification",
]
