"""Use cases for reading and acknowledging a user's notifications."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def list_unread_notifications(
    session: Session, user_id: int, *, limit: int | None = None
) -> Sequence[Notification]:
    """Return the newest unread notifications of ``user_id`` (20 by default)."""

    if limit is None:
        limit = get_settings().notification_unread_limit
    return NotificationRepository(session).list_unread_for_user(user_id, limit=limit)


def mark_notification_read(session: Session, notification_id: int, user_id: int) -> bool:
    """Mark one notification read; ``False`` if it is not the user's or already read."""

    return NotificationRepository(session).mark_as_read(notification_id, user_id=user_id)


def acknowledge_notifications(
    session: Session, notification_ids: Sequence[int], user_id: int
) -> int:
    """Mark a batch of the user's notifications read and return how many changed."""

    return NotificationRepository(session).mark_many_as_read(notification_ids, user_id=user_id)
