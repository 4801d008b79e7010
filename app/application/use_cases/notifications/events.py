"""Create notifications in response to domain events."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    NOTIFICATION_TYPE_APPLICATION_STATUS,
    NOTIFICATION_TYPE_NEW_JOB_FROM_FOLLOWED_COMPANY,
    NOTIFICATION_TYPE_NEW_MESSAGE,
    Notification,
)
from app.infrastructure.realtime import (
    EVENT_NOTIFICATION,
    dispatch_realtime_event,
    serialize_notification,
)
from app.infrastructure.repositories import CompanyFollowRepository, NotificationRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

_CONTENT_MAX_LENGTH = 500


def create_notification(
    session: Session,
    *,
    user_id: int,
    notification_type: str,
    content: str,
    link: str,
) -> Notification:
    """Persist a notification for ``user_id`` and push it if they are online.

    The write does not depend on the recipient being connected; offline users
    pick it up through the unread listing.
    """

    notification = Notification(
        id=None,
        user_id=user_id,
        notification_type=notification_type,
        content=content[:_CONTENT_MAX_LENGTH],
        link_to_action=link,
        is_read=False,
        created_at=now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(notification)
    dispatch_realtime_event(
        [saved.user_id],
        event_type=EVENT_NOTIFICATION,
        payload=serialize_notification(saved),
    )
    return saved


def notify_new_message(
    session: Session,
    *,
    receiver_id: int,
    sender_name: str,
    conversation_id: int,
) -> Notification:
    """Tell the receiver (never the sender) that a message arrived."""

    display_name = sender_name or "someone"
    return create_notification(
        session,
        user_id=receiver_id,
        notification_type=NOTIFICATION_TYPE_NEW_MESSAGE,
        content=f"You have a new message from {display_name}.",
        link=f"/messages/{conversation_id}",
    )


def notify_application_status_changed(
    session: Session,
    *,
    applicant_id: int,
    application_id: int,
    job_title: str,
    new_status: str,
) -> Notification:
    """Inform the applicant that an employer updated their application."""

    return create_notification(
        session,
        user_id=applicant_id,
        notification_type=NOTIFICATION_TYPE_APPLICATION_STATUS,
        content=(
            f"Your application for the position '{job_title}' has been updated to "
            f"'{new_status}'."
        ),
        link=f"/my-applications/{application_id}",
    )


def notify_followers_of_new_job(
    session: Session,
    *,
    company_id: int,
    company_name: str,
    job_id: int,
    job_title: str,
) -> list[Notification]:
    """Create one notification per follower of ``company_id``.

    Every follower is written independently. A failed write is rolled back,
    logged and skipped so the remaining followers are still notified and the
    job posting that triggered the fan-out is unaffected.
    """

    follower_ids = CompanyFollowRepository(session).list_follower_ids(company_id)
    content = f"Company '{company_name}' has posted a new job: '{job_title}'."
    link = f"/jobs/{job_id}"

    created: list[Notification] = []
    for follower_id in follower_ids:
        try:
            notification = create_notification(
                session,
                user_id=follower_id,
                notification_type=NOTIFICATION_TYPE_NEW_JOB_FROM_FOLLOWED_COMPANY,
                content=content,
                link=link,
            )
        except SQLAlchemyError:
            session.rollback()
            logger.exception(
                "Could not notify follower %s about job %s of company %s",
                follower_id,
                job_id,
                company_id,
            )
            continue
        created.append(notification)

    if len(created) < len(follower_ids):
        logger.warning(
            "Notified %s of %s followers about job %s",
            len(created),
            len(follower_ids),
            job_id,
        )
    return created


__all__ = [
    "create_notification",
    "notify_application_status_changed",
    "notify_followers_of_new_job",
    "notify_new_message",
]
