"""Endpoints for a user's at-rest notifications."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    list_unread_notifications as list_unread_notifications_uc,
    mark_notification_read as mark_notification_read_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_active_user
from app.interfaces.api.schemas import ActionResult, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/unread", response_model=list[NotificationRead])
def list_unread_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the newest unread notifications for the authenticated user."""

    notifications = list_unread_notifications_uc(db, current_user.id)
    return [NotificationRead.model_validate(asdict(notification)) for notification in notifications]


@router.patch("/{notification_id}/read", response_model=ActionResult)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ActionResult:
    """Mark one of the caller's unread notifications as read."""

    if not mark_notification_read_uc(db, notification_id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found"
        )
    return ActionResult(message="Notification marked as read.")
