"""Use case for sending a direct message."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.conversations import get_or_create_conversation
from app.application.use_cases.notifications import notify_new_message
from app.application.use_cases.records import build_message_record
from app.domain.entities import Message, MessageRecord
from app.domain.exceptions import (
    ConversationBlockedError,
    InvalidMessageError,
    UserNotFoundError,
)
from app.infrastructure.realtime import (
    EVENT_MESSAGE_RECEIVED,
    dispatch_realtime_event,
    serialize_message_record,
)
from app.infrastructure.repositories import (
    ConversationRepository,
    MessageRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def send_message(
    session: Session,
    *,
    sender_id: int,
    receiver_id: int,
    content: str,
) -> MessageRecord:
    """Persist a message from ``sender_id`` to ``receiver_id`` and fan it out.

    The conversation between both users is opened on first contact. The
    message is committed before anything is pushed: both participants get a
    ``message-received`` event and the receiver gets a notification. Neither
    side effect can fail the send.
    """

    text = (content or "").strip()
    if not text:
        raise InvalidMessageError("Message content cannot be empty")
    if sender_id == receiver_id:
        raise InvalidMessageError("You cannot send a message to yourself")

    users = UserRepository(session).get_map_by_ids([sender_id, receiver_id])
    receiver = users.get(receiver_id)
    if receiver is None or not receiver.is_active:
        raise UserNotFoundError("Recipient not found")
    sender = users.get(sender_id)

    conversation = get_or_create_conversation(session, sender_id, receiver_id)
    # the insert below commits in the same transaction that holds this lock
    if conversation.is_blocked() or not ConversationRepository(session).lock_unless_blocked(
        conversation.id
    ):
        session.rollback()
        raise ConversationBlockedError("This conversation has been blocked")

    saved = MessageRepository(session).create(
        Message(
            id=None,
            conversation_id=conversation.id,
            sender_id=sender_id,
            content=text,
            sent_at=now_in_app_timezone(),
        )
    )
    record = build_message_record(saved, sender)

    dispatch_realtime_event(
        conversation.participant_ids,
        event_type=EVENT_MESSAGE_RECEIVED,
        payload=serialize_message_record(record),
    )

    try:
        notify_new_message(
            session,
            receiver_id=receiver_id,
            sender_name=sender.full_name if sender else "",
            conversation_id=conversation.id,
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Message %s was stored but notifying user %s failed", saved.id, receiver_id
        )

    return record


__all__ = ["send_message"]
