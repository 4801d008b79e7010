"""Use cases for message history and read receipts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.application.use_cases.conversations import get_participant_conversation
from app.application.use_cases.records import build_message_record
from app.domain.entities import MessageRecord
from app.infrastructure.realtime import (
    EVENT_MESSAGE_READ,
    dispatch_realtime_event,
    message_read_payload,
)
from app.infrastructure.repositories import (
    ConversationRepository,
    MessageRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def list_messages(session: Session, conversation_id: int, user_id: int) -> list[MessageRecord]:
    """Return the conversation's messages oldest first, ties broken by id."""

    conversation = get_participant_conversation(session, conversation_id, user_id)
    messages = MessageRepository(session).list_for_conversation(conversation.id)
    users = UserRepository(session).get_map_by_ids(list(conversation.participant_ids))
    return [build_message_record(message, users.get(message.sender_id)) for message in messages]


def mark_conversation_read(session: Session, conversation_id: int, user_id: int) -> int:
    """Mark the other participant's unread messages as read by ``user_id``.

    The other participant receives a ``message-read`` event only when something
    changed, so repeating the call leaves the same state and stays silent.
    """

    conversation = get_participant_conversation(
        session, conversation_id, user_id, for_update=True
    )
    updated = MessageRepository(session).mark_read(
        conversation.id, reader_id=user_id, read_at=now_in_app_timezone()
    )
    if updated:
        logger.debug(
            "User %s read %s messages in conversation %s", user_id, updated, conversation.id
        )
        dispatch_realtime_event(
            [conversation.other_participant(user_id)],
            event_type=EVENT_MESSAGE_READ,
            payload=message_read_payload(conversation.id),
        )
    return updated


def count_unread_messages(session: Session, user_id: int) -> int:
    """Total messages waiting for ``user_id`` across all conversations."""

    conversation_ids = ConversationRepository(session).list_ids_for_user(user_id)
    counts = MessageRepository(session).unread_counts(conversation_ids, reader_id=user_id)
    return sum(counts.values())


__all__ = ["count_unread_messages", "list_messages", "mark_conversation_read"]
