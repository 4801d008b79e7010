"""Use cases that move a conversation through its lifecycle."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import ConversationStatus
from app.infrastructure.realtime import (
    EVENT_CONVERSATION_STATUS_CHANGED,
    dispatch_realtime_event,
    status_changed_payload,
)
from app.infrastructure.repositories import ConversationRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

_MAX_ATTEMPTS = 3


def accept_conversation(session: Session, conversation_id: int, user_id: int) -> bool:
    """Accept a pending request. Only the receiver may do this."""

    return _transition(session, conversation_id, user_id, ConversationStatus.ACCEPTED)


def reject_conversation(session: Session, conversation_id: int, user_id: int) -> bool:
    """Reject a pending request. Only the receiver may do this."""

    return _transition(session, conversation_id, user_id, ConversationStatus.REJECTED)


def block_conversation(session: Session, conversation_id: int, user_id: int) -> bool:
    """Block the conversation on behalf of either participant."""

    return _transition(session, conversation_id, user_id, ConversationStatus.BLOCKED)


def _transition(
    session: Session,
    conversation_id: int,
    user_id: int,
    target: ConversationStatus,
) -> bool:
    """Apply ``target`` if the status is unchanged since it was read; ``False`` when not allowed.

    Missing conversations, non-participants and illegal moves all return
    ``False`` so callers cannot tell them apart.
    """

    repository = ConversationRepository(session)
    for _ in range(_MAX_ATTEMPTS):
        conversation = repository.get(conversation_id, for_update=True)
        if conversation is None or not conversation.can_transition(target, user_id):
            session.rollback()
            logger.info(
                "User %s may not set conversation %s to %s",
                user_id,
                conversation_id,
                target.value,
            )
            return False

        previous = conversation.status
        if not conversation.apply_transition(target, at=now_in_app_timezone()):
            session.rollback()
            return True

        # a concurrent change since the read fails the write; decide again on fresh state
        saved = repository.update_status(conversation, expected_status=previous)
        if saved is not None:
            break
        logger.info("Conversation %s changed concurrently; re-reading it", conversation_id)
    else:
        logger.warning(
            "Gave up setting conversation %s to %s after %s attempts",
            conversation_id,
            target.value,
            _MAX_ATTEMPTS,
        )
        return False

    logger.info(
        "Conversation %s is now %s (by user %s)", saved.id, saved.status.value, user_id
    )
    dispatch_realtime_event(
        saved.participant_ids,
        event_type=EVENT_CONVERSATION_STATUS_CHANGED,
        payload=status_changed_payload(saved.id, saved.status),
    )
    return True


__all__ = ["accept_conversation", "block_conversation", "reject_conversation"]
