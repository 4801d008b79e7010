"""Use case resolving the single conversation between two users."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import Conversation
from app.domain.exceptions import InvalidMessageError
from app.infrastructure.repositories import ConversationRepository

logger = logging.getLogger(__name__)


def get_or_create_conversation(session: Session, sender_id: int, receiver_id: int) -> Conversation:
    """Return the pair's conversation, opening a pending one initiated by ``sender_id``.

    The returned row stays locked until the session's transaction ends.
    """

    if sender_id == receiver_id:
        raise InvalidMessageError("A conversation needs two different users")

    conversation, created = ConversationRepository(session).get_or_create(sender_id, receiver_id)
    if created:
        logger.info(
            "Opened conversation %s between %s and %s",
            conversation.id,
            sender_id,
            receiver_id,
        )
    return conversation
