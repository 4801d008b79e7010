"""Use cases for reading conversations from a participant's point of view."""

from sqlalchemy.orm import Session

from app.application.use_cases.records import summarize_conversations
from app.domain.entities import Conversation, ConversationSummary
from app.domain.exceptions import ConversationNotFoundError
from app.infrastructure.repositories import ConversationRepository


def get_participant_conversation(
    session: Session, conversation_id: int, user_id: int, *, for_update: bool = False
) -> Conversation:
    """Return the conversation or raise when ``user_id`` is not part of it."""

    conversation = ConversationRepository(session).get(conversation_id, for_update=for_update)
    if conversation is None or not conversation.has_participant(user_id):
        raise ConversationNotFoundError("Conversation not found")
    return conversation


def get_conversation(session: Session, conversation_id: int, user_id: int) -> ConversationSummary:
    """Return the summary of one conversation the user participates in."""

    conversation = get_participant_conversation(session, conversation_id, user_id)
    return summarize_conversations(session, [conversation], viewer_id=user_id)[0]


def list_conversations(session: Session, user_id: int) -> list[ConversationSummary]:
    """Return every conversation of ``user_id``, most recently active first."""

    conversations = ConversationRepository(session).list_for_user(user_id)
    return summarize_conversations(session, conversations, viewer_id=user_id)
