"""Shape persisted entities into the records clients receive."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import (
    Conversation,
    ConversationSummary,
    Message,
    MessageRecord,
    User,
    UserSummary,
)
from app.infrastructure.realtime import connection_manager
from app.infrastructure.repositories import MessageRepository, UserRepository


def build_user_summary(user_id: int, user: User | None) -> UserSummary:
    """Return the public profile for ``user_id``; online state is a best-effort hint."""

    if user is None:
        return UserSummary(user_id=user_id, full_name="", avatar="", company_name=None)
    return UserSummary(
        user_id=user_id,
        full_name=user.full_name,
        avatar=user.avatar_url or "",
        company_name=user.company_name,
        is_online=connection_manager.is_connected(user_id),
    )


def build_message_record(message: Message, sender: User | None) -> MessageRecord:
    return MessageRecord(
        message_id=message.id or 0,
        conversation_id=message.conversation_id,
        sender_id=message.sender_id,
        sender_name=sender.full_name if sender else "",
        sender_avatar=(sender.avatar_url or "") if sender else "",
        content=message.content,
        is_read=message.is_read,
        read_at=message.read_at,
        sent_at=message.sent_at,
    )


def summarize_conversations(
    session: Session, conversations: Sequence[Conversation], *, viewer_id: int
) -> list[ConversationSummary]:
    """Build one :class:`ConversationSummary` per conversation, keeping order."""

    if not conversations:
        return []

    conversation_ids = [conversation.id for conversation in conversations]
    messages = MessageRepository(session)
    latest = messages.latest_by_conversation(conversation_ids)
    unread = messages.unread_counts(conversation_ids, reader_id=viewer_id)

    user_ids = {viewer_id}
    for conversation in conversations:
        user_ids.update(conversation.participant_ids)
    users = UserRepository(session).get_map_by_ids(sorted(user_ids))

    summaries: list[ConversationSummary] = []
    for conversation in conversations:
        other_id = conversation.other_participant(viewer_id)
        last_message = latest.get(conversation.id)
        summaries.append(
            ConversationSummary(
                conversation_id=conversation.id,
                other_user=build_user_summary(other_id, users.get(other_id)),
                last_message=(
                    build_message_record(last_message, users.get(last_message.sender_id))
                    if last_message
                    else None
                ),
                unread_count=unread.get(conversation.id, 0),
                status=conversation.status,
                created_at=conversation.created_at,
                accepted_at=conversation.accepted_at,
                is_initiator=conversation.initiated_by == viewer_id,
            )
        )
    return summaries


__all__ = [
    "build_message_record",
    "build_user_summary",
    "summarize_conversations",
]
