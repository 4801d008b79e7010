"""Persistence helpers for conversation messages."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.domain.entities import Message
from app.infrastructure.models import MessageModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class MessageRepository:
    """Create messages and query their read state."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, message: Message) -> Message:
        model = MessageModel(
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            content=message.content,
            sent_at=ensure_app_naive_datetime(message.sent_at or now_in_app_timezone()),
            is_read=message.is_read,
            read_at=ensure_app_naive_datetime(message.read_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_conversation(self, conversation_id: int) -> Sequence[Message]:
        # id breaks ties between identical timestamps so the order is total
        query = (
            self.session.query(MessageModel)
            .filter(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.sent_at.asc(), MessageModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def latest_by_conversation(self, conversation_ids: Sequence[int]) -> dict[int, Message]:
        """Return the newest message of each conversation in ``conversation_ids``."""

        if not conversation_ids:
            return {}

        ranked = (
            select(
                MessageModel.id.label("message_id"),
                func.row_number()
                .over(
                    partition_by=MessageModel.conversation_id,
                    order_by=(MessageModel.sent_at.desc(), MessageModel.id.desc()),
                )
                .label("position"),
            )
            .where(MessageModel.conversation_id.in_(set(conversation_ids)))
            .subquery()
        )
        query = (
            self.session.query(MessageModel)
            .join(ranked, ranked.c.message_id == MessageModel.id)
            .filter(ranked.c.position == 1)
        )
        return {model.conversation_id: self._to_entity(model) for model in query.all()}

    def unread_counts(self, conversation_ids: Sequence[int], *, reader_id: int) -> dict[int, int]:
        """Count messages ``reader_id`` has not read yet, per conversation."""

        if not conversation_ids:
            return {}

        query = (
            self.session.query(MessageModel.conversation_id, func.count(MessageModel.id))
            .filter(MessageModel.conversation_id.in_(set(conversation_ids)))
            .filter(MessageModel.sender_id != reader_id)
            .filter(MessageModel.is_read.is_(False))
            .group_by(MessageModel.conversation_id)
        )
        return {conversation_id: count for conversation_id, count in query.all()}

    def mark_read(self, conversation_id: int, *, reader_id: int, read_at: datetime) -> int:
        """Mark every unread message not sent by ``reader_id``; return the row count."""

        updated = (
            self.session.query(MessageModel)
            .filter(MessageModel.conversation_id == conversation_id)
            .filter(MessageModel.sender_id != reader_id)
            .filter(MessageModel.is_read.is_(False))
            .update(
                {
                    MessageModel.is_read: True,
                    MessageModel.read_at: ensure_app_naive_datetime(read_at),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(updated or 0)

    @staticmethod
    def _to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            conversation_id=model.conversation_id,
            sender_id=model.sender_id,
            content=model.content,
            sent_at=ensure_app_timezone(model.sent_at),
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["MessageRepository"]
