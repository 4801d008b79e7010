"""Persistence helpers for conversation entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import Conversation, ConversationStatus, canonical_pair
from app.infrastructure.models import ConversationModel, MessageModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)


class ConversationRepository:
    """Provide lookups and state updates for :class:`Conversation` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, conversation_id: int, *, for_update: bool = False) -> Conversation | None:
        model = self._get_model(conversation_id, for_update=for_update)
        return self._to_entity(model) if model else None

    def get_by_participants(
        self, first_user_id: int, second_user_id: int, *, for_update: bool = False
    ) -> Conversation | None:
        user_one_id, user_two_id = canonical_pair(first_user_id, second_user_id)
        query = self.session.query(ConversationModel).filter(
            ConversationModel.user_one_id == user_one_id,
            ConversationModel.user_two_id == user_two_id,
        )
        if for_update:
            query = query.with_for_update()
        model = query.one_or_none()
        return self._to_entity(model) if model else None

    def get_or_create(self, sender_id: int, receiver_id: int) -> tuple[Conversation, bool]:
        """Return the pair's conversation, creating a pending one when missing.

        The boolean is ``True`` when this call created the row. A concurrent
        creation that wins the unique constraint is picked up after rollback.
        """

        existing = self.get_by_participants(sender_id, receiver_id, for_update=True)
        if existing is not None:
            return existing, False

        user_one_id, user_two_id = canonical_pair(sender_id, receiver_id)
        model = ConversationModel(
            user_one_id=user_one_id,
            user_two_id=user_two_id,
            initiated_by=sender_id,
            status=ConversationStatus.PENDING,
            created_at=ensure_app_naive_datetime(now_in_app_timezone()),
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info(
                "Conversation between %s and %s was created concurrently; reusing it",
                user_one_id,
                user_two_id,
            )
            winner = self.get_by_participants(sender_id, receiver_id, for_update=True)
            if winner is None:
                raise
            return winner, False

        self.session.refresh(model)
        return self._to_entity(model), True

    def update_status(
        self, conversation: Conversation, *, expected_status: ConversationStatus
    ) -> Conversation | None:
        """Store the new status only if the row still holds ``expected_status``.

        Returns ``None`` (after rolling back) when another transaction changed
        the status first.
        """

        updated = (
            self.session.query(ConversationModel)
            .filter(
                ConversationModel.id == conversation.id,
                ConversationModel.status == expected_status,
            )
            .update(
                {
                    ConversationModel.status: conversation.status,
                    ConversationModel.accepted_at: ensure_app_naive_datetime(
                        conversation.accepted_at
                    ),
                },
                synchronize_session=False,
            )
        )
        if not updated:
            self.session.rollback()
            return None
        self.session.commit()
        return self.get(conversation.id)

    def lock_unless_blocked(self, conversation_id: int) -> bool:
        """Take the row's write lock for the current transaction unless it is blocked.

        The no-op update makes SQLite (which ignores ``FOR UPDATE``) acquire its
        write lock too, so a block cannot commit until the transaction ends.
        """

        updated = (
            self.session.query(ConversationModel)
            .filter(
                ConversationModel.id == conversation_id,
                ConversationModel.status != ConversationStatus.BLOCKED,
            )
            .update(
                {ConversationModel.status: ConversationModel.status},
                synchronize_session=False,
            )
        )
        return bool(updated)

    def list_for_user(self, user_id: int) -> Sequence[Conversation]:
        """Return the user's conversations, most recently active first.

        Activity is the newest message's ``sent_at``; conversations without
        messages fall back to ``created_at``.
        """

        last_sent = (
            select(
                MessageModel.conversation_id.label("conversation_id"),
                func.max(MessageModel.sent_at).label("last_sent_at"),
            )
            .group_by(MessageModel.conversation_id)
            .subquery()
        )
        activity = func.coalesce(last_sent.c.last_sent_at, ConversationModel.created_at)
        query = (
            self.session.query(ConversationModel)
            .outerjoin(last_sent, last_sent.c.conversation_id == ConversationModel.id)
            .filter(
                or_(
                    ConversationModel.user_one_id == user_id,
                    ConversationModel.user_two_id == user_id,
                )
            )
            .order_by(activity.desc(), ConversationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_ids_for_user(self, user_id: int) -> list[int]:
        query = self.session.query(ConversationModel.id).filter(
            or_(
                ConversationModel.user_one_id == user_id,
                ConversationModel.user_two_id == user_id,
            )
        )
        return [conversation_id for (conversation_id,) in query.all()]

    def _get_model(self, conversation_id: int | None, *, for_update: bool = False) -> ConversationModel | None:
        if conversation_id is None:
            return None
        query = self.session.query(ConversationModel).filter(
            ConversationModel.id == conversation_id
        )
        if for_update:
            query = query.with_for_update()
        return query.one_or_none()

    @staticmethod
    def _to_entity(model: ConversationModel) -> Conversation:
        return Conversation(
            id=model.id,
            user_one_id=model.user_one_id,
            user_two_id=model.user_two_id,
            status=ConversationStatus(model.status),
            initiated_by=model.initiated_by,
            created_at=ensure_app_timezone(model.created_at),
            accepted_at=ensure_app_timezone(model.accepted_at),
        )


__all__ = ["ConversationRepository"]
