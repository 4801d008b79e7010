"""SQLAlchemy models for conversations and their messages."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from app.domain.entities import ConversationStatus
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ConversationModel(Base):
    """Two-party conversation keyed by its canonical participant pair."""

    __tablename__ = "conversation"
    __table_args__ = (
        UniqueConstraint("user_one_id", "user_two_id", name="uq_conversation_pair"),
        CheckConstraint("user_one_id < user_two_id", name="ck_conversation_pair_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_one_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    user_two_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    initiated_by = Column(Integer, ForeignKey("user.id"), nullable=False)
    status = Column(
        Enum(
            ConversationStatus,
            name="conversation_status",
            values_callable=lambda statuses: [status.value for status in statuses],
            validate_strings=True,
        ),
        nullable=False,
        default=ConversationStatus.PENDING,
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    accepted_at = Column(DateTime(), nullable=True)


class MessageModel(Base):
    """Message sent by one participant of a conversation."""

    __tablename__ = "message"
    __table_args__ = (
        Index("ix_message_conversation_sent", "conversation_id", "sent_at", "id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(
        Integer, ForeignKey("conversation.id"), nullable=False, index=True
    )
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    sent_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(), nullable=True)


__all__ = ["ConversationModel", "MessageModel"]
