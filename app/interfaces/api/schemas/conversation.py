"""Pydantic models describing conversations and messages."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import ConversationStatus


class UserSummaryRead(BaseModel):
    """Public profile of the other participant."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    full_name: str
    avatar: str = ""
    company_name: str | None = None
    is_online: bool = False


class MessageCreate(BaseModel):
    """Payload used to send a direct message."""

    model_config = ConfigDict(extra="forbid")

    receiver_id: int = Field(..., ge=1, description="Recipient user id")
    content: str = Field(..., max_length=5000, description="Message text")


class MessageRead(BaseModel):
    """Message as delivered by REST and by the ``message-received`` push event."""

    model_config = ConfigDict(from_attributes=True)

    message_id: int
    conversation_id: int
    sender_id: int
    sender_name: str
    sender_avatar: str
    content: str
    is_read: bool
    read_at: datetime | None = None
    sent_at: datetime


class ConversationRead(BaseModel):
    """Conversation summary from the caller's perspective."""

    model_config = ConfigDict(from_attributes=True)

    conversation_id: int
    other_user: UserSummaryRead
    last_message: MessageRead | None = None
    unread_count: int
    status: ConversationStatus
    created_at: datetime | None = None
    accepted_at: datetime | None = None
    is_initiator: bool


class ActionResult(BaseModel):
    """Human readable outcome of a conversation action."""

    message: str


class MarkReadResult(BaseModel):
    updated: int


__all__ = [
    "ActionResult",
    "ConversationRead",
    "MarkReadResult",
    "MessageCreate",
    "MessageRead",
    "UserSummaryRead",
]
