"""Domain entities representing chat messages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Message:
    """A single message persisted inside a conversation."""

    id: int | None
    conversation_id: int
    sender_id: int
    content: str
    sent_at: datetime | None = None
    is_read: bool = False
    read_at: datetime | None = None


@dataclass
class MessageRecord:
    """Message shaped for clients, with the sender's public profile resolved."""

    message_id: int
    conversation_id: int
    sender_id: int
    sender_name: str
    sender_avatar: str
    content: str
    is_read: bool
    read_at: datetime | None
    sent_at: datetime


__all__ = ["Message", "MessageRecord"]
