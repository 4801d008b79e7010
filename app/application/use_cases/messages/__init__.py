"""Use cases for sending and reading direct messages."""

from .read_state import count_unread_messages, list_messages, mark_conversation_read
from .send_message import send_message

__all__ = [
    "count_unread_messages",
    "list_messages",
    "mark_conversation_read",
    "send_message",
]
