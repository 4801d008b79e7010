"""Use cases for conversation lookup and lifecycle changes."""

from .get_conversation import (
    get_conversation,
    get_participant_conversation,
    list_conversations,
)
from .get_or_create_conversation import get_or_create_conversation
from .transitions import accept_conversation, block_conversation, reject_conversation

__all__ = [
    "accept_conversation",
    "block_conversation",
    "get_conversation",
    "get_or_create_conversation",
    "get_participant_conversation",
    "list_conversations",
    "reject_conversation",
]
