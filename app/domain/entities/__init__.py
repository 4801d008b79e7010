"""Domain entities exposed by the application."""

from .conversation import (
    ALLOWED_TRANSITIONS,
    Conversation,
    ConversationStatus,
    ConversationSummary,
    TransitionActor,
    canonical_pair,
)
from .message import Message, MessageRecord
from .notification import (
    NOTIFICATION_TYPE_APPLICATION_STATUS,
    NOTIFICATION_TYPE_NEW_JOB_FROM_FOLLOWED_COMPANY,
    NOTIFICATION_TYPE_NEW_MESSAGE,
    Notification,
)
from .user import User, UserSummary

__all__ = [
    "ALLOWED_TRANSITIONS",
    "Conversation",
    "ConversationStatus",
    "ConversationSummary",
    "TransitionActor",
    "canonical_pair",
    "Message",
    "MessageRecord",
    "NOTIFICATION_TYPE_APPLICATION_STATUS",
    "NOTIFICATION_TYPE_NEW_JOB_FROM_FOLLOWED_COMPANY",
    "NOTIFICATION_TYPE_NEW_MESSAGE",
    "Notification",
    "User",
    "UserSummary",
]
