from .conversation import (
    ActionResult,
    ConversationRead,
    MarkReadResult,
    MessageCreate,
    MessageRead,
    UserSummaryRead,
)
from .notification import NotificationRead

__all__ = [
    "ActionResult",
    "ConversationRead",
    "MarkReadResult",
    "MessageCreate",
    "MessageRead",
    "NotificationRead",
    "UserSummaryRead",
]
