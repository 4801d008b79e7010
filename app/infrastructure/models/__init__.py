"""ORM models used by the application infrastructure."""

from .conversation import ConversationModel, MessageModel
from .notification import NotificationModel
from .user import CompanyFollowModel, CompanyModel, UserModel

__all__ = [
    "CompanyFollowModel",
    "CompanyModel",
    "ConversationModel",
    "MessageModel",
    "NotificationModel",
    "UserModel",
]
