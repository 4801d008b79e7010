"""Domain entities describing platform users as seen by messaging."""

from dataclasses import dataclass


@dataclass
class User:
    """Identity attributes needed to address and display a user."""

    id: int | None
    full_name: str
    email: str
    avatar_url: str | None
    company_id: int | None
    company_name: str | None
    is_active: bool


@dataclass
class UserSummary:
    """Public profile of a conversation participant."""

    user_id: int
    full_name: str
    avatar: str
    company_name: str | None
    is_online: bool = False
