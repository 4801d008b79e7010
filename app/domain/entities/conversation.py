"""Domain entities for two-party conversations and their lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .message import MessageRecord
    from .user import UserSummary


class ConversationStatus(str, Enum):
    """Lifecycle states of a conversation."""

    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    BLOCKED = "Blocked"


class TransitionActor(str, Enum):
    """Which participant is allowed to trigger a transition."""

    RECEIVER = "receiver"
    EITHER = "either"


# (from, to) -> who may trigger it. Anything missing is illegal.
ALLOWED_TRANSITIONS: Final[dict[tuple[ConversationStatus, ConversationStatus], TransitionActor]] = {
    (ConversationStatus.PENDING, ConversationStatus.ACCEPTED): TransitionActor.RECEIVER,
    (ConversationStatus.PENDING, ConversationStatus.REJECTED): TransitionActor.RECEIVER,
    (ConversationStatus.PENDING, ConversationStatus.BLOCKED): TransitionActor.EITHER,
    (ConversationStatus.ACCEPTED, ConversationStatus.BLOCKED): TransitionActor.EITHER,
    (ConversationStatus.REJECTED, ConversationStatus.BLOCKED): TransitionActor.EITHER,
}

# Re-applying the current status is a no-op success for these actors.
_IDEMPOTENT_ACTORS: Final[dict[ConversationStatus, TransitionActor]] = {
    ConversationStatus.ACCEPTED: TransitionActor.RECEIVER,
    ConversationStatus.REJECTED: TransitionActor.RECEIVER,
    ConversationStatus.BLOCKED: TransitionActor.EITHER,
}


@dataclass
class Conversation:
    """A messaging thread between exactly two users."""

    id: int | None
    user_one_id: int
    user_two_id: int
    status: ConversationStatus
    initiated_by: int
    created_at: datetime | None = None
    accepted_at: datetime | None = None

    @property
    def participant_ids(self) -> tuple[int, int]:
        return (self.user_one_id, self.user_two_id)

    def has_participant(self, user_id: int) -> bool:
        return user_id in self.participant_ids

    def other_participant(self, user_id: int) -> int:
        """Return the participant that is not ``user_id``."""

        if user_id == self.user_one_id:
            return self.user_two_id
        if user_id == self.user_two_id:
            return self.user_one_id
        raise ValueError(f"User {user_id} does not participate in conversation {self.id}")

    def is_blocked(self) -> bool:
        return self.status is ConversationStatus.BLOCKED

    def can_transition(self, target: ConversationStatus, actor_id: int) -> bool:
        """Return ``True`` when ``actor_id`` may move the conversation to ``target``.

        Accepting and rejecting are reserved for the receiver of the request (the
        participant who did not initiate it); blocking is open to both sides.
        Asking for the status the conversation already holds is allowed for the
        same actors so repeated calls stay harmless.
        """

        if not self.has_participant(actor_id):
            return False

        if target is self.status:
            actor = _IDEMPOTENT_ACTORS.get(target)
        else:
            actor = ALLOWED_TRANSITIONS.get((self.status, target))

        if actor is None:
            return False
        if actor is TransitionActor.RECEIVER:
            return actor_id != self.initiated_by
        return True

    def apply_transition(self, target: ConversationStatus, *, at: datetime) -> bool:
        """Set ``target`` and return ``True`` when the stored state changed."""

        if target is self.status:
            return False
        self.status = target
        if target is ConversationStatus.ACCEPTED:
            self.accepted_at = at
        return True


def canonical_pair(first_user_id: int, second_user_id: int) -> tuple[int, int]:
    """Return the participant pair ordered so the smaller id comes first."""

    if first_user_id <= second_user_id:
        return (first_user_id, second_user_id)
    return (second_user_id, first_user_id)


@dataclass
class ConversationSummary:
    """Conversation as seen by one of its participants."""

    conversation_id: int
    other_user: UserSummary
    last_message: MessageRecord | None
    unread_count: int
    status: ConversationStatus
    created_at: datetime | None
    accepted_at: datetime | None
    is_initiator: bool


__all__ = [
    "ALLOWED_TRANSITIONS",
    "Conversation",
    "ConversationStatus",
    "ConversationSummary",
    "TransitionActor",
    "canonical_pair",
]
