"""Errors raised by messaging use cases and translated by the API layer."""


class ConversationNotFoundError(LookupError):
    """The conversation does not exist or the caller does not participate in it."""


class UserNotFoundError(LookupError):
    """The referenced user does not exist or is inactive."""


class InvalidMessageError(ValueError):
    """The message payload cannot be accepted (empty content, self-addressed)."""


class IllegalTransitionError(ValueError):
    """The requested action is not allowed in the conversation's current state."""


class ConversationBlockedError(IllegalTransitionError):
    """Messages cannot be sent into a blocked conversation."""


__all__ = [
    "ConversationBlockedError",
    "ConversationNotFoundError",
    "IllegalTransitionError",
    "InvalidMessageError",
    "UserNotFoundError",
]
