"""Tests for sending messages and tracking their read state."""

from __future__ import annotations

import importlib
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.conversations import (
    block_conversation,
    get_or_create_conversation,
    list_conversations,
)
from app.application.use_cases.messages import (
    count_unread_messages,
    list_messages,
    mark_conversation_read,
    send_message,
)
from app.domain.entities import Message
from app.domain.exceptions import (
    ConversationBlockedError,
    ConversationNotFoundError,
    InvalidMessageError,
    UserNotFoundError,
)
from app.infrastructure.database import SessionLocal
from app.infrastructure.models import MessageModel, NotificationModel
from app.infrastructure.repositories import MessageRepository, NotificationRepository


def test_send_message_persists_and_pushes_to_both_participants(session, make_user, pushes):
    alice = make_user("Alice")
    bob = make_user("Bob")

    record = send_message(session, sender_id=alice.id, receiver_id=bob.id, content="  Hello Bob  ")

    assert record.content == "Hello Bob"
    assert record.sender_name == "Alice"
    assert record.is_read is False
    assert record.sent_at is not None

    received = pushes.of_type("message-received")
    assert sorted(user_id for user_id, _, _ in received) == sorted([alice.id, bob.id])
    payload = received[0][2]
    assert payload["message_id"] == record.message_id
    assert payload["content"] == "Hello Bob"
    assert isinstance(payload["sent_at"], str)


def test_send_message_notifies_receiver_only(session, make_user, pushes):
    alice = make_user("Alice")
    bob = make_user("Bob")

    record = send_message(session, sender_id=alice.id, receiver_id=bob.id, content="ping")

    assert NotificationRepository(session).list_for_user(alice.id) == []
    [notification] = NotificationRepository(session).list_for_user(bob.id)
    assert notification.notification_type == "new-message"
    assert notification.link_to_action == f"/messages/{record.conversation_id}"
    assert "Alice" in notification.content
    assert [user_id for user_id, _, _ in pushes.of_type("notification")] == [bob.id]


@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
def test_empty_content_is_rejected(session, make_user, pushes, content):
    alice = make_user()
    bob = make_user()

    with pytest.raises(InvalidMessageError):
        send_message(session, sender_id=alice.id, receiver_id=bob.id, content=content)

    assert session.query(MessageModel).count() == 0
    assert pushes.events == []


def test_sending_to_yourself_is_rejected(session, make_user, pushes):
    alice = make_user()

    with pytest.raises(InvalidMessageError):
        send_message(session, sender_id=alice.id, receiver_id=alice.id, content="me")


def test_unknown_or_inactive_receiver(session, make_user, pushes):
    alice = make_user()
    ghost = make_user(is_active=False)

    with pytest.raises(UserNotFoundError):
        send_message(session, sender_id=alice.id, receiver_id=ghost.id, content="hi")
    with pytest.raises(UserNotFoundError):
        send_message(session, sender_id=alice.id, receiver_id=9999, content="hi")


def test_blocked_conversation_refuses_messages(session, make_user, pushes):
    alice = make_user()
    bob = make_user()
    send_message(session, sender_id=alice.id, receiver_id=bob.id, content="first")
    conversation = get_or_create_conversation(session, alice.id, bob.id)
    assert block_conversation(session, conversation.id, bob.id) is True
    pushes.clear()

    for sender, receiver in ((alice, bob), (bob, alice)):
        with pytest.raises(ConversationBlockedError):
            send_message(session, sender_id=sender.id, receiver_id=receiver.id, content="again")

    assert session.query(MessageModel).count() == 1
    assert pushes.events == []


def test_notification_failure_does_not_fail_the_send(session, make_user, pushes, monkeypatch):
    alice = make_user()
    bob = make_user()

    def _broken_create(self, notification):
        raise SQLAlchemyError("notification store unavailable")

    monkeypatch.setattr(NotificationRepository, "create", _broken_create)

    record = send_message(session, sender_id=alice.id, receiver_id=bob.id, content="still here")

    assert record.message_id
    assert session.query(MessageModel).count() == 1
    assert session.query(NotificationModel).count() == 0


def test_messages_with_identical_timestamps_keep_insertion_order(session, make_user, pushes):
    alice = make_user()
    bob = make_user()
    conversation = get_or_create_conversation(session, alice.id, bob.id)
    instant = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
    repository = MessageRepository(session)
    created = [
        repository.create(
            Message(
                id=None,
                conversation_id=conversation.id,
                sender_id=sender.id,
                content=text,
                sent_at=instant,
            )
        )
        for sender, text in ((alice, "one"), (bob, "two"), (alice, "three"))
    ]

    first = list_messages(session, conversation.id, alice.id)
    second = list_messages(session, conversation.id, bob.id)

    expected = [message.id for message in created]
    assert [record.message_id for record in first] == expected
    assert [record.message_id for record in second] == expected
    assert [record.content for record in first] == ["one", "two", "three"]


def test_list_messages_requires_participation(session, make_user, pushes):
    alice = make_user()
    bob = make_user()
    mallory = make_user()
    record = send_message(session, sender_id=alice.id, receiver_id=bob.id, content="private")

    with pytest.raises(ConversationNotFoundError):
        list_messages(session, record.conversation_id, mallory.id)


def test_mark_read_is_idempotent_and_notifies_sender_once(session, make_user, pushes):
    alice = make_user()
    bob = make_user()
    for text in ("one", "two", "three"):
        record = send_message(session, sender_id=alice.id, receiver_id=bob.id, content=text)
    conversation_id = record.conversation_id
    pushes.clear()

    assert mark_conversation_read(session, conversation_id, bob.id) == 3
    messages = list_messages(session, conversation_id, bob.id)
    assert all(message.is_read for message in messages)
    assert all(message.read_at is not None for message in messages)
    first_read_at = [message.read_at for message in messages]

    assert mark_conversation_read(session, conversation_id, bob.id) == 0
    assert [message.read_at for message in list_messages(session, conversation_id, bob.id)] == first_read_at

    assert pushes.events == [
        (alice.id, "message-read", {"conversation_id": conversation_id}),
    ]
    assert list_conversations(session, alice.id)[0].unread_count == 0
    assert list_conversations(session, bob.id)[0].unread_count == 0


def test_mark_read_leaves_own_messages_untouched(session, make_user, pushes):
    alice = make_user()
    bob = make_user()
    send_message(session, sender_id=alice.id, receiver_id=bob.id, content="from alice")
    record = send_message(session, sender_id=bob.id, receiver_id=alice.id, content="from bob")

    assert mark_conversation_read(session, record.conversation_id, bob.id) == 1

    by_content = {
        message.content: message
        for message in list_messages(session, record.conversation_id, bob.id)
    }
    assert by_content["from alice"].is_read is True
    assert by_content["from bob"].is_read is False
    assert count_unread_messages(session, alice.id) == 1
    assert count_unread_messages(session, bob.id) == 0


def test_mark_read_by_outsider_is_not_found(session, make_user, pushes):
    alice = make_user()
    bob = make_user()
    mallory = make_user()
    record = send_message(session, sender_id=alice.id, receiver_id=bob.id, content="hi")

    with pytest.raises(ConversationNotFoundError):
        mark_conversation_read(session, record.conversation_id, mallory.id)


def test_unread_count_tracks_other_participant_messages(session, make_user, pushes):
    alice = make_user()
    bob = make_user()
    carol = make_user()
    send_message(session, sender_id=alice.id, receiver_id=bob.id, content="a1")
    send_message(session, sender_id=alice.id, receiver_id=bob.id, content="a2")
    send_message(session, sender_id=carol.id, receiver_id=bob.id, content="c1")
    send_message(session, sender_id=bob.id, receiver_id=alice.id, content="b1")

    assert count_unread_messages(session, bob.id) == 3
    assert count_unread_messages(session, alice.id) == 1
    assert count_unread_messages(session, carol.id) == 0
    counts = {summary.other_user.user_id: summary.unread_count for summary in list_conversations(session, bob.id)}
    assert counts == {alice.id: 2, carol.id: 1}


def test_block_committed_mid_send_keeps_message_out(session, make_user, pushes, monkeypatch):
    """A block committed by the other side after the status read still stops the send."""

    alice = make_user()
    bob = make_user()
    first = send_message(session, sender_id=alice.id, receiver_id=bob.id, content="first")
    send_module = importlib.import_module("app.application.use_cases.messages.send_message")
    resolve = send_module.get_or_create_conversation

    def _resolve_then_block(db, sender_id, receiver_id):
        conversation = resolve(db, sender_id, receiver_id)
        with SessionLocal() as other:
            assert block_conversation(other, conversation.id, bob.id) is True
        return conversation

    monkeypatch.setattr(send_module, "get_or_create_conversation", _resolve_then_block)

    with pytest.raises(ConversationBlockedError):
        send_message(session, sender_id=alice.id, receiver_id=bob.id, content="too late")

    assert [message.content for message in list_messages(session, first.conversation_id, alice.id)] == ["first"]
    assert len(pushes.of_type("message-received")) == 2
