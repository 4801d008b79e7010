"""Integration tests for the notification endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.application.use_cases.notifications import notify_application_status_changed


def test_unread_notifications_and_mark_read(client: TestClient, session, make_user, auth_headers) -> None:
    applicant = make_user()
    stranger = make_user()
    notification = notify_application_status_changed(
        session,
        applicant_id=applicant.id,
        application_id=3,
        job_title="QA Engineer",
        new_status="Accepted",
    )
    headers = auth_headers(applicant.id)

    unread = client.get("/notifications/unread", headers=headers)
    assert unread.status_code == 200
    [item] = unread.json()
    assert item["id"] == notification.id
    assert item["notification_type"] == "application-status-change"
    assert item["link_to_action"] == "/my-applications/3"
    assert item["is_read"] is False

    foreign = client.patch(f"/notifications/{notification.id}/read", headers=auth_headers(stranger.id))
    assert foreign.status_code == 404

    marked = client.patch(f"/notifications/{notification.id}/read", headers=headers)
    assert marked.status_code == 200
    assert marked.json() == {"message": "Notification marked as read."}

    assert client.patch(f"/notifications/{notification.id}/read", headers=headers).status_code == 404
    assert client.get("/notifications/unread", headers=headers).json() == []


def test_message_creates_notification_for_receiver(client: TestClient, make_user, auth_headers) -> None:
    alice = make_user("Alice")
    bob = make_user("Bob")

    sent = client.post(
        "/messages/", json={"receiver_id": bob.id, "content": "hello"}, headers=auth_headers(alice.id)
    )
    assert sent.status_code == 201

    [notification] = client.get("/notifications/unread", headers=auth_headers(bob.id)).json()
    assert notification["notification_type"] == "new-message"
    assert notification["link_to_action"] == f"/messages/{sent.json()['conversation_id']}"
    assert client.get("/notifications/unread", headers=auth_headers(alice.id)).json() == []
