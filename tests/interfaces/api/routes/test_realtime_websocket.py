"""End-to-end tests for the ``/ws`` push endpoint."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect


def _receive_types(websocket, count: int) -> dict[str, dict]:
    frames = {}
    for _ in range(count):
        frame = websocket.receive_json()
        frames[frame["type"]] = frame.get("data")
    return frames


def test_missing_or_invalid_token_is_refused(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect) as missing:
        with client.websocket_connect("/ws"):
            pass
    assert missing.value.code == 1008

    with pytest.raises(WebSocketDisconnect) as invalid:
        with client.websocket_connect("/ws?token=garbage"):
            pass
    assert invalid.value.code == 1008


def test_init_frame_and_ping(client: TestClient, make_user, auth_headers) -> None:
    alice = make_user()
    bob = make_user()
    client.post("/messages/", json={"receiver_id": bob.id, "content": "waiting"}, headers=auth_headers(alice.id))
    token = auth_headers(bob.id)["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert init["data"]["unread_messages"] == 1
        assert [n["notification_type"] for n in init["data"]["notifications"]] == ["new-message"]

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_connected_receiver_gets_message_and_read_receipt(client: TestClient, make_user, auth_headers) -> None:
    alice = make_user("Alice")
    bob = make_user("Bob")
    alice_token = auth_headers(alice.id)["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/ws?token={alice_token}") as alice_socket:
        assert alice_socket.receive_json()["type"] == "init"

        sent = client.post(
            "/messages/", json={"receiver_id": bob.id, "content": "Hi Bob"}, headers=auth_headers(alice.id)
        )
        assert sent.status_code == 201
        conversation_id = sent.json()["conversation_id"]

        echo = alice_socket.receive_json()
        assert echo["type"] == "message-received"
        assert echo["data"]["content"] == "Hi Bob"

        read = client.put(f"/conversations/{conversation_id}/read", headers=auth_headers(bob.id))
        assert read.json() == {"updated": 1}

        receipt = alice_socket.receive_json()
        assert receipt == {"type": "message-read", "data": {"conversation_id": conversation_id}}


def test_commands_over_the_socket(client: TestClient, make_user, auth_headers) -> None:
    alice = make_user("Alice")
    bob = make_user("Bob")
    alice_token = auth_headers(alice.id)["Authorization"].split(" ", 1)[1]
    bob_token = auth_headers(bob.id)["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/ws?token={alice_token}") as alice_socket, client.websocket_connect(
        f"/ws?token={bob_token}"
    ) as bob_socket:
        alice_socket.receive_json()
        bob_socket.receive_json()

        alice_socket.send_json({"type": "send-message", "receiver_id": bob.id, "content": "over ws"})
        assert alice_socket.receive_json()["type"] == "message-received"
        bob_frames = _receive_types(bob_socket, 2)
        assert bob_frames["message-received"]["content"] == "over ws"
        assert bob_frames["notification"]["notification_type"] == "new-message"
        conversation_id = bob_frames["message-received"]["conversation_id"]

        alice_socket.send_json({"type": "accept", "conversation_id": conversation_id})
        error = alice_socket.receive_json()
        assert error["type"] == "error"
        assert error["data"]["request"] == "accept"

        bob_socket.send_json({"type": "accept", "conversation_id": conversation_id})
        assert bob_socket.receive_json() == {
            "type": "conversation-status-changed",
            "data": {"conversation_id": conversation_id, "status": "Accepted"},
        }
        assert alice_socket.receive_json()["data"]["status"] == "Accepted"

        bob_socket.send_json({"type": "send-message", "content": "no receiver"})
        missing = bob_socket.receive_json()
        assert missing["type"] == "error"
        assert missing["data"]["request"] == "send-message"

        bob_socket.send_json({"type": "dance"})
        assert bob_socket.receive_json()["data"]["detail"] == "Unsupported frame type"
