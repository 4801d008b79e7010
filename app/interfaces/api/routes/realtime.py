"""Websocket endpoint of the realtime push transport."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status
from fastapi.concurrency import run_in_threadpool

from app.application.use_cases.conversations import (
    accept_conversation,
    block_conversation,
    reject_conversation,
)
from app.application.use_cases.messages import (
    count_unread_messages,
    mark_conversation_read,
    send_message,
)
from app.application.use_cases.notifications import (
    acknowledge_notifications,
    list_unread_notifications,
)
from app.domain.entities import User
from app.infrastructure.database import SessionLocal
from app.infrastructure.realtime import connection_manager, serialize_notification
from app.interfaces.api.dependencies import resolve_current_user

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)

_TRANSITIONS = {
    "accept": accept_conversation,
    "reject": reject_conversation,
    "block": block_conversation,
}


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Stream push events to the authenticated user and accept chat commands.

    Browsers cannot set headers on the upgrade request, so the token travels
    in the ``token`` (or ``access_token``) query parameter. Right after the
    handshake the client gets an ``init`` frame with its unread notifications
    and unread message count; that is the point to re-poll anything missed
    while disconnected.
    """

    token = websocket.query_params.get("token") or websocket.query_params.get("access_token")
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    try:
        user, snapshot = await run_in_threadpool(_authenticate, token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await connection_manager.connect(user.id, websocket)
    try:
        await websocket.send_json({"type": "init", "data": snapshot})
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except (ValueError, KeyError):
                await websocket.send_json(_error_frame(None, "Frames must be JSON objects"))
                continue

            if not isinstance(message, dict):
                await websocket.send_json(_error_frame(None, "Frames must be JSON objects"))
                continue

            if message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            reply = await run_in_threadpool(_handle_frame, user.id, message)
            if reply is not None:
                await websocket.send_json(reply)
    except WebSocketDisconnect:
        pass
    finally:
        connection_manager.disconnect(user.id, websocket)


def _authenticate(token: str) -> tuple[User, dict[str, Any]]:
    with SessionLocal() as session:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        snapshot = {
            "notifications": [
                serialize_notification(notification)
                for notification in list_unread_notifications(session, user.id)
            ],
            "unread_messages": count_unread_messages(session, user.id),
        }
    return user, snapshot


def _handle_frame(user_id: int, message: dict[str, Any]) -> dict[str, Any] | None:
    """Run the command carried by ``message``; return an error frame or ``None``."""

    frame_type = message.get("type")
    with SessionLocal() as session:
        try:
            if frame_type == "send-message":
                # delivery confirmation is the message-received echo
                send_message(
                    session,
                    sender_id=user_id,
                    receiver_id=int(message["receiver_id"]),
                    content=str(message.get("content") or ""),
                )
                return None
            if frame_type == "mark-read":
                mark_conversation_read(session, int(message["conversation_id"]), user_id)
                return None
            if frame_type in _TRANSITIONS:
                conversation_id = int(message["conversation_id"])
                if not _TRANSITIONS[frame_type](session, conversation_id, user_id):
                    return _error_frame(frame_type, f"The conversation cannot be {frame_type}ed")
                return None
            if frame_type == "ack":
                ids = message.get("ids")
                if isinstance(ids, list) and ids:
                    acknowledge_notifications(session, [int(i) for i in ids], user_id)
                return None
        except KeyError as exc:
            return _error_frame(frame_type, f"Missing field {exc.args[0]!r}")
        except (LookupError, ValueError, TypeError) as exc:
            return _error_frame(frame_type, str(exc))

    logger.debug("Ignoring unsupported frame %r from user %s", frame_type, user_id)
    return _error_frame(frame_type, "Unsupported frame type")


def _error_frame(frame_type: Any, detail: str) -> dict[str, Any]:
    return {"type": "error", "data": {"request": frame_type, "detail": detail}}


__all__ = ["router"]
