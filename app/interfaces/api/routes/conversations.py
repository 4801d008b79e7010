"""Routes for reading conversations and changing their status."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.conversations import (
    accept_conversation as accept_conversation_uc,
    block_conversation as block_conversation_uc,
    get_conversation as get_conversation_uc,
    list_conversations as list_conversations_uc,
    reject_conversation as reject_conversation_uc,
)
from app.application.use_cases.messages import (
    list_messages as list_messages_uc,
    mark_conversation_read as mark_conversation_read_uc,
)
from app.domain.entities import User
from app.domain.exceptions import ConversationNotFoundError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_active_user
from app.interfaces.api.schemas import (
    ActionResult,
    ConversationRead,
    MarkReadResult,
    MessageRead,
)

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("/", response_model=list[ConversationRead])
def list_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the caller's conversations, most recently active first."""

    summaries = list_conversations_uc(db, current_user.id)
    return [ConversationRead.model_validate(asdict(summary)) for summary in summaries]


@router.get("/{conversation_id}", response_model=ConversationRead)
def read_conversation(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return one conversation; 404 when the caller does not participate."""

    try:
        summary = get_conversation_uc(db, conversation_id, current_user.id)
    except ConversationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ConversationRead.model_validate(asdict(summary))


@router.get("/{conversation_id}/messages", response_model=list[MessageRead])
def list_messages(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the message history, oldest first."""

    try:
        records = list_messages_uc(db, conversation_id, current_user.id)
    except ConversationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return [MessageRead.model_validate(asdict(record)) for record in records]


@router.put("/{conversation_id}/read", response_model=MarkReadResult)
def mark_conversation_read(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Mark the other participant's messages as read."""

    try:
        updated = mark_conversation_read_uc(db, conversation_id, current_user.id)
    except ConversationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return MarkReadResult(updated=updated)


def _run_action(
    action: Callable[[Session, int, int], bool],
    *,
    db: Session,
    conversation_id: int,
    user: User,
    success: str,
    failure: str,
) -> ActionResult:
    if not action(db, conversation_id, user.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=failure)
    return ActionResult(message=success)


@router.post("/{conversation_id}/accept", response_model=ActionResult)
def accept_conversation(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Accept a pending conversation request."""

    return _run_action(
        accept_conversation_uc,
        db=db,
        conversation_id=conversation_id,
        user=current_user,
        success="Conversation accepted",
        failure="The conversation cannot be accepted",
    )


@router.post("/{conversation_id}/reject", response_model=ActionResult)
def reject_conversation(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Reject a pending conversation request."""

    return _run_action(
        reject_conversation_uc,
        db=db,
        conversation_id=conversation_id,
        user=current_user,
        success="Conversation rejected",
        failure="The conversation cannot be rejected",
    )


@router.post("/{conversation_id}/block", response_model=ActionResult)
def block_conversation(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Block the conversation for both participants."""

    return _run_action(
        block_conversation_uc,
        db=db,
        conversation_id=conversation_id,
        user=current_user,
        success="Conversation blocked",
        failure="The conversation cannot be blocked",
    )
