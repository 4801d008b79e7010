"""Route for sending direct messages."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.messages import send_message as send_message_uc
from app.domain.entities import User
from app.domain.exceptions import IllegalTransitionError, InvalidMessageError, UserNotFoundError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_active_user
from app.interfaces.api.schemas import MessageCreate, MessageRead

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("/", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def send_message(
    message_in: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Send a message, opening the conversation on first contact."""

    try:
        record = send_message_uc(
            db,
            sender_id=current_user.id,
            receiver_id=message_in.receiver_id,
            content=message_in.content,
        )
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (InvalidMessageError, IllegalTransitionError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return MessageRead.model_validate(asdict(record))
