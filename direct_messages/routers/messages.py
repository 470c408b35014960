"""Message routes scoped to one conversation."""

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from direct_messages.db.dependencies import get_db
from direct_messages.routers.dependencies import get_current_user
from direct_messages.routers.errors import to_http_exception
from direct_messages.schemas.common import ApiResponse
from direct_messages.schemas.message import MarkReadResult, MessageRead, MessageSendRequest
from direct_messages.schemas.profile import ParticipantProfile
from direct_messages.services.errors import MessagingError
from direct_messages.services.messages import list_messages, mark_conversation_read, send_message

router = APIRouter(prefix="/conversations/{conversation_id}")


@router.get("/messages", response_model=ApiResponse[list[MessageRead]])
def get_messages(
    conversation_id: int = Path(..., ge=1),
    mark_read: bool = Query(default=False),
    caller: ParticipantProfile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[list[MessageRead]]:
    """List a conversation's messages, optionally consuming its unread state."""

    try:
        records = [MessageRead.model_validate(message) for message in list_messages(db, caller.id, conversation_id)]
        if mark_read:
            mark_conversation_read(db, caller.id, conversation_id)
    except MessagingError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(data=records)


@router.post("/messages", response_model=ApiResponse[MessageRead], status_code=201)
def post_message(
    payload: MessageSendRequest,
    conversation_id: int = Path(..., ge=1),
    caller: ParticipantProfile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[MessageRead]:
    """Send one message."""

    try:
        message = send_message(db, caller.id, conversation_id, payload.content)
    except MessagingError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(data=MessageRead.model_validate(message))


@router.post("/read", response_model=ApiResponse[MarkReadResult])
def read_conversation(
    conversation_id: int = Path(..., ge=1),
    caller: ParticipantProfile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[MarkReadResult]:
    """Mark the other participant's messages as read."""

    try:
        marked = mark_conversation_read(db, caller.id, conversation_id)
    except MessagingError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(data=MarkReadResult(conversation_id=conversation_id, marked_read=marked))
