"""Conversation routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from direct_messages.db.dependencies import get_db
from direct_messages.routers.dependencies import get_current_user
from direct_messages.routers.errors import to_http_exception
from direct_messages.schemas.common import ApiResponse
from direct_messages.schemas.conversation import (
    ConversationCreateRequest,
    ConversationRead,
    ConversationSummary,
)
from direct_messages.schemas.profile import ParticipantProfile
from direct_messages.services.conversations import get_or_create_conversation, list_conversations
from direct_messages.services.errors import MessagingError

router = APIRouter(prefix="/conversations")


@router.get("", response_model=ApiResponse[list[ConversationSummary]])
def get_conversations(
    caller: ParticipantProfile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[list[ConversationSummary]]:
    """List the caller's conversations with unread counts."""

    try:
        summaries = list_conversations(db, caller.id)
    except MessagingError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(data=summaries)


@router.post("", response_model=ApiResponse[ConversationRead])
def start_conversation(
    payload: ConversationCreateRequest,
    caller: ParticipantProfile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ApiResponse[ConversationRead]:
    """Return the conversation with another user, creating it if needed."""

    try:
        conversation = get_or_create_conversation(db, caller.id, payload.other_user_id.strip())
    except MessagingError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(data=ConversationRead.model_validate(conversation))
