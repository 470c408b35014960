"""Conversation request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from direct_messages.schemas.message import MessageRead
from direct_messages.schemas.profile import ParticipantProfile


class ConversationCreateRequest(BaseModel):
    """Start (or resume) a conversation with another user."""

    other_user_id: str = Field(min_length=1, max_length=64)


class ConversationRead(BaseModel):
    """Serialized conversation row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    participant_a: str
    participant_b: str
    created_at: datetime
    updated_at: datetime


class ConversationSummary(BaseModel):
    """Conversation list row enriched for the viewer."""

    conversation: ConversationRead
    other_participant: ParticipantProfile
    last_message: MessageRead | None
    unread_count: int
