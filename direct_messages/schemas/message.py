"""Direct message request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MessageSendRequest(BaseModel):
    """Compose payload; length rules are enforced after trimming by the service."""

    content: str


class MessageRead(BaseModel):
    """Serialized message."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    conversation_id: int
    sender_id: str
    content: str
    created_at: datetime
    is_read: bool
    read_at: datetime | None = None


class MarkReadResult(BaseModel):
    """Outcome of consuming a conversation's unread state."""

    conversation_id: int
    marked_read: int
