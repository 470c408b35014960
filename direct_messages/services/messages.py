"""Message exchange: append, history, and the read/unread transition."""

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from direct_messages.config import get_settings
from direct_messages.models.base import utc_now
from direct_messages.models.conversation import Conversation
from direct_messages.models.direct_message import DirectMessage
from direct_messages.services.conversations import require_participant, unread_counts
from direct_messages.services.errors import ValidationError, store_errors


def validate_content(content: str) -> str:
    """Return trimmed content or raise when it is empty or too long."""

    trimmed = content.strip()
    if not trimmed:
        raise ValidationError("Message content cannot be empty.")
    max_length = get_settings().message_max_length
    if len(trimmed) > max_length:
        raise ValidationError(f"Message content cannot exceed {max_length} characters.")
    return trimmed


def send_message(db: Session, caller_id: str, conversation_id: int, content: str) -> DirectMessage:
    """Append a message and move the conversation to the top of both inboxes.

    ``updated_at`` only moves forward: a concurrent send that commits later
    with an earlier timestamp leaves the newer value in place.
    """

    with store_errors(db):
        conversation = require_participant(db, conversation_id, caller_id)
        trimmed = validate_content(content)

        now = utc_now()
        message = DirectMessage(
            conversation_id=conversation.id,
            sender_id=caller_id,
            content=trimmed,
            created_at=now,
            is_read=False,
        )
        db.add(message)
        db.execute(
            update(Conversation)
            .where(Conversation.id == conversation.id, Conversation.updated_at < now)
            .values(updated_at=now)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        db.refresh(message)
    return message


def list_messages(db: Session, caller_id: str, conversation_id: int) -> list[DirectMessage]:
    """Return the full history oldest first, read and unread alike."""

    with store_errors(db):
        require_participant(db, conversation_id, caller_id)
        stmt = (
            select(DirectMessage)
            .where(DirectMessage.conversation_id == conversation_id)
            .order_by(DirectMessage.created_at.asc(), DirectMessage.id.asc())
        )
        return list(db.scalars(stmt).all())


def mark_conversation_read(db: Session, caller_id: str, conversation_id: int) -> int:
    """Mark every message addressed to the caller as read.

    Returns how many messages changed state; zero on a repeated call.
    """

    with store_errors(db):
        require_participant(db, conversation_id, caller_id)
        stmt = (
            update(DirectMessage)
            .where(
                DirectMessage.conversation_id == conversation_id,
                DirectMessage.sender_id != caller_id,
                DirectMessage.is_read.is_(False),
            )
            .values(is_read=True, read_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = db.execute(stmt)
        db.commit()
    return int(result.rowcount or 0)


def count_unread(db: Session, conversation_id: int, viewer_id: str) -> int:
    """Return how many of the other participant's messages the viewer has not read."""

    with store_errors(db):
        return unread_counts(db, [conversation_id], viewer_id).get(conversation_id, 0)
