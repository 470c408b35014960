"""Canonical two-party conversations and the viewer's conversation list."""

from __future__ import annotations

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from direct_messages.models.base import utc_now
from direct_messages.models.conversation import Conversation
from direct_messages.models.direct_message import DirectMessage
from direct_messages.schemas.conversation import ConversationRead, ConversationSummary
from direct_messages.schemas.message import MessageRead
from direct_messages.services.errors import (
    ConflictError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
    UnavailableError,
    store_errors,
)
from direct_messages.services.profiles import DatabaseProfileProvider, ProfileProvider, fallback_profile

logger = logging.getLogger(__name__)


def ordered_pair(first_user_id: str, second_user_id: str) -> tuple[str, str]:
    """Return the pair sorted so both directions map to one key."""

    if first_user_id <= second_user_id:
        return first_user_id, second_user_id
    return second_user_id, first_user_id


def _find_by_pair(db: Session, user_low_id: str, user_high_id: str) -> Conversation | None:
    stmt = select(Conversation).where(
        Conversation.user_low_id == user_low_id,
        Conversation.user_high_id == user_high_id,
    )
    return db.scalars(stmt).first()


def _insert_conversation(db: Session, caller_id: str, other_user_id: str) -> Conversation:
    user_low_id, user_high_id = ordered_pair(caller_id, other_user_id)
    now = utc_now()
    conversation = Conversation(
        participant_a=caller_id,
        participant_b=other_user_id,
        user_low_id=user_low_id,
        user_high_id=user_high_id,
        created_at=now,
        updated_at=now,
    )
    db.add(conversation)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(f"Conversation for {user_low_id}/{user_high_id} already exists") from exc
    db.refresh(conversation)
    return conversation


def get_or_create_conversation(
    db: Session,
    caller_id: str,
    other_user_id: str,
    *,
    profiles: ProfileProvider | None = None,
) -> Conversation:
    """Return the conversation for the pair, creating it on first contact.

    A concurrent creation by the other participant loses nothing: the unique
    pair constraint rejects the second insert and the existing row is returned.
    """

    if caller_id == other_user_id:
        raise InvalidRequestError("Cannot message yourself.")

    provider = profiles or DatabaseProfileProvider(db)
    with store_errors(db):
        if provider.get_profile(other_user_id) is None:
            raise NotFoundError(f"User {other_user_id} not found.")

        user_low_id, user_high_id = ordered_pair(caller_id, other_user_id)
        existing = _find_by_pair(db, user_low_id, user_high_id)
        if existing is not None:
            return existing

        try:
            return _insert_conversation(db, caller_id, other_user_id)
        except ConflictError:
            winner = _find_by_pair(db, user_low_id, user_high_id)
            if winner is None:
                logger.warning("Conversation insert for %s/%s conflicted but no row is visible", user_low_id, user_high_id)
                raise UnavailableError("Conversation could not be resolved; try again.")
            logger.info("Conversation %s created concurrently; returning existing row", winner.id)
            return winner


def require_participant(db: Session, conversation_id: int, caller_id: str) -> Conversation:
    """Load a conversation and check the caller belongs to it."""

    conversation = db.get(Conversation, conversation_id)
    if conversation is None:
        raise NotFoundError(f"Conversation {conversation_id} not found.")
    if not conversation.has_participant(caller_id):
        raise ForbiddenError("You are not a participant of this conversation.")
    return conversation


def unread_counts(db: Session, conversation_ids: list[int], viewer_id: str) -> dict[int, int]:
    """Count messages from the other participant the viewer has not read yet."""

    if not conversation_ids:
        return {}
    stmt = (
        select(DirectMessage.conversation_id, func.count(DirectMessage.id))
        .where(
            DirectMessage.conversation_id.in_(conversation_ids),
            DirectMessage.sender_id != viewer_id,
            DirectMessage.is_read.is_(False),
        )
        .group_by(DirectMessage.conversation_id)
    )
    return {conversation_id: int(count) for conversation_id, count in db.execute(stmt).all()}


def _latest_messages(db: Session, conversation_ids: list[int]) -> dict[int, DirectMessage]:
    ranked = (
        select(
            DirectMessage.id.label("message_id"),
            func.row_number()
            .over(
                partition_by=DirectMessage.conversation_id,
                order_by=(DirectMessage.created_at.desc(), DirectMessage.id.desc()),
            )
            .label("position"),
        )
        .where(DirectMessage.conversation_id.in_(conversation_ids))
        .subquery()
    )
    stmt = (
        select(DirectMessage)
        .join(ranked, ranked.c.message_id == DirectMessage.id)
        .where(ranked.c.position == 1)
    )
    return {message.conversation_id: message for message in db.scalars(stmt).all()}


def list_conversations(
    db: Session,
    caller_id: str,
    *,
    profiles: ProfileProvider | None = None,
) -> list[ConversationSummary]:
    """Return the caller's conversations, most recently active first."""

    provider = profiles or DatabaseProfileProvider(db)
    with store_errors(db):
        stmt = (
            select(Conversation)
            .where(or_(Conversation.participant_a == caller_id, Conversation.participant_b == caller_id))
            .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
        )
        conversations = list(db.scalars(stmt).all())
        if not conversations:
            return []

        conversation_ids = [conversation.id for conversation in conversations]
        unread_by_id = unread_counts(db, conversation_ids, caller_id)
        latest_by_id = _latest_messages(db, conversation_ids)
        profiles_by_id = provider.get_profiles(
            conversation.other_participant(caller_id) for conversation in conversations
        )

    summaries: list[ConversationSummary] = []
    for conversation in conversations:
        other_id = conversation.other_participant(caller_id)
        latest = latest_by_id.get(conversation.id)
        summaries.append(
            ConversationSummary(
                conversation=ConversationRead.model_validate(conversation),
                other_participant=profiles_by_id.get(other_id) or fallback_profile(other_id),
                last_message=MessageRead.model_validate(latest) if latest is not None else None,
                unread_count=unread_by_id.get(conversation.id, 0),
            )
        )
    return summaries
