"""Service error taxonomy and store error translation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class MessagingError(RuntimeError):
    """Base class for messaging failures surfaced to callers."""


class NotFoundError(MessagingError):
    """Referenced user or conversation does not exist."""


class ForbiddenError(MessagingError):
    """Caller is not a participant of the conversation."""


class InvalidRequestError(MessagingError):
    """Request is well-formed but not allowed, e.g. messaging yourself."""


class ValidationError(InvalidRequestError):
    """Message content is empty or too long."""


class ConflictError(MessagingError):
    """Uniqueness violation while creating a conversation.

    Raised and recovered inside the conversation service only.
    """


class UnavailableError(MessagingError):
    """The database could not be reached or timed out."""


@contextmanager
def store_errors(db: Session) -> Iterator[None]:
    """Translate connectivity failures into ``UnavailableError``.

    No retry happens here; sends in particular must never be replayed.
    """

    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        db.rollback()
        logger.warning("Message store unavailable: %s", exc.orig or exc)
        raise UnavailableError("Message store is unavailable.") from exc
