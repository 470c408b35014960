"""Mapping from service errors to HTTP responses."""

import logging

from fastapi import HTTPException, status

from direct_messages.services.errors import (
    ForbiddenError,
    InvalidRequestError,
    MessagingError,
    NotFoundError,
    UnavailableError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[MessagingError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (InvalidRequestError, status.HTTP_400_BAD_REQUEST),
    (UnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def to_http_exception(exc: MessagingError) -> HTTPException:
    """Build the HTTP error for a service failure; unmapped kinds become 500."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
                logger.error("Request failed: %s", exc)
            return HTTPException(status_code=status_code, detail=str(exc))
    logger.exception("Unmapped messaging error")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
