"""Caller identity dependency."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from direct_messages.db.dependencies import get_db
from direct_messages.routers.errors import to_http_exception
from direct_messages.schemas.profile import ParticipantProfile
from direct_messages.services.errors import UnavailableError, store_errors
from direct_messages.services.profiles import DatabaseProfileProvider


def get_current_user(
    x_user_id: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> ParticipantProfile:
    """Resolve the authenticated caller forwarded by the gateway.

    Raises:
        HTTPException 401 if the header is missing or names an unknown user
        HTTPException 503 if the profile store cannot be reached
    """

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    try:
        with store_errors(db):
            profile = DatabaseProfileProvider(db).get_profile(user_id)
    except UnavailableError as exc:
        raise to_http_exception(exc) from exc
    if profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return profile
