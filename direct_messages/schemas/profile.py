"""Participant profile schemas."""

from typing import Literal

from pydantic import BaseModel

MembershipTier = Literal["free", "pro", "founder"]


class ParticipantProfile(BaseModel):
    """Resolved presentation attributes for one user."""

    id: str
    name: str
    avatar_url: str | None = None
    membership_tier: MembershipTier = "free"
    is_pro: bool = False
    is_founder: bool = False
