"""Profile lookup for conversation participants."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from direct_messages.models.user_profile import MEMBERSHIP_TIERS, UserProfile
from direct_messages.schemas.profile import ParticipantProfile

FALLBACK_DISPLAY_NAME = "User"


class ProfileProvider(Protocol):
    """Source of user identity and presentation attributes."""

    def get_profile(self, user_id: str) -> ParticipantProfile | None:
        """Return the profile for one user, or ``None`` if the user is unknown."""

    def get_profiles(self, user_ids: Iterable[str]) -> dict[str, ParticipantProfile]:
        """Return profiles keyed by user id; unknown ids are omitted."""


def resolve_display_name(profile: UserProfile) -> str:
    """Pick the first usable name the profile carries."""

    for candidate in (profile.display_name, profile.full_name):
        if candidate and candidate.strip():
            return candidate.strip()
    if profile.email and "@" in profile.email:
        local_part = profile.email.split("@", 1)[0].strip()
        if local_part:
            return local_part
    return FALLBACK_DISPLAY_NAME


def to_participant_profile(profile: UserProfile) -> ParticipantProfile:
    tier = profile.membership_tier if profile.membership_tier in MEMBERSHIP_TIERS else "free"
    return ParticipantProfile(
        id=profile.id,
        name=resolve_display_name(profile),
        avatar_url=profile.avatar_url or None,
        membership_tier=tier,
        is_pro=tier in ("pro", "founder"),
        is_founder=tier == "founder",
    )


def fallback_profile(user_id: str) -> ParticipantProfile:
    """Placeholder for a participant whose profile row is gone."""

    return ParticipantProfile(id=user_id, name=FALLBACK_DISPLAY_NAME)


@dataclass(slots=True)
class DatabaseProfileProvider:
    """Profile provider backed by the ``user_profiles`` table."""

    db: Session

    def get_profile(self, user_id: str) -> ParticipantProfile | None:
        profile = self.db.get(UserProfile, user_id)
        if profile is None:
            return None
        return to_participant_profile(profile)

    def get_profiles(self, user_ids: Iterable[str]) -> dict[str, ParticipantProfile]:
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        rows = self.db.scalars(select(UserProfile).where(UserProfile.id.in_(ids))).all()
        return {row.id: to_participant_profile(row) for row in rows}
