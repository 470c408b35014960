"""User profile ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from direct_messages.models.base import Base, CreatedAtMixin

MEMBERSHIP_TIERS = ("free", "pro", "founder")


class UserProfile(Base, CreatedAtMixin):
    """Presentation attributes for an identity-provider user."""

    __tablename__ = "user_profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    membership_tier: Mapped[str] = mapped_column(String(16), default="free", nullable=False)
