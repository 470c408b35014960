"""Two-party conversation ORM model."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from direct_messages.models.base import Base, CreatedAtMixin, IdMixin, utc_now


class Conversation(Base, IdMixin, CreatedAtMixin):
    """Canonical conversation between an unordered pair of users."""

    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint("user_low_id", "user_high_id", name="uq_conversations_user_pair"),
        CheckConstraint("participant_a <> participant_b", name="ck_conversations_distinct_participants"),
    )

    participant_a: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    participant_b: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    # Sorted copy of the pair; the unique constraint above is what makes the pair unordered.
    user_low_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_high_id: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        index=True,
    )

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.participant_a, self.participant_b)

    def other_participant(self, user_id: str) -> str:
        return self.participant_b if user_id == self.participant_a else self.participant_a
