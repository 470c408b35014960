"""SQLAlchemy metadata registry import for Alembic."""

from direct_messages.models import Conversation, DirectMessage, UserProfile
from direct_messages.models.base import Base

__all__ = ["Base", "Conversation", "DirectMessage", "UserProfile"]
