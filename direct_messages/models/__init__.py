"""ORM models package exports."""

from direct_messages.models.conversation import Conversation
from direct_messages.models.direct_message import DirectMessage
from direct_messages.models.user_profile import MEMBERSHIP_TIERS, UserProfile

__all__ = [
    "Conversation",
    "DirectMessage",
    "MEMBERSHIP_TIERS",
    "UserProfile",
]
