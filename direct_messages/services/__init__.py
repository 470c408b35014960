"""Conversation and message services."""

from direct_messages.services.conversations import get_or_create_conversation, list_conversations
from direct_messages.services.messages import (
    count_unread,
    list_messages,
    mark_conversation_read,
    send_message,
)

__all__ = [
    "count_unread",
    "get_or_create_conversation",
    "list_conversations",
    "list_messages",
    "mark_conversation_read",
    "send_message",
]
