"""Conversation history for personachat.

Provides the append-only, persona-primed turn store shared by the
reply fetcher and the chat loop.
"""

from .models import Role, Turn
from .store import ConversationStore

__all__ = [
    "ConversationStore",
    "Role",
    "Turn",
]
