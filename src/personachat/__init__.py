"""
personachat: a terminal chatbot that keeps a persona-primed conversation
with a Gemini text-generation endpoint.
"""

__version__ = "0.1.0"

from .chat import ChatDriver, ReplyFetcher, fetch_reply
from .conversation import ConversationStore, Role, Turn
from .llm import GeminiProvider, LLMProvider, create_llm_provider
from .persona import Persona, load_persona

__all__ = [
    "ChatDriver",
    "ConversationStore",
    "GeminiProvider",
    "LLMProvider",
    "Persona",
    "ReplyFetcher",
    "Role",
    "Turn",
    "create_llm_provider",
    "fetch_reply",
    "load_persona",
]
