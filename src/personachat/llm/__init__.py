from .base import LLMProvider
from .exceptions import (
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
    PersonaChatError,
    TransportError,
)
from .factory import create_llm_provider
from .models import GenerateContentRequest, GenerateContentResponse, LLMResponse
from .providers import GeminiProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ConfigurationError",
    "EmptyResponseError",
    "GeminiProvider",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "LLMResponse",
    "MalformedResponseError",
    "PersonaChatError",
    "TransportError",
]
