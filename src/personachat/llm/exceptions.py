"""Exceptions raised while talking to the text-generation endpoint."""

from typing import Any


class PersonaChatError(Exception):
    """Base exception for personachat."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(PersonaChatError):
    """Raised when a required setting such as the API key is missing or invalid."""


class TransportError(PersonaChatError):
    """Raised when the endpoint answers with a non-OK HTTP status."""

    def __init__(self, status_code: int, reason: str = "", body: Any = None):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(
            f"API request failed with status {status_code}",
            {"status_code": status_code, "reason": reason, "body": body}
        )


class MalformedResponseError(PersonaChatError):
    """Raised when a successful response body cannot be understood."""


class EmptyResponseError(PersonaChatError):
    """Raised when a successful response carries no candidates."""
