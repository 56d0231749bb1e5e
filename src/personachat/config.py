"""Runtime configuration.

Settings come from environment variables (a .env file is loaded by the
CLI) and may be overridden by command-line options.
"""

import os
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .llm.exceptions import ConfigurationError
from .llm.providers.gemini import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT

API_KEY_ENV = "GEMINI_API_KEY"


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns WARNING if invalid."""
        return cls._from_string.get(level_str.lower(), cls.WARNING)

    @classmethod
    def choices(cls) -> list[str]:
        return list(cls._from_string)


class Settings(BaseModel):
    """Chat client settings."""

    api_key: str | None = Field(default=None, description="Gemini API key")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier")
    api_base: str = Field(default=DEFAULT_BASE_URL, description="API base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    log_level: str = Field(default="warning", description="Diagnostic verbosity")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        if value.lower() not in LogLevel.choices():
            raise ValueError(f"log_level must be one of {', '.join(LogLevel.choices())}")
        return value.lower()

    @property
    def log_threshold(self) -> int:
        return LogLevel.from_string(self.log_level)

    def require_api_key(self) -> str:
        """Return the API key.

        Raises:
            ConfigurationError: If the key is not set
        """
        if not self.api_key:
            raise ConfigurationError(f"{API_KEY_ENV} not found in .env file.")
        return self.api_key


def load_settings(**overrides: Any) -> Settings:
    """Build settings from environment variables.

    Environment variables:
        GEMINI_API_KEY: Gemini API key (required to chat)
        GEMINI_MODEL: Model (default: gemini-2.0-flash)
        GEMINI_API_BASE: API base URL (default: v1beta generativelanguage endpoint)
        GEMINI_TIMEOUT: Request timeout in seconds (default: 60)
        GEMINI_TEMPERATURE: Sampling temperature (default: endpoint default)
        PERSONACHAT_LOG_LEVEL: debug, info, warning or error (default: warning)

    Args:
        **overrides: Values that take precedence over the environment.
            None values are ignored.

    Raises:
        ConfigurationError: If a value fails validation
    """
    values: dict[str, Any] = {
        "api_key": os.getenv(API_KEY_ENV) or None,
        "model": os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        "api_base": os.getenv("GEMINI_API_BASE", DEFAULT_BASE_URL),
        "timeout": os.getenv("GEMINI_TIMEOUT", str(DEFAULT_TIMEOUT)),
        "temperature": os.getenv("GEMINI_TEMPERATURE") or None,
        "log_level": os.getenv("PERSONACHAT_LOG_LEVEL", "warning"),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
