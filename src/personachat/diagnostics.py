"""Diagnostic output on the standard error stream.

Conversation text goes to stdout; everything in here goes to stderr so
the two never interleave in redirected output.
"""

from typing import Any

from rich.console import Console

from .config import LogLevel

_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}


class DiagnosticLog:
    """Level-filtered diagnostic writer backed by a Rich console."""

    def __init__(self, level: int = LogLevel.WARNING, console: Console | None = None) -> None:
        self.level = level
        self.console = console or Console(stderr=True)

    def enabled(self, level: int) -> bool:
        return level >= self.level

    def log(self, level: int, message: str, *details: Any) -> None:
        if not self.enabled(level):
            return
        self.console.print(
            message,
            *details,
            style=_LEVEL_STYLES.get(level),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    def debug(self, message: str, *details: Any) -> None:
        self.log(LogLevel.DEBUG, message, *details)

    def info(self, message: str, *details: Any) -> None:
        self.log(LogLevel.INFO, message, *details)

    def warning(self, message: str, *details: Any) -> None:
        self.log(LogLevel.WARNING, message, *details)

    def error(self, message: str, *details: Any) -> None:
        self.log(LogLevel.ERROR, message, *details)

    def api_error(self, status_code: int, reason: str, body: Any) -> None:
        """Write the details of a failed API call as one block."""
        if not self.enabled(LogLevel.ERROR):
            return
        self.error("\n--- Google API Error Details ---")
        self.error("Status:", status_code, reason)
        self.error("Response Body:", body)
        self.error("--------------------------------\n")
