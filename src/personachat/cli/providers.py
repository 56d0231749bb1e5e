"""Provider factory functions for CLI.

Centralizes creation of the persona and LLM instances from settings.
Hides configuration details from command implementations.
"""

from pathlib import Path

import typer
from rich.console import Console

from ..config import API_KEY_ENV, Settings
from ..llm import ConfigurationError, LLMProvider, create_llm_provider
from ..persona import DEFAULT_PERSONA, Persona, load_persona, load_persona_file

# Diagnostics go to stderr
_err_console = Console(stderr=True)


def get_llm(settings: Settings, console: Console | None = None) -> LLMProvider:
    """Create the Gemini provider from settings.

    Args:
        settings: Loaded settings
        console: Optional Rich console for diagnostics

    Returns:
        LLM provider instance

    Raises:
        typer.Exit: With code 1 if GEMINI_API_KEY is not set
    """
    con = console or _err_console
    try:
        api_key = settings.require_api_key()
    except ConfigurationError:
        con.print(f"ERROR: {API_KEY_ENV} not found in .env file.", style="red", markup=False, highlight=False)
        con.print("Please create a .env file and add your key.", markup=False, highlight=False)
        raise typer.Exit(code=1)

    return create_llm_provider(
        "gemini",
        api_key=api_key,
        model=settings.model,
        base_url=settings.api_base,
        timeout=settings.timeout,
    )


def get_persona(
    name: str = DEFAULT_PERSONA,
    path: Path | None = None,
    console: Console | None = None
) -> Persona:
    """Load a persona from a file or by preset name.

    Raises:
        typer.Exit: With code 1 if the persona cannot be loaded
    """
    con = console or _err_console
    try:
        if path is not None:
            return load_persona_file(path)
        return load_persona(name)
    except (OSError, ValueError) as e:
        con.print(f"Error: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(code=1)
