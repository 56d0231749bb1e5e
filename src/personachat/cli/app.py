"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from ..chat import ChatDriver, ConsoleLineReader, ReplyFetcher
from ..config import LogLevel, load_settings
from ..conversation import ConversationStore
from ..diagnostics import DiagnosticLog
from ..llm import ConfigurationError
from ..persona import DEFAULT_PERSONA, list_personas
from .providers import get_llm, get_persona

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="personachat",
    help="Terminal chatbot that talks to Gemini in character",
    add_completion=False,
)

# Console for conversation output
console = Console()
# Console for diagnostics
err_console = Console(stderr=True)


@app.command()
def chat(
    persona: str = typer.Option(
        DEFAULT_PERSONA,
        "--persona",
        "-p",
        help=f"Persona preset to talk to ({', '.join(list_personas())})"
    ),
    persona_file: Path | None = typer.Option(
        None,
        "--persona-file",
        exists=True,
        dir_okay=False,
        help="YAML persona definition (overrides --persona)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Gemini model (default: $GEMINI_MODEL or gemini-2.0-flash)"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Request timeout in seconds (default: $GEMINI_TIMEOUT or 60)"
    ),
    temperature: float | None = typer.Option(
        None,
        "--temperature",
        help="Sampling temperature (default: endpoint default)"
    ),
    api_base: str | None = typer.Option(
        None,
        "--api-base",
        help="API base URL (default: $GEMINI_API_BASE)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Diagnostic verbosity: debug, info, warning, or error"
    ),
):
    """Chat with a persona in the terminal. Type 'exit' or 'quit' to leave."""
    try:
        settings = load_settings(
            model=model,
            timeout=timeout,
            temperature=temperature,
            api_base=api_base,
            log_level=log_level,
        )
    except ConfigurationError as e:
        err_console.print(f"Error: {e.message}", style="red", markup=False, highlight=False)
        raise typer.Exit(code=1)

    chosen = get_persona(persona, persona_file, err_console)
    llm = get_llm(settings, err_console)
    log = DiagnosticLog(settings.log_threshold, err_console)

    async def _chat():
        store = ConversationStore.from_persona(chosen)
        async with llm:
            fetcher = ReplyFetcher(llm, store, log, temperature=settings.temperature)
            driver = ChatDriver(
                store=store,
                fetcher=fetcher,
                persona=chosen,
                reader=ConsoleLineReader(console),
                console=console,
            )

            for line in chosen.banner_lines:
                console.print(line, markup=False, highlight=False)
            console.print("Type 'exit' or 'quit' to leave the conversation.", markup=False, highlight=False)
            console.print("-------------------------------------------------", markup=False, highlight=False)

            log.debug(f"Using model {settings.model} at {settings.api_base}")
            log.debug(f"Diagnostics at {LogLevel.name(log.level)} level")
            await driver.run()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
