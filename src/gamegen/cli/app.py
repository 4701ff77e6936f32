"""Main CLI application using Typer."""
import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..studio import ChatSession, ChatTurn, StudioListener, decode_data_uri
from .providers import get_controller, get_gemini_api_key, load_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="gamegen",
    help="AI-assisted game development studio: code and asset generation with Gemini",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

LOG_LEVEL_HELP = "Log level: debug (all), info, warning, or error"


def _configure_logging(log_level: str | None) -> None:
    """Route gamegen log records to the console at the given level."""
    if log_level is None:
        return
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


class _ConsoleStreamListener(StudioListener):
    """Echoes the streaming code response and remembers the extracted block."""

    def __init__(self, out: Console) -> None:
        self._out = out
        self._printed = ""
        self.code: str | None = None

    def on_turn_updated(self, session: ChatSession, turn: ChatTurn) -> None:
        text = turn.text
        if text.startswith(self._printed):
            delta = text[len(self._printed):]
        else:
            delta = "\n" + text
        if delta:
            self._out.print(delta, end="", markup=False, highlight=False)
        self._printed = text

    def on_editor_changed(self, text: str) -> None:
        self.code = text


@app.command()
def studio(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive studio TUI."""
    async def _studio():
        from ..ui import run_studio_tui

        controller = get_controller(console)
        await run_studio_tui(controller, log_level=log_level)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_studio())
    except KeyboardInterrupt:
        pass


@app.command()
def code(
    prompt: str = typer.Argument(..., help="Request for the coding assistant"),
    file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        dir_okay=False,
        help="Editor file: used as context if it exists, overwritten with extracted code"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
):
    """Stream a coding-assistant response and extract its code block."""
    _configure_logging(log_level)

    async def _code():
        editor_text = file.read_text() if file is not None and file.exists() else None
        controller = get_controller(console, editor_text=editor_text, welcome=False)
        listener = _ConsoleStreamListener(console)
        controller.set_listener(listener)

        try:
            turn = await controller.send_code_message(prompt)
        finally:
            await controller.code_llm.close()
            await controller.asset_llm.close()
        console.print()

        if turn is None:
            console.print("[yellow]Nothing to send.[/yellow]")
            return
        if turn.failed:
            console.print(f"[red]Error: {turn.text}[/red]")
            raise typer.Exit(code=1)

        if listener.code is None:
            console.print("[dim]No code block extracted.[/dim]")
            return

        console.print(Panel(
            Syntax(listener.code, "typescript", theme="monokai", line_numbers=True),
            title="Extracted code",
            border_style="cyan",
        ))
        if file is not None:
            file.write_text(listener.code)
            console.print(f"[green]Wrote {file}[/green]")

    asyncio.run(_code())


@app.command()
def asset(
    prompt: str = typer.Argument(..., help="Request for the asset architect"),
    out: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        dir_okay=False,
        help="Write the generated image to this path"
    ),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_LEVEL_HELP),
):
    """Run one asset-generation round and show the classified result."""
    _configure_logging(log_level)

    async def _asset():
        controller = get_controller(console, welcome=False)
        try:
            turn = await controller.send_asset_message(prompt)
        finally:
            await controller.code_llm.close()
            await controller.asset_llm.close()

        if turn is None:
            console.print("[yellow]Nothing to send.[/yellow]")
            return
        if turn.failed:
            console.print(f"[red]Error: {turn.text}[/red]")
            raise typer.Exit(code=1)

        console.print(Panel(Markdown(turn.text), title="Asset Architect", border_style="yellow"))

        if not len(controller.library):
            console.print("[dim]No asset added to the library.[/dim]")
            return

        record = controller.library.records[0]
        table = Table(show_header=False, box=None)
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        table.add_row("Name", record.name)
        table.add_row("Category", record.category.value)
        table.add_row("Created", record.created_at.strftime("%Y-%m-%d %H:%M:%S"))
        console.print(table)

        if out is not None:
            if not record.content_ref:
                console.print("[yellow]No image payload to write.[/yellow]")
                return
            mime_type, payload = decode_data_uri(record.content_ref)
            out.write_bytes(payload)
            console.print(f"[green]Wrote {len(payload)} bytes ({mime_type}) to {out}[/green]")

    asyncio.run(_asset())


@app.command()
def settings():
    """Show both provider configurations with masked credentials."""
    current = load_settings()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Role")
    table.add_column("Provider")
    table.add_column("Model")
    table.add_column("API Key")
    table.add_column("Configured")

    for role, config in (("Code Assistant", current.code_ai), ("Asset Assistant", current.asset_ai)):
        configured = config.is_configured(current.gemini_api_key)
        table.add_row(
            role,
            config.provider.label,
            config.model,
            config.display_api_key() or "[dim]-[/dim]",
            "[green]yes[/green]" if configured else "[red]no[/red]",
        )
    console.print(table)
    console.print(f"[dim]Asset consultant text model: {current.asset_text_model}[/dim]")


@app.command()
def health():
    """Check whether the Gemini credential is available."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    has_key = get_gemini_api_key() is not None
    table.add_row("Gemini API key", "[green]set[/green]" if has_key else "[red]missing[/red]")
    current = load_settings()
    table.add_row("Code model", current.code_ai.model)
    table.add_row("Image model", current.asset_ai.model)
    table.add_row("Text model", current.asset_text_model)
    console.print(table)

    if not has_key:
        console.print("[red]Error: GEMINI_API_KEY not set in environment[/red]")
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
