"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..chat import ChatOrchestrator, Sender
from ..ui.config import LogLevel
from ..ui.formatting import format_age, format_message_time, message_count_label
from .providers import get_orchestrator, get_response_provider, get_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="mockchat",
    help="Chat client with simulated assistant replies",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

HELP_TEXT = """[bold]Commands[/bold]
  /new            start a new conversation
  /list           list conversations
  /select <id>    switch to a conversation
  /delete <id>    delete a conversation
  /help           show this help
  /quit           leave (also: exit, quit, q)
Anything else is sent as a message."""


def _load_settings(
    responder: str | None,
    responses_file: Path | None,
    min_delay: float | None,
    max_delay: float | None,
    seed: int | None,
) -> dict:
    try:
        return get_settings(
            responder=responder,
            responses_file=responses_file,
            min_delay=min_delay,
            max_delay=max_delay,
            seed=seed,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


ResponderOption = typer.Option(
    None,
    "--responder",
    "-r",
    help="Reply source: 'canned' (random canned replies) or 'echo'"
)
ResponsesFileOption = typer.Option(
    None,
    "--responses-file",
    exists=True,
    dir_okay=False,
    help="Text file with one canned reply per line"
)
MinDelayOption = typer.Option(None, "--min-delay", help="Minimum reply delay in seconds")
MaxDelayOption = typer.Option(None, "--max-delay", help="Maximum reply delay in seconds")
SeedOption = typer.Option(None, "--seed", help="Seed for reproducible delays and replies")
LogLevelOption = typer.Option(
    None,
    "--log-level",
    "-l",
    help="Show log output with level: debug (all), info, warning, or error"
)


@app.command(name="tui")
def tui_command(
    responder: str | None = ResponderOption,
    responses_file: Path | None = ResponsesFileOption,
    min_delay: float | None = MinDelayOption,
    max_delay: float | None = MaxDelayOption,
    seed: int | None = SeedOption,
    log_level: str | None = LogLevelOption,
    no_confirm: bool = typer.Option(
        False,
        "--no-confirm",
        help="Delete with Ctrl+X without asking"
    ),
):
    """Launch the two-pane TUI chat interface."""
    settings = _load_settings(responder, responses_file, min_delay, max_delay, seed)
    orchestrator = get_orchestrator(settings, console)

    async def _tui():
        from ..ui import run_textual_tui

        await run_textual_tui(
            orchestrator,
            log_level=log_level,
            confirm_delete=not no_confirm,
        )
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def _print_conversations(orchestrator: ChatOrchestrator) -> None:
    conversations = orchestrator.conversations
    if not conversations:
        console.print("[dim]No conversations yet.[/dim]")
        return

    table = Table(title="Conversations", show_lines=False)
    table.add_column("", width=1)
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Messages", justify="right")
    table.add_column("Updated", style="dim")
    for conversation in conversations:
        marker = "*" if conversation.id == orchestrator.active_conversation_id else ""
        table.add_row(
            marker,
            conversation.id,
            escape(conversation.title),
            str(conversation.message_count),
            format_age(conversation.updated_at),
        )
    console.print(table)


def _print_header(orchestrator: ChatOrchestrator) -> None:
    active = orchestrator.active_conversation
    if active is None:
        console.print("[dim]No active conversation. Type a message to start one.[/dim]")
        return
    console.print(
        f"[bold]{escape(active.title)}[/bold] [dim]({message_count_label(active.message_count)})[/dim]",
        highlight=False,
    )


def _handle_command(orchestrator: ChatOrchestrator, line: str) -> bool:
    """Run a slash command. Returns False when the session should end."""
    command, _, argument = line[1:].partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command in ("quit", "exit", "q"):
        return False
    if command == "help":
        console.print(HELP_TEXT)
    elif command == "new":
        orchestrator.new_conversation()
        _print_header(orchestrator)
    elif command == "list":
        _print_conversations(orchestrator)
    elif command == "select":
        if not argument:
            console.print("[yellow]Usage: /select <id>[/yellow]")
        else:
            orchestrator.select_conversation(argument)
            _print_header(orchestrator)
    elif command == "delete":
        if not argument:
            console.print("[yellow]Usage: /delete <id>[/yellow]")
        elif orchestrator.delete_conversation(argument):
            console.print(f"[dim]Deleted {escape(argument)}.[/dim]")
        else:
            console.print(f"[dim]No conversation {escape(argument)}.[/dim]")
    else:
        console.print(f"[yellow]Unknown command: /{escape(command)}[/yellow] [dim](try /help)[/dim]")
    return True


@app.command()
def chat(
    responder: str | None = ResponderOption,
    responses_file: Path | None = ResponsesFileOption,
    min_delay: float | None = MinDelayOption,
    max_delay: float | None = MaxDelayOption,
    seed: int | None = SeedOption,
    log_level: str | None = LogLevelOption,
):
    """Interactive line-mode chat with the simulated assistant."""
    settings = _load_settings(responder, responses_file, min_delay, max_delay, seed)
    orchestrator = get_orchestrator(settings, console)

    if log_level is not None:
        threshold = LogLevel.from_string(log_level)

        def debug_callback(level: str, component: str, message: str) -> None:
            """Print core log events at or above the threshold."""
            if LogLevel.from_string(level) >= threshold:
                console.print(
                    Text(f"{level.upper():<5} [{component}] {message}", style="dim")
                )

        orchestrator.set_debug_callback(debug_callback)

    orchestrator.set_error_callback(
        lambda conversation_id, error: console.print(f"[red]Error: {escape(str(error))}[/red]")
    )

    async def _chat():
        console.print("[bold cyan]Chat[/bold cyan]")
        console.print("[dim]Type /help for commands, 'exit', 'quit', or 'q' to leave[/dim]\n")

        try:
            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input.strip():
                    continue

                if user_input.strip().lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                if user_input.startswith("/"):
                    if not _handle_command(orchestrator, user_input.strip()):
                        console.print("[dim]Goodbye![/dim]")
                        break
                    continue

                message = orchestrator.send_message(user_input)
                if message is None:
                    continue

                with console.status("[dim]Assistant is typing...[/dim]"):
                    await orchestrator.wait_idle()

                active = orchestrator.active_conversation
                reply = active.last_message if active else None
                if reply is not None and reply.sender is Sender.ASSISTANT:
                    console.print(
                        f"[bold green]Assistant:[/bold green] {escape(reply.text)} "
                        f"[dim]{format_message_time(reply.timestamp)}[/dim]\n",
                        highlight=False,
                    )
        finally:
            await orchestrator.aclose()

    asyncio.run(_chat())


@app.command()
def responses(
    responder: str | None = ResponderOption,
    responses_file: Path | None = ResponsesFileOption,
):
    """List the canned replies the assistant chooses from."""
    settings = _load_settings(responder, responses_file, None, None, None)
    try:
        provider = get_response_provider(settings)
    except (ValueError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    canned = getattr(provider, "responses", None)
    if canned is None:
        console.print(f"[dim]The '{provider.provider_type}' responder has no canned replies.[/dim]")
        return

    table = Table(title=f"Canned replies ({len(canned)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Reply")
    for index, text in enumerate(canned, 1):
        table.add_row(str(index), escape(text))
    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
