"""Interactive chat loop and transcript rendering."""

from __future__ import annotations

from prompt_toolkit import PromptSession
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from model_playground.core.conversation import (
    Conversation,
    ConversationError,
    MissingCredentialError,
    Notification,
    Notifier,
    Role,
    Turn,
)
from model_playground.utils.log import get_logger

logger = get_logger()

HELP_TEXT = """\
[bold]Commands[/bold]
  /provider ID   switch provider (keeps the model when the new provider offers it)
  /model ID      switch model within the current provider
  /models        list models of the current provider
  /clear         remove all messages
  /status        show the active provider, model and key status
  /help          show this help
  /exit          leave the chat"""


def make_console_notifier(console: Console) -> Notifier:
    def _notify(notification: Notification) -> None:
        style = "red" if notification.variant == "destructive" else "green"
        console.print(
            f"[{style}]{escape(notification.title)}:[/{style}] {escape(notification.description)}"
        )

    return _notify


def render_turn(console: Console, turn: Turn) -> None:
    timestamp = turn.created_at.astimezone().strftime("%H:%M:%S")
    if turn.role == Role.USER:
        console.print(f"[bold]You[/bold] [dim]{timestamp}[/dim]")
        console.print(escape(turn.content))
        return
    console.print(
        Panel(
            Markdown(turn.content),
            title=f"{escape(turn.provider_id or '')} • {escape(turn.model_id or '')}",
            subtitle=timestamp,
            border_style="cyan",
            padding=(0, 1),
        )
    )


def render_status(console: Console, conversation: Conversation) -> None:
    selection = conversation.selection
    provider = conversation.active_provider
    key_state = "[green]configured[/green]" if conversation.has_credential() else "[yellow]missing[/yellow]"
    console.print(f"Provider: {provider.display_name} ({selection.provider_id})")
    console.print(f"Model: {selection.model_id}")
    console.print(f"API key: {key_state}")
    console.print(f"Messages: {len(conversation.transcript)}")


def handle_slash_command(console: Console, conversation: Conversation, line: str) -> bool:
    """Run a slash command. Returns False when the session should end."""
    name, _, argument = line[1:].partition(" ")
    name = name.strip().lower()
    argument = argument.strip()

    if name in ("exit", "quit"):
        return False
    if name == "help":
        console.print(HELP_TEXT)
    elif name == "clear":
        conversation.clear()
    elif name == "status":
        render_status(console, conversation)
    elif name == "models":
        for model_id in conversation.active_provider.model_ids:
            marker = "*" if model_id == conversation.selection.model_id else " "
            console.print(f" {marker} {model_id}")
    elif name in ("provider", "model"):
        if not argument:
            console.print(f"[yellow]Usage: /{name} ID[/yellow]")
            return True
        try:
            if name == "provider":
                selection = conversation.change_provider(argument.lower())
            else:
                selection = conversation.change_model(argument)
        except ConversationError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            return True
        console.print(f"[dim]Using {selection.provider_id} / {selection.model_id}[/dim]")
    else:
        console.print(f"[yellow]Unknown command '/{escape(name)}'. Type /help.[/yellow]")
    return True


async def send_and_render(console: Console, conversation: Conversation, text: str) -> bool:
    """Submit ``text`` and print the assistant reply. Returns True on success."""
    before = len(conversation.transcript)
    try:
        with console.status("Thinking...", spinner="dots"):
            result = await conversation.submit(text)
    except MissingCredentialError as exc:
        console.print(f"[red]API Key Required:[/red] {escape(str(exc))}")
        console.print(f"[dim]Run `model-playground key set {exc.provider_id}`.[/dim]")
        return False
    if result is None or result.is_error:
        return False
    for turn in conversation.transcript[before:]:
        if turn.role == Role.ASSISTANT:
            render_turn(console, turn)
    return True


async def run_chat_loop(console: Console, conversation: Conversation) -> None:
    """Read messages until /exit or EOF."""
    session: PromptSession[str] = PromptSession()
    render_status(console, conversation)
    if not conversation.has_credential():
        console.print("[yellow]Configure your API key and select a model to begin.[/yellow]")
    console.print("[dim]Type /help for commands.[/dim]\n")

    while True:
        try:
            line = await session.prompt_async("> ")
        except (EOFError, KeyboardInterrupt):
            break
        line = line.strip()
        if not line:
            continue
        if line.startswith("/"):
            if not handle_slash_command(console, conversation, line):
                break
            continue
        await send_and_render(console, conversation, line)

    logger.info(
        "[cli] Chat session ended",
        extra={"message_count": len(conversation.transcript)},
    )
