"""Main CLI entry point for Model Playground."""

import asyncio
import json
import sys
import uuid
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from model_playground import __version__
from model_playground.cli.chat_session import (
    make_console_notifier,
    run_chat_loop,
    send_and_render,
)
from model_playground.cli.key_cli import key_group, open_credential_store
from model_playground.core.config import get_config, get_config_dir
from model_playground.core.conversation import Conversation, ConversationError
from model_playground.core.credentials import mask_credential
from model_playground.core.provider_registry import find_provider, list_providers
from model_playground.utils.log import enable_session_file_logging, get_logger

console = Console()
logger = get_logger()


def build_conversation(provider: Optional[str], model: Optional[str]) -> Conversation:
    """Create a conversation from CLI flags, falling back to the configured defaults."""
    config = get_config()
    provider_id = (provider or config.default_provider).strip().lower()
    if find_provider(provider_id) is None:
        raise click.ClickException(f"Unknown provider '{provider_id}'.")
    conversation = Conversation(
        open_credential_store(),
        provider_id=provider_id,
        notifier=make_console_notifier(console),
    )
    requested_model = model or (config.default_model if provider is None else None)
    if requested_model:
        try:
            conversation.change_model(requested_model)
        except ConversationError as exc:
            if model:
                raise click.ClickException(str(exc)) from exc
            logger.warning(
                "[cli] Configured default model is not offered; using provider default",
                extra={"provider": provider_id, "model": requested_model},
            )
    return conversation


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Model Playground - chat with multiple AI providers using your own API keys"""


cli.add_command(key_group)


@cli.command(name="providers")
@click.option("--json", "json_output", is_flag=True, help="Output machine-readable JSON.")
def providers_cmd(json_output: bool) -> None:
    """List providers, their models and whether a key is stored."""
    store = open_credential_store()
    rows = [
        {
            "id": provider.id,
            "name": provider.display_name,
            "models": list(provider.model_ids),
            "has_key": store.has(provider.id),
        }
        for provider in list_providers()
    ]
    if json_output:
        click.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    for row in rows:
        key_state = "[green]key set[/green]" if row["has_key"] else "[dim]no key[/dim]"
        console.print(f"[bold]{row['name']}[/bold] ({row['id']}) - {key_state}")
        for model_id in row["models"]:
            console.print(f"  {model_id}")


@cli.command(name="chat")
@click.option("--provider", type=str, default=None, help="Provider id (defaults to config).")
@click.option("--model", type=str, default=None, help="Model id within the provider.")
@click.option("-p", "--prompt", type=str, default=None, help="Send one message and exit.")
def chat_cmd(provider: Optional[str], model: Optional[str], prompt: Optional[str]) -> None:
    """Chat with the selected provider."""
    session_id = str(uuid.uuid4())
    log_file = enable_session_file_logging(get_config_dir() / "logs", session_id)
    conversation = build_conversation(provider, model)
    if get_config().verbose:
        console.print(f"[dim]Logging to {escape(str(log_file))}[/dim]")
    logger.info(
        "[cli] Starting chat",
        extra={
            "session_id": session_id,
            "log_file": str(log_file),
            "provider": conversation.selection.provider_id,
            "model": conversation.selection.model_id,
            "prompt_mode": prompt is not None,
        },
    )

    if prompt is not None:
        if not prompt.strip():
            raise click.ClickException("Prompt must not be empty.")
        if not asyncio.run(send_and_render(console, conversation, prompt)):
            sys.exit(1)
        return

    asyncio.run(run_chat_loop(console, conversation))


@cli.command(name="config")
def config_cmd() -> None:
    """Show current configuration"""
    config = get_config()
    store = open_credential_store()

    console.print("\n[bold]Configuration[/bold]\n")
    console.print(f"Version: {__version__}")
    console.print(f"Config directory: {get_config_dir()}")
    console.print(f"Default provider: {config.default_provider}")
    console.print(f"Default model: {config.default_model or '(provider default)'}")
    console.print(f"Credentials file: {config.credentials_path()}")
    console.print(f"Verbose: {config.verbose}\n")

    console.print("[bold]API Keys:[/bold]")
    for provider in list_providers():
        console.print(f"  {provider.id}: {mask_credential(store.get(provider.id))}")
    console.print()


@cli.command(name="version")
def version_cmd() -> None:
    """Show version information"""
    console.print(f"Model Playground version {__version__}")


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except (RuntimeError, ValueError, TypeError, OSError) as e:
        console.print(f"[red]Fatal error: {escape(str(e))}[/red]")
        logger.warning(
            "[cli] Fatal error in main CLI entrypoint: %s: %s",
            type(e).__name__,
            e,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
