"""Top-level `model-playground key` command group."""

from __future__ import annotations

from typing import Optional

import click
from rich.console import Console

from model_playground.core.config import get_config
from model_playground.core.credentials import JsonFileCredentialStore, mask_credential
from model_playground.core.provider_registry import find_provider, provider_ids
from model_playground.utils.prompt import prompt_secret

console = Console()


def open_credential_store() -> JsonFileCredentialStore:
    return JsonFileCredentialStore(get_config().credentials_path())


def _require_provider(provider_id: str) -> str:
    provider = find_provider(provider_id.strip().lower())
    if provider is None:
        known = ", ".join(provider_ids())
        raise click.ClickException(f"Unknown provider '{provider_id}'. Known providers: {known}")
    return provider.id


@click.group(name="key", invoke_without_command=True, help="Manage stored provider API keys.")
@click.pass_context
def key_group(ctx: click.Context) -> None:
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@key_group.command(name="set")
@click.argument("provider")
@click.option("--value", "value", default=None, help="API key value (prompted when omitted).")
def set_key(provider: str, value: Optional[str]) -> None:
    """Store the API key for PROVIDER, replacing any previous key."""
    provider_id = _require_provider(provider)
    descriptor = find_provider(provider_id)
    if value is None:
        if descriptor is not None and descriptor.key_help:
            console.print(f"[dim]{descriptor.key_help}[/dim]")
        placeholder = descriptor.key_placeholder if descriptor else ""
        label = f"{descriptor.display_name if descriptor else provider_id} API key"
        if placeholder:
            label = f"{label} ({placeholder})"
        value = prompt_secret(label)

    if not open_credential_store().set(provider_id, value):
        raise click.ClickException("API key must not be blank.")
    click.echo(f"Saved {provider_id} API key.")


@key_group.command(name="show")
@click.argument("provider")
def show_key(provider: str) -> None:
    """Show the stored key for PROVIDER, masked."""
    provider_id = _require_provider(provider)
    click.echo(f"{provider_id}: {mask_credential(open_credential_store().get(provider_id))}")


__all__ = ["key_group", "open_credential_store"]
