"""
CLI commands for secure API key management.

Usage:
    roteiro secrets list              # Show configured keys
    roteiro secrets set gemini        # Store a key securely
    roteiro secrets delete gemini     # Remove a key
    roteiro secrets import .env       # Import from .env file
"""

import os

import click
from rich.console import Console
from rich.table import Table

from roteiro.secrets import (
    KNOWN_KEYS,
    delete_api_key,
    import_from_env_file,
    is_keyring_available,
    list_api_keys,
    set_api_key,
)

console = Console()


def normalize_slot(key_name: str) -> str:
    """Accept 'gemini', 'GEMINI_API_KEY' or 'gemini_api_key'"""
    slot = key_name.strip().lower()
    if slot not in KNOWN_KEYS and not slot.endswith("_api_key"):
        slot = f"{slot}_api_key"
    return slot


def _require_keyring() -> bool:
    if is_keyring_available():
        return True
    console.print(
        "[red]Error:[/red] keyring backend not available. "
        "Use environment variables (e.g. GEMINI_API_KEY) instead."
    )
    return False


@click.group(name="secrets")
def secrets_cli():
    """Manage API keys securely using OS keychain."""
    pass


@secrets_cli.command(name="list")
def list_keys():
    """List all API keys and their status."""
    if not is_keyring_available():
        console.print("[yellow]Warning:[/yellow] keyring backend not available.")
        console.print("Falling back to environment variable check only.\n")

    status = list_api_keys()

    table = Table(title="API Key Status")
    table.add_column("Slot", style="cyan")
    table.add_column("Provider", style="dim")
    table.add_column("Status", style="bold")

    for key_name, description in KNOWN_KEYS.items():
        key_status = status.get(key_name, "not_set")

        if key_status == "keychain":
            status_display = "[green]Keychain[/green]"
        elif key_status == "env":
            status_display = "[yellow]Env var[/yellow]"
        else:
            status_display = "[red]Not set[/red]"

        table.add_row(key_name, description, status_display)

    console.print(table)


@secrets_cli.command(name="set")
@click.argument("key_name")
@click.option("--value", "-v", help="API key value (will prompt if not provided)")
def set_key(key_name: str, value: str = None):
    """Store an API key in the secure keychain."""
    if not _require_keyring():
        return

    slot = normalize_slot(key_name)
    if slot not in KNOWN_KEYS:
        console.print(f"[yellow]Warning:[/yellow] {slot} is not a recognized key name.")
        if not click.confirm("Store anyway?"):
            return

    if not value:
        value = click.prompt(f"Enter value for {slot}", hide_input=True)

    if not value or not value.strip():
        console.print("[red]Error:[/red] No value provided")
        return

    if set_api_key(slot, value):
        console.print(f"[green]Success:[/green] Stored {slot} in secure keychain")
    else:
        console.print(f"[red]Error:[/red] Failed to store {slot}")


@secrets_cli.command(name="delete")
@click.argument("key_name")
@click.option("--force", "-f", is_flag=True, help="Don't ask for confirmation")
def delete_key(key_name: str, force: bool = False):
    """Delete an API key from the keychain."""
    if not _require_keyring():
        return

    slot = normalize_slot(key_name)
    if not force and not click.confirm(f"Delete {slot} from keychain?"):
        return

    if delete_api_key(slot):
        console.print(f"[green]Success:[/green] Deleted {slot} from keychain")
    else:
        console.print(f"[yellow]Warning:[/yellow] {slot} not found in keychain")


@secrets_cli.command(name="import")
@click.argument("env_file", type=click.Path(exists=True))
@click.option("--delete-after", is_flag=True, help="Delete .env file after import")
def import_keys(env_file: str, delete_after: bool = False):
    """Import API keys from a .env file into the secure keychain."""
    if not _require_keyring():
        return

    console.print(f"Importing keys from {env_file}...")
    results = import_from_env_file(env_file)

    if not results:
        console.print("[yellow]No API keys found in file[/yellow]")
        return

    success_count = sum(1 for v in results.values() if v)
    for key_name, success in results.items():
        mark = "[green]+[/green]" if success else "[red]x[/red]"
        console.print(f"  {mark} {key_name}")

    console.print()
    console.print(f"Imported: {success_count} keys")
    if len(results) - success_count:
        console.print(f"Failed: {len(results) - success_count} keys")

    if delete_after and success_count > 0:
        if click.confirm(f"\nDelete {env_file}? (keys are now in secure storage)"):
            os.remove(env_file)
            console.print(f"[green]Deleted[/green] {env_file}")
