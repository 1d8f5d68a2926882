"""Provider commands"""

import json

import click
from rich import box
from rich.console import Console
from rich.table import Table

from roteiro.config import get_settings, make_credential_store
from roteiro.models import ProviderCategory
from roteiro.providers import get_all_providers, get_provider_info

console = Console()


@click.group()
def providers_cmd():
    """Provider information"""
    pass


@providers_cmd.command(name="list")
@click.option(
    "--category", "-c",
    type=click.Choice([c.value for c in ProviderCategory]),
    help="Filter by category",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_providers(category: str, as_json: bool):
    """List all providers with their status"""
    credentials = make_credential_store(get_settings())
    providers = get_all_providers(
        credentials=credentials,
        category=ProviderCategory(category) if category else None,
    )

    if as_json:
        click.echo(json.dumps(providers, indent=2, ensure_ascii=False))
        return

    table = Table(title="Providers", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Service")
    table.add_column("Category")
    table.add_column("Status")
    table.add_column("API Key")

    for p in providers:
        status_style = "green" if p["status"] == "implemented" else "yellow"
        key_status = "[green]✓[/green]" if p["api_key_set"] else "[dim]—[/dim]"
        table.add_row(
            p["name"],
            p["display_name"],
            p["category"],
            f"[{status_style}]{p['status']}[/{status_style}]",
            key_status,
        )

    console.print(table)


@providers_cmd.command()
@click.argument("name")
def check(name: str):
    """Check detailed status of a specific provider"""
    info = get_provider_info(name, credentials=make_credential_store(get_settings()))

    if not info:
        console.print(f"[red]Provider '{name}' not found[/red]")
        raise SystemExit(1)

    console.print(f"\n[bold cyan]{info['display_name']}[/bold cyan] ({info['name']})")
    console.print(f"Category: {info['category']}")
    console.print(f"Status: {info['status']}")
    console.print(f"Endpoint: {info['endpoint'] or '—'}")
    console.print(f"Credential slot: {info['credential_slot']}")
    console.print(f"API Key Set: {'Yes' if info['api_key_set'] else 'No'}")
    if info["api_key_url"]:
        console.print(f"Get a key: {info['api_key_url']}")
