"""Session cache management commands."""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...infrastructure.storage.credential_store import CredentialStore
from ...utils.utils import mask_secret
from ..error_handlers import handle_cli_errors
from ..utils.config_utils import create_client, get_config, resolve_cache_path

console = Console()


@click.group()
def auth() -> None:
    """Manage the cached browser session."""


@auth.command()
@click.pass_context
@handle_cli_errors
def status(ctx: click.Context) -> None:
    """Show where the session cache lives and whether it is still valid."""
    config = get_config(ctx)
    store = CredentialStore(resolve_cache_path(config))
    cache = store.describe()

    table = Table(title="Session cache")
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Path", str(store.path))

    if cache is None:
        state = "missing" if not store.path.exists() else "unreadable"
        table.add_row("Status", f"[yellow]{state}[/yellow]")
        console.print(table)
        return

    if cache.expired:
        table.add_row("Status", "[red]expired[/red]")
    else:
        hours = cache.remaining.total_seconds() / 3600
        table.add_row("Status", f"[green]valid[/green] ({hours:.1f} hours left)")
    table.add_row("Saved at", f"{cache.saved_at:%Y-%m-%d %H:%M:%S} UTC")
    table.add_row("Expires at", f"{cache.expires_at:%Y-%m-%d %H:%M:%S} UTC")
    table.add_row("Cookies", str(cache.cookie_count))
    console.print(table)


@auth.command()
@click.pass_context
@handle_cli_errors
def clear(ctx: click.Context) -> None:
    """Delete the cached session; the next download authenticates again."""
    config = get_config(ctx)
    store = CredentialStore(resolve_cache_path(config))
    existed = store.path.exists()
    store.delete()
    if existed and not store.path.exists():
        console.print(f"[green]Session cache deleted: {store.path}[/green]")
    elif existed:
        console.print(f"[yellow]Could not delete {store.path}[/yellow]")
    else:
        console.print(f"No session cache at {store.path}")


@auth.command()
@click.option(
    "--headless/--no-headless",
    default=None,
    help="Run the browser without a window (default: from config)"
)
@click.pass_context
@handle_cli_errors
def login(ctx: click.Context, headless: Optional[bool]) -> None:
    """Authenticate through the browser now and cache the session."""
    config = get_config(ctx)
    cache_path = resolve_cache_path(config)
    with create_client(config, cache_path) as client:
        session = client.authenticate(headless=headless, use_cache=True, force_refresh=True)

    console.print(f"[green]Authenticated[/green] (crumb {mask_secret(session.crumb)}, "
                  f"{len(session.cookies)} cookies)")
    if CredentialStore(cache_path).is_valid():
        console.print(f"Session cached at {cache_path}")
    else:
        console.print(f"[yellow]Session could not be cached at {cache_path}[/yellow]")
