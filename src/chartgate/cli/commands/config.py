"""Configuration management commands."""

from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.config import ChartgateConfig
from ..error_handlers import handle_cli_errors
from ..utils.config_utils import get_config, get_or_create_config_manager, resolve_cache_path

console = Console()


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat = {}
    for key, value in data.items():
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


@click.group()
def config() -> None:
    """Show or initialize the configuration file."""


@config.command()
@click.pass_context
@handle_cli_errors
def show(ctx: click.Context) -> None:
    """Show the effective configuration (defaults, file and environment)."""
    app_config = get_config(ctx)
    manager = ctx.obj["config_manager"]

    table = Table(title="chartgate configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in _flatten(app_config.model_dump(mode="json")).items():
        table.add_row(name, "" if value is None else escape(str(value)))
    table.add_row("(session cache)", escape(str(resolve_cache_path(app_config))))
    console.print(table)
    console.print(f"Config file: {manager.config_file or 'none'}")


@config.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the file (default: the active config file)"
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite an existing file"
)
@click.pass_context
@handle_cli_errors
def init(ctx: click.Context, path: Optional[Path], force: bool) -> None:
    """Write a configuration file with the default settings."""
    manager = get_or_create_config_manager(path or (ctx.obj or {}).get("config_file"))
    target = manager.config_file
    if target is None:
        console.print("[red]No writable configuration location[/red]")
        ctx.exit(1)
    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists; use --force to overwrite[/yellow]")
        return

    manager.save_config(ChartgateConfig())
    console.print(f"[green]Configuration written to {target}[/green]")
