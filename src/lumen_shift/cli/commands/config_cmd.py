"""Show or initialise the lumen-shift configuration file."""

from __future__ import annotations

import typer
from rich.table import Table

from ...core.config import MigratorConfig, config_path, save_config
from ..helpers import console, get_config_or_exit


def config(
    init: bool = typer.Option(False, "--init", help="Write a config file with default values"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file with --init"),
) -> None:
    """Show the effective configuration and where it is loaded from."""
    path = config_path()

    if init:
        if path.exists() and not force:
            console.print(f"[yellow]{path} already exists; use --force to overwrite.[/yellow]")
            raise typer.Exit(1)
        save_config(MigratorConfig(), path)
        console.print(f"[green]Wrote default configuration to {path}[/green]")
        return

    effective = get_config_or_exit()
    table = Table(title=f"Configuration ({path if path.exists() else 'defaults'})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in effective.to_dict().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)
