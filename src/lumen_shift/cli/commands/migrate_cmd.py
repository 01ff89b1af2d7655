"""Foreground migration command.

Usage:
    lumen-shift migrate shop api                 # storage/repositories/shop/api -> api_new
    lumen-shift migrate shop /abs/path/to/api    # absolute origin, destination api_new beside it
    lumen-shift migrate shop api --with-env      # also merge .env files
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.live import Live

from ...core.composer import composer_runner
from ...migration.base import StageContext
from ...migration.descriptor import ProjectDescriptor
from ...migration.runner import MigrationRunner
from ..helpers import configure_logging, console, get_config_or_exit
from ..ui import StageTracker


def migrate(
    project_name: str = typer.Argument(..., help="Project directory under the repository root"),
    project_path: str = typer.Argument(..., help="Lumen project path (relative to the project directory, or absolute)"),
    with_env: bool = typer.Option(False, "--with-env", help="Merge the Lumen .env into the Laravel .env"),
    interaction: Optional[bool] = typer.Option(
        None,
        "--interaction/--no-interaction",
        help="Allow composer to prompt (defaults to the configured no_interaction setting)",
    ),
    repo_root: Optional[Path] = typer.Option(None, "--repo-root", help="Repository root holding project directories"),
    destination: Optional[Path] = typer.Option(None, "--destination", help="Override the destination directory"),
    json_output: bool = typer.Option(False, "--json", help="Output the migration report as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Migrate a Lumen project to a fresh Laravel project."""
    config = get_config_or_exit(repo_root)
    # JSON mode keeps stdout machine-readable.
    configure_logging("CRITICAL" if json_output else config.log_level, verbose and not json_output)

    origin = Path(project_path).expanduser()
    if origin.is_absolute():
        descriptor = ProjectDescriptor.for_paths(origin, project_name, destination)
    else:
        descriptor = ProjectDescriptor.for_request(config.resolved_repo_root(), project_name, project_path)
        if destination is not None:
            descriptor = ProjectDescriptor(
                name=descriptor.name,
                origin=descriptor.origin,
                destination=destination.expanduser().resolve(),
            )

    no_interaction = config.no_interaction if interaction is None else not interaction
    runner = MigrationRunner(
        context=StageContext(
            composer=composer_runner(
                binary=config.composer_binary,
                no_interaction=no_interaction,
                timeout=config.composer_timeout,
            )
        )
    )

    if json_output:
        report = runner.run(descriptor, merge_env=with_env)
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        console.print(f"[bold]Origin:[/bold]      {descriptor.origin}")
        console.print(f"[bold]Destination:[/bold] {descriptor.destination}")
        console.print()
        tracker = StageTracker("Lumen to Laravel", runner.stages)
        with Live(tracker.render(), console=console, refresh_per_second=8, transient=True) as live:
            tracker.attach_refresh(lambda: live.update(tracker.render()))
            report = runner.run(descriptor, merge_env=with_env, observer=tracker.observe)
        console.print(tracker.render())
        console.print()

        for outcome in report.outcomes:
            if outcome.result is None:
                continue
            for warning in outcome.result.warnings:
                console.print(f"[yellow]⚠ {outcome.description}:[/yellow] {warning}")
            for error in outcome.result.errors:
                console.print(f"[red]✗ {outcome.description}:[/red] {error}")

        if report.success:
            console.print("[green]Lumen to Laravel Migration Completed![/green]")
        else:
            console.print(
                f"[yellow]Migration finished with {len(report.failed_stages)} failed stage(s).[/yellow] "
                "Review the destination tree before using it."
            )

    if not report.success:
        raise typer.Exit(1)
