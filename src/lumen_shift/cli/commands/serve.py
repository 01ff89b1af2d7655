"""Run the HTTP trigger that accepts background migration requests."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ...server.server import create_server
from ..helpers import configure_logging, console, get_config_or_exit


def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (defaults to config host)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on (defaults to config port)"),
    repo_root: Optional[Path] = typer.Option(None, "--repo-root", help="Repository root holding project directories"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Serve POST /api/migrate and GET /api/health until interrupted."""
    if port is not None and not (1 <= port <= 65535):
        console.print("[red]Invalid port specified. Use a value between 1 and 65535.[/red]")
        raise typer.Exit(1)

    config = get_config_or_exit(repo_root, host=host, port=port)
    configure_logging(config.log_level, verbose)

    try:
        server = create_server(config)
    except OSError as exc:
        console.print(f"[red]Unable to bind {config.host}:{config.port}:[/red] {exc}")
        raise typer.Exit(1) from exc

    bound_host, bound_port = server.server_address[:2]
    console.print(f"[green]Migration server is running on http://{bound_host}:{bound_port}[/green]")
    console.print(f"[dim]Repository root: {config.resolved_repo_root()}[/dim]")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        console.print("\n[yellow]Migration server stopped[/yellow]")
    finally:
        server.server_close()
