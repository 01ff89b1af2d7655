"""Submit a migration request to a running lumen-shift server."""

from __future__ import annotations

import json
from typing import Optional

import httpx
import typer

from ..helpers import console, get_config_or_exit


def submit(
    project_name: str = typer.Argument(..., help="Project directory under the server's repository root"),
    project_path: str = typer.Argument(..., help="Lumen project path inside the project directory"),
    with_env: bool = typer.Option(False, "--with-env", help="Merge .env files after install"),
    interaction: Optional[bool] = typer.Option(
        None, "--interaction/--no-interaction", help="Let composer prompt on the server side"
    ),
    server: Optional[str] = typer.Option(None, "--server", help="Server base URL (defaults to config host/port)"),
    timeout: float = typer.Option(10.0, "--timeout", help="Request timeout in seconds"),
) -> None:
    """Ask a running server to migrate a project in the background."""
    if server is None:
        config = get_config_or_exit()
        server = f"http://{config.host}:{config.port}"

    payload: dict[str, object] = {
        "projectName": project_name,
        "projectPath": project_path,
        "withEnv": with_env,
    }
    if interaction is not None:
        payload["noInteraction"] = not interaction

    url = server.rstrip("/") + "/api/migrate"
    try:
        response = httpx.post(url, json=payload, timeout=timeout)
    except httpx.HTTPError as exc:
        console.print(f"[red]Could not reach {url}:[/red] {exc}")
        raise typer.Exit(1) from exc

    try:
        body = response.json()
    except json.JSONDecodeError:
        body = {"success": False, "message": response.text}

    if response.status_code != 200 or not body.get("success"):
        console.print(f"[red]Request rejected ({response.status_code}):[/red] {body.get('message')}")
        raise typer.Exit(1)

    console.print(f"[green]{body.get('message')}[/green]")
