"""CLI command modules for lumen-shift."""

from __future__ import annotations

import typer

from .config_cmd import config
from .migrate_cmd import migrate
from .serve import serve
from .submit import submit


def register_commands(app: typer.Typer) -> None:
    """Attach every command to the root Typer app."""
    app.command()(migrate)
    app.command()(serve)
    app.command()(submit)
    app.command()(config)


__all__ = ["register_commands"]
