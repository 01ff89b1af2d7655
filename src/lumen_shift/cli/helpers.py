"""Shared console, logging and config helpers for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..core.config import MigratorConfig, load_config
from ..core.errors import ConfigError

console = Console()


def configure_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Route library logging through Rich; ``verbose`` forces DEBUG."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_config_or_exit(repo_root: Optional[Path] = None, **overrides: object) -> MigratorConfig:
    """Load config, apply CLI overrides, and exit 1 with a message on errors."""
    try:
        config = load_config()
    except ConfigError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(1) from exc
    return config.with_overrides(repo_root=repo_root, **overrides)


__all__ = ["console", "configure_logging", "get_config_or_exit"]
