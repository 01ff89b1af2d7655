"""
lumen-shift - migrate Lumen projects to Laravel.

Usage:
    lumen-shift migrate <project-name> <project-path> [--with-env]
    lumen-shift serve [--port 5000]
    lumen-shift submit <project-name> <project-path> [--server URL]
"""

import typer

from lumen_shift.cli.commands import register_commands

__version__ = "0.1.0"

app = typer.Typer(
    name="lumen-shift",
    help="Convert Lumen projects into Laravel projects",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lumen-shift {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Convert Lumen projects into Laravel projects."""


register_commands(app)


def main():
    app()


if __name__ == "__main__":
    main()
