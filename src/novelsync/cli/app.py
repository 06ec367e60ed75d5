"""Main CLI application using Typer."""

import logging

import typer
from rich.console import Console

from novelsync import __version__
from novelsync.cli.commands.config import config_app
from novelsync.cli.commands.novels import novels_app
from novelsync.cli.commands.sync import sync_app

app = typer.Typer(
    name="novelsync",
    help="Novelsync - offline novel editing with server sync",
    add_completion=False,
)
console = Console()

# Register subcommands
app.add_typer(config_app, name="config")
app.add_typer(novels_app, name="novels")
app.add_typer(sync_app, name="sync")


def version_callback(value: bool) -> None:
    """Show version information."""
    if value:
        console.print(f"Novelsync version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log sync activity to stderr"),
) -> None:
    """Novelsync CLI - write offline, sync when connected."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()
