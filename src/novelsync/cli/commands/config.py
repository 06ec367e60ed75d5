"""Configuration management commands."""

import typer
from rich.console import Console
from rich.table import Table

from novelsync.cli.config import (
    KNOWN_KEYS,
    get_config_file,
    load_config,
    set_config_value,
)

config_app = typer.Typer(
    name="config",
    help="Manage CLI configuration",
)
console = Console()


@config_app.command("show")
def config_show() -> None:
    """Display current configuration."""
    config = load_config()

    if not config:
        console.print("[yellow]No configuration found.[/yellow]")
        console.print(f"Config file: [dim]{get_config_file()}[/dim]")
        return

    table = Table(title="Novelsync Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for key, value in sorted(config.items()):
        table.add_row(key, str(value))

    console.print(table)
    console.print(f"\nConfig file: [dim]{get_config_file()}[/dim]")


@config_app.command("get")
def config_get(key: str = typer.Argument(..., help="Configuration key to read")) -> None:
    """Print a single configuration value."""
    config = load_config()
    if key not in config:
        console.print(f"[yellow]{key} is not set.[/yellow]")
        raise typer.Exit(code=1)
    console.print(str(config[key]))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Configuration key to set"),
    value: str = typer.Argument(..., help="Value to set"),
) -> None:
    """Set a configuration value.

    Examples:
        novelsync config set server_url http://localhost:8000
    """
    if key not in KNOWN_KEYS:
        console.print(f"[yellow]Warning:[/yellow] '{key}' is not a recognised setting.")
    set_config_value(key, value)
    console.print(f"[green]✓[/green] Set [cyan]{key}[/cyan] = [green]{value}[/green]")
    console.print(f"Config file: [dim]{get_config_file()}[/dim]")
