"""Offline novel editing commands.

Edits land in the local cache and are sent to the server by ``novelsync sync``.
"""

from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from novelsync.cli.cache.manager import CacheManager
from novelsync.cli.cache.models import CachedRecord
from novelsync.server.schemas.sync import EntityType

novels_app = typer.Typer(name="novels", help="Edit novels in the local cache")
console = Console()
DESCRIPTION_OPTION = typer.Option(None, "--description", "-d", help="Optional description")
USER_OPTION = typer.Option(None, "--user", help="Owning user ID")


def _render_novels_table(novels: list[CachedRecord]) -> None:
    table = Table(title="Novels", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Version", style="white")
    table.add_column("State", style="yellow")

    for novel in novels:
        if novel.deleted:
            state = "deleted"
        elif novel.dirty:
            state = "modified"
        else:
            state = "synced"
        table.add_row(novel.id, str(getattr(novel, "title", None) or "-"), str(novel.version), state)

    console.print(table)


def _not_found(novel_id: str) -> NoReturn:
    console.print(f"[red]Novel '{novel_id}' not found in local cache.[/red]")
    raise typer.Exit(code=1)


@novels_app.command("list")
def list_novels(
    all_: bool = typer.Option(False, "--all", "-a", help="Include deleted novels"),
) -> None:
    """List novels in the local cache."""
    cache = CacheManager()
    try:
        novels = cache.list_records(EntityType.NOVEL, include_deleted=all_)
        if not novels:
            console.print("No novels cached. Create one or run 'novelsync sync'.")
            return
        _render_novels_table(novels)
    finally:
        cache.close()


@novels_app.command("add")
def add_novel(
    title: str = typer.Argument(..., help="Novel title"),
    description: str | None = DESCRIPTION_OPTION,
    user_id: str | None = USER_OPTION,
) -> None:
    """Create a novel locally."""
    cache = CacheManager()
    try:
        novel = cache.create(
            EntityType.NOVEL, title=title, description=description, user_id=user_id
        )
        console.print(f"[green]✓[/green] Created novel [cyan]{novel.id}[/cyan] (pending push)")
    finally:
        cache.close()


@novels_app.command("edit")
def edit_novel(
    novel_id: str = typer.Argument(..., help="Novel ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = DESCRIPTION_OPTION,
) -> None:
    """Change a novel's title or description."""
    fields = {
        key: value
        for key, value in {"title": title, "description": description}.items()
        if value is not None
    }
    if not fields:
        console.print("[yellow]Nothing to change.[/yellow]")
        raise typer.Exit(code=1)

    cache = CacheManager()
    try:
        if cache.update(EntityType.NOVEL, novel_id, **fields) is None:
            _not_found(novel_id)
        console.print(f"[green]✓[/green] Updated novel [cyan]{novel_id}[/cyan] (pending push)")
    finally:
        cache.close()


@novels_app.command("rm")
def remove_novel(novel_id: str = typer.Argument(..., help="Novel ID")) -> None:
    """Delete a novel (tombstoned until pushed)."""
    cache = CacheManager()
    try:
        if not cache.delete(EntityType.NOVEL, novel_id):
            _not_found(novel_id)
        console.print(f"[green]✓[/green] Deleted novel [cyan]{novel_id}[/cyan] (pending push)")
    finally:
        cache.close()
