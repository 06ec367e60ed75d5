"""Sync CLI commands for manual sync control."""

from typing import NoReturn

import anyio
import typer
from rich.console import Console
from rich.table import Table

from novelsync.cli.cache.manager import CacheManager
from novelsync.cli.client import get_server_url, is_online
from novelsync.cli.sync.protocol import SyncProtocol, SyncResult

sync_app = typer.Typer(name="sync", help="Push local edits and pull server changes")
console = Console()


def _report_failure(action: str, result: SyncResult) -> NoReturn:
    console.print(f"[red]✗ {action} failed.[/red]")
    if result.error_message:
        console.print(f"[dim]{result.error_message}[/dim]")
    raise typer.Exit(code=1)


async def _require_online(action: str) -> None:
    if not await is_online():
        console.print(f"[red]Unable to reach server at {get_server_url()}.[/red]")
        console.print(f"Cannot {action} while offline.")
        raise typer.Exit(code=1)


@sync_app.command("status")
def sync_status() -> None:
    """Show the sync cursor and pending local changes."""
    anyio.run(_sync_status_async)


async def _sync_status_async() -> None:
    online = await is_online()
    state = "[green]Online[/green]" if online else "[yellow]Offline[/yellow]"
    console.print(f"Server: {get_server_url()} ({state})")

    cache = CacheManager()
    try:
        console.print(f"Cursor: {cache.get_cursor()}\n")
        dirty = cache.get_all_dirty()
        total = sum(len(records) for records in dirty.values())
        if total == 0:
            console.print("[green]No pending changes.[/green]")
            return

        table = Table(title="Pending Changes", show_header=True, header_style="bold yellow")
        table.add_column("Entity Type", style="cyan")
        table.add_column("Count", style="white")
        table.add_column("Deleted", style="red")

        for key, records in dirty.items():
            if records:
                deleted = sum(1 for record in records if record.deleted)
                table.add_row(key, str(len(records)), str(deleted))

        console.print(table)
        console.print(f"\n[yellow]Total pending changes: {total}[/yellow]")
    finally:
        cache.close()


@sync_app.command("push")
def sync_push() -> None:
    """Push local changes to server."""
    anyio.run(_sync_push_async)


async def _sync_push_async() -> None:
    await _require_online("push changes")
    console.print("[cyan]Pushing local changes...[/cyan]")

    protocol = SyncProtocol()
    try:
        result = await protocol.push()
    finally:
        protocol.close()

    if not result.success:
        _report_failure("Push", result)
    if result.pushed == 0:
        console.print("[green]No changes to push.[/green]")
    else:
        console.print(f"[green]✓ Pushed {result.pushed} records.[/green]")


@sync_app.command("pull")
def sync_pull() -> None:
    """Pull server changes to local cache."""
    anyio.run(_sync_pull_async)


async def _sync_pull_async() -> None:
    await _require_online("pull changes")
    console.print("[cyan]Pulling server changes...[/cyan]")

    protocol = SyncProtocol()
    try:
        result = await protocol.pull()
    finally:
        protocol.close()

    if not result.success:
        _report_failure("Pull", result)
    if result.pulled == 0:
        console.print("[green]No new changes from server.[/green]")
    else:
        console.print(f"[green]✓ Pulled {result.pulled} records.[/green]")
    if result.skipped:
        console.print(
            f"[yellow]{result.skipped} records have unpushed local edits and were kept.[/yellow]"
        )


@sync_app.callback(invoke_without_command=True)
def sync(ctx: typer.Context) -> None:
    """Perform full bidirectional sync (push then pull)."""
    if ctx.invoked_subcommand is None:
        anyio.run(_sync_async)


async def _sync_async() -> None:
    await _require_online("sync")
    console.print("[cyan]Starting full sync...[/cyan]")

    protocol = SyncProtocol()
    try:
        result = await protocol.sync()
    finally:
        protocol.close()

    if not result.success:
        _report_failure("Sync", result)

    console.print("[green]✓ Sync complete.[/green]")
    if result.pushed > 0:
        console.print(f"  Pushed: {result.pushed} records")
    if result.pulled > 0:
        console.print(f"  Pulled: {result.pulled} records")
    if result.pushed == 0 and result.pulled == 0:
        console.print("  No changes to synchronize.")
