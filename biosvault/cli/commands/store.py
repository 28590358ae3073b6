"""``biosvault list``, ``remove``, ``trash`` and ``restore``: manage stored files."""

from __future__ import annotations

import typer
from rich.markup import escape
from rich.table import Table

from biosvault.cli._shared import console, get_state


def list_cmd(ctx: typer.Context) -> None:
    """List the files in the BIOS store."""
    store = get_state(ctx).make_store()
    names = store.list_assets()
    if not names:
        console.print(f"[dim]No BIOS files in {store.root}.[/dim]")
        return
    for name in names:
        console.print(escape(name))


def remove_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="File name of the BIOS file to remove."),
) -> None:
    """Move a BIOS file to the trash."""
    store = get_state(ctx).make_store()
    try:
        removed = store.remove(name)
    except ValueError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if not removed:
        console.print(f"[yellow]No BIOS file named {name!r}.[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"Moved [cyan]{name}[/cyan] to {store.trash_bin.root}")


def trash_cmd(ctx: typer.Context) -> None:
    """List files previously moved to the trash."""
    trash = get_state(ctx).make_store().trash_bin
    entries = trash.list_entries()
    if not entries:
        console.print("[dim]Trash is empty.[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("File", style="cyan")
    table.add_column("Trashed At")
    table.add_column("Location", style="dim")
    for entry in entries:
        table.add_row(
            escape(entry.original_name),
            entry.trashed_at.strftime("%Y-%m-%d %H:%M:%S"),
            escape(str(entry.trashed_path)),
        )
    console.print(table)


def restore_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="File name of the trashed BIOS file."),
) -> None:
    """Move the most recently trashed copy of a BIOS file back into the store."""
    store = get_state(ctx).make_store()
    entry = next(
        (e for e in store.trash_bin.list_entries() if e.original_name == name), None
    )
    if entry is None:
        console.print(f"[yellow]No trashed BIOS file named {escape(name)!r}.[/yellow]")
        raise typer.Exit(code=1)

    try:
        restored = store.trash_bin.restore(entry, store.root)
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    console.print(f"Restored [cyan]{escape(name)}[/cyan] to {escape(str(restored))}")
