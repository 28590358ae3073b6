"""``biosvault import PATH...``: import recognized BIOS files.

Each path may be a file or a directory.  Directories are scanned
recursively.  Files whose MD5 matches the catalog are copied into the
store under their canonical name.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from biosvault.cli._shared import console, get_state, load_catalog
from biosvault.core.import_pipeline import ImportPipeline
from biosvault.models.results import ImportOutcome
from biosvault.routing.dispatcher import EventDispatcher
from biosvault.routing.listeners.local_file import EventLogListener


def import_cmd(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(
        ...,
        help="Files or directories to scan for BIOS files.",
    ),
    catalog_path: Path = typer.Option(
        None,
        "--catalog",
        "-c",
        help="JSON file of known BIOS descriptors.",
    ),
) -> None:
    """Import every file whose content matches a known BIOS file."""
    state = get_state(ctx)
    catalog = load_catalog(catalog_path)

    dispatcher = EventDispatcher()
    if state.record_events:
        dispatcher.register_listener(EventLogListener(state.events_path))
    pipeline = ImportPipeline(state.make_store(), dispatcher)

    outcomes: list[ImportOutcome] = []
    for path in paths:
        if path.is_dir():
            outcomes.extend(pipeline.import_directory(path, catalog))
        else:
            outcomes.append(pipeline.import_if_known(path, catalog))

    recognized = [o for o in outcomes if o.matched and o.descriptor is not None]
    if not recognized:
        console.print(f"[dim]No BIOS files found in {len(outcomes)} file(s).[/dim]")
        return

    table = Table(title="Imported BIOS Files", show_header=True, header_style="bold cyan")
    table.add_column("File", style="cyan")
    table.add_column("Description")
    table.add_column("Copied", justify="center")

    for outcome in recognized:
        copied = "[green]Yes[/green]" if outcome.placed else "[red]No[/red]"
        table.add_row(
            escape(outcome.descriptor.name),
            escape(outcome.descriptor.description),
            copied,
        )

    console.print(table)

    if any(not o.placed for o in recognized):
        raise typer.Exit(code=1)
