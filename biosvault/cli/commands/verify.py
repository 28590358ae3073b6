"""``biosvault verify`` and ``biosvault check``: inspect stored BIOS files.

``verify`` shows the status of every descriptor in the catalog.
``check`` answers whether a core can run: it exits non-zero and lists
the missing files when any mandatory one is absent or corrupt.

Both commands move files with a wrong MD5 to the trash.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from biosvault.cli._shared import console, get_state, load_catalog
from biosvault.core.catalog import Catalog
from biosvault.core.requirements import RequirementChecker
from biosvault.models.results import VerificationStatus

_STATUS_STYLE = {
    VerificationStatus.VALID: "[green]valid[/green]",
    VerificationStatus.NOT_FOUND: "[yellow]missing[/yellow]",
    VerificationStatus.IO_FAILURE: "[red]unreadable[/red]",
    VerificationStatus.INTEGRITY_MISMATCH: "[red]bad md5 (trashed)[/red]",
}


def verify_cmd(
    ctx: typer.Context,
    catalog_path: Path = typer.Option(
        None,
        "--catalog",
        "-c",
        help="JSON file of known BIOS descriptors.",
    ),
) -> None:
    """Verify each catalog entry against the store."""
    store = get_state(ctx).make_store()
    catalog = load_catalog(catalog_path)

    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("File", style="cyan")
    table.add_column("Description")
    table.add_column("Optional", justify="center")
    table.add_column("Status", justify="center")

    for descriptor in Catalog.sorted_by_name(catalog):
        result = store.inspect(descriptor)
        table.add_row(
            escape(descriptor.name),
            escape(descriptor.description),
            "Yes" if descriptor.optional else "No",
            _STATUS_STYLE[result.status],
        )

    console.print(table)


def check_cmd(
    ctx: typer.Context,
    catalog_path: Path = typer.Option(
        None,
        "--catalog",
        "-c",
        help="JSON file of the BIOS files a core requires.",
    ),
) -> None:
    """Check that every mandatory BIOS file is present and valid."""
    store = get_state(ctx).make_store()
    catalog = load_catalog(catalog_path)

    report = RequirementChecker(store).check_all(catalog)
    if report.satisfied:
        console.print("[bold green]All required BIOS files are available.[/bold green]")
        return

    console.print(
        Panel(
            escape(report.format_missing().rstrip()),
            title="[bold red]Missing BIOS files[/bold red]",
            border_style="red",
            padding=(1, 2),
        )
    )
    raise typer.Exit(code=1)
