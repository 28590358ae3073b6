"""Helpers shared by CLI commands: option state, store wiring, catalog loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from biosvault.config import config
from biosvault.core.catalog import Catalog, CatalogLoadError
from biosvault.core.managed_store import ManagedStore
from biosvault.core.trash import TrashBin

console = Console()


@dataclass
class CliState:
    """Global options collected by the app callback."""

    store_path: Path
    trash_path: Path
    events_path: Path
    record_events: bool

    def make_store(self) -> ManagedStore:
        return ManagedStore(self.store_path, trash=TrashBin(self.trash_path))


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True), show_path=False, rich_tracebacks=True
            )
        ],
    )


def get_state(ctx: typer.Context) -> CliState:
    if isinstance(ctx.obj, CliState):
        return ctx.obj
    return CliState(
        store_path=config.store_path,
        trash_path=config.trash_path,
        events_path=config.events_path,
        record_events=config.record_events,
    )


def load_catalog(catalog_path: Path | None) -> Catalog:
    """Load the descriptor file, exiting with code 1 on any problem."""
    path = catalog_path or config.catalog_path
    if path is None:
        console.print(
            "[bold red]No catalog given.[/bold red] "
            "Pass --catalog or set BIOSVAULT_CATALOG_PATH."
        )
        raise typer.Exit(code=1)
    try:
        return Catalog.from_file(path)
    except CatalogLoadError as exc:
        console.print(f"[bold red]Catalog error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
