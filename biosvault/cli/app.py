"""Main Typer application: registers all CLI commands.

Entry point: ``biosvault`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

from pathlib import Path

import typer

from biosvault.cli._shared import CliState, configure_logging
from biosvault.cli.commands.import_cmd import import_cmd
from biosvault.cli.commands.store import (
    list_cmd,
    remove_cmd,
    restore_cmd,
    trash_cmd,
)
from biosvault.cli.commands.verify import check_cmd, verify_cmd
from biosvault.config import config

app = typer.Typer(
    name="biosvault",
    help="biosvault: content-verified BIOS files for emulation cores.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    store: Path = typer.Option(
        None, "--store", "-s", help="BIOS store directory."
    ),
    trash: Path = typer.Option(
        None, "--trash", help="Directory receiving removed BIOS files."
    ),
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING...)."
    ),
) -> None:
    """Collect global options shared by every command."""
    configure_logging(log_level or config.log_level)
    ctx.obj = CliState(
        store_path=store or config.store_path,
        trash_path=trash or config.trash_path,
        events_path=config.events_path,
        record_events=config.record_events,
    )


# Register subcommands
app.command(name="import", help="Import recognized BIOS files.")(import_cmd)
app.command(name="verify", help="Verify stored BIOS files against a catalog.")(verify_cmd)
app.command(name="check", help="Check that a core's required BIOS files are available.")(check_cmd)
app.command(name="list", help="List stored BIOS files.")(list_cmd)
app.command(name="remove", help="Move a stored BIOS file to the trash.")(remove_cmd)
app.command(name="trash", help="List trashed BIOS files.")(trash_cmd)
app.command(name="restore", help="Restore a BIOS file from the trash.")(restore_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
