"""biosvault CLI: Typer-based command-line interface.

Provides the ``biosvault`` command with subcommands for importing,
verifying, and checking BIOS files, and for managing the store and its
trash.  All output uses Rich for formatted terminal display.
"""
