"""Runtime configuration: env-driven via pydantic-settings.

Reads from a .env file and BIOSVAULT_* environment variables.  Only the
CLI reads the module-level ``config``; the core classes take their paths
as constructor arguments.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class VaultConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export BIOSVAULT_STORE_PATH=~/Library/Application\\ Support/OpenEmu/BIOS
        export BIOSVAULT_LOG_LEVEL=DEBUG

    Or via .env file::

        BIOSVAULT_CATALOG_PATH=cores/bios.json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BIOSVAULT_",
        env_file_encoding="utf-8",
    )

    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Storage paths
    store_path: Path = Path(".biosvault/bios")
    trash_path: Path = Path(".biosvault/trash")
    events_path: Path = Path(".biosvault/events.jsonl")
    catalog_path: Path | None = None

    # Append every import event to events_path
    record_events: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# Module-level singleton: import as `from biosvault.config import config`
config = VaultConfig()
