"""Import event and trash models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from biosvault.models.descriptors import AssetDescriptor

DID_IMPORT_BIOS_FILE = "did_import_bios_file"


class AssetImportedEvent(BaseModel):
    """Emitted once for every asset successfully placed in the store."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str = DID_IMPORT_BIOS_FILE
    descriptor: AssetDescriptor
    source: Path
    destination: Path
    timestamp_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def payload(self) -> dict[str, Any]:
        """The descriptor's full metadata record (Name, Description, MD5, ...)."""
        return self.descriptor.to_metadata()


class TrashEntry(BaseModel):
    """A file moved out of the store into the recoverable trash."""

    model_config = ConfigDict(frozen=True)

    original_name: str
    trashed_path: Path
    trashed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
