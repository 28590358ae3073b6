"""Asset descriptor models: the typed boundary for core-plugin metadata.

Plugin metadata arrives as loosely shaped ``{Name, Description, MD5,
Optional, Size}`` records.  They are validated exactly once, here, and
everything downstream works with frozen ``AssetDescriptor`` instances.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from biosvault.core.hasher import digests_equal

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


class AssetDescriptor(BaseModel):
    """A known BIOS asset: canonical filename plus expected content digest.

    The descriptor is supplied by the caller (core-plugin metadata) and is
    never owned or persisted by the store.  ``size`` is advisory only.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="Name")
    description: str = Field(default="", alias="Description")
    expected_digest: str = Field(alias="MD5")
    optional: bool = Field(default=False, alias="Optional")
    size: int = Field(default=0, ge=0, alias="Size")

    @field_validator("name")
    @classmethod
    def _bare_filename(cls, value: str) -> str:
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(
                f"Asset name must be a bare filename, got {value!r}"
            )
        return value

    @field_validator("expected_digest")
    @classmethod
    def _hex_digest(cls, value: str) -> str:
        value = value.strip()
        if not _HEX_RE.match(value):
            raise ValueError(f"Expected digest must be hexadecimal, got {value!r}")
        return value

    def matches_digest(self, digest: str) -> bool:
        """Case-insensitive comparison against this descriptor's digest."""
        return digests_equal(self.expected_digest, digest)

    def to_metadata(self) -> dict[str, Any]:
        """Render the plugin-metadata record shape."""
        return self.model_dump(by_alias=True)


def parse_descriptors(records: list[Any]) -> list[AssetDescriptor]:
    """Validate a list of raw records (or descriptors) into descriptors.

    Already-constructed descriptors pass through untouched.
    """
    return [
        r if isinstance(r, AssetDescriptor) else AssetDescriptor.model_validate(r)
        for r in records
    ]
