"""Catalog: read-only digest lookup over caller-supplied descriptors.

A catalog is built per call from the currently relevant core-plugin
metadata.  Nothing is persisted or cached between calls.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from biosvault.models.descriptors import AssetDescriptor, parse_descriptors

logger = logging.getLogger(__name__)


class CatalogLoadError(ValueError):
    """Raised when a descriptor file cannot be read or validated."""


def load_descriptors(path: Path | str) -> list[AssetDescriptor]:
    """Read descriptors from a JSON file.

    The file holds either a list of ``{Name, Description, MD5, Optional,
    Size}`` records or an object with such a list under ``"files"``.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogLoadError(f"Could not read catalog {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"Invalid JSON in catalog {path}: {exc}") from exc

    if isinstance(raw, dict):
        raw = raw.get("files")
    if not isinstance(raw, list):
        raise CatalogLoadError(
            f"Catalog {path} must contain a list of descriptor records"
        )

    try:
        return parse_descriptors(raw)
    except ValidationError as exc:
        raise CatalogLoadError(f"Invalid descriptor in {path}: {exc}") from exc


class Catalog:
    """Lookup structure over an ordered list of known assets.

    If two descriptors share a digest the first one in list order wins;
    duplicates are a configuration error and are logged once.

    Parameters
    ----------
    descriptors:
        ``AssetDescriptor`` instances or raw metadata mappings.  Raw
        records are validated here and fail fast.
    """

    def __init__(self, descriptors: Iterable[AssetDescriptor | dict[str, Any]]) -> None:
        self._descriptors: tuple[AssetDescriptor, ...] = tuple(
            parse_descriptors(list(descriptors))
        )
        self._by_digest: dict[str, AssetDescriptor] = {}
        for descriptor in self._descriptors:
            key = descriptor.expected_digest.lower()
            first = self._by_digest.setdefault(key, descriptor)
            if first is not descriptor:
                logger.warning(
                    "Duplicate digest %s in catalog: %r shadowed by %r",
                    key,
                    descriptor.name,
                    first.name,
                )

    @classmethod
    def from_file(cls, path: Path | str) -> Catalog:
        """Build a catalog from a JSON descriptor file."""
        return cls(load_descriptors(path))

    @property
    def descriptors(self) -> tuple[AssetDescriptor, ...]:
        return self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[AssetDescriptor]:
        return iter(self._descriptors)

    def find_by_digest(self, digest: str) -> AssetDescriptor | None:
        """Return the first descriptor whose digest matches, case-insensitively."""
        return self._by_digest.get(digest.strip().lower())

    def find_by_name(self, name: str) -> AssetDescriptor | None:
        for descriptor in self._descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    @staticmethod
    def sorted_by_name(descriptors: Iterable[AssetDescriptor]) -> list[AssetDescriptor]:
        """Stable ascending sort by case-insensitive name."""
        return sorted(descriptors, key=lambda d: d.name.casefold())
