"""RequirementChecker: are all mandatory assets for a core available?

Returns data only.  Presenting the missing list to a user is left to
the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from biosvault.core.catalog import Catalog
from biosvault.core.managed_store import ManagedStore
from biosvault.models.descriptors import AssetDescriptor
from biosvault.models.results import RequirementReport

logger = logging.getLogger(__name__)


class RequirementChecker:
    """Aggregates per-descriptor verification into a single report."""

    def __init__(self, store: ManagedStore) -> None:
        self._store = store

    def check_all(self, descriptors: Iterable[AssetDescriptor]) -> RequirementReport:
        """Verify every descriptor in name order and collect the missing ones.

        Optional descriptors are still verified (so stale copies are
        purged) but never count as missing.
        """
        missing: list[AssetDescriptor] = []
        for descriptor in Catalog.sorted_by_name(descriptors):
            available = self._store.verify(descriptor)
            if not available and not descriptor.optional:
                missing.append(descriptor)

        if missing:
            logger.info(
                "Missing %d required BIOS file(s): %s",
                len(missing),
                ", ".join(d.name for d in missing),
            )
        return RequirementReport(satisfied=not missing, missing=tuple(missing))

    def required_files_available(self, descriptors: Iterable[AssetDescriptor]) -> bool:
        return self.check_all(descriptors).satisfied
