"""ImportPipeline: recognize candidate files and place them in the store.

Per attempt: Candidate -> Hashed -> Matched -> Imported, or
Candidate -> Hashed -> Unmatched -> Rejected.  A file that cannot be
hashed is rejected.  A matched file whose copy fails is still reported
as matched; retrying the same file re-attempts the copy.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from biosvault.core.catalog import Catalog
from biosvault.core.hasher import AssetIOError, hash_file
from biosvault.core.managed_store import ManagedStore
from biosvault.models.events import AssetImportedEvent
from biosvault.models.results import ImportOutcome
from biosvault.routing.dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class ImportStage(str, Enum):
    """States of a single import attempt."""

    CANDIDATE = "candidate"
    HASHED = "hashed"
    MATCHED = "matched"
    IMPORTED = "imported"
    REJECTED = "rejected"


class ImportPipeline:
    """Imports files whose content matches a known asset.

    Parameters
    ----------
    store:
        The managed store that receives recognized files.
    dispatcher:
        Receives one ``AssetImportedEvent`` per successful placement.  A
        private dispatcher with no listeners is used when omitted.
    """

    def __init__(
        self,
        store: ManagedStore,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher or EventDispatcher()

    @property
    def store(self) -> ManagedStore:
        return self._store

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    def import_if_known(self, path: Path | str, catalog: Catalog) -> ImportOutcome:
        """Hash *path* and import it if the digest is in *catalog*.

        An unreadable file is a non-match, never an exception.
        """
        path = Path(path)
        logger.debug("%s: %s", ImportStage.CANDIDATE.value, path)
        try:
            digest = hash_file(path)
        except AssetIOError as exc:
            logger.debug("%s: %s (%s)", ImportStage.REJECTED.value, path, exc)
            return ImportOutcome(matched=False, source=path, error=str(exc))
        return self.import_with_digest(path, digest, catalog)

    def import_with_digest(
        self, path: Path | str, digest: str, catalog: Catalog
    ) -> ImportOutcome:
        """Import *path* using a digest the caller already computed."""
        path = Path(path)
        logger.debug("%s: %s md5=%s", ImportStage.HASHED.value, path, digest)

        descriptor = catalog.find_by_digest(digest)
        if descriptor is None:
            logger.debug("%s: %s is not a known BIOS file", ImportStage.REJECTED.value, path)
            return ImportOutcome(matched=False, source=path)

        logger.debug("%s: %s is %s", ImportStage.MATCHED.value, path, descriptor.name)
        try:
            destination = self._store.place(path, descriptor.name)
        except AssetIOError as exc:
            logger.warning("Could not copy BIOS file %s: %s", path, exc)
            return ImportOutcome(
                matched=True, descriptor=descriptor, placed=False, source=path, error=str(exc)
            )

        logger.info(
            "%s: %s as %s", ImportStage.IMPORTED.value, path, descriptor.name
        )
        self._dispatcher.dispatch(
            AssetImportedEvent(descriptor=descriptor, source=path, destination=destination)
        )
        return ImportOutcome(matched=True, descriptor=descriptor, placed=True, source=path)

    def import_directory(
        self,
        directory: Path | str,
        catalog: Catalog,
        *,
        recursive: bool = True,
    ) -> list[ImportOutcome]:
        """Attempt to import every regular file under *directory*.

        Files are visited in sorted path order.  Files under the store or
        its trash are skipped, so removed assets are not re-imported.
        """
        directory = Path(directory)
        pattern = "**/*" if recursive else "*"
        skipped_roots = (
            self._store.root.resolve(),
            self._store.trash_bin.root.resolve(),
        )

        outcomes: list[ImportOutcome] = []
        for candidate in sorted(directory.glob(pattern)):
            if not candidate.is_file():
                continue
            resolved = candidate.resolve()
            if any(resolved.is_relative_to(root) for root in skipped_roots):
                continue
            outcomes.append(self.import_if_known(candidate, catalog))

        matched = sum(1 for o in outcomes if o.matched)
        logger.info(
            "Scanned %d file(s) in %s, %d recognized", len(outcomes), directory, matched
        )
        return outcomes
