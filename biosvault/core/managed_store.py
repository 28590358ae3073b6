"""Managed BIOS store: one flat directory of canonical asset copies.

Storage layout: {store_root}/{descriptor.name}
No subdirectories, no extension rewriting.  Removal always goes through
the recoverable trash; nothing here erases a file.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from biosvault.core.hasher import CHUNK_SIZE, AssetIOError, hash_file
from biosvault.core.trash import TrashBin
from biosvault.models.descriptors import AssetDescriptor
from biosvault.models.results import VerificationResult, VerificationStatus

logger = logging.getLogger(__name__)


class InvalidAssetName(ValueError):
    """Raised when a name would resolve outside the flat store directory."""


class ManagedStore:
    """Owns a single directory and arbitrates access to canonical assets.

    An asset is *available* only when the file exists AND its digest
    matches the descriptor.  Verification therefore purges files whose
    digest disagrees, so a stale or corrupt copy can never pass for a
    valid one on a later check.

    Parameters
    ----------
    store_root:
        Directory holding the canonical copies.  Created lazily by
        :meth:`place`.
    trash:
        Where removed files go.  Defaults to a ``.trash`` directory next
        to ``store_root``.
    """

    def __init__(self, store_root: Path | str, trash: TrashBin | None = None) -> None:
        self._root = Path(store_root)
        self._trash = trash or TrashBin(self._root.parent / ".trash")

    @property
    def root(self) -> Path:
        return self._root

    @property
    def trash_bin(self) -> TrashBin:
        return self._trash

    def path_for(self, name: str) -> Path:
        """Return ``store_root / name`` after checking *name* is a bare filename."""
        if not name or name in (".", "..") or Path(name).name != name or "\\" in name:
            raise InvalidAssetName(f"Not a bare asset filename: {name!r}")
        return self._root / name

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def _is_file(path: Path) -> bool:
        try:
            return path.is_file()
        except OSError as exc:
            logger.debug("Could not stat %s: %s", path, exc)
            return False

    def is_present(self, name: str) -> bool:
        """Existence check only; the content is not inspected."""
        return self._is_file(self.path_for(name))

    def list_assets(self) -> list[str]:
        """Names of all files directly under the store, case-insensitively sorted."""
        try:
            entries = list(self._root.iterdir())
        except OSError:
            return []
        return sorted(
            (p.name for p in entries if not p.name.startswith(".") and self._is_file(p)),
            key=str.casefold,
        )

    # ------------------------------------------------------------------
    # Verify
    # ------------------------------------------------------------------

    def inspect(self, descriptor: AssetDescriptor) -> VerificationResult:
        """Verify *descriptor* and report why it is or is not available.

        Side effect: a present file whose digest does not match is moved
        to the trash before this returns.  It looks like a query but it
        mutates the store.
        """
        path = self.path_for(descriptor.name)
        try:
            present = path.is_file()
        except OSError as exc:
            logger.debug("Could not stat %s: %s", path, exc)
            return VerificationResult(
                descriptor=descriptor, status=VerificationStatus.IO_FAILURE
            )
        if not present:
            return VerificationResult(
                descriptor=descriptor, status=VerificationStatus.NOT_FOUND
            )

        try:
            actual = hash_file(path)
        except AssetIOError as exc:
            logger.debug("Could not hash %s: %s", path, exc)
            return VerificationResult(
                descriptor=descriptor, status=VerificationStatus.IO_FAILURE
            )

        if descriptor.matches_digest(actual):
            return VerificationResult(
                descriptor=descriptor,
                status=VerificationStatus.VALID,
                actual_digest=actual,
            )

        logger.warning(
            "Incorrect MD5 for %s (expected %s, found %s), moving to trash",
            path,
            descriptor.expected_digest,
            actual,
        )
        purged = self.remove(descriptor.name)
        return VerificationResult(
            descriptor=descriptor,
            status=VerificationStatus.INTEGRITY_MISMATCH,
            actual_digest=actual,
            purged=purged,
        )

    def verify(self, descriptor: AssetDescriptor) -> bool:
        """Return True if the asset is present with the expected digest.

        Never raises for I/O problems.  Purges mismatched files, see
        :meth:`inspect`.
        """
        return self.inspect(descriptor).ok

    # ------------------------------------------------------------------
    # Remove
    # ------------------------------------------------------------------

    def remove(self, name: str) -> bool:
        """Move the asset called *name* to the trash.

        Returns True if a file was found and trashed, False if there was
        nothing to remove or the move failed.
        """
        path = self.path_for(name)
        if not self._is_file(path):
            return False

        logger.info("Deleting %s", path)
        try:
            self._trash.trash(path)
        except OSError as exc:
            logger.warning("Could not move %s to trash: %s", path, exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Place
    # ------------------------------------------------------------------

    def place(self, source: Path | str, name: str) -> Path:
        """Copy *source* into the store as *name*, overwriting any existing file.

        The bytes are streamed to a temporary sibling and renamed over the
        destination, so a failed copy leaves the previous canonical file
        (if any) untouched.

        Raises
        ------
        AssetIOError
            If the copy fails (source vanished, permission denied, disk
            full).  Only the attempted destination is affected.
        """
        source = Path(source)
        destination = self.path_for(name)

        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            # The copy below fails too, and that is the error surfaced.
            logger.warning(
                "Could not create directory %s before copying %s: %s",
                self._root,
                source,
                exc,
            )

        tmp_name = ""
        try:
            with source.open("rb") as src:
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{name}.", suffix=".part", dir=self._root
                )
                with os.fdopen(fd, "wb") as dst:
                    shutil.copyfileobj(src, dst, CHUNK_SIZE)
            shutil.copymode(source, tmp_name)
            os.replace(tmp_name, destination)
        except OSError as exc:
            if tmp_name:
                Path(tmp_name).unlink(missing_ok=True)
            raise AssetIOError(
                f"Could not copy {source} to {destination}: {exc}"
            ) from exc

        logger.debug("Placed %s at %s", source, destination)
        return destination
