"""Recoverable trash for assets removed from the managed store.

Removal never erases.  Files are moved into ``trash_root`` under a
timestamped name so an operator can recover them later.
"""

from __future__ import annotations

import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path

from biosvault.models.events import TrashEntry

logger = logging.getLogger(__name__)

_STAMP_FORMAT = "%Y%m%dT%H%M%S%fZ"


class TrashBin:
    """A directory holding files moved out of a managed store.

    Layout: ``{trash_root}/{UTC timestamp}-{original name}``.

    Parameters
    ----------
    trash_root:
        Directory that receives trashed files.  Created on first use.
    """

    def __init__(self, trash_root: Path | str) -> None:
        self._root = Path(trash_root)

    @property
    def root(self) -> Path:
        return self._root

    def trash(self, path: Path) -> TrashEntry:
        """Move *path* into the trash and return its entry.

        Raises ``OSError`` if the move fails; the original file is then
        left where it was.
        """
        now = datetime.now(timezone.utc)
        self._root.mkdir(parents=True, exist_ok=True)

        target = self._root / f"{now.strftime(_STAMP_FORMAT)}-{path.name}"
        counter = 1
        while target.exists():
            target = self._root / f"{now.strftime(_STAMP_FORMAT)}_{counter}-{path.name}"
            counter += 1

        shutil.move(str(path), str(target))
        logger.info("Moved %s to trash at %s", path, target)
        return TrashEntry(original_name=path.name, trashed_path=target, trashed_at=now)

    def list_entries(self) -> list[TrashEntry]:
        """Return trashed files, newest first."""
        if not self._root.exists():
            return []

        entries: list[TrashEntry] = []
        for item in self._root.iterdir():
            if not item.is_file():
                continue
            stamp, _, original = item.name.partition("-")
            stamp = stamp.split("_", 1)[0]
            try:
                trashed_at = datetime.strptime(stamp, _STAMP_FORMAT).replace(
                    tzinfo=timezone.utc
                )
            except ValueError:
                logger.debug("Skipping foreign trash item %s", item)
                continue
            entries.append(
                TrashEntry(original_name=original, trashed_path=item, trashed_at=trashed_at)
            )

        entries.sort(key=lambda e: (e.trashed_at, e.trashed_path.name), reverse=True)
        return entries

    def restore(self, entry: TrashEntry, destination_dir: Path) -> Path:
        """Move a trashed file back under its original name.

        Raises
        ------
        FileNotFoundError
            If the trashed file no longer exists.
        FileExistsError
            If a file already occupies the original name.
        """
        if not entry.trashed_path.exists():
            raise FileNotFoundError(f"Trashed file not found: {entry.trashed_path}")

        destination = Path(destination_dir) / entry.original_name
        if destination.exists():
            raise FileExistsError(f"Refusing to overwrite {destination}")

        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(entry.trashed_path), str(destination))
        logger.info("Restored %s from trash", destination)
        return destination
