"""Event log listener: appends import events to a JSON-lines file.

Each line is the canonical JSON form of one ``AssetImportedEvent``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from biosvault.models.events import AssetImportedEvent

logger = logging.getLogger(__name__)


def canonical_json(obj: Any) -> str:
    """Deterministic, sorted, compact JSON."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


class EventLogListener:
    """Appends every import event to ``log_path``.

    Parameters
    ----------
    log_path:
        The JSON-lines file.  Parent directories are created on first
        write.
    """

    def __init__(self, log_path: Path | str) -> None:
        self._path = Path(log_path)

    @property
    def listener_name(self) -> str:
        return "event_log"

    @property
    def path(self) -> Path:
        return self._path

    def accept(self, event: AssetImportedEvent) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        record = event.model_dump(mode="json")
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(canonical_json(record) + "\n")
        logger.debug("EventLogListener: wrote %s to %s", event.event_id, self._path)

    def read_events(self) -> list[dict[str, Any]]:
        """Parse every recorded event, oldest first."""
        if not self._path.exists():
            return []
        return [
            json.loads(line)
            for line in self._path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]
