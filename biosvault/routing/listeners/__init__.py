"""Listener protocol for import events.

Listeners implement a ``listener_name`` property and an
``accept(event)`` method.  The dispatcher calls ``accept`` on every
registered listener for every successful import.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from biosvault.models.events import AssetImportedEvent


@runtime_checkable
class ImportListener(Protocol):
    """Protocol every import-event listener must implement."""

    @property
    def listener_name(self) -> str:
        """Return the unique name of this listener."""
        ...

    def accept(self, event: AssetImportedEvent) -> None:
        """Handle one import event.

        Exceptions are logged by the dispatcher and do not reach the
        import pipeline.
        """
        ...


class CallbackListener:
    """Adapts a plain callable to the ``ImportListener`` protocol."""

    def __init__(
        self,
        callback: Callable[[AssetImportedEvent], None],
        name: str = "callback",
    ) -> None:
        self._callback = callback
        self._name = name

    @property
    def listener_name(self) -> str:
        return self._name

    def accept(self, event: AssetImportedEvent) -> None:
        self._callback(event)
