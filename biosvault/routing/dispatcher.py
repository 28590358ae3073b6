"""EventDispatcher: delivers import events to ALL registered listeners.

Delivery is synchronous and best-effort.  A listener that raises is
logged and skipped; the remaining listeners still receive the event and
the import that produced it is not affected.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from biosvault.models.events import AssetImportedEvent

if TYPE_CHECKING:
    from biosvault.routing.listeners import ImportListener

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Routes ``AssetImportedEvent``s to every registered listener.

    Usage
    -----
    >>> dispatcher = EventDispatcher()
    >>> dispatcher.register_listener(event_log)
    >>> dispatcher.dispatch(event)
    """

    def __init__(self) -> None:
        self._listeners: list[ImportListener] = []

    # ------------------------------------------------------------------
    # Listener management
    # ------------------------------------------------------------------

    def register_listener(self, listener: ImportListener) -> None:
        """Register a listener.  Registering the same instance twice is ignored."""
        if listener not in self._listeners:
            self._listeners.append(listener)
            logger.debug("Registered listener: %s", listener.listener_name)

    def unregister_listener(self, listener: ImportListener) -> None:
        try:
            self._listeners.remove(listener)
            logger.debug("Unregistered listener: %s", listener.listener_name)
        except ValueError:
            pass

    @property
    def registered_listeners(self) -> list[ImportListener]:
        """Return a copy of the registered listener list."""
        return list(self._listeners)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, event: AssetImportedEvent) -> list[str]:
        """Deliver *event* to every listener in registration order.

        Returns the names of the listeners that accepted it.
        """
        delivered: list[str] = []
        for listener in self._listeners:
            try:
                listener.accept(event)
                delivered.append(listener.listener_name)
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "Listener %s failed for event %s: %s",
                    listener.listener_name,
                    event.event_id,
                    exc,
                )
        return delivered
