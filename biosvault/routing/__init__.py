"""Import event routing: synchronous fan-out to registered listeners."""

from biosvault.routing.dispatcher import EventDispatcher
from biosvault.routing.listeners import CallbackListener, ImportListener

__all__ = ["EventDispatcher", "ImportListener", "CallbackListener"]
