"""
Minimal in-process event emitter: on/off/fire with ordered callbacks.
"""

from typing import Any, Callable, Dict, List
from collections import defaultdict
import logging

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]


class EventEmitter:
    """
    Event name -> list of callbacks.
    Callbacks are invoked with (event_name, data) in registration order.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def on(self, event_name: str, callback: Listener) -> None:
        """Register callback for event_name."""
        self._listeners[event_name].append(callback)

    def off(self, event_name: str, callback: Listener) -> None:
        """Remove one occurrence of callback for event_name. Unknown callbacks are ignored."""
        if event_name not in self._listeners:
            return
        try:
            self._listeners[event_name].remove(callback)
        except ValueError:
            pass
        if not self._listeners[event_name]:
            del self._listeners[event_name]

    def listeners(self, event_name: str) -> List[Listener]:
        """Return a copy of the callbacks registered for event_name."""
        return list(self._listeners.get(event_name, ()))

    def fire(self, event_name: str, data: Any = None) -> None:
        """Invoke all callbacks for event_name with (event_name, data)."""
        callbacks = self.listeners(event_name)
        logger.debug(f"Firing {event_name} to {len(callbacks)} listener(s)")
        for callback in callbacks:
            callback(event_name, data)
