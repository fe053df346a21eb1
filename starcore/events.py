"""
Observer registry for game notifications.

The state machine and mining system publish named events here; renderers,
cargo bookkeeping and UI subscribe without the core knowing about them.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class GameEvents:
    """Event names published by starcore"""
    GAME_STATE_CHANGED = 'gameStateChanged'
    SYSTEM_ENTERED = 'systemEntered'
    SYSTEM_LEFT = 'systemLeft'
    PLANET_LANDED = 'planetLanded'
    STARBASE_DOCKED = 'starbaseDocked'
    LIFT_OFF = 'liftOff'
    CARGO_ADDED = 'cargoAdded'
    SCAN_COMPLETE = 'scanComplete'


class EventBus:
    """
    Synchronous publish/subscribe registry.

    Listeners run in subscription order. A listener that raises is logged
    and skipped; the remaining listeners still receive the event.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Listener) -> None:
        if callback not in self._listeners[event_name]:
            self._listeners[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Listener) -> None:
        listeners = self._listeners.get(event_name)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def publish(self, event_name: str, payload: Any = None) -> None:
        """
        Deliver payload to every listener of event_name.

        Publishing an event nobody listens to is a no-op.
        """
        # Copy so listeners may unsubscribe during delivery
        for callback in list(self._listeners.get(event_name, ())):
            try:
                callback(payload)
            except Exception:
                logger.exception("Listener %r failed handling event %r", callback, event_name)

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, ()))

    def clear(self) -> None:
        """Drop every subscription."""
        self._listeners.clear()
