"""
Per-entity named event registry.

Listeners are invoked synchronously, in registration order, with the owning
entity as their only argument. A failing listener is logged and skipped so
the remaining listeners (and the animation that fired the event) carry on.
"""
from typing import Any, Callable, Dict, List, Optional, Union
import threading
from collections import defaultdict
from core.logging.logger import get_logger
from core.logging.tags import TAG_EVENTS
from core.events.event_types import Subscription

logger = get_logger(__name__)


class EventHub:
    """
    Named-event listener registry owned by one entity.

    Registry mutation is guarded by a lock; listeners themselves run outside
    it, so a listener may register or remove listeners while being invoked.
    """

    def __init__(self, owner: Any = None):
        self._owner = owner
        self._listeners: Dict[str, List[Subscription]] = defaultdict(list)
        self._by_id: Dict[str, Subscription] = {}
        self._lock = threading.RLock()

    @property
    def owner(self) -> Any:
        return self._owner

    def on(self, event_name: str, listener: Callable[[Any], None]) -> Subscription:
        """
        Register a listener invoked every time ``event_name`` fires.

        Args:
            event_name: Event to listen for (e.g. 'positionComplete')
            listener: Callable receiving the owning entity

        Returns:
            Subscription handle accepted by off()

        Raises:
            TypeError: If listener is not callable
            ValueError: If event_name is blank
        """
        return self._register(event_name, listener, once=False)

    def once(self, event_name: str, listener: Callable[[Any], None]) -> Subscription:
        """Register a listener that is removed after its first invocation."""
        return self._register(event_name, listener, once=True)

    def _register(self, event_name: str, listener: Callable[[Any], None],
                  once: bool) -> Subscription:
        if not callable(listener):
            raise TypeError("Listener must be callable")
        if not isinstance(event_name, str) or not event_name.strip():
            raise ValueError("event_name must be a non-empty string")

        subscription = Subscription(event_name, listener, once=once)
        with self._lock:
            self._listeners[event_name].append(subscription)
            self._by_id[subscription.id] = subscription

        logger.debug("%s Listener %s registered for %s (once=%s)",
                     TAG_EVENTS, subscription.id, event_name, once)
        return subscription

    def off(self, subscription: Union[Subscription, str]) -> bool:
        """
        Detach a listener.

        Args:
            subscription: Handle returned by on()/once(), or its id

        Returns:
            True if a listener was removed
        """
        sub_id = subscription.id if isinstance(subscription, Subscription) else subscription
        with self._lock:
            found = self._by_id.pop(sub_id, None)
            if found is None:
                logger.warning("%s off() called with unknown listener id: %s", TAG_EVENTS, sub_id)
                return False
            found.active = False
            remaining = [s for s in self._listeners.get(found.event_name, []) if s.id != sub_id]
            if remaining:
                self._listeners[found.event_name] = remaining
            else:
                self._listeners.pop(found.event_name, None)

        logger.debug("%s Listener %s removed from %s", TAG_EVENTS, sub_id, found.event_name)
        return True

    def trigger(self, event_name: str) -> int:
        """
        Invoke every listener registered for ``event_name``.

        Unregistered names are a no-op. Listeners added during this call run
        on the next trigger; listeners removed during this call are skipped.

        Returns:
            Number of listeners that were invoked
        """
        with self._lock:
            snapshot = list(self._listeners.get(event_name, ()))

        if not snapshot:
            logger.debug("%s No listeners for event: %s", TAG_EVENTS, event_name)
            return 0

        invoked = 0
        for subscription in snapshot:
            if not subscription.active:
                continue
            if subscription.once:
                self._discard(subscription)
            invoked += 1
            try:
                subscription(self._owner)
            except Exception as e:
                logger.error("%s Error in listener %s for %s: %s",
                             TAG_EVENTS, subscription.id, event_name, e, exc_info=True)

        logger.debug("%s Triggered %s (%d listeners)", TAG_EVENTS, event_name, invoked)
        return invoked

    def _discard(self, subscription: Subscription) -> None:
        with self._lock:
            if self._by_id.pop(subscription.id, None) is None:
                return
            remaining = [s for s in self._listeners.get(subscription.event_name, [])
                         if s.id != subscription.id]
            if remaining:
                self._listeners[subscription.event_name] = remaining
            else:
                self._listeners.pop(subscription.event_name, None)

    def listener_count(self, event_name: Optional[str] = None) -> int:
        """Count listeners for one event, or across all events."""
        with self._lock:
            if event_name is None:
                return len(self._by_id)
            return len(self._listeners.get(event_name, ()))

    def clear(self) -> None:
        """Detach every listener."""
        with self._lock:
            for subscription in self._by_id.values():
                subscription.active = False
            self._listeners.clear()
            self._by_id.clear()
