"""SubscriptionManager: event kind -> ordered listeners.

Listener lists are immutable tuples replaced on every change (copy on
write) under a lock, so dispatch reads a consistent snapshot without
locking. A subscribe that lands while a dispatch is in flight is seen by
the next dispatch.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

import structlog

from alpaca_client.streaming.types import Event, EventKind

logger = structlog.get_logger()

E_contra = TypeVar("E_contra", bound=Event, contravariant=True)


@runtime_checkable
class EventListener(Protocol[E_contra]):
    """Receives events of the kind it was subscribed to."""

    def on_event(self, event: E_contra) -> None: ...


Listener = EventListener[Any] | Callable[[Any], None]


def _callback(listener: Listener) -> Callable[[Any], None]:
    if isinstance(listener, EventListener):
        return listener.on_event
    return listener


class SubscriptionManager:
    """Thread-safe registry used to fan out stream events."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: dict[EventKind, tuple[Listener, ...]] = {}

    def subscribe(self, listener: Listener, kind: EventKind) -> None:
        """Append ``listener`` for ``kind``; dispatch order follows this order."""
        with self._lock:
            self._subscribers[kind] = (*self._subscribers.get(kind, ()), listener)
        logger.debug("Listener subscribed", kind=kind.value, listener=repr(listener))

    def unsubscribe(self, listener: Listener, kind: EventKind) -> bool:
        """Remove the earliest registration of ``listener`` for ``kind``."""
        with self._lock:
            current = self._subscribers.get(kind, ())
            for i, registered in enumerate(current):
                if registered is listener or registered == listener:
                    self._subscribers[kind] = current[:i] + current[i + 1 :]
                    return True
        return False

    def listeners(self, kind: EventKind) -> tuple[Listener, ...]:
        return self._subscribers.get(kind, ())

    def dispatch(self, event: Event) -> int:
        """Invoke the listeners for the event's kind, in registration order.

        Runs on the calling thread. A listener that raises is logged and
        skipped; the rest still receive the event. Returns the number of
        listeners that handled the event without raising.
        """
        delivered = 0
        for listener in self._subscribers.get(event.KIND, ()):
            try:
                _callback(listener)(event)
            except Exception:
                logger.exception(
                    "Event listener raised",
                    kind=event.KIND.value,
                    listener=repr(listener),
                )
                continue
            delivered += 1
        return delivered
