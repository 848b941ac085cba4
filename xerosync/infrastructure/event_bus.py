"""
Event Bus Implementation (Infrastructure Layer).

Notifies in-process subscribers of sync events.
"""
import logging
from typing import List, Optional, Set
import inspect

from xerosync.domain.event_bus import EventBus, EventHandler
from xerosync.domain.events.base import DomainEvent


logger = logging.getLogger(__name__)


def _handler_name(handler: EventHandler) -> str:
    # partials and callable instances have no __name__
    return getattr(handler, "__name__", repr(handler))


class InMemoryEventBus(EventBus):
    """
    In-Memory Event Bus Implementation.

    Features:
    - Notifies registered subscribers (sync or async callables)
    - Subscriber failures are logged, never propagated
    - Keeps a bounded history of published events for inspection
    """

    def __init__(self, history_size: int = 1000):
        """Initialize event bus with subscribers."""
        self._subscribers: Set[EventHandler] = set()
        self._history: List[DomainEvent] = []
        self._history_size = history_size

    @property
    def published(self) -> List[DomainEvent]:
        """Events published so far (oldest first)."""
        return list(self._history)

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        logger.info(f"Publishing event: {event.event_type} (aggregate: {event.aggregate_id})")
        self._remember(event)
        await self._notify_subscribers(event)

    def subscribe(self, handler: EventHandler) -> None:
        """
        Subscribe to all domain events.

        Args:
            handler: Callback function that receives events
        """
        self._subscribers.add(handler)
        logger.info(f"Registered event subscriber: {_handler_name(handler)}")

    def unsubscribe(self, handler: EventHandler) -> None:
        """
        Unsubscribe from domain events.

        Args:
            handler: Callback function to remove
        """
        self._subscribers.discard(handler)
        logger.info(f"Unregistered event subscriber: {_handler_name(handler)}")

    def _remember(self, event: DomainEvent) -> None:
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[: len(self._history) - self._history_size]

    async def _notify_subscribers(self, event: DomainEvent) -> None:
        """Notify all subscribers about an event."""
        if not self._subscribers:
            return

        logger.debug(f"Notifying {len(self._subscribers)} subscribers about {event.event_type}")

        for subscriber in list(self._subscribers):
            try:
                result = subscriber(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Subscriber {_handler_name(subscriber)} failed: {e}", exc_info=True)


# Global event bus instance
_event_bus_instance: Optional[InMemoryEventBus] = None


def get_event_bus() -> InMemoryEventBus:
    """
    Get or create global event bus instance.

    Returns:
        Global event bus instance
    """
    global _event_bus_instance

    if _event_bus_instance is None:
        _event_bus_instance = InMemoryEventBus()

    return _event_bus_instance
