"""
Event Bus Interface (Domain Layer).

Sync stages publish lifecycle events (contact created, invoice saving,
rounding adjusted, payment recorded, ...) through this interface. Handlers
subscribed to the bus act as the pipeline's extension hooks.
"""
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Union

from .events.base import DomainEvent

EventHandler = Callable[[DomainEvent], Union[None, Awaitable[None]]]


class EventBus(ABC):
    """Delivers sync lifecycle events to subscribed handlers."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to every subscriber."""

    @abstractmethod
    def subscribe(self, handler: EventHandler) -> None:
        """Register a sync or async handler for all events."""

    @abstractmethod
    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove a handler; unknown handlers are ignored."""
