"""Observer list used by the services to announce data changes."""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DomainEvent(str, Enum):
    PRODUCT_ADDED = "product:added"
    PRODUCT_UPDATED = "product:updated"
    PRODUCT_DELETED = "product:deleted"
    SALE_ADDED = "sale:added"
    SALE_DELETED = "sale:deleted"
    DATA_CHANGED = "data:changed"


EventHandler = Callable[[DomainEvent, Any], None]


class EventBus:
    """Explicitly constructed publish/subscribe hub, shared by services and the controller."""

    def __init__(self) -> None:
        self._handlers: dict[DomainEvent, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event: DomainEvent, handler: EventHandler) -> None:
        """Registers a handler; it is called as ``handler(event, payload)``."""
        if handler not in self._handlers[event]:
            self._handlers[event].append(handler)

    def unsubscribe(self, event: DomainEvent, handler: EventHandler) -> None:
        if handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    def emit(self, event: DomainEvent, payload: Any = None) -> None:
        """Delivers an event to every subscriber in registration order."""
        logger.debug(f"Emitting {event.value}")
        for handler in list(self._handlers[event]):
            try:
                handler(event, payload)
            except Exception as e:
                logger.error(f"Event handler {handler!r} failed for {event.value}: {e}")
                continue

    def clear(self) -> None:
        """Drops every subscription."""
        self._handlers.clear()
