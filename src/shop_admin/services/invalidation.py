"""Notification channel carrying query invalidation events."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

InvalidationHandler = Callable[[str], None]

logger = logging.getLogger(__name__)


@dataclass
class InvalidationBus:
    """Delivers invalidated query keys to every subscriber, in order."""

    _handlers: list[InvalidationHandler] = field(default_factory=list)

    def subscribe(self, handler: InvalidationHandler) -> None:
        """Register a handler called with each invalidated key."""
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: InvalidationHandler) -> None:
        """Remove a previously registered handler."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def publish(self, keys: Iterable[str]) -> None:
        """Deliver invalidation events for the given keys."""
        handlers = list(self._handlers)
        for key in keys:
            if not handlers:
                logger.debug("No subscribers for invalidation of %r", key)
                continue
            logger.debug("Invalidating %r for %d subscriber(s)", key, len(handlers))
            for handler in handlers:
                handler(key)
