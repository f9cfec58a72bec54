"""In-process event transport: subscribe by name, broadcast to every handler.

Handlers run synchronously on the caller's thread. No journal, no retries.
"""

import logging
from typing import Any

from refkit.events.models import GameEvent

logger = logging.getLogger(__name__)


class EventBus:
    """Name -> ordered handler list. Owned by whoever creates it.

    The same handler may be subscribed more than once and is then invoked
    once per subscription. A name is only present while it has handlers.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[GameEvent]] = {}

    def subscribe(self, event_name: str, handler: GameEvent) -> None:
        """Append handler to the list for event_name."""
        self._subscribers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: GameEvent) -> None:
        """Remove the most recently added instance of handler.

        Drops the name entirely once its last handler is gone.
        """
        handlers = self._subscribers.get(event_name)
        if not handlers:
            return
        for i in range(len(handlers) - 1, -1, -1):
            if handlers[i] == handler:
                del handlers[i]
                break
        if not handlers:
            del self._subscribers[event_name]

    def broadcast(self, event_name: str, sender: Any, *args: Any) -> None:
        """Invoke every handler for event_name in registration order.

        A failing handler is logged and skipped; the rest still run and
        nothing propagates to the caller. Handlers registered or removed by a
        handler during this call take effect from the next broadcast.
        """
        handlers = self._subscribers.get(event_name)
        if not handlers:
            return
        for handler in list(handlers):
            try:
                handler(event_name, sender, args)
            except Exception as e:
                logger.exception(
                    "EventBus handler %r failed for event %s: %s",
                    handler,
                    event_name,
                    e,
                )

    def clear(self, event_name: str) -> None:
        self._subscribers.pop(event_name, None)

    def clear_all(self) -> None:
        self._subscribers.clear()

    def has_event(self, event_name: str) -> bool:
        return event_name in self._subscribers

    def handler_count(self, event_name: str) -> int:
        """Number of subscriptions for event_name; 0 when absent."""
        return len(self._subscribers.get(event_name, ()))
