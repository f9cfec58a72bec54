"""Handler contract for the Event Bus."""

from typing import Any, Protocol

__all__ = ["GameEvent"]


class GameEvent(Protocol):
    """Callable invoked on broadcast with the event name, sender and positional args."""

    def __call__(self, event_name: str, sender: Any, args: tuple[Any, ...]) -> None: ...
