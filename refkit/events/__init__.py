"""Event Bus: string-keyed multicast notification between uncoupled components."""

from refkit.events.bus import EventBus
from refkit.events.models import GameEvent
from refkit.events.topics import PickerTopics

__all__ = ["EventBus", "GameEvent", "PickerTopics"]
