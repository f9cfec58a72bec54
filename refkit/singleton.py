"""Single-instance-per-type registration tied to creation/destruction hooks.

The host calls ``awake()`` when an object comes alive and ``destroy()`` when
it goes away. Slots live in an explicit SingletonRegistry, one per concrete
type, so separate registries never see each other's instances.
"""

import logging
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingletonRegistry:
    """Concrete type -> the instance currently registered for it."""

    def __init__(self) -> None:
        self._instances: dict[type, Any] = {}

    def instance(self, cls: type[T]) -> T | None:
        return self._instances.get(cls)

    def register(self, obj: Any, destroy_if_exists: bool = True) -> bool:
        """Make obj the instance for its type.

        Returns False, leaving the current instance in place, when one is
        already registered and destroy_if_exists is set.
        """
        cls = type(obj)
        current = self._instances.get(cls)
        if current is not None and current is not obj and destroy_if_exists:
            return False
        self._instances[cls] = obj
        return True

    def unregister(self, obj: Any) -> None:
        """Clear the slot for obj's type if obj is the registered instance."""
        cls = type(obj)
        if self._instances.get(cls) is obj:
            del self._instances[cls]

    def clear(self) -> None:
        self._instances.clear()


class SimpleSingleton:
    """Base for objects that should have one live instance per type.

    Subclasses override ``destroy_if_already_exists`` to let a newer instance
    replace the registered one instead of being destroyed.
    """

    destroy_if_already_exists = True

    def __init__(self, registry: SingletonRegistry) -> None:
        self._registry = registry
        self.destroyed = False

    @classmethod
    def instance(cls: type[T], registry: SingletonRegistry) -> T | None:
        return registry.instance(cls)

    def awake(self) -> None:
        self.init_singleton()

    def on_destroy(self) -> None:
        self.uninit_singleton()

    def init_singleton(self) -> None:
        if not self._registry.register(self, self.destroy_if_already_exists):
            logger.debug("%s already has an instance, destroying duplicate", type(self).__name__)
            self.destroy()

    def uninit_singleton(self) -> None:
        self._registry.unregister(self)

    def destroy(self) -> None:
        """Tear down this object. Repeated calls are ignored."""
        if self.destroyed:
            return
        self.destroyed = True
        self.on_destroy()
