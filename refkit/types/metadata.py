"""Serializable-class marker: base-type override and icon overrides.

Attach to a field with ``Annotated[Base, SerializableClass(...)]`` or to a
class with the ``@serializable_class(...)`` decorator.
"""

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

__all__ = ["SerializableClass", "metadata_for", "serializable_class"]

_ATTR = "__serializable_class__"

T = TypeVar("T", bound=type)


@dataclass(frozen=True)
class SerializableClass:
    """Marks a managed reference and optionally overrides how it is shown."""

    # Base type for candidate lookup; defaults to the field's declared type
    base_type: type | None = None
    # Built-in icon name (e.g. "d_ScriptableObject Icon")
    icon_name: str | None = None
    # Borrow the icon of another type
    icon_type: type | None = None
    # Direct icon override
    custom_icon: Any = None


def serializable_class(
    *,
    base_type: type | None = None,
    icon_name: str | None = None,
    icon_type: type | None = None,
    custom_icon: Any = None,
) -> Callable[[T], T]:
    """Class decorator storing SerializableClass metadata on the class."""
    meta = SerializableClass(
        base_type=base_type,
        icon_name=icon_name,
        icon_type=icon_type,
        custom_icon=custom_icon,
    )

    def decorate(cls: T) -> T:
        setattr(cls, _ATTR, meta)
        return cls

    return decorate


def metadata_for(cls: type | None) -> SerializableClass | None:
    """Class-level metadata, inherited from bases. None when absent."""
    if cls is None:
        return None
    meta = getattr(cls, _ATTR, None)
    return meta if isinstance(meta, SerializableClass) else None
