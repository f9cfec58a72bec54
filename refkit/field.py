"""Managed-reference field: declared type, candidates, current value and assignment.

A field is addressed by a property path on a host object, e.g. ``brain`` or
``states.Array.data[2].transition``. ``Array.data[i]`` steps into element
``i`` of a list-like field.
"""

import collections.abc
import logging
import re
import types
import typing
from typing import Annotated, Any, Callable, Union, get_args, get_origin

from refkit.events.bus import EventBus
from refkit.picker.popup import TypePicker
from refkit.types.catalog import TypeCatalog
from refkit.types.descriptor import nicified_type_name
from refkit.types.icons import IconResolver
from refkit.types.metadata import SerializableClass

logger = logging.getLogger(__name__)

_DATA_RE = re.compile(r"^data\[(\d+)\]$")
_SEQUENCES = (list, tuple, collections.abc.Sequence, collections.abc.MutableSequence)
_UNRESOLVED = object()


def _steps(path: str) -> list[str | int]:
    """Split a property path into attribute names and element indexes."""
    parts = path.split(".")
    steps: list[str | int] = []
    i = 0
    while i < len(parts):
        if parts[i] == "Array" and i + 1 < len(parts):
            m = _DATA_RE.match(parts[i + 1])
            if m:
                steps.append(int(m.group(1)))
                i += 2
                continue
        steps.append(parts[i])
        i += 1
    return steps


def _unwrap(annotation: Any) -> tuple[Any, SerializableClass | None]:
    """Strip Annotated and Optional; return (inner annotation, marker)."""
    meta = None
    if get_origin(annotation) is Annotated:
        args = get_args(annotation)
        annotation = args[0]
        meta = next((m for m in args[1:] if isinstance(m, SerializableClass)), None)
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            inner, inner_meta = _unwrap(args[0])
            return inner, meta or inner_meta
    return annotation, meta


def _class_of(annotation: Any) -> type | None:
    origin = get_origin(annotation)
    if origin is not None:
        return origin if isinstance(origin, type) else None
    return annotation if isinstance(annotation, type) else None


def _hints(cls: Any) -> dict[str, Any]:
    if not isinstance(cls, type):
        return {}
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except Exception as e:
        logger.debug("Cannot read annotations of %r: %s", cls, e)
        return {}


def field_annotation(host_cls: type | None, path: str | None) -> Any:
    """Annotation of the field at path, walking nested annotations. None if unresolvable."""
    if host_cls is None or not path:
        return None
    annotation: Any = None
    current: Any = host_cls
    for step in _steps(path):
        if isinstance(step, int):
            inner, _ = _unwrap(annotation)
            args = get_args(inner)
            if get_origin(inner) not in _SEQUENCES or not args:
                return None
            annotation = args[0]
        else:
            hints = _hints(current)
            if step not in hints:
                return None
            annotation = hints[step]
        current = _class_of(_unwrap(annotation)[0])
    return annotation


def field_declared_type(host_cls: type | None, path: str | None) -> type | None:
    """Declared class of the field at path, without Annotated/Optional wrappers."""
    annotation = field_annotation(host_cls, path)
    if annotation is None:
        return None
    return _class_of(_unwrap(annotation)[0])


def _has_icon(meta: SerializableClass | None) -> bool:
    return meta is not None and bool(meta.custom_icon or meta.icon_name or meta.icon_type)


class ManagedReferenceField:
    """One managed-reference field on a host object."""

    def __init__(
        self,
        host: Any,
        path: str,
        catalog: TypeCatalog,
        icons: IconResolver | None = None,
    ) -> None:
        self._host = host
        self.path = path
        self._steps = _steps(path)
        self._catalog = catalog
        self._icons = icons or IconResolver()
        annotation = field_annotation(type(host), path)
        declared, meta = _unwrap(annotation) if annotation is not None else (None, None)
        self.metadata = meta
        self.declared_type = (
            meta.base_type if meta is not None and meta.base_type else _class_of(declared)
        )

    @property
    def is_managed_reference(self) -> bool:
        return self.metadata is not None

    @property
    def candidates(self) -> list[type]:
        if not self.is_managed_reference:
            return []
        return self._catalog.assignable_concrete_types(self.declared_type)

    @property
    def value(self) -> Any:
        current = self._host
        for step in self._steps:
            try:
                current = current[step] if isinstance(step, int) else getattr(current, step)
            except (AttributeError, IndexError, KeyError, TypeError):
                return None
        return current

    @property
    def current_type(self) -> type | None:
        value = self.value
        return type(value) if value is not None else None

    @property
    def stored_type_name(self) -> str:
        """``<module> <qualname>`` of the current value; empty when unset."""
        cls = self.current_type
        return self._catalog.stored_type_name(cls) if cls is not None else ""

    def label(self) -> str:
        return nicified_type_name(self.current_type)

    def icon(self) -> Any:
        cls = self.current_type
        if cls is None:
            return None
        meta = self.metadata if _has_icon(self.metadata) else self._catalog.metadata(cls)
        return self._icons.icon_for(cls, meta)

    def assign(self, cls: type | None) -> Any:
        """Store a fresh instance of cls (None clears the field). Returns the instance.

        Returns None without creating anything when the path does not lead to
        an existing slot on the host.
        """
        target = self._parent()
        if target is _UNRESOLVED:
            logger.debug("Cannot assign %s: path %r does not resolve", cls, self.path)
            return None
        instance = self._catalog.create_instance(cls)
        last = self._steps[-1]
        if isinstance(last, int):
            target[last] = instance
        else:
            setattr(target, last, instance)
        return instance

    def _parent(self) -> Any:
        """Object holding the final step, or _UNRESOLVED."""
        target = self._host
        for step in self._steps[:-1]:
            try:
                target = target[step] if isinstance(step, int) else getattr(target, step)
            except (AttributeError, IndexError, KeyError, TypeError):
                return _UNRESOLVED
        last = self._steps[-1]
        if isinstance(last, int):
            try:
                target[last]
            except (IndexError, KeyError, TypeError):
                return _UNRESOLVED
        elif target is None:
            return _UNRESOLVED
        return target

    def open_picker(
        self,
        on_selected: Callable[[type], None] | None = None,
        bus: EventBus | None = None,
    ) -> TypePicker:
        """Picker over this field's candidates; choosing a type assigns it."""

        def _select(cls: type) -> None:
            self.assign(cls)
            if on_selected is not None:
                on_selected(cls)

        descriptors = (
            self._catalog.descriptors_for(self.declared_type)
            if self.is_managed_reference
            else []
        )
        return TypePicker(descriptors, _select, icons=self._icons, bus=bus)
