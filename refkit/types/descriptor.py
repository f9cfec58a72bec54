"""Type descriptors: fully-qualified names, breadcrumbs and display labels."""

import inspect
from dataclasses import dataclass, field

from refkit.types.metadata import SerializableClass, metadata_for


NULL_LABEL = "<null>"


def strip_arity(name: str) -> str:
    """Drop a generic-arity suffix: ``List`1`` -> ``List``."""
    return name.split("`", 1)[0]


def nicify(name: str) -> str:
    """Turn an identifier into a display label.

    ``m_fooBar`` -> ``Foo Bar``, ``HTMLParser`` -> ``HTML Parser``,
    ``Vector3Int`` -> ``Vector 3 Int``, ``kMaxValue`` -> ``Max Value``.
    """
    if not name:
        return ""
    if name.startswith("m_"):
        name = name[2:]
    elif name.startswith("_"):
        name = name.lstrip("_")
    elif len(name) > 1 and name[0] == "k" and name[1].isupper():
        name = name[1:]

    out: list[str] = []
    for i, ch in enumerate(name):
        if ch == "_":
            out.append(" ")
            continue
        if i > 0:
            prev = name[i - 1]
            nxt = name[i + 1] if i + 1 < len(name) else ""
            if ch.isupper() and (prev.islower() or prev.isdigit()):
                out.append(" ")
            elif ch.isupper() and prev.isupper() and nxt.islower():
                # end of an acronym: HTMLParser
                out.append(" ")
            elif ch.isdigit() and prev.isalpha():
                out.append(" ")
        out.append(ch)

    label = " ".join("".join(out).split())
    return label[:1].upper() + label[1:]


def is_concrete(cls: type) -> bool:
    """Selectable: not abstract, not a Protocol, constructible without arguments."""
    if not inspect.isclass(cls):
        return False
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        return False
    try:
        sig = inspect.signature(cls)
    except (TypeError, ValueError):
        # no introspectable signature; creation is attempted lazily
        return True
    for param in sig.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


@dataclass(frozen=True)
class TypeDescriptor:
    """A candidate type: namespace, enclosing types and simple name."""

    name: str
    namespace: str | None = None
    enclosing: tuple[str, ...] = ()
    concrete: bool = True
    cls: type | None = field(default=None, compare=False, repr=False)
    metadata: SerializableClass | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_type(cls, type_: type) -> "TypeDescriptor":
        qual = [p for p in type_.__qualname__.split(".") if p != "<locals>"]
        return cls(
            name=type_.__name__,
            namespace=type_.__module__ or None,
            enclosing=tuple(qual[:-1]),
            concrete=is_concrete(type_),
            cls=type_,
            metadata=metadata_for(type_),
        )

    @classmethod
    def parse(cls, full_name: str | None) -> "TypeDescriptor | None":
        """Parse ``Namespace.Outer+Inner``. Returns None for empty input."""
        if not full_name or not full_name.strip():
            return None
        head, _, nested = full_name.strip().partition("+")
        namespace, _, first = head.rpartition(".")
        parts = [first] + [p for p in nested.split("+") if p]
        if not parts[-1]:
            return None
        return cls(
            name=parts[-1],
            namespace=namespace or None,
            enclosing=tuple(p for p in parts[:-1] if p),
        )

    @property
    def full_name(self) -> str | None:
        if not self.name:
            return None
        parts = [self.namespace] if self.namespace else []
        parts.extend(self.enclosing)
        parts.append(self.name)
        return ".".join(parts)

    @property
    def breadcrumbs(self) -> list[str]:
        """Namespace segments, enclosing types outermost first, then own name."""
        if not self.name:
            return []
        crumbs = [s for s in (self.namespace or "").split(".") if s]
        crumbs.extend(strip_arity(e) for e in self.enclosing)
        crumbs.append(strip_arity(self.name))
        return crumbs

    @property
    def nicified_name(self) -> str:
        return nicify(strip_arity(self.name))


def nicified_type_name(type_: type | None) -> str:
    """Display label for a class; ``<null>`` when there is none."""
    if type_ is None:
        return NULL_LABEL
    return nicify(strip_arity(type_.__name__))
