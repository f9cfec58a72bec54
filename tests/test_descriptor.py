"""Tests for refkit.types.descriptor: nicify, parse, from_type, concreteness."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol

import pytest

from refkit.types.descriptor import (
    TypeDescriptor,
    is_concrete,
    nicified_type_name,
    nicify,
    strip_arity,
)
from refkit.types.metadata import SerializableClass, serializable_class


class Outer:
    class Inner:
        pass


class AbstractState(ABC):
    @abstractmethod
    def tick(self) -> None: ...


class Ticking(Protocol):
    def tick(self) -> None: ...


@dataclass
class NeedsArgs:
    speed: float


@dataclass
class HasDefaults:
    speed: float = 1.0


@serializable_class(icon_name="d_Folder Icon")
class Decorated:
    pass


class TestNicify:
    """Identifier -> label."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("FooBar", "Foo Bar"),
            ("fooBar", "Foo Bar"),
            ("HTMLParser", "HTML Parser"),
            ("ParseHTML", "Parse HTML"),
            ("Vector3Int", "Vector 3 Int"),
            ("m_moveSpeed", "Move Speed"),
            ("_hidden", "Hidden"),
            ("kMaxValue", "Max Value"),
            ("snake_case_name", "Snake case name"),
            ("Simple", "Simple"),
        ],
    )
    def test_labels(self, raw: str, expected: str) -> None:
        assert nicify(raw) == expected

    def test_empty(self) -> None:
        assert nicify("") == ""

    def test_stable(self) -> None:
        assert nicify("PatrolStateMachine") == nicify("PatrolStateMachine")

    def test_strip_arity(self) -> None:
        assert strip_arity("List`1") == "List"
        assert strip_arity("Plain") == "Plain"

    def test_nicified_type_name(self) -> None:
        assert nicified_type_name(None) == "<null>"
        assert nicified_type_name(HasDefaults) == "Has Defaults"


class TestParse:
    """TypeDescriptor.parse."""

    def test_namespace_and_name(self) -> None:
        d = TypeDescriptor.parse("Game.AI.Patrol")
        assert d is not None
        assert d.namespace == "Game.AI"
        assert d.name == "Patrol"
        assert d.enclosing == ()
        assert d.full_name == "Game.AI.Patrol"

    def test_nested(self) -> None:
        d = TypeDescriptor.parse("Game.Outer+Inner")
        assert d is not None
        assert d.enclosing == ("Outer",)
        assert d.name == "Inner"
        assert d.breadcrumbs == ["Game", "Outer", "Inner"]
        assert d.full_name == "Game.Outer.Inner"

    def test_no_namespace(self) -> None:
        d = TypeDescriptor.parse("Loose")
        assert d is not None
        assert d.namespace is None
        assert d.breadcrumbs == ["Loose"]

    @pytest.mark.parametrize("value", [None, "", "   ", "A."])
    def test_empty_gives_none(self, value: str | None) -> None:
        assert TypeDescriptor.parse(value) is None

    def test_generic_breadcrumbs_strip_arity(self) -> None:
        d = TypeDescriptor.parse("Game.Holder`2+Slot`1")
        assert d is not None
        assert d.breadcrumbs == ["Game", "Holder", "Slot"]
        assert d.nicified_name == "Slot"

    def test_unnamed_has_no_full_name(self) -> None:
        d = TypeDescriptor(name="")
        assert d.full_name is None
        assert d.breadcrumbs == []


class TestFromType:
    """TypeDescriptor.from_type on Python classes."""

    def test_module_and_qualname(self) -> None:
        d = TypeDescriptor.from_type(Outer.Inner)
        assert d.namespace == Outer.__module__
        assert d.enclosing == ("Outer",)
        assert d.name == "Inner"
        assert d.cls is Outer.Inner
        assert d.full_name == f"{Outer.__module__}.Outer.Inner"

    def test_local_class_drops_locals_marker(self) -> None:
        class Local:
            pass

        d = TypeDescriptor.from_type(Local)
        assert "<locals>" not in d.enclosing
        assert d.name == "Local"

    def test_carries_metadata(self) -> None:
        d = TypeDescriptor.from_type(Decorated)
        assert d.metadata == SerializableClass(icon_name="d_Folder Icon")

    def test_concrete_flag(self) -> None:
        assert TypeDescriptor.from_type(HasDefaults).concrete is True
        assert TypeDescriptor.from_type(NeedsArgs).concrete is False

    def test_equality_ignores_class(self) -> None:
        a = TypeDescriptor.from_type(Outer)
        b = TypeDescriptor(name="Outer", namespace=Outer.__module__)
        assert a == b


class TestIsConcrete:
    """Concrete = instantiable without arguments."""

    def test_plain_class(self) -> None:
        assert is_concrete(Outer)

    def test_abstract(self) -> None:
        assert not is_concrete(AbstractState)

    def test_protocol(self) -> None:
        assert not is_concrete(Ticking)

    def test_required_args(self) -> None:
        assert not is_concrete(NeedsArgs)

    def test_defaults(self) -> None:
        assert is_concrete(HasDefaults)

    def test_not_a_class(self) -> None:
        assert not is_concrete(len)  # type: ignore[arg-type]
