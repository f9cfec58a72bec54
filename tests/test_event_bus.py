"""Tests for EventBus: subscribe, unsubscribe, broadcast isolation, clear."""

import logging
from typing import Any

import pytest

from refkit.events import EventBus

_TEST_EVENT = "TestEvent"


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


class Recorder:
    """Handler that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any, tuple[Any, ...]]] = []

    def __call__(self, event_name: str, sender: Any, args: tuple[Any, ...]) -> None:
        self.calls.append((event_name, sender, args))


class TestEventBusSubscribe:
    """Subscribe / unsubscribe bookkeeping."""

    def test_subscribe_creates_entry(self, event_bus: EventBus) -> None:
        handler = Recorder()
        event_bus.subscribe(_TEST_EVENT, handler)
        assert event_bus.has_event(_TEST_EVENT)
        assert event_bus.handler_count(_TEST_EVENT) == 1

    def test_subscribe_then_unsubscribe_removes_entry(self, event_bus: EventBus) -> None:
        handler = Recorder()
        event_bus.subscribe(_TEST_EVENT, handler)
        event_bus.unsubscribe(_TEST_EVENT, handler)
        assert not event_bus.has_event(_TEST_EVENT)
        assert event_bus.handler_count(_TEST_EVENT) == 0

    def test_same_handler_twice_is_called_twice(self, event_bus: EventBus) -> None:
        handler = Recorder()
        event_bus.subscribe(_TEST_EVENT, handler)
        event_bus.subscribe(_TEST_EVENT, handler)
        assert event_bus.handler_count(_TEST_EVENT) == 2
        event_bus.broadcast(_TEST_EVENT, None)
        assert len(handler.calls) == 2

    def test_unsubscribe_removes_one_instance(self, event_bus: EventBus) -> None:
        handler = Recorder()
        event_bus.subscribe(_TEST_EVENT, handler)
        event_bus.subscribe(_TEST_EVENT, handler)
        event_bus.unsubscribe(_TEST_EVENT, handler)
        assert event_bus.has_event(_TEST_EVENT)
        assert event_bus.handler_count(_TEST_EVENT) == 1

    def test_unsubscribe_removes_latest_occurrence(self, event_bus: EventBus) -> None:
        order: list[str] = []
        a = lambda *_: order.append("a")  # noqa: E731
        b = lambda *_: order.append("b")  # noqa: E731
        event_bus.subscribe(_TEST_EVENT, a)
        event_bus.subscribe(_TEST_EVENT, b)
        event_bus.subscribe(_TEST_EVENT, a)
        event_bus.unsubscribe(_TEST_EVENT, a)
        event_bus.broadcast(_TEST_EVENT, None)
        assert order == ["a", "b"]

    def test_unsubscribe_unknown_is_noop(self, event_bus: EventBus) -> None:
        event_bus.unsubscribe("missing", Recorder())
        other = Recorder()
        event_bus.subscribe(_TEST_EVENT, other)
        event_bus.unsubscribe(_TEST_EVENT, Recorder())
        assert event_bus.handler_count(_TEST_EVENT) == 1

    def test_bound_methods_compare_equal(self, event_bus: EventBus) -> None:
        class Listener:
            def __init__(self) -> None:
                self.hits = 0

            def on_event(self, event_name: str, sender: Any, args: tuple[Any, ...]) -> None:
                self.hits += 1

        listener = Listener()
        event_bus.subscribe(_TEST_EVENT, listener.on_event)
        event_bus.unsubscribe(_TEST_EVENT, listener.on_event)
        assert not event_bus.has_event(_TEST_EVENT)


class TestEventBusBroadcast:
    """Delivery order, arguments, failure isolation."""

    def test_handler_receives_name_sender_args(self, event_bus: EventBus) -> None:
        handler = Recorder()
        sender = object()
        event_bus.subscribe(_TEST_EVENT, handler)
        event_bus.broadcast(_TEST_EVENT, sender, "walaw", 3)
        assert handler.calls == [(_TEST_EVENT, sender, ("walaw", 3))]

    def test_no_args_gives_empty_tuple(self, event_bus: EventBus) -> None:
        handler = Recorder()
        event_bus.subscribe(_TEST_EVENT, handler)
        event_bus.broadcast(_TEST_EVENT, None)
        assert handler.calls[0][2] == ()

    def test_broadcast_unknown_name_is_noop(self, event_bus: EventBus) -> None:
        event_bus.broadcast("nobody.listens", None, 1)
        assert not event_bus.has_event("nobody.listens")

    def test_failing_handler_is_isolated(
        self, event_bus: EventBus, caplog: pytest.LogCaptureFixture
    ) -> None:
        order: list[int] = []

        def first(*_: Any) -> None:
            order.append(1)

        def second(*_: Any) -> None:
            order.append(2)
            raise RuntimeError("boom")

        def third(*_: Any) -> None:
            order.append(3)

        for h in (first, second, third):
            event_bus.subscribe(_TEST_EVENT, h)

        with caplog.at_level(logging.ERROR, logger="refkit.events.bus"):
            event_bus.broadcast(_TEST_EVENT, None)

        assert order == [1, 2, 3]
        assert "boom" in caplog.text
        assert _TEST_EVENT in caplog.text

    def test_handler_subscribing_during_broadcast_runs_next_time(
        self, event_bus: EventBus
    ) -> None:
        late = Recorder()

        def adder(*_: Any) -> None:
            event_bus.subscribe(_TEST_EVENT, late)

        event_bus.subscribe(_TEST_EVENT, adder)
        event_bus.broadcast(_TEST_EVENT, None)
        assert late.calls == []
        event_bus.broadcast(_TEST_EVENT, None)
        assert len(late.calls) == 1

    def test_handler_unsubscribing_itself(self, event_bus: EventBus) -> None:
        calls: list[str] = []

        def once(*_: Any) -> None:
            calls.append("once")
            event_bus.unsubscribe(_TEST_EVENT, once)

        event_bus.subscribe(_TEST_EVENT, once)
        event_bus.broadcast(_TEST_EVENT, None)
        event_bus.broadcast(_TEST_EVENT, None)
        assert calls == ["once"]
        assert not event_bus.has_event(_TEST_EVENT)


class TestEventBusClear:
    """clear / clear_all."""

    def test_clear_one(self, event_bus: EventBus) -> None:
        event_bus.subscribe("a", Recorder())
        event_bus.subscribe("b", Recorder())
        event_bus.clear("a")
        assert not event_bus.has_event("a")
        assert event_bus.has_event("b")

    def test_clear_missing_is_noop(self, event_bus: EventBus) -> None:
        event_bus.clear("missing")
        assert not event_bus.has_event("missing")

    def test_clear_all(self, event_bus: EventBus) -> None:
        for name in ("a", "b", "c"):
            event_bus.subscribe(name, Recorder())
        event_bus.clear_all()
        for name in ("a", "b", "c"):
            assert not event_bus.has_event(name)
            assert event_bus.handler_count(name) == 0

    def test_buses_are_independent(self) -> None:
        one, two = EventBus(), EventBus()
        one.subscribe(_TEST_EVENT, Recorder())
        assert not two.has_event(_TEST_EVENT)
