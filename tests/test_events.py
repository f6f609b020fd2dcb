from __future__ import annotations

import asyncio

from flapster.core.events import Event, EventBus, EventType, flap_event


def test_emit_reaches_type_and_global_handlers(bus: EventBus) -> None:
    typed, everything = [], []
    bus.subscribe(EventType.SCORED, typed.append)
    bus.subscribe_all(everything.append)

    bus.emit(Event(EventType.SCORED, data={"score": 1}))
    bus.emit(Event(EventType.DIED))

    assert [e.type for e in typed] == [EventType.SCORED]
    assert [e.type for e in everything] == [EventType.SCORED, EventType.DIED]


def test_unsubscribe(bus: EventBus) -> None:
    seen = []
    unsubscribe = bus.subscribe(EventType.FLAP, seen.append)
    unsubscribe()
    bus.emit(flap_event())
    assert seen == []


def test_handler_errors_do_not_stop_dispatch(bus: EventBus) -> None:
    seen = []

    def broken(event: Event) -> None:
        raise ValueError("bad handler")

    bus.subscribe(EventType.FLAP, broken)
    bus.subscribe(EventType.FLAP, seen.append)
    bus.emit(flap_event())
    assert len(seen) == 1


def test_queued_events_dispatch_on_process(bus: EventBus) -> None:
    seen = []
    bus.subscribe(EventType.FLAP, seen.append)
    bus.queue_event(flap_event("keyboard"))
    bus.queue_event(flap_event("mouse"))
    assert seen == []

    asyncio.run(bus.process_queue())
    assert [e.source for e in seen] == ["keyboard", "mouse"]


def test_history_is_bounded() -> None:
    bus = EventBus(history_limit=3)
    for i in range(5):
        bus.emit(Event(EventType.SCORED, data={"score": i}))
    history = bus.get_history(EventType.SCORED, limit=10)
    assert [e.data["score"] for e in history] == [2, 3, 4]
    bus.clear_history()
    assert bus.get_history() == []
