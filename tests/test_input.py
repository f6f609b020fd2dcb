from __future__ import annotations

import asyncio

from flapster.core.events import EventType
from flapster.simulator.input import FlapButton


def drain(bus) -> None:
    asyncio.run(bus.process_queue())


def test_press_is_edge_triggered(bus) -> None:
    button = FlapButton(bus, source="keyboard")
    button.press()
    button.press()
    assert button.is_pressed()
    drain(bus)
    assert len(bus.get_history(EventType.FLAP)) == 1

    button.release()
    button.press()
    drain(bus)
    flaps = bus.get_history(EventType.FLAP)
    assert len(flaps) == 2
    assert flaps[-1].source == "keyboard"


def test_press_callbacks(bus) -> None:
    button = FlapButton(bus)
    calls = []

    def broken() -> None:
        raise RuntimeError("callback failed")

    button.on_press(broken)
    unsubscribe = button.on_press(lambda: calls.append("pressed"))
    button.press()
    assert calls == ["pressed"]

    unsubscribe()
    button.release()
    button.press()
    assert calls == ["pressed"]
