"""
Keyboard/mouse flap input for the desktop window.

A single virtual button: the press edge publishes one FLAP event, holding
the key does nothing further until it is released.
"""

from typing import Callable
import logging

from flapster.core.events import EventBus, flap_event

logger = logging.getLogger(__name__)


class FlapButton:
    """Virtual flap button driven by the window's key and mouse events."""

    def __init__(self, event_bus: EventBus, source: str = "keyboard") -> None:
        self._event_bus = event_bus
        self._source = source
        self._pressed = False
        self._press_callbacks: list[Callable[[], None]] = []

    def is_pressed(self) -> bool:
        return self._pressed

    def on_press(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._press_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._press_callbacks:
                self._press_callbacks.remove(callback)

        return unsubscribe

    def press(self) -> None:
        """Called by the window when a flap key or mouse button goes down."""
        if self._pressed:
            return
        self._pressed = True
        self._event_bus.queue_event(flap_event(self._source))
        for callback in self._press_callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in flap press callback: {e}")

    def release(self) -> None:
        self._pressed = False
