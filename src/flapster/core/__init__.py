"""Core framework components for FLAPSTER."""

from .clock import Clock, ManualClock, MonotonicClock, Ticker
from .errors import ConfigurationError, FlapsterError
from .events import Event, EventBus, EventType
from .state import GameState, GameStateMachine, Phase

__all__ = [
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "Ticker",
    "ConfigurationError",
    "FlapsterError",
    "Event",
    "EventBus",
    "EventType",
    "GameState",
    "GameStateMachine",
    "Phase",
]
