"""Shared fixtures for the FLAPSTER test suite."""
from __future__ import annotations

import random

import pytest

from flapster.config.settings import Settings
from flapster.core.clock import ManualClock
from flapster.core.events import EventBus
from flapster.game.simulation import Simulation
from flapster.storage import MemoryStore

FRAME_MS = 1000.0 / 60.0


class RecordingStore(MemoryStore):
    """Memory store that remembers every write."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.writes: list[tuple[str, str]] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().set(key, value)


class BrokenStore:
    """Store whose disk has gone away."""

    def get(self, key: str) -> str | None:
        raise OSError("store unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("store unavailable")


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, seed=1234)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(0.0)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def make_sim(settings, clock, store, bus):
    def factory(**overrides) -> Simulation:
        kwargs = dict(
            settings=settings,
            store=store,
            clock=clock,
            rng=random.Random(42),
            event_bus=bus,
        )
        kwargs.update(overrides)
        return Simulation(**kwargs)

    return factory


def step(sim: Simulation, clock: ManualClock, dt_ms: float = FRAME_MS):
    """Advance the manual clock and tick the simulation once."""
    return sim.tick(clock.advance(dt_ms))
