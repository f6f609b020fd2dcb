"""
Frame timing for the simulation.

The simulation never reads wall time directly: an external driver passes a
timestamp into every tick and the :class:`Ticker` turns consecutive
timestamps into a clamped delta. The clamp keeps a long stall (window drag,
debugger pause) from moving the avatar through an obstacle in one step.
"""

from typing import Protocol
import logging
import time

from flapster.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Clock(Protocol):
    """Source of monotonically increasing timestamps in milliseconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock advanced by hand. Used by headless runs and tests."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)

    def now(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        """Move time forward and return the new timestamp."""
        self._now += delta_ms
        return self._now

    def set(self, timestamp_ms: float) -> None:
        self._now = float(timestamp_ms)


class Ticker:
    """
    Derives a clamped delta-time per frame.

    ``sim_time_ms`` accumulates the clamped deltas only, so it is the clock
    that gameplay timers (spawning, debounce, animation) run on.
    """

    def __init__(self, start_ms: float, max_dt_ms: float) -> None:
        if max_dt_ms <= 0:
            raise ConfigurationError(f"max_dt_ms must be positive, got {max_dt_ms}")
        self.max_dt_ms = float(max_dt_ms)
        self._last_timestamp = float(start_ms)
        self._sim_time_ms = 0.0
        self._frame = 0

    @property
    def sim_time_ms(self) -> float:
        """Sum of all clamped deltas so far."""
        return self._sim_time_ms

    @property
    def frame(self) -> int:
        return self._frame

    def advance(self, timestamp_ms: float) -> float:
        """Consume a timestamp and return the clamped delta in ms."""
        raw = timestamp_ms - self._last_timestamp
        self._last_timestamp = float(timestamp_ms)

        if raw < 0.0:
            # Clock went backwards; treat as a zero-length frame
            logger.debug(f"Non-monotonic timestamp ({raw:.1f} ms), clamping to 0")
            raw = 0.0
        dt = min(raw, self.max_dt_ms)

        self._sim_time_ms += dt
        self._frame += 1
        return dt
