"""
Obstacle pairs: spawning, scrolling, scoring and retirement.

An obstacle is a column with a vertical gap. It is created just off the right
edge, scrolls left every tick, is scored once its right edge passes the
avatar, and is dropped once its right edge is past the retire threshold.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging
import random

from flapster.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    """A column with a gap between ``gap_top`` and ``gap_bottom``."""
    x: float
    gap_top: float
    gap_bottom: float
    width: float
    scored: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_height(self) -> float:
        return self.gap_bottom - self.gap_top


class ObstacleManager:
    """
    Owns the live obstacles.

    Other components read ``obstacles`` but never modify the list.
    """

    def __init__(
        self,
        rng: random.Random,
        *,
        width: float,
        gap: float,
        speed: float,
        spawn_x: float,
        spawn_interval_ms: float,
        min_gap_top: float,
        max_gap_top: float,
        retire_x: float = -20.0,
    ) -> None:
        if max_gap_top < min_gap_top:
            raise ConfigurationError(
                f"gap_top range is empty: [{min_gap_top}, {max_gap_top}]"
            )
        if spawn_interval_ms <= 0:
            raise ConfigurationError("spawn interval must be positive")

        self.rng = rng
        self.width = width
        self.gap = gap
        self.speed = speed
        self.spawn_x = spawn_x
        self.spawn_interval_ms = spawn_interval_ms
        self.min_gap_top = min_gap_top
        self.max_gap_top = max_gap_top
        self.retire_x = retire_x

        self.obstacles: List[Obstacle] = []
        self.last_spawn_time: float = 0.0

    def reset(self, now_ms: float, grace_ms: float = 0.0) -> None:
        """Clear all obstacles and push the next spawn out by ``grace_ms``.

        The first spawn then happens at ``now + grace + interval``.
        """
        self.obstacles.clear()
        self.last_spawn_time = now_ms + grace_ms

    def create(self) -> Obstacle:
        gap_top = self.rng.uniform(self.min_gap_top, self.max_gap_top)
        return Obstacle(
            x=self.spawn_x,
            gap_top=gap_top,
            gap_bottom=gap_top + self.gap,
            width=self.width,
        )

    def maybe_spawn(self, now_ms: float) -> Optional[Obstacle]:
        """Spawn one obstacle if a full interval has passed since the last one."""
        if now_ms - self.last_spawn_time < self.spawn_interval_ms:
            return None
        obstacle = self.create()
        self.obstacles.append(obstacle)
        self.last_spawn_time = now_ms
        logger.debug(f"Spawned obstacle, gap {obstacle.gap_top:.1f}-{obstacle.gap_bottom:.1f}")
        return obstacle

    def advance(self, frame_factor: float = 1.0) -> int:
        """Scroll every obstacle left and drop the ones fully off screen.

        Returns:
            Number of obstacles removed
        """
        dx = self.speed * frame_factor
        for obstacle in self.obstacles:
            obstacle.x -= dx

        before = len(self.obstacles)
        self.obstacles = [o for o in self.obstacles if o.right >= self.retire_x]
        return before - len(self.obstacles)

    def score_check(self, avatar_x: float) -> int:
        """Flag and count every unscored obstacle whose right edge passed ``avatar_x``."""
        passed = 0
        for obstacle in self.obstacles:
            if not obstacle.scored and obstacle.right < avatar_x:
                obstacle.scored = True
                passed += 1
        return passed
