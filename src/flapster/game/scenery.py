"""Background scenery: twinkling stars, parallax clouds and ground scroll."""

from dataclasses import dataclass
from typing import List
import math
import random


@dataclass
class Star:
    x: float
    y: float
    size: int
    phase: float

    def alpha(self, elapsed_ms: float) -> float:
        """Twinkle brightness in [0, 1]."""
        value = 0.4 + 0.5 * math.sin((elapsed_ms / 800.0 + self.phase) * math.pi * 2)
        return max(0.0, min(1.0, value))


@dataclass
class Cloud:
    x: float
    y: float
    scale: float
    speed: float


def generate_stars(rng: random.Random, count: int, width: float, sky_height: float) -> List[Star]:
    """Scatter stars over the upper 60% of the sky."""
    stars = []
    for _ in range(count):
        stars.append(Star(
            x=rng.random() * width,
            y=rng.random() * (sky_height * 0.6),
            size=2 if rng.random() < 0.3 else 1,
            phase=rng.random(),
        ))
    return stars


def generate_clouds() -> List[Cloud]:
    return [
        Cloud(x=50, y=90, scale=1.1, speed=0.3),
        Cloud(x=200, y=130, scale=0.8, speed=0.5),
        Cloud(x=310, y=80, scale=1.3, speed=0.25),
        Cloud(x=130, y=200, scale=0.7, speed=0.4),
    ]


class Scenery:
    """Decorative state that scrolls with the game but never affects it."""

    CLOUD_WRAP_LEFT = -150.0
    CLOUD_WRAP_OFFSET = 80.0

    def __init__(self, rng: random.Random, width: float, sky_height: float, star_count: int = 60):
        self.width = width
        self.stars = generate_stars(rng, star_count, width, sky_height)
        self.clouds = generate_clouds()
        self.ground_scroll = 0.0

    def drift(self, cloud_speed_scale: float, ground_speed: float, frame_factor: float = 1.0) -> None:
        """Move clouds and the ground texture by one (scaled) frame."""
        for cloud in self.clouds:
            cloud.x -= cloud.speed * cloud_speed_scale * frame_factor
            if cloud.x < self.CLOUD_WRAP_LEFT:
                cloud.x = self.width + self.CLOUD_WRAP_OFFSET
        self.ground_scroll += ground_speed * frame_factor
