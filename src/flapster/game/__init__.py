"""Simulation core: avatar physics, obstacles, collision and the driver."""

from flapster.game.avatar import Avatar
from flapster.game.collision import circle_hits_rect, collides
from flapster.game.obstacles import Obstacle, ObstacleManager
from flapster.game.simulation import Simulation
from flapster.game.snapshot import Medal, Snapshot, medal_for

__all__ = [
    "Avatar",
    "circle_hits_rect",
    "collides",
    "Obstacle",
    "ObstacleManager",
    "Simulation",
    "Medal",
    "Snapshot",
    "medal_for",
]
