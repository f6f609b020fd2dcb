"""
Circle versus world collision.

The avatar is a circle; every obstacle is two axis-aligned rectangles, one
hanging from the ceiling down to the gap and one standing on the ground up
from the gap. Ground and ceiling contact are inclusive (touching counts),
obstacle contact is strict (grazing at exactly the radius does not).
"""

from typing import Iterable, Tuple

from flapster.game.obstacles import Obstacle


def circle_hits_rect(
    cx: float,
    cy: float,
    radius: float,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> bool:
    """True if the circle overlaps the rectangle.

    Uses the point of the rectangle closest to the circle center.
    """
    near_x = max(left, min(cx, right))
    near_y = max(top, min(cy, bottom))
    dx = cx - near_x
    dy = cy - near_y
    return dx * dx + dy * dy < radius * radius


def collides(
    center: Tuple[float, float],
    radius: float,
    obstacles: Iterable[Obstacle],
    ground_y: float,
    ceiling_y: float,
) -> bool:
    """Check the avatar against ground, ceiling and every obstacle.

    The first hit short-circuits the rest.
    """
    cx, cy = center

    if cy + radius >= ground_y:
        return True
    if cy - radius <= ceiling_y:
        return True

    for obstacle in obstacles:
        if circle_hits_rect(cx, cy, radius, obstacle.x, ceiling_y, obstacle.right, obstacle.gap_top):
            return True
        if circle_hits_rect(cx, cy, radius, obstacle.x, obstacle.gap_bottom, obstacle.right, ground_y):
            return True

    return False
