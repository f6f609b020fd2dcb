"""Scene renderer: draws a simulation snapshot into an RGB buffer.

Only reads the snapshot. Text (score, titles) is left to the window, which
has real fonts.
"""

import math

import numpy as np

from flapster.config.settings import Settings
from flapster.core.state import Phase
from flapster.game.snapshot import Snapshot
from flapster.graphics.primitives import (
    Buffer, blend_rect, draw_circle, draw_rect, new_buffer, vertical_gradient,
)

SKY_STOPS = [
    (0.0, (26, 5, 51)),
    (0.4, (61, 13, 107)),
    (0.75, (194, 65, 12)),
    (1.0, (255, 154, 60)),
]
STAR_COLOR = (255, 255, 220)
MOON_COLOR = (255, 248, 220)
CLOUD_COLOR = (255, 230, 200)
PIPE_DARK = (30, 107, 30)
PIPE_MID = (46, 139, 46)
PIPE_LIGHT = (61, 175, 61)
PIPE_SHADOW = (21, 85, 21)
PIPE_CAP_H = 22
PIPE_CAP_OVERHANG = 6
DIRT = (139, 94, 60)
DIRT_MID = (160, 113, 61)
DIRT_TILE = (122, 78, 46)
GRASS = (61, 175, 61)
GRASS_LIGHT = (92, 214, 92)
BIRD_BODY = (255, 215, 0)
BIRD_WING = (255, 149, 0)
BIRD_EYE = (255, 255, 255)
BIRD_PUPIL = (26, 5, 51)
BIRD_BEAK = (255, 107, 0)
DEAD_SHADE = (0, 0, 0)

# Cloud puffs: (dx, dy, radius) before scaling
CLOUD_PUFFS = [(0, 0, 28), (22, -10, 20), (42, 0, 24), (62, 4, 18), (-18, 4, 18)]
GROUND_TILE_W = 40


class SceneRenderer:
    """Draws a :class:`Snapshot` into a (height, width, 3) uint8 buffer."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.width = settings.world.width
        self.height = settings.world.height
        self.ground_y = int(settings.world.ground_y)
        self.buffer = new_buffer(self.width, self.height)

    def render(self, snapshot: Snapshot) -> Buffer:
        """Draw one frame and return the internal buffer."""
        buf = self.buffer
        self._draw_sky(buf, snapshot)
        for obstacle in snapshot.obstacles:
            self._draw_obstacle(buf, int(obstacle.x), int(obstacle.gap_top), int(obstacle.gap_bottom),
                                int(obstacle.width))
        self._draw_ground(buf, snapshot.ground_scroll)
        self._draw_avatar(buf, snapshot)

        if snapshot.phase is Phase.DEAD:
            blend_rect(buf, 0, 0, self.width, self.height, DEAD_SHADE, 0.45)
        return buf

    def _draw_sky(self, buf: Buffer, snapshot: Snapshot) -> None:
        vertical_gradient(buf, 0, self.ground_y, SKY_STOPS)

        for star in snapshot.stars:
            alpha = star.alpha(snapshot.elapsed_ms)
            blend_rect(buf, int(star.x), int(star.y), star.size, star.size, STAR_COLOR, alpha)

        draw_circle(buf, 340, 60, 26, MOON_COLOR)

        for cloud in snapshot.clouds:
            for dx, dy, r in CLOUD_PUFFS:
                draw_circle(
                    buf,
                    int(cloud.x + dx * cloud.scale),
                    int(cloud.y + dy * cloud.scale),
                    max(1, int(r * cloud.scale)),
                    CLOUD_COLOR,
                    alpha=0.18,
                )

    def _draw_obstacle(self, buf: Buffer, x: int, gap_top: int, gap_bottom: int, width: int) -> None:
        self._draw_pipe(buf, x, 0, gap_top, width, cap_at_bottom=True)
        self._draw_pipe(buf, x, gap_bottom, self.ground_y - gap_bottom, width, cap_at_bottom=False)

    def _draw_pipe(self, buf: Buffer, x: int, y: int, height: int, width: int, cap_at_bottom: bool) -> None:
        if height <= 0:
            return
        draw_rect(buf, x, y, width, height, PIPE_DARK)
        draw_rect(buf, x + 5, y, width - 10, height, PIPE_MID)
        draw_rect(buf, x + 5, y, 8, height, PIPE_LIGHT)
        draw_rect(buf, x + width - 8, y, 8, height, PIPE_SHADOW)

        cap_y = y + height - PIPE_CAP_H if cap_at_bottom else y
        cap_w = width + PIPE_CAP_OVERHANG * 2
        draw_rect(buf, x - PIPE_CAP_OVERHANG, cap_y, cap_w, PIPE_CAP_H, PIPE_DARK)
        draw_rect(buf, x - PIPE_CAP_OVERHANG + 4, cap_y + 3, cap_w - 8, PIPE_CAP_H - 6, PIPE_MID)

    def _draw_ground(self, buf: Buffer, scroll: float) -> None:
        gy = self.ground_y
        gh = self.height - gy
        draw_rect(buf, 0, gy, self.width, gh, DIRT)
        draw_rect(buf, 0, gy + 8, self.width, gh - 8, DIRT_MID)
        draw_rect(buf, 0, gy, self.width, 14, GRASS)
        draw_rect(buf, 0, gy, self.width, 5, GRASS_LIGHT)

        offset = int(scroll) % GROUND_TILE_W
        for tx in range(-offset, self.width, GROUND_TILE_W):
            draw_rect(buf, tx + 8, gy + 22, 24, 6, DIRT_TILE)
            draw_rect(buf, tx + 4, gy + 38, 18, 5, DIRT_TILE)
            draw_rect(buf, tx + 20, gy + 52, 14, 4, DIRT_TILE)

    def _draw_avatar(self, buf: Buffer, snapshot: Snapshot) -> None:
        avatar = snapshot.avatar
        cx, cy = int(avatar.x), int(avatar.y)
        radius = int(self.settings.avatar.radius)

        # Rotate the face features with the tilt
        angle = math.radians(avatar.angle)
        cos_a, sin_a = math.cos(angle), math.sin(angle)

        def rotated(dx: float, dy: float) -> tuple[int, int]:
            return int(cx + dx * cos_a - dy * sin_a), int(cy + dx * sin_a + dy * cos_a)

        wing_dy = (4, 0, -6)[avatar.wing_frame % 3]
        draw_circle(buf, *rotated(-4, wing_dy), 7, BIRD_WING)
        draw_circle(buf, cx, cy, radius, BIRD_BODY)
        draw_circle(buf, *rotated(8, -4), 5, BIRD_EYE)
        draw_circle(buf, *rotated(9, -4), 2, BIRD_PUPIL)
        draw_circle(buf, *rotated(radius + 2, 2), 3, BIRD_BEAK)


def to_surface_array(buffer: Buffer) -> np.ndarray:
    """(H, W, 3) buffer as the (W, H, 3) layout pygame.surfarray expects."""
    return buffer.swapaxes(0, 1)
