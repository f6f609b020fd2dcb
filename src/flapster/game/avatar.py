"""Avatar physics: gravity, flap impulse, tilt and wing animation."""

from dataclasses import dataclass
import math


@dataclass
class Avatar:
    """
    The player entity.

    ``x`` is fixed while playing; ``y`` is the circle center and is never
    clamped here, collision detection is what ends a flight.
    """
    x: float
    y: float
    vy: float = 0.0
    angle: float = 0.0      # tilt in degrees, positive = nose down
    alive: bool = True
    wing_frame: int = 0
    wing_timer: float = 0.0


def integrate(
    avatar: Avatar,
    gravity: float,
    max_fall_velocity: float,
    frame_factor: float = 1.0,
) -> None:
    """Apply one step of gravity and move the avatar.

    Args:
        avatar: Avatar to update in place
        gravity: Velocity gained per reference frame
        max_fall_velocity: Terminal downward velocity
        frame_factor: Elapsed time in reference frames (dt / frame_ms)
    """
    avatar.vy = min(avatar.vy + gravity * frame_factor, max_fall_velocity)
    avatar.y += avatar.vy * frame_factor


def ease_tilt(
    avatar: Avatar,
    sensitivity: float,
    tilt_up: float,
    tilt_down: float,
    smoothing: float,
) -> None:
    """Ease the tilt toward an angle proportional to velocity.

    The smoothing factor is applied once per tick regardless of dt, so the
    easing is faster at higher frame rates.
    """
    target = max(tilt_up, min(tilt_down, avatar.vy * sensitivity))
    avatar.angle += (target - avatar.angle) * smoothing


def flap(avatar: Avatar, jump_velocity: float, tilt_up: float) -> bool:
    """Set the upward jump velocity and snap the tilt up. Dead avatars ignore it."""
    if not avatar.alive:
        return False
    avatar.vy = jump_velocity
    avatar.angle = tilt_up
    return True


def animate_wings(avatar: Avatar, dt_ms: float, frames: int, frame_ms: float) -> None:
    """Cycle the wing frame every ``frame_ms``."""
    avatar.wing_timer += dt_ms
    if avatar.wing_timer >= frame_ms:
        avatar.wing_frame = (avatar.wing_frame + 1) % frames
        avatar.wing_timer = 0.0


def bob(avatar: Avatar, base_y: float, elapsed_ms: float, amplitude: float, period_ms: float) -> None:
    """Idle hover used on the start screen."""
    avatar.y = base_y + math.sin(elapsed_ms / period_ms) * amplitude
