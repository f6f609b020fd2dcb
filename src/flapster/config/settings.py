"""
Game settings using Pydantic.

Settings are loaded from environment variables with .env file support
(prefix ``FLAPSTER_``, nested fields separated by ``__``, for example
``FLAPSTER_AVATAR__GRAVITY=0.5``). All models are frozen: the simulation
receives them once at construction and never mutates them.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorldSettings(BaseModel):
    """Playfield dimensions."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=400, gt=0)
    height: int = Field(default=600, gt=0)
    ground_height: int = Field(default=80, ge=0)
    ceiling_y: float = 0.0

    @property
    def ground_y(self) -> float:
        """Top of the ground strip."""
        return float(self.height - self.ground_height)


class AvatarSettings(BaseModel):
    """Avatar physics and animation."""

    model_config = ConfigDict(frozen=True)

    x: float = 90.0
    start_y: float = 260.0
    radius: float = Field(default=14.0, gt=0)

    # Velocities are pixels per reference frame
    jump_velocity: float = Field(default=-8.5, lt=0)
    gravity: float = Field(default=0.42, ge=0)
    max_fall_velocity: float = Field(default=12.0, gt=0)

    # Tilt (degrees)
    tilt_up: float = -25.0
    tilt_down: float = 70.0
    tilt_sensitivity: float = 4.0
    tilt_smoothing: float = Field(default=0.18, gt=0, le=1)

    # Wing animation
    wing_frames: int = Field(default=3, ge=1)
    wing_frame_ms: float = Field(default=120.0, gt=0)

    # Idle bob on the start screen
    bob_amplitude: float = 10.0
    bob_period_ms: float = Field(default=400.0, gt=0)


class ObstacleSettings(BaseModel):
    """Obstacle geometry, motion and spawning."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(default=58.0, gt=0)
    gap: float = Field(default=148.0, gt=0)
    speed: float = Field(default=2.6, ge=0)
    spawn_x: float = 420.0
    spawn_interval_ms: float = Field(default=1700.0, gt=0)
    margin: float = Field(default=60.0, ge=0)
    retire_x: float = -20.0          # right edge must pass this to be removed
    spawn_grace_ms: float = Field(default=800.0, ge=0)


class TimingSettings(BaseModel):
    """Frame timing."""

    model_config = ConfigDict(frozen=True)

    frame_ms: float = Field(default=1000.0 / 60.0, gt=0)
    max_dt_ms: float = Field(default=50.0, gt=0)
    restart_debounce_ms: float = Field(default=80.0, ge=0)


class Settings(BaseSettings):
    """Main game settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAPSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    debug: bool = False
    seed: Optional[int] = None

    # Persistence
    best_score_key: str = "flapster_best"
    store_path: Path = Field(default_factory=lambda: Path.home() / ".flapster" / "scores.json")

    # Window
    fps: int = Field(default=60, gt=0)
    window_scale: int = Field(default=1, ge=1)
    window_title: str = "FLAPSTER"

    # Scenery
    star_count: int = Field(default=60, ge=0)

    world: WorldSettings = Field(default_factory=WorldSettings)
    avatar: AvatarSettings = Field(default_factory=AvatarSettings)
    obstacles: ObstacleSettings = Field(default_factory=ObstacleSettings)
    timing: TimingSettings = Field(default_factory=TimingSettings)

    @model_validator(mode="after")
    def _check_geometry(self) -> "Settings":
        ground_y = self.world.ground_y
        if ground_y <= self.world.ceiling_y:
            raise ValueError("ground must lie below the ceiling")
        min_top = self.world.ceiling_y + self.obstacles.margin
        max_top = ground_y - self.obstacles.gap - self.obstacles.margin
        if max_top < min_top:
            raise ValueError(
                f"obstacle gap {self.obstacles.gap} does not fit between margins "
                f"({min_top} > {max_top})"
            )
        if self.avatar.tilt_up > self.avatar.tilt_down:
            raise ValueError("tilt_up must not exceed tilt_down")

        # The tick that starts a run cannot also end it, so the avatar must be
        # clear of ground and ceiling over its whole idle bob plus the first
        # (clamped) frame of the starting flap.
        avatar = self.avatar
        lowest = avatar.start_y + abs(avatar.bob_amplitude) + avatar.radius
        if lowest >= ground_y:
            raise ValueError(
                f"avatar start {avatar.start_y} reaches the ground ({lowest} >= {ground_y})"
            )
        first_rise = abs(avatar.jump_velocity) * self.timing.max_dt_ms / self.timing.frame_ms
        highest = avatar.start_y - abs(avatar.bob_amplitude) - first_rise - avatar.radius
        if highest <= self.world.ceiling_y:
            raise ValueError(
                f"avatar start {avatar.start_y} reaches the ceiling ({highest} <= {self.world.ceiling_y})"
            )
        return self

    @property
    def gap_top_range(self) -> tuple[float, float]:
        """Inclusive bounds for a freshly spawned obstacle's gap_top."""
        return (
            self.world.ceiling_y + self.obstacles.margin,
            self.world.ground_y - self.obstacles.gap - self.obstacles.margin,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
