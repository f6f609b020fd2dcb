"""Configuration for FLAPSTER."""

from flapster.config.settings import (
    AvatarSettings,
    ObstacleSettings,
    Settings,
    TimingSettings,
    WorldSettings,
    get_settings,
)

__all__ = [
    "AvatarSettings",
    "ObstacleSettings",
    "Settings",
    "TimingSettings",
    "WorldSettings",
    "get_settings",
]
