from __future__ import annotations

import pytest
from pydantic import ValidationError

from flapster.config.settings import ObstacleSettings, Settings, WorldSettings


def test_defaults_match_the_arcade_tuning() -> None:
    settings = Settings(_env_file=None)
    assert settings.world.ground_y == 520
    assert settings.avatar.gravity == 0.42
    assert settings.avatar.jump_velocity == -8.5
    assert settings.obstacles.gap == 148
    assert settings.obstacles.spawn_interval_ms == 1700
    assert settings.timing.max_dt_ms == 50
    assert settings.gap_top_range == (60, 312)


def test_settings_are_frozen() -> None:
    settings = Settings(_env_file=None)
    with pytest.raises(ValidationError):
        settings.debug = True
    with pytest.raises(ValidationError):
        settings.avatar.gravity = 1.0


def test_gap_that_cannot_fit_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, obstacles=ObstacleSettings(gap=450))


def test_ground_above_ceiling_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, world=WorldSettings(height=100, ground_height=100))


def test_upward_gravity_jump_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, avatar={"jump_velocity": 3.0})


@pytest.mark.parametrize(
    "avatar",
    [
        {"start_y": 515.0, "bob_amplitude": 0.0},
        {"start_y": 500.0, "bob_amplitude": 10.0},
        {"start_y": 30.0, "bob_amplitude": 0.0},
        {"start_y": 45.0, "bob_amplitude": 10.0},
    ],
)
def test_start_inside_ground_or_ceiling_is_rejected(avatar) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, avatar=avatar)


def test_start_just_clear_of_ground_and_ceiling_is_accepted() -> None:
    # 495 + 10 + 14 = 519 < 520; 65 - 10 - 8.5 * 3 - 14 = 15.5 > 0
    assert Settings(_env_file=None, avatar={"start_y": 495.0}).avatar.start_y == 495.0
    assert Settings(_env_file=None, avatar={"start_y": 65.0}).avatar.start_y == 65.0


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("FLAPSTER_SEED", "99")
    monkeypatch.setenv("FLAPSTER_AVATAR__GRAVITY", "0.5")
    settings = Settings(_env_file=None)
    assert settings.seed == 99
    assert settings.avatar.gravity == 0.5
    assert settings.avatar.jump_velocity == -8.5
