from __future__ import annotations

import pytest

from flapster.config.settings import Settings, get_settings
from flapster.core.errors import ConfigurationError
from flapster.core.events import EventBus
from flapster.main import build_simulation, load_settings


@pytest.fixture(autouse=True)
def fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_invalid_environment_is_a_configuration_error(monkeypatch) -> None:
    monkeypatch.setenv("FLAPSTER_OBSTACLES__GAP", "5000")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_build_simulation_reads_best_from_disk(tmp_path) -> None:
    path = tmp_path / "scores.json"
    path.write_text('{"flapster_best": "14"}', encoding="utf-8")
    settings = Settings(_env_file=None, store_path=path)

    simulation = build_simulation(settings, EventBus())
    assert simulation.state.best_score == 14
    simulation.stop()
