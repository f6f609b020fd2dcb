"""
Main entry point for FLAPSTER.

Loads settings (environment and .env), sets up logging, builds the
simulation and runs the pygame window.
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from flapster.config.settings import Settings, get_settings
from flapster.core.errors import ConfigurationError
from flapster.core.events import EventBus
from flapster.game.simulation import Simulation
from flapster.storage import JsonFileStore

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure console logging, plus a file log when ``log_file`` is given."""
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def load_settings() -> Settings:
    """Load settings, turning validation failures into a ConfigurationError."""
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def build_simulation(settings: Settings, event_bus: EventBus) -> Simulation:
    """Create the simulation with the on-disk best-score store."""
    store = JsonFileStore(settings.store_path)
    return Simulation(settings, store=store, event_bus=event_bus)


async def run_game(settings: Settings) -> None:
    """Run the desktop version."""
    from flapster.simulator.window import GameWindow

    event_bus = EventBus()
    simulation = build_simulation(settings, event_bus)
    window = GameWindow(settings, simulation, event_bus)
    await window.run()


def main() -> int:
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logging()
        logger.error(str(e))
        return 2

    setup_logging(settings.debug, Path("flapster.log") if settings.debug else None)
    logger.info("Starting FLAPSTER")

    try:
        asyncio.run(run_game(settings))
    except ConfigurationError as e:
        logger.error(f"Could not start the game: {e}")
        return 2
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
