"""Read-only view of the simulation handed to presentation layers."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from flapster.core.state import Phase
from flapster.game.avatar import Avatar
from flapster.game.obstacles import Obstacle
from flapster.game.scenery import Cloud, Star


class Medal(Enum):
    BRONZE = 10
    SILVER = 20
    GOLD = 30


def medal_for(score: int) -> Optional[Medal]:
    """Highest medal whose threshold the score reaches."""
    for medal in (Medal.GOLD, Medal.SILVER, Medal.BRONZE):
        if score >= medal.value:
            return medal
    return None


@dataclass(frozen=True)
class Snapshot:
    """Copy of everything a renderer needs for one frame."""
    phase: Phase
    avatar: Avatar
    obstacles: Tuple[Obstacle, ...]
    score: int
    best_score: int
    elapsed_ms: float
    frame: int
    is_new_best: bool = False
    medal: Optional[Medal] = None
    stars: Tuple[Star, ...] = ()
    clouds: Tuple[Cloud, ...] = ()
    ground_scroll: float = 0.0
