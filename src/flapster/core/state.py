"""
Phase state machine for a FLAPSTER run.

Phases:
    START: Title screen, avatar bobs in place, no obstacles
    PLAYING: Full simulation active
    DEAD: Simulation frozen, waiting for a restart flap

The machine owns the score and the best score. The best score is written to
the key-value store exactly when a run ends with a score above the stored
best.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Optional
import logging

from flapster.storage import KeyValueStore, load_best_score

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Game phases."""
    START = auto()
    PLAYING = auto()
    DEAD = auto()


@dataclass
class GameState:
    """Run-level state exposed to the rest of the game."""
    phase: Phase = Phase.START
    score: int = 0
    best_score: int = 0
    elapsed_ms: float = 0.0
    died_at_ms: Optional[float] = None
    is_new_best: bool = False


Listener = Callable[[Phase, Phase, GameState], None]


class GameStateMachine:
    """
    Manages phase transitions, score and best-score persistence.

    At most one transition is accepted between two ``begin_tick`` calls.
    """

    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        (Phase.START, Phase.PLAYING),    # First flap
        (Phase.PLAYING, Phase.DEAD),     # Collision
        (Phase.DEAD, Phase.PLAYING),     # Restart after debounce
    ]

    def __init__(
        self,
        store: KeyValueStore,
        best_score_key: str = "flapster_best",
        restart_debounce_ms: float = 80.0,
    ) -> None:
        self._store = store
        self._best_score_key = best_score_key
        self.restart_debounce_ms = restart_debounce_ms
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        self._listeners: list[Listener] = []
        self._transitioned_this_tick = False

        self._state = GameState(best_score=load_best_score(store, best_score_key))
        logger.info(f"GameStateMachine initialized, best score {self._state.best_score}")

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def begin_tick(self, elapsed_ms: float) -> None:
        """Start a new tick: re-arm the one-transition guard and record time."""
        self._transitioned_this_tick = False
        self._state.elapsed_ms = elapsed_ms

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if a transition to ``to_phase`` is valid right now."""
        if self._transitioned_this_tick:
            return False
        return (self._state.phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
        """
        Attempt to move to a new phase.

        Returns:
            True if the transition happened
        """
        if not self.can_transition(to_phase):
            logger.debug(
                f"Transition refused: {self._state.phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._state.phase
        self._state.phase = to_phase
        self._transitioned_this_tick = True

        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase, self._state)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # Run lifecycle

    def start(self) -> bool:
        """START -> PLAYING."""
        if not self.can_transition(Phase.PLAYING) or self._state.phase is not Phase.START:
            return False
        self._state.score = 0
        self._state.is_new_best = False
        return self.transition(Phase.PLAYING)

    def add_point(self) -> bool:
        """Add one point. Points only count while PLAYING."""
        if self._state.phase is not Phase.PLAYING:
            return False
        self._state.score += 1
        return True

    def finish_run(self, now_ms: float) -> bool:
        """
        PLAYING -> DEAD, persisting the best score if it was beaten.

        Returns:
            True if the transition happened
        """
        if not self.can_transition(Phase.DEAD):
            return False

        self._state.died_at_ms = now_ms
        score = self._state.score
        if score > self._state.best_score:
            self._state.best_score = score
            self._persist_best(score)
        self._state.is_new_best = score > 0 and score == self._state.best_score
        return self.transition(Phase.DEAD)

    def can_restart(self, now_ms: float) -> bool:
        """A DEAD run may restart once the debounce has elapsed."""
        if self._state.phase is not Phase.DEAD or self._state.died_at_ms is None:
            return False
        return now_ms - self._state.died_at_ms >= self.restart_debounce_ms

    def restart(self, now_ms: float) -> bool:
        """DEAD -> PLAYING with a fresh score."""
        if not self.can_restart(now_ms) or not self.can_transition(Phase.PLAYING):
            return False
        self._state.score = 0
        self._state.died_at_ms = None
        self._state.is_new_best = False
        return self.transition(Phase.PLAYING)

    def _persist_best(self, score: int) -> None:
        """Best-effort write; a failing store never interrupts play."""
        try:
            self._store.set(self._best_score_key, str(score))
            logger.info(f"New best score saved: {score}")
        except Exception as e:
            logger.error(f"Failed to save best score: {e}")
