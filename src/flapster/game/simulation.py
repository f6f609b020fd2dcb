"""
Simulation driver.

One ``tick`` runs the whole frame in a fixed order:

    advance clock -> apply queued flaps -> avatar physics ->
    obstacles (spawn, move, retire, score) -> collision -> death

All state lives on the ``Simulation`` instance and is only mutated inside
``tick``; flap requests made between ticks are queued.
"""

from dataclasses import replace
from typing import Optional
import logging
import random

from flapster.config.settings import Settings
from flapster.core.clock import Clock, MonotonicClock, Ticker
from flapster.core.events import Event, EventBus, EventType
from flapster.core.state import GameState, GameStateMachine, Phase
from flapster.game import avatar as physics
from flapster.game.avatar import Avatar
from flapster.game.collision import collides
from flapster.game.obstacles import ObstacleManager
from flapster.game.scenery import Scenery
from flapster.game.snapshot import Snapshot, medal_for
from flapster.storage import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)

# Scenery speeds on the start screen (clouds relative, ground absolute)
IDLE_CLOUD_SPEED_SCALE = 0.4
IDLE_GROUND_SPEED = 0.6


class Simulation:
    """Owns and advances the complete game state.

    Args:
        settings: Frozen game constants
        store: Key-value store for the best score
        clock: Timestamp source; only read once, to anchor the first tick
        rng: Random source for gap placement and scenery (seeded from
            ``settings.seed`` when omitted)
        event_bus: Optional bus; FLAP events on it are queued as flaps and
            gameplay events are published to it
    """

    def __init__(
        self,
        settings: Settings,
        store: Optional[KeyValueStore] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings
        self.clock = clock or MonotonicClock()
        self.rng = rng or random.Random(settings.seed)
        self.event_bus = event_bus

        self.ticker = Ticker(self.clock.now(), settings.timing.max_dt_ms)
        self.machine = GameStateMachine(
            store if store is not None else MemoryStore(),
            best_score_key=settings.best_score_key,
            restart_debounce_ms=settings.timing.restart_debounce_ms,
        )
        self.machine.add_listener(self._on_phase_changed)

        min_top, max_top = settings.gap_top_range
        cfg = settings.obstacles
        self.obstacles = ObstacleManager(
            self.rng,
            width=cfg.width,
            gap=cfg.gap,
            speed=cfg.speed,
            spawn_x=cfg.spawn_x,
            spawn_interval_ms=cfg.spawn_interval_ms,
            min_gap_top=min_top,
            max_gap_top=max_top,
            retire_x=cfg.retire_x,
        )
        self.scenery = Scenery(
            self.rng,
            width=settings.world.width,
            sky_height=settings.world.ground_y,
            star_count=settings.star_count,
        )
        self.avatar = self._new_avatar()

        self._pending_flaps = 0
        self._running = True
        self._unsubscribe = None
        if event_bus is not None:
            self._unsubscribe = event_bus.subscribe(EventType.FLAP, self._on_flap_event)

        logger.info(f"Simulation created (seed={settings.seed})")

    # Public API

    @property
    def state(self) -> GameState:
        return self.machine.state

    @property
    def phase(self) -> Phase:
        return self.machine.phase

    @property
    def is_running(self) -> bool:
        return self._running

    def flap(self) -> None:
        """Queue a flap; it takes effect at the start of the next tick."""
        self._pending_flaps += 1

    def stop(self) -> None:
        """Stop the driver. Later ticks leave the state untouched."""
        if not self._running:
            return
        self._running = False
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        logger.info("Simulation stopped")

    def tick(self, timestamp_ms: float) -> Snapshot:
        """Advance the game by one frame and return the resulting snapshot."""
        if not self._running:
            return self.snapshot()

        dt = self.ticker.advance(timestamp_ms)
        now = self.ticker.sim_time_ms
        frame_factor = dt / self.settings.timing.frame_ms
        self.machine.begin_tick(now)

        self._apply_flaps(now)

        phase = self.machine.phase
        if phase is Phase.START:
            self._update_idle(dt, now, frame_factor)
        elif phase is Phase.PLAYING:
            self._update_avatar(dt, frame_factor)
            self._update_obstacles(now, frame_factor)
            self._check_collision(now)

        return self.snapshot()

    def snapshot(self) -> Snapshot:
        state = self.machine.state
        return Snapshot(
            phase=state.phase,
            avatar=replace(self.avatar),
            obstacles=tuple(replace(o) for o in self.obstacles.obstacles),
            score=state.score,
            best_score=state.best_score,
            elapsed_ms=self.ticker.sim_time_ms,
            frame=self.ticker.frame,
            is_new_best=state.is_new_best,
            medal=medal_for(state.score) if state.phase is Phase.DEAD else None,
            stars=tuple(replace(s) for s in self.scenery.stars),
            clouds=tuple(replace(c) for c in self.scenery.clouds),
            ground_scroll=self.scenery.ground_scroll,
        )

    # Tick stages

    def _apply_flaps(self, now: float) -> None:
        pending, self._pending_flaps = self._pending_flaps, 0
        for _ in range(pending):
            phase = self.machine.phase
            if phase is Phase.START:
                if self.machine.start():
                    self._arm_run(now)
            elif phase is Phase.PLAYING:
                physics.flap(self.avatar, self.settings.avatar.jump_velocity, self.settings.avatar.tilt_up)
            elif phase is Phase.DEAD:
                if self.machine.restart(now):
                    self.avatar = self._new_avatar()
                    self._arm_run(now)
                else:
                    logger.debug("Flap ignored while restart is debounced")

    def _update_idle(self, dt: float, now: float, frame_factor: float) -> None:
        cfg = self.settings.avatar
        physics.bob(self.avatar, cfg.start_y, now, cfg.bob_amplitude, cfg.bob_period_ms)
        physics.animate_wings(self.avatar, dt, cfg.wing_frames, cfg.wing_frame_ms)
        self.scenery.drift(IDLE_CLOUD_SPEED_SCALE, IDLE_GROUND_SPEED, frame_factor)

    def _update_avatar(self, dt: float, frame_factor: float) -> None:
        cfg = self.settings.avatar
        physics.integrate(self.avatar, cfg.gravity, cfg.max_fall_velocity, frame_factor)
        physics.ease_tilt(self.avatar, cfg.tilt_sensitivity, cfg.tilt_up, cfg.tilt_down, cfg.tilt_smoothing)
        physics.animate_wings(self.avatar, dt, cfg.wing_frames, cfg.wing_frame_ms)
        self.scenery.drift(1.0, self.settings.obstacles.speed, frame_factor)

    def _update_obstacles(self, now: float, frame_factor: float) -> None:
        spawned = self.obstacles.maybe_spawn(now)
        if spawned is not None:
            self._emit(EventType.OBSTACLE_SPAWNED, gap_top=spawned.gap_top)

        self.obstacles.advance(frame_factor)

        for _ in range(self.obstacles.score_check(self.avatar.x)):
            if self.machine.add_point():
                self._emit(EventType.SCORED, score=self.machine.state.score)

    def _check_collision(self, now: float) -> None:
        world = self.settings.world
        hit = collides(
            (self.avatar.x, self.avatar.y),
            self.settings.avatar.radius,
            self.obstacles.obstacles,
            world.ground_y,
            world.ceiling_y,
        )
        if hit:
            self._die(now)

    def _die(self, now: float) -> None:
        previous_best = self.machine.state.best_score
        if not self.machine.can_transition(Phase.DEAD):
            return
        self.avatar.alive = False
        self.machine.finish_run(now)

        state = self.machine.state
        self._emit(EventType.DIED, score=state.score, best_score=state.best_score)
        if state.best_score > previous_best:
            self._emit(EventType.NEW_BEST, best_score=state.best_score)

    # Helpers

    def _new_avatar(self) -> Avatar:
        return Avatar(x=self.settings.avatar.x, y=self.settings.avatar.start_y)

    def _arm_run(self, now: float) -> None:
        """Initial flap and spawn grace period for a fresh run."""
        cfg = self.settings.avatar
        physics.flap(self.avatar, cfg.jump_velocity, cfg.tilt_up)
        self.obstacles.reset(now, self.settings.obstacles.spawn_grace_ms)

    def _on_flap_event(self, event: Event) -> None:
        self.flap()

    def _on_phase_changed(self, old: Phase, new: Phase, state: GameState) -> None:
        self._emit(EventType.PHASE_CHANGED, old=old.name, new=new.name, score=state.score)

    def _emit(self, event_type: EventType, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data, source="simulation"))
