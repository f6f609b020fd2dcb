"""
Desktop window using pygame.

Drives the simulation once per display frame, draws the scene through the
numpy renderer and overlays the HUD with pygame fonts.
"""

import asyncio
import logging
from dataclasses import dataclass

import pygame

from flapster.config.settings import Settings
from flapster.core.events import EventBus, EventType, Event
from flapster.core.state import Phase
from flapster.game.simulation import Simulation
from flapster.game.snapshot import Snapshot
from flapster.graphics.renderer import SceneRenderer, to_surface_array
from flapster.simulator.input import FlapButton

logger = logging.getLogger(__name__)


@dataclass
class WindowStyle:
    """HUD colors."""
    text_color: tuple[int, int, int] = (255, 255, 255)
    shadow_color: tuple[int, int, int] = (0, 0, 0)
    title_color: tuple[int, int, int] = (255, 215, 0)
    hint_color: tuple[int, int, int] = (200, 160, 232)
    danger_color: tuple[int, int, int] = (255, 68, 68)
    panel_color: tuple[int, int, int] = (10, 0, 20)
    debug_color: tuple[int, int, int] = (180, 220, 255)


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP / mouse: Flap
        D: Toggle debug overlay
        L: Toggle log viewer
        ESC / Q: Exit
    """

    def __init__(
        self,
        settings: Settings,
        simulation: Simulation,
        event_bus: EventBus,
        style: WindowStyle | None = None,
    ) -> None:
        self.settings = settings
        self.simulation = simulation
        self.event_bus = event_bus
        self.style = style or WindowStyle()
        self.renderer = SceneRenderer(settings)
        self.flap_button = FlapButton(event_bus)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._running = False
        self._show_debug = settings.debug
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 12
        self._log_handler: logging.Handler | None = None

        self._unsubscribe_quit = event_bus.subscribe(EventType.QUIT, lambda _event: self.stop())
        self._setup_log_capture()

    def _setup_log_capture(self) -> None:
        """Mirror log records into the on-screen log viewer."""
        class WindowLogHandler(logging.Handler):
            def __init__(self, window: 'GameWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                self.window._log_buffer.append(self.format(record))
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        handler = WindowLogHandler(self)
        handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(handler)
        self._log_handler = handler

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.settings.window_title)

        scale = self.settings.window_scale
        size = (self.settings.world.width * scale, self.settings.world.height * scale)
        self._screen = pygame.display.set_mode(size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 28 * scale)
        self._big_font = pygame.font.SysFont(None, 56 * scale)
        self._small_font = pygame.font.SysFont(None, 18 * scale)

        logger.info(f"Pygame initialized: {size[0]}x{size[1]}")

    # Input

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.event_bus.queue_event(Event(EventType.QUIT, source="window"))
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)
            elif event.type == pygame.KEYUP:
                if event.key in (pygame.K_SPACE, pygame.K_UP):
                    self.flap_button.release()
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.flap_button.press()
            elif event.type == pygame.MOUSEBUTTONUP:
                self.flap_button.release()

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.event_bus.queue_event(Event(EventType.QUIT, source="keyboard"))
        elif key in (pygame.K_SPACE, pygame.K_UP):
            self.flap_button.press()
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log

    # Rendering

    def _render(self, snapshot: Snapshot) -> None:
        if not self._screen:
            return

        buffer = self.renderer.render(snapshot)
        surface = pygame.surfarray.make_surface(to_surface_array(buffer))
        if self.settings.window_scale != 1:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        if snapshot.phase is Phase.START:
            self._render_start_screen(snapshot)
        elif snapshot.phase is Phase.PLAYING:
            self._render_hud(snapshot)
        else:
            self._render_game_over(snapshot)

        if self._show_debug:
            self._render_debug_panel(snapshot)
        if self._show_log:
            self._render_log_panel()

        pygame.display.flip()

    def _blit_centered(self, font: pygame.font.Font, text: str, y: int, color, shadow: bool = False) -> None:
        cx = self._screen.get_width() // 2
        if shadow:
            surf = font.render(text, True, self.style.shadow_color)
            self._screen.blit(surf, (cx - surf.get_width() // 2 + 3, y + 3))
        surf = font.render(text, True, color)
        self._screen.blit(surf, (cx - surf.get_width() // 2, y))

    def _render_hud(self, snapshot: Snapshot) -> None:
        scale = self.settings.window_scale
        self._blit_centered(self._big_font, str(snapshot.score), 40 * scale, self.style.text_color, shadow=True)

    def _render_start_screen(self, snapshot: Snapshot) -> None:
        scale = self.settings.window_scale
        self._blit_centered(self._big_font, "FLAPSTER", 160 * scale, self.style.title_color, shadow=True)
        self._blit_centered(self._font, "PRESS SPACE OR CLICK", 226 * scale, self.style.hint_color)
        if snapshot.best_score > 0:
            self._blit_centered(self._font, f"BEST: {snapshot.best_score}", 262 * scale, self.style.title_color)

    def _render_game_over(self, snapshot: Snapshot) -> None:
        scale = self.settings.window_scale
        self._blit_centered(self._big_font, "GAME OVER", 160 * scale, self.style.danger_color, shadow=True)
        self._blit_centered(self._font, "SCORE", 215 * scale, self.style.text_color)
        self._blit_centered(self._big_font, str(snapshot.score), 240 * scale, self.style.title_color)

        if snapshot.is_new_best:
            best = f"NEW BEST: {snapshot.best_score}"
        else:
            best = f"BEST: {snapshot.best_score}"
        self._blit_centered(self._font, best, 290 * scale, self.style.title_color)

        if snapshot.medal is not None:
            self._blit_centered(self._font, f"{snapshot.medal.name} MEDAL", 322 * scale, self.style.title_color)
        self._blit_centered(self._font, "PRESS SPACE TO RETRY", 360 * scale, self.style.text_color)

    def _render_debug_panel(self, snapshot: Snapshot) -> None:
        avatar = snapshot.avatar
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {snapshot.frame}",
            f"Phase: {snapshot.phase.name}",
            f"y={avatar.y:.1f} vy={avatar.vy:.2f} tilt={avatar.angle:.1f}",
            f"Obstacles: {len(snapshot.obstacles)}",
        ]
        y = 8
        for line in lines:
            self._screen.blit(self._small_font.render(line, True, self.style.debug_color), (8, y))
            y += self._small_font.get_linesize()

    def _render_log_panel(self) -> None:
        line_h = self._small_font.get_linesize()
        lines = self._log_buffer[-self._max_log_lines:]
        height = line_h * len(lines) + 8
        panel = pygame.Surface((self._screen.get_width(), height), pygame.SRCALPHA)
        panel.fill((*self.style.panel_color, 200))
        top = self._screen.get_height() - height
        self._screen.blit(panel, (0, top))
        for i, line in enumerate(lines):
            surf = self._small_font.render(line[:80], True, self.style.debug_color)
            self._screen.blit(surf, (6, top + 4 + i * line_h))

    # Loop

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        try:
            while self._running:
                self._handle_events()
                await self.event_bus.process_queue()
                if not self._running:
                    break

                snapshot = self.simulation.tick(self.simulation.clock.now())
                self._render(snapshot)

                if self._clock:
                    self._clock.tick(self.settings.fps)

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        self.simulation.stop()
        self._unsubscribe_quit()
        if self._log_handler is not None:
            logging.getLogger().removeHandler(self._log_handler)
            self._log_handler = None
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
