"""
SkiFree desktop window using pygame.

Hosts a Simulation: turns key presses into input flags, ticks once per
frame, pushes drained events to the narrator and blits the rendered frame.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from ..ai.narrator import Narrator
from ..core.events import EventBus, EventType, Event
from ..core.state import GameState
from ..graphics.renderer import SlopeRenderer, to_surface_array
from ..sim.clock import Simulation
from ..sim.inputs import InputState
from ..sim.leaderboard import Leaderboard
from .scores import save_leaderboard

logger = logging.getLogger(__name__)

# pygame key -> name in KEY_BINDINGS
PYGAME_KEYS = {
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_UP: "ArrowUp",
    pygame.K_SPACE: "Space",
}


@dataclass
class WindowConfig:
    """Window configuration."""
    width: int = 800
    height: int = 600
    title: str = "SkiFree"
    fps: int = 60
    scale: float = 1.0

    # Colors
    text_color: tuple[int, int, int] = (30, 40, 60)
    accent_color: tuple[int, int, int] = (200, 40, 40)
    panel_color: tuple[int, int, int] = (255, 255, 255)


class SkiFreeWindow:
    """
    The game window.

    Keyboard Mapping:
        ARROWS: Steer, accelerate (down) and jump (up)
        SPACE: Throw coffee
        P: Pause / resume
        ENTER or R: Start or restart a run
        ESC: Exit
    """

    def __init__(
        self,
        simulation: Simulation,
        narrator: Narrator,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
        leaderboard: Leaderboard | None = None,
        leaderboard_path: Path | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.simulation = simulation
        self.narrator = narrator
        self.event_bus = event_bus or narrator.bus
        self.leaderboard = leaderboard or Leaderboard()
        self.leaderboard_path = leaderboard_path

        self.inputs = InputState()
        self.renderer = SlopeRenderer(self.config.width, self.config.height)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._running = False

        # Name entry after a qualifying run
        self._entering_name = False
        self._name = ""
        self._submitted_run = -1

        # Bottom line of the HUD
        self.commentary: str | None = None

        self.simulation.state_machine.add_listener(self._on_state_change)
        self.event_bus.subscribe(EventType.RUN_STARTED, self._on_run_started)
        self.event_bus.subscribe(EventType.RUN_ENDED, self._on_run_ended)
        self.event_bus.subscribe(EventType.COMMENTARY, self._on_commentary)
        logger.info("SkiFreeWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        size = (
            int(self.config.width * self.config.scale),
            int(self.config.height * self.config.scale),
        )
        self._screen = pygame.display.set_mode(size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 22)
        self._big_font = pygame.font.SysFont(None, 48)

        logger.info(f"Pygame initialized: {size[0]}x{size[1]}")

    def _on_state_change(self, old: GameState, new: GameState, context) -> None:
        # Fires mid-tick; handled on the next process_queue
        if new == GameState.PLAYING and old in (GameState.MENU, GameState.CRASHED, GameState.EATEN):
            self.event_bus.queue_event(Event(EventType.RUN_STARTED, data={"run": context.runs}))
        elif new in (GameState.CRASHED, GameState.EATEN) and old == GameState.PLAYING:
            self.event_bus.queue_event(Event(
                EventType.RUN_ENDED,
                data={"run": context.runs, "score": context.score, "cause": context.cause},
                source="state_machine",
            ))

    def _on_run_started(self, event: Event) -> None:
        self.commentary = None
        self._entering_name = False

    def _on_run_ended(self, event: Event) -> None:
        run, score = event.data["run"], event.data["score"]
        logger.info(f"Run {run} ended at {score}m ({event.data['cause']})")
        if run != self._submitted_run and self.leaderboard.qualifies(score):
            self._entering_name = True
            self._name = ""

    def _on_commentary(self, event: Event) -> None:
        self.commentary = event.data["text"]

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                self._handle_keyup(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE:
            self._running = False
            return

        if self._entering_name:
            self._handle_name_key(event)
            return

        if key in PYGAME_KEYS:
            self.inputs.set_key(PYGAME_KEYS[key], True)
        elif key == pygame.K_p:
            self.simulation.toggle_pause()
        elif key in (pygame.K_RETURN, pygame.K_r):
            if self.simulation.state != GameState.PLAYING:
                self._restart()

    def _handle_keyup(self, event: pygame.event.Event) -> None:
        """Handle key release."""
        if event.key in PYGAME_KEYS:
            self.inputs.set_key(PYGAME_KEYS[event.key], False)

    def _handle_name_key(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_RETURN:
            self._submit_score()
        elif event.key == pygame.K_BACKSPACE:
            self._name = self._name[:-1]
        elif event.unicode and event.unicode.isprintable() and len(self._name) < 12:
            self._name += event.unicode.upper()

    def _submit_score(self) -> None:
        context = self.simulation.state_machine.context
        self.leaderboard.submit(self._name, context.score)
        self._submitted_run = context.runs
        self._entering_name = False
        if self.leaderboard_path is not None:
            save_leaderboard(self.leaderboard, self.leaderboard_path)

    def _restart(self) -> None:
        self.inputs.release_all()
        self.narrator.clear()
        self.simulation.reset()

    def _render(self) -> None:
        """Render the slope and the HUD."""
        if not self._screen:
            return

        snapshot = self.simulation.snapshot()
        frame = self.renderer.render(snapshot)
        surface = pygame.surfarray.make_surface(to_surface_array(frame))
        if self.config.scale != 1.0:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        self._render_hud(snapshot)
        pygame.display.flip()

    def _blit_text(self, text: str, pos: tuple[int, int], big: bool = False, color=None) -> None:
        font = self._big_font if big else self._font
        if not font:
            return
        surf = font.render(text, True, color or self.config.text_color)
        self._screen.blit(surf, pos)

    def _render_hud(self, snapshot) -> None:
        player = snapshot.player
        self._blit_text(f"DIST {snapshot.score}m", (10, 10))
        self._blit_text(f"SPEED {player.speed:.1f}", (10, 30))
        self._blit_text(f"BEST {max(snapshot.best_score, self.leaderboard.best)}m", (10, 50))
        if player.ammo:
            self._blit_text(f"COFFEE x{player.ammo}", (10, 70))
        if player.is_powered_up:
            self._blit_text(f"POWER {player.powerup_timer // self.config.fps + 1}s", (10, 90), color=(200, 40, 200))

        if self.commentary:
            self._blit_text(self.commentary, (10, self._screen.get_height() - 30))

        center_x = self._screen.get_width() // 2 - 140
        center_y = self._screen.get_height() // 2
        state = snapshot.state
        if state == GameState.MENU:
            self._blit_text("SKIFREE", (center_x + 60, center_y - 60), big=True, color=self.config.accent_color)
            self._blit_text("ENTER to start", (center_x + 70, center_y))
            self._render_leaderboard(center_x + 50, center_y + 30)
        elif state == GameState.PAUSED:
            self._blit_text("PAUSED", (center_x + 70, center_y - 20), big=True)
        elif state in (GameState.CRASHED, GameState.EATEN):
            title = "EATEN!" if state == GameState.EATEN else "CRASHED!"
            self._blit_text(title, (center_x + 60, center_y - 60), big=True, color=self.config.accent_color)
            if self._entering_name:
                self._blit_text(f"NEW HIGH SCORE! NAME: {self._name}_", (center_x, center_y))
            else:
                self._blit_text("ENTER to ski again", (center_x + 50, center_y))
                self._render_leaderboard(center_x + 50, center_y + 30)

    def _render_leaderboard(self, x: int, y: int) -> None:
        for i, entry in enumerate(self.leaderboard.entries[:5]):
            self._blit_text(f"{i + 1}. {entry.name:<12} {entry.score}m", (x, y + i * 20))

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Window loop started")

        while self._running:
            self._handle_events()

            # A paused tick is a no-op, but reset() may still have queued START
            self.simulation.tick(self.inputs)
            self.narrator.pump(self.simulation)

            await self.event_bus.process_queue()

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            # Let commentary tasks run
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False
