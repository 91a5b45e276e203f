"""The simulation clock: one fixed tick per display frame.

Tick order is fixed:

    1. pause / menu check
    2. player input and physics
    3. culling, projectiles, world generation
    4. Yeti despawn, spawn and update
    5. collision resolution
    6. score and high score
    7. frame counter

The presentation layer only ever sees ``snapshot()``, a frozen copy.
Anything worth announcing goes onto an outbound event queue that the host
drains with ``drain_events()``; the clock never waits on anyone.
"""

import copy
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from skifree.core.state import GameState, StateMachine
from skifree.sim.collision import Contact, CollisionResolver
from skifree.sim.entities import (
    Entity,
    EventTag,
    GameEvent,
    GroundFeature,
    Player,
    PlayerState,
    Projectile,
    Yeti,
)
from skifree.sim.inputs import InputState
from skifree.sim.player import PlayerController
from skifree.sim.projectiles import advance_projectiles
from skifree.sim.store import EntityStore
from skifree.sim.tuning import DEFAULT_TUNING, Tuning
from skifree.sim.world import WorldGenerator
from skifree.sim.yeti import YetiAI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of one tick, handed to the presentation layer."""

    player: Player
    entities: Tuple[Entity, ...]
    features: Tuple[GroundFeature, ...]
    projectiles: Tuple[Projectile, ...]
    yeti: Optional[Yeti]
    score: int
    best_score: int
    frame: int
    state: GameState
    events: Tuple[GameEvent, ...] = field(default_factory=tuple)


class Simulation:
    """Owns every piece of mutable game state for a session."""

    def __init__(
        self,
        tuning: Tuning = DEFAULT_TUNING,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        state_machine: Optional[StateMachine] = None,
        best_score: int = 0,
    ) -> None:
        self.tuning = tuning
        self.rng = rng or random.Random(seed)
        self.state_machine = state_machine or StateMachine()
        self.best_score = best_score

        self.store = EntityStore()
        self.world = WorldGenerator(tuning, self.rng)
        self.controller = PlayerController(tuning)
        self.yeti_ai = YetiAI(tuning, self.rng, emit=self._emit)
        self.resolver = CollisionResolver(tuning, emit=self._emit)

        self.player: Player = self.controller.new_player()
        self.yeti: Optional[Yeti] = None
        self.score = 0
        self.frame = 0
        self.last_contacts: List[Contact] = []
        self._events: List[GameEvent] = []
        self._run_best = best_score
        self._highscore_announced = False

    # Session control

    @property
    def state(self) -> GameState:
        return self.state_machine.state

    @property
    def paused(self) -> bool:
        return self.state_machine.is_paused

    def reset(self) -> None:
        """Reinitialize everything and start a fresh run."""
        self.store.clear()
        self.controller.reset()
        self.player = self.controller.new_player()
        self.yeti = None
        self.score = 0
        self.frame = 0
        self.last_contacts = []
        self._events = []
        self._run_best = self.best_score
        self._highscore_announced = False

        t = self.tuning
        self.world.populate(
            self.store, t.initial_spawn_start, t.initial_spawn_end, self.player.x
        )
        self.state_machine.restart()
        self._emit(EventTag.START, {})
        logger.info("Simulation reset")

    start = reset

    def pause(self) -> bool:
        return self.state_machine.transition(GameState.PAUSED)

    def resume(self) -> bool:
        return self.state_machine.transition(GameState.PLAYING)

    def toggle_pause(self) -> bool:
        if self.paused:
            return self.resume()
        return self.pause()

    # The tick

    def tick(self, inputs: InputState) -> bool:
        """Advance the world by one step. Returns False if nothing ran."""
        if self.state in (GameState.PAUSED, GameState.MENU):
            return False

        player = self.player
        t = self.tuning

        # 1. Input and player physics
        self.controller.apply_input(player, inputs, self.store, self.yeti, self.frame)
        self.controller.integrate(player)

        # 2. Slope upkeep
        self.store.cull_behind(player.y - t.view_height / 2)
        advance_projectiles(self.store, player, self.yeti, t)
        self.world.ensure_ahead(self.store, player.x, player.y)

        # 3. Yeti
        self._update_yeti()

        # 4. Collision
        self.last_contacts = self.resolver.resolve(player, self.store)

        # 5. Score and session state
        self._update_score()
        self._sync_state()

        self.frame += 1
        return True

    def _update_yeti(self) -> None:
        player = self.player
        if self.yeti is not None and self.yeti_ai.should_despawn(self.yeti, player):
            logger.info("Yeti lost the trail")
            self._emit(EventTag.YETI_DESPAWN, {"distance": player.y})
            self.yeti = None

        if self.yeti is None:
            self.yeti = self.yeti_ai.maybe_spawn(player)

        if self.yeti is not None:
            self.yeti_ai.update(self.yeti, player, self.store, self.frame)

    def _update_score(self) -> None:
        self.score = max(0, math.floor(self.player.y))
        if self.score > self.best_score:
            if self._run_best > 0 and not self._highscore_announced:
                self._highscore_announced = True
                self._emit(EventTag.HIGHSCORE, {"distance": self.score})
            self.best_score = self.score

    def _sync_state(self) -> None:
        if self.player.state == PlayerState.EATEN and self.state in (GameState.PLAYING, GameState.CRASHED):
            # The Yeti still hunts a skier lying in the snow
            self.state_machine.transition(GameState.EATEN, score=self.score, cause="yeti")
            return
        if self.state != GameState.PLAYING:
            return
        if self.player.state == PlayerState.CRASHED:
            cause = self._last_cause()
            self.state_machine.transition(GameState.CRASHED, score=self.score, cause=cause)

    def _last_cause(self) -> Optional[str]:
        for event in reversed(self._events):
            if event.tag == EventTag.CRASH:
                return event.context.get("cause")
        return None

    # Outbound

    def _emit(self, tag: EventTag, context: Dict[str, Any]) -> None:
        self._events.append(GameEvent(tag=tag, frame=self.frame, context=dict(context)))

    def drain_events(self) -> List[GameEvent]:
        """Hand over and forget every event emitted since the last drain."""
        events, self._events = self._events, []
        return events

    def snapshot(self) -> Snapshot:
        return Snapshot(
            player=copy.copy(self.player),
            entities=tuple(copy.copy(e) for e in self.store.entities),
            features=tuple(copy.copy(f) for f in self.store.features),
            projectiles=tuple(copy.copy(p) for p in self.store.projectiles),
            yeti=copy.copy(self.yeti),
            score=self.score,
            best_score=self.best_score,
            frame=self.frame,
            state=self.state,
            events=tuple(self._events),
        )
