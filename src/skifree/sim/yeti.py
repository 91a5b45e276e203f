"""Yeti pursuit AI.

Mode graph::

    CHASE --(timer out, 2% roll)--> PRE_LUNGE --(timer)--> LUNGE --(timer)--> CHASE
      ^                                                                        |
      +------------------------------ RETREAT <--- power-up / coffee hit ------+

Any mode can be knocked into RETREAT. The Yeti's speed is a smoothed scalar
chasing a per-mode target, so bursts ramp up rather than snap.
"""

import logging
import math
import random
from typing import Any, Callable, Dict, Optional

from skifree.sim.entities import EventTag, Player, PlayerState, Yeti, YetiMode
from skifree.sim.store import EntityStore
from skifree.sim.tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)

Emit = Callable[[EventTag, Dict[str, Any]], None]


def _no_emit(tag: EventTag, context: Dict[str, Any]) -> None:
    pass


class YetiAI:
    """Spawns, steers and despawns the Yeti."""

    def __init__(
        self,
        tuning: Tuning = DEFAULT_TUNING,
        rng: Optional[random.Random] = None,
        emit: Emit = _no_emit,
    ):
        self.tuning = tuning
        self.rng = rng or random.Random()
        self._emit = emit

    # Lifecycle

    def maybe_spawn(self, player: Player) -> Optional[Yeti]:
        """Roll for a spawn. Only deep enough, only while the skier is alive."""
        t = self.tuning
        if player.y <= t.yeti_min_spawn_depth or not player.is_active:
            return None
        if self.rng.random() >= t.yeti_spawn_chance:
            return None

        yeti = Yeti(
            x=player.x + t.yeti_spawn_offset_x,
            y=player.y + t.yeti_spawn_offset_y,
            width=t.yeti_width,
            height=t.yeti_height,
            mode=YetiMode.CHASE,
            mode_timer=0,
            current_speed=t.yeti_base_speed,
        )
        logger.info(f"Yeti spawned at depth {player.y:.0f}")
        self._emit(EventTag.YETI_SPAWN, {"distance": player.y})
        return yeti

    def should_despawn(self, yeti: Yeti, player: Player) -> bool:
        return self.distance_to(yeti, player) > self.tuning.yeti_despawn_distance

    @staticmethod
    def distance_to(yeti: Yeti, player: Player) -> float:
        return math.hypot(player.x - yeti.x, player.y - yeti.y)

    # Reactions

    def retreat(self, yeti: Yeti) -> None:
        self._set_mode(yeti, YetiMode.RETREAT, self.tuning.yeti_scare_ticks)

    def resolve_projectile_hits(self, yeti: Yeti, store: EntityStore) -> int:
        """Consume every coffee cup that reached the Yeti. Returns the hit count."""
        t = self.tuning
        cx, cy = yeti.center
        survivors = []
        hits = 0
        for projectile in store.projectiles:
            if math.hypot(cx - projectile.x, cy - projectile.y) < t.yeti_projectile_hit_radius:
                hits += 1
                self.retreat(yeti)
                self._emit(EventTag.YETI_HIT, {})
            else:
                survivors.append(projectile)
        if hits:
            store.replace_projectiles(survivors)
        return hits

    def hit_radius(self, yeti: Yeti) -> float:
        if yeti.mode == YetiMode.LUNGE:
            return self.tuning.yeti_lunge_hit_radius
        return self.tuning.yeti_hit_radius

    # Per-tick update

    def update(self, yeti: Yeti, player: Player, store: EntityStore, frame: int) -> None:
        """React to hits and power-ups, try to eat the skier, then move."""
        dx = player.x - yeti.x
        dy = player.y - yeti.y
        dist = math.hypot(dx, dy)

        self.resolve_projectile_hits(yeti, store)

        if player.is_powered_up and yeti.mode != YetiMode.RETREAT:
            self.retreat(yeti)
            self._emit(EventTag.YETI_SCARED, {})

        if (
            dist < self.hit_radius(yeti)
            and player.state != PlayerState.EATEN
            and not player.is_powered_up
        ):
            player.state = PlayerState.EATEN
            player.speed = 0.0
            player.jump_height = 0.0
            player.jump_velocity = 0.0
            logger.info(f"Skier eaten at depth {player.y:.0f}")
            self._emit(EventTag.EATEN, {"distance": player.y})
            return

        if player.state == PlayerState.EATEN:
            return

        self.advance_mode(yeti)
        target = self.target_speed(yeti, dist, player.y)
        self.accelerate(yeti, target)
        self.move(yeti, dx, dy, dist, frame)

    def advance_mode(self, yeti: Yeti) -> None:
        """Count down the mode timer and take the outgoing edge when it expires."""
        t = self.tuning
        if yeti.mode_timer > 0:
            yeti.mode_timer -= 1
        if yeti.mode_timer > 0:
            return

        if yeti.mode == YetiMode.CHASE:
            if self.rng.random() < t.yeti_lunge_chance:
                self._set_mode(yeti, YetiMode.PRE_LUNGE, t.yeti_pre_lunge_ticks)
        elif yeti.mode == YetiMode.PRE_LUNGE:
            self._set_mode(yeti, YetiMode.LUNGE, t.yeti_lunge_ticks)
            self._emit(EventTag.YETI_LUNGE, {})
        elif yeti.mode == YetiMode.LUNGE:
            self._set_mode(yeti, YetiMode.CHASE, t.yeti_cooldown_ticks)
        elif yeti.mode == YetiMode.RETREAT:
            self._set_mode(yeti, YetiMode.CHASE, 0)

    def difficulty_multiplier(self, depth: float) -> float:
        t = self.tuning
        return 1 + math.floor(depth / t.yeti_difficulty_depth) * t.yeti_difficulty_step

    def target_speed(self, yeti: Yeti, dist: float, depth: float) -> float:
        t = self.tuning
        if yeti.mode == YetiMode.CHASE:
            urgency = min(dist / t.yeti_urgency_distance, 1.0)
            desired = t.yeti_base_speed + (t.yeti_top_speed - t.yeti_base_speed) * urgency
            return min(desired * self.difficulty_multiplier(depth), t.yeti_top_speed)
        if yeti.mode == YetiMode.PRE_LUNGE:
            return t.yeti_base_speed * t.yeti_pre_lunge_multiplier
        if yeti.mode == YetiMode.LUNGE:
            return t.yeti_top_speed * t.yeti_lunge_multiplier
        return t.yeti_retreat_speed

    def accelerate(self, yeti: Yeti, target: float) -> None:
        t = self.tuning
        if yeti.current_speed < target:
            rate = t.yeti_lunge_accel if yeti.mode == YetiMode.LUNGE else t.yeti_accel_factor * 4
            yeti.current_speed += rate
        else:
            yeti.current_speed -= t.yeti_accel_factor * 2

    def move(self, yeti: Yeti, dx: float, dy: float, dist: float, frame: int) -> None:
        t = self.tuning
        if yeti.mode == YetiMode.CHASE:
            yeti.x += math.sin(frame * t.yeti_swerve_frequency) * t.yeti_swerve_amplitude
        elif yeti.mode == YetiMode.PRE_LUNGE:
            yeti.x += (self.rng.random() - 0.5) * t.yeti_jitter

        if yeti.mode == YetiMode.RETREAT:
            yeti.y += yeti.current_speed
        elif dist > t.yeti_stop_distance:
            yeti.x += dx / dist * yeti.current_speed
            yeti.y += dy / dist * yeti.current_speed

    def _set_mode(self, yeti: Yeti, mode: YetiMode, timer: int) -> None:
        if yeti.mode != mode:
            logger.debug(f"Yeti: {yeti.mode.name} -> {mode.name}")
        yeti.mode = mode
        yeti.mode_timer = timer
