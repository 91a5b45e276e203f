"""Skier physics: turning, cruising, boosting, jumping and throwing coffee."""

import logging
import math
from typing import Optional

from skifree.sim.entities import Player, PlayerState, Projectile, Yeti
from skifree.sim.inputs import InputState
from skifree.sim.store import EntityStore
from skifree.sim.tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)


class PlayerController:
    """Advances one player by exactly one tick.

    Speed model:
        - Holding down ramps toward normal max; above it (boosted) it bleeds off slowly.
        - Letting go settles on a cruise speed that shrinks with the turn angle:
          linear drag from above, gentle gravity from below.
        - The global limit caps everything and is only reachable via boost pads.
    """

    def __init__(self, tuning: Tuning = DEFAULT_TUNING):
        self.tuning = tuning
        self._last_fire_frame = -(tuning.fire_interval + 1)

    def reset(self) -> None:
        self._last_fire_frame = -(self.tuning.fire_interval + 1)

    def new_player(self) -> Player:
        return Player(x=self.tuning.player_start_x, y=self.tuning.player_start_y)

    def cruise_target(self, direction: float) -> float:
        return self.tuning.cruise_speed * self.slope_factor(direction)

    def slope_factor(self, direction: float) -> float:
        return 1 - abs(direction) / self.tuning.slope_divisor

    def apply_input(
        self,
        player: Player,
        inputs: InputState,
        store: EntityStore,
        yeti: Optional[Yeti],
        frame: int,
    ) -> Optional[Projectile]:
        """Steer, accelerate, jump and fire. Returns a projectile if one was thrown."""
        if not player.is_active:
            return None

        t = self.tuning
        if inputs.left:
            player.direction = max(player.direction - t.turn_speed, -t.max_direction)
        if inputs.right:
            player.direction = min(player.direction + t.turn_speed, t.max_direction)

        if inputs.down:
            if player.speed < t.normal_max_speed:
                player.speed = min(player.speed + t.accel, t.normal_max_speed)
            else:
                # Boosted: holding down still can't keep a boost forever
                player.speed -= t.boost_decay
        else:
            slope = self.slope_factor(player.direction)
            target = t.cruise_speed * slope
            if player.speed > target:
                player.speed = max(target, player.speed - t.drag)
            else:
                player.speed += t.slope_gravity * slope

        player.speed = min(player.speed, t.global_speed_limit)

        if inputs.up and player.state == PlayerState.SKIING:
            player.state = PlayerState.JUMPING
            player.jump_velocity = t.jump_strength
            player.speed = min(player.speed + t.jump_speed_bump, t.global_speed_limit)

        projectile = None
        if inputs.fire:
            projectile = self.fire(player, store, yeti, frame)

        player.speed = max(player.speed, 0.0)
        return projectile

    def fire(
        self,
        player: Player,
        store: EntityStore,
        yeti: Optional[Yeti],
        frame: int,
    ) -> Optional[Projectile]:
        """Throw a coffee cup at the Yeti if ammo and the fire interval allow."""
        t = self.tuning
        if player.ammo <= 0 or frame - self._last_fire_frame <= t.fire_interval:
            return None

        player.ammo -= 1
        self._last_fire_frame = frame

        origin_x = player.x
        origin_y = player.y - t.projectile_offset_y
        vx, vy = 0.0, -t.projectile_speed  # Back up the slope by default
        if yeti is not None:
            dx = yeti.x - player.x
            dy = yeti.y - player.y
            dist = math.hypot(dx, dy)
            if dist > 0:
                vx = dx / dist * t.projectile_speed
                vy = dy / dist * t.projectile_speed

        logger.debug(f"Coffee thrown, {player.ammo} left")
        return store.add_projectile(origin_x, origin_y, vx, vy, t.projectile_size)

    def integrate(self, player: Player) -> None:
        """Move along the heading, run the jump arc and tick the power-up."""
        if not player.is_active:
            return

        t = self.tuning
        angle = player.direction * (math.pi / 4)
        player.x += math.sin(angle) * player.speed
        player.y += math.cos(angle) * player.speed

        if player.state == PlayerState.JUMPING:
            player.jump_height += player.jump_velocity
            player.jump_velocity -= t.jump_gravity
            if player.jump_height <= 0:
                player.jump_height = 0.0
                player.jump_velocity = 0.0
                player.state = PlayerState.SKIING

        if player.powerup_timer > 0:
            player.powerup_timer -= 1
