"""Player vs. slope collision resolution."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

from skifree.sim.entities import (
    JUMPABLE,
    POWERUP_IMMUNE,
    Entity,
    EntityType,
    EventTag,
    Player,
    PlayerState,
    Rect,
)
from skifree.sim.store import EntityStore
from skifree.sim.tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)

Emit = Callable[[EventTag, Dict[str, Any]], None]

PLAYER_HALF_WIDTH = 8.0
PLAYER_HALF_HEIGHT = 15.0


class Outcome(Enum):
    NONE = auto()       # No overlap, or exempted
    BOOST = auto()
    POWERUP = auto()
    AMMO = auto()
    SLOWED = auto()
    CRASH = auto()


@dataclass
class Contact:
    """One resolved overlap, kept for tests and debugging."""

    entity: Entity
    outcome: Outcome


def player_hitbox(player: Player) -> Rect:
    rect = Rect(
        player.x - PLAYER_HALF_WIDTH,
        player.y - PLAYER_HALF_HEIGHT,
        PLAYER_HALF_WIDTH * 2,
        PLAYER_HALF_HEIGHT * 2,
    )
    if player.is_powered_up:
        # Mushroom makes you big
        rect.x -= PLAYER_HALF_WIDTH
        rect.y -= PLAYER_HALF_HEIGHT
        rect.w *= 2
        rect.h *= 2
    return rect


def entity_hitbox(entity: Entity) -> Rect:
    if entity.type == EntityType.TREE:
        # Trunk only, near the base
        return Rect(entity.x + 8, entity.y + 15, 8, 10)
    return Rect(entity.x, entity.y, entity.width, entity.height)


def is_exempt(player: Player, entity: Entity) -> bool:
    if entity.is_cosmetic:
        return True
    if player.state == PlayerState.JUMPING and entity.type in JUMPABLE:
        return True
    if player.is_powered_up and entity.type in POWERUP_IMMUNE:
        return True
    return False


def check_collision(player: Player, entity: Entity) -> bool:
    """True when the entity both overlaps the skier and is not exempted."""
    if is_exempt(player, entity):
        return False
    return player_hitbox(player).overlaps(entity_hitbox(entity))


class CollisionResolver:
    """Applies at most one outcome per entity and at most one crash per tick."""

    def __init__(self, tuning: Tuning = DEFAULT_TUNING, emit: Optional[Emit] = None):
        self.tuning = tuning
        self._emit = emit

    def resolve(self, player: Player, store: EntityStore) -> List[Contact]:
        if not player.is_active:
            return []

        contacts: List[Contact] = []
        survivors: List[Entity] = []
        for entity in store.entities:
            if player.state == PlayerState.CRASHED or not check_collision(player, entity):
                survivors.append(entity)
                continue

            outcome = self._apply(player, entity)
            contacts.append(Contact(entity, outcome))
            if outcome == Outcome.CRASH:
                survivors.append(entity)

        store.replace_entities(survivors)
        return contacts

    def _apply(self, player: Player, entity: Entity) -> Outcome:
        t = self.tuning
        if entity.type == EntityType.BOOST_PAD:
            player.speed = t.boost_speed
            return Outcome.BOOST
        if entity.type == EntityType.SUPER_MUSHROOM:
            player.powerup_timer = t.powerup_duration
            return Outcome.POWERUP
        if entity.type == EntityType.COFFEE:
            player.ammo += t.ammo_per_pickup
            return Outcome.AMMO
        if entity.type == EntityType.SNOW_MOUND:
            if not player.is_powered_up:
                player.speed *= t.mound_damping
            return Outcome.SLOWED

        player.state = PlayerState.CRASHED
        player.speed = 0.0
        player.jump_height = 0.0
        player.jump_velocity = 0.0
        cause = entity.type.value.lower()
        logger.info(f"Crashed into {cause} at depth {player.y:.0f}")
        if self._emit is not None:
            self._emit(EventTag.CRASH, {"distance": player.y, "cause": cause})
        return Outcome.CRASH
