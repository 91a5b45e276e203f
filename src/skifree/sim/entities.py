"""Data model for the slope: player, obstacles, projectiles and the Yeti."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class PlayerState(Enum):
    SKIING = "skiing"
    JUMPING = "jumping"
    CRASHED = "crashed"
    EATEN = "eaten"


class EntityType(Enum):
    TREE = "TREE"
    ROCK = "ROCK"
    STUMP = "STUMP"
    MUSHROOM = "MUSHROOM"              # Low obstacle, cleared by jumping
    SNOW_BUMP = "SNOW_BUMP"            # Decorative ground texture
    SNOW_MOUND = "SNOW_MOUND"          # Slows you down
    BOOST_PAD = "BOOST_PAD"
    SUPER_MUSHROOM = "SUPER_MUSHROOM"  # Power-up
    COFFEE = "COFFEE"                  # Ammo pickup
    COFFEE_CUP = "COFFEE_CUP"          # Projectile


class FeatureVariant(Enum):
    BUMP = "BUMP"
    MOUND = "MOUND"
    ICE = "ICE"


class YetiMode(Enum):
    CHASE = "CHASE"
    PRE_LUNGE = "PRE_LUNGE"
    LUNGE = "LUNGE"
    RETREAT = "RETREAT"


# Hazards a jump carries the skier over
JUMPABLE = frozenset({
    EntityType.ROCK,
    EntityType.STUMP,
    EntityType.MUSHROOM,
    EntityType.SNOW_MOUND,
})

# Hazards an active power-up shrugs off
POWERUP_IMMUNE = frozenset({
    EntityType.TREE,
    EntityType.ROCK,
    EntityType.STUMP,
})

COSMETIC = frozenset({EntityType.SNOW_BUMP})


@dataclass
class Rect:
    """Axis-aligned box, top-left origin."""

    x: float
    y: float
    w: float
    h: float

    def overlaps(self, other: "Rect") -> bool:
        return (
            self.x < other.x + other.w
            and self.x + self.w > other.x
            and self.y < other.y + other.h
            and self.y + self.h > other.y
        )


@dataclass
class Player:
    x: float
    y: float
    speed: float = 0.0
    direction: float = 0.0  # 0 = straight down, negative = left
    state: PlayerState = PlayerState.SKIING
    jump_height: float = 0.0
    jump_velocity: float = 0.0
    powerup_timer: int = 0
    ammo: int = 0

    @property
    def is_active(self) -> bool:
        """Skiing or airborne, i.e. still under the player's control."""
        return self.state in (PlayerState.SKIING, PlayerState.JUMPING)

    @property
    def is_powered_up(self) -> bool:
        return self.powerup_timer > 0


@dataclass
class Entity:
    id: int
    type: EntityType
    x: float
    y: float
    width: float
    height: float

    @property
    def is_cosmetic(self) -> bool:
        return self.type in COSMETIC


@dataclass
class GroundFeature:
    """Visual-only snow texture. Never collision tested."""

    id: int
    x: float
    y: float
    size: float
    variant: FeatureVariant
    opacity: float


@dataclass
class Projectile:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    width: float = 10.0
    height: float = 10.0
    type: EntityType = EntityType.COFFEE_CUP


@dataclass
class Yeti:
    x: float
    y: float
    width: float = 40.0
    height: float = 50.0
    mode: YetiMode = YetiMode.CHASE
    mode_timer: int = 0
    current_speed: float = 0.0

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


class EventTag(Enum):
    """Outbound simulation events. The first four are narrated."""

    START = "start"
    CRASH = "crash"
    EATEN = "eaten"
    HIGHSCORE = "highscore"
    YETI_SPAWN = "yeti_spawn"
    YETI_LUNGE = "yeti_lunge"
    YETI_HIT = "yeti_hit"
    YETI_SCARED = "yeti_scared"
    YETI_DESPAWN = "yeti_despawn"


@dataclass(frozen=True)
class GameEvent:
    """A record the simulation leaves for whoever drains its queue."""

    tag: EventTag
    frame: int
    context: Dict[str, Any] = field(default_factory=dict)
