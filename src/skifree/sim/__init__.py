"""Simulation core: physics, world generation, collisions and the Yeti."""

from skifree.sim.clock import Simulation, Snapshot
from skifree.sim.entities import (
    Entity,
    EntityType,
    EventTag,
    GameEvent,
    GroundFeature,
    Player,
    PlayerState,
    Projectile,
    Yeti,
    YetiMode,
)
from skifree.sim.errors import InvalidTuningError, SimulationError
from skifree.sim.inputs import InputState, KEY_BINDINGS
from skifree.sim.leaderboard import HighScore, Leaderboard
from skifree.sim.tuning import DEFAULT_TUNING, Tuning

__all__ = [
    # Clock
    "Simulation",
    "Snapshot",
    # Model
    "Entity",
    "EntityType",
    "EventTag",
    "GameEvent",
    "GroundFeature",
    "Player",
    "PlayerState",
    "Projectile",
    "Yeti",
    "YetiMode",
    # Input
    "InputState",
    "KEY_BINDINGS",
    # Scores
    "HighScore",
    "Leaderboard",
    # Tuning
    "Tuning",
    "DEFAULT_TUNING",
    # Errors
    "SimulationError",
    "InvalidTuningError",
]
