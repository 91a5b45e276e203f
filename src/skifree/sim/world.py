"""Procedural slope generation.

Content is laid down in horizontal bands ahead of the skier. Density and
composition depend on depth: every ``difficulty_depth`` pixels the tier goes
up, more obstacles appear, and snow mounds crowd out the simpler hazards.
"""

import logging
import math
import random
from typing import Optional

from skifree.sim.entities import EntityType, FeatureVariant
from skifree.sim.store import EntityStore
from skifree.sim.tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)

OBSTACLE_SIZE = (24.0, 24.0)
PICKUP_SIZES = {
    EntityType.BOOST_PAD: (20.0, 30.0),
    EntityType.SUPER_MUSHROOM: (20.0, 20.0),
    EntityType.COFFEE: (20.0, 20.0),
}


class WorldGenerator:
    """Fills the entity store forward-only, one band at a time."""

    def __init__(self, tuning: Tuning = DEFAULT_TUNING, rng: Optional[random.Random] = None):
        self.tuning = tuning
        self.rng = rng or random.Random()

    def difficulty_tier(self, depth: float) -> int:
        return max(0, math.floor(depth / self.tuning.difficulty_depth))

    def obstacle_chance(self, tier: int) -> float:
        t = self.tuning
        return t.obstacle_base_chance + min(tier * t.obstacle_chance_step, t.obstacle_chance_cap)

    def pickup_chance(self, tier: int) -> float:
        t = self.tuning
        return t.pickup_base_chance + min(tier * t.pickup_chance_step, t.pickup_chance_cap)

    def mound_share(self, tier: int) -> float:
        t = self.tuning
        return t.mound_base_share + min(tier * t.mound_share_step, t.mound_share_cap)

    def pick_obstacle(self, tier: int) -> EntityType:
        """Weighted obstacle roll for the given tier."""
        roll = self.rng.random()
        if roll < self.mound_share(tier):
            return EntityType.SNOW_MOUND
        if roll > self.tuning.stump_threshold:
            return EntityType.STUMP
        if roll > self.tuning.rock_threshold:
            return EntityType.ROCK
        return EntityType.TREE

    def _spawn_x(self, player_x: float) -> float:
        half = self.tuning.spawn_half_band
        return player_x + self.rng.random() * half * 2 - half

    def populate(self, store: EntityStore, start_y: float, end_y: float, player_x: float) -> None:
        """Generate content for [start_y, end_y) around ``player_x``."""
        if end_y <= start_y:
            return

        t = self.tuning
        tier = self.difficulty_tier(start_y)
        obstacle_chance = self.obstacle_chance(tier)
        pickup_chance = self.pickup_chance(tier)

        y = start_y
        while y < end_y:
            if self.rng.random() < obstacle_chance:
                kind = self.pick_obstacle(tier)
                store.spawn(
                    kind,
                    self._spawn_x(player_x),
                    y + self.rng.random() * t.row_jitter,
                    *OBSTACLE_SIZE,
                )

            for kind, factor in (
                (EntityType.BOOST_PAD, 2.0),
                (EntityType.SUPER_MUSHROOM, 1.0),
                (EntityType.COFFEE, 0.5),
            ):
                if self.rng.random() < pickup_chance * factor:
                    store.spawn(
                        kind,
                        self._spawn_x(player_x),
                        y + self.rng.random() * t.row_jitter,
                        *PICKUP_SIZES[kind],
                    )
            y += t.row_spacing

        self._populate_features(store, start_y, end_y, player_x)
        store.advance_frontier(end_y)
        logger.debug(f"Generated slope [{start_y:.0f}, {end_y:.0f}) at tier {tier}")

    def _populate_features(
        self, store: EntityStore, start_y: float, end_y: float, player_x: float
    ) -> None:
        t = self.tuning
        y = start_y
        while y < end_y:
            for _ in range(t.feature_attempts):
                if self.rng.random() >= t.feature_chance:
                    continue
                roll = self.rng.random()
                if roll > 0.8:
                    variant = FeatureVariant.ICE
                    size = self.rng.random() * 4 + 3
                elif roll > 0.6:
                    variant = FeatureVariant.MOUND
                    size = self.rng.random() * 3 + 3
                else:
                    variant = FeatureVariant.BUMP
                    size = self.rng.random() * 2 + 2
                store.spawn_feature(
                    x=self._spawn_x(player_x),
                    y=y + self.rng.random() * t.feature_jitter,
                    size=size,
                    variant=variant,
                    opacity=self.rng.random() * 0.5 + 0.3,
                )
            y += t.feature_spacing

    def ensure_ahead(self, store: EntityStore, player_x: float, player_y: float) -> bool:
        """Top up the slope so the lookahead margin past the viewport is filled.

        Returns True when new content was generated.
        """
        t = self.tuning
        bottom_edge = player_y + t.view_height
        target = bottom_edge + t.lookahead_margin
        if store.frontier >= target:
            return False
        start = max(store.frontier, bottom_edge)
        # Whole rows only, so density does not depend on how far we moved this tick
        rows = math.ceil((target - start) / t.row_spacing)
        self.populate(store, start, start + rows * t.row_spacing, player_x)
        return True
