"""Live collections of slope content."""

import itertools
import logging
from typing import Iterable, List

from skifree.sim.entities import Entity, EntityType, FeatureVariant, GroundFeature, Projectile

logger = logging.getLogger(__name__)


class EntityStore:
    """Owns obstacles/pickups, cosmetic features and projectiles.

    Collections are replaced wholesale, never edited while being walked:
    callers build the surviving generation and hand it back through
    ``replace_entities`` / ``replace_projectiles``.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.entities: List[Entity] = []
        self.features: List[GroundFeature] = []
        self.projectiles: List[Projectile] = []
        self.frontier: float = 0.0  # Deepest y generated so far

    def clear(self) -> None:
        self._ids = itertools.count(1)
        self.entities = []
        self.features = []
        self.projectiles = []
        self.frontier = 0.0

    def next_id(self) -> int:
        return next(self._ids)

    def spawn(self, type: EntityType, x: float, y: float, width: float, height: float) -> Entity:
        entity = Entity(id=self.next_id(), type=type, x=x, y=y, width=width, height=height)
        self.entities.append(entity)
        return entity

    def spawn_feature(
        self,
        x: float,
        y: float,
        size: float,
        variant: FeatureVariant,
        opacity: float,
    ) -> GroundFeature:
        feature = GroundFeature(
            id=self.next_id(), x=x, y=y, size=size, variant=variant, opacity=opacity
        )
        self.features.append(feature)
        return feature

    def add_projectile(self, x: float, y: float, vx: float, vy: float, size: float) -> Projectile:
        projectile = Projectile(
            id=self.next_id(), x=x, y=y, vx=vx, vy=vy, width=size, height=size
        )
        self.projectiles.append(projectile)
        return projectile

    def replace_entities(self, survivors: Iterable[Entity]) -> None:
        self.entities = list(survivors)

    def replace_projectiles(self, survivors: Iterable[Projectile]) -> None:
        self.projectiles = list(survivors)

    def advance_frontier(self, end_y: float) -> None:
        self.frontier = max(self.frontier, end_y)

    def cull_behind(self, top_edge: float) -> int:
        """Drop everything at or above ``top_edge``. Returns how many went."""
        before = len(self.entities) + len(self.features)
        self.entities = [e for e in self.entities if e.y > top_edge]
        self.features = [f for f in self.features if f.y > top_edge]
        dropped = before - len(self.entities) - len(self.features)
        if dropped:
            logger.debug(f"Culled {dropped} entities above y={top_edge:.0f}")
        return dropped

    def cull_projectiles(self, cx: float, cy: float, margin: float) -> None:
        """Keep only projectiles inside the square window around (cx, cy)."""
        self.projectiles = [
            p for p in self.projectiles
            if cx - margin < p.x < cx + margin and cy - margin < p.y < cy + margin
        ]
