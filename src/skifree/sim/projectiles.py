"""Coffee cup flight: homing on the Yeti and range culling."""

import math
from typing import Optional

from skifree.sim.entities import Player, Yeti
from skifree.sim.store import EntityStore
from skifree.sim.tuning import DEFAULT_TUNING, Tuning


def advance_projectiles(
    store: EntityStore,
    player: Player,
    yeti: Optional[Yeti],
    tuning: Tuning = DEFAULT_TUNING,
) -> None:
    """Re-aim every cup at the Yeti, move it, and drop cups out of range."""
    for projectile in store.projectiles:
        if yeti is not None:
            cx, cy = yeti.center
            dx = cx - projectile.x
            dy = cy - projectile.y
            dist = math.hypot(dx, dy)
            if dist > 0:
                projectile.vx = dx / dist * tuning.projectile_speed
                projectile.vy = dy / dist * tuning.projectile_speed
        projectile.x += projectile.vx
        projectile.y += projectile.vy

    # Cups chasing a Yeti get a longer leash
    margin = tuning.projectile_range_tracking if yeti is not None else tuning.projectile_range
    store.cull_projectiles(player.x, player.y, margin)
