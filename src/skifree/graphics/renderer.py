"""Draws a simulation snapshot into a numpy frame buffer.

Read-only with respect to the simulation: it only ever sees a Snapshot.
"""

import logging
import math
from typing import Optional, Tuple

import numpy as np

from skifree.graphics.primitives import (
    Buffer,
    Color,
    blend_rect,
    clear,
    draw_circle,
    draw_line,
    draw_rect,
    draw_triangle,
    new_buffer,
)
from skifree.sim.clock import Snapshot
from skifree.sim.entities import (
    Entity,
    EntityType,
    FeatureVariant,
    GroundFeature,
    Player,
    PlayerState,
    Yeti,
    YetiMode,
)

logger = logging.getLogger(__name__)

SNOW: Color = (245, 248, 252)

FEATURE_COLORS = {
    FeatureVariant.BUMP: (215, 225, 238),
    FeatureVariant.MOUND: (225, 232, 242),
    FeatureVariant.ICE: (185, 220, 245),
}

YETI_COLORS = {
    YetiMode.CHASE: (235, 235, 240),
    YetiMode.PRE_LUNGE: (250, 200, 200),
    YetiMode.LUNGE: (255, 120, 120),
    YetiMode.RETREAT: (180, 200, 255),
}


class SlopeRenderer:
    """Camera-follow renderer: the skier sits centred, a third of the way down."""

    def __init__(self, width: int = 800, height: int = 600):
        self.width = width
        self.height = height
        self.buffer: Buffer = new_buffer(width, height, SNOW)

    def camera_offset(self, player: Player) -> Tuple[float, float]:
        return -player.x + self.width / 2, -player.y + self.height / 3

    def render(self, snapshot: Snapshot, buffer: Optional[Buffer] = None) -> Buffer:
        target = buffer if buffer is not None else self.buffer
        clear(target, SNOW)

        ox, oy = self.camera_offset(snapshot.player)

        for feature in snapshot.features:
            self._draw_feature(target, feature, ox, oy)

        for entity in snapshot.entities:
            sx, sy = entity.x + ox, entity.y + oy
            if sy < -entity.height - 20 or sy > self.height + 20:
                continue
            self._draw_entity(target, entity, int(sx), int(sy))

        for projectile in snapshot.projectiles:
            px, py = int(projectile.x + ox), int(projectile.y + oy)
            draw_rect(target, px - 5, py - 5, 10, 10, (120, 80, 50))
            draw_rect(target, px - 3, py - 7, 6, 3, (250, 250, 250))

        if snapshot.yeti is not None:
            self._draw_yeti(target, snapshot.yeti, ox, oy, snapshot.frame)

        self._draw_player(target, snapshot.player, snapshot.frame)
        return target

    def _draw_feature(self, buffer: Buffer, feature: GroundFeature, ox: float, oy: float) -> None:
        size = int(feature.size)
        x = int(feature.x + ox) - size // 2
        y = int(feature.y + oy) - size // 4
        blend_rect(buffer, x, y, size, max(2, size // 2), FEATURE_COLORS[feature.variant], feature.opacity)

    def _draw_entity(self, buffer: Buffer, entity: Entity, x: int, y: int) -> None:
        w, h = int(entity.width), int(entity.height)
        kind = entity.type

        if kind == EntityType.TREE:
            # Trunk matches the collision box, canopy is decoration
            draw_rect(buffer, x + 8, y + 15, 8, 10, (110, 75, 40))
            draw_triangle(buffer, (x + w // 2, y - 6), (x, y + 17), (x + w, y + 17), (40, 120, 60))
        elif kind == EntityType.ROCK:
            draw_rect(buffer, x + 2, y + h // 2, w - 4, h // 2, (120, 120, 130))
            draw_rect(buffer, x + 5, y + h // 2 - 3, w - 10, 3, (150, 150, 160))
        elif kind == EntityType.STUMP:
            draw_rect(buffer, x + 4, y + h // 3, w - 8, h - h // 3, (120, 85, 50))
            draw_rect(buffer, x + 4, y + h // 3, w - 8, 3, (170, 130, 80))
        elif kind == EntityType.MUSHROOM:
            draw_rect(buffer, x + w // 2 - 2, y + h // 2, 4, h // 2, (235, 225, 200))
            draw_circle(buffer, x + w // 2, y + h // 2, w // 3, (200, 60, 50))
        elif kind == EntityType.SNOW_MOUND:
            draw_circle(buffer, x + w // 2, y + h // 2, w // 2, (220, 228, 240))
        elif kind == EntityType.SNOW_BUMP:
            draw_line(buffer, x, y + h // 2, x + w, y + h // 2, (210, 220, 235))
        elif kind == EntityType.BOOST_PAD:
            draw_rect(buffer, x, y, w, h, (255, 200, 40))
            for i in range(0, h - 4, 8):
                draw_line(buffer, x + 3, y + i + 2, x + w // 2, y + i + 6, (230, 120, 20))
                draw_line(buffer, x + w // 2, y + i + 6, x + w - 3, y + i + 2, (230, 120, 20))
        elif kind == EntityType.SUPER_MUSHROOM:
            draw_rect(buffer, x + w // 2 - 3, y + h // 2, 6, h // 2, (240, 230, 210))
            draw_circle(buffer, x + w // 2, y + h // 2, w // 2, (220, 40, 200))
        elif kind == EntityType.COFFEE:
            draw_rect(buffer, x + 3, y + 4, w - 6, h - 6, (240, 240, 240))
            draw_rect(buffer, x + 4, y + 5, w - 8, 3, (110, 70, 40))
        else:
            draw_rect(buffer, x, y, w, h, (0, 0, 0), filled=False)

    def _draw_yeti(self, buffer: Buffer, yeti: Yeti, ox: float, oy: float, frame: int) -> None:
        x, y = int(yeti.x + ox), int(yeti.y + oy)
        w, h = int(yeti.width), int(yeti.height)
        color = YETI_COLORS[yeti.mode]

        # Shake during the wind-up
        if yeti.mode == YetiMode.PRE_LUNGE:
            x += int(math.sin(frame * 1.7) * 2)

        draw_rect(buffer, x, y + 10, w, h - 10, color)
        draw_circle(buffer, x + w // 2, y + 10, 12, color)
        draw_rect(buffer, x + w // 2 - 7, y + 6, 4, 4, (20, 20, 20))
        draw_rect(buffer, x + w // 2 + 3, y + 6, 4, 4, (20, 20, 20))
        # Arms up while lunging
        arm_y = y + 2 if yeti.mode == YetiMode.LUNGE else y + 20
        draw_line(buffer, x, y + 18, x - 8, arm_y, color)
        draw_line(buffer, x + w, y + 18, x + w + 8, arm_y, color)

    def _draw_player(self, buffer: Buffer, player: Player, frame: int) -> None:
        cx = self.width // 2
        cy = self.height // 3 - int(player.jump_height)
        scale = 2 if player.is_powered_up else 1

        if player.state == PlayerState.EATEN:
            return

        if player.state == PlayerState.CRASHED:
            draw_rect(buffer, cx - 10, cy + 4, 20, 8, (200, 40, 40))
            draw_line(buffer, cx - 12, cy + 14, cx + 12, cy + 10, (60, 60, 70))
            return

        # Shadow on the snow while airborne
        if player.jump_height > 0:
            blend_rect(buffer, cx - 8, self.height // 3 + 12, 16, 4, (120, 130, 150), 0.5)

        body = (200, 40, 40)
        if player.is_powered_up and (frame // 4) % 2 == 0:
            body = (220, 40, 220)

        draw_rect(buffer, cx - 4 * scale, cy - 12 * scale, 8 * scale, 14 * scale, body)
        draw_circle(buffer, cx, cy - 15 * scale, 4 * scale, (240, 200, 170))

        # Skis point along the heading
        angle = player.direction * math.pi / 4
        dx = int(math.sin(angle) * 12 * scale)
        dy = int(math.cos(angle) * 4 * scale)
        for offset in (-3 * scale, 3 * scale):
            draw_line(buffer, cx + offset - dx, cy + 4 * scale - dy, cx + offset + dx, cy + 4 * scale + dy, (40, 40, 60))


def to_surface_array(buffer: Buffer) -> np.ndarray:
    """Swap axes for pygame.surfarray, which wants (width, height, 3)."""
    return np.ascontiguousarray(buffer.swapaxes(0, 1))
