"""Tests for the frame buffer renderer and drawing primitives."""

import numpy as np
import pytest

from skifree.graphics.primitives import draw_circle, draw_rect, draw_triangle, new_buffer
from skifree.graphics.renderer import SNOW, SlopeRenderer, to_surface_array
from skifree.sim.entities import Yeti, YetiMode
from skifree.sim.inputs import InputState


def test_primitives_clip_to_the_buffer():
    buffer = new_buffer(20, 10)

    draw_rect(buffer, -5, -5, 10, 10, (255, 0, 0))
    draw_rect(buffer, 100, 100, 5, 5, (0, 255, 0))
    draw_triangle(buffer, (10, -20), (-10, 30), (30, 30), (9, 9, 9))
    draw_circle(buffer, 19, 9, 4, (0, 0, 255))

    assert buffer.shape == (10, 20, 3)
    assert tuple(buffer[0, 0]) == (255, 0, 0)
    assert tuple(buffer[5, 10]) == (9, 9, 9)
    assert tuple(buffer[9, 19]) == (0, 0, 255)


def test_rect_outline_leaves_the_inside():
    buffer = new_buffer(10, 10)
    draw_rect(buffer, 1, 1, 8, 8, (255, 255, 255), filled=False)

    assert tuple(buffer[1, 1]) == (255, 255, 255)
    assert tuple(buffer[8, 8]) == (255, 255, 255)
    assert tuple(buffer[4, 4]) == (0, 0, 0)


def test_camera_keeps_the_skier_in_place(simulation):
    renderer = SlopeRenderer(800, 600)
    ox, oy = renderer.camera_offset(simulation.player)

    assert simulation.player.x + ox == pytest.approx(400)
    assert simulation.player.y + oy == pytest.approx(200)


def test_render_produces_a_full_frame(simulation):
    simulation.player.ammo = 1
    simulation.tick(InputState(down=True, fire=True))
    simulation.yeti = Yeti(x=simulation.player.x - 100, y=simulation.player.y - 150, mode=YetiMode.LUNGE)

    renderer = SlopeRenderer(320, 240)
    frame = renderer.render(simulation.snapshot())

    assert frame.shape == (240, 320, 3)
    assert frame.dtype == np.uint8
    # Something other than snow got drawn
    assert (frame != np.array(SNOW, dtype=np.uint8)).any()


def test_surface_array_swaps_axes():
    buffer = new_buffer(30, 20)
    assert to_surface_array(buffer).shape == (30, 20, 3)
