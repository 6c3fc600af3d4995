import math

import numpy as np
import pytest

from efield_sim.renderer.view import MAX_SCALE, MIN_SCALE, View


def test_screen_world_roundtrip():
    v = View(offset_x=30, offset_y=-20, scale=2.0)
    w = v.screen_to_world(130, 80)
    np.testing.assert_allclose(w, [50.0, 50.0])
    np.testing.assert_allclose(v.world_to_screen(*w), [130.0, 80.0])


def test_zoom_keeps_cursor_point_fixed():
    v = View(offset_x=10, offset_y=5, scale=1.0)
    before = v.screen_to_world(300, 200)
    v.zoom_at(300, 200, -200)
    after = v.screen_to_world(300, 200)

    assert v.scale == pytest.approx(math.exp(0.3))
    np.testing.assert_allclose(after, before)


def test_zoom_is_clamped():
    v = View()
    v.zoom_at(0, 0, -1e6)
    assert v.scale == MAX_SCALE
    v.zoom_at(0, 0, 1e6)
    assert v.scale == MIN_SCALE


def test_visible_bounds():
    v = View(offset_x=-100, offset_y=0, scale=2.0)
    b = v.visible_bounds(800, 600)
    assert (b.xmin, b.ymin, b.xmax, b.ymax) == (50.0, 0.0, 450.0, 300.0)


def test_huge_wheel_delta_clamps_and_keeps_cursor_point():
    v = View(offset_x=40, offset_y=-10, scale=2.0)
    before = v.screen_to_world(320, 240)

    v.zoom_at(320, 240, -1e9)
    print("scale", v.scale)
    assert v.scale == MAX_SCALE
    np.testing.assert_allclose(v.screen_to_world(320, 240), before)

    v.zoom_at(320, 240, 1e9)
    assert v.scale == MIN_SCALE
    np.testing.assert_allclose(v.screen_to_world(320, 240), before)
