# MIT License (see LICENSE)
"""
Screen/world view transform.

World coordinates are CSS pixels at scale 1. The view maps them to screen
pixels with a uniform scale and an offset:

    screen = world * scale + offset
"""
from __future__ import annotations
from dataclasses import dataclass
import math

import numpy as np

from ..types import Bounds

MIN_SCALE: float = 0.2
MAX_SCALE: float = 6.0
ZOOM_RATE: float = 0.0015


@dataclass
class View:
    """
    Attributes:
        offset_x, offset_y: Screen position of the world origin, in pixels.
        scale: Screen pixels per world unit.
    """
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0

    def screen_to_world(self, sx: float, sy: float) -> np.ndarray:
        return np.array([
            (sx - self.offset_x) / self.scale,
            (sy - self.offset_y) / self.scale,
        ], dtype=np.float64)

    def world_to_screen(self, wx: float, wy: float) -> np.ndarray:
        return np.array([
            wx * self.scale + self.offset_x,
            wy * self.scale + self.offset_y,
        ], dtype=np.float64)

    def pan(self, dx: float, dy: float) -> None:
        """Shift the view by (dx, dy) screen pixels."""
        self.offset_x += dx
        self.offset_y += dy

    def zoom_at(self, mx: float, my: float, delta_y: float) -> None:
        """
        Zoom by a wheel delta, keeping the world point under (mx, my) fixed.

        The scale factor is exp(-delta_y * ZOOM_RATE), and the resulting scale
        is clamped to [MIN_SCALE, MAX_SCALE].
        """
        prev = self.scale
        # Compared in log space so huge deltas never reach math.exp.
        log_scale = math.log(prev) - delta_y * ZOOM_RATE
        if log_scale >= math.log(MAX_SCALE):
            nxt = MAX_SCALE
        elif log_scale <= math.log(MIN_SCALE):
            nxt = MIN_SCALE
        else:
            nxt = min(MAX_SCALE, max(MIN_SCALE, prev * math.exp(-delta_y * ZOOM_RATE)))
        self.scale = nxt
        self.offset_x = mx - (mx - self.offset_x) * (nxt / prev)
        self.offset_y = my - (my - self.offset_y) * (nxt / prev)

    def visible_bounds(self, width: float, height: float) -> Bounds:
        """World rectangle covered by a width x height screen."""
        x0, y0 = self.screen_to_world(0.0, 0.0)
        x1, y1 = self.screen_to_world(width, height)
        return Bounds(float(x0), float(y0), float(x1), float(y1))
