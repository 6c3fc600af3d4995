# MIT License (see LICENSE)
"""
Sampling of the field engine for drawing.

Two products are built here, both in screen pixels:
- Heatmap: potential or |E| sampled on a regular grid of square cells,
  with the value range needed to normalize it.
- Arrows: unit field direction at the centres of a coarser grid, with a
  log-scaled length.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Iterable

import numpy as np

from ..constants import DEFAULT_EPSILON
from ..core.field import field_on_grid, magnitude_on_grid, potential_on_grid
from ..types import Charge
from .view import View

HEATMAP_MODES = ("potential", "magnitude")

ARROW_BASE: float = 10.0
ARROW_MIN_FIELD: float = 1e-2
ARROW_HEAD_LENGTH: float = 6.0
ARROW_HEAD_WIDTH: float = 4.0


@dataclass
class Heatmap:
    """
    Attributes:
        xs, ys: Screen coordinates of each cell's top-left corner (2D arrays).
        values: Sampled value per cell (V or N/C), same shape as xs.
        vmin, vmax: Range used for normalization.
        cell: Cell size in screen pixels.
    """
    xs: np.ndarray
    ys: np.ndarray
    values: np.ndarray
    vmin: float
    vmax: float
    cell: int

    def normalized(self) -> np.ndarray:
        """Values mapped to [0, 1] with normalize()."""
        return normalize(self.values, self.vmin, self.vmax)


@dataclass(frozen=True)
class Arrow:
    """
    Attributes:
        origin: Screen position of the arrow tail.
        direction: Unit field direction.
        length: Arrow length in screen pixels.
    """
    origin: tuple[float, float]
    direction: tuple[float, float]
    length: float

    @property
    def tip(self) -> tuple[float, float]:
        return (
            self.origin[0] + self.direction[0] * self.length,
            self.origin[1] + self.direction[1] * self.length,
        )


def normalize(value: float | np.ndarray, vmin: float, vmax: float) -> float | np.ndarray:
    """
    Map value to [0, 1] over [vmin, vmax]; a zero range counts as 1.

    value may be a float or a numpy array.
    """
    span = (vmax - vmin) or 1.0
    return (value - vmin) / span


def color_for(t: float) -> tuple[int, int, int]:
    """
    Simple blue-to-red colour map for t in [0, 1].

    Returns an (r, g, b) tuple of ints in [0, 255].
    """
    t = min(1.0, max(0.0, t))
    r = math.floor(255 * t + 0.5)
    g = math.floor(120 * (1 - t) + 0.5)
    b = math.floor(255 * (1 - t) + 0.5)
    return (r, g, b)


def sample_heatmap(
    charges: Iterable[Charge],
    view: View,
    width: float,
    height: float,
    mode: str = "potential",
    eps: float = DEFAULT_EPSILON,
    cell: int = 8,
) -> Heatmap | None:
    """
    Sample potential or field magnitude over the screen.

    For "potential" the range is made symmetric about zero so that V = 0
    always lands in the middle of the colour map.

    Args:
        charges: Charges producing the field.
        view: Current view transform.
        width, height: Screen size in pixels.
        mode: "potential" or "magnitude".
        eps: Softening length in world units.
        cell: Cell size in screen pixels.

    Returns:
        The Heatmap, or None if the value range is not finite.

    Raises:
        ValueError: If mode is not a heatmap mode.
    """
    if mode not in HEATMAP_MODES:
        raise ValueError(f"Unknown heatmap mode: {mode}")

    sx, sy = np.meshgrid(
        np.arange(0, width, cell, dtype=np.float64),
        np.arange(0, height, cell, dtype=np.float64),
    )
    wx = (sx - view.offset_x) / view.scale
    wy = (sy - view.offset_y) / view.scale

    charges = list(charges)
    if mode == "potential":
        values = potential_on_grid(charges, wx, wy, eps)
    else:
        values = magnitude_on_grid(charges, wx, wy, eps)

    if values.size == 0:
        return None
    vmin = float(np.min(values))
    vmax = float(np.max(values))
    if not (math.isfinite(vmin) and math.isfinite(vmax)):
        return None
    if mode == "potential":
        m = max(abs(vmin), abs(vmax))
        vmin, vmax = -m, m
    return Heatmap(xs=sx, ys=sy, values=values, vmin=vmin, vmax=vmax, cell=cell)


def sample_arrows(
    charges: Iterable[Charge],
    view: View,
    width: float,
    height: float,
    eps: float = DEFAULT_EPSILON,
    spacing: float = 40.0,
) -> list[Arrow]:
    """
    Field direction arrows at the centres of a spacing x spacing grid.

    Cells where |E| is not finite or below ARROW_MIN_FIELD get no arrow.
    Length is min(0.9 * spacing, ARROW_BASE + 6 * log10(1 + |E|)).
    """
    sx, sy = np.meshgrid(
        np.arange(spacing / 2, width, spacing, dtype=np.float64),
        np.arange(spacing / 2, height, spacing, dtype=np.float64),
    )
    wx = (sx - view.offset_x) / view.scale
    wy = (sy - view.offset_y) / view.scale
    ex, ey = field_on_grid(list(charges), wx, wy, eps)
    mag = np.hypot(ex, ey)

    arrows = []
    for idx in np.ndindex(mag.shape):
        m = float(mag[idx])
        if not math.isfinite(m) or m < ARROW_MIN_FIELD:
            continue
        length = min(spacing * 0.9, ARROW_BASE + math.log10(1 + m) * 6)
        arrows.append(Arrow(
            origin=(float(sx[idx]), float(sy[idx])),
            direction=(float(ex[idx]) / m, float(ey[idx]) / m),
            length=length,
        ))
    return arrows


def arrowhead(arrow: Arrow) -> list[tuple[float, float]]:
    """Triangle (tip, left, right) in screen pixels for an arrow."""
    ux, uy = arrow.direction
    ex, ey = arrow.tip
    ax, ay = -uy, ux
    return [
        (ex, ey),
        (ex - ux * ARROW_HEAD_LENGTH + ax * ARROW_HEAD_WIDTH,
         ey - uy * ARROW_HEAD_LENGTH + ay * ARROW_HEAD_WIDTH),
        (ex - ux * ARROW_HEAD_LENGTH - ax * ARROW_HEAD_WIDTH,
         ey - uy * ARROW_HEAD_LENGTH - ay * ARROW_HEAD_WIDTH),
    ]
