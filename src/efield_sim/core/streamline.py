# MIT License (see LICENSE)
"""
Streamline integration.

A field line is a curve everywhere tangent to E. We trace it by solving the
autonomous ODE

    dr/ds = E(r) / |E(r)|

with classical fixed-step RK4, where s is arc length in world units. Using
the unit direction instead of E itself keeps the step length constant no
matter how strong the field is, so the path does not blow up near charges.

Tracing never raises. Any anomaly (leaving the viewport, reaching a charge,
a non-finite step, stagnation, or an exhausted step budget) simply ends the
path early; a partial field line is a normal result.

Reference:
    https://en.wikipedia.org/wiki/Runge-Kutta_methods#The_Runge-Kutta_method
"""
from __future__ import annotations
import math
from typing import Iterable

import numpy as np

from ..config import FieldConfig
from ..constants import DEFAULT_EPSILON, STAGNATION_EPS
from ..types import Bounds, Charge
from ..util import f64, is_finite, unit
from .field import field_at


def field_direction(
    charges: Iterable[Charge],
    point: np.ndarray,
    eps: float = DEFAULT_EPSILON,
) -> np.ndarray:
    """
    Unit field direction at point.

    Zero vector when the field magnitude is zero or not finite.
    """
    return unit(field_at(charges, point, eps))


def rk4_direction_step(
    charges: Iterable[Charge],
    point: np.ndarray,
    h: float,
    eps: float = DEFAULT_EPSILON,
) -> np.ndarray:
    """
    Advance point by one RK4 step of arc length h along the field direction.

    Stages are evaluated at p, p + k1/2, p + k2/2 and p + k3 and combined
    with weights (1, 2, 2, 1)/6. A stage with a degenerate direction
    contributes zero; the others still move the point.

    Args:
        charges: Charges producing the field.
        point: Current point [x, y] in world units.
        h: Step length in world units.
        eps: Softening length in world units.

    Returns:
        The next point.
    """
    charges = list(charges)
    k1 = h * field_direction(charges, point, eps)
    k2 = h * field_direction(charges, point + 0.5 * k1, eps)
    k3 = h * field_direction(charges, point + 0.5 * k2, eps)
    k4 = h * field_direction(charges, point + k3, eps)
    return point + (k1 + 2 * k2 + 2 * k3 + k4) / 6.0


def near_any_charge(charges: Iterable[Charge], point: np.ndarray, radius: float) -> bool:
    """True if point lies within radius (world units) of any charge."""
    px, py = float(point[0]), float(point[1])
    for c in charges:
        if math.hypot(px - c.position[0], py - c.position[1]) <= radius:
            return True
    return False


def trace_streamline(
    charges: Iterable[Charge],
    seed: tuple[float, float] | np.ndarray,
    bounds: Bounds,
    config: FieldConfig | None = None,
) -> np.ndarray:
    """
    Trace one field line starting at seed.

    Each iteration checks, in order:
        1. current point outside bounds padded by config.margin -> stop
        2. current point within config.stop_distance of a charge -> stop
        3. next point has a non-finite coordinate -> stop
        4. next point moved less than STAGNATION_EPS -> stop
    and otherwise appends the next point. At most config.max_steps points
    are produced. The seed itself is not part of the path.

    Args:
        charges: Charges producing the field (read-only).
        seed: Start point [x, y] in world units.
        bounds: Region of interest in world units (usually the viewport).
        config: Softening length, step length and stop parameters.

    Returns:
        Array of shape (N, 2) with N <= config.max_steps. Paths with fewer
        than 2 points are not drawable; discarding them is up to the caller.
    """
    cfg = config or FieldConfig()
    charges = list(charges)
    region = bounds.padded(cfg.margin)
    h = cfg.step_length

    path: list[np.ndarray] = []
    p = f64(seed)
    for _ in range(max(0, int(cfg.max_steps))):
        if not region.contains(p):
            break
        if near_any_charge(charges, p, cfg.stop_distance):
            break

        nxt = rk4_direction_step(charges, p, h, cfg.epsilon)
        if not is_finite(nxt):
            break
        if math.hypot(nxt[0] - p[0], nxt[1] - p[1]) < STAGNATION_EPS:
            break

        path.append(nxt)
        p = nxt

    if not path:
        return np.empty((0, 2), dtype=np.float64)
    return np.array(path, dtype=np.float64)
