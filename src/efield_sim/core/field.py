# MIT License (see LICENSE)
"""
Electrostatic field engine.

Superposition of softened Coulomb terms over a set of point charges:

    E(p) = Σ k q (p - c) / (|p - c|² + ε²)^(3/2)
    V(p) = Σ k q / (|p - c|² + ε²)^(1/2)

Points and charge positions are in world units; coordinate differences are
converted to meters before evaluation, so E is in N/C and V in volts.
The softening length ε is given in world units and clamped to
MIN_EPSILON_M after conversion, so the denominators are never exactly zero.

All functions are pure queries over an iterable of Charge objects (usually
a ChargeStore). An empty charge set yields a zero field and zero potential.
"""
from __future__ import annotations
import math
from typing import Iterable

import numpy as np

from ..constants import DEFAULT_EPSILON, K_COULOMB, METERS_PER_WORLD, MIN_EPSILON_M
from ..types import Charge


def epsilon_meters(eps: float) -> float:
    """Convert a softening length in world units to meters, clamped > 0."""
    return max(MIN_EPSILON_M, eps * METERS_PER_WORLD)


def field_at(
    charges: Iterable[Charge],
    point: tuple[float, float] | np.ndarray,
    eps: float = DEFAULT_EPSILON,
) -> np.ndarray:
    """
    Electric field vector [Ex, Ey] in N/C at a world-space point.

    A charge whose softened cubed distance underflows to zero is skipped
    rather than producing inf/NaN.

    Args:
        charges: Charges to superpose.
        point: Query point [x, y] in world units.
        eps: Softening length in world units.
    """
    eps_m = epsilon_meters(eps)
    eps2 = eps_m * eps_m
    x_m = float(point[0]) * METERS_PER_WORLD
    y_m = float(point[1]) * METERS_PER_WORLD

    ex = 0.0
    ey = 0.0
    for c in charges:
        dx = x_m - c.position[0] * METERS_PER_WORLD
        dy = y_m - c.position[1] * METERS_PER_WORLD
        r2 = dx * dx + dy * dy + eps2
        r3 = r2 * math.sqrt(r2)
        if r3 == 0.0:
            continue
        factor = K_COULOMB * c.charge / r3
        ex += factor * dx
        ey += factor * dy
    return np.array([ex, ey], dtype=np.float64)


def magnitude_at(
    charges: Iterable[Charge],
    point: tuple[float, float] | np.ndarray,
    eps: float = DEFAULT_EPSILON,
) -> float:
    """|E| in N/C at a world-space point."""
    e = field_at(charges, point, eps)
    return math.hypot(e[0], e[1])


def potential_at(
    charges: Iterable[Charge],
    point: tuple[float, float] | np.ndarray,
    eps: float = DEFAULT_EPSILON,
) -> float:
    """
    Electric potential in volts at a world-space point.

    Uses the same softening as field_at with a single power of the softened
    distance in the denominator.
    """
    eps_m = epsilon_meters(eps)
    eps2 = eps_m * eps_m
    x_m = float(point[0]) * METERS_PER_WORLD
    y_m = float(point[1]) * METERS_PER_WORLD

    v = 0.0
    for c in charges:
        dx = x_m - c.position[0] * METERS_PER_WORLD
        dy = y_m - c.position[1] * METERS_PER_WORLD
        r = math.sqrt(dx * dx + dy * dy + eps2)
        v += K_COULOMB * c.charge / r
    return v


# =============================================================================
# Grid evaluation
# =============================================================================

def field_on_grid(
    charges: Iterable[Charge],
    xs: np.ndarray,
    ys: np.ndarray,
    eps: float = DEFAULT_EPSILON,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Evaluate field_at over arrays of world coordinates.

    Args:
        charges: Charges to superpose.
        xs, ys: Arrays of the same shape (e.g. from np.meshgrid).
        eps: Softening length in world units.

    Returns:
        Tuple (Ex, Ey) of arrays shaped like xs.
    """
    eps_m = epsilon_meters(eps)
    x_m = np.asarray(xs, dtype=np.float64) * METERS_PER_WORLD
    y_m = np.asarray(ys, dtype=np.float64) * METERS_PER_WORLD

    ex = np.zeros_like(x_m)
    ey = np.zeros_like(y_m)
    for c in charges:
        dx = x_m - c.position[0] * METERS_PER_WORLD
        dy = y_m - c.position[1] * METERS_PER_WORLD
        r2 = dx * dx + dy * dy + eps_m * eps_m
        r3 = r2 * np.sqrt(r2)
        with np.errstate(divide="ignore", invalid="ignore"):
            factor = np.where(r3 != 0.0, K_COULOMB * c.charge / r3, 0.0)
        ex += factor * dx
        ey += factor * dy
    return ex, ey


def magnitude_on_grid(
    charges: Iterable[Charge],
    xs: np.ndarray,
    ys: np.ndarray,
    eps: float = DEFAULT_EPSILON,
) -> np.ndarray:
    """Evaluate magnitude_at over arrays of world coordinates."""
    ex, ey = field_on_grid(charges, xs, ys, eps)
    return np.hypot(ex, ey)


def potential_on_grid(
    charges: Iterable[Charge],
    xs: np.ndarray,
    ys: np.ndarray,
    eps: float = DEFAULT_EPSILON,
) -> np.ndarray:
    """Evaluate potential_at over arrays of world coordinates."""
    eps_m = epsilon_meters(eps)
    x_m = np.asarray(xs, dtype=np.float64) * METERS_PER_WORLD
    y_m = np.asarray(ys, dtype=np.float64) * METERS_PER_WORLD

    v = np.zeros_like(x_m)
    for c in charges:
        dx = x_m - c.position[0] * METERS_PER_WORLD
        dy = y_m - c.position[1] * METERS_PER_WORLD
        v += K_COULOMB * c.charge / np.sqrt(dx * dx + dy * dy + eps_m * eps_m)
    return v
