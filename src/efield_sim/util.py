# MIT License (see LICENSE)
"""
Utility functions for 2D vector math.

All helpers operate on 2D vectors represented as numpy arrays of shape (2,).
"""
from __future__ import annotations
import math

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples or lists for points and positions.
    """
    return np.array(x, dtype=np.float64)


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return math.hypot(float(v[0]), float(v[1]))


def unit(v: np.ndarray) -> np.ndarray:
    """
    Return the unit vector in the direction of v.

    Returns the zero vector if |v| is zero or not finite, so callers never
    see NaN from a degenerate field sample.
    """
    n = norm(v)
    if n == 0.0 or not math.isfinite(n):
        return np.zeros(2, dtype=np.float64)
    return v / n


def is_finite(v: np.ndarray) -> bool:
    """True if every component of v is finite."""
    return bool(np.all(np.isfinite(v)))
