# MIT License (see LICENSE)
"""
Core type definitions.

- Charge: a point charge with a stable id, a world-space position and a
  signed value in coulombs.
- Bounds: an axis-aligned world-space rectangle used as the region of
  interest for streamline tracing.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .constants import MICRO
from .util import f64


@dataclass
class Charge:
    """
    A point charge.

    Attributes:
        id: Unique identifier assigned by ChargeStore. Never reused until the
            store is cleared.
        position: Position [x, y] in world units.
        charge: Signed charge in Coulombs. Zero is allowed and contributes
                nothing to the field.

    Note:
        Position is converted to a float64 numpy array on init.
    """
    id: int
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    charge: float = 0.0

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.charge = float(self.charge)

    @property
    def microcoulombs(self) -> float:
        """Charge expressed in µC, the unit shown to the user."""
        return self.charge / MICRO

    @property
    def sign(self) -> int:
        if self.charge > 0:
            return 1
        if self.charge < 0:
            return -1
        return 0


@dataclass(frozen=True)
class Bounds:
    """
    Axis-aligned rectangle in world units.

    Attributes:
        xmin, ymin: Lower corner.
        xmax, ymax: Upper corner.
    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @classmethod
    def from_size(cls, width: float, height: float) -> "Bounds":
        """Rectangle spanning (0, 0) to (width, height)."""
        return cls(0.0, 0.0, float(width), float(height))

    def padded(self, margin: float) -> "Bounds":
        """Return a copy grown by margin on every side."""
        return Bounds(
            self.xmin - margin, self.ymin - margin,
            self.xmax + margin, self.ymax + margin,
        )

    def contains(self, point: np.ndarray) -> bool:
        """Closed containment test; NaN coordinates are outside."""
        x, y = point[0], point[1]
        return bool(self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax)
