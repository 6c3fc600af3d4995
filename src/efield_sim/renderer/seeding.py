# MIT License (see LICENSE)
"""
Streamline seeding policy.

Seeds are placed on a ring just outside each charge marker. The number of
seeds grows with the charge magnitude, with a floor and a cap.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Iterable

import numpy as np

from ..config import FieldConfig
from ..constants import CHARGE_RADIUS
from ..core.streamline import trace_streamline
from ..types import Bounds, Charge


@dataclass
class SeedPolicy:
    """
    Attributes:
        num_seeds: Seeds for a charge of reference_uc (default: 30).
        floor: Minimum seeds per charge (default: 6).
        cap: Maximum multiple of num_seeds (default: 4).
        reference_uc: Charge magnitude in µC that gets num_seeds (default: 50).
        radius_factor: Seed ring radius as a multiple of CHARGE_RADIUS.
    """
    num_seeds: int = 30
    floor: int = 6
    cap: float = 4.0
    reference_uc: float = 50.0
    radius_factor: float = 1.2

    def count(self, charge: Charge) -> int:
        """Number of seeds for a charge; 0 if its value is not finite."""
        if not math.isfinite(charge.charge):
            return 0
        ratio = min(self.cap, abs(charge.microcoulombs) / self.reference_uc)
        return max(self.floor, math.floor(self.num_seeds * ratio + 0.5))

    def seeds(self, charge: Charge) -> np.ndarray:
        """Seed points (N, 2) evenly spaced on the ring, starting at angle 0."""
        n = self.count(charge)
        if n == 0:
            return np.empty((0, 2), dtype=np.float64)
        r = CHARGE_RADIUS * self.radius_factor
        ang = (2 * np.pi / n) * np.arange(n)
        return np.column_stack((
            charge.position[0] + r * np.cos(ang),
            charge.position[1] + r * np.sin(ang),
        ))

    def trace_all(
        self,
        charges: Iterable[Charge],
        bounds: Bounds,
        config: FieldConfig,
    ) -> list[tuple[Charge, np.ndarray]]:
        """
        Trace every seed of every charge.

        Returns:
            List of (source charge, path) for drawable paths (>= 2 points).
        """
        charges = list(charges)
        out = []
        for c in charges:
            for seed in self.seeds(c):
                path = trace_streamline(charges, seed, bounds, config)
                if len(path) >= 2:
                    out.append((c, path))
        return out
