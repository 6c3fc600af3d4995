# MIT License (see LICENSE)
"""
Physical constants and tuning values used throughout the package.

Positions live in world units (one world unit is one CSS pixel at scale 1).
The physics itself runs in SI units: coordinate differences are converted
to meters with METERS_PER_WORLD before any Coulomb term is evaluated.
"""
from __future__ import annotations

# Coulomb's constant (electrostatic constant), k = 1/(4πε₀)
# Value: 8.9875517923 × 10⁹ N·m²/C²
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?k
K_COULOMB: float = 8.9875517923e9

# 1 world unit = 0.01 m
METERS_PER_WORLD: float = 0.01

# Charges are edited and persisted in µC but stored in C.
MICRO: float = 1e-6

# Visual radius of a charge marker, in world units.
CHARGE_RADIUS: float = 10.0

# Default softening length in world units. The field engine converts it to
# meters and clamps it to MIN_EPSILON_M so r² + ε² is never exactly zero.
DEFAULT_EPSILON: float = 10.0
MIN_EPSILON_M: float = 1e-9

# Streamline integration (world units).
DEFAULT_STEP: float = 4.0
MIN_STEP: float = 0.1
DEFAULT_MAX_STEPS: int = 300
STOP_DISTANCE: float = CHARGE_RADIUS * 0.6
VIEW_MARGIN: float = 100.0
STAGNATION_EPS: float = 1e-3
