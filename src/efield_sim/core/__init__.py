# MIT License (see LICENSE)
"""
Core numeric components.

This subpackage provides:
    - Field engine: softened Coulomb field, magnitude and potential by
      superposition, for single points and for whole grids.
    - Streamline integrator: RK4 tracing of field lines along the unit
      field direction.

Typical usage:
    from efield_sim.core import field_at, trace_streamline

    E = field_at(store, (400, 300), eps=10)
    path = trace_streamline(store, (262, 300), Bounds.from_size(800, 600))
"""
from .field import (
    field_at,
    magnitude_at,
    potential_at,
    field_on_grid,
    magnitude_on_grid,
    potential_on_grid,
)
from .streamline import (
    field_direction,
    rk4_direction_step,
    near_any_charge,
    trace_streamline,
)

__all__ = [
    # Field engine
    "field_at",
    "magnitude_at",
    "potential_at",
    "field_on_grid",
    "magnitude_on_grid",
    "potential_on_grid",
    # Streamlines
    "field_direction",
    "rk4_direction_step",
    "near_any_charge",
    "trace_streamline",
]
