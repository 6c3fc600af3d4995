# MIT License (see LICENSE)
"""
efield_sim - 2D electrostatic field visualization engine.

This package computes the field and potential of point charges by
superposition and traces field lines with an RK4 direction-following
integrator. A headless presentation layer turns the results into drawable
primitives for any graphics backend.

Main entry points:
    - ChargeStore: The set of point charges of one session.
    - field_at, magnitude_at, potential_at: Field engine queries.
    - trace_streamline: Field line integration from a seed point.
    - Simulation: Session with view, history, dirty flag and rendering.

Submodules:
    - core: Field engine and streamline integrator.
    - renderer: View transform, sampling, seeding and renderer adapters.
    - io: JSON serialization of charges and sessions.

Example:
    from efield_sim import ChargeStore, Bounds, FieldConfig, trace_streamline

    store = ChargeStore()
    store.add((250, 300), 50)     # µC
    store.add((550, 300), -50)
    path = trace_streamline(store, (262, 300), Bounds.from_size(800, 600), FieldConfig())
"""
from __future__ import annotations
import logging
import os

from .config import FieldConfig
from .core.field import field_at, magnitude_at, potential_at
from .core.streamline import trace_streamline
from .session import Simulation
from .store import ChargeStore
from .types import Bounds, Charge

__all__ = [
    # Data
    "Charge",
    "ChargeStore",
    "Bounds",
    "FieldConfig",
    # Field engine
    "field_at",
    "magnitude_at",
    "potential_at",
    # Integrator
    "trace_streamline",
    # Session
    "Simulation",
    "configure_logging",
]


def configure_logging(level: int | str | None = None) -> None:
    """
    Set up basic console logging for scripts.

    The level defaults to the EFIELD_SIM_LOG_LEVEL environment variable,
    or WARNING if it is unset.
    """
    if level is None:
        level = os.environ.get("EFIELD_SIM_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
