# MIT License (see LICENSE)
"""
Presentation layer.

This subpackage turns field engine output into drawable primitives:
    - View: screen/world transform with pan and cursor-anchored zoom.
    - Sampling: heatmap grids, field arrows and the colour map.
    - SeedPolicy: where streamlines start around each charge.
    - FieldRenderer: abstract drawing interface, with DebugRenderer,
      NullRenderer and BufferedRenderer implementations.

Typical usage:
    from efield_sim.renderer import DebugRenderer

    sim.render(DebugRenderer())
"""
from .view import View
from .seeding import SeedPolicy
from .sampling import (
    Arrow,
    Heatmap,
    arrowhead,
    color_for,
    normalize,
    sample_arrows,
    sample_heatmap,
)
from .adapter import (
    FieldRenderer,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "View",
    "SeedPolicy",
    # Sampling
    "Arrow",
    "Heatmap",
    "arrowhead",
    "color_for",
    "normalize",
    "sample_arrows",
    "sample_heatmap",
    # Adapters
    "FieldRenderer",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
