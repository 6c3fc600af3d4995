# MIT License (see LICENSE)
"""
The interactive simulation session.

Simulation is the headless counterpart of the canvas application. It owns:
- One ChargeStore and the FieldConfig used to query it.
- The View transform, screen size and visualization mode.
- Undo/redo history of exact charge-list snapshots.
- The dirty flag: every mutation sets it, render() clears it.

Structure:
    - User creates a Simulation (or Simulation.dipole()).
    - UI handlers call add_charge(), move_charge(), undo(), ...
    - The frame loop calls render(renderer) every tick; nothing is drawn
      unless something changed.
"""
from __future__ import annotations
from contextlib import nullcontext
from dataclasses import dataclass, field
import logging
from typing import Any, Iterable, Mapping

import numpy as np

from .config import FieldConfig
from .constants import CHARGE_RADIUS
from .profiler import Profiler
from .renderer.adapter import FieldRenderer, line_color
from .renderer.sampling import HEATMAP_MODES, sample_arrows, sample_heatmap
from .renderer.seeding import SeedPolicy
from .renderer.view import View
from .store import ChargeStore
from .types import Bounds, Charge

logger = logging.getLogger(__name__)

MODES = ("streamlines",) + HEATMAP_MODES

# Undo entry: (id, x, y, charge in C) per charge.
Snapshot = list[tuple[int, float, float, float]]

# Picking radius around a charge marker, in world units.
PICK_RADIUS: float = CHARGE_RADIUS * 1.2


@dataclass
class Simulation:
    """
    Attributes:
        width, height: Screen size in pixels (default: 800x600).
        mode: "streamlines", "potential" or "magnitude".
        show_streamlines: Also draw streamlines over a heatmap.
        show_vectors: Draw field direction arrows.
        history_limit: Maximum undo snapshots kept (default: 60).
        config: Softening length and streamline parameters.
        seed_policy: Streamline seeding around charges.
        view: Screen/world transform.
        store: The charges.
        profiler: Optional Profiler for render-pass timing.
        dirty: True when the next render() must redraw.
    """
    width: float = 800.0
    height: float = 600.0
    mode: str = "streamlines"
    show_streamlines: bool = False
    show_vectors: bool = False
    history_limit: int = 60
    config: FieldConfig = field(default_factory=FieldConfig)
    seed_policy: SeedPolicy = field(default_factory=SeedPolicy)
    view: View = field(default_factory=View)
    store: ChargeStore = field(default_factory=ChargeStore)
    profiler: Profiler | None = None
    dirty: bool = True

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Unknown visualization mode: {self.mode}")
        self._undo: list[Snapshot] = []
        self._redo: list[Snapshot] = []

    @classmethod
    def dipole(cls, **kwargs: Any) -> "Simulation":
        """Default scene: +50 µC at (250, 300) and -50 µC at (550, 300)."""
        sim = cls(**kwargs)
        sim.store.add((250.0, 300.0), 50.0)
        sim.store.add((550.0, 300.0), -50.0)
        return sim

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def mark_dirty(self) -> None:
        self.dirty = True

    def set_mode(self, mode: str) -> None:
        """
        Raises:
            ValueError: If mode is not one of MODES.
        """
        if mode not in MODES:
            raise ValueError(f"Unknown visualization mode: {mode}")
        self.mode = mode
        self.mark_dirty()

    def resize(self, width: float, height: float) -> None:
        if (width, height) != (self.width, self.height):
            self.width, self.height = float(width), float(height)
            self.mark_dirty()

    def pan(self, dx: float, dy: float) -> None:
        self.view.pan(dx, dy)
        self.mark_dirty()

    def zoom_at(self, mx: float, my: float, delta_y: float) -> None:
        self.view.zoom_at(mx, my, delta_y)
        self.mark_dirty()

    def bounds(self) -> Bounds:
        """World rectangle currently on screen."""
        return self.view.visible_bounds(self.width, self.height)

    def find_charge_at(self, point: tuple[float, float] | np.ndarray) -> int:
        """Index of the charge under a world point, or -1."""
        return self.store.find_at(point, PICK_RADIUS)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def push_undo(self) -> None:
        """Record the current charge list; clears the redo history."""
        self._undo.append(self.store.snapshot())
        if len(self._undo) > self.history_limit:
            self._undo.pop(0)
        self._redo.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> bool:
        """Restore the previous charge list. Returns False if there is none."""
        if not self._undo:
            return False
        self._redo.append(self.store.snapshot())
        self.store.restore(self._undo.pop())
        logger.debug("undo: %d charges, %d steps left", len(self.store), len(self._undo))
        self.mark_dirty()
        return True

    def redo(self) -> bool:
        """Re-apply the last undone change. Returns False if there is none."""
        if not self._redo:
            return False
        self._undo.append(self.store.snapshot())
        self.store.restore(self._redo.pop())
        logger.debug("redo: %d charges", len(self.store))
        self.mark_dirty()
        return True

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_charge(self, position: tuple[float, float] | np.ndarray, charge_uc: float) -> Charge:
        """Add a charge (value in µC) at a world position."""
        self.push_undo()
        c = self.store.add(position, charge_uc)
        self.mark_dirty()
        return c

    def remove_charge(self, index: int) -> bool:
        """Remove the charge at index. Out-of-range indices change nothing."""
        if not 0 <= index < len(self.store):
            return False
        self.push_undo()
        self.store.remove(index)
        self.mark_dirty()
        return True

    def move_charge(
        self,
        index: int,
        position: tuple[float, float] | np.ndarray,
        record: bool = True,
    ) -> None:
        """
        Move the charge at index to a world position.

        A drag calls this on every pointer move; pass record=False after the
        first call so the whole drag is a single undo step.
        """
        if not 0 <= index < len(self.store):
            return
        if record:
            self.push_undo()
        self.store.move(index, position)
        self.mark_dirty()

    def set_charge_value(self, index: int, charge_uc: float) -> None:
        """Set the value (µC) of the charge at index."""
        if not 0 <= index < len(self.store):
            return
        self.push_undo()
        self.store.set_value(index, charge_uc)
        self.mark_dirty()

    def clear(self) -> None:
        """Remove all charges; ids start again from 0."""
        self.push_undo()
        self.store.clear()
        self.mark_dirty()

    def load_records(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Replace all charges from {x, y, q[µC], id?} records."""
        self.push_undo()
        self.store.replace_all(records)
        logger.info("loaded %d charges", len(self.store))
        self.mark_dirty()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    def streamlines(self) -> list[tuple[Charge, np.ndarray]]:
        """Drawable streamlines (world coordinates) for the current state."""
        return self.seed_policy.trace_all(self.store, self.bounds(), self.config)

    def render(self, renderer: FieldRenderer, force: bool = False) -> bool:
        """
        Draw one frame if anything changed since the last one.

        Order: heatmap (potential/magnitude modes), streamlines, arrows,
        then charge markers on top.

        Args:
            renderer: Target adapter.
            force: Draw even if the state is not dirty.

        Returns:
            True if a frame was drawn.
        """
        if not (self.dirty or force):
            return False

        view = self.view
        renderer.begin_frame(self.width, self.height)

        if self.mode in HEATMAP_MODES:
            with self._section("heatmap"):
                heatmap = sample_heatmap(
                    self.store, view, self.width, self.height,
                    mode=self.mode, eps=self.config.epsilon,
                )
                if heatmap is not None:
                    renderer.draw_heatmap(heatmap)

        if self.mode == "streamlines" or self.show_streamlines:
            with self._section("streamlines"):
                for charge, path in self.streamlines():
                    screen = path * view.scale + np.array([view.offset_x, view.offset_y])
                    renderer.draw_streamline(screen, line_color(charge))

        if self.show_vectors:
            with self._section("vectors"):
                for arrow in sample_arrows(
                    self.store, view, self.width, self.height, eps=self.config.epsilon,
                ):
                    renderer.draw_arrow(arrow)

        with self._section("charges"):
            radius = max(6.0, CHARGE_RADIUS * view.scale)
            for c in self.store:
                renderer.draw_charge(c, view.world_to_screen(*c.position), radius)

        renderer.end_frame()
        self.dirty = False
        return True
