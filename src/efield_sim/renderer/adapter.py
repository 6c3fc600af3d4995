# MIT License (see LICENSE)
"""
Renderer adapters for field visualization.

The numeric core has no drawing dependency. A frame is described to a
FieldRenderer as a sequence of primitive calls in screen pixels; concrete
adapters forward them to a graphics backend, print them, or record them.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
import math
import sys
from typing import TextIO

import numpy as np

from ..types import Charge
from .sampling import Arrow, Heatmap, arrowhead, color_for

POSITIVE_LINE = (220, 40, 40)
NEGATIVE_LINE = (45, 120, 220)
POSITIVE_FILL = (0xEF, 0x53, 0x50)
NEGATIVE_FILL = (0x42, 0xA5, 0xF5)


def charge_label(charge: Charge) -> str:
    """Marker label: the charge rounded to whole µC."""
    return f"{math.floor(charge.microcoulombs + 0.5)}µC"


def line_color(charge: Charge) -> tuple[int, int, int]:
    """Streamline colour for lines seeded around charge."""
    return POSITIVE_LINE if charge.charge > 0 else NEGATIVE_LINE


def fill_color(charge: Charge) -> tuple[int, int, int]:
    return POSITIVE_FILL if charge.charge > 0 else NEGATIVE_FILL


class FieldRenderer(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer.begin_frame(width, height)
        renderer.draw_heatmap(heatmap)
        for charge, path in streamlines:
            renderer.draw_streamline(screen_points, line_color(charge))
        for arrow in arrows:
            renderer.draw_arrow(arrow)
        for charge in store:
            renderer.draw_charge(charge, screen_pos, radius)
        renderer.end_frame()

    Simulation.render() issues exactly this sequence.
    """

    @abstractmethod
    def begin_frame(self, width: float, height: float) -> None:
        """Start a frame and clear the drawing surface."""
        ...

    @abstractmethod
    def draw_cell(self, x: float, y: float, size: float, color: tuple[int, int, int]) -> None:
        """Fill one square heatmap cell with its top-left corner at (x, y)."""
        ...

    @abstractmethod
    def draw_streamline(self, points: np.ndarray, color: tuple[int, int, int]) -> None:
        """Stroke a polyline given as an (N, 2) array of screen points."""
        ...

    @abstractmethod
    def draw_arrow(self, arrow: Arrow) -> None:
        """Draw one field direction arrow."""
        ...

    @abstractmethod
    def draw_charge(self, charge: Charge, center: np.ndarray, radius: float) -> None:
        """Draw a charge marker at a screen position."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def draw_heatmap(self, heatmap: Heatmap) -> None:
        """Convenience method: draw every cell of a heatmap."""
        t = heatmap.normalized()
        for idx in np.ndindex(t.shape):
            self.draw_cell(
                float(heatmap.xs[idx]),
                float(heatmap.ys[idx]),
                heatmap.cell,
                color_for(float(t[idx])),
            )


class DebugRenderer(FieldRenderer):
    """
    Text renderer for development and testing.

    Heatmap cells are counted rather than printed.

    Output:
        === Frame 800x600 ===
        streamline n=57 (220, 40, 40) from (262.0, 300.0)
        arrow (20.0, 20.0) -> (0.71, 0.71) len=36.00
        [0] +50µC @ (250.00, 300.00)
        cells=7500
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, also print streamlines and arrows.
        """
        self.output = output or sys.stdout
        self.verbose = verbose
        self._cells = 0

    def begin_frame(self, width: float, height: float) -> None:
        self._cells = 0
        self.output.write(f"=== Frame {width:g}x{height:g} ===\n")

    def draw_cell(self, x, y, size, color) -> None:
        self._cells += 1

    def draw_streamline(self, points, color) -> None:
        if self.verbose:
            x0, y0 = points[0]
            self.output.write(f"streamline n={len(points)} {color} from ({x0:.1f}, {y0:.1f})\n")

    def draw_arrow(self, arrow: Arrow) -> None:
        if self.verbose:
            (x, y), (ux, uy) = arrow.origin, arrow.direction
            self.output.write(
                f"arrow ({x:.1f}, {y:.1f}) -> ({ux:.2f}, {uy:.2f}) len={arrow.length:.2f}\n"
            )

    def draw_charge(self, charge: Charge, center, radius) -> None:
        sign = "+" if charge.charge > 0 else ""
        self.output.write(
            f"[{charge.id}] {sign}{charge_label(charge)} @ ({center[0]:.2f}, {center[1]:.2f})\n"
        )

    def end_frame(self) -> None:
        if self._cells:
            self.output.write(f"cells={self._cells}\n")
        self.output.write("\n")
        self.output.flush()


class NullRenderer(FieldRenderer):
    """No-op renderer, for benchmarks that only measure sampling cost."""

    def begin_frame(self, width, height) -> None:
        pass

    def draw_cell(self, x, y, size, color) -> None:
        pass

    def draw_streamline(self, points, color) -> None:
        pass

    def draw_arrow(self, arrow) -> None:
        pass

    def draw_charge(self, charge, center, radius) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(FieldRenderer):
    """
    Renderer that records each frame as a dict.

    Example:
        renderer = BufferedRenderer()
        sim.render(renderer)
        frame = renderer.frames[-1]
        print(len(frame["streamlines"]), len(frame["charges"]))
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, width, height) -> None:
        self._current_frame = {
            "size": (width, height),
            "cells": [],
            "streamlines": [],
            "arrows": [],
            "charges": [],
        }

    def draw_cell(self, x, y, size, color) -> None:
        if self._current_frame is None:
            return
        self._current_frame["cells"].append({"x": x, "y": y, "size": size, "color": color})

    def draw_streamline(self, points, color) -> None:
        if self._current_frame is None:
            return
        self._current_frame["streamlines"].append({
            "points": np.asarray(points).tolist(),
            "color": color,
        })

    def draw_arrow(self, arrow: Arrow) -> None:
        if self._current_frame is None:
            return
        self._current_frame["arrows"].append({
            "origin": arrow.origin,
            "tip": arrow.tip,
            "head": arrowhead(arrow),
        })

    def draw_charge(self, charge: Charge, center, radius) -> None:
        if self._current_frame is None:
            return
        self._current_frame["charges"].append({
            "id": charge.id,
            "center": np.asarray(center).tolist(),
            "radius": radius,
            "label": charge_label(charge),
            "color": fill_color(charge),
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Clear all buffered frames."""
        self.frames.clear()
