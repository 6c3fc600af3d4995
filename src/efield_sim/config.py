# MIT License (see LICENSE)
"""
Numeric configuration for field evaluation and streamline tracing.

A FieldConfig is passed explicitly to every query that needs it, so the
core never reads presentation state. Changing a field takes effect on the
next call.
"""
from __future__ import annotations
from dataclasses import dataclass

from .constants import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_STEPS,
    DEFAULT_STEP,
    MIN_STEP,
    STOP_DISTANCE,
    VIEW_MARGIN,
)


@dataclass
class FieldConfig:
    """
    Attributes:
        epsilon: Softening length in world units (default: 10).
        step: Streamline arc-length step in world units (default: 4).
        min_step: Lower clamp for step (default: 0.1).
        max_steps: Step budget per streamline (default: 300).
        stop_distance: Absorbing radius around each charge (default: 6).
        margin: Padding added around the viewport before a streamline is
                considered to have left it (default: 100).
    """
    epsilon: float = DEFAULT_EPSILON
    step: float = DEFAULT_STEP
    min_step: float = MIN_STEP
    max_steps: int = DEFAULT_MAX_STEPS
    stop_distance: float = STOP_DISTANCE
    margin: float = VIEW_MARGIN

    @property
    def step_length(self) -> float:
        """Step actually used by the integrator."""
        return max(self.min_step, self.step)
