# MIT License (see LICENSE)
"""
Timing of render-pass sections.

Simulation.render() wraps each phase (heatmap, streamlines, vectors,
charges) in a named section when a Profiler is attached.

Example:
    profiler = Profiler()
    sim = Simulation.dipole(profiler=profiler)
    sim.render(NullRenderer())
    profiler.log_summary()
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class ProfileStats:
    """Timing samples in seconds, keyed by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms', 'total_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * (sum(times) / n),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * sum(times),
            }
        return out


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    def section(self, name: str):
        """Return a context manager that records the time spent inside it."""
        profiler = self

        class _Section:
            def __enter__(self):
                self.t0 = time.perf_counter()

            def __exit__(self, exc_type, exc, tb):
                profiler.stats.add(name, time.perf_counter() - self.t0)

        return _Section()

    def reset(self) -> None:
        self.stats = ProfileStats()

    def log_summary(self, level: int = logging.INFO) -> None:
        """Write one log line per section."""
        for name, s in sorted(self.stats.summary().items()):
            logger.log(level, "%-12s n=%-5d mean=%.3fms max=%.3fms",
                       name, s["n"], s["mean_ms"], s["max_ms"])
