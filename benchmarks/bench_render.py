"""
Microbenchmark: render-pass time vs number of charges.
Run:
  python benchmarks/bench_render.py
"""
import time
import numpy as np
from efield_sim.session import Simulation
from efield_sim.profiler import Profiler
from efield_sim.renderer import NullRenderer


def run(n: int, frames: int = 5):
    prof = Profiler()
    sim = Simulation(profiler=prof, show_vectors=True)

    rng = np.random.default_rng(12345)  # determinism
    for _ in range(n):
        x = float(rng.uniform(50, 750))
        y = float(rng.uniform(50, 550))
        q = float(rng.choice([-1.0, 1.0]) * rng.uniform(10, 80))
        sim.store.add((x, y), q)

    renderer = NullRenderer()
    t0 = time.perf_counter()
    for _ in range(frames):
        sim.render(renderer, force=True)
    t1 = time.perf_counter()

    return (t1 - t0) / frames, prof.stats.summary()


if __name__ == "__main__":
    for n in [2, 5, 10, 20]:
        per_frame, summary = run(n)
        print(f"N={n:3d}  frame={1e3*per_frame:9.2f} ms")
        for k in ["streamlines", "vectors", "charges"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
