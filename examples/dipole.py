# examples/dipole.py
from efield_sim import Simulation, configure_logging
from efield_sim.core import potential_at, magnitude_at
from efield_sim.renderer import DebugRenderer

configure_logging()

sim = Simulation.dipole()

print("V(mid):", potential_at(sim.store, (400, 300), eps=sim.config.epsilon))
print("|E|(mid):", magnitude_at(sim.store, (400, 300), eps=sim.config.epsilon))

sim.render(DebugRenderer(verbose=False))

lines = sim.streamlines()
print("streamlines:", len(lines))
print("longest:", max(len(p) for _, p in lines), "points")
