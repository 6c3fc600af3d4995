# examples/save_and_load.py
import os
import tempfile

from efield_sim import Simulation
from efield_sim.io import load_session, save_session

sim = Simulation.dipole()
sim.add_charge((400, 100), -25)
sim.set_mode("potential")

path = os.path.join(tempfile.gettempdir(), "efield_session.json")
save_session(sim, path)

loaded = load_session(path)
for c in loaded.store:
    print(c.id, c.position, f"{c.microcoulombs:g} µC")
print("mode:", loaded.mode)
