# examples/single_streamline.py
from efield_sim import Bounds, ChargeStore, FieldConfig, trace_streamline

store = ChargeStore()
store.add((250, 300), 50)     # µC
store.add((550, 300), -50)
store.add((400, 150), 20)

cfg = FieldConfig(epsilon=10, max_steps=500)
path = trace_streamline(store, (262, 300), Bounds.from_size(800, 600), cfg)

print("points:", len(path))
print("start:", path[0] if len(path) else None)
print("end:", path[-1] if len(path) else None)
