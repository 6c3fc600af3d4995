import io
import math

import numpy as np
import pytest

from efield_sim.renderer import (
    Arrow,
    DebugRenderer,
    Heatmap,
    SeedPolicy,
    View,
    arrowhead,
    color_for,
    normalize,
    sample_arrows,
    sample_heatmap,
)
from efield_sim.session import Simulation
from efield_sim.store import ChargeStore
from efield_sim.types import Bounds, Charge
from efield_sim.config import FieldConfig


def dipole() -> ChargeStore:
    store = ChargeStore()
    store.add((250, 300), 50)
    store.add((550, 300), -50)
    return store


def test_potential_heatmap_is_symmetric():
    hm = sample_heatmap(dipole(), View(), 800, 600, mode="potential")
    print("range", hm.vmin, hm.vmax)

    assert hm.values.shape == (75, 100)
    assert hm.vmin == -hm.vmax
    # Cell at screen (400, 296) is on the perpendicular bisector.
    assert hm.xs[37, 50] == 400.0 and hm.ys[37, 50] == 296.0
    assert abs(hm.values[37, 50]) < 1e-6
    assert hm.normalized()[37, 50] == pytest.approx(0.5)


def test_magnitude_heatmap_is_positive():
    hm = sample_heatmap(dipole(), View(), 400, 300, mode="magnitude", cell=20)
    assert hm.values.shape == (15, 20)
    assert hm.vmin >= 0.0
    assert hm.vmax == pytest.approx(float(hm.values.max()))


def test_heatmap_rejects_unknown_mode():
    with pytest.raises(ValueError):
        sample_heatmap(dipole(), View(), 100, 100, mode="streamlines")


def test_normalize_and_colors():
    assert normalize(5.0, 0.0, 10.0) == 0.5
    assert normalize(5.0, 5.0, 5.0) == 0.0
    flat = Heatmap(xs=np.zeros((1, 3)), ys=np.zeros((1, 3)),
                   values=np.full((1, 3), 7.0), vmin=7.0, vmax=7.0, cell=8)
    np.testing.assert_array_equal(flat.normalized(), np.zeros((1, 3)))
    assert color_for(0.0) == (0, 120, 255)
    assert color_for(1.0) == (255, 0, 0)
    assert color_for(0.5) == (128, 60, 128)
    assert color_for(2.0) == (255, 0, 0)


def test_arrows():
    assert sample_arrows(ChargeStore(), View(), 800, 600) == []

    arrows = sample_arrows(dipole(), View(), 800, 600)
    assert len(arrows) == 20 * 15
    for a in arrows:
        assert 10.0 <= a.length <= 36.0
        assert math.hypot(*a.direction) == pytest.approx(1.0)
    assert arrows[0].origin == (20.0, 20.0)


def test_arrowhead_geometry():
    head = arrowhead(Arrow(origin=(0.0, 0.0), direction=(1.0, 0.0), length=20.0))
    assert head == [(20.0, 0.0), (14.0, 4.0), (14.0, -4.0)]


def test_seed_counts():
    policy = SeedPolicy()
    assert policy.count(Charge(0, (0, 0), 50e-6)) == 30
    assert policy.count(Charge(0, (0, 0), 5e-6)) == 6
    assert policy.count(Charge(0, (0, 0), -75e-6)) == 45
    assert policy.count(Charge(0, (0, 0), 500e-6)) == 120
    assert policy.count(Charge(0, (0, 0), float("nan"))) == 0


def test_seed_ring():
    policy = SeedPolicy(num_seeds=4, floor=4)
    seeds = policy.seeds(Charge(0, (100, 50), 50e-6))
    np.testing.assert_allclose(seeds, [[112, 50], [100, 62], [88, 50], [100, 38]], atol=1e-9)


def test_trace_all_keeps_drawable_paths():
    out = SeedPolicy().trace_all(dipole(), Bounds.from_size(800, 600), FieldConfig())
    assert len(out) > 0
    assert all(len(path) >= 2 for _, path in out)
    assert {c.id for c, _ in out} <= {0, 1}


def test_debug_renderer_output():
    buf = io.StringIO()
    Simulation.dipole().render(DebugRenderer(output=buf, verbose=False))
    text = buf.getvalue()
    print(text)
    assert text.startswith("=== Frame 800x600 ===\n")
    assert "[0] +50µC @ (250.00, 300.00)" in text
    assert "[1] -50µC @ (550.00, 300.00)" in text
    assert "streamline" not in text
