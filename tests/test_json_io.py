import json

import numpy as np
import pytest

from efield_sim.io import (
    charges_from_json,
    charges_to_json,
    load_charges,
    load_session,
    save_charges,
    save_session,
    session_from_json,
)
from efield_sim.session import Simulation
from efield_sim.store import ChargeStore


def test_charges_save_load(tmp_path):
    store = ChargeStore()
    store.add((250, 300), 50)
    store.add((550, 300), -12.5)
    store.remove(0)
    store.add((10, 20), 3)

    path = tmp_path / "charges.json"
    save_charges(store, str(path))
    raw = json.loads(path.read_text(encoding="utf-8"))
    print(raw)

    assert raw[0]["q"] == pytest.approx(-12.5)
    assert [r["id"] for r in raw] == [1, 2]

    loaded = load_charges(str(path))
    assert [c.id for c in loaded] == [1, 2]
    np.testing.assert_array_equal(loaded[0].position, [550.0, 300.0])
    assert loaded[0].charge == pytest.approx(-12.5e-6)
    assert loaded.next_id == 3


def test_charges_from_session_dict():
    store = charges_from_json({"charges": [{"x": 1, "y": 2, "q": 3}]})
    assert len(store) == 1
    assert store[0].microcoulombs == pytest.approx(3)


def test_charges_from_json_rejects_other_shapes():
    with pytest.raises(ValueError):
        charges_from_json({"bodies": []})
    with pytest.raises(ValueError):
        charges_from_json(42)


def test_session_rejects_other_top_levels(tmp_path):
    path = tmp_path / "number.json"
    path.write_text("42", encoding="utf-8")
    with pytest.raises(ValueError):
        load_session(str(path))
    with pytest.raises(ValueError):
        session_from_json("charges")
    with pytest.raises(ValueError):
        session_from_json({"epsilon": 2.0})


@pytest.mark.parametrize("key, value", [
    ("max_steps", None),
    ("num_seeds", "many"),
    ("epsilon", None),
    ("epsilon", [1, 2]),
    ("max_steps", float("inf")),
])
def test_session_rejects_bad_parameters(key, value):
    with pytest.raises(ValueError):
        session_from_json({"charges": [], key: value})


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_charges(str(tmp_path / "nope.json"))


def test_session_save_load(tmp_path):
    sim = Simulation.dipole()
    sim.config.epsilon = 4.0
    sim.config.max_steps = 120
    sim.seed_policy.num_seeds = 12
    sim.set_mode("potential")

    path = tmp_path / "session.json"
    save_session(sim, str(path))
    loaded = load_session(str(path))

    assert loaded.config.epsilon == 4.0
    assert loaded.config.max_steps == 120
    assert loaded.seed_policy.num_seeds == 12
    assert loaded.mode == "potential"
    a, b = charges_to_json(loaded.store), charges_to_json(sim.store)
    assert [(r["id"], r["x"], r["y"]) for r in a] == [(r["id"], r["x"], r["y"]) for r in b]
    assert [r["q"] for r in a] == pytest.approx([r["q"] for r in b])


def test_session_defaults_are_omitted(tmp_path):
    sim = Simulation.dipole()
    path = tmp_path / "session.json"
    save_session(sim, str(path))
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert set(raw) == {"charges"}


def test_session_from_bare_list(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([{"x": 0, "y": 0, "q": 1}]), encoding="utf-8")
    sim = load_session(str(path))
    assert len(sim.store) == 1
    assert sim.mode == "streamlines"
