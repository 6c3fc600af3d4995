import numpy as np
import pytest

from efield_sim.store import ChargeStore


def test_add_converts_microcoulombs():
    store = ChargeStore()
    c = store.add((1.5, -2), 50)
    assert c.id == 0
    assert c.charge == pytest.approx(50e-6)
    assert c.microcoulombs == pytest.approx(50)
    np.testing.assert_array_equal(c.position, [1.5, -2.0])
    assert c.position.dtype == np.float64


def test_ids_are_not_reused_after_remove():
    store = ChargeStore()
    store.add((0, 0), 1)
    store.add((10, 0), 1)
    removed = store.remove(1)
    again = store.add((10, 0), 1)

    assert removed.id == 1
    assert again.id == 2
    assert [c.id for c in store] == [0, 2]


def test_clear_resets_ids():
    store = ChargeStore()
    for i in range(3):
        store.add((i, 0), 1)
    store.clear()
    assert len(store) == 0
    assert store.add((0, 0), 1).id == 0


def test_replace_all_empty_then_add_gives_id_zero():
    store = ChargeStore()
    store.add((0, 0), 1)
    store.add((1, 0), 1)
    store.replace_all([])
    assert store.add((0, 0), 1).id == 0


def test_replace_all_next_id_follows_max():
    store = ChargeStore()
    store.replace_all([
        {"x": 0, "y": 0, "q": 5, "id": 7},
        {"x": 1, "y": 1, "q": -5, "id": 2},
    ])
    assert [c.id for c in store] == [7, 2]
    assert store.next_id == 8
    assert store.add((3, 3), 1).id == 8


def test_replace_all_missing_ids_use_index():
    store = ChargeStore()
    store.replace_all([{"x": 0, "y": 0, "q": 1}, {"x": 5, "y": 5, "q": 2, "id": "x"}])
    assert [c.id for c in store] == [0, 1]
    assert store.next_id == 2


def test_replace_all_duplicate_ids_are_reassigned():
    store = ChargeStore()
    store.replace_all([
        {"x": 0, "y": 0, "q": 1, "id": 3},
        {"x": 1, "y": 1, "q": 1, "id": 3},
        {"x": 2, "y": 2, "q": 1},
    ])
    ids = [c.id for c in store]
    assert ids == [3, 4, 2]
    assert len(set(ids)) == len(ids)
    assert store.next_id == 5


def test_replace_all_coerces_malformed_values():
    store = ChargeStore()
    store.replace_all([
        {"x": "abc", "y": None, "q": "12"},
        {"x": "7.5", "y": float("nan"), "q": "bad"},
        {"x": 1, "y": 2, "q": float("inf")},
        "not a record",
    ])
    a, b, c, d = store
    np.testing.assert_array_equal(a.position, [0.0, 0.0])
    assert a.charge == pytest.approx(12e-6)
    np.testing.assert_array_equal(b.position, [7.5, 0.0])
    assert b.charge == 0.0
    assert c.charge == 0.0
    np.testing.assert_array_equal(d.position, [0.0, 0.0])
    assert d.id == 3


def test_remove_out_of_range_is_noop():
    store = ChargeStore()
    store.add((0, 0), 1)
    assert store.remove(5) is None
    assert store.remove(-1) is None
    assert len(store) == 1


def test_move_and_set_value():
    store = ChargeStore()
    store.add((0, 0), 1)
    store.move(0, (4, 5))
    store.set_value(0, -20)
    store.move(3, (9, 9))
    store.set_value(3, 9)

    np.testing.assert_array_equal(store[0].position, [4.0, 5.0])
    assert store[0].charge == pytest.approx(-20e-6)
    assert store[0].sign == -1


def test_find_at():
    store = ChargeStore()
    store.add((100, 100), 1)
    store.add((200, 100), 1)

    assert store.find_at((205, 100), 12) == 1
    assert store.find_at((100, 111.9), 12) == 0
    assert store.find_at((150, 100), 12) == -1
    assert store.index_of(1) == 1
    assert store.index_of(42) == -1


def test_snapshot_restore():
    store = ChargeStore()
    store.add((1, 2), 0.1)
    store.add((3, 4), -7)
    store.remove(0)
    q = store[0].charge
    snap = store.snapshot()
    assert snap == [(1, 3.0, 4.0, q)]

    store.clear()
    store.restore(snap)
    assert store[0].id == 1
    assert store[0].charge == q
    assert store.next_id == 2

    store.restore([])
    assert len(store) == 0
    assert store.next_id == 0
