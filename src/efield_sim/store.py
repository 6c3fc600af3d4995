# MIT License (see LICENSE)
"""
The charge store.

ChargeStore owns the ordered list of point charges for one simulation
session. Insertion order is preserved and used for indexed removal.
Ids are handed out from a counter that only goes up; clear() is the only
operation that resets it.

Mutations never raise: out-of-range indices are ignored and malformed
records passed to replace_all() are coerced to numbers.
"""
from __future__ import annotations
import logging
import math
from typing import Any, Iterable, Iterator, Mapping

import numpy as np

from .constants import MICRO
from .types import Charge
from .util import f64

logger = logging.getLogger(__name__)


def _coerce_float(value: Any, fallback: float = 0.0) -> float:
    """Convert value to a finite float, or return fallback."""
    try:
        x = float(value)
    except (TypeError, ValueError):
        return fallback
    return x if math.isfinite(x) else fallback


def _coerce_id(value: Any) -> int | None:
    """Convert value to an integer id, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        x = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(x) or x != int(x):
        return None
    return int(x)


class ChargeStore:
    """
    Ordered collection of Charge objects with monotonic ids.

    Usage:
        store = ChargeStore()
        store.add((250, 300), 50)     # +50 µC
        store.add((550, 300), -50)    # -50 µC
        for c in store:
            ...
    """

    def __init__(self) -> None:
        self._charges: list[Charge] = []
        self._next_id = 0

    def __iter__(self) -> Iterator[Charge]:
        return iter(self._charges)

    def __len__(self) -> int:
        return len(self._charges)

    def __getitem__(self, index: int) -> Charge:
        return self._charges[index]

    @property
    def next_id(self) -> int:
        return self._next_id

    def add(self, position: tuple[float, float] | np.ndarray, charge_uc: float) -> Charge:
        """
        Append a new charge.

        Args:
            position: World-space position [x, y].
            charge_uc: Charge in µC (converted to C for storage).

        Returns:
            The created Charge.
        """
        c = Charge(
            id=self._next_id,
            position=f64(position),
            charge=_coerce_float(charge_uc) * MICRO,
        )
        self._next_id += 1
        self._charges.append(c)
        logger.debug("added charge id=%d q=%.3g C at (%.1f, %.1f)",
                     c.id, c.charge, c.position[0], c.position[1])
        return c

    def remove(self, index: int) -> Charge | None:
        """
        Remove the charge at index.

        Returns the removed charge, or None if index is out of range.
        """
        if not 0 <= index < len(self._charges):
            return None
        c = self._charges.pop(index)
        logger.debug("removed charge id=%d", c.id)
        return c

    def clear(self) -> None:
        """Remove every charge and reset the id counter to 0."""
        self._charges = []
        self._next_id = 0

    def move(self, index: int, position: tuple[float, float] | np.ndarray) -> None:
        """Set the position of the charge at index (no-op if out of range)."""
        if 0 <= index < len(self._charges):
            self._charges[index].position = f64(position)

    def set_value(self, index: int, charge_uc: float) -> None:
        """Set the value in µC of the charge at index (no-op if out of range)."""
        if 0 <= index < len(self._charges):
            self._charges[index].charge = _coerce_float(charge_uc) * MICRO

    def index_of(self, charge_id: int) -> int:
        """Index of the charge with the given id, or -1."""
        for i, c in enumerate(self._charges):
            if c.id == charge_id:
                return i
        return -1

    def find_at(self, point: tuple[float, float] | np.ndarray, radius: float) -> int:
        """
        Index of the first charge within radius of point, or -1.

        Used for picking charges under the cursor.
        """
        px, py = float(point[0]), float(point[1])
        for i, c in enumerate(self._charges):
            if math.hypot(px - c.position[0], py - c.position[1]) <= radius:
                return i
        return -1

    def replace_all(self, records: Iterable[Mapping[str, Any]]) -> None:
        """
        Replace the whole store from external records.

        Each record is a mapping {x, y, q, id?} with q in µC. Non-numeric or
        non-finite x, y, q become 0. A missing or non-integer id falls back
        to the record's index; an id already taken by an earlier record is
        moved past the largest id seen so far. The next id becomes one more
        than the largest id present, or 0 if the list is empty.
        """
        records = list(records)
        wanted: list[int] = []
        for i, r in enumerate(records):
            rid = _coerce_id(r.get("id")) if isinstance(r, Mapping) else None
            wanted.append(i if rid is None else rid)

        highest = max(wanted, default=-1)
        taken: set[int] = set()
        charges = []
        for r, rid in zip(records, wanted):
            if not isinstance(r, Mapping):
                r = {}
            if rid in taken:
                highest += 1
                logger.debug("duplicate charge id %d reassigned to %d", rid, highest)
                rid = highest
            taken.add(rid)
            charges.append(Charge(
                id=rid,
                position=(_coerce_float(r.get("x")), _coerce_float(r.get("y"))),
                charge=_coerce_float(r.get("q")) * MICRO,
            ))

        self._charges = charges
        self._next_id = max(taken, default=-1) + 1
        logger.debug("store replaced with %d charges, next id %d",
                     len(charges), self._next_id)

    def snapshot(self) -> list[tuple[int, float, float, float]]:
        """(id, x, y, charge in C) per charge, for exact undo."""
        return [
            (c.id, float(c.position[0]), float(c.position[1]), c.charge)
            for c in self._charges
        ]

    def restore(self, snapshot: Iterable[tuple[int, float, float, float]]) -> None:
        """
        Replace the store from a snapshot() list.

        Values are restored exactly; the next id is recomputed as in
        replace_all().
        """
        self._charges = [Charge(id=i, position=(x, y), charge=q) for i, x, y, q in snapshot]
        self._next_id = max((c.id for c in self._charges), default=-1) + 1
