# MIT License (see LICENSE)
"""
JSON serialization of charge configurations and sessions.

Charges are persisted with their value in µC, the unit the user edits;
ChargeStore converts to coulombs on load.

Charge list format:
-------------------
[
  {"x": float, "y": float, "q": float, "id": int},   # q in µC
  ...
]

Session format:
---------------
{
  "charges": [ ...charge list... ],   # Required
  "epsilon": float,                   # Softening length (world units), default 10
  "max_steps": int,                   # Streamline step budget, default 300
  "num_seeds": int,                   # Seeds per 50 µC, default 30
  "mode": string                      # "streamlines", "potential" or "magnitude"
}

load_charges() accepts either form.
"""
from __future__ import annotations
import json
import logging
from typing import Any, Callable, Iterable

from ..constants import DEFAULT_EPSILON, DEFAULT_MAX_STEPS
from ..session import Simulation
from ..store import ChargeStore
from ..types import Charge

logger = logging.getLogger(__name__)


def charge_to_json(charge: Charge) -> dict[str, Any]:
    """Serialize one charge to a {x, y, q, id} record (q in µC)."""
    return {
        "x": float(charge.position[0]),
        "y": float(charge.position[1]),
        "q": charge.microcoulombs,
        "id": charge.id,
    }


def charges_to_json(charges: Iterable[Charge]) -> list[dict[str, Any]]:
    """Serialize charges, in order, to a JSON-compatible list."""
    return [charge_to_json(c) for c in charges]


def charges_from_json(data: Any, store: ChargeStore | None = None) -> ChargeStore:
    """
    Fill a store from parsed JSON.

    Args:
        data: A charge list, or a session dict with a "charges" list.
        store: Store to replace the contents of (a new one if None).

    Returns:
        The filled store.

    Raises:
        ValueError: If data is neither a list nor a dict with a "charges" list.
    """
    if isinstance(data, dict):
        data = data.get("charges")
    if not isinstance(data, list):
        raise ValueError("Expected a list of charges or an object with a 'charges' list.")
    store = store if store is not None else ChargeStore()
    store.replace_all(data)
    return store


def load_raw(path: str) -> Any:
    """Load raw JSON data from a file without building objects."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_charges(path: str, store: ChargeStore | None = None) -> ChargeStore:
    """
    Load a charge list (or the charges of a session file) into a store.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top level has no charge list.
    """
    store = charges_from_json(load_raw(path), store)
    logger.info("loaded %d charges from %s", len(store), path)
    return store


def save_charges(charges: Iterable[Charge], path: str, indent: int = 2) -> None:
    """Save charges to a JSON file as a plain list."""
    data = charges_to_json(charges)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)
    logger.info("saved %d charges to %s", len(data), path)


def session_to_json(sim: Simulation) -> dict[str, Any]:
    """
    Serialize a Simulation's charges and tunable parameters.

    Parameters equal to their defaults are left out.
    """
    result: dict[str, Any] = {"charges": charges_to_json(sim.store)}
    if sim.config.epsilon != DEFAULT_EPSILON:
        result["epsilon"] = sim.config.epsilon
    if sim.config.max_steps != DEFAULT_MAX_STEPS:
        result["max_steps"] = sim.config.max_steps
    if sim.seed_policy.num_seeds != 30:
        result["num_seeds"] = sim.seed_policy.num_seeds
    if sim.mode != "streamlines":
        result["mode"] = sim.mode
    return result


def _param(data: dict[str, Any], key: str, default: Any, convert: Callable[[Any], Any]) -> Any:
    """Read an optional session parameter, converting it with convert."""
    value = data.get(key, default)
    try:
        return convert(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Invalid session parameter {key!r}: {value!r}") from e


def session_from_json(data: Any) -> Simulation:
    """
    Build a Simulation from a parsed session dict (or a bare charge list).

    Raises:
        ValueError: If the top level is neither a list nor a dict, the charge
            list is missing, a parameter is not a number, or the mode is
            unknown.
    """
    if isinstance(data, list):
        data = {"charges": data}
    if not isinstance(data, dict):
        raise ValueError("Expected a session object or a list of charges.")
    sim = Simulation()
    sim.config.epsilon = _param(data, "epsilon", DEFAULT_EPSILON, float)
    sim.config.max_steps = _param(data, "max_steps", DEFAULT_MAX_STEPS, int)
    sim.seed_policy.num_seeds = _param(data, "num_seeds", 30, int)
    sim.set_mode(data.get("mode", "streamlines"))
    charges_from_json(data, sim.store)
    return sim


def load_session(path: str) -> Simulation:
    """Load a Simulation from a session JSON file."""
    sim = session_from_json(load_raw(path))
    logger.info("loaded session with %d charges from %s", len(sim.store), path)
    return sim


def save_session(sim: Simulation, path: str, indent: int = 2) -> None:
    """Save a Simulation to a session JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(session_to_json(sim), f, indent=indent)
