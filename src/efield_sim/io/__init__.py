# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides JSON save/load for charge lists and whole
sessions. Charge values are written in µC.

Typical usage:
    from efield_sim.io import load_charges, save_charges

    store = load_charges("dipole.json")
    save_charges(store, "copy.json")
"""
from .json_io import (
    load_raw,
    load_charges,
    load_session,
    save_charges,
    save_session,
    charge_to_json,
    charges_to_json,
    charges_from_json,
    session_to_json,
    session_from_json,
)

__all__ = [
    # Loading
    "load_raw",
    "load_charges",
    "load_session",
    # Saving
    "save_charges",
    "save_session",
    # Serialization
    "charge_to_json",
    "charges_to_json",
    "charges_from_json",
    "session_to_json",
    "session_from_json",
]
