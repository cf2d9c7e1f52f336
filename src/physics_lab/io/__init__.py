# MIT License (see LICENSE)
"""
Input/Output utilities for simulation state.

This subpackage provides:
    - JSON snapshots: Save a VarsList to a file and restore it later.

Typical usage:
    from physics_lab.io import save_vars, load_vars_raw, apply_snapshot

    save_vars(sim.vars_list, "state.json")
    ...
    apply_snapshot(sim.vars_list, load_vars_raw("state.json"))
    sim.modify_objects()
"""
from .json_io import (
    apply_snapshot,
    load_vars_raw,
    save_vars,
    vars_from_json,
    vars_to_json,
)

__all__ = [
    # Loading
    "load_vars_raw",
    "vars_from_json",
    "apply_snapshot",
    # Saving
    "save_vars",
    "vars_to_json",
]
