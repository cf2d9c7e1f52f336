# MIT License (see LICENSE)
"""
JSON snapshots of a VarsList.

A snapshot records the full state of a simulation's variables so that it
can be inspected, compared or restored later. Computed variables are saved
with their current values but are never restored: ``apply_snapshot`` sets
them through ``set_values`` which recomputes nothing, and the simulation's
``modify_objects()`` overwrites them anyway.

JSON Schema Overview:
---------------------
{
  "name": string,                  # Name of the VarsList
  "time": float | null,            # Value of the time variable, if any
  "variables": [
    {
      "name": string,              # Language-independent name, e.g. "KINETIC_ENERGY"
      "local_name": string,        # Display name
      "value": float | null,       # null for NaN
      "sequence": int,             # Sequence number when saved
      "computed": bool             # Default: false
    }
  ]
}
"""
from __future__ import annotations
import json
import logging
import math
from typing import Any

from ..model.variables import DELETED, VarsList

logger = logging.getLogger(__name__)


def vars_to_json(vars_list: VarsList) -> dict[str, Any]:
    """
    Serialize a VarsList to a JSON-compatible dictionary.

    Deleted slots are included so that indices are preserved.
    """
    variables = []
    for v in vars_list.to_array():
        variables.append({
            "name": v.name,
            "local_name": v.local_name,
            "value": None if math.isnan(v.value) else v.value,
            "sequence": v.sequence,
            "computed": v.computed,
        })
    time_index = vars_list.time_index()
    return {
        "name": vars_list.name,
        "time": vars_list.get_time() if time_index >= 0 else None,
        "variables": variables,
    }


def save_vars(vars_list: VarsList, path: str, indent: int = 2) -> None:
    """Write a snapshot of a VarsList to a JSON file."""
    data = vars_to_json(vars_list)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)
    logger.info("saved %d variables of %s to %s", len(data["variables"]), vars_list.name, path)


def load_vars_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a snapshot file without applying it.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def vars_from_json(data: dict[str, Any]) -> VarsList:
    """
    Build a new VarsList from snapshot data.

    Deleted slots in the snapshot are recreated as deleted slots. Sequence
    numbers start afresh.

    Raises:
        ValueError: If a variable has no name.
    """
    entries = data.get("variables", [])
    for d in entries:
        if "name" not in d:
            raise ValueError("snapshot variable is missing 'name'")
    vars_list = VarsList(name=data.get("name", "VARIABLES"))
    for i, d in enumerate(entries):
        # placeholder names hold the slot until it is deleted below
        name = f"SLOT_{i}" if d["name"] == DELETED else d["name"]
        vars_list.add_variables([name], [d.get("local_name", name)])
    for i, d in enumerate(entries):
        if d["name"] == DELETED:
            vars_list.delete_variables(i, 1)
    computed = [i for i, d in enumerate(entries)
                if d["name"] != DELETED and d.get("computed", False)]
    if computed:
        vars_list.set_computed(*computed)
    apply_snapshot(vars_list, data)
    for i in computed:
        value = entries[i].get("value")
        vars_list.set_value(i, math.nan if value is None else float(value))
    return vars_list


def apply_snapshot(vars_list: VarsList, data: dict[str, Any]) -> None:
    """
    Set the values of an existing VarsList from snapshot data.

    The change is discontinuous, so sequence numbers of changed variables
    increase. Computed variables and deleted slots are skipped.

    Raises:
        ValueError: If the snapshot names do not match the VarsList.
    """
    entries = data.get("variables", [])
    names = vars_list.get_names()
    if len(entries) > len(names):
        raise ValueError(f"snapshot has {len(entries)} variables, VarsList has {len(names)}")
    values = vars_list.get_values(computed=True)
    for i, d in enumerate(entries):
        if d["name"] != names[i]:
            raise ValueError(f"snapshot variable {i} is {d['name']!r}, expected {names[i]!r}")
        if d["name"] == DELETED or d.get("computed", False):
            continue
        value = d.get("value")
        values[i] = math.nan if value is None else float(value)
    # computed variables keep their current values
    for i, v in enumerate(vars_list.to_array()):
        if v.computed:
            values[i] = v.value
    vars_list.set_values(values)
    logger.info("applied snapshot of %d variables to %s", len(entries), vars_list.name)
