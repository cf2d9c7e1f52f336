# MIT License (see LICENSE)
"""
Named state variables of a simulation.

A VarsList is the state vector of one simulation: an ordered, indexable set
of Variables with unique names. Each Variable carries a *sequence number*
which increments whenever its value changes discontinuously (a drag, a reset
or a parameter change). Continuous changes made while integrating the
differential equations leave the sequence number alone, so a graph of the
variable knows when *not* to draw a connecting line.

Deleted variables keep their slot under the reserved name ``DELETED`` so the
indices of the remaining variables never shift. New variables reuse a
contiguous run of deleted slots before the list is grown.
"""
from __future__ import annotations
import logging
import math
from typing import Sequence

from ..observe import AbstractSubject
from ..util import to_name, valid_name

logger = logging.getLogger(__name__)

DELETED = "DELETED"
TIME = "TIME"

# Event names broadcast by VarsList
VARS_MODIFIED = "VARS_MODIFIED"

HISTORY_LENGTH = 20


# =============================================================================
# Variable
# =============================================================================

class Variable:
    """
    One named scalar component of the simulation state.

    Attributes:
        name: Language-independent name (upper case, underscores).
        local_name: Display name.
        computed: True when the value is derived from other variables
            rather than integrated (for example an energy).
        broadcast: When True the owning VarsList broadcasts this variable
            each time its value changes discontinuously.
    """

    def __init__(self, name: str, local_name: str | None = None, value: float = 0.0,
                 computed: bool = False) -> None:
        self.name = valid_name(to_name(name))
        self.local_name = local_name if local_name is not None else name
        self._value = float(value)
        self._seq = 0
        self.computed = computed
        self.broadcast = False
        self._owner: VarsList | None = None

    def __repr__(self) -> str:
        return (f"Variable(name={self.name!r}, value={self._value!r}, "
                f"seq={self._seq}, computed={self.computed})")

    @property
    def value(self) -> float:
        return self._value

    @property
    def sequence(self) -> int:
        return self._seq

    @property
    def index(self) -> int:
        """Position within the owning VarsList, or -1 if not owned."""
        if self._owner is None:
            return -1
        return self._owner.index_of(self)

    def is_deleted(self) -> bool:
        return self.name == DELETED

    def name_equals(self, name: str) -> bool:
        return self.name == to_name(name)

    def set_value(self, value: float) -> None:
        """
        Set the value as a discontinuous change.

        The sequence number only increments when the value actually changes.
        NaN never compares equal, so setting NaN always counts as a change.
        """
        value = float(value)
        if self._value != value:
            self._value = value
            self._seq += 1
            if self.broadcast and self._owner is not None:
                self._owner.broadcast_event(self.name, self)

    def set_value_smooth(self, value: float) -> None:
        """Set the value as a continuous change; the sequence is unchanged."""
        self._value = float(value)

    def incr_sequence(self) -> None:
        self._seq += 1


# =============================================================================
# VarsList
# =============================================================================

class VarsList(AbstractSubject):
    """
    Ordered set of uniquely named Variables.

    A variable named ``TIME`` is detected automatically and becomes the time
    variable used by ``get_time`` and ``set_time``.

    Args:
        var_names: Names of the variables; converted with ``to_name``.
        local_names: Display names, same length as ``var_names``. Defaults
            to ``var_names``.
        name: Name of this VarsList as a Subject.
        history: Keep the most recent snapshots (see ``save_history``).
    """

    def __init__(self, var_names: Sequence[str] = (), local_names: Sequence[str] | None = None,
                 name: str = "VARIABLES", history: bool = False) -> None:
        super().__init__(name)
        if local_names is None:
            local_names = var_names
        if len(var_names) != len(local_names):
            raise ValueError(
                f"var_names and local_names are different lengths: "
                f"{len(var_names)} != {len(local_names)}")
        self._vars: list[Variable] = []
        self._time_index = -1
        self.history = history
        self._history: list[list[float]] = []
        for var_name, local_name in zip(var_names, local_names):
            variable = Variable(var_name, local_name)
            if variable.name == DELETED:
                raise ValueError(f'variable cannot be named "{DELETED}"')
            if self._find(variable.name) >= 0:
                raise ValueError(f"variable name already in use: {variable.name}")
            variable._owner = self
            self._vars.append(variable)
            if variable.name == TIME:
                self._time_index = len(self._vars) - 1

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return (f"VarsList(name={self.name!r}, num_variables={len(self._vars)}, "
                f"time_index={self._time_index}, history={self.history})")

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def add_variable(self, variable: Variable) -> int:
        """
        Add a Variable, reusing a deleted slot if one is available.

        Returns:
            Index of the new variable.

        Raises:
            ValueError: If the name is ``DELETED`` or already in use.
        """
        if variable.name == DELETED:
            raise ValueError(f'variable cannot be named "{DELETED}"')
        if self._find(variable.name) >= 0:
            raise ValueError(f"variable name already in use: {variable.name}")
        position = self._find_open_slot(1)
        variable._owner = self
        self._vars[position] = variable
        if variable.name == TIME:
            self._time_index = position
        logger.debug("%s: added %s at %d", self.name, variable.name, position)
        self.broadcast_event(VARS_MODIFIED)
        return position

    def add_variables(self, names: Sequence[str], local_names: Sequence[str] | None = None) -> int:
        """
        Add several variables in one contiguous block of slots.

        Returns:
            Index of the first new variable.

        Raises:
            ValueError: If ``names`` is empty, lengths differ, or any name is
                ``DELETED`` or already in use.
        """
        if local_names is None:
            local_names = names
        if len(names) != len(local_names):
            raise ValueError(
                f"names and local_names are different lengths: {len(names)} != {len(local_names)}")
        if len(names) == 0:
            raise ValueError("no variables to add")
        variables = [Variable(n, ln) for n, ln in zip(names, local_names)]
        seen: set[str] = set()
        for variable in variables:
            if variable.name == DELETED:
                raise ValueError(f'variable cannot be named "{DELETED}"')
            if variable.name in seen or self._find(variable.name) >= 0:
                raise ValueError(f"variable name already in use: {variable.name}")
            seen.add(variable.name)
        position = self._find_open_slot(len(variables))
        for i, variable in enumerate(variables):
            variable._owner = self
            self._vars[position + i] = variable
            if variable.name == TIME:
                self._time_index = position + i
        logger.debug("%s: added %d variables at %d", self.name, len(variables), position)
        self.broadcast_event(VARS_MODIFIED)
        return position

    def delete_variables(self, index: int, count: int) -> None:
        """
        Delete ``count`` variables starting at ``index``.

        The slots are kept under the name ``DELETED`` so that the indices of
        all other variables are unchanged.
        """
        if count == 0:
            return
        if count < 0 or index < 0 or index + count > len(self._vars):
            raise IndexError(f"cannot delete {count} variables at index {index}")
        for i in range(index, index + count):
            self._vars[i]._owner = None
            self._vars[i] = self._deleted_variable()
            if i == self._time_index:
                self._time_index = -1
        logger.debug("%s: deleted %d variables at %d", self.name, count, index)
        self.broadcast_event(VARS_MODIFIED)

    def _deleted_variable(self) -> Variable:
        variable = Variable(DELETED)
        variable._owner = self
        return variable

    def _find_open_slot(self, quantity: int) -> int:
        """
        Find or make room for ``quantity`` contiguous slots.

        Looks for a run of deleted slots; a run at the end of the list that
        is too short is extended; otherwise the list grows.
        """
        if quantity < 0:
            raise ValueError(f"quantity must be non-negative: {quantity}")
        found = 0
        start = -1
        for i, variable in enumerate(self._vars):
            if variable.name == DELETED:
                if start == -1:
                    start = i
                found += 1
                if found >= quantity:
                    return start
            else:
                start = -1
                found = 0
        if found > 0:
            expand = quantity - found
        else:
            start = len(self._vars)
            expand = quantity
        for _ in range(expand):
            self._vars.append(self._deleted_variable())
        return start

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._vars):
            raise IndexError(f"bad variable index={index}; num_vars={len(self._vars)}")

    def _find(self, name: str) -> int:
        for i, variable in enumerate(self._vars):
            if variable.name == name and name != DELETED:
                return i
        return -1

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def num_variables(self) -> int:
        """Number of slots, deleted slots included."""
        return len(self._vars)

    def index_of(self, id: str | Variable) -> int:
        """Index of a Variable or variable name, or -1 if not found."""
        if isinstance(id, Variable):
            for i, variable in enumerate(self._vars):
                if variable is id:
                    return i
            return -1
        return self._find(to_name(id))

    def get_variable(self, id: int | str) -> Variable:
        """
        Return the Variable at an index or with a name.

        Raises:
            IndexError: If an index is out of range.
            KeyError: If no variable has the name.
        """
        if isinstance(id, str):
            index = self._find(to_name(id))
            if index < 0:
                raise KeyError(f"unknown variable name {id!r}")
            return self._vars[index]
        self._check_index(id)
        return self._vars[id]

    def to_array(self) -> list[Variable]:
        return list(self._vars)

    def get_names(self, local: bool = False) -> list[str]:
        return [v.local_name if local else v.name for v in self._vars]

    def time_index(self) -> int:
        return self._time_index

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def get_value(self, index: int) -> float:
        self._check_index(index)
        return self._vars[index].value

    def get_values(self, computed: bool = False) -> list[float]:
        """
        Return the current values of all variables.

        Args:
            computed: When False, computed variables are reported as NaN so
                that a saved state never restores a derived quantity.
        """
        return [math.nan if (not computed and v.computed) else v.value for v in self._vars]

    def set_value(self, index: int, value: float, continuous: bool = False) -> None:
        """
        Set the value of one variable.

        Setting a deleted slot is silently ignored.

        Raises:
            IndexError: If the index is out of range.
            ValueError: If the value is NaN and the variable is not computed.
        """
        self._check_index(index)
        variable = self._vars[index]
        if variable.name == DELETED:
            return
        if math.isnan(value) and not variable.computed:
            raise ValueError(f"cannot set variable {variable.name} to NaN")
        if continuous:
            variable.set_value_smooth(value)
        else:
            variable.set_value(value)

    def set_values(self, values: Sequence[float], continuous: bool = False) -> None:
        """
        Set values of the first ``len(values)`` variables.

        A shorter sequence leaves the trailing variables unchanged. Nothing
        is written unless every value is acceptable.

        Raises:
            ValueError: If ``values`` is longer than the number of variables,
                or holds NaN for a variable that is not computed.
        """
        n = len(values)
        if n > len(self._vars):
            raise ValueError(f"set_values bad length n={n} > N={len(self._vars)}")
        for variable, value in zip(self._vars, values):
            if (math.isnan(value) and not variable.computed
                    and variable.name != DELETED):
                raise ValueError(f"cannot set variable {variable.name} to NaN")
        for i in range(n):
            self.set_value(i, values[i], continuous)

    def set_computed(self, *indexes: int) -> None:
        """Mark the variables at ``indexes`` as computed."""
        for index in indexes:
            self._check_index(index)
            self._vars[index].computed = True

    def incr_sequence(self, *indexes: int) -> None:
        """
        Increment sequence numbers to mark a discontinuity.

        With no arguments every variable's sequence number is incremented.
        """
        if not indexes:
            for variable in self._vars:
                variable.incr_sequence()
            return
        for index in indexes:
            self._check_index(index)
            self._vars[index].incr_sequence()

    def get_time(self) -> float:
        if self._time_index < 0:
            raise ValueError("no time variable")
        return self.get_value(self._time_index)

    def set_time(self, time: float) -> None:
        if self._time_index < 0:
            raise ValueError("no time variable")
        self.set_value(self._time_index, time)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def save_history(self) -> None:
        """Store a snapshot of values and time, keeping the most recent 20."""
        if not self.history:
            return
        snapshot = self.get_values()
        snapshot.append(self.get_time() if self._time_index >= 0 else math.nan)
        self._history.append(snapshot)
        if len(self._history) > HISTORY_LENGTH:
            del self._history[0]

    def print_one_history(self, index: int) -> str:
        """
        Format one snapshot as statements that recreate the state.

        Args:
            index: 1 for the most recent snapshot, 2 for the one before, etc.
        """
        if not self.history or index < 1 or index > len(self._history):
            return ""
        snapshot = self._history[-index]
        lines = [f"# time = {snapshot[-1]:.5f}"]
        for i, value in enumerate(snapshot[:-1]):
            lines.append(f"sim.vars_list.set_value({i}, {value!r})")
        return "\n".join(lines)

    def print_history(self, index: int | None = None) -> str:
        if index is not None:
            return self.print_one_history(index)
        return "\n".join(self.print_one_history(i) for i in (10, 3, 2, 1))
