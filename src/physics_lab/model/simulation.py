# MIT License (see LICENSE)
"""
The simulation contract and its shared ODE implementation.

Capabilities are separate abstract interfaces which a concrete simulation
combines as needed:

- Simulation: owns a SimList, reports time, supports reset and
  save_initial_state, and synchronizes its SimObjects in modify_objects().
- ODESim: additionally owns a VarsList and defines the differential
  equations in evaluate().
- EventHandler (see physics_lab.app.event_handler) and EnergySystem (see
  physics_lab.model.energy) are mixed in by simulations that support drag
  interaction or energy reporting.

AbstractODESim provides the plumbing: initial-state snapshot, single-slot
save/restore buffer, and reset. Subclasses implement evaluate() and
modify_objects().

Typical usage:
    class Decay(AbstractODESim):
        def __init__(self):
            super().__init__(VarsList(["x", "time"]))

        def evaluate(self, vars, change, time_step):
            change[0] = -vars[0]
            change[1] = 1.0
            return None

        def modify_objects(self):
            pass
"""
from __future__ import annotations
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..observe import AbstractSubject
from .sim_object import SimList
from .variables import VarsList

logger = logging.getLogger(__name__)

# Event names broadcast by simulations
RESET = "RESET"
INITIAL_STATE_SAVED = "INITIAL_STATE_SAVED"
PARAMETER_CHANGED = "PARAMETER_CHANGED"


# =============================================================================
# Capability interfaces
# =============================================================================

class Simulation(ABC):
    """A simulation with a SimList that can be reset to an initial state."""

    @abstractmethod
    def get_sim_list(self) -> SimList:
        ...

    @abstractmethod
    def get_time(self) -> float:
        ...

    @abstractmethod
    def reset(self) -> None:
        """Restore the initial state and broadcast RESET."""

    @abstractmethod
    def save_initial_state(self) -> None:
        """Snapshot the current state for reset() and broadcast INITIAL_STATE_SAVED."""

    @abstractmethod
    def modify_objects(self) -> None:
        """
        Push the current state into the SimObjects.

        Also recomputes computed variables such as energies. Must be safe to
        call any number of times.
        """


class ODESim(Simulation):
    """A Simulation defined by a set of ordinary differential equations."""

    @abstractmethod
    def get_vars_list(self) -> VarsList:
        ...

    @abstractmethod
    def evaluate(self, vars: Sequence[float], change: list[float], time_step: float) -> Any:
        """
        Compute the rate of change of each variable.

        Args:
            vars: Current values of the variables; must not be modified.
            change: Output array, one rate per variable. Entries for
                variables with no differential equation are left at zero.
            time_step: Size of the step being taken; usually unused.

        Returns:
            None on success, otherwise an error descriptor that makes the
            solver abandon the step.
        """

    @abstractmethod
    def save_state(self) -> None:
        ...

    @abstractmethod
    def restore_state(self) -> None:
        ...


# =============================================================================
# Shared implementation
# =============================================================================

class AbstractODESim(AbstractSubject, ODESim):
    """
    Base class for ODE simulations.

    Args:
        vars_list: The state variables; an empty VarsList by default.
        sim_list: The SimObjects; an empty SimList by default.
        name: Name of this simulation as a Subject.
    """

    def __init__(self, vars_list: VarsList | None = None, sim_list: SimList | None = None,
                 name: str = "SIM") -> None:
        super().__init__(name)
        self.vars_list = vars_list if vars_list is not None else VarsList()
        self.sim_list = sim_list if sim_list is not None else SimList()
        self._initial_state: list[float] | None = None
        self._recent_state: list[float] | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, vars_list={self.vars_list!r})"

    def get_vars_list(self) -> VarsList:
        return self.vars_list

    def get_sim_list(self) -> SimList:
        return self.sim_list

    def get_time(self) -> float:
        return self.vars_list.get_time()

    def reset(self) -> None:
        """
        Restore the initial state as a discontinuous change.

        Removes every temporary SimObject, runs on_reset(), synchronizes the
        SimObjects and broadcasts RESET. Without a saved initial state the
        values are left alone.
        """
        if (self._initial_state is not None
                and len(self._initial_state) == self.vars_list.num_variables()):
            self.vars_list.set_values(self._initial_state)
        self.sim_list.remove_temporary(math.inf)
        self.on_reset()
        self.modify_objects()
        logger.debug("%s: reset at time %g", self.name, self.get_time())
        self.broadcast_event(RESET)

    def on_reset(self) -> None:
        """Hook run by reset() after the initial values are restored, before RESET."""

    def save_initial_state(self) -> None:
        self._initial_state = self.vars_list.get_values()
        self.broadcast_event(INITIAL_STATE_SAVED)

    def get_initial_state(self) -> list[float] | None:
        return None if self._initial_state is None else list(self._initial_state)

    def save_state(self) -> None:
        """Store the current values in the single-slot rollback buffer."""
        self._recent_state = self.vars_list.get_values()

    def restore_state(self) -> None:
        """Restore the values stored by save_state() as a continuous change."""
        if self._recent_state is not None:
            self.vars_list.set_values(self._recent_state, continuous=True)
