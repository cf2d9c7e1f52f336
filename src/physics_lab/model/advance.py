# MIT License (see LICENSE)
"""
Advance strategies: how a simulation is moved forward by one time step.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod

from ..errors import IntegrationError
from ..memo import MemoList
from .simulation import ODESim
from .solvers import DiffEqSolver, RungeKuttaSolver

logger = logging.getLogger(__name__)


class AdvanceStrategy(ABC):
    """Advances a simulation and reports its time and time step."""

    @abstractmethod
    def advance(self, time_step: float, memo_list: MemoList | None = None) -> None:
        ...

    @abstractmethod
    def get_time(self) -> float:
        ...

    @abstractmethod
    def get_time_step(self) -> float:
        ...


class SimpleAdvance(AdvanceStrategy):
    """
    Advances an ODESim with a DiffEqSolver, with no collision handling.

    One call to advance():
      1. removes temporary SimObjects that expired before the current time,
      2. steps the solver, raising IntegrationError if it reports an error,
      3. calls ``modify_objects()`` on the simulation,
      4. calls ``memorize()`` on the memo list, if one was given.

    Args:
        sim: The simulation to advance.
        solver: The solver to use; RungeKuttaSolver by default.
        time_step: Default time step reported by get_time_step().
    """

    def __init__(self, sim: ODESim, solver: DiffEqSolver | None = None,
                 time_step: float = 0.025) -> None:
        self.sim = sim
        self.solver = solver if solver is not None else RungeKuttaSolver(sim)
        self.time_step = time_step

    def __repr__(self) -> str:
        return f"SimpleAdvance(sim={self.sim!r}, solver={self.solver!r}, time_step={self.time_step})"

    def advance(self, time_step: float, memo_list: MemoList | None = None) -> None:
        time = self.sim.get_time()
        self.sim.get_sim_list().remove_temporary(time)
        error = self.solver.step(time_step)
        if error is not None:
            logger.error("solver error at time %g: %s", time, error)
            raise IntegrationError(error, time)
        self.sim.modify_objects()
        if memo_list is not None:
            memo_list.memorize()

    def get_time(self) -> float:
        return self.sim.get_time()

    def get_time_step(self) -> float:
        return self.time_step

    def set_time_step(self, time_step: float) -> None:
        self.time_step = time_step

    def set_solver(self, solver: DiffEqSolver) -> None:
        self.solver = solver
