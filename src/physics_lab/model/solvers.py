# MIT License (see LICENSE)
"""
Differential equation solvers for ODE simulations.

A solver advances the VarsList of an ODESim by one step by repeatedly calling
the simulation's evaluate(). The new values are written back with
``set_values(..., continuous=True)`` because integration is a continuous
change and must not bump sequence numbers.

Available solvers:
- EulerSolver: first order, one evaluation per step.
- ModifiedEulerSolver: second order, two evaluations per step.
- RungeKuttaSolver: classic fourth order, four evaluations per step.
- AdaptiveStepSolver: wraps another solver and subdivides the step until
  the change in total energy is within tolerance.

Each ``step(step_size)`` returns None on success or the error descriptor
returned by evaluate(), leaving the decision to fail to the caller.

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
"""
from __future__ import annotations
import logging
import math
from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ..errors import IntegrationError
from .energy import EnergySystem
from .simulation import ODESim

logger = logging.getLogger(__name__)


class DiffEqSolver(ABC):
    """Advances an ODESim by one step."""

    name = ""

    def __init__(self, sim: ODESim) -> None:
        self.sim = sim

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sim={self.sim!r})"

    @abstractmethod
    def step(self, step_size: float) -> Any:
        """
        Advance the simulation variables by ``step_size``.

        Returns:
            None on success, otherwise the error descriptor from evaluate().
        """

    def _derivative(self, state: np.ndarray, h: float) -> tuple[np.ndarray, Any]:
        change = np.zeros_like(state)
        error = self.sim.evaluate(state, change, h)
        return change, error


class EulerSolver(DiffEqSolver):
    """Forward Euler: x(t+h) = x(t) + h f(x(t))."""

    name = "euler"

    def step(self, step_size: float) -> Any:
        va = self.sim.get_vars_list()
        x0 = np.array(va.get_values(), dtype=np.float64)
        k1, error = self._derivative(x0.copy(), 0.0)
        if error is not None:
            return error
        va.set_values(x0 + step_size * k1, continuous=True)
        return None


class ModifiedEulerSolver(DiffEqSolver):
    """Heun's method: average of the slopes at both ends of the step."""

    name = "modified_euler"

    def step(self, step_size: float) -> Any:
        va = self.sim.get_vars_list()
        x0 = np.array(va.get_values(), dtype=np.float64)
        h = step_size
        k1, error = self._derivative(x0.copy(), 0.0)
        if error is not None:
            return error
        k2, error = self._derivative(x0 + h * k1, h)
        if error is not None:
            return error
        va.set_values(x0 + (h / 2.0) * (k1 + k2), continuous=True)
        return None


class RungeKuttaSolver(DiffEqSolver):
    """
    Classical 4th-order Runge-Kutta.

    Evaluates derivatives at 4 points within the step and combines them
    with weights (1, 2, 2, 1)/6 to achieve O(h^5) local error.
    """

    name = "runge_kutta"

    def step(self, step_size: float) -> Any:
        va = self.sim.get_vars_list()
        x0 = np.array(va.get_values(), dtype=np.float64)
        h = step_size

        # RK4 stages
        k1, error = self._derivative(x0.copy(), 0.0)
        if error is not None:
            return error
        k2, error = self._derivative(x0 + 0.5 * h * k1, h / 2.0)
        if error is not None:
            return error
        k3, error = self._derivative(x0 + 0.5 * h * k2, h / 2.0)
        if error is not None:
            return error
        k4, error = self._derivative(x0 + h * k3, h)
        if error is not None:
            return error

        # Weighted combination
        va.set_values(x0 + (h / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4), continuous=True)
        return None


class AdaptiveStepSolver(DiffEqSolver):
    """
    Subdivides each step until energy is conserved to within tolerance.

    The whole step is first solved in one piece with the wrapped solver.
    If the energy changed by more than ``tolerance`` the state is restored
    and the step re-solved with sub-steps a fifth the size, and so on.

    With ``second_diff`` (the default) the criterion is instead that the
    change in energy stops changing between successive refinements, which
    suits simulations that do not conserve energy (e.g. with damping).

    Attributes:
        tolerance: Energy tolerance.
        second_diff: Use the change-in-energy-change criterion.
        total_steps: Number of sub-steps taken over the solver's lifetime.
    """

    name = "adaptive"

    def __init__(self, sim: ODESim, energy_system: EnergySystem, solver: DiffEqSolver,
                 tolerance: float = 1e-6, second_diff: bool = True) -> None:
        super().__init__(sim)
        self.energy_system = energy_system
        self.solver = solver
        self.tolerance = tolerance
        self.second_diff = second_diff
        self.total_steps = 0

    def _total_energy(self) -> float:
        return self.energy_system.get_energy_info().total_energy()

    def step(self, step_size: float) -> Any:
        sim = self.sim
        sim.save_state()
        start_time = sim.get_time()
        d_t = step_size
        sim.modify_objects()
        start_energy = self._total_energy()
        last_energy_diff = math.inf
        value = math.inf
        first_time = True
        steps = 0
        if step_size < 1e-15:
            return None
        while True:
            t = start_time
            if not first_time:
                # restore state and solve again with smaller step size
                sim.restore_state()
                sim.modify_objects()
                d_t = d_t / 5
                if d_t < 1e-15:
                    logger.error("time step too small %g at time %g", d_t, start_time)
                    raise IntegrationError(f"time step too small {d_t:g}", start_time)
            steps = 0
            while t < start_time + step_size:
                h = d_t
                if t + h > start_time + step_size - 1e-10:
                    h = start_time + step_size - t
                steps += 1
                error = self.solver.step(h)
                sim.modify_objects()
                if error is not None:
                    return error
                t += h
            energy_diff = abs(start_energy - self._total_energy())
            if self.second_diff:
                if not first_time:
                    value = abs(energy_diff - last_energy_diff)
            else:
                value = energy_diff
            last_energy_diff = energy_diff
            first_time = False
            if value <= self.tolerance:
                break
        self.total_steps += steps
        return None


SOLVERS = {
    EulerSolver.name: EulerSolver,
    ModifiedEulerSolver.name: ModifiedEulerSolver,
    RungeKuttaSolver.name: RungeKuttaSolver,
}


def make_solver(name: str, sim: ODESim) -> DiffEqSolver:
    """
    Build a solver by name: "euler", "modified_euler" or "runge_kutta".

    Raises:
        ValueError: If the name is not known.
    """
    try:
        cls = SOLVERS[name]
    except KeyError:
        raise ValueError(f"unknown solver {name!r}; expected one of {sorted(SOLVERS)}") from None
    return cls(sim)
