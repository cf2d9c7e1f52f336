# MIT License (see LICENSE)
"""
The simulation model: variables, SimObjects, solvers and advance strategies.

Typical usage:
    from physics_lab.model import SimpleAdvance

    advance = SimpleAdvance(sim, time_step=0.025)
    advance.advance(0.025)
"""
from .advance import AdvanceStrategy, SimpleAdvance
from .energy import EnergyInfo, EnergySystem
from .sim_object import (
    Force, Line, PointMass, PointMassShape, SimList, SimObject, SimObjectKind, Spring,
)
from .simulation import AbstractODESim, ODESim, Simulation
from .solvers import (
    AdaptiveStepSolver, DiffEqSolver, EulerSolver, ModifiedEulerSolver, RungeKuttaSolver,
    make_solver,
)
from .variables import Variable, VarsList

__all__ = [
    # State
    "Variable",
    "VarsList",
    # Simulation contract
    "Simulation",
    "ODESim",
    "AbstractODESim",
    "EnergyInfo",
    "EnergySystem",
    # SimObjects
    "SimObject",
    "SimObjectKind",
    "PointMass",
    "PointMassShape",
    "Spring",
    "Line",
    "Force",
    "SimList",
    # Time stepping
    "DiffEqSolver",
    "EulerSolver",
    "ModifiedEulerSolver",
    "RungeKuttaSolver",
    "AdaptiveStepSolver",
    "make_solver",
    "AdvanceStrategy",
    "SimpleAdvance",
]
