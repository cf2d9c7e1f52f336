# MIT License (see LICENSE)
"""
physics_lab - A framework for interactive ODE simulations.

This package provides the core of an interactive physics lab: named state
variables with discontinuity tracking, a simulation contract with
differential equation solvers, and a toolkit-neutral event-routing layer
which turns pointer gestures on a canvas into drags of simulation objects
or pans of a view.

Main entry points:
    - VarsList: The state variables of a simulation.
    - AbstractODESim: Base class for simulations defined by ODEs.
    - SimpleAdvance: Advances a simulation one time step.
    - SimController: Routes input events on a LabCanvas.
    - SimRunner: Drives advance strategies from a host clock.

Submodules:
    - model: Variables, SimObjects, solvers and advance strategies.
    - view: Coordinate maps, display objects and views.
    - app: Event handling, drag routing and the run loop.
    - sims: Example simulations.
    - io: JSON snapshots of simulation state.

Example:
    from physics_lab import SimpleAdvance
    from physics_lab.sims import SingleSpringSim

    sim = SingleSpringSim()
    advance = SimpleAdvance(sim)
    for _ in range(40):
        advance.advance(0.025)
"""
from .config import LabConfig
from .errors import IntegrationError, TimeStuckError
from .logging_config import setup_logging
from .model.advance import SimpleAdvance
from .model.simulation import AbstractODESim
from .model.variables import Variable, VarsList
from .app.sim_controller import SimController
from .app.sim_runner import SimRunner

__all__ = [
    # State
    "Variable",
    "VarsList",
    # Simulation
    "AbstractODESim",
    "SimpleAdvance",
    # Interaction
    "SimController",
    "SimRunner",
    # Errors
    "IntegrationError",
    "TimeStuckError",
    # Ambient
    "LabConfig",
    "setup_logging",
]
