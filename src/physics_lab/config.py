# MIT License (see LICENSE)
"""
Run-time configuration.

Defaults live in the LabConfig dataclass; ``LabConfig.from_env()``
overrides them from environment variables:

    PHYSICS_LAB_TIME_STEP   float, step size for SimpleAdvance / SimRunner
    PHYSICS_LAB_SOLVER      "euler", "modified_euler" or "runge_kutta"
    PHYSICS_LAB_HISTORY     "1" keeps recent VarsList snapshots
    PHYSICS_LAB_LOG_LEVEL   logging level name, e.g. "DEBUG"
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping

from .app.event_handler import EventHandler
from .app.sim_controller import SimController
from .events import Document, ModifierKeys
from .history import DEFAULT_CAPACITY, VarsHistory
from .model.advance import SimpleAdvance
from .model.simulation import ODESim
from .model.solvers import SOLVERS, DiffEqSolver, make_solver
from .model.variables import VarsList
from .view.sim_view import LabCanvas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabConfig:
    """
    Settings shared by the pieces of an application.

    Attributes:
        time_step: Simulation time step in seconds.
        solver: Name of the differential equation solver.
        history: Whether VarsLists keep their most recent snapshots.
        history_capacity: Samples held by a VarsHistory.
        pan_modifiers: Modifier keys that pan the view; None disables panning.
        log_level: Level passed to setup_logging.
    """
    time_step: float = 0.025
    solver: str = "runge_kutta"
    history: bool = False
    history_capacity: int = DEFAULT_CAPACITY
    pan_modifiers: ModifierKeys | None = ModifierKeys(shift=True)
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.time_step <= 0:
            raise ValueError(f"time_step must be positive: {self.time_step}")
        if self.solver not in SOLVERS:
            raise ValueError(f"unknown solver {self.solver!r}; expected one of {sorted(SOLVERS)}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LabConfig":
        """Defaults overridden by PHYSICS_LAB_* environment variables."""
        env = os.environ if environ is None else environ
        config = cls()
        if "PHYSICS_LAB_TIME_STEP" in env:
            config = replace(config, time_step=float(env["PHYSICS_LAB_TIME_STEP"]))
        if "PHYSICS_LAB_SOLVER" in env:
            config = replace(config, solver=env["PHYSICS_LAB_SOLVER"])
        if "PHYSICS_LAB_HISTORY" in env:
            config = replace(config, history=env["PHYSICS_LAB_HISTORY"] == "1")
        if "PHYSICS_LAB_LOG_LEVEL" in env:
            config = replace(config, log_level=env["PHYSICS_LAB_LOG_LEVEL"].upper())
        logger.debug("configuration %s", config)
        return config

    def make_solver(self, sim: ODESim) -> DiffEqSolver:
        return make_solver(self.solver, sim)

    def make_advance(self, sim: ODESim) -> SimpleAdvance:
        """SimpleAdvance with the configured solver and time step."""
        return SimpleAdvance(sim, self.make_solver(sim), self.time_step)

    def make_history(self, vars_list: VarsList) -> VarsHistory:
        return VarsHistory(vars_list, capacity=self.history_capacity)

    def make_controller(self, lab_canvas: LabCanvas, event_handler: EventHandler | None = None,
                        document: Document | None = None) -> SimController:
        """SimController that pans with the configured modifier keys."""
        return SimController(lab_canvas, event_handler, pan_modifiers=self.pan_modifiers,
                             document=document)
