# MIT License (see LICENSE)
"""
A block on a damped spring, moving horizontally.

The spring joins a fixed point at x = -rest_length to the block. With the
block position x, velocity v, mass m, stiffness k and damping b:

    x' = v
    v' = (-k * stretch - b * v) / m
    W' = -b * v^2            (work done by damping)

Variables:

    0  1  2     3     4      5   6   7
    x, v, work, time, accel, ke, pe, te

Acceleration and the energies are computed from the state in
modify_objects(). Dragging the block moves it horizontally and stops it.
"""
from __future__ import annotations
import math

import numpy as np

from ..app.event_handler import EventHandler
from ..events import KeyEvent, ModifierKeys
from ..model.energy import EnergyInfo, EnergySystem
from ..model.sim_object import PointMass, PointMassShape, SimObject, Spring
from ..model.simulation import AbstractODESim, PARAMETER_CHANGED
from ..model.variables import VarsList
from ..util import zero_array

X, V, WORK, TIME, ACCEL, KE, PE, TE = range(8)

VAR_NAMES = [
    "position",
    "velocity",
    "work from damping",
    "time",
    "acceleration",
    "kinetic energy",
    "potential energy",
    "total energy",
]


class SingleSpringSim(AbstractODESim, EventHandler, EnergySystem):
    """
    Damped single spring simulation.

    Args:
        name: Name of the simulation.
        history: Keep recent VarsList snapshots.
    """

    def __init__(self, name: str = "SINGLE_SPRING_SIM", history: bool = False) -> None:
        super().__init__(VarsList(VAR_NAMES, name=name + "_VARS", history=history), name=name)
        self.vars_list.set_computed(ACCEL, KE, PE, TE)
        self.damping = 0.1
        self.potential_offset = 0.0
        self.initial_energy = math.nan
        self.is_dragging = False
        self.block = PointMass("block", mass=0.5, width=0.4, height=0.8,
                               shape=PointMassShape.RECTANGLE)
        self.fixed_point = PointMass("fixed_point", mass=math.inf, width=0.5, height=0.5,
                                     shape=PointMassShape.RECTANGLE)
        rest_length = 2.5
        self.fixed_point.set_position((-rest_length, 0.0))
        self.spring = Spring("spring", self.fixed_point, (0.0, 0.0), self.block, (0.0, 0.0),
                             rest_length, stiffness=3.0)
        self.vars_list.set_value(X, -2.0)
        self.init_work()
        self.modify_objects()
        self.save_initial_state()
        self.sim_list.add(self.block, self.fixed_point, self.spring)

    def on_reset(self) -> None:
        self.init_work()

    def init_work(self) -> None:
        """Zero the damping work and record the current energy as the initial energy."""
        self.vars_list.set_value(WORK, 0.0)
        self._move_objects(self.vars_list.get_values())
        self.initial_energy = self.get_energy_info().total_energy()

    # -------------------------------------------------------------------------
    # EnergySystem
    # -------------------------------------------------------------------------

    def get_energy_info(self) -> EnergyInfo:
        return self._energy_info(self.vars_list.get_value(WORK))

    def _energy_info(self, work: float) -> EnergyInfo:
        ke = self.block.get_kinetic_energy()
        pe = self.spring.get_potential_energy() + self.potential_offset
        return EnergyInfo(potential=pe, translational=ke, rotational=0.0,
                          work_done=work, initial_energy=self.initial_energy)

    def set_potential_energy(self, value: float) -> None:
        self.potential_offset = 0.0
        self.potential_offset = value - self.get_energy_info().potential
        self.vars_list.incr_sequence(PE, TE)

    # -------------------------------------------------------------------------
    # ODESim
    # -------------------------------------------------------------------------

    def modify_objects(self) -> None:
        va = self.vars_list
        vars = va.get_values()
        self._move_objects(vars)
        rate = np.zeros(len(vars))
        self.evaluate(vars, rate, 0.0)
        vars[ACCEL] = float(rate[V])
        ei = self._energy_info(vars[WORK])
        vars[KE] = ei.translational
        vars[PE] = ei.potential
        vars[TE] = ei.total_energy()
        va.set_values(vars, continuous=True)

    def _move_objects(self, vars) -> None:
        self.block.set_position((vars[X], 0.0))
        self.block.set_velocity((vars[V], 0.0))

    def evaluate(self, vars, change, time_step: float):
        zero_array(change)
        change[TIME] = 1.0
        if not self.is_dragging:
            self._move_objects(vars)
            change[X] = vars[V]
            change[V] = (-self.spring.stiffness * self.spring.get_stretch()
                         - self.damping * vars[V]) / self.block.mass
            change[WORK] = -self.damping * vars[V] * vars[V]
        return None

    # -------------------------------------------------------------------------
    # EventHandler
    # -------------------------------------------------------------------------

    def start_drag(self, sim_object: SimObject | None, location, offset, drag_body,
                   modifiers: ModifierKeys) -> bool:
        if sim_object is self.block:
            self.is_dragging = True
            return True
        return False

    def mouse_drag(self, sim_object: SimObject | None, location, offset) -> None:
        va = self.vars_list
        if sim_object is self.block:
            # horizontal component only
            p = np.asarray(location) - np.asarray(offset)
            va.set_value(X, float(p[0]))
            va.set_value(V, 0.0)
            self.init_work()
            # derived energy variables are discontinuous
            va.incr_sequence(ACCEL, KE, PE, TE)
            self._move_objects(va.get_values())

    def finish_drag(self, sim_object: SimObject | None, location, offset) -> None:
        self.is_dragging = False

    def handle_key_event(self, event: KeyEvent, pressed: bool, modifiers: ModifierKeys) -> None:
        pass

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def get_mass(self) -> float:
        return self.block.mass

    def set_mass(self, value: float) -> None:
        self.block.mass = value
        self.init_work()
        self.vars_list.incr_sequence(ACCEL, KE, PE, TE)
        self.broadcast_event(PARAMETER_CHANGED, "MASS")

    def set_spring_stiffness(self, value: float) -> None:
        self.spring.stiffness = value
        self.init_work()
        self.vars_list.incr_sequence(ACCEL, PE, TE)
        self.broadcast_event(PARAMETER_CHANGED, "SPRING_STIFFNESS")

    def set_spring_rest_length(self, value: float) -> None:
        self.spring.rest_length = value
        self.init_work()
        self.vars_list.incr_sequence(ACCEL, PE, TE)
        self.broadcast_event(PARAMETER_CHANGED, "SPRING_LENGTH")

    def set_damping(self, value: float) -> None:
        self.damping = value
        self.init_work()
        self.broadcast_event(PARAMETER_CHANGED, "DAMPING")

    def set_fixed_point(self, x: float) -> None:
        self.fixed_point.set_position((x, 0.0))
        self.init_work()
        self.vars_list.incr_sequence(ACCEL, PE, TE)
        self.broadcast_event(PARAMETER_CHANGED, "FIXED_POINT")
