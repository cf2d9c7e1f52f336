# MIT License (see LICENSE)
"""
A damped, driven pendulum.

A bob of mass m hangs from a pivot at the origin on a rigid rod of length L.
With angle th measured from straight down, gravity g, damping b and a
driving torque of amplitude A and frequency k:

    th' = v
    v'  = -(g/L) sin(th) - (b/(m L^2)) v + (A/(m L^2)) cos(k t)

Variables:

    0      1       2     3        4   5   6
    angle, angle', time, angle'', ke, pe, te

When ``limit_angle`` is on the angle is kept within +/- pi; each wrap is a
discontinuous change. Dragging moves the bob along its circular arc.
"""
from __future__ import annotations
import math

import numpy as np

from ..app.event_handler import EventHandler
from ..events import KeyEvent, ModifierKeys
from ..model.energy import EnergyInfo, EnergySystem
from ..model.sim_object import Line, PointMass, PointMassShape, SimObject
from ..model.simulation import AbstractODESim, PARAMETER_CHANGED
from ..model.variables import VarsList
from ..util import f64, limit_angle, zero_array

TH, TH_P, TIME, TH_PP, KE, PE, TE = range(7)

VAR_NAMES = [
    "angle",
    "angular velocity",
    "time",
    "angular acceleration",
    "kinetic energy",
    "potential energy",
    "total energy",
]

START_DRAG = "START_DRAG"
MOUSE_DRAG = "MOUSE_DRAG"
FINISH_DRAG = "FINISH_DRAG"


class PendulumSim(AbstractODESim, EventHandler, EnergySystem):
    """
    Driven pendulum simulation.

    Args:
        name: Name of the simulation.
        history: Keep recent VarsList snapshots.

    Attributes:
        length: Rod length L.
        gravity: Gravity g.
        damping: Damping b.
        drive_frequency: Driving frequency k.
        drive_amplitude: Driving amplitude A.
        limit_angle: Keep the angle within +/- pi.
    """

    def __init__(self, name: str = "PENDULUM_SIM", history: bool = False) -> None:
        super().__init__(VarsList(VAR_NAMES, name=name + "_VARS", history=history), name=name)
        self.vars_list.set_computed(TH_PP, KE, PE, TE)
        self.length = 1.0
        self.gravity = 1.0
        self.damping = 0.5
        self.drive_frequency = 2.0 / 3.0
        self.drive_amplitude = 1.15
        self.limit_angle = True
        self.potential_offset = 0.0
        self.is_dragging = False
        self.pivot = f64([0.0, 0.0])
        self.bob = PointMass("bob", mass=1.0, width=0.2, height=0.2, shape=PointMassShape.OVAL)
        self.rod = Line("rod")
        self.vars_list.set_value(TH, math.pi / 8)
        self.sim_list.add(self.rod, self.bob)
        self.modify_objects()
        self.save_initial_state()

    # -------------------------------------------------------------------------
    # EnergySystem
    # -------------------------------------------------------------------------

    def get_energy_info(self) -> EnergyInfo:
        ke = self.bob.get_kinetic_energy()
        y = self.bob.position[1]
        # zero potential energy at the lowest point of the bob
        pe = self.gravity * self.bob.mass * (y + self.length)
        return EnergyInfo(potential=pe + self.potential_offset, translational=ke,
                          rotational=0.0)

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
        if self.limit_angle:
            angle = limit_angle(vars[TH])
            if angle != vars[TH]:
                # wrapping the angle is a discontinuity
                va.set_value(TH, angle)
                vars[TH] = angle
        self._move_objects(vars)
        rate = np.zeros(len(vars))
        self.evaluate(vars, rate, 0.0)
        vars[TH_PP] = float(rate[TH_P])
        ei = self.get_energy_info()
        vars[KE] = ei.translational
        vars[PE] = ei.potential
        vars[TE] = ei.total_energy()
        va.set_values(vars, continuous=True)

    def _move_objects(self, vars) -> None:
        angle = vars[TH]
        sin_angle = math.sin(angle)
        cos_angle = math.cos(angle)
        length = self.length
        self.bob.set_position((self.pivot[0] + length * sin_angle,
                               self.pivot[1] - length * cos_angle))
        self.bob.set_velocity((vars[TH_P] * length * cos_angle,
                               vars[TH_P] * length * sin_angle))
        self.rod.set_start_point(self.pivot)
        self.rod.set_end_point(self.bob.position)

    def evaluate(self, vars, change, time_step: float):
        zero_array(change)
        change[TIME] = 1.0
        if not self.is_dragging:
            change[TH] = vars[TH_P]
            length = self.length
            dd = -(self.gravity / length) * math.sin(vars[TH])
            mlsq = self.bob.mass * length * length
            dd += -(self.damping / mlsq) * vars[TH_P]
            dd += (self.drive_amplitude / mlsq) * math.cos(self.drive_frequency * vars[TIME])
            change[TH_P] = dd
        return None

    # -------------------------------------------------------------------------
    # EventHandler
    # -------------------------------------------------------------------------

    def start_drag(self, sim_object: SimObject | None, location, offset, drag_body,
                   modifiers: ModifierKeys) -> bool:
        if sim_object is self.bob:
            self.is_dragging = True
            self.broadcast_event(START_DRAG, sim_object)
            return True
        return False

    def mouse_drag(self, sim_object: SimObject | None, location, offset) -> None:
        va = self.vars_list
        vars = va.get_values()
        if sim_object is self.bob:
            # movement only along the circular arc
            p = np.asarray(location) - np.asarray(offset) - self.pivot
            vars[TH] = math.pi / 2 + math.atan2(p[1], p[0])
            vars[TH_P] = 0.0
            va.set_values(vars)
            self._move_objects(vars)
            self.broadcast_event(MOUSE_DRAG, sim_object)

    def finish_drag(self, sim_object: SimObject | None, location, offset) -> None:
        if self.is_dragging:
            self.is_dragging = False
            self.broadcast_event(FINISH_DRAG, sim_object)

    def handle_key_event(self, event: KeyEvent, pressed: bool, modifiers: ModifierKeys) -> None:
        pass

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def set_mass(self, value: float) -> None:
        self.bob.mass = value
        self.vars_list.incr_sequence(KE, PE, TE)
        self.broadcast_event(PARAMETER_CHANGED, "MASS")

    def set_gravity(self, value: float) -> None:
        self.gravity = value
        self.vars_list.incr_sequence(PE, TE)
        self.broadcast_event(PARAMETER_CHANGED, "GRAVITY")

    def set_length(self, value: float) -> None:
        self.length = value
        self.vars_list.incr_sequence(KE, PE, TE)
        self.modify_objects()
        self.broadcast_event(PARAMETER_CHANGED, "LENGTH")

    def set_damping(self, value: float) -> None:
        self.damping = value
        self.broadcast_event(PARAMETER_CHANGED, "DAMPING")

    def set_drive_amplitude(self, value: float) -> None:
        self.drive_amplitude = value
        self.broadcast_event(PARAMETER_CHANGED, "DRIVE_AMPLITUDE")

    def set_drive_frequency(self, value: float) -> None:
        self.drive_frequency = value
        self.broadcast_event(PARAMETER_CHANGED, "DRIVE_FREQUENCY")
