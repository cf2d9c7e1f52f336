import math

import numpy as np
import pytest

from physics_lab.events import ModifierKeys
from physics_lab.model.advance import SimpleAdvance
from physics_lab.model.simulation import PARAMETER_CHANGED, RESET
from physics_lab.observe import Observer
from physics_lab.sims.single_spring import (
    ACCEL, KE, PE, TE, TIME, V, WORK, X, SingleSpringSim,
)


class Recorder(Observer):
    def __init__(self):
        self.events = []

    def observe(self, event):
        self.events.append((event.name, event.value))


def test_initial_state():
    sim = SingleSpringSim()
    values = sim.get_vars_list().get_values(computed=True)
    assert values[X] == -2.0
    assert values[V] == 0.0
    # stretch is -2, stiffness 3
    assert values[PE] == pytest.approx(6.0)
    assert values[KE] == 0.0
    assert values[TE] == pytest.approx(6.0)
    assert values[ACCEL] == pytest.approx(12.0)
    assert len(sim.get_sim_list()) == 3


def test_energy_balance_with_damping():
    """Total energy minus the work done by damping stays constant."""
    sim = SingleSpringSim()
    advance = SimpleAdvance(sim, time_step=0.025)
    for _ in range(80):
        advance.advance(0.025)
    values = sim.get_vars_list().get_values(computed=True)
    assert values[TIME] == pytest.approx(2.0)
    assert values[WORK] < 0.0
    assert values[TE] < 6.0
    assert values[TE] - values[WORK] == pytest.approx(6.0, abs=1e-5)
    assert np.allclose(sim.block.position, [values[X], 0.0])


def test_drag_block():
    sim = SingleSpringSim()
    va = sim.get_vars_list()
    seq_x = va.get_variable(X).sequence
    seq_ke = va.get_variable(KE).sequence
    assert sim.start_drag(sim.block, np.array([-2.0, 0.3]), np.array([0.0, 0.3]), None,
                          ModifierKeys())
    sim.mouse_drag(sim.block, np.array([1.0, 0.5]), np.array([0.0, 0.3]))
    assert va.get_value(X) == 1.0
    assert va.get_value(V) == 0.0
    assert va.get_variable(X).sequence > seq_x
    assert va.get_variable(KE).sequence > seq_ke

    # no motion while dragging except time
    change = np.zeros(va.num_variables())
    sim.evaluate(va.get_values(), change, 0.025)
    assert change[X] == 0.0 and change[V] == 0.0 and change[TIME] == 1.0

    sim.finish_drag(sim.block, np.array([1.0, 0.5]), np.array([0.0, 0.3]))
    assert not sim.is_dragging


def test_fixed_point_not_dragged():
    sim = SingleSpringSim()
    assert not sim.start_drag(sim.fixed_point, np.zeros(2), np.zeros(2), None, ModifierKeys())
    assert not sim.start_drag(None, np.zeros(2), np.zeros(2), None, ModifierKeys())


def test_reset_restores_position_and_work():
    sim = SingleSpringSim()
    recorder = Recorder()
    sim.add_observer(recorder)
    advance = SimpleAdvance(sim)
    for _ in range(10):
        advance.advance(0.025)
    sim.reset()
    va = sim.get_vars_list()
    assert va.get_value(X) == -2.0
    assert va.get_value(WORK) == 0.0
    assert va.get_time() == 0.0
    assert (RESET, None) in recorder.events


class ResetEnergy(Observer):
    def __init__(self, sim):
        self.sim = sim
        self.seen = []

    def observe(self, event):
        if event.name == RESET:
            info = self.sim.get_energy_info()
            self.seen.append((info.initial_energy, self.sim.get_vars_list().get_value(WORK)))


def test_reset_observers_see_fresh_energy():
    """By the time RESET is broadcast the initial energy matches the restored state."""
    sim = SingleSpringSim()
    advance = SimpleAdvance(sim)
    for _ in range(20):
        advance.advance(0.025)
    # stiffness 6 at the initial stretch of -2 gives 12
    sim.set_spring_stiffness(6.0)
    for _ in range(10):
        advance.advance(0.025)
    watcher = ResetEnergy(sim)
    sim.add_observer(watcher)
    sim.reset()
    assert len(watcher.seen) == 1
    initial_energy, work = watcher.seen[0]
    assert initial_energy == pytest.approx(12.0)
    assert work == 0.0


def test_parameter_changes():
    sim = SingleSpringSim()
    recorder = Recorder()
    sim.add_observer(recorder)
    va = sim.get_vars_list()
    seq = va.get_variable(KE).sequence
    sim.set_mass(1.0)
    assert va.get_variable(KE).sequence == seq + 1
    sim.set_spring_stiffness(6.0)
    sim.modify_objects()
    assert va.get_value(PE) == pytest.approx(12.0)
    assert sim.initial_energy == pytest.approx(12.0)
    sim.set_potential_energy(0.0)
    sim.modify_objects()
    assert va.get_value(PE) == pytest.approx(0.0)
    assert recorder.events[:2] == [(PARAMETER_CHANGED, "MASS"),
                                   (PARAMETER_CHANGED, "SPRING_STIFFNESS")]


def test_energy_info():
    sim = SingleSpringSim()
    info = sim.get_energy_info()
    assert info.total_energy() == pytest.approx(6.0)
    assert info.work_done == 0.0
    assert info.initial_energy == pytest.approx(6.0)
    assert math.isfinite(info.rotational)
