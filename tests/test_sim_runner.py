import pytest

from physics_lab.app.sim_runner import ErrorObserver, SimRunner
from physics_lab.errors import IntegrationError, TimeStuckError
from physics_lab.memo import GenericMemo
from physics_lab.model.advance import AdvanceStrategy, SimpleAdvance

from helpers import DecaySim


class Errors(ErrorObserver):
    def __init__(self):
        self.errors = []

    def notify_error(self, error):
        self.errors.append(error)


class StuckAdvance(AdvanceStrategy):
    def advance(self, time_step, memo_list=None):
        pass

    def get_time(self):
        return 0.0

    def get_time_step(self):
        return 0.25


def test_advance_to_target():
    sim = DecaySim()
    runner = SimRunner(SimpleAdvance(sim), time_step=0.25)
    steps = []
    runner.add_memo(GenericMemo(lambda: steps.append(sim.get_time())))
    runner.advance_to(1.0)
    assert steps == pytest.approx([0.25, 0.5, 0.75, 1.0])
    # already there
    runner.advance_to(1.0)
    assert len(steps) == 4


def test_remainder_left_for_next_call():
    sim = DecaySim()
    runner = SimRunner(SimpleAdvance(sim), time_step=0.25)
    runner.advance_to(0.6)
    assert sim.get_time() == pytest.approx(0.5)


def test_time_step_defaults_to_strategy():
    runner = SimRunner(SimpleAdvance(DecaySim(), time_step=0.1))
    assert runner.time_step == 0.1
    with pytest.raises(ValueError):
        runner.set_time_step(0.0)


def test_pause_and_step():
    sim = DecaySim()
    runner = SimRunner(SimpleAdvance(sim), time_step=0.25)
    runner.pause()
    runner.advance_to(1.0)
    assert sim.get_time() == 0.0
    runner.step()
    assert sim.get_time() == 0.25
    runner.resume()
    runner.advance_to(1.0)
    assert sim.get_time() == 1.0


def test_memo_may_pause_runner():
    sim = DecaySim()
    runner = SimRunner(SimpleAdvance(sim), time_step=0.25)
    runner.add_memo(GenericMemo(runner.pause))
    runner.advance_to(1.0)
    assert sim.get_time() == 0.25


def test_error_pauses_and_notifies():
    runner = SimRunner(SimpleAdvance(DecaySim(error_after=0.3)), time_step=0.25)
    errors = Errors()
    runner.add_error_observer(errors)
    runner.add_error_observer(errors)
    with pytest.raises(IntegrationError):
        runner.advance_to(1.0)
    assert not runner.running
    assert len(errors.errors) == 1
    assert isinstance(errors.errors[0], IntegrationError)
    runner.remove_error_observer(errors)


def test_stuck_time_detected():
    runner = SimRunner(StuckAdvance())
    with pytest.raises(TimeStuckError):
        runner.advance_to(1.0)
    assert not runner.running


def test_several_strategies():
    a, b = DecaySim(), DecaySim()
    runner = SimRunner(SimpleAdvance(a), time_step=0.25)
    runner.add_strategy(SimpleAdvance(b))
    runner.advance_to(0.5)
    assert a.get_time() == 0.5
    assert b.get_time() == 0.5
