import math

import pytest

from physics_lab.model.variables import DELETED, VARS_MODIFIED, Variable, VarsList
from physics_lab.observe import Observer


class EventLog(Observer):
    def __init__(self):
        self.events = []

    def observe(self, event):
        self.events.append(event)


def sequences(va):
    return [v.sequence for v in va.to_array()]


def test_sequence_scenario():
    """Each discontinuous change bumps only the variable that changed."""
    va = VarsList(["position", "velocity", "time"])
    va.set_value(0, 3)
    va.set_value(1, -2)
    assert sequences(va) == [1, 1, 0]

    va.set_value(1, -2.1)
    assert sequences(va) == [1, 2, 0]
    assert va.get_values() == [3.0, -2.1, 0.0]


def test_sequence_unchanged_for_same_value_and_continuous():
    va = VarsList(["x", "time"])
    va.set_value(0, 3)
    va.set_value(0, 3)
    assert va.get_variable(0).sequence == 1

    va.set_value(0, 5, continuous=True)
    assert va.get_value(0) == 5
    assert va.get_variable(0).sequence == 1


def test_names_and_time_variable():
    va = VarsList(["kinetic energy", "time"], ["Kinetic Energy", "Zeit"])
    assert va.get_names() == ["KINETIC_ENERGY", "TIME"]
    assert va.get_names(local=True) == ["Kinetic Energy", "Zeit"]
    assert va.time_index() == 1
    assert va.index_of("kinetic-energy") == 0
    assert va.get_variable("Kinetic Energy").index == 0
    va.set_time(2.5)
    assert va.get_time() == 2.5


def test_bad_names_rejected():
    with pytest.raises(ValueError):
        VarsList(["x", "x"])
    with pytest.raises(ValueError):
        VarsList(["deleted"])
    with pytest.raises(ValueError):
        VarsList(["x"], ["X", "Y"])
    with pytest.raises(ValueError):
        VarsList(["1x"])


def test_lookup_errors():
    va = VarsList(["x", "time"])
    with pytest.raises(IndexError):
        va.get_variable(2)
    with pytest.raises(IndexError):
        va.get_value(-1)
    with pytest.raises(KeyError):
        va.get_variable("y")
    assert va.index_of("y") == -1


def test_index_stability_under_deletion():
    """Deleted slots are reused by the next variables added; other indices stay."""
    va = VarsList(["a", "b", "c", "d", "e"])
    va.delete_variables(1, 2)
    assert va.get_names() == ["A", DELETED, DELETED, "D", "E"]
    assert va.num_variables() == 5

    start = va.add_variables(["x", "y"])
    assert start == 1
    assert va.get_names() == ["A", "X", "Y", "D", "E"]
    assert va.index_of("d") == 3
    assert va.index_of("e") == 4


def test_deleted_run_at_end_is_extended():
    va = VarsList(["a", "b", "c"])
    va.delete_variables(2, 1)
    start = va.add_variables(["x", "y"])
    assert start == 2
    assert va.get_names() == ["A", "B", "X", "Y"]


def test_add_variable_grows_when_no_room():
    va = VarsList(["a", "b"])
    va.delete_variables(0, 1)
    # one deleted slot is not enough for two variables
    start = va.add_variables(["x", "y"])
    assert start == 2
    assert va.get_names() == [DELETED, "B", "X", "Y"]
    assert va.add_variable(Variable("z")) == 0


def test_add_and_delete_errors():
    va = VarsList(["a", "b"])
    with pytest.raises(ValueError):
        va.add_variables([])
    with pytest.raises(ValueError):
        va.add_variables(["a"])
    with pytest.raises(ValueError):
        va.add_variables(["q", "q"])
    with pytest.raises(ValueError):
        va.add_variable(Variable("deleted"))
    with pytest.raises(IndexError):
        va.delete_variables(1, 2)


def test_structure_changes_broadcast():
    va = VarsList(["a", "b"])
    log = EventLog()
    va.add_observer(log)
    va.add_variables(["c"])
    va.delete_variables(0, 1)
    assert [e.name for e in log.events] == [VARS_MODIFIED, VARS_MODIFIED]


def test_deleting_time_variable():
    va = VarsList(["x", "time"])
    va.delete_variables(1, 1)
    assert va.time_index() == -1
    with pytest.raises(ValueError):
        va.get_time()
    with pytest.raises(ValueError):
        va.set_time(1.0)
    # setting a deleted slot is ignored
    va.set_value(1, 7.0)
    assert va.get_value(1) == 0.0


def test_set_values_partial_length():
    va = VarsList(["a", "b", "c", "d", "e"])
    va.set_values([1, 2, 3, 4, 5])
    va.set_values([7, 8])
    assert va.get_values() == [7.0, 8.0, 3.0, 4.0, 5.0]

    with pytest.raises(ValueError):
        va.set_values([0, 0, 0, 0, 0, 0])


def test_nan_rejected():
    """NaN on a non-computed variable fails and leaves value and sequence alone."""
    va = VarsList(["x", "time"])
    va.set_value(0, 4.0)
    with pytest.raises(ValueError):
        va.set_value(0, math.nan)
    assert va.get_value(0) == 4.0
    assert va.get_variable(0).sequence == 1


def test_set_values_with_nan_writes_nothing():
    va = VarsList(["a", "b", "c"])
    with pytest.raises(ValueError):
        va.set_values([5.0, math.nan, 7.0])
    assert va.get_values() == [0.0, 0.0, 0.0]
    assert [v.sequence for v in va.to_array()] == [0, 0, 0]


def test_computed_variables():
    va = VarsList(["x", "energy", "time"])
    va.set_computed(1)
    va.set_value(1, 2.0)
    values = va.get_values()
    assert values[0] == 0.0
    assert math.isnan(values[1])
    assert va.get_values(computed=True)[1] == 2.0
    # NaN is allowed for computed variables
    va.set_value(1, math.nan)
    assert math.isnan(va.get_value(1))


def test_incr_sequence():
    va = VarsList(["a", "b", "time"])
    va.incr_sequence(0, 2)
    assert sequences(va) == [1, 0, 1]
    va.incr_sequence()
    assert sequences(va) == [2, 1, 2]
    with pytest.raises(IndexError):
        va.incr_sequence(5)


def test_variable_broadcast_flag():
    va = VarsList(["x", "time"])
    log = EventLog()
    va.add_observer(log)
    variable = va.get_variable("x")
    variable.broadcast = True
    va.set_value(0, 1.5)
    va.set_value(0, 1.5)
    assert len(log.events) == 1
    assert log.events[0].name == "X"
    assert log.events[0].value is variable


def test_history_keeps_recent_snapshots():
    va = VarsList(["x", "time"], history=True)
    for i in range(25):
        va.set_values([float(i), i * 0.1])
        va.save_history()
    text = va.print_one_history(1)
    assert "# time = 2.40000" in text
    assert "sim.vars_list.set_value(0, 24.0)" in text
    assert va.print_one_history(21) == ""
    assert va.print_history(2) == va.print_one_history(2)


def test_history_off_by_default():
    va = VarsList(["x", "time"])
    va.save_history()
    assert va.print_one_history(1) == ""
