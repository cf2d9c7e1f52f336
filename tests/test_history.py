import math

import pytest

from physics_lab.history import CircularList, VarsHistory
from physics_lab.model.variables import VarsList


def test_circular_list_wraps():
    c = CircularList(3)
    assert c.get_end_index() == -1
    assert c.get_end_value() is None
    for i in range(5):
        assert c.store(i * 10) == i
    assert len(c) == 3
    assert c.get_start_index() == 2
    assert c.get_end_index() == 4
    assert c.get_value(3) == 30
    assert list(c.iterate()) == [(2, 20), (3, 30), (4, 40)]
    assert list(c.iterate(4)) == [(4, 40)]
    with pytest.raises(IndexError):
        c.get_value(1)
    with pytest.raises(IndexError):
        c.get_value(5)
    c.reset()
    assert len(c) == 0
    assert c.get_end_index() == -1


def test_circular_list_capacity():
    with pytest.raises(ValueError):
        CircularList(1)


def test_vars_history_skips_duplicates():
    va = VarsList(["x", "energy", "time"])
    va.set_computed(1)
    history = VarsHistory(va, capacity=10)
    va.set_values([1.0, 5.0, 0.0])
    history.memorize()
    history.memorize()
    va.set_time(0.1)
    history.memorize()
    # computed values are recorded
    assert history.to_array() == [[1.0, 5.0, 0.0], [1.0, 5.0, 0.1]]


def test_vars_history_nan_counts_as_unchanged():
    va = VarsList(["x", "energy", "time"])
    va.set_computed(1)
    va.set_value(1, math.nan)
    history = VarsHistory(va)
    history.memorize()
    history.memorize()
    assert len(history.data_points) == 1


def test_vars_history_select_variables():
    va = VarsList(["x", "v", "time"], ["ex", "vee", "tee"])
    history = VarsHistory(va)
    history.memorize()
    history.set_variables([2, 0])
    assert history.get_variables() == [2, 0]
    assert history.to_array() == []
    va.set_values([1.5, 0.0, 0.25])
    history.memorize()
    assert history.output() == "tee, ex\n0.25, 1.5\n"
    assert history.output(localized=False).startswith("TIME, X\n")
    with pytest.raises(IndexError):
        history.set_variables([3])
