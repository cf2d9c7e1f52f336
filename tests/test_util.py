import math

import numpy as np
import pytest

from physics_lab.util import (
    ORIGIN, distance, limit_angle, near_equal, norm, rotate, to_name, valid_name,
)


def test_names():
    assert to_name("kinetic energy") == "KINETIC_ENERGY"
    assert to_name("x-position") == "X_POSITION"
    assert valid_name("TIME_2") == "TIME_2"
    with pytest.raises(ValueError):
        valid_name("2TIME")
    with pytest.raises(ValueError):
        valid_name("time")


def test_limit_angle():
    assert limit_angle(1.0) == 1.0
    assert limit_angle(math.pi + 0.5) == pytest.approx(-math.pi + 0.5)
    assert limit_angle(-math.pi - 0.5) == pytest.approx(math.pi - 0.5)


def test_vectors():
    assert norm(np.array([3.0, 4.0])) == 5.0
    assert distance(np.array([1.0, 1.0]), np.array([4.0, 5.0])) == 5.0
    assert np.allclose(rotate(np.array([1.0, 0.0]), math.pi / 2), [0.0, 1.0])
    assert near_equal(np.array([1.0, 1.0]), np.array([1.05, 0.95]), 0.1)
    with pytest.raises(ValueError):
        ORIGIN[0] = 1.0
