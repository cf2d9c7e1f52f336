import numpy as np
import pytest

from physics_lab.app.view_panner import ViewPanner
from physics_lab.types import DoubleRect

from helpers import make_lab


def test_pan_moves_sim_rect_opposite_to_pointer():
    _, view = make_lab()
    panner = ViewPanner(view, (400, 300))
    panner.mouse_drag((500, 300))
    rect = view.get_sim_rect()
    assert rect.nearly_equal(DoubleRect(-5, -3, 3, 3), 1e-12)


def test_pan_uses_map_from_mouse_down():
    """Each move is measured from the start, not from the previous move."""
    _, view = make_lab()
    panner = ViewPanner(view, (400, 300))
    panner.mouse_drag((500, 300))
    panner.mouse_drag((600, 250))
    center = view.get_sim_rect().center()
    assert np.allclose(center, [-2.0, -0.5])
    assert view.get_sim_rect().width == pytest.approx(8.0)
    panner.finish_drag()


def test_pan_without_motion_keeps_rect():
    _, view = make_lab()
    before = view.get_sim_rect()
    ViewPanner(view, (123, 456)).mouse_drag((123, 456))
    assert view.get_sim_rect().nearly_equal(before, 1e-12)
