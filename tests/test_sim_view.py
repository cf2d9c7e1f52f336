import math

import numpy as np
import pytest

from physics_lab.model.sim_object import Force, Line, PointMass, Spring
from physics_lab.observe import Observer
from physics_lab.types import DoubleRect, ScreenRect
from physics_lab.view.display import (
    DisplayLine, DisplayList, DisplayPanel, DisplayShape, DisplaySpring, make_display,
)
from physics_lab.view.sim_view import (
    FOCUS_VIEW_CHANGED, SIM_RECT_CHANGED, VIEW_ADDED, LabCanvas, SimView,
)


class Recorder(Observer):
    def __init__(self):
        self.names = []

    def observe(self, event):
        self.names.append(event.name)


def make_view(name="view"):
    return SimView(name, DoubleRect(-4, -3, 4, 3), ScreenRect(0, 0, 800, 600))


def test_make_display_by_kind():
    ball = PointMass("ball")
    wall = PointMass("wall", mass=math.inf)
    spring = Spring("spring", wall, (0, 0), ball, (0, 0), 1.0)
    assert isinstance(make_display(ball), DisplayShape)
    assert make_display(ball).is_dragable()
    assert not make_display(wall).is_dragable()
    assert isinstance(make_display(spring), DisplaySpring)
    assert isinstance(make_display(Line("rod")), DisplayLine)
    assert isinstance(make_display(Force("f", ball, (0, 0), (1, 0))), DisplayLine)


def test_display_shape_contains():
    ball = PointMass("ball", width=1.0, height=1.0)
    ball.set_position((2.0, 1.0))
    shape = DisplayShape(ball)
    assert shape.contains((2.4, 1.4))
    assert not shape.contains((2.6, 1.0))
    shape.set_position((0.0, 0.0))
    assert np.allclose(ball.position, [0.0, 0.0])


def test_display_list_order():
    """Sorted by z_index; equal z_index keeps insertion order."""
    dl = DisplayList()
    a = DisplayPanel(z_index=0, name="a")
    b = DisplayPanel(z_index=5, name="b")
    c = DisplayPanel(z_index=0, name="c")
    d = DisplayPanel(z_index=0, name="d")
    dl.add(a, b, c)
    dl.prepend(d)
    assert dl.to_array() == [d, a, c, b]
    dl.remove(a)
    assert len(dl) == 3
    dl.remove_all()
    assert dl.to_array() == []


def test_display_list_find():
    dl = DisplayList()
    ball = PointMass("ball")
    shape = DisplayShape(ball)
    dl.add(shape)
    assert dl.find(ball) is shape
    assert dl.find("BALL") is shape
    assert dl.find("other") is None


def test_sim_rect_change_broadcast():
    view = make_view()
    recorder = Recorder()
    view.add_observer(recorder)
    view.set_sim_rect(DoubleRect(-4, -3, 4, 3))
    assert recorder.names == []
    view.set_sim_rect(DoubleRect(0, 0, 8, 6))
    assert recorder.names == [SIM_RECT_CHANGED]
    assert np.allclose(view.get_coord_map().sim_to_screen((0, 0)), [0, 600])
    with pytest.raises(ValueError):
        view.set_sim_rect(DoubleRect(0, 0, 0, 6))


def test_pan_and_zoom():
    view = make_view()
    view.pan_right()
    assert np.allclose(view.get_sim_rect().center(), [0.4, 0.0])
    view.pan_up()
    assert np.allclose(view.get_sim_rect().center(), [0.4, 0.3])
    view.zoom_in()
    assert view.get_sim_rect().width == pytest.approx(8.0 / 1.1)
    view.zoom_out()
    assert view.get_sim_rect().width == pytest.approx(8.0)


def test_lab_canvas_focus():
    lab = LabCanvas()
    recorder = Recorder()
    lab.add_observer(recorder)
    v1, v2 = make_view("one"), make_view("two")
    lab.add_view(v1)
    lab.add_view(v2)
    assert lab.get_focus_view() is v1
    assert lab.get_views() == [v1, v2]
    assert recorder.names == [VIEW_ADDED, FOCUS_VIEW_CHANGED, VIEW_ADDED]
    lab.set_focus_view(v2)
    lab.remove_view(v2)
    assert lab.get_focus_view() is v1
    with pytest.raises(ValueError):
        lab.set_focus_view(v2)
    assert lab.get_screen_rect() == ScreenRect(0, 0, 800, 600)
