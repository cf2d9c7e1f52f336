import numpy as np
import pytest

from physics_lab.app.sim_controller import SimController
from physics_lab.app.sim_runner import SimRunner
from physics_lab.errors import IntegrationError
from physics_lab.events import CanvasElement, KeyEvent, ModifierKeys, MouseEvent, Touch, TouchEvent
from physics_lab.model.advance import SimpleAdvance
from physics_lab.model.sim_object import PointMass
from physics_lab.view.display import DisplayShape

from helpers import DecaySim, RecordingHandler, make_document, make_lab


def setup(handler=None, canvas=None, **kwargs):
    lab, view = make_lab(canvas)
    doc = make_document()
    ball = PointMass("ball", width=0.4, height=0.4)
    ball.set_position((1.0, 0.0))
    view.get_display_list().add(DisplayShape(ball))
    controller = SimController(lab, handler, document=doc, **kwargs)
    return controller, lab, view, doc, ball


def test_drag_gesture_reaches_handler():
    handler = RecordingHandler()
    controller, lab, _, doc, ball = setup(handler)
    canvas = lab.get_canvas()
    canvas.dispatch("mousedown", MouseEvent(500, 300, target=canvas))
    assert controller.dragging
    assert canvas.focus_count == 1
    doc.dispatch("mousemove", MouseEvent(600, 300))
    doc.dispatch("mouseup", MouseEvent(600, 300))
    assert handler.names() == ["start", "drag", "finish"]
    assert handler.calls[0][1] is ball
    assert not controller.dragging
    assert controller.mouse_tracker is None


def test_pan_does_not_reach_handler():
    """Panning changes only the view; the handler hears nothing."""
    handler = RecordingHandler()
    controller, lab, view, doc, ball = setup(handler)
    canvas = lab.get_canvas()
    canvas.dispatch("mousedown", MouseEvent(500, 300, target=canvas, shift_key=True))
    doc.dispatch("mousemove", MouseEvent(600, 300))
    doc.dispatch("mouseup", MouseEvent(600, 300))
    assert handler.calls == []
    assert np.allclose(view.get_sim_rect().center(), [-1.0, 0.0])
    assert np.allclose(ball.position, [1.0, 0.0])
    assert controller.view_panner is None


def test_pan_needs_exact_modifiers():
    handler = RecordingHandler()
    _, lab, view, _, _ = setup(handler)
    canvas = lab.get_canvas()
    canvas.dispatch("mousedown", MouseEvent(500, 300, target=canvas, shift_key=True,
                                            ctrl_key=True))
    assert handler.names() == ["start"]
    assert handler.calls[0][3] == ModifierKeys(control=True, shift=True)
    assert np.allclose(view.get_sim_rect().center(), [0.0, 0.0])


def test_custom_and_disabled_pan_modifiers():
    handler = RecordingHandler()
    controller, lab, view, doc, _ = setup(handler, pan_modifiers=ModifierKeys(alt=True))
    canvas = lab.get_canvas()
    canvas.dispatch("mousedown", MouseEvent(400, 300, target=canvas, alt_key=True))
    assert controller.view_panner is not None
    doc.dispatch("mouseup", MouseEvent(400, 300))

    controller.set_pan_modifiers(None)
    canvas.dispatch("mousedown", MouseEvent(400, 300, target=canvas, alt_key=True))
    assert controller.view_panner is None
    assert handler.names() == ["start"]


def test_without_handler_nearest_object_moves_directly():
    controller, lab, _, doc, ball = setup(None)
    canvas = lab.get_canvas()
    # the nearest dragable object is chosen however far away it is
    canvas.dispatch("mousedown", MouseEvent(100, 100, target=canvas))
    assert controller.mouse_tracker.drag_sim_obj is ball
    doc.dispatch("mousemove", MouseEvent(200, 100))
    assert np.allclose(ball.position, [2.0, 0.0])
    doc.dispatch("mouseup", MouseEvent(200, 100))
    assert not controller.dragging


def test_empty_canvas_without_handler_is_inert():
    lab, _ = make_lab()
    controller = SimController(lab, None, document=make_document())
    canvas = lab.get_canvas()
    canvas.dispatch("mousedown", MouseEvent(100, 100, target=canvas))
    assert controller.mouse_tracker is None
    assert controller.dragging
    controller.do_mouse_move(120, 100)
    controller.finish_drag()
    assert not controller.dragging


def test_event_to_screen_with_stretched_canvas():
    canvas = CanvasElement(width=800, height=600, offset_width=1600.0, offset_height=1200.0,
                           bounding_left=10.0, bounding_top=20.0)
    controller, _, _, _, _ = setup(None, canvas=canvas)
    assert np.allclose(controller.event_to_screen(810, 220), [400.0, 100.0])
    # outside the canvas
    assert np.allclose(controller.event_to_screen(0, 0), [-5.0, -10.0])


def test_hidden_canvas_ignores_move_and_up():
    handler = RecordingHandler()
    controller, lab, _, doc, _ = setup(handler)
    canvas = lab.get_canvas()
    canvas.dispatch("mousedown", MouseEvent(500, 300, target=canvas))
    canvas.visible = False
    doc.dispatch("mousemove", MouseEvent(600, 300))
    doc.dispatch("mouseup", MouseEvent(600, 300))
    assert handler.names() == ["start"]
    assert controller.dragging


def test_key_events_filtered_by_target():
    handler = RecordingHandler()
    _, lab, _, doc, _ = setup(handler)
    doc.dispatch("keydown", KeyEvent("a", target=lab.get_canvas()))
    doc.dispatch("keyup", KeyEvent("a", target=doc.body))
    doc.dispatch("keydown", KeyEvent("b", target=object()))
    assert handler.calls == [("key", "a", True), ("key", "a", False)]


def test_key_events_without_handler():
    controller, lab, _, doc, _ = setup(None)
    doc.dispatch("keydown", KeyEvent("a", target=lab.get_canvas()))
    assert controller.event_handler is None


def test_single_touch_drags_and_second_touch_cancels():
    handler = RecordingHandler()
    controller, lab, _, doc, _ = setup(handler)
    canvas = lab.get_canvas()
    doc.dispatch("touchstart", TouchEvent((Touch(500, 300),), target=canvas))
    doc.dispatch("touchmove", TouchEvent((Touch(550, 300),), target=canvas))
    assert handler.names() == ["start", "drag"]

    doc.dispatch("touchstart", TouchEvent((Touch(550, 300), Touch(100, 100)), target=canvas))
    assert handler.names() == ["start", "drag", "finish"]
    assert not controller.dragging
    assert controller.mouse_tracker is None
    # later moves are ignored
    doc.dispatch("touchmove", TouchEvent((Touch(560, 300),), target=canvas))
    assert handler.names() == ["start", "drag", "finish"]


def test_touch_elsewhere_ignored():
    handler = RecordingHandler()
    controller, _, _, doc, _ = setup(handler)
    doc.dispatch("touchstart", TouchEvent((Touch(500, 300),), target=doc.body))
    assert handler.calls == []
    assert not controller.dragging


def test_touch_end_finishes_drag():
    handler = RecordingHandler()
    controller, lab, _, doc, _ = setup(handler)
    canvas = lab.get_canvas()
    doc.dispatch("touchstart", TouchEvent((Touch(500, 300),), target=canvas))
    doc.dispatch("touchend", TouchEvent((), target=canvas))
    assert handler.names() == ["start", "finish"]
    # location of the last move is reused
    assert np.allclose(handler.calls[1][2], [1.0, 0.0])
    assert not controller.dragging


def test_notify_error_finishes_drag():
    handler = RecordingHandler()
    controller, lab, _, _, _ = setup(handler)
    canvas = lab.get_canvas()
    controller.notify_error(RuntimeError("not dragging"))
    assert handler.calls == []
    canvas.dispatch("mousedown", MouseEvent(500, 300, target=canvas))
    controller.notify_error(RuntimeError("stuck"))
    assert handler.names() == ["start", "finish"]
    assert not controller.dragging


def test_simulation_error_during_drag():
    """A failing step finishes the drag and the error still propagates."""
    handler = RecordingHandler()
    controller, lab, _, _, _ = setup(handler)
    runner = SimRunner(SimpleAdvance(DecaySim(error_after=0.0)))
    runner.add_error_observer(controller)
    canvas = lab.get_canvas()
    canvas.dispatch("mousedown", MouseEvent(500, 300, target=canvas))
    with pytest.raises(IntegrationError):
        runner.step()
    assert handler.names() == ["start", "finish"]
    assert not runner.running


def test_destroy_removes_listeners():
    controller, lab, _, doc, _ = setup(None)
    assert doc.listener_count() == 7
    assert lab.get_canvas().listener_count("mousedown") == 1
    controller.destroy()
    assert doc.listener_count() == 0
    assert lab.get_canvas().listener_count() == 0


def test_modifiers_to_string():
    assert SimController.modifiers_to_string(ModifierKeys(shift=True, control=True)) == \
        "control+shift"
    assert SimController.modifiers_to_string(None) == ""
