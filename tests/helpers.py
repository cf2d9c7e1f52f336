# MIT License (see LICENSE)
"""
Small simulations, handlers and canvases shared by the tests.
"""
from __future__ import annotations

import numpy as np

from physics_lab.app.event_handler import EventHandler
from physics_lab.events import CanvasElement, Document
from physics_lab.model.simulation import AbstractODESim
from physics_lab.model.variables import VarsList
from physics_lab.types import DoubleRect, ScreenRect
from physics_lab.view.sim_view import LabCanvas, SimView


class DecaySim(AbstractODESim):
    """x' = -x, starting at x = 1, time = 0."""

    def __init__(self, error_after: float | None = None) -> None:
        super().__init__(VarsList(["x", "time"]), name="DECAY")
        self.error_after = error_after
        self.modify_count = 0
        self.vars_list.set_value(0, 1.0)
        self.save_initial_state()

    def evaluate(self, vars, change, time_step):
        if self.error_after is not None and vars[1] >= self.error_after:
            return "singular"
        change[0] = -vars[0]
        change[1] = 1.0
        return None

    def modify_objects(self):
        self.modify_count += 1


class RecordingHandler(EventHandler):
    """Records every call; ``accept`` is returned from start_drag."""

    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.calls: list[tuple] = []

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def start_drag(self, sim_object, location, offset, drag_body, modifiers):
        self.calls.append(("start", sim_object, np.array(location), modifiers))
        return self.accept

    def mouse_drag(self, sim_object, location, offset):
        self.calls.append(("drag", sim_object, np.array(location)))

    def finish_drag(self, sim_object, location, offset):
        self.calls.append(("finish", sim_object, np.array(location)))

    def handle_key_event(self, event, pressed, modifiers):
        self.calls.append(("key", event.key, pressed))


def make_lab(canvas: CanvasElement | None = None) -> tuple[LabCanvas, SimView]:
    """
    An 800x600 canvas with one view of [-4, 4] x [-3, 3].

    The view maps 100 pixels to one unit with sim (0, 0) at screen (400, 300).
    """
    lab = LabCanvas(canvas if canvas is not None else CanvasElement())
    view = SimView("main", DoubleRect(-4, -3, 4, 3), ScreenRect(0, 0, 800, 600))
    lab.add_view(view)
    return lab, view


def make_document() -> Document:
    return Document()
