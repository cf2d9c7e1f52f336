# MIT License (see LICENSE)
"""
Top-level input dispatcher for a LabCanvas.

SimController listens for pointer, key and touch events and turns them into
drag gestures:

- On mouse-down the pointer is converted to canvas screen coordinates. If
  the held modifier keys exactly match the pan modifiers (shift by
  default), a ViewPanner pans the focus view and the EventHandler hears
  nothing. Otherwise ``find_nearest_dragable`` picks the target and the
  resulting MouseTracker starts the drag.
- Mouse moves go to whichever of the ViewPanner or MouseTracker is active;
  mouse-up finishes it. Both are ignored while the canvas is hidden.
- Key events go to the EventHandler only when their target is the canvas or
  the document body, so typing into other widgets is left alone.
- A single touch acts like the mouse. A second finger cancels the drag so
  the platform can handle pinch and pan gestures.
- When the simulation reports an error, an active drag is finished so that
  no drag state (for example a temporary drag spring) is left behind.
"""
from __future__ import annotations
import logging
from typing import Any

import numpy as np

from ..events import Document, KeyEvent, ModifierKeys, MouseEvent, TouchEvent
from ..events import document as default_document
from ..util import f64
from ..view.sim_view import LabCanvas
from .event_handler import EventHandler, modifiers_equal, modifiers_to_string
from .mouse_tracker import MouseTracker, find_nearest_dragable
from .sim_runner import ErrorObserver
from .view_panner import ViewPanner

logger = logging.getLogger(__name__)

SHIFT = ModifierKeys(shift=True)
NO_MODIFIERS = ModifierKeys()


class SimController(ErrorObserver):
    """
    Routes user input on a LabCanvas to an EventHandler or a view panner.

    Args:
        lab_canvas: The canvas to control.
        event_handler: Receives drags and key events; None to only pan.
        pan_modifiers: Modifier keys that pan instead of drag; None
            disables panning.
        document: Source of process-wide events; the module default if
            omitted.
    """

    def __init__(self, lab_canvas: LabCanvas, event_handler: EventHandler | None = None,
                 pan_modifiers: ModifierKeys | None = SHIFT,
                 document: Document | None = None) -> None:
        self.lab_canvas = lab_canvas
        self.event_handler = event_handler
        self.pan_modifiers = pan_modifiers
        self.document = document if document is not None else default_document
        self.mouse_tracker: MouseTracker | None = None
        self.view_panner: ViewPanner | None = None
        self.dragging = False
        canvas = lab_canvas.get_canvas()
        # only mouse-down events on the canvas start a gesture
        canvas.add_event_listener("mousedown", self.mouse_down)
        self.document.add_event_listener("mousemove", self.mouse_move)
        self.document.add_event_listener("mouseup", self.mouse_up)
        self.document.add_event_listener("keydown", self.key_pressed)
        self.document.add_event_listener("keyup", self.key_released)
        self.document.add_event_listener("touchstart", self.touch_start)
        self.document.add_event_listener("touchmove", self.touch_move)
        self.document.add_event_listener("touchend", self.touch_end)

    def __repr__(self) -> str:
        return (f"SimController(lab_canvas={self.lab_canvas.name!r}, "
                f"event_handler={self.event_handler!r}, "
                f"pan_modifiers={self.modifiers_to_string(self.pan_modifiers)!r})")

    def destroy(self) -> None:
        """Stop listening to all events."""
        self.lab_canvas.get_canvas().remove_event_listener("mousedown", self.mouse_down)
        self.document.remove_event_listener("mousemove", self.mouse_move)
        self.document.remove_event_listener("mouseup", self.mouse_up)
        self.document.remove_event_listener("keydown", self.key_pressed)
        self.document.remove_event_listener("keyup", self.key_released)
        self.document.remove_event_listener("touchstart", self.touch_start)
        self.document.remove_event_listener("touchmove", self.touch_move)
        self.document.remove_event_listener("touchend", self.touch_end)

    @staticmethod
    def modifiers_to_string(modifiers: ModifierKeys | None) -> str:
        return "" if modifiers is None else modifiers_to_string(modifiers)

    def set_event_handler(self, event_handler: EventHandler | None) -> None:
        self.event_handler = event_handler

    def set_pan_modifiers(self, pan_modifiers: ModifierKeys | None) -> None:
        self.pan_modifiers = pan_modifiers

    def notify_error(self, error: Any) -> None:
        if self.dragging:
            logger.warning("finishing drag after error: %s", error)
            self.finish_drag()

    # -------------------------------------------------------------------------
    # Mouse
    # -------------------------------------------------------------------------

    def event_to_screen(self, client_x: float, client_y: float) -> np.ndarray:
        """
        Convert client coordinates to canvas screen coordinates.

        Works when the pointer is outside the canvas and when the canvas is
        displayed at a different size than its pixel size.
        """
        canvas = self.lab_canvas.get_canvas()
        p = f64([client_x - canvas.bounding_left, client_y - canvas.bounding_top])
        stretch = canvas.offset_width / self.lab_canvas.get_width()
        return p / stretch

    def mouse_down(self, event: MouseEvent) -> None:
        self.do_mouse_down(event.modifiers, event.client_x, event.client_y)

    def do_mouse_down(self, modifiers: ModifierKeys, client_x: float, client_y: float) -> None:
        self.lab_canvas.focus()
        self.dragging = True
        start_screen = self.event_to_screen(client_x, client_y)
        if self.pan_modifiers is not None and modifiers_equal(self.pan_modifiers, modifiers):
            view = self.lab_canvas.get_focus_view()
            if view is not None:
                logger.debug("pan %s from %s", view.name, start_screen.tolist())
                self.view_panner = ViewPanner(view, start_screen)
                self.view_panner.mouse_drag(start_screen)
        else:
            self.mouse_tracker = find_nearest_dragable(self.lab_canvas, start_screen,
                                                       self.event_handler)
            if self.mouse_tracker is not None:
                self.mouse_tracker.start_drag(modifiers)

    def mouse_move(self, event: MouseEvent) -> None:
        self.do_mouse_move(event.client_x, event.client_y)

    def do_mouse_move(self, client_x: float, client_y: float) -> None:
        if not self.lab_canvas.get_canvas().visible:
            return
        loc_screen = self.event_to_screen(client_x, client_y)
        if self.view_panner is not None:
            self.view_panner.mouse_drag(loc_screen)
        elif self.mouse_tracker is not None:
            self.mouse_tracker.mouse_drag(loc_screen)

    def mouse_up(self, event: MouseEvent) -> None:
        if not self.lab_canvas.get_canvas().visible:
            return
        self.finish_drag()

    def finish_drag(self) -> None:
        """Finish the active gesture, if any, and return to 'not dragging'."""
        if self.view_panner is not None:
            self.view_panner.finish_drag()
        elif self.mouse_tracker is not None:
            self.mouse_tracker.finish_drag()
        self.mouse_tracker = None
        self.view_panner = None
        self.dragging = False

    # -------------------------------------------------------------------------
    # Keys
    # -------------------------------------------------------------------------

    def _key_target_ok(self, event: KeyEvent) -> bool:
        return event.target is self.lab_canvas.get_canvas() or event.target is self.document.body

    def key_pressed(self, event: KeyEvent) -> None:
        if self._key_target_ok(event) and self.event_handler is not None:
            self.event_handler.handle_key_event(event, True, event.modifiers)

    def key_released(self, event: KeyEvent) -> None:
        if self._key_target_ok(event) and self.event_handler is not None:
            self.event_handler.handle_key_event(event, False, event.modifiers)

    # -------------------------------------------------------------------------
    # Touch
    # -------------------------------------------------------------------------

    def touch_start(self, event: TouchEvent) -> None:
        if event.target is not self.lab_canvas.get_canvas():
            return
        touches = event.touches
        if len(touches) == 1:
            self.do_mouse_down(NO_MODIFIERS, touches[0].client_x, touches[0].client_y)
        else:
            self.finish_drag()

    def touch_move(self, event: TouchEvent) -> None:
        touches = event.touches if event is not None else ()
        if self.dragging and len(touches) == 1:
            self.do_mouse_move(touches[0].client_x, touches[0].client_y)
        else:
            self.finish_drag()

    def touch_end(self, event: TouchEvent) -> None:
        if self.dragging:
            self.finish_drag()
