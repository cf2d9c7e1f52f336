# MIT License (see LICENSE)
"""
Finds the object a mouse-down selects and routes the rest of the drag.

``find_nearest_dragable`` is run afresh for every mouse-down. It searches
the views of a LabCanvas front to back (last view first), and each view's
display list front to back, for the dragable object to drag:

- An object backed by no mass object is *opaque*: if the pointer is inside
  it, it is chosen at once and the search stops; otherwise it is skipped.
- An object backed by exactly one mass object competes on distance: every
  drag point of that mass object is measured in screen pixels from the
  pointer and the closest drag point across all views wins. Ties go to the
  candidate met later in the search (``<=``).
- Objects backed by several mass objects are never dragged.

When nothing is found the focus view is used just to convert the pointer
to simulation coordinates; the resulting tracker has no object and only
makes sense with an EventHandler.

The MouseTracker returned holds the state of one gesture and is discarded
at mouse-up.
"""
from __future__ import annotations
import logging
import math

import numpy as np

from ..events import ModifierKeys
from ..model.sim_object import SimObject
from ..util import ORIGIN, distance, f64
from ..view.display import DisplayObject
from ..view.sim_view import LabCanvas, SimView
from .event_handler import EventHandler

logger = logging.getLogger(__name__)


class MouseTracker:
    """
    One drag gesture.

    Args:
        drag_obj: The display object being dragged, or None.
        view: The view the drag happens in; its CoordMap converts pointer
            locations.
        loc_sim: Pointer location at mouse-down in simulation coordinates.
        drag_body: Attachment point in body coordinates, or None.
        event_handler: Receives the drag; may be None when ``drag_obj`` is
            given.

    Raises:
        ValueError: If both ``drag_obj`` and ``event_handler`` are None.
    """

    def __init__(self, drag_obj: DisplayObject | None, view: SimView, loc_sim,
                 drag_body, event_handler: EventHandler | None) -> None:
        if drag_obj is None and event_handler is None:
            raise ValueError("MouseTracker needs a display object or an event handler")
        self.drag_obj = drag_obj
        self.view = view
        self.event_handler = event_handler
        self.drag_sim_obj: SimObject | None = None
        if drag_obj is not None:
            sim_objs = drag_obj.get_sim_objects()
            if sim_objs:
                self.drag_sim_obj = sim_objs[0]
        self.loc_sim = f64(loc_sim)
        self.drag_body = None if drag_body is None else f64(drag_body)
        self.drag_offset = ORIGIN.copy()
        if drag_obj is not None:
            self.drag_offset = self.loc_sim - drag_obj.get_position()
            if self.drag_sim_obj is None:
                # nothing for a handler to act on; the tracker moves the object
                self.event_handler = None
        self.eh_drag = False

    def __repr__(self) -> str:
        return (f"MouseTracker(drag_obj={self.drag_obj!r}, view={self.view.name!r}, "
                f"loc_sim={self.loc_sim.tolist()}, eh_drag={self.eh_drag})")

    def start_drag(self, modifiers: ModifierKeys) -> None:
        if self.event_handler is not None:
            self.eh_drag = bool(self.event_handler.start_drag(
                self.drag_sim_obj, self.loc_sim, self.drag_offset, self.drag_body, modifiers))
        else:
            self.eh_drag = False

    def mouse_drag(self, loc_screen) -> None:
        """Convert the pointer with the view's current map and move or forward."""
        self.loc_sim = self.view.get_coord_map().screen_to_sim(loc_screen)
        if self.drag_obj is not None and (self.drag_sim_obj is None or not self.eh_drag):
            self.drag_obj.set_position(self.loc_sim - self.drag_offset)
        elif self.event_handler is not None and self.eh_drag:
            self.event_handler.mouse_drag(self.drag_sim_obj, self.loc_sim, self.drag_offset)

    def finish_drag(self) -> None:
        # touch-end events have no location, so the last one is reused
        if self.event_handler is not None:
            self.event_handler.finish_drag(self.drag_sim_obj, self.loc_sim, self.drag_offset)


def find_nearest_dragable(lab_canvas: LabCanvas, start_screen,
                          event_handler: EventHandler | None) -> MouseTracker | None:
    """
    Find the object to drag at a mouse-down location.

    Args:
        lab_canvas: The canvas holding the views to search.
        start_screen: Mouse-down location in canvas screen coordinates.
        event_handler: Receives the drag; may be None.

    Returns:
        A MouseTracker for the gesture, or None when there is nothing to
        drag and nobody to tell.
    """
    start_screen = f64(start_screen)
    drag_obj: DisplayObject | None = None
    view: SimView | None = None
    start_sim: np.ndarray | None = None
    drag_pt: np.ndarray | None = None
    best = math.inf
    opaque_hit = False
    for v in reversed(lab_canvas.get_views()):
        cmap = v.get_coord_map()
        loc_sim = cmap.screen_to_sim(start_screen)
        for disp_obj in reversed(v.get_display_list().to_array()):
            if not disp_obj.is_dragable():
                continue
            mass_objs = disp_obj.get_mass_objects()
            if len(mass_objs) > 1:
                continue
            if not mass_objs:
                if disp_obj.contains(loc_sim):
                    drag_obj, view, start_sim, drag_pt = disp_obj, v, loc_sim, ORIGIN.copy()
                    opaque_hit = True
                    break
                continue
            mass_obj = mass_objs[0]
            for dpt in reversed(mass_obj.drag_points):
                dist = distance(start_screen, cmap.sim_to_screen(mass_obj.body_to_world(dpt)))
                if dist <= best:
                    best = dist
                    drag_obj, view, start_sim, drag_pt = disp_obj, v, loc_sim, f64(dpt)
        if opaque_hit:
            break
    if drag_obj is None:
        focus = lab_canvas.get_focus_view()
        if focus is None:
            return None
        if event_handler is None:
            return None
        view = focus
        start_sim = focus.get_coord_map().screen_to_sim(start_screen)
    logger.debug("drag target %r in view %s", drag_obj, view.name)
    return MouseTracker(drag_obj, view, start_sim, drag_pt, event_handler)
