# MIT License (see LICENSE)
"""
Click-and-drag panning of a SimView.
"""
from __future__ import annotations

from ..types import DoubleRect
from ..util import f64
from ..view.sim_view import SimView


class ViewPanner:
    """
    Moves a view's sim rect opposite to the pointer during one gesture.

    The CoordMap in effect at mouse-down is kept for the whole gesture:
    ``set_sim_rect`` changes the view's map, and converting with the new
    map would feed each move back into the next.

    Args:
        view: The view to pan.
        start_screen: Mouse-down location in canvas screen coordinates.
    """

    def __init__(self, view: SimView, start_screen) -> None:
        self.view = view
        self.pan_map = view.get_coord_map()
        self.center_screen = self.pan_map.sim_to_screen(view.get_sim_rect().center())
        self.start_screen = f64(start_screen)

    def __repr__(self) -> str:
        return f"ViewPanner(view={self.view.name!r}, start_screen={self.start_screen.tolist()})"

    def mouse_drag(self, loc_screen) -> None:
        offset = self.start_screen - f64(loc_screen)
        center = self.pan_map.screen_to_sim(self.center_screen + offset)
        sr = self.view.get_sim_rect()
        self.view.set_sim_rect(DoubleRect.make_centered(center, sr.width, sr.height))

    def finish_drag(self) -> None:
        pass
