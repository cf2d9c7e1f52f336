# MIT License (see LICENSE)
"""
Views onto a simulation and the canvas that holds them.

- SimView: a rectangle of simulation space (the sim rect) shown in a
  rectangle of the canvas (the screen rect), with the DisplayList of objects
  shown there. The CoordMap between the two is recomputed whenever either
  rectangle or the alignment changes.
- LabCanvas: an ordered list of SimViews drawn on one CanvasElement, one of
  which is the focus view. Views later in the list are drawn in front.
"""
from __future__ import annotations
import logging

from ..events import CanvasElement
from ..memo import ConcreteMemoList, Memorizable, MemoList
from ..observe import AbstractSubject
from ..types import DoubleRect, ScreenRect
from .coord_map import CoordMap, HorizAlign, VerticalAlign
from .display import DisplayList

logger = logging.getLogger(__name__)

# Event names
SIM_RECT_CHANGED = "SIM_RECT_CHANGED"
SCREEN_RECT_CHANGED = "SCREEN_RECT_CHANGED"
VIEW_ADDED = "VIEW_ADDED"
VIEW_REMOVED = "VIEW_REMOVED"
FOCUS_VIEW_CHANGED = "FOCUS_VIEW_CHANGED"


class SimView(AbstractSubject):
    """
    A view of a rectangle of simulation space.

    Args:
        name: Name of the view.
        sim_rect: Visible rectangle of simulation space; must not be empty.
        screen_rect: Where on the canvas the view is drawn.

    Attributes:
        pan_x, pan_y: Fraction of the view size moved by pan_left() etc.
        zoom: Factor applied by zoom_in() and zoom_out().
    """

    def __init__(self, name: str, sim_rect: DoubleRect,
                 screen_rect: ScreenRect | None = None,
                 horiz_align: HorizAlign = HorizAlign.MIDDLE,
                 vertical_align: VerticalAlign = VerticalAlign.MIDDLE,
                 aspect_ratio: float = 1.0) -> None:
        super().__init__(name)
        if sim_rect.is_empty():
            raise ValueError(f"empty DoubleRect {sim_rect}")
        self._sim_rect = sim_rect
        self._screen_rect = screen_rect if screen_rect is not None else ScreenRect(0, 0, 800, 600)
        self._horiz_align = horiz_align
        self._vertical_align = vertical_align
        self._aspect_ratio = aspect_ratio
        self.display_list = DisplayList()
        self._memo_list = ConcreteMemoList()
        self.pan_x = 0.05
        self.pan_y = 0.05
        self.zoom = 1.1
        self._coord_map = self._make_map()

    def __repr__(self) -> str:
        return f"SimView(name={self.name!r}, sim_rect={self._sim_rect})"

    def _make_map(self) -> CoordMap:
        return CoordMap.make(self._screen_rect, self._sim_rect, self._horiz_align,
                             self._vertical_align, self._aspect_ratio)

    def _realign(self) -> None:
        self._coord_map = self._make_map()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def get_coord_map(self) -> CoordMap:
        return self._coord_map

    def get_display_list(self) -> DisplayList:
        return self.display_list

    def get_sim_rect(self) -> DoubleRect:
        return self._sim_rect

    def get_screen_rect(self) -> ScreenRect:
        return self._screen_rect

    def get_memo_list(self) -> MemoList:
        return self._memo_list

    def add_memo(self, memo: Memorizable) -> None:
        self._memo_list.add_memo(memo)

    def remove_memo(self, memo: Memorizable) -> None:
        self._memo_list.remove_memo(memo)

    def memorize(self) -> None:
        self._memo_list.memorize()

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def set_sim_rect(self, sim_rect: DoubleRect) -> None:
        """Change the visible rectangle; broadcasts SIM_RECT_CHANGED if it differs."""
        if sim_rect.is_empty():
            raise ValueError(f"empty DoubleRect {sim_rect}")
        if not sim_rect.nearly_equal(self._sim_rect):
            self._sim_rect = sim_rect
            self._realign()
            self.broadcast_event(SIM_RECT_CHANGED)

    def set_screen_rect(self, screen_rect: ScreenRect) -> None:
        if screen_rect.is_empty():
            raise ValueError("empty screen rect")
        if screen_rect != self._screen_rect:
            self._screen_rect = screen_rect
            self._realign()
            self.broadcast_event(SCREEN_RECT_CHANGED)

    def set_horiz_align(self, align: HorizAlign) -> None:
        self._horiz_align = HorizAlign(align)
        self._realign()

    def set_vertical_align(self, align: VerticalAlign) -> None:
        self._vertical_align = VerticalAlign(align)
        self._realign()

    def set_aspect_ratio(self, aspect_ratio: float) -> None:
        self._aspect_ratio = aspect_ratio
        self._realign()

    def _recenter(self, dx: float, dy: float, scale: float = 1.0) -> None:
        r = self._sim_rect
        c = r.center()
        self.set_sim_rect(DoubleRect.make_centered((c[0] + dx, c[1] + dy),
                                                   r.width * scale, r.height * scale))

    def pan_left(self) -> None:
        self._recenter(-self.pan_x * self._sim_rect.width, 0.0)

    def pan_right(self) -> None:
        self._recenter(self.pan_x * self._sim_rect.width, 0.0)

    def pan_up(self) -> None:
        self._recenter(0.0, self.pan_y * self._sim_rect.height)

    def pan_down(self) -> None:
        self._recenter(0.0, -self.pan_y * self._sim_rect.height)

    def zoom_in(self) -> None:
        self._recenter(0.0, 0.0, 1.0 / self.zoom)

    def zoom_out(self) -> None:
        self._recenter(0.0, 0.0, self.zoom)


class LabCanvas(AbstractSubject):
    """
    Ordered set of SimViews drawn on one CanvasElement.

    The first view added becomes the focus view.

    Args:
        canvas: The drawing surface; a default 800x600 one if omitted.
        name: Name of this canvas.
    """

    def __init__(self, canvas: CanvasElement | None = None, name: str = "CANVAS") -> None:
        super().__init__(name)
        self.canvas = canvas if canvas is not None else CanvasElement()
        self._views: list[SimView] = []
        self._focus_view: SimView | None = None

    def __repr__(self) -> str:
        return f"LabCanvas(name={self.name!r}, views={[v.name for v in self._views]})"

    def get_canvas(self) -> CanvasElement:
        return self.canvas

    def get_width(self) -> int:
        return self.canvas.width

    def get_height(self) -> int:
        return self.canvas.height

    def get_screen_rect(self) -> ScreenRect:
        return ScreenRect(0, 0, self.canvas.width, self.canvas.height)

    def focus(self) -> None:
        self.canvas.focus()

    def add_view(self, view: SimView) -> None:
        if view in self._views:
            return
        self._views.append(view)
        self.broadcast_event(VIEW_ADDED, view)
        if self._focus_view is None:
            self.set_focus_view(view)

    def remove_view(self, view: SimView) -> None:
        if view not in self._views:
            return
        self._views.remove(view)
        if self._focus_view is view:
            self.set_focus_view(self._views[0] if self._views else None)
        self.broadcast_event(VIEW_REMOVED, view)

    def get_views(self) -> list[SimView]:
        """Views in drawing order: back to front."""
        return list(self._views)

    def get_focus_view(self) -> SimView | None:
        return self._focus_view

    def set_focus_view(self, view: SimView | None) -> None:
        if view is not None and view not in self._views:
            raise ValueError(f"cannot focus a view not on this canvas: {view.name}")
        if view is not self._focus_view:
            self._focus_view = view
            logger.debug("%s: focus view %s", self.name, view.name if view else None)
            self.broadcast_event(FOCUS_VIEW_CHANGED, view)
