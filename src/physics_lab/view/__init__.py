# MIT License (see LICENSE)
"""
Views: coordinate maps, display objects, SimViews and the LabCanvas.
"""
from .coord_map import CoordMap, HorizAlign, VerticalAlign
from .display import (
    DisplayLine, DisplayList, DisplayObject, DisplayPanel, DisplayShape, DisplaySpring,
    make_display,
)
from .sim_view import LabCanvas, SimView

__all__ = [
    "CoordMap",
    "HorizAlign",
    "VerticalAlign",
    "DisplayObject",
    "DisplayShape",
    "DisplaySpring",
    "DisplayLine",
    "DisplayPanel",
    "DisplayList",
    "make_display",
    "SimView",
    "LabCanvas",
]
