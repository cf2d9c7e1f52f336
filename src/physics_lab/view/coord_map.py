# MIT License (see LICENSE)
"""
Mapping between simulation coordinates and screen coordinates.

Simulation coordinates have the y-axis pointing up; screen coordinates have
the y-axis pointing down with the origin at the top-left of the canvas.
The map is a per-axis scale plus an origin:

    screen_x = screen_left   + (sim_x - sim_left)   * pixel_per_unit_x
    screen_y = screen_bottom - (sim_y - sim_bottom) * pixel_per_unit_y

``CoordMap.make`` builds the map that fits a simulation rectangle into a
screen rectangle with a given alignment and aspect ratio.
"""
from __future__ import annotations
import enum
import math
from dataclasses import dataclass

import numpy as np

from ..types import DoubleRect, ScreenRect

MIN_SIZE = 1e-15


class HorizAlign(enum.Enum):
    LEFT = "LEFT"
    MIDDLE = "MIDDLE"
    RIGHT = "RIGHT"
    FULL = "FULL"


class VerticalAlign(enum.Enum):
    TOP = "TOP"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    FULL = "FULL"


@dataclass(frozen=True)
class CoordMap:
    """
    Immutable linear map from simulation to screen coordinates.

    Attributes:
        screen_left: Screen x of the origin of the mapping.
        screen_bottom: Screen y of the origin of the mapping.
        sim_left: Simulation x that maps to ``screen_left``.
        sim_bottom: Simulation y that maps to ``screen_bottom``.
        pixel_per_unit_x: Horizontal scale.
        pixel_per_unit_y: Vertical scale.
    """
    screen_left: float
    screen_bottom: float
    sim_left: float
    sim_bottom: float
    pixel_per_unit_x: float = 1.0
    pixel_per_unit_y: float = 1.0

    def __post_init__(self) -> None:
        if self.pixel_per_unit_x < MIN_SIZE or self.pixel_per_unit_y < MIN_SIZE:
            raise ValueError(
                f"bad scale {self.pixel_per_unit_x}, {self.pixel_per_unit_y}")

    @classmethod
    def make(cls, screen_rect: ScreenRect, sim_rect: DoubleRect,
             horiz_align: HorizAlign = HorizAlign.MIDDLE,
             vertical_align: VerticalAlign = VerticalAlign.MIDDLE,
             aspect_ratio: float = 1.0) -> "CoordMap":
        """
        Fit ``sim_rect`` into ``screen_rect``.

        With FULL alignment on an axis the simulation rectangle spans the
        screen rectangle exactly on that axis. Otherwise the scale is chosen
        so that the whole simulation rectangle is visible with
        ``pixel_per_unit_y / pixel_per_unit_x == aspect_ratio``, and the
        spare room on the other axis is distributed by the alignment.

        Raises:
            ValueError: If the simulation rectangle is empty or the aspect
                ratio is not a positive finite number.
        """
        if aspect_ratio < MIN_SIZE or not math.isfinite(aspect_ratio):
            raise ValueError(f"bad aspect_ratio {aspect_ratio}")
        sim_left = sim_rect.left
        sim_bottom = sim_rect.bottom
        sim_width = sim_rect.right - sim_left
        sim_height = sim_rect.top - sim_bottom
        if sim_width < MIN_SIZE or sim_height < MIN_SIZE:
            raise ValueError(f"sim_rect cannot be empty {sim_rect}")
        screen_width = screen_rect.width
        screen_height = screen_rect.height
        offset_x = 0.0
        offset_y = 0.0
        ppu_x = 0.0
        ppu_y = 0.0
        if horiz_align == HorizAlign.FULL:
            ppu_x = screen_width / sim_width
        if vertical_align == VerticalAlign.FULL:
            ppu_y = screen_height / sim_height
        if horiz_align != HorizAlign.FULL or vertical_align != VerticalAlign.FULL:
            if horiz_align == HorizAlign.FULL:
                ppu_y = ppu_x * aspect_ratio
                horiz_full = True
            elif vertical_align == VerticalAlign.FULL:
                ppu_x = ppu_y / aspect_ratio
                horiz_full = False
            else:
                # assume x limits the size, then check whether y does
                ppu_x = screen_width / sim_width
                ppu_y = ppu_x * aspect_ratio
                horiz_full = True
                ideal_height = math.floor(0.5 + ppu_y * sim_height)
                if screen_height < ideal_height:
                    ppu_y = screen_height / sim_height
                    ppu_x = ppu_y / aspect_ratio
                    horiz_full = False
            if not horiz_full:
                ideal_width = math.floor(0.5 + sim_width * ppu_x)
                if horiz_align == HorizAlign.LEFT:
                    offset_x = 0.0
                elif horiz_align == HorizAlign.MIDDLE:
                    offset_x = (screen_width - ideal_width) / 2
                else:
                    offset_x = screen_width - ideal_width
            else:
                ideal_height = math.floor(0.5 + sim_height * ppu_y)
                if vertical_align == VerticalAlign.BOTTOM:
                    offset_y = 0.0
                elif vertical_align == VerticalAlign.MIDDLE:
                    offset_y = (screen_height - ideal_height) / 2
                else:
                    offset_y = screen_height - ideal_height
        return cls(
            screen_rect.left,
            screen_rect.top + screen_height,
            sim_left - offset_x / ppu_x,
            sim_bottom - offset_y / ppu_y,
            ppu_x,
            ppu_y,
        )

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def screen_to_sim_x(self, x: float) -> float:
        return self.sim_left + (x - self.screen_left) / self.pixel_per_unit_x

    def screen_to_sim_y(self, y: float) -> float:
        return self.sim_bottom + (self.screen_bottom - y) / self.pixel_per_unit_y

    def sim_to_screen_x(self, x: float) -> float:
        return self.screen_left + (x - self.sim_left) * self.pixel_per_unit_x

    def sim_to_screen_y(self, y: float) -> float:
        return self.screen_bottom - (y - self.sim_bottom) * self.pixel_per_unit_y

    def screen_to_sim(self, point) -> np.ndarray:
        return np.array([self.screen_to_sim_x(point[0]), self.screen_to_sim_y(point[1])],
                        dtype=np.float64)

    def sim_to_screen(self, point) -> np.ndarray:
        return np.array([self.sim_to_screen_x(point[0]), self.sim_to_screen_y(point[1])],
                        dtype=np.float64)

    def screen_to_sim_rect(self, rect: ScreenRect) -> DoubleRect:
        return DoubleRect(
            self.screen_to_sim_x(rect.left),
            self.screen_to_sim_y(rect.top + rect.height),
            self.screen_to_sim_x(rect.left + rect.width),
            self.screen_to_sim_y(rect.top),
        )

    def sim_to_screen_rect(self, rect: DoubleRect) -> ScreenRect:
        return ScreenRect(
            self.sim_to_screen_x(rect.left),
            self.sim_to_screen_y(rect.top),
            self.sim_to_screen_scale_x(rect.width),
            self.sim_to_screen_scale_y(rect.height),
        )

    def sim_to_screen_scale_x(self, length: float) -> float:
        return length * self.pixel_per_unit_x

    def sim_to_screen_scale_y(self, length: float) -> float:
        return length * self.pixel_per_unit_y
