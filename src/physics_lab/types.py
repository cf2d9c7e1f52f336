# MIT License (see LICENSE)
"""
Core rectangle types shared by the model and the view layer.

- DoubleRect: an axis-aligned rectangle in simulation coordinates, with the
  y-axis pointing up.
- ScreenRect: an axis-aligned rectangle in screen coordinates, with the
  y-axis pointing down and the origin at the top-left corner.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .util import f64


# =============================================================================
# Simulation-space rectangle
# =============================================================================

@dataclass(frozen=True)
class DoubleRect:
    """
    Rectangle in simulation coordinates.

    Attributes:
        left: Minimum x.
        bottom: Minimum y.
        right: Maximum x.
        top: Maximum y.
    """
    left: float
    bottom: float
    right: float
    top: float

    def __post_init__(self) -> None:
        if self.left > self.right:
            raise ValueError(f"DoubleRect: left > right {self.left} > {self.right}")
        if self.bottom > self.top:
            raise ValueError(f"DoubleRect: bottom > top {self.bottom} > {self.top}")

    @classmethod
    def make_centered(cls, center, width: float, height: float) -> "DoubleRect":
        """Make a rectangle of the given size centered on ``center``."""
        x, y = float(center[0]), float(center[1])
        return cls(x - width / 2, y - height / 2, x + width / 2, y + height / 2)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    def center(self) -> np.ndarray:
        return f64([(self.left + self.right) / 2, (self.bottom + self.top) / 2])

    def contains(self, point) -> bool:
        """True when the point lies inside or on the border."""
        return (self.left <= point[0] <= self.right
                and self.bottom <= point[1] <= self.top)

    def is_empty(self, tol: float = 1e-16) -> bool:
        return self.width < tol or self.height < tol

    def nearly_equal(self, other: "DoubleRect", tol: float = 1e-14) -> bool:
        return (abs(self.left - other.left) <= tol
                and abs(self.bottom - other.bottom) <= tol
                and abs(self.right - other.right) <= tol
                and abs(self.top - other.top) <= tol)


# =============================================================================
# Screen-space rectangle
# =============================================================================

@dataclass(frozen=True)
class ScreenRect:
    """
    Rectangle in screen (pixel) coordinates.

    Attributes:
        left: Left edge.
        top: Top edge; the screen y-axis grows downwards.
        width: Width in pixels.
        height: Height in pixels.
    """
    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"ScreenRect: negative size {self.width}x{self.height}")

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    def center(self) -> np.ndarray:
        return f64([self.left + self.width / 2, self.top + self.height / 2])

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0
