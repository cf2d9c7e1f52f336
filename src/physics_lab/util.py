# MIT License (see LICENSE)
"""
Utility functions for vector math, naming and numeric operations.

Provides low-level 2D vector operations shared by the simulation model, the
view layer and the event-routing layer. All vector functions operate on 2D
vectors represented as numpy arrays of shape (2,).
"""
from __future__ import annotations
import math
import re

import numpy as np


ORIGIN = np.zeros(2, dtype=np.float64)
ORIGIN.setflags(write=False)


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two 2D points."""
    return float(math.hypot(a[0] - b[0], a[1] - b[1]))


def rotate(v: np.ndarray, angle: float) -> np.ndarray:
    """Rotate a 2D vector counterclockwise by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([v[0] * c - v[1] * s, v[0] * s + v[1] * c], dtype=np.float64)


def near_equal(a: np.ndarray, b: np.ndarray, tol: float) -> bool:
    """True when each component of ``a`` and ``b`` differs by at most ``tol``."""
    return abs(a[0] - b[0]) <= tol and abs(a[1] - b[1]) <= tol


# =============================================================================
# Naming
# =============================================================================

_NAME_RE = re.compile(r"^[A-Z_][A-Z_0-9]*$")


def to_name(text: str) -> str:
    """
    Convert a display name to a language-independent name.

    Upper-cases the text and replaces spaces and hyphens with underscores,
    so ``"kinetic energy"`` becomes ``"KINETIC_ENERGY"``.
    """
    return re.sub(r"[ \-]", "_", text.upper())


def valid_name(text: str) -> str:
    """
    Return ``text`` unchanged if it is a valid language-independent name.

    Raises:
        ValueError: If the text contains anything other than upper-case
            letters, digits and underscores, or starts with a digit.
    """
    if not _NAME_RE.match(text):
        raise ValueError(f"not a valid name: {text!r}")
    return text


# =============================================================================
# Angles
# =============================================================================

def limit_angle(angle: float) -> float:
    """
    Limit an angle to the range [-pi, pi] by adding or subtracting 2*pi.

    Angles already in range are returned unchanged, which lets callers
    compare the result against the input to detect a wrap.
    """
    if angle > math.pi:
        n = math.floor((angle - -math.pi) / (2 * math.pi))
        return angle - 2 * math.pi * n
    if angle < -math.pi:
        n = math.floor(-(angle - math.pi) / (2 * math.pi))
        return angle + 2 * math.pi * n
    return angle


def zero_array(a) -> None:
    """Set every element of a list or array to zero in place."""
    for i in range(len(a)):
        a[i] = 0.0
