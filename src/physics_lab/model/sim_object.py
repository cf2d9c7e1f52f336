# MIT License (see LICENSE)
"""
SimObjects: the physical entities a simulation exposes to the view layer.

A simulation keeps its numeric state in a VarsList and mirrors it into
SimObjects (point masses, springs, lines, force arrows) in
``modify_objects()``. Display and event-routing code only ever looks at
SimObjects.

Each SimObject carries a ``kind`` tag (SimObjectKind) so that code which
needs to treat variants differently (for example choosing a display object)
dispatches on the tag rather than on the class.

The SimList holds the SimObjects of one simulation and broadcasts
``OBJECT_ADDED`` / ``OBJECT_REMOVED``. Objects with a finite expiration time
are temporary: adding one first removes any *similar* object already in the
list, and ``remove_temporary(time)`` purges those that have expired.
"""
from __future__ import annotations
import enum
import logging
import math
from abc import ABC, abstractmethod
from typing import Iterator, Sequence

import numpy as np

from ..observe import AbstractSubject
from ..types import DoubleRect
from ..util import f64, distance, near_equal, norm, rotate, to_name, ORIGIN

logger = logging.getLogger(__name__)

OBJECT_ADDED = "OBJECT_ADDED"
OBJECT_REMOVED = "OBJECT_REMOVED"


class SimObjectKind(enum.Enum):
    """Discriminant for the SimObject variants."""
    POINT_MASS = "point_mass"
    SPRING = "spring"
    LINE = "line"
    FORCE = "force"


class PointMassShape(enum.Enum):
    RECTANGLE = "rectangle"
    OVAL = "oval"


# =============================================================================
# Base classes
# =============================================================================

class SimObject(ABC):
    """
    Interface of every object held in a SimList.

    Attributes:
        name: Language-independent name.
        local_name: Display name.
        kind: Variant tag.
        expire_time: Simulation time after which a temporary object is
            removed; infinite for permanent objects.
    """
    name: str
    local_name: str
    kind: SimObjectKind
    expire_time: float

    @abstractmethod
    def get_bounds_world(self) -> DoubleRect:
        ...

    @abstractmethod
    def similar(self, obj: "SimObject", tolerance: float = 0.1) -> bool:
        ...

    @abstractmethod
    def get_changed(self) -> bool:
        ...

    def name_equals(self, name: str) -> bool:
        return self.name == to_name(name)

    def is_mass_object(self) -> bool:
        return False


class AbstractSimObject(SimObject):
    """Shared state for SimObject implementations."""

    def __init__(self, name: str, local_name: str | None = None,
                 expire_time: float = math.inf) -> None:
        self.name = to_name(name)
        self.local_name = local_name if local_name is not None else name
        self.expire_time = expire_time
        self._changed = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def similar(self, obj: SimObject, tolerance: float = 0.1) -> bool:
        return obj is self

    def get_changed(self) -> bool:
        """Report whether the object changed since the last call, then clear the flag."""
        changed = self._changed
        self._changed = False
        return changed

    def set_changed(self) -> None:
        self._changed = True


# =============================================================================
# PointMass
# =============================================================================

class PointMass(AbstractSimObject):
    """
    A rectangle or oval shaped mass with position, velocity and angle.

    Body coordinates have their origin at the center of the shape and are
    rotated by ``angle`` relative to world coordinates.

    Attributes:
        mass: Mass in kg; ``math.inf`` for fixed objects.
        width: Width of the shape in body coordinates.
        height: Height of the shape in body coordinates.
        shape: Rectangle or oval.
        drag_points: Body-space points where a mouse drag may attach.
    """

    kind = SimObjectKind.POINT_MASS

    def __init__(self, name: str = "POINT_MASS", local_name: str | None = None,
                 mass: float = 1.0, width: float = 1.0, height: float = 1.0,
                 shape: PointMassShape = PointMassShape.OVAL,
                 expire_time: float = math.inf) -> None:
        super().__init__(name, local_name, expire_time)
        self.mass = mass
        self.width = width
        self.height = height
        self.shape = shape
        self.drag_points: list[np.ndarray] = [ORIGIN.copy()]
        self._position = np.zeros(2, dtype=np.float64)
        self._velocity = np.zeros(2, dtype=np.float64)
        self.angle = 0.0
        self.angular_velocity = 0.0

    def is_mass_object(self) -> bool:
        return True

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    def set_position(self, loc) -> None:
        self._position = f64(loc)[:2]
        self.set_changed()

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity.copy()

    def set_velocity(self, vel) -> None:
        self._velocity = f64(vel)[:2]
        self.set_changed()

    def set_angle(self, angle: float) -> None:
        self.angle = float(angle)
        self.set_changed()

    def body_to_world(self, body_point) -> np.ndarray:
        """Transform a point from body coordinates to world coordinates."""
        return rotate(f64(body_point), self.angle) + self._position

    def world_to_body(self, world_point) -> np.ndarray:
        """Transform a point from world coordinates to body coordinates."""
        return rotate(f64(world_point) - self._position, -self.angle)

    def get_bounds_body(self) -> DoubleRect:
        w, h = self.width / 2, self.height / 2
        return DoubleRect(-w, -h, w, h)

    def get_bounds_world(self) -> DoubleRect:
        b = self.get_bounds_body()
        corners = [self.body_to_world((x, y)) for x in (b.left, b.right) for y in (b.bottom, b.top)]
        xs = [c[0] for c in corners]
        ys = [c[1] for c in corners]
        return DoubleRect(min(xs), min(ys), max(xs), max(ys))

    def contains_body(self, body_point) -> bool:
        """True when a body-space point lies inside the shape."""
        x, y = float(body_point[0]), float(body_point[1])
        w, h = self.width / 2, self.height / 2
        if self.shape == PointMassShape.RECTANGLE:
            return -w <= x <= w and -h <= y <= h
        if w <= 0 or h <= 0:
            return False
        return (x / w) ** 2 + (y / h) ** 2 <= 1.0

    def get_kinetic_energy(self) -> float:
        if math.isinf(self.mass):
            return 0.0
        v = self._velocity
        return 0.5 * self.mass * float(v[0] * v[0] + v[1] * v[1])


# =============================================================================
# Lines: Spring, Line, Force
# =============================================================================

class Spring(AbstractSimObject):
    """
    A spring connecting a point on one mass object to a point on another.

    Attributes:
        body1, body2: The connected PointMass objects.
        attach1, attach2: Attachment points in body coordinates.
        rest_length: Length of the spring with no force applied.
        stiffness: Spring constant.
        damping: Damping proportional to the relative velocity of the ends.
    """

    kind = SimObjectKind.SPRING

    def __init__(self, name: str, body1: PointMass, attach1, body2: PointMass, attach2,
                 rest_length: float, stiffness: float = 0.0, damping: float = 0.0) -> None:
        super().__init__(name)
        self.body1 = body1
        self.attach1 = f64(attach1)
        self.body2 = body2
        self.attach2 = f64(attach2)
        self.rest_length = rest_length
        self.stiffness = stiffness
        self.damping = damping

    def get_start_point(self) -> np.ndarray:
        return self.body1.body_to_world(self.attach1)

    def get_end_point(self) -> np.ndarray:
        return self.body2.body_to_world(self.attach2)

    def get_vector(self) -> np.ndarray:
        return self.get_end_point() - self.get_start_point()

    def get_length(self) -> float:
        return distance(self.get_end_point(), self.get_start_point())

    def get_stretch(self) -> float:
        """Positive when the spring is expanded, negative when compressed."""
        return self.get_length() - self.rest_length

    def get_potential_energy(self) -> float:
        stretch = self.get_stretch()
        return 0.5 * self.stiffness * stretch * stretch

    def get_bounds_world(self) -> DoubleRect:
        p1, p2 = self.get_start_point(), self.get_end_point()
        return DoubleRect(min(p1[0], p2[0]), min(p1[1], p2[1]),
                          max(p1[0], p2[0]), max(p1[1], p2[1]))

    def calculate_forces(self) -> list["Force"]:
        """
        Forces the spring exerts on its two bodies.

        Includes damping proportional to the relative velocity of the two
        attachment points along the spring.
        """
        p1, p2 = self.get_start_point(), self.get_end_point()
        v = p2 - p1
        length = norm(v)
        if length < 1e-12:
            return []
        direction = v / length
        magnitude = self.stiffness * (length - self.rest_length)
        if self.damping != 0:
            relative_velocity = self.body2.velocity - self.body1.velocity
            magnitude += self.damping * float(np.dot(relative_velocity, direction))
        f = magnitude * direction
        return [
            Force("spring", self.body1, p1, f),
            Force("spring", self.body2, p2, -f),
        ]


class Line(AbstractSimObject):
    """A plain line segment between two world points."""

    kind = SimObjectKind.LINE

    def __init__(self, name: str = "LINE", start=(0.0, 0.0), end=(0.0, 0.0),
                 expire_time: float = math.inf) -> None:
        super().__init__(name, expire_time=expire_time)
        self._start = f64(start)
        self._end = f64(end)

    def get_start_point(self) -> np.ndarray:
        return self._start.copy()

    def get_end_point(self) -> np.ndarray:
        return self._end.copy()

    def set_start_point(self, point) -> None:
        self._start = f64(point)
        self.set_changed()

    def set_end_point(self, point) -> None:
        self._end = f64(point)
        self.set_changed()

    def get_vector(self) -> np.ndarray:
        return self._end - self._start

    def get_bounds_world(self) -> DoubleRect:
        p1, p2 = self._start, self._end
        return DoubleRect(min(p1[0], p2[0]), min(p1[1], p2[1]),
                          max(p1[0], p2[0]), max(p1[1], p2[1]))

    def similar(self, obj: SimObject, tolerance: float = 0.1) -> bool:
        if not isinstance(obj, Line) or obj.kind != self.kind:
            return False
        return (obj.name == self.name
                and near_equal(obj._start, self._start, tolerance)
                and near_equal(obj._end, self._end, tolerance))


class Force(AbstractSimObject):
    """
    A force vector applied to a body at a world location.

    Usually temporary: given a finite ``expire_time`` so the arrow is shown
    for a moment and then purged from the SimList.
    """

    kind = SimObjectKind.FORCE

    def __init__(self, name: str, body: PointMass | None, location, vector,
                 expire_time: float = math.inf) -> None:
        super().__init__(name, expire_time=expire_time)
        self.body = body
        self.location = f64(location)
        self.vector = f64(vector)

    def get_start_point(self) -> np.ndarray:
        return self.location.copy()

    def get_end_point(self) -> np.ndarray:
        return self.location + self.vector

    def get_bounds_world(self) -> DoubleRect:
        p1, p2 = self.get_start_point(), self.get_end_point()
        return DoubleRect(min(p1[0], p2[0]), min(p1[1], p2[1]),
                          max(p1[0], p2[0]), max(p1[1], p2[1]))

    def similar(self, obj: SimObject, tolerance: float = 0.1) -> bool:
        if not isinstance(obj, Force):
            return False
        return (obj.name == self.name
                and near_equal(obj.location, self.location, tolerance)
                and near_equal(obj.vector, self.vector, tolerance))


# =============================================================================
# SimList
# =============================================================================

class SimList(AbstractSubject):
    """
    The SimObjects of one simulation.

    Attributes:
        tolerance: Default tolerance for ``get_similar`` when adding
            temporary objects.
    """

    def __init__(self, tolerance: float = 0.1) -> None:
        super().__init__("SIM_LIST")
        self._elements: list[SimObject] = []
        self.tolerance = tolerance

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[SimObject]:
        return iter(list(self._elements))

    def __contains__(self, obj: SimObject) -> bool:
        return obj in self._elements

    def add(self, *objs: SimObject) -> None:
        """
        Add SimObjects, broadcasting OBJECT_ADDED for each new one.

        A temporary object (finite expiration time) first replaces any
        similar objects already in the list.
        """
        for obj in objs:
            if obj is None:
                raise ValueError("cannot add invalid SimObject")
            if math.isfinite(obj.expire_time):
                similar = self.get_similar(obj)
                while similar is not None:
                    self.remove(similar)
                    similar = self.get_similar(obj)
            if obj not in self._elements:
                self._elements.append(obj)
                self.broadcast_event(OBJECT_ADDED, obj)

    def add_all(self, objs: Sequence[SimObject]) -> None:
        self.add(*objs)

    def remove(self, obj: SimObject) -> None:
        if obj in self._elements:
            self._elements.remove(obj)
            self.broadcast_event(OBJECT_REMOVED, obj)

    def remove_all(self, objs: Sequence[SimObject]) -> None:
        for obj in list(objs):
            self.remove(obj)

    def clear(self) -> None:
        self.remove_all(list(self._elements))

    def remove_temporary(self, time: float) -> None:
        """Remove objects whose expiration time is earlier than ``time``."""
        for i in range(len(self._elements) - 1, -1, -1):
            obj = self._elements[i]
            if obj.expire_time < time:
                del self._elements[i]
                logger.debug("removed expired %s at time %g", obj.name, time)
                self.broadcast_event(OBJECT_REMOVED, obj)

    def get_similar(self, obj: SimObject, tolerance: float | None = None) -> SimObject | None:
        tol = self.tolerance if tolerance is None else tolerance
        for element in self._elements:
            if element.similar(obj, tol):
                return element
        return None

    def index_of(self, obj: SimObject) -> int:
        for i, element in enumerate(self._elements):
            if element is obj:
                return i
        return -1

    def get(self, id: int | str) -> SimObject:
        """
        Return the SimObject at an index or with a name.

        Raises:
            IndexError: If an index is out of range.
            KeyError: If no object has the name.
        """
        if isinstance(id, str):
            name = to_name(id)
            for element in self._elements:
                if element.name == name:
                    return element
            raise KeyError(f"SimObject not found {id!r}")
        if id < 0 or id >= len(self._elements):
            raise IndexError(f"SimObject index out of range {id}")
        return self._elements[id]

    def get_of_kind(self, name: str, kind: SimObjectKind) -> SimObject:
        obj = self.get(name)
        if obj.kind != kind:
            raise TypeError(f"{obj.name} is a {obj.kind.value}, not a {kind.value}")
        return obj

    def get_point_mass(self, name: str) -> PointMass:
        return self.get_of_kind(name, SimObjectKind.POINT_MASS)  # type: ignore[return-value]

    def get_spring(self, name: str) -> Spring:
        return self.get_of_kind(name, SimObjectKind.SPRING)  # type: ignore[return-value]

    def get_line(self, name: str) -> Line:
        return self.get_of_kind(name, SimObjectKind.LINE)  # type: ignore[return-value]

    def to_array(self) -> list[SimObject]:
        return list(self._elements)
