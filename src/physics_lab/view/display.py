# MIT License (see LICENSE)
"""
Display objects: the view-side counterparts of SimObjects.

Only the geometry needed for interaction is modelled here; drawing is left
to a renderer. What the event-routing layer asks of a display object:

- ``is_dragable()``: whether the user may drag it.
- ``get_mass_objects()``: the physical objects backing it. None means an
  *opaque* object (such as a panel or clock) selected by containment; one
  means the drag attaches to that object's drag points; more than one means
  it is never dragged.
- ``contains(point)``: containment test in simulation coordinates.
- ``get_position()`` / ``set_position()``: used when a drag moves the object
  directly.

``make_display(sim_object)`` picks the display class for a SimObject from
a registry keyed by SimObjectKind.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Iterator

import numpy as np

from ..model.sim_object import (
    SimObject, SimObjectKind, PointMass, Spring, Line, Force,
    OBJECT_ADDED, OBJECT_REMOVED,
)
from ..observe import AbstractSubject
from ..types import DoubleRect
from ..util import f64, to_name


# =============================================================================
# Display objects
# =============================================================================

class DisplayObject(ABC):
    """
    An object shown in a SimView.

    Attributes:
        z_index: Drawing order; higher values are drawn later, in front.
        dragable: Whether the user may drag this object.
    """

    def __init__(self, z_index: float = 0.0, dragable: bool = False) -> None:
        self.z_index = z_index
        self.dragable = dragable

    def __repr__(self) -> str:
        return f"{type(self).__name__}(z_index={self.z_index}, dragable={self.dragable})"

    def is_dragable(self) -> bool:
        return self.dragable

    def set_dragable(self, dragable: bool) -> None:
        self.dragable = dragable

    @abstractmethod
    def contains(self, point) -> bool:
        ...

    @abstractmethod
    def get_mass_objects(self) -> list[PointMass]:
        ...

    @abstractmethod
    def get_sim_objects(self) -> list[SimObject]:
        ...

    @abstractmethod
    def get_position(self) -> np.ndarray:
        ...

    @abstractmethod
    def set_position(self, position) -> None:
        ...


class DisplayShape(DisplayObject):
    """Shows a PointMass; dragable when its mass is finite."""

    def __init__(self, mass_object: PointMass, z_index: float = 0.0,
                 dragable: bool | None = None) -> None:
        if dragable is None:
            dragable = np.isfinite(mass_object.mass) and bool(mass_object.drag_points)
        super().__init__(z_index, bool(dragable))
        self.mass_object = mass_object

    def __repr__(self) -> str:
        return f"DisplayShape({self.mass_object.name}, z_index={self.z_index})"

    def contains(self, point) -> bool:
        p_body = self.mass_object.world_to_body(point)
        return self.mass_object.get_bounds_body().contains(p_body)

    def get_mass_objects(self) -> list[PointMass]:
        return [self.mass_object]

    def get_sim_objects(self) -> list[SimObject]:
        return [self.mass_object]

    def get_position(self) -> np.ndarray:
        return self.mass_object.position

    def set_position(self, position) -> None:
        self.mass_object.set_position(position)


class DisplaySpring(DisplayObject):
    """Shows a Spring; never dragable."""

    def __init__(self, spring: Spring, z_index: float = 0.0) -> None:
        super().__init__(z_index, dragable=False)
        self.spring = spring

    def contains(self, point) -> bool:
        return False

    def get_mass_objects(self) -> list[PointMass]:
        return []

    def get_sim_objects(self) -> list[SimObject]:
        return [self.spring]

    def get_position(self) -> np.ndarray:
        return (self.spring.get_start_point() + self.spring.get_end_point()) / 2

    def set_position(self, position) -> None:
        """Position is set by the spring's end points."""


class DisplayLine(DisplayObject):
    """Shows a Line or Force; never dragable."""

    def __init__(self, line: Line | Force, z_index: float = 0.0) -> None:
        super().__init__(z_index, dragable=False)
        self.line = line

    def contains(self, point) -> bool:
        return False

    def get_mass_objects(self) -> list[PointMass]:
        return []

    def get_sim_objects(self) -> list[SimObject]:
        return [self.line]

    def get_position(self) -> np.ndarray:
        return (self.line.get_start_point() + self.line.get_end_point()) / 2

    def set_position(self, position) -> None:
        """Position is set by the line's end points."""


class DisplayPanel(DisplayObject):
    """
    A rectangular decoration with no SimObject behind it.

    Stands for UI-only items drawn in simulation space, such as a clock or
    an energy bar graph. Dragable by default; being backed by no mass
    object it is picked by containment rather than by distance.

    Attributes:
        width, height: Size in simulation units.
    """

    def __init__(self, position=(0.0, 0.0), width: float = 1.0, height: float = 1.0,
                 z_index: float = 0.0, dragable: bool = True, name: str = "PANEL") -> None:
        super().__init__(z_index, dragable)
        self.name = to_name(name)
        self._position = f64(position)
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return f"DisplayPanel({self.name}, position={self._position.tolist()})"

    def get_bounds(self) -> DoubleRect:
        return DoubleRect.make_centered(self._position, self.width, self.height)

    def contains(self, point) -> bool:
        return self.get_bounds().contains(point)

    def get_mass_objects(self) -> list[PointMass]:
        return []

    def get_sim_objects(self) -> list[SimObject]:
        return []

    def get_position(self) -> np.ndarray:
        return self._position.copy()

    def set_position(self, position) -> None:
        self._position = f64(position)


# =============================================================================
# Factory registry
# =============================================================================

DisplayFactory = Callable[[SimObject], DisplayObject]

DISPLAY_FACTORIES: dict[SimObjectKind, DisplayFactory] = {
    SimObjectKind.POINT_MASS: lambda obj: DisplayShape(obj),  # type: ignore[arg-type]
    SimObjectKind.SPRING: lambda obj: DisplaySpring(obj),  # type: ignore[arg-type]
    SimObjectKind.LINE: lambda obj: DisplayLine(obj),  # type: ignore[arg-type]
    SimObjectKind.FORCE: lambda obj: DisplayLine(obj),  # type: ignore[arg-type]
}


def make_display(sim_object: SimObject) -> DisplayObject:
    """
    Make the display object for a SimObject based on its kind.

    Raises:
        KeyError: If no factory is registered for the object's kind.
    """
    try:
        factory = DISPLAY_FACTORIES[sim_object.kind]
    except KeyError:
        raise KeyError(f"no display for {sim_object.kind}") from None
    return factory(sim_object)


# =============================================================================
# DisplayList
# =============================================================================

class DisplayList(AbstractSubject):
    """
    Display objects of one view, kept sorted by z_index.

    Objects with equal z_index keep the order they were added in, so the
    last object added is drawn in front of earlier ones.
    """

    def __init__(self, name: str = "DISPLAY_LIST") -> None:
        super().__init__(name)
        self._drawables: list[DisplayObject] = []

    def __len__(self) -> int:
        return len(self._drawables)

    def __iter__(self) -> Iterator[DisplayObject]:
        return iter(self.to_array())

    def _sort(self) -> None:
        self._drawables.sort(key=lambda d: d.z_index)

    def add(self, *disp_objs: DisplayObject) -> None:
        for disp_obj in disp_objs:
            if disp_obj in self._drawables:
                continue
            self._sort()
            index = next((i for i, d in enumerate(self._drawables)
                          if disp_obj.z_index < d.z_index), len(self._drawables))
            self._drawables.insert(index, disp_obj)
            self.broadcast_event(OBJECT_ADDED, disp_obj)

    def prepend(self, disp_obj: DisplayObject) -> None:
        """Add an object behind all others with the same z_index."""
        if disp_obj in self._drawables:
            return
        self._sort()
        index = next((i for i, d in enumerate(self._drawables)
                      if disp_obj.z_index <= d.z_index), len(self._drawables))
        self._drawables.insert(index, disp_obj)
        self.broadcast_event(OBJECT_ADDED, disp_obj)

    def remove(self, disp_obj: DisplayObject) -> None:
        if disp_obj in self._drawables:
            self._drawables.remove(disp_obj)
            self.broadcast_event(OBJECT_REMOVED, disp_obj)

    def remove_all(self) -> None:
        for disp_obj in list(self._drawables):
            self.remove(disp_obj)

    def find(self, search: SimObject | str) -> DisplayObject | None:
        """Display object showing a SimObject, or a SimObject with the given name."""
        if isinstance(search, str):
            name = to_name(search)
            for disp_obj in self._drawables:
                if any(obj.name == name for obj in disp_obj.get_sim_objects()):
                    return disp_obj
            return None
        for disp_obj in self._drawables:
            if search in disp_obj.get_sim_objects():
                return disp_obj
        return None

    def to_array(self) -> list[DisplayObject]:
        """Objects in drawing order: back to front."""
        self._sort()
        return list(self._drawables)
