# MIT License (see LICENSE)
"""
The EventHandler capability: how a simulation reacts to drags and keys.

A simulation that supports interaction implements EventHandler. For one
drag gesture the calls are always, in order:

    start_drag(...)            once; returns whether the handler takes the drag
    mouse_drag(...)            on every pointer move, only if start_drag was True
    finish_drag(...)           once at the end of the gesture

If start_drag() returns False the MouseTracker moves the display object
directly instead. An object the handler does not recognize is not an error:
returning False is the signal. handle_key_event() is independent of drags.
"""
from __future__ import annotations
from abc import ABC, abstractmethod

import numpy as np

from ..events import KeyEvent, ModifierKeys
from ..model.sim_object import SimObject

__all__ = ["EventHandler", "ModifierKeys", "modifiers_equal", "modifiers_to_string"]


class EventHandler(ABC):
    """Receives drag and key events from a SimController."""

    @abstractmethod
    def start_drag(self, sim_object: SimObject | None, location: np.ndarray,
                   offset: np.ndarray, drag_body: np.ndarray | None,
                   modifiers: ModifierKeys) -> bool:
        """
        Called at the start of a drag gesture.

        Args:
            sim_object: The SimObject under the pointer, or None when the
                pointer is over empty space.
            location: Pointer location in simulation coordinates.
            offset: Pointer location minus the object's position.
            drag_body: The attachment point in body coordinates, or None.
            modifiers: Modifier keys held down.

        Returns:
            True when this handler takes charge of the drag.
        """

    @abstractmethod
    def mouse_drag(self, sim_object: SimObject | None, location: np.ndarray,
                   offset: np.ndarray) -> None:
        ...

    @abstractmethod
    def finish_drag(self, sim_object: SimObject | None, location: np.ndarray,
                    offset: np.ndarray) -> None:
        ...

    @abstractmethod
    def handle_key_event(self, event: KeyEvent, pressed: bool, modifiers: ModifierKeys) -> None:
        ...


def modifiers_equal(m1: ModifierKeys, m2: ModifierKeys) -> bool:
    """True when all four modifier keys agree."""
    return (bool(m1.control) == bool(m2.control)
            and bool(m1.meta) == bool(m2.meta)
            and bool(m1.shift) == bool(m2.shift)
            and bool(m1.alt) == bool(m2.alt))


def modifiers_to_string(modifiers: ModifierKeys) -> str:
    """Modifier keys joined with '+', e.g. 'control+shift'."""
    return str(modifiers)
