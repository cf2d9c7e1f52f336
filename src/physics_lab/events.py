# MIT License (see LICENSE)
"""
Platform-neutral input events and event sources.

The interaction layer does not talk to any particular windowing toolkit.
A host (a GUI binding, a notebook widget, or a test) translates its native
input into these event objects and dispatches them on an EventSource:

- CanvasElement: the drawing surface of a LabCanvas. Receives mouse-down
  events and knows its on-screen geometry (position of its bounding box and
  the displayed width, which differs from its pixel width when the surface
  is stretched).
- Document: the process-wide source of mouse-move, mouse-up, key and touch
  events. Its ``body`` attribute is the target of key events that have no
  more specific target.

Event type names follow the usual DOM names: "mousedown", "mousemove",
"mouseup", "keydown", "keyup", "touchstart", "touchmove", "touchend".
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence


Listener = Callable[[Any], None]


@dataclass(frozen=True)
class ModifierKeys:
    """
    Modifier keys held down during an input event.

    Two sets match only when all four keys agree.
    """
    control: bool = False
    meta: bool = False
    shift: bool = False
    alt: bool = False

    def __str__(self) -> str:
        names = [n for n in ("control", "alt", "meta", "shift") if getattr(self, n)]
        return "+".join(names)


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class MouseEvent:
    """
    A mouse button or motion event.

    Attributes:
        client_x, client_y: Pointer location relative to the client area.
        target: The object the pointer was over.
    """
    client_x: float
    client_y: float
    target: Any = None
    ctrl_key: bool = False
    meta_key: bool = False
    shift_key: bool = False
    alt_key: bool = False

    @property
    def modifiers(self) -> ModifierKeys:
        return ModifierKeys(control=self.ctrl_key, meta=self.meta_key,
                            shift=self.shift_key, alt=self.alt_key)


@dataclass(frozen=True)
class KeyEvent:
    """
    A key press or release.

    Attributes:
        key: Key name, e.g. "a", "ArrowLeft".
        target: The element with keyboard focus.
    """
    key: str
    target: Any = None
    ctrl_key: bool = False
    meta_key: bool = False
    shift_key: bool = False
    alt_key: bool = False

    @property
    def modifiers(self) -> ModifierKeys:
        return ModifierKeys(control=self.ctrl_key, meta=self.meta_key,
                            shift=self.shift_key, alt=self.alt_key)


@dataclass(frozen=True)
class Touch:
    client_x: float
    client_y: float


@dataclass(frozen=True)
class TouchEvent:
    """
    A touch event.

    Attributes:
        touches: All touches currently on the surface.
        target: The element where the touch started.
    """
    touches: Sequence[Touch] = ()
    target: Any = None


# =============================================================================
# Event sources
# =============================================================================

class EventSource:
    """Keeps listeners per event type and dispatches events to them."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def add_event_listener(self, type: str, listener: Listener) -> None:
        listeners = self._listeners.setdefault(type, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, type: str, listener: Listener) -> None:
        listeners = self._listeners.get(type, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, type: str | None = None) -> int:
        if type is None:
            return sum(len(v) for v in self._listeners.values())
        return len(self._listeners.get(type, []))

    def dispatch(self, type: str, event: Any) -> None:
        for listener in list(self._listeners.get(type, [])):
            listener(event)


@dataclass(eq=False)
class CanvasElement(EventSource):
    """
    On-screen drawing surface.

    Attributes:
        width, height: Size of the pixel buffer.
        offset_width, offset_height: Displayed size; larger than the pixel
            size when the surface is stretched.
        bounding_left, bounding_top: Position of the surface relative to the
            client area.
        visible: False when the surface is hidden.
        focus_count: Number of times the surface was given keyboard focus.
    """
    width: int = 800
    height: int = 600
    offset_width: float = 800.0
    offset_height: float = 600.0
    bounding_left: float = 0.0
    bounding_top: float = 0.0
    visible: bool = True
    focus_count: int = field(default=0)

    def __post_init__(self) -> None:
        EventSource.__init__(self)

    def focus(self) -> None:
        self.focus_count += 1


class _Body:
    def __repr__(self) -> str:
        return "<body>"


class Document(EventSource):
    """Process-wide event source; ``body`` is the default event target."""

    def __init__(self) -> None:
        super().__init__()
        self.body = _Body()


# Default process-wide document
document = Document()
