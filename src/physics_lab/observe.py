# MIT License (see LICENSE)
"""
Subject/observer notification used across the model and view layers.

A Subject broadcasts named events (for example ``VARS_MODIFIED`` or
``RESET``) to its Observers. Observers may add or remove observers from
inside ``observe()``; such changes are deferred until the broadcast in
progress has finished so that iteration is never disturbed.

Typical usage:
    class Printer(Observer):
        def observe(self, event):
            print(event.name)

    subject.add_observer(Printer())
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .util import to_name


@dataclass(frozen=True)
class SubjectEvent:
    """
    An event broadcast by a Subject.

    Attributes:
        subject: The Subject that broadcast the event.
        name: Language-independent event name, e.g. "OBJECT_ADDED".
        value: Optional payload, e.g. the SimObject that was added.
    """
    subject: Any
    name: str
    value: Any = None

    def name_equals(self, name: str) -> bool:
        return self.name == to_name(name)


class Observer(ABC):
    """Receives events from one or more Subjects."""

    @abstractmethod
    def observe(self, event: SubjectEvent) -> None:
        ...


class AbstractSubject:
    """
    Keeps a list of Observers and broadcasts events to them.

    Attributes:
        name: Language-independent name of this subject.
    """

    def __init__(self, name: str = "") -> None:
        self.name = to_name(name)
        self._observers: list[Observer] = []
        self._pending: list[tuple[bool, Observer]] = []
        self._broadcast_depth = 0
        self.do_broadcast = True

    def add_observer(self, observer: Observer) -> None:
        if self._broadcast_depth:
            self._pending.append((True, observer))
        elif observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        if self._broadcast_depth:
            self._pending.append((False, observer))
        elif observer in self._observers:
            self._observers.remove(observer)

    def get_observers(self) -> list[Observer]:
        return list(self._observers)

    def broadcast(self, event: SubjectEvent) -> None:
        """
        Send ``event`` to every observer, then apply deferred changes.

        A broadcast made from inside observe() nests; deferred changes wait
        for the outermost broadcast to finish.
        """
        if not self.do_broadcast:
            return
        self._broadcast_depth += 1
        try:
            for observer in self._observers:
                observer.observe(event)
        finally:
            self._broadcast_depth -= 1
            if not self._broadcast_depth:
                self._apply_pending()

    def _apply_pending(self) -> None:
        pending, self._pending = self._pending, []
        for add, observer in pending:
            if add:
                self.add_observer(observer)
            else:
                self.remove_observer(observer)

    def broadcast_event(self, name: str, value: Any = None) -> None:
        self.broadcast(SubjectEvent(self, to_name(name), value))
