# MIT License (see LICENSE)
"""
Exceptions raised by the simulation core.

Invalid input is reported with the builtin ValueError / IndexError /
KeyError / TypeError at the point of failure. The classes here cover
failures of the time-stepping machinery itself.
"""
from __future__ import annotations
from typing import Any


class IntegrationError(RuntimeError):
    """
    A differential equation solver reported a failed step.

    Attributes:
        error: The error descriptor returned by the simulation's evaluate().
        time: Simulation time at the start of the failed step.
    """

    def __init__(self, error: Any, time: float) -> None:
        super().__init__(f"integration failed at time {time:g}: {error}")
        self.error = error
        self.time = time


class TimeStuckError(RuntimeError):
    """Simulation time did not advance during a step."""

    def __init__(self, time: float) -> None:
        super().__init__(f"simulation time is not advancing: time={time:g}")
        self.time = time
