# MIT License (see LICENSE)
"""
Bounded recording of simulation variables over time.

- CircularList: fixed-capacity store which overwrites its oldest entries.
  Every stored value gets an ever-increasing index, so a reader can tell
  which samples it has already seen even after the buffer wraps.
- VarsHistory: a Memorizable that samples selected variables of a VarsList
  into a CircularList after every simulation step.

Typical usage:
    history = VarsHistory(sim.vars_list)
    runner.add_memo(history)
    ...
    rows = history.to_array()
"""
from __future__ import annotations
from collections import deque
from typing import Generic, Iterator, Sequence, TypeVar

import numpy as np

from .memo import Memorizable
from .model.variables import VarsList

T = TypeVar("T")

DEFAULT_CAPACITY = 100000


class CircularList(Generic[T]):
    """
    Fixed-capacity list indexed by store order.

    Attributes:
        capacity: Maximum number of values held.
    """

    def __init__(self, capacity: int = 3000) -> None:
        if capacity < 2:
            raise ValueError(f"capacity must be at least 2: {capacity}")
        self.capacity = capacity
        self._values: deque[T] = deque(maxlen=capacity)
        self._count = 0

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return (f"CircularList(capacity={self.capacity}, size={len(self._values)}, "
                f"start_index={self.get_start_index()}, end_index={self.get_end_index()})")

    def store(self, value: T) -> int:
        """Store a value, returning its index."""
        self._values.append(value)
        self._count += 1
        return self._count - 1

    def get_start_index(self) -> int:
        """Index of the oldest value held; 0 when empty."""
        return self._count - len(self._values)

    def get_end_index(self) -> int:
        """Index of the newest value, or -1 when empty."""
        return self._count - 1 if self._values else -1

    def get_end_value(self) -> T | None:
        return self._values[-1] if self._values else None

    def get_value(self, index: int) -> T:
        """
        Return the value stored under ``index``.

        Raises:
            IndexError: If that value was overwritten or never stored.
        """
        start = self.get_start_index()
        if index < start or index >= self._count:
            raise IndexError(f"index {index} not in [{start}, {self._count - 1}]")
        return self._values[index - start]

    def iterate(self, index: int | None = None) -> Iterator[tuple[int, T]]:
        """Yield (index, value) pairs from ``index`` (oldest by default) to the newest."""
        start = self.get_start_index()
        first = start if index is None else max(index, start)
        for i in range(first, self._count):
            yield i, self._values[i - start]

    def reset(self) -> None:
        self._values.clear()
        self._count = 0


class VarsHistory(Memorizable):
    """
    Records selected variables after every step.

    A sample is stored only if it differs from the previous sample, so a
    paused simulation does not fill the buffer with duplicates.

    Args:
        vars_list: The variables to sample.
        capacity: Number of samples held.
    """

    def __init__(self, vars_list: VarsList, capacity: int = DEFAULT_CAPACITY) -> None:
        self.vars_list = vars_list
        self.data_points: CircularList[list[float]] = CircularList(capacity)
        self._var_index = list(range(vars_list.num_variables()))
        self.separator = ", "

    def __repr__(self) -> str:
        return f"VarsHistory(variables={self._var_index}, samples={len(self.data_points)})"

    def get_variables(self) -> list[int]:
        return list(self._var_index)

    def set_variables(self, var_index: Sequence[int]) -> None:
        """
        Choose which variables to record; erases stored data.

        Raises:
            IndexError: If an index is not a valid variable index.
        """
        n = self.vars_list.num_variables()
        for index in var_index:
            if index < 0 or index > n - 1:
                raise IndexError(f"variable index {index} not between 0 and {n - 1}")
        self._var_index = list(var_index)
        self.data_points.reset()

    def memorize(self) -> None:
        values = self.vars_list.get_values(computed=True)
        data = [values[i] for i in self._var_index]
        last = self.data_points.get_end_value()
        if last is None or not np.array_equal(data, last, equal_nan=True):
            self.data_points.store(data)

    def reset(self) -> None:
        self.data_points.reset()

    def to_array(self) -> list[list[float]]:
        return [list(v) for _, v in self.data_points.iterate()]

    def output(self, localized: bool = True) -> str:
        """Format the recorded samples as text with a header row of variable names."""
        names = [self.vars_list.get_variable(i) for i in self._var_index]
        lines = [self.separator.join(v.local_name if localized else v.name for v in names)]
        for _, data in self.data_points.iterate():
            lines.append(self.separator.join(f"{x:.5g}" for x in data))
        return "\n".join(lines) + "\n"
