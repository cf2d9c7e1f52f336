# MIT License (see LICENSE)
"""
Drives one or more advance strategies forward in time.

The host calls ``advance_to(target_time)`` on each tick of its clock (or
``step()`` to single-step). SimRunner takes fixed steps of ``time_step``
until simulation time reaches the target, and acts as the MemoList passed
to each advance so that memos run once per step.

If a step raises, the runner pauses, tells its error observers (so that,
for example, a SimController can finish an active drag) and re-raises.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any

from ..errors import TimeStuckError
from ..memo import ConcreteMemoList, Memorizable, MemoList
from ..model.advance import AdvanceStrategy

logger = logging.getLogger(__name__)


class ErrorObserver(ABC):
    """Told when the simulation fails, before the error propagates."""

    @abstractmethod
    def notify_error(self, error: Any) -> None:
        ...


class SimRunner(MemoList):
    """
    Advances simulations in fixed time steps.

    Args:
        advance: The first advance strategy to run.
        time_step: Step size; the strategy's own time step by default.
        name: Name used in log messages.
    """

    def __init__(self, advance: AdvanceStrategy, time_step: float | None = None,
                 name: str = "SIM_RUNNER") -> None:
        self.name = name
        self._strategies: list[AdvanceStrategy] = [advance]
        self.time_step = time_step if time_step is not None else advance.get_time_step()
        self._memo_list = ConcreteMemoList()
        self._error_observers: list[ErrorObserver] = []
        self.running = True

    def __repr__(self) -> str:
        return f"SimRunner(name={self.name!r}, time_step={self.time_step}, running={self.running})"

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def add_strategy(self, advance: AdvanceStrategy) -> None:
        if advance not in self._strategies:
            self._strategies.append(advance)

    def add_error_observer(self, observer: ErrorObserver) -> None:
        if observer not in self._error_observers:
            self._error_observers.append(observer)

    def remove_error_observer(self, observer: ErrorObserver) -> None:
        if observer in self._error_observers:
            self._error_observers.remove(observer)

    def set_time_step(self, time_step: float) -> None:
        if time_step <= 0:
            raise ValueError(f"time step must be positive: {time_step}")
        self.time_step = time_step

    # MemoList
    def add_memo(self, memo: Memorizable) -> None:
        self._memo_list.add_memo(memo)

    def remove_memo(self, memo: Memorizable) -> None:
        self._memo_list.remove_memo(memo)

    def get_memos(self) -> list[Memorizable]:
        return self._memo_list.get_memos()

    def memorize(self) -> None:
        self._memo_list.memorize()

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def pause(self) -> None:
        self.running = False

    def resume(self) -> None:
        self.running = True

    def advance_to(self, target_time: float) -> None:
        """Advance every strategy until its time reaches ``target_time``."""
        if not self.running:
            return
        for strategy in self._strategies:
            self._guarded(self._advance_sims, strategy, target_time)

    def step(self) -> None:
        """Advance every strategy by exactly one time step, even when paused."""
        for strategy in self._strategies:
            self._guarded(strategy.advance, self.time_step, self)

    def _guarded(self, fn, *args) -> None:
        try:
            fn(*args)
        except Exception as error:
            self.handle_exception(error)
            raise

    def handle_exception(self, error: Any) -> None:
        """Pause and notify error observers."""
        self.pause()
        logger.warning("%s: simulation error: %s", self.name, error)
        for observer in list(self._error_observers):
            observer.notify_error(error)

    def _advance_sims(self, strategy: AdvanceStrategy, target_time: float) -> None:
        sim_time = strategy.get_time()
        while sim_time < target_time:
            strategy.advance(self.time_step, self)
            # a memo may have paused the runner
            if not self.running:
                break
            last_sim_time = sim_time
            sim_time = strategy.get_time()
            if sim_time - last_sim_time <= 1e-15:
                raise TimeStuckError(sim_time)
            # leave the remainder for the next call so each frame shows one step
            if target_time - sim_time < self.time_step:
                break
