# MIT License (see LICENSE)
"""
Memorizable objects and the lists that drive them.

After each simulation step the advance strategy calls ``memorize()`` on a
MemoList, which in turn calls ``memorize()`` on every Memorizable it holds
(for example a VarsHistory recording variable values).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable


class Memorizable(ABC):
    """Something that records or reacts to the current simulation state."""

    @abstractmethod
    def memorize(self) -> None:
        ...


class MemoList(ABC):
    """A collection of Memorizable objects."""

    @abstractmethod
    def add_memo(self, memo: Memorizable) -> None:
        ...

    @abstractmethod
    def remove_memo(self, memo: Memorizable) -> None:
        ...

    @abstractmethod
    def get_memos(self) -> list[Memorizable]:
        ...

    @abstractmethod
    def memorize(self) -> None:
        ...


class ConcreteMemoList(MemoList):
    """
    Plain MemoList implementation.

    The list may not be modified while ``memorize()`` is iterating over it.
    """

    def __init__(self) -> None:
        self._memos: list[Memorizable] = []
        self._memorizing = False

    def add_memo(self, memo: Memorizable) -> None:
        if self._memorizing:
            raise RuntimeError("cannot add a memo during memorize")
        if memo not in self._memos:
            self._memos.append(memo)

    def remove_memo(self, memo: Memorizable) -> None:
        if self._memorizing:
            raise RuntimeError("cannot remove a memo during memorize")
        if memo in self._memos:
            self._memos.remove(memo)

    def get_memos(self) -> list[Memorizable]:
        return list(self._memos)

    def memorize(self) -> None:
        self._memorizing = True
        try:
            for memo in self._memos:
                memo.memorize()
        finally:
            self._memorizing = False


class GenericMemo(Memorizable):
    """Memorizable that calls an arbitrary function."""

    def __init__(self, function: Callable[[], None], name: str = "") -> None:
        self.function = function
        self.name = name

    def memorize(self) -> None:
        self.function()

    def __repr__(self) -> str:
        return f"GenericMemo({self.name or self.function!r})"
