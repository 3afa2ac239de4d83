"""Binding a value to the thread that created it."""

from __future__ import annotations

import copy as _copy
import threading
from functools import total_ordering
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class WrongThreadError(RuntimeError):
    """A thread-bound value was used from a thread it does not belong to."""


@total_ordering
class ThreadBound(Generic[T]):
    """Allows access to a value only from the thread that created this wrapper.

    ``repr`` can be used from any thread; it shows the value only on the owning thread.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._thread_id = threading.get_ident()
        self._taken = False

    def thread_id(self) -> int:
        """The id of the thread allowed to access the value."""
        return self._thread_id

    def is_usable(self) -> bool:
        """Whether the value is usable from the current thread."""
        return threading.get_ident() == self._thread_id

    def _check(self) -> None:
        if not self.is_usable():
            raise WrongThreadError(
                f"cannot use value on thread {threading.get_ident()} "
                f"since it belongs to thread {self._thread_id}"
            )
        if self._taken:
            raise ValueError("value has been taken out")

    def value(self) -> T:
        """The wrapped value."""
        self._check()
        return self._value

    def into_inner(self) -> T:
        """Takes the value out; the wrapper cannot be used afterwards."""
        self._check()
        self._taken = True
        value, self._value = self._value, None
        return value

    def copy(self) -> ThreadBound[T]:
        """A new wrapper, bound to the same thread, holding a copy of the value."""
        self._check()
        other = ThreadBound.__new__(ThreadBound)
        other._value = _copy.copy(self._value)
        other._thread_id = self._thread_id
        other._taken = False
        return other

    def __repr__(self) -> str:
        if self.is_usable() and not self._taken:
            return f"ThreadBound(thread_id={self._thread_id}, value={self._value!r})"
        return f"ThreadBound(thread_id={self._thread_id})"

    def __str__(self) -> str:
        self._check()
        return str(self._value)

    def _other_value(self, other: Any) -> Any:
        if isinstance(other, ThreadBound):
            other._check()
            return other._value
        return other

    def __eq__(self, other: Any) -> bool:
        self._check()
        return self._value == self._other_value(other)

    def __lt__(self, other: Any) -> bool:
        self._check()
        return self._value < self._other_value(other)

    def __hash__(self) -> int:
        self._check()
        return hash(self._value)

    def __await__(self):
        self._check()
        return self._value.__await__()

    def __aiter__(self) -> ThreadBound[T]:
        return self

    async def __anext__(self) -> Any:
        self._check()
        return await self._value.__anext__()