"""An async message queue and a receiver that can peek at the next message."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Any, Callable, Deque, Generic, Optional, TypeVar

T = TypeVar("T")

_NOTHING: Any = object()


class QueueEmpty(Exception):
    """No message is present."""


class Disconnected(Exception):
    """The sending side has been closed and no messages remain."""


class NoMatch(Exception):
    """The next message does not fulfil the condition."""


class MessageQueue(Generic[T]):
    """Unbounded single-consumer message queue; ``recv`` returns None once closed and drained."""

    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._closed = False
        self._available = asyncio.Event()

    def send(self, item: T) -> None:
        if item is None:
            raise TypeError("None cannot be sent; it marks a closed queue")
        if self._closed:
            raise Disconnected("queue is closed")
        self._items.append(item)
        self._available.set()

    def close(self) -> None:
        """Closes the sending side; queued messages can still be received."""
        self._closed = True
        self._available.set()

    def closed(self) -> bool:
        return self._closed

    async def recv(self) -> Optional[T]:
        while not self._items:
            if self._closed:
                return None
            self._available.clear()
            await self._available.wait()
        return self._items.popleft()

    def try_recv(self) -> T:
        if self._items:
            return self._items.popleft()
        if self._closed:
            raise Disconnected("queue is closed")
        raise QueueEmpty("no message available")


class PeekableReceiver(Generic[T]):
    """Receiver that allows peeking at the next message."""

    def __init__(self, rx: MessageQueue[T]) -> None:
        self._rx = rx
        self._peeked: Any = _NOTHING

    def _take_peeked(self) -> Any:
        msg, self._peeked = self._peeked, _NOTHING
        return msg

    async def recv(self) -> Optional[T]:
        if self._peeked is not _NOTHING:
            return self._take_peeked()
        return await self._rx.recv()

    def try_recv(self) -> T:
        if self._peeked is not _NOTHING:
            return self._take_peeked()
        return self._rx.try_recv()

    async def peek(self) -> Optional[T]:
        """Waits for the next message without removing it; None if disconnected."""
        if self._peeked is _NOTHING:
            msg = await self._rx.recv()
            if msg is None:
                return None
            self._peeked = msg
        return self._peeked

    def try_peek(self) -> T:
        if self._peeked is _NOTHING:
            self._peeked = self._rx.try_recv()
        return self._peeked

    async def recv_if(self, cond: Callable[[T], bool]) -> T:
        """Receives the next message if it fulfils ``cond``; raises Disconnected or NoMatch."""
        msg = await self.peek()
        if msg is None:
            raise Disconnected("queue is closed")
        if not cond(msg):
            raise NoMatch("condition not fulfilled")
        return self._take_peeked()

    def try_recv_if(self, cond: Callable[[T], bool]) -> T:
        """Like ``recv_if`` but without waiting; raises QueueEmpty if nothing is available."""
        msg = self.try_peek()
        if not cond(msg):
            raise NoMatch("condition not fulfilled")
        return self._take_peeked()