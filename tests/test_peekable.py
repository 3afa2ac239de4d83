import asyncio

import pytest

from linkagg.peekable import (
    Disconnected,
    MessageQueue,
    NoMatch,
    PeekableReceiver,
    QueueEmpty,
)


def test_queue_fifo_and_close():
    queue = MessageQueue()
    queue.send(1)
    queue.send(2)
    queue.close()
    assert queue.closed() is True
    assert queue.try_recv() == 1
    assert queue.try_recv() == 2
    with pytest.raises(Disconnected):
        queue.try_recv()


def test_queue_empty():
    with pytest.raises(QueueEmpty):
        MessageQueue().try_recv()


def test_send_after_close_rejected():
    queue = MessageQueue()
    queue.close()
    with pytest.raises(Disconnected):
        queue.send(1)


def test_send_none_rejected():
    with pytest.raises(TypeError):
        MessageQueue().send(None)


@pytest.mark.asyncio
async def test_recv_waits_for_send():
    queue = MessageQueue()

    async def later():
        await asyncio.sleep(0.01)
        queue.send("x")

    task = asyncio.create_task(later())
    assert await queue.recv() == "x"
    await task


@pytest.mark.asyncio
async def test_recv_none_when_closed():
    queue = MessageQueue()
    queue.close()
    assert await queue.recv() is None


@pytest.mark.asyncio
async def test_peek_does_not_consume():
    queue = MessageQueue()
    rx = PeekableReceiver(queue)
    queue.send("a")
    queue.send("b")
    assert await rx.peek() == "a"
    assert await rx.peek() == "a"
    assert await rx.recv() == "a"
    assert rx.try_recv() == "b"


@pytest.mark.asyncio
async def test_peek_disconnected():
    queue = MessageQueue()
    queue.close()
    rx = PeekableReceiver(queue)
    assert await rx.peek() is None
    with pytest.raises(Disconnected):
        await rx.recv_if(lambda _: True)


def test_try_peek_then_try_recv():
    queue = MessageQueue()
    rx = PeekableReceiver(queue)
    with pytest.raises(QueueEmpty):
        rx.try_peek()
    queue.send(5)
    assert rx.try_peek() == 5
    assert rx.try_recv() == 5
    with pytest.raises(QueueEmpty):
        rx.try_recv()


@pytest.mark.asyncio
async def test_recv_if_match_and_no_match():
    queue = MessageQueue()
    rx = PeekableReceiver(queue)
    queue.send(1)
    queue.send(2)
    with pytest.raises(NoMatch):
        await rx.recv_if(lambda v: v > 1)
    assert await rx.recv_if(lambda v: v == 1) == 1
    assert await rx.recv_if(lambda v: v > 1) == 2


def test_try_recv_if():
    queue = MessageQueue()
    rx = PeekableReceiver(queue)
    with pytest.raises(QueueEmpty):
        rx.try_recv_if(lambda _: True)
    queue.send("keep")
    with pytest.raises(NoMatch):
        rx.try_recv_if(lambda v: v == "other")
    assert rx.try_recv_if(lambda v: v == "keep") == "keep"
    queue.close()
    with pytest.raises(Disconnected):
        rx.try_recv_if(lambda _: True)