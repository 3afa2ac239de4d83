"""Packet links over byte streams, and boxes holding either kind of link."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from .codec import IntegrityCodec

_READ_CHUNK = 64 * 1024


class IoTx:
    """Sends packets over a byte-stream writer, framed by the integrity codec.

    The writer needs ``write(data)``, an async ``drain()``, ``close()`` and
    an async ``wait_closed()``, as ``asyncio.StreamWriter`` provides.
    """

    def __init__(self, writer: Any, codec: Optional[IntegrityCodec] = None) -> None:
        self.writer = writer
        self.codec = codec if codec is not None else IntegrityCodec()

    async def send(self, data: bytes) -> None:
        """Frames ``data`` and writes it, waiting until the writer has drained."""
        self.writer.write(self.codec.encode(data))
        await self.writer.drain()

    async def close(self) -> None:
        """Closes the underlying writer."""
        self.writer.close()
        await self.writer.wait_closed()


class IoRx:
    """Receives packets from a byte-stream reader, checked by the integrity codec.

    The reader needs an async ``read(n)`` returning ``b""`` at end of stream,
    as ``asyncio.StreamReader`` provides.
    """

    def __init__(self, reader: Any, codec: Optional[IntegrityCodec] = None) -> None:
        self.reader = reader
        self.codec = codec if codec is not None else IntegrityCodec()
        self._buffer = bytearray()

    async def recv(self) -> Optional[bytes]:
        """Returns the next packet, or None at a clean end of stream."""
        while True:
            packet = self.codec.decode(self._buffer)
            if packet is not None:
                return packet
            chunk = await self.reader.read(_READ_CHUNK)
            if not chunk:
                if self._buffer:
                    raise EOFError("bytes remaining on stream")
                return None
            self._buffer.extend(chunk)

    def __aiter__(self) -> IoRx:
        return self

    async def __anext__(self) -> bytes:
        packet = await self.recv()
        if packet is None:
            raise StopAsyncIteration
        return packet


@dataclass
class TxRxBox:
    """A packet-based link: a sender with async ``send`` and an async iterator of packets."""

    tx: Any
    rx: Any

    def into_split(self) -> Tuple[Any, Any]:
        """Returns the sender and the receiver."""
        return self.tx, self.rx

    async def send(self, data: bytes) -> None:
        await self.tx.send(data)

    def __aiter__(self) -> TxRxBox:
        return self

    async def __anext__(self) -> bytes:
        return await self.rx.__anext__()


@dataclass
class IoBox:
    """A stream-based link: a byte reader and a byte writer."""

    read: Any
    write: Any

    def into_split(self) -> Tuple[Any, Any]:
        """Returns the reader and the writer."""
        return self.read, self.write


StreamBox = Union[TxRxBox, IoBox]


def into_tx_rx(stream: StreamBox) -> TxRxBox:
    """Makes a link packet-based; a stream-based link is wrapped in the integrity codec."""
    if isinstance(stream, TxRxBox):
        return stream
    if isinstance(stream, IoBox):
        return TxRxBox(IoTx(stream.write), IoRx(stream.read))
    raise TypeError(f"not a stream box: {stream!r}")