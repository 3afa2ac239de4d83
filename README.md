# linkagg

Building blocks for combining several network links between two endpoints
into one aggregated connection: the link message format, integrity framing of
byte-stream links, wrapping sequence numbers, identifiers and the errors
reported when a link cannot be added.

The package has no dependencies outside the standard library.

## Installation

```
pip install linkagg
```

To run the test suite:

```
pip install "linkagg[test]"
pytest
```

## Modules

- `linkagg.seq`: `Seq`, an immutable 32-bit sequence number. Adding or
  subtracting an int wraps around; subtracting another `Seq` gives the signed
  distance. Comparison (`<`, `compare`) stays correct across wrap-around as
  long as the numbers in use lie within `Seq.USABLE_INTERVAL` of each other.
  `Seq.ZERO` and `Seq.MINUS_ONE` are provided.
- `linkagg.ids`: `ConnId`, `LinkId` and `ServerId` (128-bit, randomly
  generated with `generate()`; a `ServerId` is never zero), and
  `EncryptedConnId`, a connection id XOR-masked with the first 16 bytes of a
  shared secret (`EncryptedConnId.encrypt(conn_id, secret)` and
  `decrypt(secret)`). `OwnedConnId` wraps a connection id and calls its
  `on_drop` callback once, either on `release()` or when it is garbage
  collected; `OwnedConnId.untracked(conn_id)` reports nothing.
  `debug_id` gives the short hexadecimal form used in `repr`.
- `linkagg.codec`: `IntegrityCodec`, which frames each packet with a 10-byte
  header of length, 16-bit sequence number and CRC32 checksum. `encode(data)`
  returns the framed bytes; `decode(buffer)` removes one packet from a
  `bytearray` or returns `None` if more data is needed; `decode_all(buffer)`
  yields every complete packet. Bad input raises `PacketTooBig`, `SeqSkipped`
  or `DataCorrupted`, all subclasses of `IntegrityError`. The default maximum
  packet size is 8 MiB.
- `linkagg.framing`: `IoTx` and `IoRx` turn an asyncio stream writer and
  reader into a packet sender (`await send(data)`, `await close()`) and a
  packet receiver (`await recv()`, or `async for`), using the integrity codec.
  `recv()` returns `None` at a clean end of stream and raises `EOFError` if a
  partial packet is left over. `TxRxBox` holds a packet sender and receiver,
  `IoBox` a byte reader and writer, and `into_tx_rx` makes either into a
  `TxRxBox`.
- `linkagg.messages`: the link messages `Accepted`, `Refused`, `Ping`, `Pong`,
  `Data`, `Ack`, `Consumed`, `SendFinish`, `ReceiveClose`, `ReceiveFinish`,
  `TestData`, `SetBlock`, `Goodbye` and `Terminate`; `RefusedReason`;
  `encode_msg` and `decode_msg`; async `send_msg(tx, msg)` and `recv_msg(rx)`.
  The reliable messages (`ReliableData`, `ReliableConsumed`,
  `ReliableSendFinish`, `ReliableReceiveClose`, `ReliableReceiveFinish`)
  convert to and from link messages with `to_link_msg` and `from_link_msg`.
  Malformed input raises `ProtocolError`.
- `linkagg.errors`: `AddLinkError` and its subclasses `AddLinkIoError`,
  `ServerIdMismatch`, `AddLinkNotListening`, `ConnectionClosed`,
  `ConnectionRefused` and `LinkRefused`. Only `AddLinkIoError` answers `True`
  to `should_reconnect()`. `add_link_error_from_refused(reason)` maps a
  `RefusedReason` to its error.
- `linkagg.peekable`: `MessageQueue`, an unbounded async queue whose `recv()`
  returns `None` once it is closed and drained, and `PeekableReceiver`, which
  can `peek`/`try_peek` at the next message and take it only if a condition
  holds (`recv_if`, `try_recv_if`), raising `QueueEmpty`, `Disconnected` or
  `NoMatch`.
- `linkagg.thread_bound`: `ThreadBound`, a wrapper whose value can be used
  only from the thread that created it; other threads get `WrongThreadError`.

## Examples

```python
from linkagg.codec import IntegrityCodec

sender = IntegrityCodec()
receiver = IntegrityCodec()

wire = bytearray(sender.encode(b"hello") + sender.encode(b"world"))
print(list(receiver.decode_all(wire)))  # [b'hello', b'world']
```

```python
from linkagg.messages import Data, decode_msg, encode_msg
from linkagg.seq import Seq

msg = Data(Seq(7))
assert decode_msg(encode_msg(msg)) == msg
```

## What it does not do

This package supplies parts, not a running link aggregator. It has no
connection task that schedules data over links, no server or listener that
accepts incoming links, no connector that dials them, and no handles for
controlling or monitoring a connection or link. The handshake messages that
open a link (ids 1 and 2 on the wire) are not encoded; `decode_msg` raises
`ProtocolError` for them.