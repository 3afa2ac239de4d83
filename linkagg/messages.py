"""Link protocol messages and their wire encoding."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .seq import Seq

PROTOCOL_VERSION = 4
"""Protocol version spoken by this implementation."""

MAGIC = b"LIAG\0"
"""Magic identifier that opens handshake messages."""

_U8 = struct.Struct(">B")
_U32 = struct.Struct(">I")
_U32_PAIR = struct.Struct(">II")
_U32_MAX = (1 << 32) - 1


class ProtocolError(ValueError):
    """A message violated the link protocol."""


class _MsgId(enum.IntEnum):
    WELCOME = 1
    CONNECT = 2
    ACCEPTED = 3
    REFUSED = 4
    PING = 5
    PONG = 6
    DATA = 7
    ACK = 8
    CONSUMED = 9
    SEND_FINISH = 10
    RECEIVE_CLOSE = 11
    RECEIVE_FINISH = 12
    TEST_DATA = 13
    SET_BLOCK = 14
    GOODBYE = 15
    TERMINATE = 16


class RefusedReason(enum.IntEnum):
    """Reason for refusal of an incoming link."""

    CLOSED = 1
    NOT_LISTENING = 2
    CONNECTION_REFUSED = 3
    LINK_REFUSED = 4

    @classmethod
    def from_id(cls, value: int) -> RefusedReason:
        """Returns the reason with wire id ``value``."""
        try:
            return cls(value)
        except ValueError:
            raise ProtocolError(f"unknown refused reason {value}") from None


@dataclass(frozen=True)
class Accepted:
    """Connection accepted by server."""


@dataclass(frozen=True)
class Refused:
    """Connection refused by server."""

    reason: RefusedReason


@dataclass(frozen=True)
class Ping:
    """Echo request."""


@dataclass(frozen=True)
class Pong:
    """Echo reply."""


@dataclass(frozen=True)
class Data:
    """Data header; one data packet follows it."""

    seq: Seq


@dataclass(frozen=True)
class Ack:
    """Acknowledges data received over this link."""

    received: Seq


@dataclass(frozen=True)
class Consumed:
    """Received data has been consumed."""

    seq: Seq
    consumed: int

    def __post_init__(self) -> None:
        if not 0 <= self.consumed <= _U32_MAX:
            raise ValueError(f"consumed byte count {self.consumed} out of range")


@dataclass(frozen=True)
class SendFinish:
    """No more data will be sent."""

    seq: Seq


@dataclass(frozen=True)
class ReceiveClose:
    """No more data is wanted, but data already sent will be processed."""

    seq: Seq


@dataclass(frozen=True)
class ReceiveFinish:
    """No more received data will be processed."""

    seq: Seq


@dataclass(frozen=True)
class TestData:
    """Test data of the given size used to check a link."""

    __test__ = False

    size: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("test data size must not be negative")


@dataclass(frozen=True)
class SetBlock:
    """Sets whether the link is blocked."""

    blocked: bool


@dataclass(frozen=True)
class Goodbye:
    """No more messages will be sent; receiving continues until Goodbye arrives."""


@dataclass(frozen=True)
class Terminate:
    """Forcefully terminates the connection."""


LinkMsg = Union[
    Accepted,
    Refused,
    Ping,
    Pong,
    Data,
    Ack,
    Consumed,
    SendFinish,
    ReceiveClose,
    ReceiveFinish,
    TestData,
    SetBlock,
    Goodbye,
    Terminate,
]


def _with_seq(msg_id: _MsgId, seq: Seq) -> bytes:
    return _U8.pack(msg_id) + _U32.pack(int(seq))


def encode_msg(msg: LinkMsg) -> bytes:
    """Returns the wire form of ``msg``."""
    match msg:
        case Accepted():
            return _U8.pack(_MsgId.ACCEPTED)
        case Refused(reason):
            return _U8.pack(_MsgId.REFUSED) + _U8.pack(RefusedReason(reason))
        case Ping():
            return _U8.pack(_MsgId.PING)
        case Pong():
            return _U8.pack(_MsgId.PONG)
        case Data(seq):
            return _with_seq(_MsgId.DATA, seq)
        case Ack(received):
            return _with_seq(_MsgId.ACK, received)
        case Consumed(seq, consumed):
            return _U8.pack(_MsgId.CONSUMED) + _U32_PAIR.pack(int(seq), consumed)
        case SendFinish(seq):
            return _with_seq(_MsgId.SEND_FINISH, seq)
        case ReceiveClose(seq):
            return _with_seq(_MsgId.RECEIVE_CLOSE, seq)
        case ReceiveFinish(seq):
            return _with_seq(_MsgId.RECEIVE_FINISH, seq)
        case TestData(size):
            return _U8.pack(_MsgId.TEST_DATA) + bytes(n & 0xFF for n in range(size))
        case SetBlock(blocked):
            return _U8.pack(_MsgId.SET_BLOCK) + _U8.pack(1 if blocked else 0)
        case Goodbye():
            return _U8.pack(_MsgId.GOODBYE)
        case Terminate():
            return _U8.pack(_MsgId.TERMINATE)
    raise TypeError(f"not a link message: {msg!r}")


def _seq(body: bytes) -> Seq:
    return Seq(_U32.unpack_from(body)[0])


def decode_msg(data: bytes) -> LinkMsg:
    """Parses one message from its wire form."""
    data = bytes(data)
    if not data:
        raise ProtocolError("message too short")
    msg_id, body = data[0], data[1:]
    try:
        match msg_id:
            case _MsgId.ACCEPTED:
                return Accepted()
            case _MsgId.REFUSED:
                return Refused(RefusedReason.from_id(_U8.unpack_from(body)[0]))
            case _MsgId.PING:
                return Ping()
            case _MsgId.PONG:
                return Pong()
            case _MsgId.DATA:
                return Data(_seq(body))
            case _MsgId.ACK:
                return Ack(_seq(body))
            case _MsgId.CONSUMED:
                seq, consumed = _U32_PAIR.unpack_from(body)
                return Consumed(Seq(seq), consumed)
            case _MsgId.SEND_FINISH:
                return SendFinish(_seq(body))
            case _MsgId.RECEIVE_CLOSE:
                return ReceiveClose(_seq(body))
            case _MsgId.RECEIVE_FINISH:
                return ReceiveFinish(_seq(body))
            case _MsgId.TEST_DATA:
                return TestData(len(body))
            case _MsgId.SET_BLOCK:
                return SetBlock(_U8.unpack_from(body)[0] != 0)
            case _MsgId.GOODBYE:
                return Goodbye()
            case _MsgId.TERMINATE:
                return Terminate()
            case _MsgId.WELCOME | _MsgId.CONNECT:
                raise ProtocolError(f"unsupported message id {msg_id}")
    except struct.error:
        raise ProtocolError("message too short") from None
    raise ProtocolError(f"invalid message id {msg_id}")


async def send_msg(tx, msg: LinkMsg) -> None:
    """Encodes ``msg`` and sends it over ``tx``, an object with an async ``send``."""
    await tx.send(encode_msg(msg))


async def recv_msg(rx) -> LinkMsg:
    """Receives and parses the next packet from the async iterator ``rx``."""
    try:
        packet = await rx.__anext__()
    except StopAsyncIteration:
        raise EOFError("message too short") from None
    return decode_msg(packet)


@dataclass(frozen=True)
class ReliableData:
    """Data that must be acknowledged and resent if lost."""

    data: bytes

    def __repr__(self) -> str:
        return f"Data({len(self.data)} bytes)"


@dataclass(frozen=True)
class ReliableConsumed:
    """Received data was consumed."""

    consumed: int

    def __repr__(self) -> str:
        return f"Consumed({self.consumed} bytes)"


@dataclass(frozen=True)
class ReliableSendFinish:
    """No more data will be sent."""

    def __repr__(self) -> str:
        return "SendFinish"


@dataclass(frozen=True)
class ReliableReceiveClose:
    """No more data is wanted, but data already sent will be processed."""

    def __repr__(self) -> str:
        return "ReceiveClose"


@dataclass(frozen=True)
class ReliableReceiveFinish:
    """No more received data will be processed."""

    def __repr__(self) -> str:
        return "ReceiveFinish"


ReliableMsg = Union[
    ReliableData,
    ReliableConsumed,
    ReliableSendFinish,
    ReliableReceiveClose,
    ReliableReceiveFinish,
]


def to_link_msg(reliable: ReliableMsg, seq: Seq) -> Tuple[LinkMsg, Optional[bytes]]:
    """Returns the link message carrying ``reliable`` and the data packet that follows it."""
    match reliable:
        case ReliableData(data):
            return Data(seq), data
        case ReliableConsumed(consumed):
            return Consumed(seq, consumed), None
        case ReliableSendFinish():
            return SendFinish(seq), None
        case ReliableReceiveClose():
            return ReceiveClose(seq), None
        case ReliableReceiveFinish():
            return ReceiveFinish(seq), None
    raise TypeError(f"not a reliable message: {reliable!r}")


def from_link_msg(msg: LinkMsg, data: Optional[bytes]) -> Tuple[ReliableMsg, Seq]:
    """Returns the reliable message carried by ``msg`` and its sequence number."""
    match msg:
        case Data(seq):
            if data is None:
                raise ValueError("data message requires a data packet")
            return ReliableData(data), seq
        case Consumed(seq, consumed):
            return ReliableConsumed(consumed), seq
        case SendFinish(seq):
            return ReliableSendFinish(), seq
        case ReceiveClose(seq):
            return ReliableReceiveClose(), seq
        case ReceiveFinish(seq):
            return ReliableReceiveFinish(), seq
    raise ValueError("not a reliable link message")