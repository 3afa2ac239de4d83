"""Integrity codec: length, sequence number and CRC32 framing for byte streams."""

from __future__ import annotations

import struct
import zlib
from typing import Iterator, Optional, Tuple

_HEADER = struct.Struct(">IHI")
HEADER_LEN = _HEADER.size
DEFAULT_MAX_PACKET_SIZE = 8 * 1024 * 1024


class IntegrityError(ValueError):
    """A packet failed integrity checks."""

    default_message = "integrity error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class PacketTooBig(IntegrityError):
    """A packet exceeds the maximum allowed size."""

    default_message = "packet too big"


class SeqSkipped(IntegrityError):
    """A sequence number was skipped or corrupted."""

    default_message = "sequence number skipped"


class DataCorrupted(IntegrityError):
    """Data checksum verification failed."""

    default_message = "data corrupted"


class IntegrityCodec:
    """Frames packets with a header of length, 16-bit sequence number and CRC32 checksum."""

    def __init__(self, max_packet_size: int = DEFAULT_MAX_PACKET_SIZE) -> None:
        self.max_packet_size = max_packet_size
        self._pending: Optional[Tuple[int, int]] = None
        self._decode_seq = 0
        self._encode_seq = 0

    def decode(self, buffer: bytearray) -> Optional[bytes]:
        """Removes and returns one complete packet from ``buffer``, or None if more data is needed."""
        if self._pending is None:
            if len(buffer) < HEADER_LEN:
                return None
            length, seq, checksum = _HEADER.unpack_from(buffer)
            if length > self.max_packet_size:
                raise PacketTooBig()
            if seq != self._decode_seq:
                raise SeqSkipped()
            self._decode_seq = (self._decode_seq + 1) & 0xFFFF
            del buffer[:HEADER_LEN]
            self._pending = (length, checksum)

        length, checksum = self._pending
        if len(buffer) < length:
            return None
        data = bytes(buffer[:length])
        del buffer[:length]
        if zlib.crc32(data) != checksum:
            raise DataCorrupted()
        self._pending = None
        return data

    def decode_all(self, buffer: bytearray) -> Iterator[bytes]:
        """Yields every complete packet in ``buffer``, leaving any partial remainder."""
        while (packet := self.decode(buffer)) is not None:
            yield packet

    def encode(self, data: bytes) -> bytes:
        """Returns the framed form of ``data``."""
        if len(data) > self.max_packet_size:
            raise PacketTooBig()
        header = _HEADER.pack(len(data), self._encode_seq, zlib.crc32(data))
        self._encode_seq = (self._encode_seq + 1) & 0xFFFF
        return header + bytes(data)