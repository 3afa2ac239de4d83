"""Connection, link and server identifiers."""

from __future__ import annotations

import secrets
import weakref
from dataclasses import dataclass
from typing import Callable, Optional

_ID_BITS = 128
_ID_MAX = (1 << _ID_BITS) - 1
_KEY_LEN = 16


def debug_id(value: int) -> str:
    """Short hexadecimal form of an identifier for debugging output."""
    return f"{value:016x}"[:6]


@dataclass(frozen=True, order=True, repr=False)
class _Id128:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError("identifier must be an int")
        if not 0 <= self.value <= _ID_MAX:
            raise ValueError(f"identifier {self.value} is not a 128-bit unsigned integer")


class ConnId(_Id128):
    """Connection identifier."""

    @classmethod
    def generate(cls) -> ConnId:
        """Generates a new random connection id."""
        return cls(secrets.randbits(_ID_BITS))

    def __str__(self) -> str:
        return f"{self.value:016x}"

    def __repr__(self) -> str:
        return debug_id(self.value)


class LinkId(_Id128):
    """Link identifier."""

    @classmethod
    def generate(cls) -> LinkId:
        """Generates a new random link id."""
        return cls(secrets.randbits(_ID_BITS))

    def __str__(self) -> str:
        return f"{self.value:016x}"

    def __repr__(self) -> str:
        return debug_id(self.value)


class ServerId(_Id128):
    """Server identifier; never zero."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.value == 0:
            raise ValueError("server id must not be zero")

    @classmethod
    def generate(cls) -> ServerId:
        """Generates a new random, non-zero server id."""
        return cls(secrets.randbelow(_ID_MAX) + 1)

    def __str__(self) -> str:
        return f"{self.value:016x}"

    def __repr__(self) -> str:
        return debug_id(self.value)


def _key(secret: bytes) -> int:
    if len(secret) < _KEY_LEN:
        raise ValueError(f"shared secret must be at least {_KEY_LEN} bytes")
    return int.from_bytes(secret[:_KEY_LEN], "big")


@dataclass(frozen=True, repr=False)
class EncryptedConnId:
    """A connection id encrypted with the first 16 bytes of a shared secret."""

    value: int

    @classmethod
    def encrypt(cls, conn_id: ConnId, secret: bytes) -> EncryptedConnId:
        return cls(_key(secret) ^ conn_id.value)

    def decrypt(self, secret: bytes) -> ConnId:
        return ConnId(_key(secret) ^ self.value)

    def __repr__(self) -> str:
        return f"*{debug_id(self.value)}*"


class OwnedConnId:
    """A connection id that reports, once, when it is released or garbage collected."""

    def __init__(self, conn_id: ConnId, on_drop: Optional[Callable[[ConnId], object]]) -> None:
        self._conn_id = conn_id
        self._finalizer = (
            weakref.finalize(self, on_drop, conn_id) if on_drop is not None else None
        )

    @classmethod
    def untracked(cls, conn_id: ConnId) -> OwnedConnId:
        """A connection id that reports nothing when dropped."""
        return cls(conn_id, None)

    def get(self) -> ConnId:
        return self._conn_id

    def release(self) -> None:
        """Reports the drop now; later releases and collection do nothing."""
        if self._finalizer is not None:
            self._finalizer()

    def __str__(self) -> str:
        return str(self._conn_id)

    def __repr__(self) -> str:
        return repr(self._conn_id)