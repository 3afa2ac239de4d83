"""Wrapping 32-bit sequence numbers."""

from __future__ import annotations

from functools import total_ordering
from typing import ClassVar

_MODULUS = 1 << 32
_MASK = _MODULUS - 1
_ONE_QUARTER = _MASK // 4
_THREE_QUARTERS = _ONE_QUARTER * 3
_MIN_OFFSET = -(1 << 31)


def _offset(value: object) -> int:
    """Validates an integer offset that may be added to or subtracted from a sequence number."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"sequence offset must be an int, not {type(value).__name__}")
    if not _MIN_OFFSET <= value <= _MASK:
        raise OverflowError(f"sequence offset {value} out of range")
    return value


@total_ordering
class Seq:
    """A 32-bit sequence number that wraps around.

    The difference between the lowest and highest sequence number in use
    must not exceed ``USABLE_INTERVAL``, otherwise comparison gives wrong results.
    """

    __slots__ = ("_value",)

    USABLE_INTERVAL: ClassVar[int] = _ONE_QUARTER
    ZERO: ClassVar[Seq]
    MINUS_ONE: ClassVar[Seq]

    def __init__(self, value: int = 0) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"sequence value must be an int, not {type(value).__name__}")
        if not 0 <= value <= _MASK:
            raise ValueError(f"sequence value {value} is not a 32-bit unsigned integer")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Seq is immutable")

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Seq({self._value})"

    def __add__(self, other: int) -> Seq:
        if isinstance(other, Seq):
            return NotImplemented
        return Seq((self._value + _offset(other)) & _MASK)

    def __sub__(self, other: Seq | int) -> Seq | int:
        """Subtracting a Seq gives the signed distance; subtracting an int gives a Seq."""
        if isinstance(other, Seq):
            diff = (self._value - other._value) & _MASK
            return diff - _MODULUS if diff >= (1 << 31) else diff
        return Seq((self._value - _offset(other)) & _MASK)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Seq):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((Seq, self._value))

    def compare(self, other: Seq) -> int:
        """Returns -1, 0 or 1 as this sequence number is before, equal to or after ``other``."""
        a, b = self._value, other._value
        if a < _ONE_QUARTER and b >= _THREE_QUARTERS:
            return 1
        if b < _ONE_QUARTER and a >= _THREE_QUARTERS:
            return -1
        return (a > b) - (a < b)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Seq):
            return NotImplemented
        return self.compare(other) < 0


Seq.ZERO = Seq(0)
Seq.MINUS_ONE = Seq(_MASK)