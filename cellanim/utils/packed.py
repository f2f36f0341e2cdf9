"""
Packed Legacy Fields

Several BRCAD fields were first mapped as plain 32-bit integers and later
turned out to hold smaller, independent values. Each packing scheme gets a
small value type with explicit pack/unpack maths:

- PackedXY: two signed 16-bit values (X in the upper half, Y in the lower)
- HighByteFlag: a 0/1 flag in the most significant byte
- HighHalfSelect: a 16-bit selector in the upper half

The binary side is always the raw 32-bit word in the format's byte order.
The editable side accepts both the legacy raw-integer form and the newer
logical form; which one was given is decided by type and magnitude.
"""

import struct
from dataclasses import dataclass
from typing import Any, List, Union

from .binary import ByteOrder
from .logging import logWarning
from ..errors import EditableFormError, FieldRangeError

U16_MASK = 0xFFFF
U32_MASK = 0xFFFFFFFF
I16_MIN, I16_MAX = -0x8000, 0x7FFF


def _to_i16(value: int) -> int:
    value &= U16_MASK
    return value - 0x10000 if value > I16_MAX else value


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid legacy word
    return isinstance(value, int) and not isinstance(value, bool)


def _legacy_word(value: int, expected: str) -> int:
    """Accept a legacy u32 (or its i32 reading) and return the unsigned word."""
    if not -0x80000000 <= value <= U32_MASK:
        raise EditableFormError(f"Expected {expected}, got out of range integer {value}")
    return value & U32_MASK


@dataclass
class PackedXY:
    """Two independent int16 values sharing one 32-bit word."""
    x: int = 0
    y: int = 0

    def pack(self) -> int:
        for name, value in (("x", self.x), ("y", self.y)):
            if not I16_MIN <= value <= I16_MAX:
                raise FieldRangeError(f"Position {name}={value} does not fit a signed 16-bit value")
        return ((self.x & U16_MASK) << 16) | (self.y & U16_MASK)

    @classmethod
    def unpack(cls, raw: int) -> 'PackedXY':
        raw &= U32_MASK
        return cls(x=_to_i16(raw >> 16), y=_to_i16(raw))

    def to_bytes(self, order: ByteOrder) -> bytes:
        return struct.pack(order.value + 'I', self.pack())

    @classmethod
    def from_bytes(cls, data: bytes, order: ByteOrder) -> 'PackedXY':
        return cls.unpack(struct.unpack(order.value + 'I', data)[0])

    @classmethod
    def from_editable(cls, value: Any) -> 'PackedXY':
        """Accept `[x, y]` or a legacy single 32-bit integer."""
        expected = "a sequence of two 16-bit signed integers or a 32-bit integer"
        if _is_int(value):
            return cls.unpack(_legacy_word(value, expected))
        if isinstance(value, (list, tuple)):
            if len(value) != 2 or not all(_is_int(v) for v in value):
                raise EditableFormError(f"Expected {expected}, got {value!r}")
            x, y = value
            if not (I16_MIN <= x <= I16_MAX and I16_MIN <= y <= I16_MAX):
                raise EditableFormError(f"Position {value!r} does not fit signed 16-bit values")
            return cls(x=x, y=y)
        raise EditableFormError(f"Expected {expected}, got {value!r}")

    def to_editable(self) -> List[int]:
        return [self.x, self.y]


@dataclass
class HighByteFlag:
    """A boolean stored in the most significant byte of a 32-bit word."""
    raw: int = 0

    @property
    def enabled(self) -> bool:
        return (self.raw >> 24) & 0xFF != 0

    @enabled.setter
    def enabled(self, value: bool):
        self.raw = (self.raw & 0x00FFFFFF) | ((1 if value else 0) << 24)

    @classmethod
    def from_flag(cls, flag: bool) -> 'HighByteFlag':
        return cls(raw=(1 << 24) if flag else 0)

    @classmethod
    def from_editable(cls, value: Any) -> 'HighByteFlag':
        """Accept a boolean or a legacy raw 32-bit integer."""
        if isinstance(value, bool):
            return cls.from_flag(value)
        if _is_int(value):
            return cls(raw=_legacy_word(value, "a boolean or 32-bit integer"))
        raise EditableFormError(f"Expected a boolean or 32-bit integer, got {value!r}")

    def to_editable(self) -> Union[bool, int]:
        # Reserved bits survive only in the raw integer form
        if self.raw & 0x00FFFFFF == 0 and self.raw >> 24 in (0, 1):
            return self.enabled
        return self.raw


@dataclass
class HighHalfSelect:
    """A 16-bit selector stored in the upper half of a 32-bit word."""
    raw: int = 0

    @property
    def variation(self) -> int:
        return (self.raw >> 16) & U16_MASK

    @variation.setter
    def variation(self, value: int):
        if not 0 <= value <= U16_MASK:
            raise FieldRangeError(f"Variation {value} does not fit an unsigned 16-bit value")
        self.raw = (value << 16) | (self.raw & U16_MASK)

    @classmethod
    def from_variation(cls, variation: int) -> 'HighHalfSelect':
        select = cls()
        select.variation = variation
        return select

    @classmethod
    def from_editable(cls, value: Any) -> 'HighHalfSelect':
        """
        Accept a variation number or a legacy raw 32-bit word.

        Values that need the upper half can only be raw words; anything in
        16-bit range is a variation number.
        """
        if not _is_int(value):
            raise EditableFormError(f"Expected an integer, got {value!r}")
        if 0 <= value <= U16_MASK:
            return cls.from_variation(value)
        return cls(raw=_legacy_word(value, "an integer"))

    def to_editable(self) -> int:
        if self.raw & U16_MASK == 0:
            return self.variation
        if self.raw <= U16_MASK:
            logWarning(f"Variation word 0x{self.raw:08X} will be read back as variation {self.raw}")
        return self.raw
