"""
Binary Stream Utilities

Primitive readers and writers shared by the BXCAD codecs.

All multi-byte values are read and written in an explicitly passed byte
order: BCCAD is little-endian throughout, BRCAD is big-endian throughout.
Every read consumes exactly its declared width; a short read raises
TruncatedStreamError instead of zero-filling.
"""

import struct
from enum import Enum
from typing import BinaryIO

from ..constants import STRING_ALIGNMENT, MAX_STRING_LENGTH
from ..errors import TruncatedStreamError, StringEncodingError, FieldRangeError


class ByteOrder(Enum):
    """Byte order of a binary format, valued by its struct prefix."""
    LITTLE = '<'
    BIG = '>'


def read_fixed_bytes(stream: BinaryIO, size: int) -> bytes:
    """
    Read exactly `size` bytes from a stream.

    Raises:
        TruncatedStreamError: if the stream ends early
    """
    data = stream.read(size)
    if len(data) != size:
        raise TruncatedStreamError(
            f"Unexpected end of stream: wanted {size} bytes, got {len(data)}",
            {"wanted": size, "got": len(data)},
        )
    return data


def write_fixed_bytes(stream: BinaryIO, data: bytes, size: int):
    """Write a fixed-size byte array, which must be exactly `size` bytes long."""
    if len(data) != size:
        raise FieldRangeError(
            f"Expected {size} bytes, got {len(data)}",
            {"wanted": size, "got": len(data)},
        )
    stream.write(bytes(data))


def _read(stream: BinaryIO, fmt: str, order: ByteOrder):
    fmt = order.value + fmt
    return struct.unpack(fmt, read_fixed_bytes(stream, struct.calcsize(fmt)))[0]


def _write(stream: BinaryIO, fmt: str, value, order: ByteOrder):
    try:
        stream.write(struct.pack(order.value + fmt, value))
    except struct.error as e:
        raise FieldRangeError(f"Cannot write {value!r} as '{fmt}': {e}",
                              {"value": value, "format": fmt}) from e


def read_u8(stream: BinaryIO, order: ByteOrder = ByteOrder.LITTLE) -> int:
    return _read(stream, 'B', order)


def read_u16(stream: BinaryIO, order: ByteOrder) -> int:
    return _read(stream, 'H', order)


def read_u32(stream: BinaryIO, order: ByteOrder) -> int:
    return _read(stream, 'I', order)


def read_i16(stream: BinaryIO, order: ByteOrder) -> int:
    return _read(stream, 'h', order)


def read_i32(stream: BinaryIO, order: ByteOrder) -> int:
    return _read(stream, 'i', order)


def read_f32(stream: BinaryIO, order: ByteOrder) -> float:
    return _read(stream, 'f', order)


def read_bool(stream: BinaryIO, order: ByteOrder = ByteOrder.LITTLE) -> bool:
    """Read a one-byte boolean (any non-zero byte is True)."""
    return read_u8(stream, order) != 0


def write_u8(stream: BinaryIO, value: int, order: ByteOrder = ByteOrder.LITTLE):
    _write(stream, 'B', value, order)


def write_u16(stream: BinaryIO, value: int, order: ByteOrder):
    _write(stream, 'H', value, order)


def write_u32(stream: BinaryIO, value: int, order: ByteOrder):
    _write(stream, 'I', value, order)


def write_i16(stream: BinaryIO, value: int, order: ByteOrder):
    _write(stream, 'h', value, order)


def write_i32(stream: BinaryIO, value: int, order: ByteOrder):
    _write(stream, 'i', value, order)


def write_f32(stream: BinaryIO, value: float, order: ByteOrder):
    _write(stream, 'f', value, order)


def write_bool(stream: BinaryIO, value: bool, order: ByteOrder = ByteOrder.LITTLE):
    write_u8(stream, 1 if value else 0, order)


def padding_for(length: int) -> int:
    """Number of zero bytes that follow a padded string of `length` bytes."""
    return (STRING_ALIGNMENT - ((length + 1) % STRING_ALIGNMENT)) % STRING_ALIGNMENT


def read_padded_string(stream: BinaryIO) -> str:
    """
    Read a variable length padded string.

    Format:
    - u8 length (n)
    - n bytes of UTF-8 text
    - zero padding so the whole field is a multiple of 4 bytes

    Raises:
        StringEncodingError: if the text is not valid UTF-8
        TruncatedStreamError: if the stream ends early
    """
    length = read_u8(stream)
    raw = read_fixed_bytes(stream, length)
    read_fixed_bytes(stream, padding_for(length))
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise StringEncodingError(f"Error when parsing string: {e}", {"raw": raw}) from e


def write_padded_string(stream: BinaryIO, text: str):
    """Write a variable length padded string (see read_padded_string)."""
    raw = text.encode('utf-8')
    if len(raw) > MAX_STRING_LENGTH:
        raise StringEncodingError(
            f"String is {len(raw)} bytes long, maximum is {MAX_STRING_LENGTH}: {text[:32]!r}...",
            {"length": len(raw)},
        )
    write_u8(stream, len(raw))
    stream.write(raw)
    stream.write(bytes(padding_for(len(raw))))
