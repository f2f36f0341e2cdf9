"""
Base utilities for BXCAD formats.

This module provides what both codecs share:
- BXCADType: tag for the known formats
- BXCAD: the interface every format class implements
- PosInTexture / Color: records used by both formats
- Helpers to convert documents to and from plain editable trees
  (dicts, lists and scalars, ready for json)
"""

import io
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, BinaryIO, Dict, List, Optional, Type

from ..constants import MAGIC_SIZE
from ..errors import EditableFormError
from ..utils.binary import ByteOrder, read_u16, read_u8, write_u16, write_u8


class BXCADType(Enum):
    """Known BXCAD formats."""
    BCCAD = "BCCAD"
    BRCAD = "BRCAD"
    UNKNOWN = "UNKNOWN"


# =========================================================================
# Editable tree helpers
# =========================================================================

INT_RANGES = {
    'u8': (0, 0xFF),
    'u16': (0, 0xFFFF),
    'u32': (0, 0xFFFFFFFF),
    'i16': (-0x8000, 0x7FFF),
    'i32': (-0x80000000, 0x7FFFFFFF),
}


def to_editable(value: Any) -> Any:
    """Convert a document value into plain dicts, lists and scalars."""
    if hasattr(value, 'to_editable'):
        return value.to_editable()
    if is_dataclass(value):
        return editable_fields(value)
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, list):
        return [to_editable(v) for v in value]
    return value


def editable_fields(obj: Any) -> Dict[str, Any]:
    """Convert every dataclass field of `obj`, keyed by field name."""
    return {f.name: to_editable(getattr(obj, f.name)) for f in fields(obj)}


def require(tree: Any, key: str, *aliases: str) -> Any:
    """
    Fetch a field from an editable tree.

    Args:
        tree: Mapping to read from
        key: Current field name
        aliases: Older names the field was written under

    Raises:
        EditableFormError: if the tree is not a mapping or the field is missing
    """
    if not isinstance(tree, dict):
        raise EditableFormError(f"Expected an object containing '{key}', got {type(tree).__name__}")
    for name in (key,) + aliases:
        if name in tree:
            return tree[name]
    raise EditableFormError(f"Missing field '{key}'", {"available": sorted(tree)})


def int_field(tree: Any, key: str, kind: str, *aliases: str) -> int:
    value = require(tree, key, *aliases)
    low, high = INT_RANGES[kind]
    if not isinstance(value, int) or isinstance(value, bool):
        raise EditableFormError(f"Field '{key}' must be an integer, got {value!r}")
    if not low <= value <= high:
        raise EditableFormError(f"Field '{key}' = {value} is out of range for {kind}")
    return value


def float_field(tree: Any, key: str) -> float:
    value = require(tree, key)
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise EditableFormError(f"Field '{key}' must be a number, got {value!r}")
    return float(value)


def bool_field(tree: Any, key: str) -> bool:
    value = require(tree, key)
    if not isinstance(value, bool):
        raise EditableFormError(f"Field '{key}' must be true or false, got {value!r}")
    return value


def bytes_field(tree: Any, key: str, size: int, *aliases: str) -> bytes:
    value = require(tree, key, *aliases)
    if not isinstance(value, list) or len(value) != size:
        raise EditableFormError(f"Field '{key}' must be a list of {size} bytes, got {value!r}")
    try:
        return bytes(value)
    except (TypeError, ValueError) as e:
        raise EditableFormError(f"Field '{key}' must contain values 0-255: {e}") from e


def list_field(tree: Any, key: str) -> List[Any]:
    value = require(tree, key)
    if not isinstance(value, list):
        raise EditableFormError(f"Field '{key}' must be a list, got {type(value).__name__}")
    return value


def optional_field(tree: Any, key: str) -> Any:
    if not isinstance(tree, dict):
        raise EditableFormError(f"Expected an object containing '{key}', got {type(tree).__name__}")
    return tree.get(key)


# =========================================================================
# Shared records
# =========================================================================

@dataclass
class PosInTexture:
    """Bounds of a part inside the texture atlas, in pixels."""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def read(cls, stream: BinaryIO, order: ByteOrder) -> 'PosInTexture':
        return cls(
            x=read_u16(stream, order),
            y=read_u16(stream, order),
            width=read_u16(stream, order),
            height=read_u16(stream, order),
        )

    def write(self, stream: BinaryIO, order: ByteOrder):
        write_u16(stream, self.x, order)
        write_u16(stream, self.y, order)
        write_u16(stream, self.width, order)
        write_u16(stream, self.height, order)

    @classmethod
    def from_editable(cls, tree: Any) -> 'PosInTexture':
        return cls(
            x=int_field(tree, 'x', 'u16'),
            y=int_field(tree, 'y', 'u16'),
            width=int_field(tree, 'width', 'u16'),
            height=int_field(tree, 'height', 'u16'),
        )


@dataclass
class Color:
    """8-bit RGB color."""
    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def white(cls) -> 'Color':
        return cls(255, 255, 255)

    @classmethod
    def black(cls) -> 'Color':
        return cls(0, 0, 0)

    @classmethod
    def read(cls, stream: BinaryIO) -> 'Color':
        return cls(red=read_u8(stream), green=read_u8(stream), blue=read_u8(stream))

    def write(self, stream: BinaryIO):
        write_u8(stream, self.red)
        write_u8(stream, self.green)
        write_u8(stream, self.blue)

    @classmethod
    def from_editable(cls, tree: Any) -> 'Color':
        return cls(
            red=int_field(tree, 'red', 'u8'),
            green=int_field(tree, 'green', 'u8'),
            blue=int_field(tree, 'blue', 'u8'),
        )


# =========================================================================
# Format interface
# =========================================================================

class BXCAD:
    """
    Interface shared by the BXCAD formats.

    Subclasses set the class attributes and implement from_binary,
    to_binary, from_editable and to_editable.
    """

    BYTE_ORDER: ByteOrder
    TIMESTAMP: int
    BXCAD_TYPE: BXCADType
    SPRITE_TYPE: Type

    sprites: list

    @classmethod
    def from_binary(cls, stream: BinaryIO) -> 'BXCAD':
        raise NotImplementedError

    def to_binary(self, stream: BinaryIO):
        raise NotImplementedError

    @classmethod
    def from_editable(cls, tree: Any) -> 'BXCAD':
        raise NotImplementedError

    def to_editable(self) -> Dict[str, Any]:
        return editable_fields(self)

    @classmethod
    def is_format(cls, stream: BinaryIO) -> bool:
        """
        Check the revision timestamp at the current position.

        The stream position is restored whether or not it matches.
        """
        start = stream.tell()
        try:
            data = stream.read(MAGIC_SIZE)
        finally:
            stream.seek(start)
        if len(data) != MAGIC_SIZE:
            return False
        return int.from_bytes(data, 'little' if cls.BYTE_ORDER is ByteOrder.LITTLE else 'big') == cls.TIMESTAMP

    @classmethod
    def from_bytes(cls, data: bytes) -> 'BXCAD':
        return cls.from_binary(io.BytesIO(data))

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.to_binary(buffer)
        return buffer.getvalue()

    @classmethod
    def _timestamp_from_file(cls, timestamp: int) -> Optional[int]:
        return None if timestamp == cls.TIMESTAMP else timestamp

    def _timestamp_for_file(self) -> int:
        timestamp = getattr(self, 'timestamp', None)
        return self.TIMESTAMP if timestamp is None else timestamp

    @classmethod
    def _timestamp_from_editable(cls, tree: Any) -> Optional[int]:
        if optional_field(tree, 'timestamp') is None:
            return None
        return cls._timestamp_from_file(int_field(tree, 'timestamp', 'u32'))
