"""
Format Detection

Identifies which BXCAD format a stream holds by its leading revision
timestamp. Formats are checked in a fixed order; checking never moves the
stream position.
"""

from typing import BinaryIO, Tuple, Type

from .base import BXCAD, BXCADType
from .bccad import BCCAD
from .brcad import BRCAD
from ..errors import NotBXCADError

# Detection order: first match wins
KNOWN_FORMATS: Tuple[Type[BXCAD], ...] = (BCCAD, BRCAD)


def identify(stream: BinaryIO) -> BXCADType:
    """
    Detect the format of a seekable binary stream.

    Returns:
        The matching BXCADType, or BXCADType.UNKNOWN
    """
    for codec in KNOWN_FORMATS:
        if codec.is_format(stream):
            return codec.BXCAD_TYPE
    return BXCADType.UNKNOWN


def codec_for(bxcad_type: BXCADType) -> Type[BXCAD]:
    """
    Get the format class for a BXCADType.

    Raises:
        NotBXCADError: for BXCADType.UNKNOWN
    """
    for codec in KNOWN_FORMATS:
        if codec.BXCAD_TYPE is bxcad_type:
            return codec
    raise NotBXCADError("File given is not a known BXCAD file", {"type": bxcad_type.value})


def read_bxcad(stream: BinaryIO) -> BXCAD:
    """
    Detect the format of a stream and decode it.

    Raises:
        NotBXCADError: if no known format matches
    """
    return codec_for(identify(stream)).from_binary(stream)
