"""
cellanim

Binary codecs, editable JSON envelope and cross-format conversion for the
BCCAD (3DS) and BRCAD (Wii) cell animation formats.

Packages:
- formats: BCCAD/BRCAD codecs, format detection, BRCAD labels
- serialization: Versioned envelope, indexization, comment stripping
- conversion: BRCAD <-> BCCAD conversion
- config: Optional INI defaults for the command line tool
- utils: Logging, binary primitives, packed legacy fields

Usage:
    from cellanim import read_bxcad, Envelope, dumps

    with open("agb_tap.bccad", "rb") as f:
        document = read_bxcad(f)

    print(dumps(Envelope.wrap(document)))
"""

from .constants import TOOL_VERSION

__version__ = TOOL_VERSION

# Formats
from .formats import (
    BXCAD,
    BXCADType,
    BCCAD,
    BRCAD,
    identify,
    codec_for,
    read_bxcad,
    apply_labels,
)

# Serialization
from .serialization import Envelope, dumps, loads

# Conversion
from .conversion import bccad_from_brcad, brcad_from_bccad

# Errors
from .errors import CellAnimError

__all__ = [
    '__version__',
    # Formats
    'BXCAD',
    'BXCADType',
    'BCCAD',
    'BRCAD',
    'identify',
    'codec_for',
    'read_bxcad',
    'apply_labels',
    # Serialization
    'Envelope',
    'dumps',
    'loads',
    # Conversion
    'bccad_from_brcad',
    'brcad_from_bccad',
    # Errors
    'CellAnimError',
]
