"""
BXCAD Formats

This package provides the binary codecs for the two cell animation formats:

- base: Shared records and the BXCAD interface
- bccad: BCCAD (little-endian, 3DS)
- brcad: BRCAD (big-endian, Wii)
- labels: Animation names for BRCAD from #define headers
- detect: Format detection by revision timestamp

Usage:
    from cellanim.formats import BCCAD, identify, read_bxcad

    with open("agb_tap.bccad", "rb") as f:
        bccad = BCCAD.from_binary(f)

    bccad.animations = []
    with open("agb_tap.out.bccad", "wb") as f:
        bccad.to_binary(f)
"""

# Base
from .base import (
    BXCAD,
    BXCADType,
    PosInTexture,
    Color,
)

# Formats
from .bccad import BCCAD
from .brcad import BRCAD

# Labels
from .labels import apply_labels

# Detection
from .detect import (
    KNOWN_FORMATS,
    identify,
    codec_for,
    read_bxcad,
)

__all__ = [
    # Base
    'BXCAD',
    'BXCADType',
    'PosInTexture',
    'Color',
    # Formats
    'BCCAD',
    'BRCAD',
    # Labels
    'apply_labels',
    # Detection
    'KNOWN_FORMATS',
    'identify',
    'codec_for',
    'read_bxcad',
]
