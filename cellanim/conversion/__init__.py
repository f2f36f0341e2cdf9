"""
Conversion Package

Converts documents between the BRCAD and BCCAD formats.
"""

from .converter import bccad_from_brcad, brcad_from_bccad, remap_positions
