"""
Constants used across the cellanim modules.

Consolidates magic numbers and shared values to improve code readability
and maintainability.
"""

# Tool version written into every envelope
TOOL_VERSION = "1.1.0"

# Envelopes produced before this version use an incompatible tree layout
OLDEST_SUPPORTED_VERSION = "1.0.0"

# Known format revisions (YYYYMMDD, decimal), stored in the first 4 bytes
BCCAD_TIMESTAMP = 20131007  # Oct 7 2013, little-endian
BRCAD_TIMESTAMP = 20100312  # Mar 12 2010, big-endian

# Size of the leading revision field read by format detection
MAGIC_SIZE = 4

# Padded strings are aligned to this many bytes (length byte included)
STRING_ALIGNMENT = 4
MAX_STRING_LENGTH = 0xFF

# Atlas origin used when re-centering positions between formats
PIVOT_X = 512
PIVOT_Y = 512

# Legacy encoding used by BRCAD label files
LABELS_ENCODING = "cp932"
