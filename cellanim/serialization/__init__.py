"""
Serialization Package

Handles the editable (JSON) form of BXCAD documents.

- envelope: Versioned, format-tagged wrapper and JSON helpers
- indexize: Sparse index -> sprite mapping for hand editing
- comments: Comment stripping for hand-edited JSON
"""

from .envelope import Envelope, parse_version, dumps, loads
from .indexize import to_indexized, from_indexized, parse_index_keys
from .comments import strip_comments
