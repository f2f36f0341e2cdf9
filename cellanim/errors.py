"""
Exception hierarchy for cellanim.

Every failure surfaced by the codecs, the envelope and the converter is a
subclass of CellAnimError. Each one also derives from the closest builtin
exception so callers that only know about ValueError/EOFError still work.
"""

from typing import Any, Dict, Optional


class CellAnimError(Exception):
    """Base exception for cellanim errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


# I/O

class TruncatedStreamError(CellAnimError, EOFError):
    """A read hit the end of the stream before its declared width."""
    pass


# Encoding

class StringEncodingError(CellAnimError, ValueError):
    """A padded string is not valid UTF-8 or is too long to encode."""
    pass


class LabelsEncodingError(CellAnimError, ValueError):
    """A labels file could not be decoded from Shift-JIS."""
    pass


# Format

class NotBXCADError(CellAnimError, ValueError):
    """Input is not a known BXCAD format."""
    pass


class BadLabelsFileError(CellAnimError, ValueError):
    """A #define line in a labels file is malformed or out of range."""
    pass


class LabelsOnNonBRCADError(CellAnimError, ValueError):
    """Labels were requested for a format that has no label support."""
    pass


class FieldRangeError(CellAnimError, ValueError):
    """A value does not fit the binary field it is written to."""
    pass


class EditableFormError(CellAnimError, ValueError):
    """An editable tree does not have the shape a document expects."""
    pass


class ConversionError(CellAnimError, ValueError):
    """A converted value does not fit the target format."""
    pass


# Compatibility

class VersionParseError(CellAnimError, ValueError):
    """An envelope's version string is not a semantic version."""
    pass


class IncompatibleVersionError(CellAnimError, ValueError):
    """An envelope was produced by an unsupported tool version."""

    def __init__(self, version: str, oldest: str, current: str):
        super().__init__(
            f"This file was made with an incompatible cellanim version: {version}\n"
            f"cellanim can read files made from version {oldest} up to {current}",
            {"version": version, "oldest_supported": oldest, "current": current},
        )
        self.version = version


class EmptyIndexError(CellAnimError, ValueError):
    """An indexized sprite mapping has no entries to size the list from."""
    pass


class InvalidIndexError(CellAnimError, ValueError):
    """An indexized sprite mapping has a key that is not a valid index."""
    pass
