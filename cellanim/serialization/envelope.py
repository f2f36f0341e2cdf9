"""
Versioned Envelope

Wraps a document's editable tree with the metadata needed to turn it back
into a document safely:

    {
      "bxcad_type": "BRCAD",
      "version": "1.1.0",
      "indexized": false,
      "data": { ... }
    }

`version` is the version of the tool that wrote the file. Unwrapping checks
it against the range of versions whose tree layout this tool understands.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict

import semver

from .comments import strip_comments
from .indexize import to_indexized, from_indexized, parse_index_keys
from ..constants import TOOL_VERSION, OLDEST_SUPPORTED_VERSION
from ..errors import EditableFormError, IncompatibleVersionError, NotBXCADError, VersionParseError
from ..formats.base import BXCAD, BXCADType, require
from ..formats.detect import codec_for
from ..utils import logDebug


def parse_version(text: Any) -> semver.Version:
    """
    Parse a semantic version string.

    Raises:
        VersionParseError: if `text` is not a semantic version
    """
    try:
        return semver.Version.parse(text)
    except (ValueError, TypeError) as e:
        raise VersionParseError(f"Error parsing version: {text!r} ({e})", {"version": text}) from e


@dataclass
class Envelope:
    """A format-tagged, versioned editable document."""
    bxcad_type: BXCADType
    version: str
    indexized: bool
    data: Dict[str, Any]

    @classmethod
    def wrap(cls, document: BXCAD, tool_version: str = TOOL_VERSION,
             indexize: bool = False) -> 'Envelope':
        """
        Wrap a document.

        Args:
            document: BCCAD or BRCAD to wrap
            tool_version: Version recorded as the producer
            indexize: Store sprites as an index -> sprite mapping
        """
        tree = document.to_editable()
        if indexize:
            tree['sprites'] = {str(index): sprite for index, sprite in to_indexized(tree['sprites']).items()}
        return cls(
            bxcad_type=document.BXCAD_TYPE,
            version=tool_version,
            indexized=indexize,
            data=tree,
        )

    def to_tree(self) -> Dict[str, Any]:
        return {
            'bxcad_type': self.bxcad_type.value,
            'version': self.version,
            'indexized': self.indexized,
            'data': self.data,
        }

    @classmethod
    def from_tree(cls, tree: Any) -> 'Envelope':
        """
        Read the envelope fields of an editable tree.

        Raises:
            NotBXCADError: if the format tag is not a known format
            EditableFormError: if a field is missing or has the wrong type
        """
        type_name = require(tree, 'bxcad_type')
        try:
            bxcad_type = BXCADType(type_name)
        except ValueError:
            bxcad_type = BXCADType.UNKNOWN
        if bxcad_type is BXCADType.UNKNOWN:
            raise NotBXCADError(f"File given is not a known BXCAD file: {type_name!r}")

        version = require(tree, 'version')
        if not isinstance(version, str):
            raise EditableFormError(f"Envelope version must be a string, got {version!r}")

        indexized = require(tree, 'indexized')
        if not isinstance(indexized, bool):
            raise EditableFormError(f"Envelope 'indexized' must be true or false, got {indexized!r}")

        data = require(tree, 'data')
        if not isinstance(data, dict):
            raise EditableFormError(f"Envelope data must be an object, got {type(data).__name__}")

        return cls(bxcad_type=bxcad_type, version=version, indexized=indexized, data=data)

    def check_version(self, tool_version: str = TOOL_VERSION,
                      oldest_supported: str = OLDEST_SUPPORTED_VERSION):
        """
        Check the producer version is within [oldest_supported, tool_version].

        Raises:
            VersionParseError: if any of the versions cannot be parsed
            IncompatibleVersionError: if the version is out of range
        """
        version = parse_version(self.version)
        if not parse_version(oldest_supported) <= version <= parse_version(tool_version):
            raise IncompatibleVersionError(self.version, oldest_supported, tool_version)

    def unwrap(self, tool_version: str = TOOL_VERSION,
               oldest_supported: str = OLDEST_SUPPORTED_VERSION) -> BXCAD:
        """
        Rebuild the wrapped document.

        Raises:
            IncompatibleVersionError: if the producer version is unsupported
            EmptyIndexError: if indexized sprites are empty
            EditableFormError: if the data does not describe a valid document
        """
        self.check_version(tool_version, oldest_supported)
        codec = codec_for(self.bxcad_type)

        if not self.indexized:
            return codec.from_editable(self.data)

        indexed = parse_index_keys(require(self.data, 'sprites'))
        document = codec.from_editable(dict(self.data, sprites=[]))
        sprites = {index: codec.SPRITE_TYPE.from_editable(sprite) for index, sprite in indexed.items()}
        document.sprites = from_indexized(sprites, codec.SPRITE_TYPE)
        logDebug(f"Rebuilt {len(document.sprites)} sprites from {len(indexed)} indexized entries")
        return document


def dumps(envelope: Envelope, indent: int = 2) -> str:
    """Serialize an envelope to JSON text."""
    return json.dumps(envelope.to_tree(), indent=indent, ensure_ascii=False)


def loads(text: str) -> Envelope:
    """
    Parse JSON text (comments allowed) into an envelope.

    Raises:
        EditableFormError: if the text is not valid JSON
    """
    try:
        tree = json.loads(strip_comments(text))
    except json.JSONDecodeError as e:
        raise EditableFormError(f"Invalid JSON: {e}") from e
    return Envelope.from_tree(tree)
