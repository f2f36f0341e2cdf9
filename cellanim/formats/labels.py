"""
BRCAD Labels

BRCAD files don't store animation names. Games ship a C header next to each
BRCAD that names animations by index:

    #define ANIM_IDLE   0   // standing still
    #define ANIM_ATTACK 1

The header is Shift-JIS encoded (the Windows-31J variant).
"""

from typing import BinaryIO, TYPE_CHECKING

from ..constants import LABELS_ENCODING
from ..errors import BadLabelsFileError, LabelsEncodingError
from ..utils import logDebug

if TYPE_CHECKING:
    from .brcad import BRCAD

DEFINE_PREFIX = "#define "


def apply_labels(brcad: 'BRCAD', labels: BinaryIO):
    """
    Name the animations of a BRCAD from a labels file.

    Args:
        brcad: Document to update in place
        labels: Readable stream with the labels file contents

    Raises:
        LabelsEncodingError: if the file is not valid Shift-JIS
        BadLabelsFileError: if a #define line is malformed or its index is
            not a position in the animation list
    """
    data = labels.read()
    try:
        text = data.decode(LABELS_ENCODING)
    except UnicodeDecodeError as e:
        raise LabelsEncodingError(f"Could not decode labels file from Shift-JIS: {e}") from e

    # Validate everything before touching the document
    names = {}
    for line_number, line in enumerate(text.split("\n"), 1):
        line = line.rstrip("\r").split("//", 1)[0].replace("\t", " ")
        if not line.startswith(DEFINE_PREFIX):
            continue

        tokens = line.split()
        if len(tokens) < 3:
            raise BadLabelsFileError(
                f"Failed to parse labels file: line {line_number} has no name or index",
                {"line": line_number, "text": line},
            )
        name, index_text = tokens[1], tokens[2]

        if not (index_text.isascii() and index_text.isdecimal()):
            raise BadLabelsFileError(
                f"Failed to parse labels file: line {line_number} index '{index_text}' is not a number",
                {"line": line_number, "text": line},
            )
        index = int(index_text)
        if index >= len(brcad.animations):
            raise BadLabelsFileError(
                f"Failed to parse labels file: line {line_number} index {index} is out of range "
                f"({len(brcad.animations)} animations)",
                {"line": line_number, "index": index},
            )
        names[index] = name

    for index, name in names.items():
        brcad.animations[index].name = name

    logDebug(f"Applied {len(names)} labels")
