"""
Sprite Indexization

Steps refer to sprites by position, which makes a long sprite list hard to
edit by hand. An indexized document carries its sprites as a mapping from
index to sprite instead, so each one is labelled with the number steps use.

Reconstruction is dense: the list spans 0..max_key and any missing index is
filled with an empty sprite.
"""

from typing import Any, Callable, Dict, List, Mapping, TypeVar

from ..errors import EmptyIndexError, InvalidIndexError

T = TypeVar('T')


def to_indexized(items: List[T]) -> Dict[int, T]:
    """Key each item by its position, in index order."""
    return {index: item for index, item in enumerate(items)}


def from_indexized(mapping: Mapping[int, T], default_factory: Callable[[], T]) -> List[T]:
    """
    Rebuild a dense list from an index mapping.

    Args:
        mapping: Index -> item
        default_factory: Creates the placeholder for missing indices

    Returns:
        List of length max(mapping) + 1

    Raises:
        EmptyIndexError: if the mapping is empty
        InvalidIndexError: if a key is negative
    """
    if not mapping:
        raise EmptyIndexError("Cannot rebuild sprites from an empty index mapping")

    for key in mapping:
        if key < 0:
            raise InvalidIndexError(f"Sprite index {key} is negative", {"index": key})

    return [mapping[i] if i in mapping else default_factory()
            for i in range(max(mapping) + 1)]


def parse_index_keys(tree: Any) -> Dict[int, Any]:
    """
    Convert an editable index mapping (decimal string keys) to int keys.

    Raises:
        InvalidIndexError: if the tree is not a mapping or a key is not a
            non-negative decimal integer
    """
    if not isinstance(tree, dict):
        raise InvalidIndexError(f"Indexized sprites must be an object, got {type(tree).__name__}")

    parsed = {}
    for key, value in tree.items():
        text = str(key)
        if not (text.isascii() and text.isdecimal()):
            raise InvalidIndexError(f"Sprite index '{key}' is not a non-negative integer", {"index": key})
        index = int(text)
        if index in parsed:
            raise InvalidIndexError(f"Sprite index {index} appears more than once", {"index": index})
        parsed[index] = value
    return parsed
