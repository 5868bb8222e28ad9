"""Encoded size calculation utilities.

This module provides functions to calculate the uncompressed wire size of a
tag tree without actually encoding it.
"""

from __future__ import annotations

from ..exceptions import UnrepresentableValueError
from ..models.base import Tag, TagId
from ..models.values import Compound, List

_FIXED_SIZES: dict[TagId, int] = {
    TagId.BYTE: 1,
    TagId.SHORT: 2,
    TagId.INT: 4,
    TagId.LONG: 8,
    TagId.FLOAT: 4,
    TagId.DOUBLE: 8,
}

# Width of one element for the int32-count-prefixed arrays
_ARRAY_ITEM_SIZES: dict[TagId, int] = {
    TagId.BYTE_ARRAY: 1,
    TagId.INT_ARRAY: 4,
    TagId.LONG_ARRAY: 8,
}


def encoded_size(tag: Tag) -> int:
    """Calculate the payload size of a value in bytes.

    The payload excludes the tag id byte and field name that precede a value
    inside a Compound.

    Args:
        tag: Value to measure

    Returns:
        Size in bytes

    Raises:
        UnrepresentableValueError: If tag (or anything nested in it) is not a tag

    Example:
        >>> encoded_size(Int(20))
        4
        >>> encoded_size(String("Bob"))
        5  # 2-byte length + 3 bytes
        >>> encoded_size(List([Short(1), Short(2)]))
        9  # 1-byte element tag + 4-byte count + 2 * 2 bytes
    """
    if not isinstance(tag, Tag):
        raise UnrepresentableValueError(f"{type(tag).__name__} has no representable tag")

    tag_id = tag.tag_id
    if tag_id in _FIXED_SIZES:
        return _FIXED_SIZES[tag_id]

    if tag_id in _ARRAY_ITEM_SIZES:
        return 4 + _ARRAY_ITEM_SIZES[tag_id] * len(tag.value)  # type: ignore[attr-defined]

    if tag_id == TagId.STRING:
        return 2 + len(tag.value.encode("utf-8"))  # type: ignore[attr-defined]

    if isinstance(tag, List):
        return 1 + 4 + sum(encoded_size(item) for item in tag.value)

    if isinstance(tag, Compound):
        return 1 + sum(
            1 + 2 + len(name.encode("utf-8")) + encoded_size(value)
            for name, value in tag.value.items()
        )

    raise UnrepresentableValueError(f"{type(tag).__name__} has no representable tag")


def root_size(root: Compound) -> int:
    """Calculate the uncompressed size of a root stream in bytes.

    This is exactly ``len(encode(root))``: the root tag id, the empty root
    name and the Compound payload.
    """
    return 1 + 2 + encoded_size(root)


def field_sizes(compound: Compound) -> dict[str, int]:
    """Calculate the payload size of each field of a Compound.

    Returns:
        Dictionary mapping field names to payload sizes in bytes
    """
    return {name: encoded_size(value) for name, value in compound.value.items()}
