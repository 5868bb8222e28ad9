"""Conversion between plain Python values and tag trees.

from_native() picks a tag for each host value by its type; to_native() unwraps
a tag tree back into dicts, lists and scalars. Tag instances found inside a
native structure are kept as they are, which is how a caller pins a specific
width (e.g. ``{"hp": Int(20)}`` instead of the default Long).
"""

from __future__ import annotations

import array
from typing import Any

from ..exceptions import UnrepresentableValueError
from .base import Tag
from .values import (
    Byte,
    ByteArray,
    Compound,
    Double,
    IntArray,
    List,
    Long,
    LongArray,
    String,
)


def from_native(obj: Any) -> Tag:
    """Convert a Python value into a tag tree.

    Type mapping:
        - Tag instance            -> unchanged
        - dict (str keys)         -> Compound
        - list / tuple            -> List
        - str                     -> String
        - bytes / bytearray       -> ByteArray
        - bool                    -> Byte (0 or 1)
        - int                     -> Long
        - float                   -> Double
        - array.array('b')        -> ByteArray
        - array.array('i' / 'l')  -> IntArray (4-byte items only)
        - array.array('q')        -> LongArray

    Args:
        obj: Value to convert

    Returns:
        Equivalent tag value

    Raises:
        UnrepresentableValueError: If obj (or anything nested in it) has no tag

    Example:
        >>> from_native({"name": "Bob", "tags": ["fast", "brave"]})
        Compound(value={'name': String(value='Bob'), 'tags': List(...)})
    """
    return _from_native(obj, "")


def _from_native(obj: Any, path: str) -> Tag:
    if isinstance(obj, Tag):
        return obj

    if isinstance(obj, dict):
        fields: dict[str, Tag] = {}
        for name, value in obj.items():
            if not isinstance(name, str):
                raise UnrepresentableValueError(
                    f"{path or '<root>'}: field name must be str, got {type(name).__name__}"
                )
            fields[name] = _from_native(value, f"{path}.{name}" if path else name)
        return Compound(fields)

    if isinstance(obj, (list, tuple)):
        return List([_from_native(item, f"{path}[{i}]") for i, item in enumerate(obj)])

    if isinstance(obj, str):
        return String(obj)

    if isinstance(obj, (bytes, bytearray)):
        return ByteArray(bytes(obj))

    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return Byte(1 if obj else 0)

    if isinstance(obj, int):
        return Long(obj)

    if isinstance(obj, float):
        return Double(obj)

    if isinstance(obj, array.array):
        if obj.typecode == "b":
            return ByteArray(obj.tobytes())
        if obj.typecode in ("i", "l") and obj.itemsize == 4:
            return IntArray(obj.tolist())
        if obj.typecode == "q":
            return LongArray(obj.tolist())

    raise UnrepresentableValueError(
        f"{path or '<root>'}: {type(obj).__name__} has no representable tag"
    )


def to_native(tag: Tag) -> Any:
    """Unwrap a tag tree into plain Python values.

    Compounds become dicts, Lists and int arrays become lists, ByteArray
    becomes bytes and scalars become int, float or str. The tag widths are
    lost; use the tree itself when they matter.
    """
    if isinstance(tag, Compound):
        return {name: to_native(value) for name, value in tag.value.items()}
    if isinstance(tag, List):
        return [to_native(item) for item in tag.value]
    if isinstance(tag, (IntArray, LongArray)):
        return list(tag.value)
    return tag.value
