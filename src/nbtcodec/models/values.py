"""Concrete tag value types.

One class per tag id (except END, which is a terminator and never holds a
value). Range and length limits of the wire format are enforced when a value
is constructed, so any tree built from these classes can be encoded.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator, Mapping
from typing import Annotated, Any, ClassVar

from pydantic import Field, SerializeAsAny, field_validator

from .base import Tag, TagId

INT8_MIN, INT8_MAX = -(2**7), 2**7 - 1
INT16_MIN, INT16_MAX = -(2**15), 2**15 - 1
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

# Strings and field names carry an unsigned 16-bit byte length
MAX_STRING_BYTES = 0xFFFF

Int8 = Annotated[int, Field(ge=INT8_MIN, le=INT8_MAX)]
Int16 = Annotated[int, Field(ge=INT16_MIN, le=INT16_MAX)]
Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]

_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")


def _check_utf8_length(text: str, what: str) -> str:
    try:
        size = len(text.encode("utf-8"))
    except UnicodeEncodeError as err:
        raise ValueError(f"{what} is not encodable as UTF-8: {err}") from err
    if size > MAX_STRING_BYTES:
        raise ValueError(f"{what} is {size} UTF-8 bytes, limit is {MAX_STRING_BYTES}")
    return text


def _int_to_float(value: Any) -> Any:
    # bool is an int subclass; a flag is not a number here
    if isinstance(value, bool):
        raise ValueError("expected a float, got bool")
    if isinstance(value, int):
        return float(value)
    return value


class Byte(Tag):
    """Signed 8-bit integer."""

    tag_id: ClassVar[TagId] = TagId.BYTE
    value: Int8


class Short(Tag):
    """Signed 16-bit integer."""

    tag_id: ClassVar[TagId] = TagId.SHORT
    value: Int16


class Int(Tag):
    """Signed 32-bit integer."""

    tag_id: ClassVar[TagId] = TagId.INT
    value: Int32


class Long(Tag):
    """Signed 64-bit integer."""

    tag_id: ClassVar[TagId] = TagId.LONG
    value: Int64


class _FloatingTag(Tag):
    """Float and Double compare by bit pattern.

    NaN therefore equals an identical NaN, and 0.0 and -0.0 are different
    values, matching what the wire format can tell apart.
    """

    value: float

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return _FLOAT64.pack(self.value) == _FLOAT64.pack(other.value)  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), _FLOAT64.pack(self.value)))


class Float(_FloatingTag):
    """IEEE-754 single precision float.

    The value is rounded to single precision on construction, so
    ``Float(0.1).value`` is the float32 nearest to 0.1 and survives an
    encode/decode round trip unchanged.
    """

    tag_id: ClassVar[TagId] = TagId.FLOAT
    value: float

    @field_validator("value", mode="before")
    @classmethod
    def _accept_int(cls, value: Any) -> Any:
        return _int_to_float(value)

    @field_validator("value")
    @classmethod
    def _round_to_single(cls, value: float) -> float:
        try:
            return float(_FLOAT32.unpack(_FLOAT32.pack(value))[0])
        except OverflowError as err:
            raise ValueError(f"{value} is out of range for a 32-bit float") from err


class Double(_FloatingTag):
    """IEEE-754 double precision float."""

    tag_id: ClassVar[TagId] = TagId.DOUBLE
    value: float

    @field_validator("value", mode="before")
    @classmethod
    def _accept_int(cls, value: Any) -> Any:
        return _int_to_float(value)


class ByteArray(Tag):
    """Raw byte sequence with a signed 32-bit length prefix."""

    tag_id: ClassVar[TagId] = TagId.BYTE_ARRAY
    value: bytes = b""

    @field_validator("value", mode="before")
    @classmethod
    def _accept_buffers(cls, value: Any) -> Any:
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        return value


class String(Tag):
    """Text stored as UTF-8 with an unsigned 16-bit length prefix."""

    tag_id: ClassVar[TagId] = TagId.STRING
    value: str = ""

    @field_validator("value")
    @classmethod
    def _check_length(cls, value: str) -> str:
        return _check_utf8_length(value, "string")


def _as_tuple(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(value)
    return value


class IntArray(Tag):
    """Sequence of signed 32-bit integers."""

    tag_id: ClassVar[TagId] = TagId.INT_ARRAY
    value: tuple[Int32, ...] = ()

    @field_validator("value", mode="before")
    @classmethod
    def _accept_list(cls, value: Any) -> Any:
        return _as_tuple(value)


class LongArray(Tag):
    """Sequence of signed 64-bit integers."""

    tag_id: ClassVar[TagId] = TagId.LONG_ARRAY
    value: tuple[Int64, ...] = ()

    @field_validator("value", mode="before")
    @classmethod
    def _accept_list(cls, value: Any) -> Any:
        return _as_tuple(value)


class List(Tag):
    """Ordered sequence of unnamed values.

    Elements are expected to share one tag; the encoder rejects a mixed list
    with HeterogeneousListError. Construction does not check this so that a
    tree can be assembled incrementally.

    Like a tuple, a List iterates over its elements and an empty one is falsy.

    Example:
        >>> tags = List([String("fast"), String("brave")])
        >>> tags.element_type
        <TagId.STRING: 8>
        >>> tags[1]
        String(value='brave')
    """

    tag_id: ClassVar[TagId] = TagId.LIST
    value: tuple[SerializeAsAny[Tag], ...] = ()

    @field_validator("value", mode="before")
    @classmethod
    def _accept_list(cls, value: Any) -> Any:
        return _as_tuple(value)

    @property
    def element_type(self) -> TagId:
        """Tag id of the first element, or END for an empty list."""
        if not self.value:
            return TagId.END
        return self.value[0].tag_id

    def __getitem__(self, index: int) -> Tag:
        return self.value[index]

    def __iter__(self) -> Iterator[Tag]:  # type: ignore[override]
        return iter(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __contains__(self, item: object) -> bool:
        return item in self.value


class Compound(Tag):
    """Named, unordered collection of values (the format's mapping type).

    Key order is not part of the format: two compounds with the same entries
    compare equal, and hash equal, regardless of insertion order. Like a
    dict, a Compound iterates over its field names and an empty one is falsy.

    Example:
        >>> player = Compound({"name": String("Bob"), "hp": Int(20)})
        >>> player["hp"]
        Int(value=20)
        >>> "name" in player
        True
    """

    tag_id: ClassVar[TagId] = TagId.COMPOUND
    value: dict[str, SerializeAsAny[Tag]] = Field(default_factory=dict)

    @field_validator("value", mode="before")
    @classmethod
    def _accept_mapping(cls, value: Any) -> Any:
        if isinstance(value, Mapping) and not isinstance(value, dict):
            return dict(value)
        return value

    @field_validator("value")
    @classmethod
    def _check_names(cls, value: dict[str, Tag]) -> dict[str, Tag]:
        for name in value:
            _check_utf8_length(name, f"field name {name[:32]!r}")
        return value

    def __getitem__(self, name: str) -> Tag:
        return self.value[name]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __hash__(self) -> int:
        return hash((type(self), frozenset(self.value.items())))

    def __contains__(self, name: object) -> bool:
        return name in self.value

    def get(self, name: str, default: Tag | None = None) -> Tag | None:
        """Return the value stored under ``name``, or ``default``."""
        return self.value.get(name, default)
