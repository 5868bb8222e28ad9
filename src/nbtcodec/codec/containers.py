"""Recursive codecs for named fields, Lists, Compounds and the root.

Wire shapes (big-endian):

    Field     [tag id: u8][name length: u16][name: UTF-8][payload]
    Compound  [field]*  [END: u8]
    List      [element tag id: u8][count: i32][payload]*count
    Root      [COMPOUND: u8][name length: u16][name][Compound payload]

An empty List is written as element tag END with count 0. Any element tag is
accepted when the count is 0, so lists written by other encoders with a
typed empty header still decode.

Every error raised while handling a field or element propagates to the
caller with the field name / index prepended to its ``path``; nothing is
skipped and no partial tree is returned.
"""

from __future__ import annotations

from typing import cast

from structlog import get_logger

from ..exceptions import (
    EncodeError,
    HeterogeneousListError,
    MalformedInputError,
    NbtError,
)
from ..models.base import Tag, TagId
from ..models.values import Compound, List
from .primitives import StreamReader, StreamWriter
from .registry import Decoder, Encoder, decoder_for, register, tag_and_encoder_for

logger = get_logger()


# ── Named-field wrapper ───────────────────────────────────────


def read_field(reader: StreamReader, decoder: Decoder, depth: int) -> tuple[str, Tag]:
    """Read a field name, then its payload with the given decoder.

    The tag id byte preceding the field has already been consumed.
    """
    name = reader.read_string()
    try:
        value = decoder(reader, depth)
    except NbtError as err:
        err.path.insert(0, name)
        raise
    return name, value


def write_field(
    writer: StreamWriter, name: str, encoder: Encoder, value: Tag, depth: int
) -> None:
    """Write a field name, then the payload with the given encoder.

    The tag id byte preceding the field is written by the caller.
    """
    try:
        writer.write_string(name)
        encoder(writer, value, depth)
    except NbtError as err:
        err.path.insert(0, name)
        raise


# ── Compound ──────────────────────────────────────────────────


def read_compound(reader: StreamReader, depth: int) -> Compound:
    """Read fields until the END tag.

    A repeated field name replaces the earlier value.

    Raises:
        MalformedInputError: On an unknown tag id or when max_depth is exceeded
        TruncatedError: If the stream ends before the END tag
    """
    _check_read_depth(reader, depth)

    fields: dict[str, Tag] = {}
    while True:
        tag_id = reader.read_ubyte()
        if tag_id == TagId.END:
            return Compound(fields)

        decoder = decoder_for(tag_id)
        if decoder is None:
            raise MalformedInputError(
                f"Unknown tag id {tag_id} at byte {reader.position() - 1}"
            )

        name, value = read_field(reader, decoder, depth + 1)
        if name in fields:
            logger.debug("duplicate field replaced", name=name, depth=depth)
        fields[name] = value


def write_compound(writer: StreamWriter, compound: Compound, depth: int) -> None:
    """Write every field followed by the END tag.

    Raises:
        UnrepresentableValueError: If a field value is not a tag
        EncodeError: When max_depth is exceeded or a value cannot be packed
    """
    _check_write_depth(writer, depth)

    for name, value in compound.value.items():
        try:
            tag_id, encoder = tag_and_encoder_for(value)
        except NbtError as err:
            err.path.insert(0, name)
            raise
        writer.write_ubyte(tag_id)
        write_field(writer, name, encoder, value, depth + 1)

    writer.write_ubyte(TagId.END)


# ── List ──────────────────────────────────────────────────────


def read_list(reader: StreamReader, depth: int) -> List:
    """Read an element tag id, a count and that many payloads.

    Raises:
        MalformedInputError: If the count is negative, or non-zero with an
            element tag id that has no decoder (END or unknown)
        TruncatedError: If the stream ends before the last element
    """
    _check_read_depth(reader, depth)

    element_id = reader.read_ubyte()
    count = reader.read_length()
    if count == 0:
        return List()

    decoder = decoder_for(element_id)
    if decoder is None:
        raise MalformedInputError(
            f"List of {count} elements has element tag id {element_id} with no payload"
        )

    items: list[Tag] = []
    for index in range(count):
        try:
            items.append(decoder(reader, depth + 1))
        except NbtError as err:
            err.path.insert(0, index)
            raise
    return List(items)


def write_list(writer: StreamWriter, tag_list: List, depth: int) -> None:
    """Write the element tag id, the count and each element's payload.

    All elements are checked before anything is written.

    Raises:
        HeterogeneousListError: If an element's tag differs from the first one
        UnrepresentableValueError: If an element is not a tag
    """
    _check_write_depth(writer, depth)

    items = tag_list.value
    if not items:
        writer.write_ubyte(TagId.END)
        writer.write_int(0)
        return

    element_id: TagId | None = None
    encoder: Encoder | None = None
    for index, item in enumerate(items):
        try:
            item_id, item_encoder = tag_and_encoder_for(item)
        except NbtError as err:
            err.path.insert(0, index)
            raise
        if element_id is None:
            element_id, encoder = item_id, item_encoder
        elif item_id != element_id:
            raise HeterogeneousListError(
                f"Element is {item_id.name}, list holds {element_id.name}", path=[index]
            )

    writer.write_ubyte(cast(TagId, element_id))
    writer.write_int(len(items))
    for index, item in enumerate(items):
        try:
            cast(Encoder, encoder)(writer, item, depth + 1)
        except NbtError as err:
            err.path.insert(0, index)
            raise


# ── Root ──────────────────────────────────────────────────────


def read_root(reader: StreamReader) -> Compound:
    """Read a complete stream whose outermost value must be a Compound.

    The root's field name is read and discarded.

    Raises:
        MalformedInputError: If the first tag id is not COMPOUND, or the tree
            nests deeper than the interpreter stack allows
    """
    tag_id = reader.read_ubyte()
    if tag_id != TagId.COMPOUND:
        raise MalformedInputError(
            f"Root tag id must be {int(TagId.COMPOUND)} (COMPOUND), got {tag_id}"
        )
    try:
        _name, root = read_field(reader, read_compound, 0)
    except RecursionError as err:
        raise MalformedInputError(
            f"Nesting depth exceeds the interpreter stack at byte {reader.position()}"
        ) from err
    return cast(Compound, root)


def write_root(writer: StreamWriter, root: Compound, name: str = "") -> None:
    """Write a Compound as the root of a stream under an (empty) name.

    Raises:
        EncodeError: If root is not a Compound, or the tree nests deeper than
            the interpreter stack allows
    """
    if not isinstance(root, Compound):
        raise EncodeError(f"Root must be a Compound, got {type(root).__name__}")
    writer.write_ubyte(TagId.COMPOUND)
    try:
        write_field(writer, name, write_compound, root, 0)
    except RecursionError as err:
        raise EncodeError("Nesting depth exceeds the interpreter stack") from err


def _check_read_depth(reader: StreamReader, depth: int) -> None:
    if reader.max_depth is not None and depth > reader.max_depth:
        raise MalformedInputError(f"Nesting depth {depth} exceeds max_depth={reader.max_depth}")


def _check_write_depth(writer: StreamWriter, depth: int) -> None:
    if writer.max_depth is not None and depth > writer.max_depth:
        raise EncodeError(f"Nesting depth {depth} exceeds max_depth={writer.max_depth}")


register(TagId.LIST, List, read_list, write_list)
register(TagId.COMPOUND, Compound, read_compound, write_compound)
