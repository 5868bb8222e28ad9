"""Tree dump CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.decoder import load
from ..config import CodecConfig, Compression
from ..models.base import Tag
from ..models.values import ByteArray, Compound, IntArray, List, LongArray, String
from ..utils.sizing import root_size

# Array values beyond this many items are elided in the dump
_MAX_ARRAY_PREVIEW = 8


def dump_file(file_path: Path, compression: Compression = "auto") -> None:
    """Decode a file and print its tree.

    Args:
        file_path: Path to an encoded file
        compression: Compression of the file, "auto" to detect it
    """
    root = load(file_path, config=CodecConfig(compression=compression))

    print(f"{file_path}: {root_size(root)} bytes uncompressed")
    for line in format_tree(root):
        print(line)


def format_tree(tag: Tag, name: str | None = None, indent: int = 0) -> list[str]:
    """Render a tag tree as indented lines.

    Args:
        tag: Value to render
        name: Field name when the value sits inside a Compound
        indent: Nesting level

    Returns:
        One line per value, children indented by two spaces

    Example:
        >>> format_tree(Compound({"hp": Int(20)}))
        ['Compound (1 entry)', "  Int 'hp': 20"]
    """
    pad = "  " * indent
    label = type(tag).__name__ if name is None else f"{type(tag).__name__} {name!r}"

    if isinstance(tag, Compound):
        count = len(tag.value)
        lines = [f"{pad}{label} ({count} entr{'y' if count == 1 else 'ies'})"]
        # Field order is not meaningful; sort for a stable dump
        for field_name in sorted(tag.value):
            lines.extend(format_tree(tag.value[field_name], field_name, indent + 1))
        return lines

    if isinstance(tag, List):
        lines = [f"{pad}{label} ({len(tag.value)} x {tag.element_type.name})"]
        for item in tag.value:
            lines.extend(format_tree(item, None, indent + 1))
        return lines

    return [f"{pad}{label}: {_format_scalar(tag)}"]


def _format_scalar(tag: Tag) -> str:
    if isinstance(tag, ByteArray):
        return f"[{len(tag.value)} bytes] {tag.value[:_MAX_ARRAY_PREVIEW].hex(' ')}" + (
            " ..." if len(tag.value) > _MAX_ARRAY_PREVIEW else ""
        )
    if isinstance(tag, (IntArray, LongArray)):
        preview = ", ".join(str(v) for v in tag.value[:_MAX_ARRAY_PREVIEW])
        more = ", ..." if len(tag.value) > _MAX_ARRAY_PREVIEW else ""
        return f"[{len(tag.value)} values] [{preview}{more}]"
    if isinstance(tag, String):
        return repr(tag.value)
    return str(tag.value)  # type: ignore[attr-defined]
