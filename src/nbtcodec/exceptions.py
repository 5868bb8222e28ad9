"""Exception hierarchy for nbtcodec.

All exceptions inherit from NbtError so callers can catch any codec failure
in one place. Failures of the underlying stream (OSError, EOFError,
zlib.error) are not wrapped and propagate unchanged.
"""

from __future__ import annotations

from typing import Sequence, Union

PathElement = Union[str, int]


def format_path(path: Sequence[PathElement]) -> str:
    """Render a field path such as ``Level.tags[1].name``."""
    parts: list[str] = []
    for element in path:
        if isinstance(element, int):
            parts.append(f"[{element}]")
        elif not parts and element == "":
            # anonymous root
            continue
        elif parts:
            parts.append(f".{element}")
        else:
            parts.append(element)
    return "".join(parts)


class NbtError(Exception):
    """Base exception for all nbtcodec errors.

    Attributes:
        message: Description of the failure
        path: Field names and list indices leading from the root to the
            failing value; the container codec fills it in while the error
            propagates outwards.
    """

    def __init__(self, message: str = "", path: Sequence[PathElement] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path: list[PathElement] = list(path)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{format_path(self.path)}: {self.message}"


class DecodeError(NbtError):
    """Raised when a byte stream cannot be decoded into a tag tree."""

    pass


class MalformedInputError(DecodeError):
    """Raised when the stream is structurally invalid.

    Examples:
        - Root tag is not a Compound
        - Unknown tag id inside a Compound
        - Non-empty List whose element tag has no decoder
        - Negative declared array, string or list length
        - String payload that is not valid UTF-8
    """

    pass


class TruncatedError(DecodeError):
    """Raised when the stream ends before a declared length is satisfied."""

    pass


class EncodeError(NbtError):
    """Raised when a tag tree cannot be encoded.

    Examples:
        - Root value is not a Compound
        - String or field name longer than 65535 UTF-8 bytes
        - Scalar out of range for its tag (only reachable by bypassing validation)
    """

    pass


class UnrepresentableValueError(EncodeError):
    """Raised when a value matches no known tag."""

    pass


class HeterogeneousListError(EncodeError):
    """Raised when the elements of a List do not share one tag."""

    pass
