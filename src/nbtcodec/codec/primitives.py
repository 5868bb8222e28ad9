"""Fixed-width scalar and length-prefixed array codecs.

This module provides byte-level reading and writing over a binary stream.
All multi-byte quantities are big-endian. Reads either return exactly the
requested number of bytes or fail; nothing is padded or truncated.
"""

from __future__ import annotations

import struct
from typing import IO, Optional

from ..exceptions import EncodeError, MalformedInputError, TruncatedError
from ..models.values import MAX_STRING_BYTES

_BYTE = struct.Struct(">b")
_UBYTE = struct.Struct(">B")
_SHORT = struct.Struct(">h")
_USHORT = struct.Struct(">H")
_INT = struct.Struct(">i")
_LONG = struct.Struct(">q")
_FLOAT = struct.Struct(">f")
_DOUBLE = struct.Struct(">d")

# Upper bound on a single read() call, so a huge declared length on a short
# stream fails without allocating the declared size up front
_CHUNK_SIZE = 64 * 1024


class StreamReader:
    """Reads big-endian primitives from a binary stream.

    The stream only needs a ``read(n)`` method; it is never seeked or peeked.

    Example:
        >>> reader = StreamReader(io.BytesIO(b"\\x00\\x03Bob"))
        >>> reader.read_string()
        'Bob'
        >>> reader.position()
        5
    """

    def __init__(self, stream: IO[bytes], max_depth: Optional[int] = None) -> None:
        """Initialize a reader over the given stream.

        Args:
            stream: Binary stream to read from
            max_depth: Maximum container nesting depth, or None for no limit
        """
        self._stream = stream
        self._position = 0
        self.max_depth = max_depth

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read exactly num_bytes bytes.

        Args:
            num_bytes: Number of bytes to read

        Returns:
            The bytes read

        Raises:
            MalformedInputError: If num_bytes is negative
            TruncatedError: If the stream ends first
        """
        if num_bytes < 0:
            raise MalformedInputError(f"Negative length {num_bytes} at byte {self._position}")

        chunks: list[bytes] = []
        remaining = num_bytes
        while remaining > 0:
            chunk = self._stream.read(min(remaining, _CHUNK_SIZE))
            if not chunk:
                raise TruncatedError(
                    f"Stream ended after {num_bytes - remaining} of {num_bytes} bytes "
                    f"at byte {self._position}"
                )
            chunks.append(chunk)
            remaining -= len(chunk)
            self._position += len(chunk)

        return b"".join(chunks)

    def read_byte(self) -> int:
        """Read a signed 8-bit integer."""
        return _BYTE.unpack(self.read_bytes(1))[0]

    def read_ubyte(self) -> int:
        """Read an unsigned 8-bit integer (used for tag ids)."""
        return _UBYTE.unpack(self.read_bytes(1))[0]

    def read_short(self) -> int:
        """Read a signed 16-bit integer."""
        return _SHORT.unpack(self.read_bytes(2))[0]

    def read_ushort(self) -> int:
        """Read an unsigned 16-bit integer (used for string lengths)."""
        return _USHORT.unpack(self.read_bytes(2))[0]

    def read_int(self) -> int:
        """Read a signed 32-bit integer."""
        return _INT.unpack(self.read_bytes(4))[0]

    def read_long(self) -> int:
        """Read a signed 64-bit integer."""
        return _LONG.unpack(self.read_bytes(8))[0]

    def read_float(self) -> float:
        """Read an IEEE-754 single precision float."""
        return _FLOAT.unpack(self.read_bytes(4))[0]

    def read_double(self) -> float:
        """Read an IEEE-754 double precision float."""
        return _DOUBLE.unpack(self.read_bytes(8))[0]

    def read_length(self) -> int:
        """Read a signed 32-bit length or count and reject negative values."""
        length = self.read_int()
        if length < 0:
            raise MalformedInputError(
                f"Negative length {length} at byte {self._position - 4}"
            )
        return length

    def read_byte_array(self) -> bytes:
        """Read an int32 count followed by that many bytes."""
        return self.read_bytes(self.read_length())

    def read_string(self) -> str:
        """Read a uint16 byte length followed by that many UTF-8 bytes.

        Raises:
            MalformedInputError: If the payload is not valid UTF-8
            TruncatedError: If the stream ends first
        """
        length = self.read_ushort()
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise MalformedInputError(
                f"Invalid UTF-8 in string ending at byte {self._position}: {err}"
            ) from err

    def read_int_array(self) -> tuple[int, ...]:
        """Read an int32 count followed by that many int32 values."""
        count = self.read_length()
        return struct.unpack(f">{count}i", self.read_bytes(count * 4))

    def read_long_array(self) -> tuple[int, ...]:
        """Read an int32 count followed by that many int64 values."""
        count = self.read_length()
        return struct.unpack(f">{count}q", self.read_bytes(count * 8))

    def position(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._position


class StreamWriter:
    """Writes big-endian primitives to a binary stream.

    Values are normally range-checked when their tag is constructed; the
    checks here catch trees built with ``model_construct`` and report them
    as EncodeError.
    """

    def __init__(self, stream: IO[bytes], max_depth: Optional[int] = None) -> None:
        """Initialize a writer over the given stream.

        Args:
            stream: Binary stream to write to
            max_depth: Maximum container nesting depth, or None for no limit
        """
        self._stream = stream
        self._position = 0
        self.max_depth = max_depth

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._stream.write(data)
        self._position += len(data)

    def _pack(self, codec: struct.Struct, value: object) -> None:
        try:
            self.write_bytes(codec.pack(value))
        except struct.error as err:
            raise EncodeError(f"Cannot pack {value!r} as {codec.format!r}: {err}") from err

    def write_byte(self, value: int) -> None:
        """Write a signed 8-bit integer."""
        self._pack(_BYTE, value)

    def write_ubyte(self, value: int) -> None:
        """Write an unsigned 8-bit integer (used for tag ids)."""
        self._pack(_UBYTE, value)

    def write_short(self, value: int) -> None:
        """Write a signed 16-bit integer."""
        self._pack(_SHORT, value)

    def write_int(self, value: int) -> None:
        """Write a signed 32-bit integer."""
        self._pack(_INT, value)

    def write_long(self, value: int) -> None:
        """Write a signed 64-bit integer."""
        self._pack(_LONG, value)

    def write_float(self, value: float) -> None:
        """Write an IEEE-754 single precision float."""
        try:
            self._pack(_FLOAT, value)
        except OverflowError as err:
            raise EncodeError(f"{value} is out of range for a 32-bit float") from err

    def write_double(self, value: float) -> None:
        """Write an IEEE-754 double precision float."""
        self._pack(_DOUBLE, value)

    def write_byte_array(self, data: bytes) -> None:
        """Write an int32 count followed by the bytes."""
        self.write_int(len(data))
        self.write_bytes(data)

    def write_string(self, text: str) -> None:
        """Write a uint16 byte length followed by the UTF-8 bytes.

        Raises:
            EncodeError: If the text is longer than 65535 UTF-8 bytes
        """
        try:
            raw = text.encode("utf-8")
        except UnicodeEncodeError as err:
            raise EncodeError(f"String is not encodable as UTF-8: {err}") from err
        if len(raw) > MAX_STRING_BYTES:
            raise EncodeError(
                f"String is {len(raw)} UTF-8 bytes, limit is {MAX_STRING_BYTES}"
            )
        self._pack(_USHORT, len(raw))
        self.write_bytes(raw)

    def write_int_array(self, values: tuple[int, ...]) -> None:
        """Write an int32 count followed by int32 values."""
        try:
            payload = struct.pack(f">{len(values)}i", *values)
        except struct.error as err:
            raise EncodeError(f"IntArray element out of int32 range: {err}") from err
        self.write_int(len(values))
        self.write_bytes(payload)

    def write_long_array(self, values: tuple[int, ...]) -> None:
        """Write an int32 count followed by int64 values."""
        try:
            payload = struct.pack(f">{len(values)}q", *values)
        except struct.error as err:
            raise EncodeError(f"LongArray element out of int64 range: {err}") from err
        self.write_int(len(values))
        self.write_bytes(payload)

    def position(self) -> int:
        """Return the number of bytes written so far."""
        return self._position
