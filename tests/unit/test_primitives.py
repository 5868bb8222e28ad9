"""Unit tests for primitive stream codecs."""

from __future__ import annotations

import io
import math

import pytest

from nbtcodec.codec.primitives import StreamReader, StreamWriter
from nbtcodec.exceptions import EncodeError, MalformedInputError, TruncatedError


def _reader(data: bytes) -> StreamReader:
    return StreamReader(io.BytesIO(data))


class _Trickle(io.RawIOBase):
    """Stream that hands out at most one byte per read() call."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray) -> int:  # type: ignore[override]
        if not self._data:
            return 0
        buffer[0] = self._data[0]
        self._data = self._data[1:]
        return 1


class TestStreamWriter:
    """Test StreamWriter functionality."""

    def test_scalars_big_endian(self) -> None:
        """Test fixed-width scalars are written big-endian."""
        out = io.BytesIO()
        writer = StreamWriter(out)
        writer.write_byte(-1)
        writer.write_short(0x0102)
        writer.write_int(0x01020304)
        writer.write_long(0x0102030405060708)

        assert out.getvalue() == (
            b"\xff" b"\x01\x02" b"\x01\x02\x03\x04" b"\x01\x02\x03\x04\x05\x06\x07\x08"
        )
        assert writer.position() == 1 + 2 + 4 + 8

    def test_floats(self) -> None:
        """Test IEEE-754 float and double encoding."""
        out = io.BytesIO()
        writer = StreamWriter(out)
        writer.write_float(1.0)
        writer.write_double(-2.0)

        assert out.getvalue() == b"\x3f\x80\x00\x00" + b"\xc0\x00\x00\x00\x00\x00\x00\x00"

    def test_string(self) -> None:
        """Test strings get a uint16 byte-length prefix and UTF-8 payload."""
        out = io.BytesIO()
        StreamWriter(out).write_string("hé")

        assert out.getvalue() == b"\x00\x03h\xc3\xa9"

    def test_string_too_long(self) -> None:
        """Test strings over 65535 UTF-8 bytes are rejected before writing."""
        out = io.BytesIO()
        with pytest.raises(EncodeError, match="65535"):
            StreamWriter(out).write_string("x" * 65536)
        assert out.getvalue() == b""

    def test_arrays(self) -> None:
        """Test int32-count-prefixed arrays."""
        out = io.BytesIO()
        writer = StreamWriter(out)
        writer.write_byte_array(b"\x01\x02")
        writer.write_int_array((1, -1))
        writer.write_long_array((2,))

        assert out.getvalue() == (
            b"\x00\x00\x00\x02\x01\x02"
            b"\x00\x00\x00\x02\x00\x00\x00\x01\xff\xff\xff\xff"
            b"\x00\x00\x00\x01\x00\x00\x00\x00\x00\x00\x00\x02"
        )

    def test_out_of_range_scalar(self) -> None:
        """Test out-of-range values raise EncodeError."""
        writer = StreamWriter(io.BytesIO())

        with pytest.raises(EncodeError):
            writer.write_byte(128)
        with pytest.raises(EncodeError):
            writer.write_int(2**31)
        with pytest.raises(EncodeError):
            writer.write_float(1e39)

    def test_out_of_range_array_writes_nothing(self) -> None:
        """Test a bad array element is caught before the count is written."""
        out = io.BytesIO()
        with pytest.raises(EncodeError, match="int32"):
            StreamWriter(out).write_int_array((1, 2**31))
        assert out.getvalue() == b""


class TestStreamReader:
    """Test StreamReader functionality."""

    def test_scalars(self) -> None:
        """Test reading fixed-width scalars."""
        reader = _reader(
            b"\x80" b"\xff\xfe" b"\x7f\xff\xff\xff" b"\x80\x00\x00\x00\x00\x00\x00\x00"
        )

        assert reader.read_byte() == -128
        assert reader.read_short() == -2
        assert reader.read_int() == 2**31 - 1
        assert reader.read_long() == -(2**63)
        assert reader.position() == 15

    def test_unsigned(self) -> None:
        """Test unsigned reads used for tag ids and string lengths."""
        reader = _reader(b"\xff\xff\xff")

        assert reader.read_ubyte() == 255
        assert reader.read_ushort() == 65535

    def test_floats(self) -> None:
        """Test reading IEEE-754 values, including special values."""
        reader = _reader(b"\x3f\x80\x00\x00" b"\x7f\xf0\x00\x00\x00\x00\x00\x00" b"\x7f\xc0\x00\x00")

        assert reader.read_float() == 1.0
        assert reader.read_double() == math.inf
        assert math.isnan(reader.read_float())

    def test_string(self) -> None:
        """Test reading a length-prefixed UTF-8 string."""
        reader = _reader(b"\x00\x03h\xc3\xa9rest")

        assert reader.read_string() == "hé"
        assert reader.position() == 5

    def test_string_invalid_utf8(self) -> None:
        """Test invalid UTF-8 is malformed input."""
        with pytest.raises(MalformedInputError, match="UTF-8"):
            _reader(b"\x00\x01\xff").read_string()

    def test_arrays(self) -> None:
        """Test reading count-prefixed arrays consumes exactly the declared bytes."""
        data = (
            b"\x00\x00\x00\x02\x01\x02"
            b"\x00\x00\x00\x02\x00\x00\x00\x01\xff\xff\xff\xff"
            b"\x00\x00\x00\x01\x00\x00\x00\x00\x00\x00\x00\x02"
            b"\xaa"
        )
        reader = _reader(data)

        assert reader.read_byte_array() == b"\x01\x02"
        assert reader.read_int_array() == (1, -1)
        assert reader.read_long_array() == (2,)
        assert reader.position() == len(data) - 1

    def test_negative_length(self) -> None:
        """Test negative declared lengths are malformed input."""
        with pytest.raises(MalformedInputError, match="Negative"):
            _reader(b"\xff\xff\xff\xff").read_byte_array()
        with pytest.raises(MalformedInputError, match="Negative"):
            _reader(b"\x80\x00\x00\x00").read_int_array()

    def test_short_read_is_truncation(self) -> None:
        """Test fewer bytes than declared raises TruncatedError."""
        with pytest.raises(TruncatedError):
            _reader(b"\x00\x00\x00\x05abc").read_byte_array()
        with pytest.raises(TruncatedError):
            _reader(b"\x00\x00").read_int()
        with pytest.raises(TruncatedError):
            _reader(b"").read_ubyte()

    def test_absurd_length_on_short_stream(self) -> None:
        """Test a huge declared length fails as truncation, not allocation."""
        with pytest.raises(TruncatedError):
            _reader(b"\x7f\xff\xff\xff" + b"\x00" * 16).read_long_array()

    def test_partial_reads_are_reassembled(self) -> None:
        """Test streams returning short reads are read until complete."""
        reader = StreamReader(_Trickle(b"\x00\x00\x00\x03abc\x00\x02hi"))

        assert reader.read_byte_array() == b"abc"
        assert reader.read_string() == "hi"
        assert reader.position() == 11
