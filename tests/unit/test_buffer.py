"""Unit tests for byte-level writing and reading."""

from __future__ import annotations

import pytest

from cborld.codec.buffer import ByteReader, ByteWriter


class TestByteWriter:
    """Test ByteWriter functionality."""

    def test_write_byte(self) -> None:
        """Test writing single bytes."""
        writer = ByteWriter()
        writer.write_byte(0x00)
        writer.write_byte(0xFF)
        assert writer.to_bytes() == b"\x00\xff"
        assert len(writer) == 2

    def test_write_byte_out_of_range(self) -> None:
        """Test that a byte value above 255 is rejected."""
        writer = ByteWriter()
        with pytest.raises(ValueError, match="0-255"):
            writer.write_byte(256)

    def test_write_uint_widths(self) -> None:
        """Test big-endian integers of every supported width."""
        writer = ByteWriter()
        writer.write_uint(0x12, 1)
        writer.write_uint(0x1234, 2)
        writer.write_uint(0x12345678, 4)
        writer.write_uint(0x0102030405060708, 8)
        assert writer.to_bytes() == bytes.fromhex("12" "1234" "12345678" "0102030405060708")

    def test_write_uint_overflow(self) -> None:
        """Test that values too large for the width are rejected."""
        writer = ByteWriter()
        with pytest.raises(ValueError, match="requires more than 2 bytes"):
            writer.write_uint(0x10000, 2)

    def test_write_uint_negative(self) -> None:
        """Test that negative values are rejected."""
        writer = ByteWriter()
        with pytest.raises(ValueError, match="non-negative"):
            writer.write_uint(-1, 1)

    def test_write_uint_bad_width(self) -> None:
        """Test that unsupported widths are rejected."""
        writer = ByteWriter()
        with pytest.raises(ValueError, match="num_bytes"):
            writer.write_uint(1, 3)

    def test_empty_writer(self) -> None:
        """Test that an empty writer yields no bytes."""
        assert ByteWriter().to_bytes() == b""


class TestByteReader:
    """Test ByteReader functionality."""

    def test_read_sequence(self) -> None:
        """Test reading mixed fields in order."""
        reader = ByteReader(bytes.fromhex("19" "03e8" "616263"))
        assert reader.read_byte() == 0x19
        assert reader.read_uint(2) == 1000
        assert reader.read_bytes(3) == b"abc"
        assert reader.at_end()

    def test_position_tracking(self) -> None:
        """Test position and remaining counters."""
        reader = ByteReader(b"\x01\x02\x03\x04")
        assert reader.position() == 0
        assert reader.bytes_remaining() == 4

        reader.read_uint(2)
        assert reader.position() == 2
        assert reader.bytes_remaining() == 2
        assert not reader.at_end()

    def test_read_past_end(self) -> None:
        """Test that reading past the end raises IndexError."""
        reader = ByteReader(b"\x01")
        reader.read_byte()
        with pytest.raises(IndexError):
            reader.read_byte()

    def test_read_bytes_insufficient(self) -> None:
        """Test that a short buffer raises IndexError on multi-byte reads."""
        reader = ByteReader(b"\x01\x02")
        with pytest.raises(IndexError, match="Not enough bytes"):
            reader.read_uint(4)

    def test_read_zero_bytes(self) -> None:
        """Test that reading zero bytes is allowed at the end."""
        reader = ByteReader(b"")
        assert reader.read_bytes(0) == b""

    def test_writer_reader_agree(self) -> None:
        """Test that the reader returns what the writer wrote."""
        writer = ByteWriter()
        writer.write_uint(2**64 - 1, 8)
        writer.write_bytes(b"tail")

        reader = ByteReader(writer.to_bytes())
        assert reader.read_uint(8) == 2**64 - 1
        assert reader.read_bytes(4) == b"tail"
