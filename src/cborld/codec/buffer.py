"""Byte-level writing and reading utilities.

This module provides the low-level buffer primitives used by the binary codec.
All multi-byte integers are big-endian.
"""

from __future__ import annotations


class ByteWriter:
    """Appends bytes and fixed-width integers to a growing buffer.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_byte(0x19)
        >>> writer.write_uint(1000, num_bytes=2)
        >>> writer.to_bytes()
        b'\\x19\\x03\\xe8'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_byte(self, value: int) -> None:
        """Write a single byte.

        Args:
            value: Byte value (0-255)

        Raises:
            ValueError: If value does not fit in one byte
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"write_byte requires a value 0-255, got {value}")
        self._buffer.append(value)

    def write_uint(self, value: int, num_bytes: int) -> None:
        """Write an unsigned integer using the specified number of bytes.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bytes: Field width in bytes (1, 2, 4 or 8)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bytes
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        if num_bytes not in (1, 2, 4, 8):
            raise ValueError(f"num_bytes must be 1, 2, 4 or 8, got {num_bytes}")

        max_value = (1 << (8 * num_bytes)) - 1
        if value > max_value:
            raise ValueError(f"Value {value} requires more than {num_bytes} bytes (max: {max_value})")

        self._buffer.extend(value.to_bytes(num_bytes, "big"))

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes.

        Args:
            data: Bytes to write
        """
        self._buffer.extend(data)

    def __len__(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return an immutable copy of the buffer."""
        return bytes(self._buffer)


class ByteReader:
    """Reads bytes and fixed-width integers from a buffer.

    Reads past the end raise IndexError; callers translate that into their
    own error type.

    Example:
        >>> reader = ByteReader(b"\\x19\\x03\\xe8")
        >>> reader.read_byte()
        25
        >>> reader.read_uint(2)
        1000
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a reader over the given data.

        Args:
            data: Byte buffer to read
        """
        self._data = bytes(data)
        self._position = 0

    def read_byte(self) -> int:
        """Read a single byte.

        Raises:
            IndexError: If no more bytes are available
        """
        if self._position >= len(self._data):
            raise IndexError("Attempted to read past end of buffer")

        value = self._data[self._position]
        self._position += 1
        return value

    def read_uint(self, num_bytes: int) -> int:
        """Read a big-endian unsigned integer of the given width.

        Args:
            num_bytes: Field width in bytes (1, 2, 4 or 8)

        Raises:
            ValueError: If num_bytes is not a supported width
            IndexError: If not enough bytes are available
        """
        if num_bytes not in (1, 2, 4, 8):
            raise ValueError(f"num_bytes must be 1, 2, 4 or 8, got {num_bytes}")
        return int.from_bytes(self.read_bytes(num_bytes), "big")

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes.

        Args:
            num_bytes: Number of bytes to read

        Raises:
            IndexError: If not enough bytes are available
        """
        if num_bytes < 0:
            raise ValueError(f"num_bytes must be non-negative, got {num_bytes}")
        if self._position + num_bytes > len(self._data):
            raise IndexError(
                f"Not enough bytes: need {num_bytes}, have {len(self._data) - self._position}"
            )

        result = self._data[self._position : self._position + num_bytes]
        self._position += num_bytes
        return result

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def position(self) -> int:
        """Return the current read position in bytes."""
        return self._position

    def at_end(self) -> bool:
        """Return True when every byte has been consumed."""
        return self._position >= len(self._data)
