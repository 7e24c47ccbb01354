"""Binary encoder for structured values.

This module provides the encode() function that converts Python values
(None, booleans, integers, floats, text, bytes, sequences and mappings) into
the compact typed binary form described in RFC 8949 (CBOR), restricted to
definite-length items and 8-byte floats.
"""

from __future__ import annotations

import re
import struct
from collections.abc import Mapping
from typing import Any

from ..exceptions import EncodeError
from .buffer import ByteWriter
from .constants import (
    AI_EIGHT_BYTES,
    AI_FOUR_BYTES,
    AI_ONE_BYTE,
    AI_TWO_BYTES,
    FLOAT_DOUBLE,
    MAX_UINT64,
    SIMPLE_FALSE,
    SIMPLE_NULL,
    SIMPLE_TRUE,
    SIMPLE_UNDEFINED,
    UNDEFINED,
    MajorType,
    header,
)

_UINT_STRING = re.compile(r"[0-9]+")


def encode(value: Any, *, numeric_string_keys_as_ints: bool = True) -> bytes:
    """Encode a value to compact binary format.

    Args:
        value: Value to encode. Supported: None, UNDEFINED, bool, int, float,
            str, bytes/bytearray/memoryview, list/tuple and any Mapping.
        numeric_string_keys_as_ints: If True (default), mapping keys made only
            of ASCII digits are written as unsigned integer keys when they fit
            in 64 bits. A text key "0" and an integer key 0 then become
            indistinguishable.

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If the value (or anything nested in it) is unsupported

    Examples:
        ```python
        from cborld import encode

        encode(-1)              # b'\\x20'
        encode({"0": "x"})      # b'\\xa1\\x00\\x61x'
        encode([1, [2, 3]])     # b'\\x82\\x01\\x82\\x02\\x03'
        ```
    """
    encoder = _Encoder(numeric_string_keys_as_ints)
    encoder.encode_any(value)
    return encoder.writer.to_bytes()


class _Encoder:
    """Encoding state for a single encode() call."""

    def __init__(self, numeric_string_keys_as_ints: bool) -> None:
        self.writer = ByteWriter()
        self.numeric_string_keys_as_ints = numeric_string_keys_as_ints

    def write_type_and_argument(self, major: MajorType, argument: int) -> None:
        """Write a header byte plus the shortest argument field holding `argument`."""
        if argument < 0 or argument > MAX_UINT64:
            raise EncodeError(f"Argument {argument} outside the 64-bit unsigned range")

        if argument < AI_ONE_BYTE:
            self.writer.write_byte(header(major, argument))
        elif argument <= 0xFF:
            self.writer.write_byte(header(major, AI_ONE_BYTE))
            self.writer.write_uint(argument, 1)
        elif argument <= 0xFFFF:
            self.writer.write_byte(header(major, AI_TWO_BYTES))
            self.writer.write_uint(argument, 2)
        elif argument <= 0xFFFFFFFF:
            self.writer.write_byte(header(major, AI_FOUR_BYTES))
            self.writer.write_uint(argument, 4)
        else:
            self.writer.write_byte(header(major, AI_EIGHT_BYTES))
            self.writer.write_uint(argument, 8)

    def write_int(self, value: int) -> None:
        if value >= 0:
            self.write_type_and_argument(MajorType.UNSIGNED, value)
        else:
            # Negative integers carry -1 - n so both signs share one argument routine
            self.write_type_and_argument(MajorType.NEGATIVE, -1 - value)

    def write_float(self, value: float) -> None:
        self.writer.write_byte(header(MajorType.SIMPLE_FLOAT, FLOAT_DOUBLE))
        self.writer.write_bytes(struct.pack(">d", value))

    def write_text(self, value: str) -> None:
        try:
            encoded = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodeError(f"Text is not encodable as UTF-8: {e}") from e
        self.write_type_and_argument(MajorType.TEXT, len(encoded))
        self.writer.write_bytes(encoded)

    def write_key(self, key: Any) -> None:
        if isinstance(key, str):
            if (
                self.numeric_string_keys_as_ints
                and _UINT_STRING.fullmatch(key)
                and int(key) <= MAX_UINT64
            ):
                self.write_type_and_argument(MajorType.UNSIGNED, int(key))
            else:
                self.write_text(key)
            return
        self.encode_any(key)

    def encode_any(self, value: Any) -> None:
        # Literals (bool before int: bool is an int subclass)
        if value is None:
            self.writer.write_byte(header(MajorType.SIMPLE_FLOAT, SIMPLE_NULL))
            return
        if value is UNDEFINED:
            self.writer.write_byte(header(MajorType.SIMPLE_FLOAT, SIMPLE_UNDEFINED))
            return
        if value is True:
            self.writer.write_byte(header(MajorType.SIMPLE_FLOAT, SIMPLE_TRUE))
            return
        if value is False:
            self.writer.write_byte(header(MajorType.SIMPLE_FLOAT, SIMPLE_FALSE))
            return

        if isinstance(value, int):
            self.write_int(value)
            return

        if isinstance(value, float):
            # Integer-valued numbers take the integer path when they fit in 64 bits
            if value.is_integer() and -MAX_UINT64 - 1 <= value <= MAX_UINT64:
                self.write_int(int(value))
            else:
                self.write_float(value)
            return

        if isinstance(value, str):
            self.write_text(value)
            return

        if isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
            self.write_type_and_argument(MajorType.BYTES, len(data))
            self.writer.write_bytes(data)
            return

        if isinstance(value, (list, tuple)):
            self.write_type_and_argument(MajorType.ARRAY, len(value))
            for item in value:
                self.encode_any(item)
            return

        if isinstance(value, Mapping):
            self.write_type_and_argument(MajorType.MAP, len(value))
            for key, item in value.items():
                self.write_key(key)
                self.encode_any(item)
            return

        raise EncodeError(f"Unsupported type: {type(value).__name__}")
