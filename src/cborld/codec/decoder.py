"""Binary decoder for structured values.

This module provides the decode() function that converts the compact binary
form produced by encode() back into Python values.

Known limitation: tag items are unwrapped and their tag number is discarded,
so tagged values decode to the bare wrapped item.
"""

from __future__ import annotations

import json
import struct
from typing import Any

from ..exceptions import MalformedBinaryError
from .buffer import ByteReader
from .constants import (
    ARGUMENT_WIDTHS,
    FLOAT_DOUBLE,
    FLOAT_HALF,
    FLOAT_SINGLE,
    MAX_SAFE_LENGTH,
    SIMPLE_FALSE,
    SIMPLE_NULL,
    SIMPLE_ONE_BYTE,
    SIMPLE_TRUE,
    SIMPLE_UNDEFINED,
    UNDEFINED,
    MajorType,
)


def decode(data: bytes, *, maps_as_maps: bool = False) -> Any:
    """Decode binary data containing exactly one top-level item.

    Args:
        data: Binary data to decode
        maps_as_maps: If True, maps decode to dicts that keep their original
            key types (integer keys stay integers). If False (default), keys
            are converted to strings: integers to their decimal form, so
            {"0": "x"} survives a round-trip through integer-key encoding.

    Returns:
        Decoded value

    Raises:
        MalformedBinaryError: If data is empty, truncated, uses an unknown
            additional-info code, declares an oversized length, contains a
            half-precision float, or has bytes left after the first item

    Examples:
        ```python
        from cborld import decode

        decode(b"\\x20")                              # -1
        decode(b"\\xa1\\x00\\x61x")                      # {"0": "x"}
        decode(b"\\xa1\\x00\\x61x", maps_as_maps=True)   # {0: "x"}
        ```
    """
    if not data:
        raise MalformedBinaryError("Cannot decode empty data")

    decoder = _Decoder(ByteReader(data), maps_as_maps)
    try:
        value = decoder.decode_any()
    except IndexError as e:
        raise MalformedBinaryError(f"Truncated data: {e}") from e
    except RecursionError as e:
        raise MalformedBinaryError("Data nested too deeply to decode") from e

    if not decoder.reader.at_end():
        raise MalformedBinaryError(
            f"Extra bytes after top-level item: {decoder.reader.bytes_remaining()} unread"
        )
    return value


class _Decoder:
    """Decoding state for a single decode() call."""

    def __init__(self, reader: ByteReader, maps_as_maps: bool) -> None:
        self.reader = reader
        self.maps_as_maps = maps_as_maps

    def read_argument(self, additional_info: int) -> int:
        """Read the argument selected by the additional-info code.

        Raises:
            MalformedBinaryError: If the code is outside the defined set
            IndexError: If the argument is truncated
        """
        if additional_info < 24:
            return additional_info
        width = ARGUMENT_WIDTHS.get(additional_info)
        if width is None:
            raise MalformedBinaryError(f"Invalid additional info: {additional_info}")
        return self.reader.read_uint(width)

    def read_length(self, additional_info: int) -> int:
        length = self.read_argument(additional_info)
        if length > MAX_SAFE_LENGTH:
            raise MalformedBinaryError(f"Length {length} exceeds maximum {MAX_SAFE_LENGTH}")
        return length

    def decode_any(self) -> Any:
        initial = self.reader.read_byte()
        major = initial >> 5
        additional_info = initial & 0x1F

        if major == MajorType.UNSIGNED:
            return self.read_argument(additional_info)

        if major == MajorType.NEGATIVE:
            return -1 - self.read_argument(additional_info)

        if major == MajorType.BYTES:
            return self.reader.read_bytes(self.read_length(additional_info))

        if major == MajorType.TEXT:
            raw = self.reader.read_bytes(self.read_length(additional_info))
            try:
                return raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedBinaryError(f"Invalid UTF-8 in text item: {e}") from e

        if major == MajorType.ARRAY:
            length = self.read_length(additional_info)
            return [self.decode_any() for _ in range(length)]

        if major == MajorType.MAP:
            return self.decode_map(self.read_length(additional_info))

        if major == MajorType.TAG:
            # Tag number is read and dropped; only the wrapped item is returned
            self.read_argument(additional_info)
            return self.decode_any()

        return self.decode_simple_or_float(additional_info)

    def decode_map(self, length: int) -> dict[Any, Any]:
        result: dict[Any, Any] = {}
        for _ in range(length):
            key = self.decode_any()
            value = self.decode_any()
            if self.maps_as_maps:
                try:
                    result[key] = value
                except TypeError as e:
                    raise MalformedBinaryError(
                        f"Map key of type {type(key).__name__} is not hashable"
                    ) from e
            else:
                result[_plain_key(key)] = value
        return result

    def decode_simple_or_float(self, additional_info: int) -> Any:
        if additional_info == SIMPLE_FALSE:
            return False
        if additional_info == SIMPLE_TRUE:
            return True
        if additional_info == SIMPLE_NULL:
            return None
        if additional_info == SIMPLE_UNDEFINED:
            return UNDEFINED
        if additional_info == SIMPLE_ONE_BYTE:
            # One-byte simple values have no Python counterpart
            self.reader.read_byte()
            return None
        if additional_info == FLOAT_HALF:
            raise MalformedBinaryError("Half-precision floats are not supported")
        if additional_info == FLOAT_SINGLE:
            return struct.unpack(">f", self.reader.read_bytes(4))[0]
        if additional_info == FLOAT_DOUBLE:
            return struct.unpack(">d", self.reader.read_bytes(8))[0]
        raise MalformedBinaryError(f"Unknown simple/float additional info: {additional_info}")


def _plain_key(key: Any) -> str:
    """Convert a decoded map key to the string key of a plain dict."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool) or key is None or isinstance(key, float):
        return json.dumps(key)
    if isinstance(key, int):
        return str(key)
    raise MalformedBinaryError(
        f"Map key of type {type(key).__name__} cannot be used as a plain string key"
    )
