"""Wire-level constants for the binary codec.

Every item starts with one header byte: the top 3 bits carry the major type,
the low 5 bits the additional information (argument).
"""

from __future__ import annotations

import enum
from typing import Final


class MajorType(enum.IntEnum):
    """Major type tags (top 3 bits of the header byte)."""

    UNSIGNED = 0
    NEGATIVE = 1
    BYTES = 2
    TEXT = 3
    ARRAY = 4
    MAP = 5
    TAG = 6
    SIMPLE_FLOAT = 7


# Additional-info codes selecting a 1/2/4/8-byte argument
AI_ONE_BYTE: Final = 24
AI_TWO_BYTES: Final = 25
AI_FOUR_BYTES: Final = 26
AI_EIGHT_BYTES: Final = 27

ARGUMENT_WIDTHS: Final = {
    AI_ONE_BYTE: 1,
    AI_TWO_BYTES: 2,
    AI_FOUR_BYTES: 4,
    AI_EIGHT_BYTES: 8,
}

# Simple values under major type 7
SIMPLE_FALSE: Final = 20
SIMPLE_TRUE: Final = 21
SIMPLE_NULL: Final = 22
SIMPLE_UNDEFINED: Final = 23
SIMPLE_ONE_BYTE: Final = 24
FLOAT_HALF: Final = 25
FLOAT_SINGLE: Final = 26
FLOAT_DOUBLE: Final = 27

MAX_UINT64: Final = (1 << 64) - 1

# Largest length the decoder will accept
MAX_SAFE_LENGTH: Final = (1 << 53) - 1


def header(major: MajorType, additional_info: int) -> int:
    """Combine a major type and additional info into a header byte."""
    return ((major & 0x7) << 5) | (additional_info & 0x1F)


class _Undefined:
    """Singleton standing in for the CBOR "undefined" simple value."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED: Final = _Undefined()
