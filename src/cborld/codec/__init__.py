"""Compact binary codec for cborld.

This module provides encoding and decoding of structured values to and from
a CBOR-style typed binary form.
"""

from __future__ import annotations

from .buffer import ByteReader, ByteWriter
from .constants import UNDEFINED, MajorType
from .decoder import decode
from .encoder import encode

__all__ = [
    "encode",
    "decode",
    "UNDEFINED",
    "MajorType",
    "ByteReader",
    "ByteWriter",
]
