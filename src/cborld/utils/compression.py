"""Gzip wrapping of encoded payloads."""

from __future__ import annotations

import gzip
import zlib

from ..exceptions import DecodeError


def gzip_payload(data: bytes) -> bytes:
    """Gzip-compress data with a fixed header timestamp so output is reproducible."""
    return gzip.compress(data, mtime=0)


def gunzip_payload(data: bytes) -> bytes:
    """Decompress gzip data.

    Raises:
        DecodeError: If data is not a valid gzip stream
    """
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise DecodeError(f"Invalid gzip payload: {e}") from e
