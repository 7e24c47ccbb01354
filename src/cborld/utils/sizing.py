"""Payload size calculation utilities.

This module compares the size of a document as compact JSON, as encoded
binary and as gzip-wrapped binary.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..codec import decode, encode
from .compression import gzip_payload


@dataclass
class PayloadStats:
    """Serialization sizes for one document."""

    json_bytes: int
    cbor_bytes: int
    gzip_cbor_bytes: int
    roundtrip_ok: bool

    @property
    def cbor_ratio(self) -> float:
        """Binary size as a fraction of JSON size (lower = better)."""
        if self.json_bytes == 0:
            return 0.0
        return self.cbor_bytes / self.json_bytes

    @property
    def gzip_cbor_ratio(self) -> float:
        """Gzipped binary size as a fraction of JSON size."""
        if self.json_bytes == 0:
            return 0.0
        return self.gzip_cbor_bytes / self.json_bytes


def payload_stats(document: Any) -> PayloadStats:
    """Measure a document in each serialization and check the round-trip.

    Args:
        document: JSON-compatible value

    Returns:
        PayloadStats with sizes and the round-trip result

    Raises:
        EncodeError: If the document contains unsupported values

    Example:
        >>> stats = payload_stats({"name": "Charlie", "age": 42})
        >>> stats.cbor_bytes < stats.json_bytes
        True
    """
    json_bytes = json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    cbor_bytes = encode(document)

    return PayloadStats(
        json_bytes=len(json_bytes),
        cbor_bytes=len(cbor_bytes),
        gzip_cbor_bytes=len(gzip_payload(cbor_bytes)),
        roundtrip_ok=decode(cbor_bytes) == document,
    )


def human_size(num_bytes: int) -> str:
    """Format a byte count as B, KB or MB."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024**2:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / 1024**2:.1f} MB"
