"""Utility functions for cborld.

This module provides gzip wrapping and payload size reporting.
"""

from __future__ import annotations

from .compression import gunzip_payload, gzip_payload
from .sizing import PayloadStats, human_size, payload_stats

__all__ = [
    "gzip_payload",
    "gunzip_payload",
    "PayloadStats",
    "payload_stats",
    "human_size",
]
