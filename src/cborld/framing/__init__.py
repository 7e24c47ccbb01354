"""Chunked transport framing for cborld.

This module provides utilities for splitting payloads into self-describing
frames and reassembling them with integrity checks.
"""

from __future__ import annotations

from .chunked import (
    ChunkConfig,
    ChunkHeader,
    ChunkManifest,
    build_manifest,
    make_chunk_header,
    parse_chunk_header,
    reassemble_chunks,
    split_chunks,
)

__all__ = [
    "ChunkConfig",
    "ChunkHeader",
    "ChunkManifest",
    "split_chunks",
    "reassemble_chunks",
    "make_chunk_header",
    "parse_chunk_header",
    "build_manifest",
]
