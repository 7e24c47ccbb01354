"""Chunked transport framing.

Large payloads (typically gzip-wrapped codec output) are split into frames
small enough for a single transport unit such as one QR code. Each frame is:
- [Magic (4 bytes)] [Total (2 bytes BE)] [Index (2 bytes BE)] [SHA-256 prefix (8 bytes)] [Chunk]

The hash prefix is taken over the whole payload, so every frame of a set
carries the same 8 bytes and the reassembled payload can be verified.
"""

from __future__ import annotations

import hashlib
import logging
import struct
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ConstructionError, FramingError

logger = logging.getLogger(__name__)

DEFAULT_MAGIC = b"CBR1"
DEFAULT_CHUNK_BYTES = 600
HEADER_BYTES = 16
DIGEST_PREFIX_BYTES = 8
MAX_CHUNKS = 0xFFFF

_HEADER = struct.Struct(">4sHH8s")


@dataclass
class ChunkConfig:
    """Configuration for splitting payloads into frames.

    Attributes:
        chunk_bytes: Maximum payload bytes per frame (default 600). Smaller
            chunks give larger frame counts but more robust scanning.
        magic: 4-byte tag opening every frame header (default b"CBR1")
    """

    chunk_bytes: int = DEFAULT_CHUNK_BYTES
    magic: bytes = DEFAULT_MAGIC

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.chunk_bytes <= 0:
            raise ConstructionError(f"chunk_bytes must be > 0, got {self.chunk_bytes}")

        if len(self.magic) != 4:
            raise ConstructionError(f"magic must be exactly 4 bytes, got {len(self.magic)}")


class ChunkHeader(NamedTuple):
    magic: bytes
    total: int
    index: int
    digest_prefix: bytes


class ChunkManifest(BaseModel):
    """Description of a frame set, written next to the frames."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    hash_hex: str = Field(alias="hashHex")
    header_bytes: int = Field(default=HEADER_BYTES, alias="headerBytes")
    chunk_bytes: int = Field(alias="chunkBytes")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def make_chunk_header(total: int, index: int, digest: bytes, magic: bytes = DEFAULT_MAGIC) -> bytes:
    """Build a 16-byte frame header.

    Args:
        total: Number of frames in the set (1-65535)
        index: Zero-based index of this frame
        digest: SHA-256 digest of the payload (at least 8 bytes)
        magic: 4-byte frame tag

    Raises:
        FramingError: If any field is out of range
    """
    if len(digest) < DIGEST_PREFIX_BYTES:
        raise FramingError(f"Digest must be at least {DIGEST_PREFIX_BYTES} bytes")
    if not 1 <= total <= MAX_CHUNKS:
        raise FramingError(f"Total chunk count must be 1-{MAX_CHUNKS}, got {total}")
    if not 0 <= index < total:
        raise FramingError(f"Chunk index {index} out of range for {total} chunks")
    if len(magic) != 4:
        raise FramingError(f"Magic must be exactly 4 bytes, got {len(magic)}")

    return _HEADER.pack(magic, total, index, digest[:DIGEST_PREFIX_BYTES])


def parse_chunk_header(frame: bytes, magic: bytes = DEFAULT_MAGIC) -> ChunkHeader:
    """Read the header of a frame.

    Raises:
        FramingError: If the frame is too short or carries the wrong magic
    """
    if len(frame) < HEADER_BYTES:
        raise FramingError(f"Frame too short for header: {len(frame)} bytes")

    header = ChunkHeader(*_HEADER.unpack_from(frame, 0))
    if header.magic != magic:
        raise FramingError(f"Bad frame magic: {header.magic!r}, expected {magic!r}")
    return header


def split_chunks(payload: bytes, config: Optional[ChunkConfig] = None) -> list[bytes]:
    """Split a payload into self-describing frames.

    An empty payload yields a single header-only frame.

    Args:
        payload: Bytes to split
        config: Chunking configuration (defaults to ChunkConfig())

    Returns:
        Frames in index order

    Raises:
        FramingError: If the payload needs more than 65535 frames

    Example:
        >>> frames = split_chunks(b"x" * 1500)
        >>> len(frames)
        3
        >>> reassemble_chunks(reversed(frames)) == b"x" * 1500
        True
    """
    config = config or ChunkConfig()
    digest = hashlib.sha256(payload).digest()

    total = max(1, -(-len(payload) // config.chunk_bytes))
    if total > MAX_CHUNKS:
        raise FramingError(
            f"Payload of {len(payload)} bytes needs {total} chunks (max {MAX_CHUNKS})"
        )

    frames = []
    for index in range(total):
        start = index * config.chunk_bytes
        chunk = payload[start : start + config.chunk_bytes]
        frames.append(make_chunk_header(total, index, digest, config.magic) + chunk)

    logger.debug(
        "Split %d bytes into %d chunks of up to %d bytes", len(payload), total, config.chunk_bytes
    )
    return frames


def reassemble_chunks(frames: Iterable[bytes], magic: bytes = DEFAULT_MAGIC) -> bytes:
    """Reassemble frames (in any order) and verify the payload hash.

    Exact duplicate frames are tolerated.

    Raises:
        FramingError: If frames disagree on total or hash, an index is
            missing, duplicates conflict, or the joined payload fails
            verification
    """
    chunks: dict[int, bytes] = {}
    total: Optional[int] = None
    digest_prefix: Optional[bytes] = None

    for frame in frames:
        header = parse_chunk_header(frame, magic)

        if total is None:
            total, digest_prefix = header.total, header.digest_prefix
        elif header.total != total or header.digest_prefix != digest_prefix:
            raise FramingError("Frames belong to different payloads")

        if header.index >= header.total:
            raise FramingError(f"Chunk index {header.index} out of range for {header.total}")

        chunk = frame[HEADER_BYTES:]
        existing = chunks.get(header.index)
        if existing is not None and existing != chunk:
            raise FramingError(f"Conflicting duplicate for chunk {header.index}")
        chunks[header.index] = chunk

    if total is None:
        raise FramingError("No frames to reassemble")

    missing = [index for index in range(total) if index not in chunks]
    if missing:
        raise FramingError(f"Missing chunks: {missing}")

    payload = b"".join(chunks[index] for index in range(total))
    if hashlib.sha256(payload).digest()[:DIGEST_PREFIX_BYTES] != digest_prefix:
        raise FramingError("Content hash mismatch after reassembly")
    logger.debug("Reassembled %d chunks into %d bytes", total, len(payload))
    return payload


def build_manifest(payload: bytes, config: Optional[ChunkConfig] = None) -> ChunkManifest:
    """Describe the frame set split_chunks() would produce for payload."""
    config = config or ChunkConfig()
    return ChunkManifest(
        total=max(1, -(-len(payload) // config.chunk_bytes)),
        hash_hex=hashlib.sha256(payload).hexdigest(),
        chunk_bytes=config.chunk_bytes,
    )
