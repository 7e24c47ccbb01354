"""Unit tests for chunked transport framing."""

from __future__ import annotations

import hashlib
import json
import random
import struct

import pytest

from cborld.exceptions import ConstructionError, FramingError
from cborld.framing import (
    ChunkConfig,
    ChunkHeader,
    build_manifest,
    make_chunk_header,
    parse_chunk_header,
    reassemble_chunks,
    split_chunks,
)


class TestChunkConfig:
    """Test chunk configuration validation."""

    def test_defaults(self) -> None:
        """Test default chunk size and magic."""
        config = ChunkConfig()
        assert config.chunk_bytes == 600
        assert config.magic == b"CBR1"

    @pytest.mark.parametrize("chunk_bytes", [0, -1])
    def test_invalid_chunk_bytes(self, chunk_bytes: int) -> None:
        """Test that non-positive chunk sizes are rejected."""
        with pytest.raises(ConstructionError, match="chunk_bytes"):
            ChunkConfig(chunk_bytes=chunk_bytes)

    @pytest.mark.parametrize("magic", [b"", b"CBR", b"CBR12"])
    def test_invalid_magic(self, magic: bytes) -> None:
        """Test that magic tags must be exactly 4 bytes."""
        with pytest.raises(ValueError, match="magic"):
            ChunkConfig(magic=magic)


class TestHeader:
    """Test the 16-byte frame header."""

    def test_layout(self) -> None:
        """Test magic, big-endian counters and hash prefix positions."""
        digest = hashlib.sha256(b"payload").digest()
        header = make_chunk_header(total=300, index=2, digest=digest)

        assert len(header) == 16
        assert header[:4] == b"CBR1"
        assert header[4:6] == b"\x01\x2c"
        assert header[6:8] == b"\x00\x02"
        assert header[8:] == digest[:8]

    def test_parse(self) -> None:
        """Test reading a header back."""
        digest = hashlib.sha256(b"payload").digest()
        frame = make_chunk_header(3, 1, digest) + b"body"
        assert parse_chunk_header(frame) == ChunkHeader(b"CBR1", 3, 1, digest[:8])

    def test_parse_short_frame(self) -> None:
        """Test that frames shorter than the header are rejected."""
        with pytest.raises(FramingError, match="too short"):
            parse_chunk_header(b"CBR1\x00\x01")

    def test_parse_bad_magic(self) -> None:
        """Test that a foreign magic tag is rejected."""
        frame = make_chunk_header(1, 0, bytes(32), magic=b"XXXX")
        with pytest.raises(FramingError, match="Bad frame magic"):
            parse_chunk_header(frame)
        assert parse_chunk_header(frame, magic=b"XXXX").magic == b"XXXX"

    @pytest.mark.parametrize(
        ("total", "index", "digest", "match"),
        [
            (0, 0, bytes(32), "Total chunk count"),
            (65536, 0, bytes(32), "Total chunk count"),
            (2, 2, bytes(32), "out of range"),
            (1, 0, bytes(4), "Digest"),
        ],
    )
    def test_make_header_validation(self, total: int, index: int, digest: bytes, match: str) -> None:
        """Test header field range checks."""
        with pytest.raises(FramingError, match=match):
            make_chunk_header(total, index, digest)


class TestSplitAndReassemble:
    """Test splitting payloads into frames and joining them back."""

    def test_split_sizes(self) -> None:
        """Test frame count and per-frame sizes."""
        payload = bytes(range(256)) * 6
        frames = split_chunks(payload)

        assert len(frames) == 3
        assert [len(frame) for frame in frames] == [616, 616, 352]
        for index, frame in enumerate(frames):
            _, total, frame_index, _ = struct.unpack(">4sHH8s", frame[:16])
            assert total == 3
            assert frame_index == index

    def test_roundtrip_in_order(self) -> None:
        """Test reassembly of frames in order."""
        payload = b"hello world" * 200
        assert reassemble_chunks(split_chunks(payload, ChunkConfig(chunk_bytes=100))) == payload

    def test_roundtrip_shuffled(self) -> None:
        """Test that frame order does not matter."""
        payload = bytes(random.Random(7).getrandbits(8) for _ in range(5000))
        frames = split_chunks(payload, ChunkConfig(chunk_bytes=333))
        random.Random(3).shuffle(frames)
        assert reassemble_chunks(frames) == payload

    def test_duplicates_tolerated(self) -> None:
        """Test that re-scanned identical frames are accepted."""
        frames = split_chunks(b"x" * 1300)
        assert reassemble_chunks(frames + frames[:1]) == b"x" * 1300

    def test_empty_payload(self) -> None:
        """Test that an empty payload gives one header-only frame."""
        frames = split_chunks(b"")
        assert len(frames) == 1
        assert len(frames[0]) == 16
        assert reassemble_chunks(frames) == b""

    def test_single_frame(self) -> None:
        """Test a payload that fits in one frame."""
        frames = split_chunks(b"small")
        assert len(frames) == 1
        assert parse_chunk_header(frames[0]).total == 1

    def test_custom_magic(self) -> None:
        """Test framing with a different magic tag."""
        frames = split_chunks(b"data", ChunkConfig(magic=b"ZZ01"))
        assert frames[0][:4] == b"ZZ01"
        assert reassemble_chunks(frames, magic=b"ZZ01") == b"data"
        with pytest.raises(FramingError):
            reassemble_chunks(frames)

    def test_missing_chunk(self) -> None:
        """Test that a gap in the frame set is reported."""
        frames = split_chunks(b"x" * 1300)
        with pytest.raises(FramingError, match=r"Missing chunks: \[1\]"):
            reassemble_chunks([frames[0], frames[2]])

    def test_no_frames(self) -> None:
        """Test that an empty frame list is rejected."""
        with pytest.raises(FramingError, match="No frames"):
            reassemble_chunks([])

    def test_tampered_chunk(self) -> None:
        """Test that corrupted chunk data fails hash verification."""
        frames = split_chunks(b"x" * 1300)
        frames[1] = frames[1][:20] + b"y" + frames[1][21:]
        with pytest.raises(FramingError, match="hash mismatch"):
            reassemble_chunks(frames)

    def test_conflicting_duplicates(self) -> None:
        """Test that two different frames claiming one index are rejected."""
        frames = split_chunks(b"x" * 1300)
        forged = frames[0][:16] + b"y" * 600
        with pytest.raises(FramingError, match="Conflicting duplicate"):
            reassemble_chunks(frames + [forged])

    def test_mixed_payloads(self) -> None:
        """Test that frames from different payloads cannot be combined."""
        first = split_chunks(b"a" * 1300)
        second = split_chunks(b"b" * 1300)
        with pytest.raises(FramingError, match="different payloads"):
            reassemble_chunks([first[0], second[1], first[2]])

    def test_index_out_of_range(self) -> None:
        """Test that a frame whose index exceeds its total is rejected."""
        bad = struct.pack(">4sHH8s", b"CBR1", 1, 5, bytes(8))
        with pytest.raises(FramingError, match="out of range"):
            reassemble_chunks([bad])

    def test_too_many_chunks(self) -> None:
        """Test that payloads needing more than 65535 frames are rejected."""
        with pytest.raises(FramingError, match="max 65535"):
            split_chunks(bytes(65536), ChunkConfig(chunk_bytes=1))


class TestManifest:
    """Test frame set manifests."""

    def test_manifest_fields(self) -> None:
        """Test manifest values and camelCase serialization."""
        payload = b"x" * 1300
        manifest = build_manifest(payload)

        assert manifest.total == 3
        assert manifest.hash_hex == hashlib.sha256(payload).hexdigest()
        assert manifest.header_bytes == 16
        assert manifest.chunk_bytes == 600

        data = json.loads(manifest.to_json())
        assert data == {
            "total": 3,
            "hashHex": hashlib.sha256(payload).hexdigest(),
            "headerBytes": 16,
            "chunkBytes": 600,
        }

    def test_manifest_matches_split(self) -> None:
        """Test that the manifest total matches the actual frame count."""
        payload = b"z" * 999
        config = ChunkConfig(chunk_bytes=100)
        assert build_manifest(payload, config).total == len(split_chunks(payload, config))
