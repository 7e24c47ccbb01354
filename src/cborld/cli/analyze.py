"""Document analysis CLI command."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..codec import encode
from ..framing import ChunkConfig, build_manifest, split_chunks
from ..framing.chunked import DEFAULT_CHUNK_BYTES
from ..utils import gzip_payload, human_size, payload_stats

logger = logging.getLogger(__name__)

BANNER = "cborld: CBOR-LD Codec"


def load_document(file_path: Path) -> Any:
    """Read and parse a JSON / JSON-LD file."""
    with file_path.open(encoding="utf-8") as f:
        return json.load(f)


def analyze_file(
    file_path: Path,
    emit_dir: Optional[Path] = None,
    chunk_bytes: int = DEFAULT_CHUNK_BYTES,
) -> bool:
    """Print a size report for a JSON-LD file and optionally emit framed chunks.

    Args:
        file_path: Path to the JSON-LD document
        emit_dir: Directory to write gzip(binary) chunk frames and manifest to
        chunk_bytes: Payload bytes per frame

    Returns:
        True if the document survived the encode/decode round-trip
    """
    document = load_document(file_path)
    stats = payload_stats(document)

    print("|" * 7, BANNER, "|" * 7)
    print(f"Document: {file_path}")
    print(f"Round-trip identical: {'yes' if stats.roundtrip_ok else 'no'}")
    print("--- Sizes ---")
    print(f"JSON       : {human_size(stats.json_bytes)} ({stats.json_bytes} bytes)")
    print(
        f"CBOR       : {human_size(stats.cbor_bytes)} ({stats.cbor_bytes} bytes)"
        f" - {stats.cbor_ratio:.1%} of JSON"
    )
    print(
        f"GZIP(CBOR) : {human_size(stats.gzip_cbor_bytes)} ({stats.gzip_cbor_bytes} bytes)"
        f" - {stats.gzip_cbor_ratio:.1%} of JSON"
    )

    if emit_dir is not None:
        emit_chunks(document, file_path.stem, emit_dir, ChunkConfig(chunk_bytes=chunk_bytes))

    return stats.roundtrip_ok


def emit_chunks(document: Any, base_name: str, out_dir: Path, config: ChunkConfig) -> list[Path]:
    """Write gzip(binary) of document as framed chunk files plus a manifest.

    Returns:
        Paths of the written frame files
    """
    payload = gzip_payload(encode(document))
    frames = split_chunks(payload, config)
    out_dir.mkdir(parents=True, exist_ok=True)

    width = len(str(len(frames)))
    paths = []
    for index, frame in enumerate(frames, start=1):
        path = out_dir / f"{base_name}_{index:0{width}d}of{len(frames)}.bin"
        path.write_bytes(frame)
        paths.append(path)

    manifest_path = out_dir / f"{base_name}.manifest.json"
    manifest_path.write_text(build_manifest(payload, config).to_json(), encoding="utf-8")

    logger.debug("Wrote %d frames to %s", len(frames), out_dir)
    print(f"Frames: {len(frames)} written to {out_dir}")
    print(f"Manifest: {manifest_path}")
    return paths
