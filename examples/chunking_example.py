#!/usr/bin/env python3
"""Chunked transport example for cborld.

This example demonstrates:
1. Wrapping an encoded document in gzip
2. Splitting it into self-describing frames (one per QR code)
3. Reassembling frames received out of order
4. Detecting a corrupted frame
"""

from __future__ import annotations

import json
import random
from pathlib import Path

from cborld import (
    ChunkConfig,
    FramingError,
    build_manifest,
    decode,
    encode,
    gunzip_payload,
    gzip_payload,
    reassemble_chunks,
    split_chunks,
)


def main() -> None:
    """Run the chunking example."""
    print("=" * 60)
    print("cborld Chunked Transport Example")
    print("=" * 60)
    print()

    document_path = Path(__file__).with_name("sample_credential.jsonld")
    document = json.loads(document_path.read_text(encoding="utf-8"))

    payload = gzip_payload(encode(document))
    config = ChunkConfig(chunk_bytes=120)
    print(f"1. Payload: {len(payload)} bytes of gzip(CBOR)")
    print()

    print("2. Splitting into frames...")
    frames = split_chunks(payload, config)
    for index, frame in enumerate(frames):
        print(f"   Frame {index}: {len(frame)} bytes, header {frame[:16].hex()}")
    print(f"   Manifest: {build_manifest(payload, config).to_json()}")
    print()

    print("3. Reassembling shuffled frames...")
    received = list(frames)
    random.shuffle(received)
    restored = decode(gunzip_payload(reassemble_chunks(received)))
    print(f"   Document restored: {restored == document}")
    print()

    print("4. Demonstrating corruption detection...")
    corrupted = bytearray(frames[0])
    corrupted[20] ^= 0xFF
    try:
        reassemble_chunks([bytes(corrupted)] + frames[1:])
        print("   ✗ Error: Corruption not detected!")
    except FramingError as e:
        print(f"   ✓ Corruption detected: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
