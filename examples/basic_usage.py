#!/usr/bin/env python3
"""Basic usage example for cborld.

This example demonstrates:
1. Loading a document's contexts into a registry
2. Expanding the document's terms
3. Encoding to the binary form and decoding back
4. Comparing sizes against JSON
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from cborld import ContextRegistry, MappingDocumentResolver, decode, encode, parse, payload_stats

# Offline copy of the remote context the sample document references
CREDENTIALS_CONTEXT = {
    "@context": {
        "@protected": True,
        "id": "@id",
        "type": "@type",
        "VerifiableCredential": {
            "@id": "https://www.w3.org/2018/credentials#VerifiableCredential",
            "@context": {
                "@protected": True,
                "credentialSubject": "https://www.w3.org/2018/credentials#credentialSubject",
                "issuanceDate": "https://www.w3.org/2018/credentials#issuanceDate",
                "issuer": {"@id": "https://www.w3.org/2018/credentials#issuer", "@type": "@id"},
            },
        },
    }
}


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("cborld Basic Usage Example")
    print("=" * 60)
    print()

    document_path = Path(__file__).with_name("sample_credential.jsonld")
    document = json.loads(document_path.read_text(encoding="utf-8"))

    print("1. Loading contexts...")
    resolver = MappingDocumentResolver(
        {"https://www.w3.org/2018/credentials/v1": CREDENTIALS_CONTEXT}
    )
    registry = ContextRegistry("compression", resolver=resolver)
    asyncio.run(registry.load_document_contexts(document))

    print(f"   Contexts cached: {len(registry.context_cache)}")
    print(f"   Next term id: {registry.next_id}")
    for term in ("VerifiableCredential", "issuer", "name"):
        print(f"   {term}: {registry.term_id(term)}")
    print()

    print("2. Expanding terms...")
    expanded = parse(document, registry)
    print(json.dumps(expanded, indent=2))
    print()

    print("3. Encoding to binary...")
    encoded = encode(expanded)
    print(f"   Encoded size: {len(encoded)} bytes")
    print(f"   First bytes: {encoded[:16].hex()}")
    print()

    print("4. Verifying round-trip...")
    if decode(encoded) == expanded:
        print("   ✓ Round-trip successful! Documents match.")
    else:
        print("   ✗ Round-trip failed! Documents don't match.")
    print()

    print("5. Comparing to JSON...")
    stats = payload_stats(document)
    print(f"   JSON size: {stats.json_bytes} bytes")
    print(f"   CBOR size: {stats.cbor_bytes} bytes ({stats.cbor_ratio:.0%} of JSON)")
    print(f"   GZIP(CBOR) size: {stats.gzip_cbor_bytes} bytes ({stats.gzip_cbor_ratio:.0%} of JSON)")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
