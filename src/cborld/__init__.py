"""cborld: CBOR-LD style codec and context dictionary

A Python library for compact binary encoding of JSON-LD documents. It pairs a
CBOR-style binary codec with a deterministic term dictionary built from
JSON-LD contexts, so producers and consumers agree on small integer ids for
vocabulary terms without exchanging the table.

Key Features:
- Typed binary codec (integers up to 64 bits, doubles, text, bytes, arrays, maps)
- Deterministic term-id allocation from local, remote and nested contexts
- Type-scoped document expansion
- Chunked transport framing with SHA-256 integrity checks

Quick Start:
    >>> import asyncio
    >>> from cborld import ContextRegistry, encode, decode, parse
    >>>
    >>> doc = {
    ...     "@context": {"name": "https://schema.org/name"},
    ...     "name": "Charlie",
    ... }
    >>> registry = ContextRegistry("compression")
    >>> entries = asyncio.run(registry.load_document_contexts(doc))
    >>> registry.term_id("name")
    100
    >>> parse(doc, registry)
    {'https://schema.org/name': 'Charlie'}
    >>> decode(encode(doc)) == doc
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import UNDEFINED, decode, encode
from .context import (
    KEYWORDS,
    ContextEntry,
    ContextRegistry,
    DocumentResolver,
    HttpDocumentResolver,
    MappingDocumentResolver,
    Strategy,
    TermDefinition,
    add_context,
    initialize,
    load_context,
)
from .exceptions import (
    CborldError,
    ConstructionError,
    DecodeError,
    EncodeError,
    FramingError,
    InvalidContextError,
    MalformedBinaryError,
    ResolutionError,
    UnresolvedTermError,
)
from .framing import ChunkConfig, build_manifest, reassemble_chunks, split_chunks
from .projector import parse
from .utils import PayloadStats, gunzip_payload, gzip_payload, payload_stats

__all__ = [
    # Codec
    "encode",
    "decode",
    "UNDEFINED",
    # Context registry
    "ContextRegistry",
    "initialize",
    "load_context",
    "add_context",
    "Strategy",
    "TermDefinition",
    "ContextEntry",
    "KEYWORDS",
    # Resolvers
    "DocumentResolver",
    "MappingDocumentResolver",
    "HttpDocumentResolver",
    # Projection
    "parse",
    # Exceptions
    "CborldError",
    "ConstructionError",
    "EncodeError",
    "DecodeError",
    "MalformedBinaryError",
    "InvalidContextError",
    "UnresolvedTermError",
    "ResolutionError",
    "FramingError",
    # Framing
    "ChunkConfig",
    "split_chunks",
    "reassemble_chunks",
    "build_manifest",
    # Payload utilities
    "gzip_payload",
    "gunzip_payload",
    "PayloadStats",
    "payload_stats",
    # Version
    "__version__",
]
