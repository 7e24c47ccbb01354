"""JSON-LD context processing for cborld.

This module provides the context registry that assigns stable integer ids to
context terms, together with the term definition model and document resolvers.
"""

from __future__ import annotations

from .keywords import KEYWORDS, nested_key
from .models import ContextEntry, Strategy, TermDefinition
from .registry import ContextRegistry, add_context, initialize, load_context
from .resolvers import DocumentResolver, HttpDocumentResolver, MappingDocumentResolver

__all__ = [
    "ContextRegistry",
    "initialize",
    "load_context",
    "add_context",
    "Strategy",
    "TermDefinition",
    "ContextEntry",
    "KEYWORDS",
    "nested_key",
    "DocumentResolver",
    "MappingDocumentResolver",
    "HttpDocumentResolver",
]
