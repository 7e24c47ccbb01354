"""Context registry: term-id dictionary and parsed-context cache.

A ContextRegistry is created once per document-processing session. Loading
contexts into it assigns every new term the next free even integer id,
starting at 100, in lexicographic term order. Producer and consumer therefore
agree on ids without exchanging the table.

The registry is not safe for concurrent mutation: run one load_context() at a
time per registry.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional, Sequence, Union

from ..exceptions import ConstructionError, InvalidContextError, ResolutionError
from .keywords import FIRST_TERM_ID, KEYWORDS, TERM_ID_STEP, nested_key
from .models import ContextEntry, Strategy, TermDefinition
from .resolvers import DocumentResolver

logger = logging.getLogger(__name__)

ContextIdentifier = Union[str, Mapping[str, Any]]


class ContextRegistry:
    """Growing term dictionary plus the cache of processed contexts.

    Attributes:
        keyword_table: Read-only keyword -> id table (28 entries, ids 0..54)
        term_table: Term -> id, seeded from keyword_table, only ever grows
        reverse_table: Id -> term under the decompression strategy, else None
        context_cache: Cache key -> ContextEntry; cached definitions are never replaced
        next_id: Next id handed to a new term

    Example:
        ```python
        import asyncio
        from cborld import ContextRegistry

        registry = ContextRegistry("compression")
        registry.add_context({"name": "https://schema.org/name"})
        registry.term_id("name")  # 100

        entry = asyncio.run(registry.load_context("https://example.com/ctx"))
        ```
    """

    def __init__(
        self,
        strategy: Union[Strategy, str],
        resolver: Optional[DocumentResolver] = None,
    ) -> None:
        """Initialize a registry.

        Args:
            strategy: "compression" or "decompression"
            resolver: Async callable used to fetch uncached string contexts

        Raises:
            ConstructionError: If strategy is not a known value
        """
        try:
            self._strategy = Strategy(strategy)
        except ValueError as err:
            raise ConstructionError(f"Invalid strategy: {strategy!r}") from err

        self._resolver = resolver
        self.keyword_table: Mapping[str, int] = MappingProxyType(dict(KEYWORDS))
        self.term_table: dict[str, int] = dict(self.keyword_table)
        self.reverse_table: Optional[dict[int, str]] = None
        if self._strategy is Strategy.DECOMPRESSION:
            self.reverse_table = {term_id: term for term, term_id in self.term_table.items()}
        self.context_cache: dict[str, ContextEntry] = {}
        self.next_id = FIRST_TERM_ID

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    def term_id(self, term: str) -> Optional[int]:
        """Return the id assigned to a term or keyword, if any."""
        return self.term_table.get(term)

    def term_for_id(self, term_id: int) -> Optional[str]:
        """Return the term for an id (decompression strategy only)."""
        if self.reverse_table is None:
            return None
        return self.reverse_table.get(term_id)

    async def load_context(self, identifier: ContextIdentifier) -> ContextEntry:
        """Load a context by URL or from an inline mapping.

        A URL that is already cached is returned as-is. Otherwise the resolver
        is awaited once and the document's @context member is added under the
        URL. All allocation happens after the fetch completes, so a cancelled
        fetch leaves the registry untouched.

        Args:
            identifier: Context URL or inline context mapping

        Returns:
            The cached or newly built ContextEntry

        Raises:
            ResolutionError: If the URL cannot be resolved to a context
            InvalidContextError: If identifier or the fetched context is malformed
        """
        if isinstance(identifier, str):
            cached = self.context_cache.get(identifier)
            if cached is not None:
                logger.debug("Context cache hit: %s", identifier)
                return cached

            context = await self._fetch_context(identifier)
            return self.add_context(context, identifier)

        if isinstance(identifier, Mapping):
            return self.add_context(identifier)

        raise InvalidContextError(
            f"Context identifier must be a URL or mapping, got {type(identifier).__name__}"
        )

    async def load_document_contexts(self, document: Mapping[str, Any]) -> list[ContextEntry]:
        """Load every entry of a document's @context member, in order.

        Args:
            document: Compacted JSON-LD document

        Returns:
            One ContextEntry per @context entry (empty if there is none)
        """
        contexts = document.get("@context")
        if contexts is None:
            return []
        if not isinstance(contexts, list):
            contexts = [contexts]

        entries = []
        for identifier in contexts:
            entries.append(await self.load_context(identifier))
        return entries

    def add_context(self, context: Any, cache_key: str = "") -> ContextEntry:
        """Process a context mapping and register its terms.

        Terms are visited in lexicographic order; keywords and null
        definitions are skipped. New terms get the next id. Nested contexts
        are registered under "<term>::nested". If cache_key already holds a
        different context, its definitions are kept and only terms it lacks
        are merged in. The whole call is atomic: on error the registry is
        restored to its previous state.

        Args:
            context: Context mapping
            cache_key: Key to store the entry under. Empty means the canonical
                JSON serialization of the context.

        Returns:
            The new (or already cached) ContextEntry

        Raises:
            InvalidContextError: If context or one of its definitions is malformed
        """
        snapshot = self._snapshot()
        try:
            return self._add_context(context, cache_key)
        except Exception:
            self._restore(snapshot)
            raise

    def term_maps(self, types: Sequence[str] = ()) -> list[dict[str, TermDefinition]]:
        """Term maps in lookup priority order.

        Maps registered under "<type>::nested" for the given types come first,
        followed by every cached map in insertion order.
        """
        scoped = []
        for type_name in types:
            entry = self.context_cache.get(nested_key(type_name))
            if entry is not None:
                scoped.append(entry.term_map)
        return scoped + [entry.term_map for entry in self.context_cache.values()]

    async def _fetch_context(self, url: str) -> Any:
        if self._resolver is None:
            raise ResolutionError(f"No resolver configured to load {url}")

        logger.debug("Resolving remote context: %s", url)
        try:
            document = await self._resolver(url)
        except ResolutionError:
            raise
        except Exception as err:
            raise ResolutionError(f"Failed to resolve {url}: {err}") from err

        if not isinstance(document, Mapping) or "@context" not in document:
            raise ResolutionError(f"Document at {url} has no @context member")
        return document["@context"]

    def _add_context(self, context: Any, cache_key: str) -> ContextEntry:
        if not isinstance(context, Mapping):
            raise InvalidContextError(
                f"Context must be a mapping, got {type(context).__name__}"
            )

        key = cache_key or _canonical_key(context)
        cached = self.context_cache.get(key)
        if cached is not None and cached.context == context:
            logger.debug("Context already registered under %s", _short(key))
            return cached

        entry = ContextEntry(context=context)
        is_protected = context.get("@protected") is True
        allocated = 0

        for term in sorted(context):
            if term in self.keyword_table:
                continue
            raw = context[term]
            if raw is None:
                continue

            definition = TermDefinition.from_raw(raw, protected=is_protected)
            entry.term_map[term] = definition

            if definition.context is not None:
                logger.debug("Registering nested context for term %s", term)
                self._add_context(definition.context, nested_key(term))

            if term not in self.term_table:
                self._allocate(term)
                allocated += 1

        logger.info(
            "Added context %s: %d terms, %d new ids", _short(key), len(entry.term_map), allocated
        )
        return self._store(key, entry)

    def _store(self, key: str, entry: ContextEntry) -> ContextEntry:
        cached = self.context_cache.get(key)
        if cached is None:
            self.context_cache[key] = entry
            return entry

        # Definitions already cached under key win; only unseen terms are merged in
        new_terms = {
            term: definition
            for term, definition in entry.term_map.items()
            if term not in cached.term_map
        }
        if not new_terms:
            logger.debug("Keeping existing cache entry for %s", _short(key))
            return cached

        logger.debug("Merging %d new terms into cache entry %s", len(new_terms), _short(key))
        merged = ContextEntry(context=cached.context, term_map={**cached.term_map, **new_terms})
        self.context_cache[key] = merged
        return merged

    def _allocate(self, term: str) -> int:
        term_id = self.next_id
        self.next_id += TERM_ID_STEP
        self.term_table[term] = term_id
        if self.reverse_table is not None:
            self.reverse_table[term_id] = term
        logger.debug("Allocated id %d for term %s", term_id, term)
        return term_id

    def _snapshot(self) -> tuple[Any, ...]:
        return (
            dict(self.term_table),
            None if self.reverse_table is None else dict(self.reverse_table),
            dict(self.context_cache),
            self.next_id,
        )

    def _restore(self, snapshot: tuple[Any, ...]) -> None:
        self.term_table, self.reverse_table, self.context_cache, self.next_id = snapshot


def initialize(
    strategy: Union[Strategy, str], resolver: Optional[DocumentResolver] = None
) -> ContextRegistry:
    """Create a fresh registry for one processing session."""
    return ContextRegistry(strategy, resolver)


async def load_context(registry: ContextRegistry, identifier: ContextIdentifier) -> ContextEntry:
    """Load a context into registry. See ContextRegistry.load_context()."""
    return await registry.load_context(identifier)


def add_context(registry: ContextRegistry, context: Any, cache_key: str = "") -> ContextEntry:
    """Add a context mapping to registry. See ContextRegistry.add_context()."""
    return registry.add_context(context, cache_key)


def _canonical_key(context: Mapping[str, Any]) -> str:
    try:
        return json.dumps(context, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as err:
        raise InvalidContextError(f"Context is not JSON-serializable: {err}") from err


def _short(key: str, limit: int = 60) -> str:
    return key if len(key) <= limit else key[: limit - 3] + "..."
