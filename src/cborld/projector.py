"""Document projection (term expansion).

parse() rewrites the keys of a compacted JSON-LD document to the IRIs given by
the registry's term definitions, and turns string values of @id-typed terms
into {"@id": value} references. It is a lightweight expansion: @vocab, @base,
language maps, containers and @reverse are not interpreted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .context.models import TermDefinition
from .context.registry import ContextRegistry
from .exceptions import UnresolvedTermError


def parse(document: Mapping[str, Any], registry: ContextRegistry) -> dict[str, Any]:
    """Expand a compacted document using the registry's term maps.

    Term maps registered under "<type>::nested" for the document's @type
    values are consulted before all other maps. Neither the document nor the
    registry is modified.

    Args:
        document: Compacted document (its @context entries already loaded)
        registry: Populated context registry

    Returns:
        Expanded document

    Raises:
        UnresolvedTermError: If a matching term definition has no @id

    Example:
        ```python
        registry = ContextRegistry("compression")
        registry.add_context({"homepage": {"@id": "https://schema.org/url", "@type": "@id"}})
        parse({"homepage": "https://example.com"}, registry)
        # {"https://schema.org/url": {"@id": "https://example.com"}}
        ```
    """
    term_maps = registry.term_maps(_declared_types(document))
    result: dict[str, Any] = {}

    for key, value in document.items():
        if key == "@context":
            continue

        definition = _lookup(term_maps, key)
        expanded_key = key if definition is None else definition.id

        if isinstance(value, Mapping):
            result[expanded_key] = parse(value, registry)
        elif isinstance(value, (list, tuple)):
            result[expanded_key] = [
                parse(item, registry) if isinstance(item, Mapping) else item for item in value
            ]
        elif definition is not None and definition.is_reference and isinstance(value, str):
            result[expanded_key] = {"@id": value}
        else:
            result[expanded_key] = value

    return result


def _declared_types(document: Mapping[str, Any]) -> list[str]:
    declared = document.get("@type")
    if isinstance(declared, str):
        return [declared]
    if isinstance(declared, list):
        return [item for item in declared if isinstance(item, str)]
    return []


def _lookup(term_maps: list[dict[str, TermDefinition]], key: str) -> Optional[TermDefinition]:
    for term_map in term_maps:
        definition = term_map.get(key)
        if definition is None:
            continue
        if definition.id is None:
            raise UnresolvedTermError(f"Term {key!r} has no @id")
        return definition
    return None
