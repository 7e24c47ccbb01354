"""Document resolvers for remote contexts.

The registry does not fetch anything itself: it awaits an injected resolver,
an async callable taking a URL and returning the parsed JSON document. Timeout
and retry policy belong to the resolver.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Protocol

import httpx

from ..exceptions import ResolutionError

logger = logging.getLogger(__name__)

JSONLD_MIME_TYPE = "application/ld+json"
REQUEST_HEADERS = {"Accept": f"{JSONLD_MIME_TYPE}, application/json;q=0.9"}


class DocumentResolver(Protocol):
    async def __call__(self, url: str) -> Mapping[str, Any]:
        ...


class MappingDocumentResolver:
    """Resolve URLs from an in-memory mapping of preloaded documents.

    Every call is recorded in `calls`, which makes the resolver handy for
    offline processing and for asserting fetch counts in tests.

    Example:
        >>> resolver = MappingDocumentResolver({
        ...     "https://example.com/ctx": {"@context": {"nick": "https://schema.org/alternateName"}},
        ... })
    """

    def __init__(self, documents: Mapping[str, Mapping[str, Any]]) -> None:
        self.documents = dict(documents)
        self.calls: list[str] = []

    async def __call__(self, url: str) -> Mapping[str, Any]:
        self.calls.append(url)
        try:
            return self.documents[url]
        except KeyError:
            raise ResolutionError(f"No document registered for {url}") from None


class HttpDocumentResolver:
    """Fetch JSON-LD documents over HTTP(S) with an async httpx client.

    Redirects are followed. Non-2xx responses, transport failures and
    timeouts raise ResolutionError.

    Attributes:
        timeout: Request timeout in seconds, or None to wait indefinitely
        allow_http: If False, only https: URLs are fetched
    """

    def __init__(self, timeout: Optional[float] = 30.0, allow_http: bool = True) -> None:
        self.timeout = timeout
        self.allow_http = allow_http

    async def __call__(self, url: str) -> Mapping[str, Any]:
        allowed = ("https:", "http:") if self.allow_http else ("https:",)
        if not url.startswith(allowed):
            raise ResolutionError(f"Not allowed to load URL: {url}")

        logger.debug("GET %s", url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url, headers=REQUEST_HEADERS)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ResolutionError(f"Failed to fetch {url}: {e}") from e

        try:
            document = response.json()
        except ValueError as e:
            raise ResolutionError(f"Invalid JSON at {url}: {e}") from e

        if not isinstance(document, Mapping):
            raise ResolutionError(f"Document at {url} is not a JSON object")
        return document
