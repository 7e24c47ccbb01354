"""Reserved JSON-LD keywords and their fixed integer codes."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

# Even codes only; odd codes stay free for extensions
KEYWORDS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "@context": 0,
        "@type": 2,
        "@id": 4,
        "@value": 6,
        "@direction": 8,
        "@graph": 10,
        "@included": 12,
        "@index": 14,
        "@json": 16,
        "@language": 18,
        "@list": 20,
        "@nest": 22,
        "@reverse": 24,
        "@base": 26,
        "@container": 28,
        "@default": 30,
        "@embed": 32,
        "@explicit": 34,
        "@none": 36,
        "@omitDefault": 38,
        "@prefix": 40,
        "@preserve": 42,
        "@protected": 44,
        "@requireAll": 46,
        "@set": 48,
        "@version": 50,
        "@vocab": 52,
        "@propagate": 54,
    }
)

FIRST_TERM_ID: Final = 100
TERM_ID_STEP: Final = 2

NESTED_KEY_SUFFIX: Final = "::nested"


def nested_key(term: str) -> str:
    """Cache key under which a term's nested context is registered."""
    return f"{term}{NESTED_KEY_SUFFIX}"
