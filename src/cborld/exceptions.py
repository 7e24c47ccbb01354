"""Exception hierarchy for cborld.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from CborldError for easy catching of any cborld-specific error.
"""

from __future__ import annotations


class CborldError(Exception):
    """Base exception for all cborld errors."""

    pass


class ConstructionError(CborldError, ValueError):
    """Raised when an object is built with an invalid configuration.

    Examples:
        - Registry strategy other than "compression" or "decompression"
        - Chunk size that is zero or negative
        - Frame magic tag that is not exactly 4 bytes
    """

    pass


class EncodeError(CborldError):
    """Raised when encoding a value fails.

    Examples:
        - Unsupported Python type (sets, arbitrary objects)
        - Integer magnitude beyond the 64-bit range
    """

    pass


class DecodeError(CborldError):
    """Raised when decoding data fails.

    Examples:
        - Corrupt gzip wrapper
        - Any malformed binary item (see MalformedBinaryError)
    """

    pass


class MalformedBinaryError(DecodeError):
    """Raised when a binary buffer is not a single well-formed item.

    Examples:
        - Truncated data (read past the end of the buffer)
        - Additional-info code outside the defined set
        - Declared length too large to address safely
        - Extra bytes after the first complete top-level item
        - Half-precision float
    """

    pass


class InvalidContextError(CborldError):
    """Raised when a context or term definition has the wrong shape.

    Examples:
        - A list, number or string passed where a context mapping is expected
        - A term definition that is neither a string nor a mapping
    """

    pass


class UnresolvedTermError(CborldError):
    """Raised when the projector consults a term definition without an @id."""

    pass


class ResolutionError(CborldError):
    """Raised when a remote context cannot be resolved.

    Examples:
        - No resolver configured on the registry
        - The resolver raised (network failure, unknown URL)
        - The retrieved document has no @context member
    """

    pass


class FramingError(CborldError):
    """Raised when chunk framing operations fail.

    Examples:
        - Frame shorter than its header
        - Wrong magic tag
        - Missing or conflicting chunks
        - Content hash mismatch after reassembly
    """

    pass
