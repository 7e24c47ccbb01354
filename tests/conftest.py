"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from cborld import ContextRegistry, MappingDocumentResolver

CREDENTIALS_URL = "https://www.w3.org/2018/credentials/v1"
PROFILE_URL = "https://example.com/contexts/profile"


@pytest.fixture
def schema_context() -> dict[str, Any]:
    """Small inline context with a plain term and an @id-typed term."""
    return {
        "name": "https://schema.org/name",
        "homepage": {"@id": "https://schema.org/url", "@type": "@id"},
    }


@pytest.fixture
def credentials_context() -> dict[str, Any]:
    """Trimmed credentials context with type-scoped nested contexts."""
    return {
        "@protected": True,
        "id": "@id",
        "type": "@type",
        "VerifiableCredential": {
            "@id": "https://www.w3.org/2018/credentials#VerifiableCredential",
            "@context": {
                "@protected": True,
                "issuer": {"@id": "https://www.w3.org/2018/credentials#issuer", "@type": "@id"},
                "issuanceDate": "https://www.w3.org/2018/credentials#issuanceDate",
                "credentialSubject": "https://www.w3.org/2018/credentials#credentialSubject",
            },
        },
        "Ticket": {
            "@id": "https://schema.org/Ticket",
            "@context": {
                "ticketNumber": "https://schema.org/ticketNumber",
                "issuedBy": "https://schema.org/issuedBy",
            },
        },
    }


@pytest.fixture
def resolver(credentials_context: dict[str, Any]) -> MappingDocumentResolver:
    """In-memory resolver serving the credentials and profile contexts."""
    return MappingDocumentResolver(
        {
            CREDENTIALS_URL: {"@context": credentials_context},
            PROFILE_URL: {"@context": {"nickname": "https://schema.org/alternateName"}},
        }
    )


@pytest.fixture
def registry(resolver: MappingDocumentResolver) -> ContextRegistry:
    """Fresh compression registry wired to the in-memory resolver."""
    return ContextRegistry("compression", resolver=resolver)


@pytest.fixture
def credential_document() -> dict[str, Any]:
    """Compacted credential document referencing the credentials context."""
    return {
        "@context": [
            CREDENTIALS_URL,
            {"name": "https://schema.org/name"},
        ],
        "id": "http://example.com/credentials/1234",
        "type": ["VerifiableCredential", "Ticket"],
        "issuer": "did:sov:VV9pK5ZrLPRwYmotgACPkC",
        "issuanceDate": "2025-05-10T14:45:00Z",
        "credentialSubject": {
            "id": "did:sov:SubjectDID987654321",
            "ticketNumber": "TICKET123789",
            "underName": [{"name": "Charlie", "id": "did:sov:charlieDID123456789"}, "extra"],
        },
    }
