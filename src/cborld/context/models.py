"""Term definitions and context entries.

Raw JSON-LD term definitions come in two shapes: a bare IRI string or a
mapping of @-keys. Both are normalized into TermDefinition exactly once, when
a context is added to the registry.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import InvalidContextError


class Strategy(str, enum.Enum):
    """How a registry will be used.

    Only DECOMPRESSION keeps an id -> term reverse table.
    """

    COMPRESSION = "compression"
    DECOMPRESSION = "decompression"


class TermDefinition(BaseModel):
    """A single vocabulary entry from a context.

    Example:
        >>> TermDefinition.from_raw("https://schema.org/name").id
        'https://schema.org/name'
        >>> d = TermDefinition.from_raw({"@id": "https://schema.org/url", "@type": "@id"})
        >>> d.is_reference
        True
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        # Keys such as @prefix or @reverse are kept but not interpreted
        extra="allow",
    )

    id: Optional[str] = Field(default=None, alias="@id")
    type: Optional[str] = Field(default=None, alias="@type")
    container: Optional[Union[str, list[str]]] = Field(default=None, alias="@container")
    language: Optional[str] = Field(default=None, alias="@language")
    context: Optional[Any] = Field(default=None, alias="@context")
    protected: bool = False

    @classmethod
    def from_raw(cls, raw: Any, protected: bool = False) -> TermDefinition:
        """Normalize a raw definition (string or mapping).

        Args:
            raw: Bare IRI string or definition mapping
            protected: Value of the enclosing context's @protected marker

        Raises:
            InvalidContextError: If raw is neither a string nor a mapping, or
                its fields have the wrong types
        """
        if isinstance(raw, str):
            return cls(id=raw, protected=protected)

        if not isinstance(raw, Mapping):
            raise InvalidContextError(
                f"Term definition must be a string or mapping, got {type(raw).__name__}"
            )

        data = {key: value for key, value in raw.items() if key != "protected"}
        try:
            return cls.model_validate({**data, "protected": protected})
        except ValueError as e:
            raise InvalidContextError(f"Invalid term definition: {e}") from e

    def to_raw(self) -> dict[str, Any]:
        """Return the definition as a JSON-LD mapping (@-keys, no unset fields)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @property
    def is_reference(self) -> bool:
        """True when values of this term are IRIs (@type is @id)."""
        return self.type == "@id"


@dataclass
class ContextEntry:
    """A processed context: the raw structure and its term map.

    Attributes:
        context: The context mapping as it was given
        term_map: Term name -> normalized definition, in lexicographic order
    """

    context: Mapping[str, Any]
    term_map: dict[str, TermDefinition] = field(default_factory=dict)
