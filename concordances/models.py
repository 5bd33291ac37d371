"""Public result model for concordance lookups.

These are the values handed back to callers and serialised by the HTTP layer.
Field names are Pythonic; the aliases give the JSON names of the public API
(``apiUrl``, ``identifierValue``), so serialise with ``by_alias=True``.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Concept(BaseModel):
    """Public identity of a canonical concept."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str = Field(description="Thing URI of the canonical concept (http://api.ft.com/things/<uuid>)")
    api_url: str = Field(alias="apiUrl", description="Type-dependent API URL of the canonical concept")


class Identifier(BaseModel):
    """An identifier value under a public authority URI."""

    model_config = {"frozen": True, "populate_by_name": True}

    authority: str = Field(description="Public authority URI, e.g. http://api.ft.com/system/LEI")
    identifier_value: str = Field(alias="identifierValue", description="Value assigned by the authority")


class Concordance(BaseModel):
    """One equivalence fact: the concept is known by this identifier."""

    model_config = {"frozen": True}

    concept: Concept
    identifier: Identifier


class Concordances(BaseModel):
    """Concordances resolved for a single request, in query result order."""

    model_config = {"frozen": True}

    concordances: tuple[Concordance, ...] = Field(default_factory=tuple)


class ConcordanceRow(BaseModel):
    """A raw row as returned by a graph store.

    `authority` is the internal authority name (``"FACTSET"``), not the public
    URI. Rows are hashable so stores can collapse duplicates across patterns.
    """

    model_config = {"frozen": True}

    canonical_uuid: str = Field(description="prefUUID of the canonical concept")
    types: tuple[str, ...] = Field(default_factory=tuple, description="Type labels of the canonical concept")
    authority: Optional[str] = Field(default=None, description="Internal authority name")
    authority_value: Optional[str] = Field(default=None, description="Identifier value under that authority")
