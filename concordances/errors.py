"""Exception hierarchy for concordance resolution.

A lookup that matches nothing is not a failure: graph stores signal it with
`NoResultsFoundError`, which the service turns into ``found=False``. Every other
store problem is a `GraphStoreError`, which the service re-raises as a
`ConcordanceLookupError` carrying the identifiers it was asked to resolve.
"""

from typing import Optional, Sequence


class ConcordanceError(Exception):
    """Base class for all errors raised by the concordances package."""


class NoResultsFoundError(ConcordanceError):
    """Raised by a graph store when a query matched no rows."""


class GraphStoreError(ConcordanceError):
    """Raised by a graph store for any failure other than an empty result."""


class OntologyError(ConcordanceError):
    """Raised when concept type labels cannot be turned into a public URL."""


class AssemblyError(ConcordanceError):
    """Raised when raw rows cannot be converted into concordances."""

    def __init__(self, message: str, canonical_uuid: Optional[str] = None):
        super().__init__(message)
        self.canonical_uuid = canonical_uuid


class ConcordanceLookupError(ConcordanceError):
    """Raised by the service when the graph store failed to answer a lookup.

    Attributes:
        identifiers: The concept ids or identifier values that were requested.
        authority: The authority URI for by-authority lookups, else None.
    """

    def __init__(
        self,
        message: str,
        identifiers: Sequence[str] = (),
        authority: Optional[str] = None,
    ):
        super().__init__(message)
        self.identifiers = tuple(identifiers)
        self.authority = authority
