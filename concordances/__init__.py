"""
Public Concordances - resolution of equivalent concept identifiers.

Given a canonical concept uuid, or an identifier value under a named authority,
find every identifier the concept is known by across source systems:

    from concordances import ConcordanceService
    from concordances.graph import SQLGraphStore

    service = ConcordanceService(SQLGraphStore("sqlite:///concordances.db"), "http://api.ft.com")
    concordances, found = service.read_by_authority("http://api.ft.com/system/LEI", ["VNF516RB4DFV5NQ22UF0"])
"""

from concordances.assembler import ResultAssembler, thing_id_url
from concordances.authority import (
    AUTHORITY_BASE_URI,
    DEFAULT_AUTHORITIES,
    DEFAULT_REGISTRY,
    AuthorityRegistry,
    authority_from_uri,
    authority_to_uri,
)
from concordances.errors import (
    AssemblyError,
    ConcordanceError,
    ConcordanceLookupError,
    GraphStoreError,
    NoResultsFoundError,
    OntologyError,
)
from concordances.models import Concept, Concordance, ConcordanceRow, Concordances, Identifier
from concordances.planner import ConcordanceQuery, GraphPattern, QueryPlanner, ResolvedAuthority
from concordances.service import ConcordanceReaderInterface, ConcordanceService

__all__ = [
    "AUTHORITY_BASE_URI",
    "DEFAULT_AUTHORITIES",
    "DEFAULT_REGISTRY",
    "AuthorityRegistry",
    "authority_from_uri",
    "authority_to_uri",
    "Concept",
    "Concordance",
    "ConcordanceRow",
    "Concordances",
    "Identifier",
    "ConcordanceQuery",
    "GraphPattern",
    "QueryPlanner",
    "ResolvedAuthority",
    "ResultAssembler",
    "thing_id_url",
    "ConcordanceReaderInterface",
    "ConcordanceService",
    "ConcordanceError",
    "ConcordanceLookupError",
    "GraphStoreError",
    "NoResultsFoundError",
    "OntologyError",
    "AssemblyError",
]

__version__ = "0.1.0"
