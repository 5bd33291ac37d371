"""Concordance resolution service.

`ConcordanceService` wires the planner, a graph store and the assembler into
the two public lookups. A lookup that matches nothing returns an empty result
with ``found=False``; only store failures and assembly failures raise.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from .assembler import ResultAssembler
from .authority import DEFAULT_REGISTRY, AuthorityRegistry
from .errors import ConcordanceLookupError, GraphStoreError, NoResultsFoundError
from .graph.interfaces import GraphStoreInterface
from .models import ConcordanceRow, Concordances
from .ontology import is_valid_base_url
from .planner import ConcordanceQuery, QueryPlanner

logger = logging.getLogger(__name__)


class ConcordanceReaderInterface(ABC):
    """What the HTTP layer needs from a concordance backend."""

    @abstractmethod
    def read_by_concept_id(self, ids: Iterable[str]) -> tuple[Concordances, bool]:
        """Resolve concept uuids to all their equivalent identifiers.

        Returns:
            (concordances, found). `found` is False when nothing matched.

        Raises:
            ConcordanceLookupError: If the graph store failed.
            AssemblyError: If a canonical concept's API URL cannot be built.
        """

    @abstractmethod
    def read_by_authority(self, authority: str, values: Iterable[str]) -> tuple[Concordances, bool]:
        """Resolve identifier values under an authority URI.

        An authority URI outside the registry is reported as not found.
        """

    @abstractmethod
    def check_connectivity(self) -> None:
        """Raise GraphStoreError if the graph store is unreachable."""


class ConcordanceService(ConcordanceReaderInterface):
    """Resolves concordances against a graph store.

    Args:
        store: Graph store used to run queries.
        public_api_url: Base URL for concept API URLs, in the form scheme://host.
        registry: Authority registry; defaults to the public authority table.

    Raises:
        ValueError: If `public_api_url` is not an absolute http(s) URL.
    """

    def __init__(
        self,
        store: GraphStoreInterface,
        public_api_url: str,
        registry: AuthorityRegistry = DEFAULT_REGISTRY,
    ):
        if not is_valid_base_url(public_api_url):
            raise ValueError(f"invalid public API URL {public_api_url!r}, expected scheme://host")
        self.store = store
        self.planner = QueryPlanner(registry)
        self.assembler = ResultAssembler(public_api_url, registry)

    def read_by_concept_id(self, ids: Iterable[str]) -> tuple[Concordances, bool]:
        identifiers = list(ids)
        query = self.planner.by_concept_id(identifiers)
        try:
            rows = self._execute(query)
        except GraphStoreError as e:
            raise ConcordanceLookupError(
                f"error accessing Concordance datastore for identifier {identifiers}: {e}",
                identifiers=identifiers,
            ) from e
        return self._assemble(rows)

    def read_by_authority(self, authority: str, values: Iterable[str]) -> tuple[Concordances, bool]:
        identifier_values = list(values)
        query = self.planner.by_authority(authority, identifier_values)
        if query is None:
            logger.debug("Authority %s is not supported, skipping lookup", authority)
            return Concordances(), False
        try:
            rows = self._execute(query)
        except GraphStoreError as e:
            raise ConcordanceLookupError(
                f"error accessing Concordance datastore for authorityValue {identifier_values}: {e}",
                identifiers=identifier_values,
                authority=authority,
            ) from e
        return self._assemble(rows)

    def check_connectivity(self) -> None:
        self.store.check_connectivity()

    def _execute(self, query: ConcordanceQuery) -> Optional[list[ConcordanceRow]]:
        """Run a query; None means no rows matched."""
        logger.debug("Running %s", query.describe())
        try:
            return self.store.execute(query)
        except NoResultsFoundError:
            return None

    def _assemble(self, rows: Optional[list[ConcordanceRow]]) -> tuple[Concordances, bool]:
        if rows is None:
            return Concordances(), False
        return self.assembler.assemble(rows), True
