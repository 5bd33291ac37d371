"""Graph store interface used by the concordance service."""

from abc import ABC, abstractmethod

from concordances.models import ConcordanceRow
from concordances.planner import ConcordanceQuery


class GraphStoreInterface(ABC):
    """Abstract interface for an equivalence-graph backend.

    The service only ever reads through this interface. Implementations
    evaluate the patterns of a `ConcordanceQuery` and return the distinct union
    of their rows.
    """

    @abstractmethod
    def execute(self, query: ConcordanceQuery) -> list[ConcordanceRow]:
        """Run a query and return its rows in result order, without duplicates.

        Raises:
            NoResultsFoundError: If no pattern produced a row.
            GraphStoreError: For any other failure.
        """

    @abstractmethod
    def check_connectivity(self) -> None:
        """Probe the backend.

        Raises:
            GraphStoreError: If the backend cannot be reached.
        """

    @abstractmethod
    def close(self) -> None:
        """
        Close connections and clean up resources.
        """
