"""Conversion of raw graph rows into public concordances."""

from typing import Callable, Iterable, Sequence

from .authority import DEFAULT_REGISTRY, AuthorityRegistry
from .errors import AssemblyError, OntologyError
from .models import Concept, Concordance, ConcordanceRow, Concordances, Identifier
from .ontology import api_url

THING_URL = "http://api.ft.com/things/"

UrlBuilder = Callable[[str, Sequence[str], str], str]


def thing_id_url(uuid: str) -> str:
    """Return the thing URI for a concept uuid."""
    return THING_URL + uuid


class ResultAssembler:
    """Turns `ConcordanceRow`s into `Concordances`.

    Rows whose authority is not in the registry are dropped without comment.
    Rows are not de-duplicated here; stores return distinct rows.
    """

    def __init__(
        self,
        public_api_url: str,
        registry: AuthorityRegistry = DEFAULT_REGISTRY,
        url_builder: UrlBuilder = api_url,
    ):
        self.public_api_url = public_api_url
        self.registry = registry
        self._url_builder = url_builder

    def assemble(self, rows: Iterable[ConcordanceRow]) -> Concordances:
        """Build the concordances for a query result.

        Raises:
            AssemblyError: If the API URL of any canonical concept cannot be
                built. No partial result is returned.
        """
        concordances: list[Concordance] = []
        for row in rows:
            try:
                url = self._url_builder(row.canonical_uuid, row.types, self.public_api_url)
            except OntologyError as exc:
                raise AssemblyError(f"building API URL for {row.canonical_uuid!r}: {exc}", row.canonical_uuid) from exc

            authority_uri = self.registry.to_uri(row.authority) if row.authority is not None else None
            if authority_uri is None:
                continue

            concordances.append(
                Concordance(
                    concept=Concept(id=thing_id_url(row.canonical_uuid), api_url=url),
                    identifier=Identifier(authority=authority_uri, identifier_value=row.authority_value or ""),
                )
            )
        return Concordances(concordances=tuple(concordances))
