"""Shared fixtures for the concordance tests.

Concept fixtures live in ``tests/fixtures`` as JSON documents in the loader's
format. Stores are SQLite: in-memory for the library tests and a file under
``tmp_path`` where the HTTP tests need a database the app can open by URL.
"""

from pathlib import Path
from typing import Optional

import pytest

from concordances.errors import GraphStoreError
from concordances.graph import GraphStoreInterface, SQLGraphStore, load_concepts
from concordances.models import ConcordanceRow
from concordances.planner import ConcordanceQuery
from concordances.service import ConcordanceService

FIXTURES_DIR = Path(__file__).parent / "fixtures"

PUBLIC_API_URL = "http://api.ft.com"
AUTHORITY = "http://api.ft.com/system/"

BANK_OF_TEST_UUID = "cd7e4345-f11f-41f3-a0f0-2cf5c43e0115"
BANK_OF_TEST_FACTSET_UUID = "d56e7388-25cb-343e-aea9-8b512e28476e"
BANK_OF_TEST_TME_UUID = "2cdeb859-70df-3a0e-b125-f958366bea44"
BANK_OF_TEST_LEI = "VNF516RB4DFV5NQ22UF0"
LOCATION_UUID = "5aba454b-3e31-31b9-bdeb-0caf83f62b44"
LOCATION_WIKIDATA_UUID = "4534282c-d3ee-3595-9957-81a9293200f3"
NAICS_UUID = "38ee195d-ebdd-48a9-af4b-c8a322e7b04d"
FTANI_UUID = "97b56e0e-3526-4434-ad29-349b06ead4a3"
BRAND_UUID = "b20801ac-5a76-43cf-b816-8c3b2f7133ad"
BRAND_TME_UUID = "70f4732b-7f7d-30a1-9c29-0cceec23760e"
GENERIC_PERSON_UUID = "3c4666ef-b403-4313-b648-d639762750e4"


class FailingGraphStore(GraphStoreInterface):
    """A graph store whose every call fails, for error-path tests."""

    def __init__(self, message: str = "connection refused"):
        self.message = message
        self.queries: list[ConcordanceQuery] = []

    def execute(self, query: ConcordanceQuery) -> list[ConcordanceRow]:
        self.queries.append(query)
        raise GraphStoreError(self.message)

    def check_connectivity(self) -> None:
        raise GraphStoreError(self.message)

    def close(self) -> None:
        pass


class RecordingGraphStore(GraphStoreInterface):
    """Wraps a store and records the queries it was asked to run."""

    def __init__(self, inner: GraphStoreInterface):
        self.inner = inner
        self.queries: list[ConcordanceQuery] = []

    def execute(self, query: ConcordanceQuery) -> list[ConcordanceRow]:
        self.queries.append(query)
        return self.inner.execute(query)

    def check_connectivity(self) -> None:
        self.inner.check_connectivity()

    def close(self) -> None:
        self.inner.close()


def authority_values(concordances, authority: Optional[str] = None) -> list[tuple[str, str]]:
    """(authority URI, identifier value) pairs of a result, optionally for one authority."""
    return [
        (c.identifier.authority, c.identifier.identifier_value)
        for c in concordances.concordances
        if authority is None or c.identifier.authority == authority
    ]


@pytest.fixture
def empty_store():
    """An in-memory graph store with no concepts."""
    store = SQLGraphStore("sqlite://")
    yield store
    store.close()


@pytest.fixture
def graph_store():
    """An in-memory graph store holding every concept fixture."""
    store = SQLGraphStore("sqlite://")
    load_concepts(store, FIXTURES_DIR)
    yield store
    store.close()


@pytest.fixture
def service(graph_store):
    return ConcordanceService(graph_store, PUBLIC_API_URL)


@pytest.fixture
def database_url(tmp_path):
    """URL of a file-backed SQLite database loaded with every concept fixture."""
    url = f"sqlite:///{tmp_path / 'concordances.db'}"
    store = SQLGraphStore(url)
    load_concepts(store, FIXTURES_DIR)
    store.close()
    return url
