"""Graph store interface and implementations for the equivalence graph."""

from concordances.graph.interfaces import GraphStoreInterface
from concordances.graph.loader import (
    CanonicalConceptDocument,
    SourceRepresentation,
    load_concepts,
    read_concept_documents,
)
from concordances.graph.sql import SQLGraphStore, create_graph_engine

__all__ = [
    "GraphStoreInterface",
    "SQLGraphStore",
    "create_graph_engine",
    "CanonicalConceptDocument",
    "SourceRepresentation",
    "load_concepts",
    "read_concept_documents",
]
