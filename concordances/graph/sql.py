"""
SQLModel implementation of the graph store interface.

Works against any SQLAlchemy database URL. In-memory SQLite databases share a
single connection so that every thread sees the same data.
"""

from typing import Iterator, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, col, create_engine, select

from concordances.errors import GraphStoreError, NoResultsFoundError
from concordances.models import ConcordanceRow
from concordances.ontology import labels_for
from concordances.planner import Anchor, CanonicalProperty, ConcordanceQuery, Emit, GraphPattern

from .interfaces import GraphStoreInterface
from .loader import CanonicalConceptDocument
from .models import CanonicalNode, SourceNode

_TABLES = [CanonicalNode.__table__, SourceNode.__table__]


def _is_in_memory(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def _required_property(pattern: GraphPattern) -> CanonicalProperty:
    if pattern.canonical_property is None:
        raise GraphStoreError(f"pattern {pattern.name!r} needs a canonical property")
    return pattern.canonical_property


def create_graph_engine(database_url: str) -> Engine:
    """Create an engine suitable for serving requests from several threads."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url)
    connect_args = {"check_same_thread": False}  # Needed for SQLite with FastAPI
    if _is_in_memory(database_url):
        return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(database_url, connect_args=connect_args)


class SQLGraphStore(GraphStoreInterface):
    """
    Equivalence graph held in two SQL tables.

    Each query pattern is evaluated with one SELECT for its anchors plus one
    per matched canonical concept for its leaves (cached for the duration of a
    query). Rows from all patterns are merged in first-seen order with
    duplicates dropped.
    """

    def __init__(self, database_url: str = "sqlite://", engine: Optional[Engine] = None):
        self.engine = engine if engine is not None else create_graph_engine(database_url)
        SQLModel.metadata.create_all(self.engine, tables=_TABLES)

    @classmethod
    def from_url(cls, database_url: str) -> "SQLGraphStore":
        """Open a store on a SQLAlchemy database URL, creating its tables if needed."""
        return cls(engine=create_graph_engine(database_url))

    # --- reads ---------------------------------------------------------------

    def execute(self, query: ConcordanceQuery) -> list[ConcordanceRow]:
        rows: list[ConcordanceRow] = []
        seen: set[ConcordanceRow] = set()
        try:
            with Session(self.engine) as session:
                leaves_cache: dict[str, list[SourceNode]] = {}
                for pattern in query.patterns:
                    for row in self._evaluate(session, pattern, leaves_cache):
                        if row not in seen:
                            seen.add(row)
                            rows.append(row)
        except SQLAlchemyError as e:
            raise GraphStoreError(f"executing {query.describe()}: {e}") from e

        if not rows:
            raise NoResultsFoundError(f"no rows for {query.describe()}")
        return rows

    def check_connectivity(self) -> None:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise GraphStoreError(f"cannot reach concordance store: {e}") from e

    def _evaluate(
        self,
        session: Session,
        pattern: GraphPattern,
        leaves_cache: dict[str, list[SourceNode]],
    ) -> Iterator[ConcordanceRow]:
        for anchor, canonical in self._anchors(session, pattern):
            if pattern.canonical_property is not None and getattr(canonical, pattern.canonical_property.value) is None:
                continue
            types = tuple(canonical.labels or ())
            for authority, value in self._emitted(session, pattern, anchor, canonical, leaves_cache):
                yield ConcordanceRow(
                    canonical_uuid=canonical.pref_uuid,
                    types=types,
                    authority=authority,
                    authority_value=value,
                )

    def _anchors(self, session: Session, pattern: GraphPattern) -> list[tuple[Optional[SourceNode], CanonicalNode]]:
        """Find (anchor source node, canonical concept) pairs for a pattern."""
        if pattern.anchor is Anchor.CANONICAL_PROPERTY:
            column = getattr(CanonicalNode, _required_property(pattern).value)
            canonicals = session.exec(
                select(CanonicalNode).where(col(column).in_(pattern.values)).order_by(col(CanonicalNode.pref_uuid))
            ).all()
            return [(None, c) for c in canonicals if pattern.label is None or pattern.label in (c.labels or ())]

        statement = select(SourceNode, CanonicalNode).join(
            CanonicalNode, col(SourceNode.canonical_uuid) == col(CanonicalNode.pref_uuid)
        )
        if pattern.anchor is Anchor.SOURCE_UUID:
            statement = statement.where(col(SourceNode.uuid).in_(pattern.values))
        else:
            statement = statement.where(
                col(SourceNode.authority) == pattern.source_authority,
                col(SourceNode.authority_value).in_(pattern.values),
            )
        pairs = session.exec(statement.order_by(col(SourceNode.uuid))).all()
        return [(s, c) for s, c in pairs if pattern.label is None or pattern.label in (s.labels or ())]

    def _emitted(
        self,
        session: Session,
        pattern: GraphPattern,
        anchor: Optional[SourceNode],
        canonical: CanonicalNode,
        leaves_cache: dict[str, list[SourceNode]],
    ) -> Iterator[tuple[Optional[str], Optional[str]]]:
        """Yield (authority, value) pairs contributed by one matched canonical concept."""
        if pattern.emit in (Emit.LEAF_IDENTIFIER, Emit.LEAF_UUID):
            for leaf in self._leaves(session, canonical.pref_uuid, leaves_cache):
                if pattern.emit is Emit.LEAF_IDENTIFIER:
                    yield leaf.authority, leaf.authority_value
                else:
                    yield pattern.authority, leaf.uuid
        elif pattern.emit in (Emit.ANCHOR_IDENTIFIER, Emit.ANCHOR_UUID):
            if anchor is None:
                raise GraphStoreError(f"pattern {pattern.name!r} emits its anchor but has no source anchor")
            if pattern.emit is Emit.ANCHOR_IDENTIFIER:
                yield anchor.authority, anchor.authority_value
            else:
                yield pattern.authority, anchor.uuid
        elif pattern.emit is Emit.CANONICAL_PROPERTY:
            yield pattern.authority, getattr(canonical, _required_property(pattern).value)

    def _leaves(self, session: Session, pref_uuid: str, cache: dict[str, list[SourceNode]]) -> list[SourceNode]:
        if pref_uuid not in cache:
            cache[pref_uuid] = list(
                session.exec(
                    select(SourceNode).where(SourceNode.canonical_uuid == pref_uuid).order_by(col(SourceNode.uuid))
                ).all()
            )
        return cache[pref_uuid]

    # --- writes (fixtures and development data) ------------------------------

    def write_concept(self, document: CanonicalConceptDocument) -> None:
        """
        Store a canonical concept and its source representations.
        Replaces any concept already stored under the same prefUUID.
        """
        canonical = CanonicalNode(
            pref_uuid=document.pref_uuid,
            pref_label=document.pref_label,
            labels=labels_for(document.type),
            lei_code=document.lei_code,
            iso31661=document.iso31661,
            industry_identifier=document.industry_identifier,
        )
        sources = [
            SourceNode(
                uuid=source.uuid,
                pref_label=source.pref_label,
                labels=labels_for(source.type),
                authority=source.authority,
                authority_value=source.authority_value,
                canonical_uuid=document.pref_uuid,
            )
            for source in document.source_representations
        ]
        try:
            with Session(self.engine) as session:
                self._delete_sources_of(session, document.pref_uuid)
                session.merge(canonical)
                for source in sources:
                    session.merge(source)
                session.commit()
        except SQLAlchemyError as e:
            raise GraphStoreError(f"writing concept {document.pref_uuid!r}: {e}") from e

    def delete_concept(self, pref_uuid: str) -> bool:
        """Delete a canonical concept and its source nodes. Returns True if it existed."""
        try:
            with Session(self.engine) as session:
                canonical = session.get(CanonicalNode, pref_uuid)
                if canonical is None:
                    return False
                self._delete_sources_of(session, pref_uuid)
                session.delete(canonical)
                session.commit()
                return True
        except SQLAlchemyError as e:
            raise GraphStoreError(f"deleting concept {pref_uuid!r}: {e}") from e

    def _delete_sources_of(self, session: Session, pref_uuid: str) -> None:
        for node in session.exec(select(SourceNode).where(SourceNode.canonical_uuid == pref_uuid)).all():
            session.delete(node)
        session.flush()

    def close(self) -> None:
        self.engine.dispose()
