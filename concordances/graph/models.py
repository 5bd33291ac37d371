"""
SQLModel tables for the equivalence graph.

A canonical concept is one `CanonicalNode`. Each source-system record that is
equivalent to it is a `SourceNode` whose `canonical_uuid` points back at it;
that column is the ``EQUIVALENT_TO`` edge.
"""

from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class CanonicalNode(SQLModel, table=True):
    """A canonical concept: the merged identity of a concept."""

    __tablename__ = "canonical_concept"

    pref_uuid: str = Field(primary_key=True, description="Canonical uuid of the concept")
    pref_label: Optional[str] = Field(default=None)
    labels: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    lei_code: Optional[str] = Field(default=None, index=True)
    iso31661: Optional[str] = Field(default=None, index=True)
    industry_identifier: Optional[str] = Field(default=None, index=True)


class SourceNode(SQLModel, table=True):
    """A source-system record, equivalent to at most one canonical concept."""

    __tablename__ = "source_concept"

    uuid: str = Field(primary_key=True, description="uuid of the source record (its UPP identifier)")
    pref_label: Optional[str] = Field(default=None)
    labels: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    authority: Optional[str] = Field(default=None, index=True)
    authority_value: Optional[str] = Field(default=None, index=True)
    canonical_uuid: Optional[str] = Field(default=None, foreign_key="canonical_concept.pref_uuid", index=True)
