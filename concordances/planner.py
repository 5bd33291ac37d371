"""Query planning for concordance lookups.

The planner never touches the graph. It turns a request into a
`ConcordanceQuery`: one or more `GraphPattern` descriptors that a graph store
evaluates. Every pattern starts from an *anchor* node, climbs the
``EQUIVALENT_TO`` edge to the canonical concept, and emits rows of
``(canonical uuid, canonical labels, authority, authority value)``.

Lookups by concept id ask for the union of six patterns; lookups by authority
resolve the authority first and ask for exactly one.
"""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field, model_validator

from .authority import DEFAULT_REGISTRY, AuthorityRegistry

LOCATION_LABEL = "Location"
NAICS_LABEL = "NAICSIndustryClassification"
FTANI_LABEL = "FTAnIIndustryClassification"


class Anchor(str, Enum):
    """Which nodes a pattern starts from."""

    SOURCE_UUID = "source_uuid"  # source nodes whose uuid is in values
    SOURCE_IDENTIFIER = "source_identifier"  # source nodes with a given authority and authority value in values
    CANONICAL_PROPERTY = "canonical_property"  # canonical nodes whose property value is in values


class Emit(str, Enum):
    """What each matched canonical concept contributes to the result."""

    LEAF_IDENTIFIER = "leaf_identifier"  # each leaf's own authority and authority value
    LEAF_UUID = "leaf_uuid"  # each leaf's uuid under a fixed authority
    ANCHOR_IDENTIFIER = "anchor_identifier"  # the anchor's own authority and authority value
    ANCHOR_UUID = "anchor_uuid"  # the anchor's uuid under a fixed authority
    CANONICAL_PROPERTY = "canonical_property"  # the canonical property under a fixed authority


class CanonicalProperty(str, Enum):
    """Scalar identifier properties held directly on canonical concepts."""

    LEI_CODE = "lei_code"
    ISO_3166_1 = "iso31661"
    INDUSTRY_IDENTIFIER = "industry_identifier"


class ResolvedAuthority(str, Enum):
    """Authorities that need their own access pattern; everything else is GENERIC."""

    UPP = "UPP"
    LEI = "LEI"
    ISO_3166_1 = "ISO-3166-1"
    NAICS = "NAICS"
    FTANI = "FTAnI"
    GENERIC = "*"

    @classmethod
    def for_name(cls, name: str) -> "ResolvedAuthority":
        """Classify an internal authority name."""
        for member in cls:
            if member is not cls.GENERIC and member.value == name:
                return member
        return cls.GENERIC


class GraphPattern(BaseModel):
    """One access pattern over the equivalence graph.

    Attributes:
        name: Short label used in logs.
        anchor: Kind of node the pattern starts from.
        values: Values the anchor is matched against.
        label: Label the anchor must carry (source label for source anchors,
            canonical label for canonical anchors).
        source_authority: Stored authority the anchor must have (SOURCE_IDENTIFIER only).
        canonical_property: Property that must be set on the canonical concept;
            also the matched property for CANONICAL_PROPERTY anchors and the
            emitted value for CANONICAL_PROPERTY emits.
        emit: What rows are produced per matched canonical concept.
        authority: Authority name written on emitted rows, for emits that fix it.
    """

    model_config = {"frozen": True}

    name: str
    anchor: Anchor
    values: tuple[str, ...] = Field(default_factory=tuple)
    label: Optional[str] = None
    source_authority: Optional[str] = None
    canonical_property: Optional[CanonicalProperty] = None
    emit: Emit
    authority: Optional[str] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "GraphPattern":
        if self.anchor is Anchor.SOURCE_IDENTIFIER and not self.source_authority:
            raise ValueError("source_identifier anchors need a source_authority")
        if self.anchor is Anchor.CANONICAL_PROPERTY and self.canonical_property is None:
            raise ValueError("canonical_property anchors need a canonical_property")
        if self.anchor is Anchor.CANONICAL_PROPERTY and self.emit in (Emit.ANCHOR_UUID, Emit.ANCHOR_IDENTIFIER):
            raise ValueError("canonical anchors have no source node to emit")
        if self.emit is Emit.CANONICAL_PROPERTY and self.canonical_property is None:
            raise ValueError("canonical_property emits need a canonical_property")
        if self.emit in (Emit.LEAF_UUID, Emit.ANCHOR_UUID, Emit.CANONICAL_PROPERTY) and not self.authority:
            raise ValueError(f"{self.emit.value} emits need a fixed authority")
        return self


class ConcordanceQuery(BaseModel):
    """A distinct union of graph patterns."""

    model_config = {"frozen": True}

    patterns: tuple[GraphPattern, ...]

    def describe(self) -> str:
        return " UNION ".join(f"{p.name}({', '.join(p.values)})" for p in self.patterns)


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


# --- by concept id -----------------------------------------------------------


def leaf_identifiers_pattern(ids: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(name="leaf_identifiers", anchor=Anchor.SOURCE_UUID, values=ids, emit=Emit.LEAF_IDENTIFIER)


def lei_code_pattern(ids: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="lei_code",
        anchor=Anchor.SOURCE_UUID,
        values=ids,
        canonical_property=CanonicalProperty.LEI_CODE,
        emit=Emit.CANONICAL_PROPERTY,
        authority=ResolvedAuthority.LEI.value,
    )


def iso31661_pattern(ids: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="iso31661",
        anchor=Anchor.SOURCE_UUID,
        values=ids,
        label=LOCATION_LABEL,
        canonical_property=CanonicalProperty.ISO_3166_1,
        emit=Emit.CANONICAL_PROPERTY,
        authority=ResolvedAuthority.ISO_3166_1.value,
    )


def naics_pattern(ids: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="naics",
        anchor=Anchor.SOURCE_UUID,
        values=ids,
        label=NAICS_LABEL,
        canonical_property=CanonicalProperty.INDUSTRY_IDENTIFIER,
        emit=Emit.CANONICAL_PROPERTY,
        authority=ResolvedAuthority.NAICS.value,
    )


def ftani_pattern(ids: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="ftani",
        anchor=Anchor.SOURCE_UUID,
        values=ids,
        label=FTANI_LABEL,
        canonical_property=CanonicalProperty.INDUSTRY_IDENTIFIER,
        emit=Emit.CANONICAL_PROPERTY,
        authority=ResolvedAuthority.FTANI.value,
    )


def leaf_uuids_pattern(ids: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="leaf_uuids",
        anchor=Anchor.SOURCE_UUID,
        values=ids,
        emit=Emit.LEAF_UUID,
        authority=ResolvedAuthority.UPP.value,
    )


CONCEPT_ID_PATTERNS = (
    leaf_identifiers_pattern,
    lei_code_pattern,
    iso31661_pattern,
    naics_pattern,
    ftani_pattern,
    leaf_uuids_pattern,
)


# --- by authority ------------------------------------------------------------


def _upp_by_uuid(name: str, values: tuple[str, ...]) -> GraphPattern:
    # UPP identifiers are the source nodes' own uuids.
    return GraphPattern(
        name="upp_by_uuid",
        anchor=Anchor.SOURCE_UUID,
        values=values,
        emit=Emit.ANCHOR_UUID,
        authority=ResolvedAuthority.UPP.value,
    )


def _lei_by_code(name: str, values: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="lei_by_code",
        anchor=Anchor.CANONICAL_PROPERTY,
        values=values,
        canonical_property=CanonicalProperty.LEI_CODE,
        emit=Emit.CANONICAL_PROPERTY,
        authority=ResolvedAuthority.LEI.value,
    )


def _iso31661_by_code(name: str, values: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="iso31661_by_code",
        anchor=Anchor.CANONICAL_PROPERTY,
        values=values,
        label=LOCATION_LABEL,
        canonical_property=CanonicalProperty.ISO_3166_1,
        emit=Emit.CANONICAL_PROPERTY,
        authority=ResolvedAuthority.ISO_3166_1.value,
    )


def _naics_by_code(name: str, values: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="naics_by_code",
        anchor=Anchor.CANONICAL_PROPERTY,
        values=values,
        label=NAICS_LABEL,
        canonical_property=CanonicalProperty.INDUSTRY_IDENTIFIER,
        emit=Emit.CANONICAL_PROPERTY,
        authority=ResolvedAuthority.NAICS.value,
    )


def _ftani_by_code(name: str, values: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="ftani_by_code",
        anchor=Anchor.CANONICAL_PROPERTY,
        values=values,
        label=FTANI_LABEL,
        canonical_property=CanonicalProperty.INDUSTRY_IDENTIFIER,
        emit=Emit.CANONICAL_PROPERTY,
        authority=ResolvedAuthority.FTANI.value,
    )


def _source_by_identifier(name: str, values: tuple[str, ...]) -> GraphPattern:
    return GraphPattern(
        name="source_by_identifier",
        anchor=Anchor.SOURCE_IDENTIFIER,
        values=values,
        source_authority=name,
        emit=Emit.ANCHOR_IDENTIFIER,
    )


AUTHORITY_PATTERNS = {
    ResolvedAuthority.UPP: _upp_by_uuid,
    ResolvedAuthority.LEI: _lei_by_code,
    ResolvedAuthority.ISO_3166_1: _iso31661_by_code,
    ResolvedAuthority.NAICS: _naics_by_code,
    ResolvedAuthority.FTANI: _ftani_by_code,
    ResolvedAuthority.GENERIC: _source_by_identifier,
}


class QueryPlanner:
    """Builds graph queries for concordance requests."""

    def __init__(self, registry: AuthorityRegistry = DEFAULT_REGISTRY):
        self.registry = registry

    def by_concept_id(self, ids: Iterable[str]) -> ConcordanceQuery:
        """Plan a lookup of everything equivalent to the given concept uuids."""
        unique_ids = _unique(ids)
        return ConcordanceQuery(patterns=tuple(build(unique_ids) for build in CONCEPT_ID_PATTERNS))

    def by_authority(self, authority_uri: str, values: Iterable[str]) -> Optional[ConcordanceQuery]:
        """Plan a lookup of identifier values under an authority URI.

        Returns None when the authority URI is not in the registry, in which
        case nothing should be queried.
        """
        name = self.registry.from_uri(authority_uri)
        if name is None:
            return None
        build = AUTHORITY_PATTERNS[ResolvedAuthority.for_name(name)]
        return ConcordanceQuery(patterns=(build(name, _unique(values)),))
