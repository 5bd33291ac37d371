"""Concept type hierarchy and public API URL construction.

Graph nodes carry every label on their type's ancestry (a public company is
labelled ``Thing``, ``Concept``, ``Organisation``, ``Company`` and
``PublicCompany``). The API URL of a concept is derived from its most specific
type: walk up from that type to the first one with a dedicated API path, and
fall back to ``things``.
"""

from typing import Optional, Sequence
from urllib.parse import urlparse

from .errors import OntologyError

# type -> parent type
PARENT_TYPES: dict[str, Optional[str]] = {
    "Thing": None,
    "Concept": "Thing",
    "Classification": "Concept",
    "Section": "Classification",
    "Subject": "Classification",
    "SpecialReport": "Classification",
    "Genre": "Classification",
    "IndustryClassification": "Classification",
    "NAICSIndustryClassification": "IndustryClassification",
    "FTAnIIndustryClassification": "IndustryClassification",
    "Topic": "Concept",
    "Location": "Concept",
    "AlphavilleSeries": "Concept",
    "Brand": "Classification",
    "Person": "Concept",
    "Organisation": "Concept",
    "Company": "Organisation",
    "PublicCompany": "Company",
    "PrivateCompany": "Company",
    "Membership": "Concept",
    "MembershipRole": "Concept",
    "FinancialInstrument": "Concept",
    "SVCategory": "Concept",
    "SVProvision": "Concept",
    "FTPCSource": "Concept",
    "FTPCGenre": "Concept",
    "FTPCAssetType": "Concept",
    "FTAOrganisationDetails": "Concept",
    "FTAPersonDetails": "Concept",
}

API_PATHS: dict[str, str] = {
    "Organisation": "organisations",
    "Person": "people",
    "Brand": "brands",
    "SVProvision": "concepts",
    "FTAOrganisationDetails": "concepts",
    "FTAPersonDetails": "concepts",
}

DEFAULT_API_PATH = "things"


def ancestry(concept_type: str) -> list[str]:
    """Return `concept_type` and its ancestors, most specific first."""
    if concept_type not in PARENT_TYPES:
        raise OntologyError(f"unknown concept type {concept_type!r}")
    chain: list[str] = []
    current: Optional[str] = concept_type
    while current is not None:
        chain.append(current)
        current = PARENT_TYPES[current]
    return chain


def labels_for(concept_type: str) -> list[str]:
    """Return the graph labels for a node of `concept_type`, root type first."""
    return list(reversed(ancestry(concept_type)))


def most_specific_type(labels: Sequence[str]) -> str:
    """Pick the most specific known type from a node's labels.

    Unknown labels are ignored. The known labels must all lie on one ancestry
    chain; two unrelated branches (say ``Person`` and ``Brand``) are malformed.
    """
    known = [label for label in labels if label in PARENT_TYPES]
    if not known:
        raise OntologyError(f"no known concept type in labels {list(labels)!r}")

    deepest = max(known, key=lambda label: len(ancestry(label)))
    chain = set(ancestry(deepest))
    stray = [label for label in known if label not in chain]
    if stray:
        raise OntologyError(f"labels {list(labels)!r} do not form a single type hierarchy (stray: {stray!r})")
    return deepest


def api_path(labels: Sequence[str]) -> str:
    """Return the API collection path (``organisations``, ``things``...) for a node's labels."""
    for concept_type in ancestry(most_specific_type(labels)):
        if concept_type in API_PATHS:
            return API_PATHS[concept_type]
    return DEFAULT_API_PATH


def api_url(uuid: str, labels: Sequence[str], base_url: str) -> str:
    """Build the public API URL of a concept.

    Args:
        uuid: The canonical concept's prefUUID.
        labels: The canonical node's type labels.
        base_url: Public API base URL in the form scheme://host, e.g. ``http://api.ft.com``.

    Returns:
        A URL such as ``http://api.ft.com/organisations/<uuid>``.

    Raises:
        OntologyError: If the labels are empty, unknown, or inconsistent.
    """
    if not uuid:
        raise OntologyError("cannot build an API URL without a concept uuid")
    return f"{base_url.rstrip('/')}/{api_path(labels)}/{uuid}"


def is_valid_base_url(base_url: str) -> bool:
    """True if `base_url` is an absolute http(s) URL with a host."""
    parsed = urlparse(base_url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
