"""Authority registry: internal authority names <-> public authority URIs.

Source nodes in the graph store their authority as a short internal name
(``"TME"``, ``"FACTSET"``...). The public API only speaks authority URIs. The
registry holds the closed, one-to-one table between the two; anything outside
it has no public form.
"""

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

AUTHORITY_BASE_URI = "http://api.ft.com/system/"

DEFAULT_AUTHORITIES: Mapping[str, str] = MappingProxyType(
    {
        "TME": AUTHORITY_BASE_URI + "FT-TME",
        "FACTSET": AUTHORITY_BASE_URI + "FACTSET",
        "UPP": AUTHORITY_BASE_URI + "UPP",
        "LEI": AUTHORITY_BASE_URI + "LEI",
        "Smartlogic": AUTHORITY_BASE_URI + "SMARTLOGIC",
        "ManagedLocation": AUTHORITY_BASE_URI + "MANAGEDLOCATION",
        "ISO-3166-1": AUTHORITY_BASE_URI + "ISO-3166-1",
        "Geonames": AUTHORITY_BASE_URI + "GEONAMES",
        "Wikidata": AUTHORITY_BASE_URI + "WIKIDATA",
        "DBPedia": AUTHORITY_BASE_URI + "DBPEDIA",
        "NAICS": AUTHORITY_BASE_URI + "NAICS",
        "FTAnI": AUTHORITY_BASE_URI + "FT-AnI",
    }
)


class AuthorityRegistry:
    """Read-only bidirectional lookup between authority names and URIs.

    Lookups are exact string matches in both directions. The table is fixed at
    construction, so a registry can be shared between threads freely.

    Example:
        ```python
        registry = AuthorityRegistry({"LEI": "http://api.ft.com/system/LEI"})
        registry.to_uri("LEI")                            # "http://api.ft.com/system/LEI"
        registry.from_uri("http://api.ft.com/system/LEI")  # "LEI"
        registry.to_uri("lei")                            # None
        ```
    """

    def __init__(self, authorities: Mapping[str, str]):
        by_uri: dict[str, str] = {}
        for name, uri in authorities.items():
            if uri in by_uri:
                raise ValueError(f"authority URI {uri!r} is mapped from both {by_uri[uri]!r} and {name!r}")
            by_uri[uri] = name
        self._by_name: Mapping[str, str] = MappingProxyType(dict(authorities))
        self._by_uri: Mapping[str, str] = MappingProxyType(by_uri)

    def to_uri(self, name: str) -> Optional[str]:
        """Return the public URI for an internal authority name, or None if unknown."""
        return self._by_name.get(name)

    def from_uri(self, uri: str) -> Optional[str]:
        """Return the internal authority name for a public URI, or None if unknown."""
        return self._by_uri.get(uri)

    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def uris(self) -> tuple[str, ...]:
        return tuple(self._by_uri)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"AuthorityRegistry({dict(self._by_name)!r})"


DEFAULT_REGISTRY = AuthorityRegistry(DEFAULT_AUTHORITIES)


def authority_to_uri(name: str) -> Optional[str]:
    """Look up `name` in the default registry."""
    return DEFAULT_REGISTRY.to_uri(name)


def authority_from_uri(uri: str) -> Optional[str]:
    """Reverse-look up `uri` in the default registry."""
    return DEFAULT_REGISTRY.from_uri(uri)
