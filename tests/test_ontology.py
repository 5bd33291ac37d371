"""Tests for the concept type hierarchy and API URL construction."""

import pytest

from concordances.errors import OntologyError
from concordances.ontology import (
    DEFAULT_API_PATH,
    ancestry,
    api_path,
    api_url,
    is_valid_base_url,
    labels_for,
    most_specific_type,
)


class TestHierarchy:
    def test_ancestry_is_most_specific_first(self) -> None:
        assert ancestry("PublicCompany") == ["PublicCompany", "Company", "Organisation", "Concept", "Thing"]

    def test_labels_for_is_root_first(self) -> None:
        assert labels_for("Location") == ["Thing", "Concept", "Location"]

    def test_unknown_type(self) -> None:
        with pytest.raises(OntologyError, match="unknown concept type"):
            ancestry("Spaceship")

    def test_most_specific_type_ignores_label_order(self) -> None:
        assert most_specific_type(["Company", "Thing", "PublicCompany", "Concept", "Organisation"]) == "PublicCompany"

    def test_most_specific_type_ignores_unknown_labels(self) -> None:
        assert most_specific_type(["Thing", "Concept", "Person", "Legacy"]) == "Person"

    def test_unrelated_branches_are_rejected(self) -> None:
        with pytest.raises(OntologyError, match="single type hierarchy"):
            most_specific_type(["Thing", "Concept", "Person", "Classification", "Brand"])

    def test_no_known_labels(self) -> None:
        with pytest.raises(OntologyError):
            most_specific_type([])
        with pytest.raises(OntologyError):
            most_specific_type(["Legacy"])


class TestApiUrl:
    @pytest.mark.parametrize(
        "concept_type,path",
        [
            ("Organisation", "organisations"),
            ("PublicCompany", "organisations"),
            ("Person", "people"),
            ("Brand", "brands"),
            ("Location", "things"),
            ("NAICSIndustryClassification", "things"),
            ("SVProvision", "concepts"),
            ("Thing", "things"),
        ],
    )
    def test_api_path(self, concept_type: str, path: str) -> None:
        assert api_path(labels_for(concept_type)) == path

    def test_default_path(self) -> None:
        assert api_path(["Thing", "Concept", "Topic"]) == DEFAULT_API_PATH

    def test_api_url(self) -> None:
        url = api_url("cd7e4345-f11f-41f3-a0f0-2cf5c43e0115", labels_for("Company"), "http://api.ft.com")
        assert url == "http://api.ft.com/organisations/cd7e4345-f11f-41f3-a0f0-2cf5c43e0115"

    def test_api_url_trailing_slash_on_base(self) -> None:
        assert api_url("abc", labels_for("Person"), "https://api.example.com/") == "https://api.example.com/people/abc"

    def test_api_url_requires_uuid(self) -> None:
        with pytest.raises(OntologyError):
            api_url("", labels_for("Person"), "http://api.ft.com")


class TestBaseUrl:
    @pytest.mark.parametrize("url", ["http://api.ft.com", "https://api.ft.com", "http://localhost:8080"])
    def test_valid(self, url: str) -> None:
        assert is_valid_base_url(url)

    @pytest.mark.parametrize("url", ["", "api.ft.com", "ftp://api.ft.com", "http://", "/relative/path"])
    def test_invalid(self, url: str) -> None:
        assert not is_valid_base_url(url)
