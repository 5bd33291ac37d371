"""
Loading canonical concept documents into a graph store.

Documents use the JSON layout of the concept publishing pipeline: a canonical
concept with its scalar identifiers and the source representations that were
concorded into it. A path may name a single JSON file (one document or a list
of them) or a directory whose ``*.json`` files are loaded in name order.
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .sql import SQLGraphStore

logger = logging.getLogger(__name__)


class SourceRepresentation(BaseModel):
    """A source-system record concorded into a canonical concept."""

    model_config = {"populate_by_name": True}

    uuid: str = Field(..., description="uuid of the source record")
    pref_label: Optional[str] = Field(None, alias="prefLabel")
    type: str = Field(..., description="Concept type of the source record, e.g. Organisation")
    authority: Optional[str] = Field(None, description="Internal authority name, e.g. FACTSET")
    authority_value: Optional[str] = Field(None, alias="authorityValue")


class CanonicalConceptDocument(BaseModel):
    """A canonical concept with its source representations."""

    model_config = {"populate_by_name": True}

    pref_uuid: str = Field(..., alias="prefUUID")
    pref_label: Optional[str] = Field(None, alias="prefLabel")
    type: str = Field(..., description="Concept type of the canonical concept")
    lei_code: Optional[str] = Field(None, alias="leiCode")
    iso31661: Optional[str] = Field(None)
    industry_identifier: Optional[str] = Field(None, alias="industryIdentifier")
    source_representations: list[SourceRepresentation] = Field(default_factory=list, alias="sourceRepresentations")


def read_concept_documents(path: Union[str, Path]) -> list[CanonicalConceptDocument]:
    """Parse concept documents from a JSON file or a directory of JSON files."""
    path = Path(path)
    if path.is_dir():
        files = sorted(path.glob("*.json"))
    elif path.is_file():
        files = [path]
    else:
        raise FileNotFoundError(f"concept path {str(path)!r} does not exist")

    documents: list[CanonicalConceptDocument] = []
    for file in files:
        with open(file, "r") as f:
            data = json.load(f)
        items = data if isinstance(data, list) else [data]
        documents.extend(CanonicalConceptDocument.model_validate(item) for item in items)
    return documents


def load_concepts(store: "SQLGraphStore", path: Union[str, Path]) -> int:
    """Write every concept document found at `path` into `store`.

    Returns:
        The number of canonical concepts written.
    """
    documents = read_concept_documents(path)
    for document in documents:
        store.write_concept(document)
    logger.info("Loaded %d canonical concepts from %s", len(documents), path)
    return len(documents)
