"""
Concordances API router.

``GET /concordances`` resolves either concept ids or identifier values under a
single authority. Lookups that match nothing return an empty list with 200.
"""

from functools import partial
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from concordances.assembler import THING_URL
from concordances.errors import ConcordanceError
from concordances.logging import ServiceLogger
from concordances.models import Concordance, Concordances
from concordances.service import ConcordanceReaderInterface

from ..config import Settings
from ..service_factory import get_logger, get_service, get_settings
from ..transaction import get_transaction_id

MULTIPLE_AUTHORITIES_NOT_PERMITTED = "multiple authorities are not permitted"
CONCEPT_AND_AUTHORITY_CANNOT_BE_BOTH_PRESENT = "if conceptId is present then authority is not a valid parameter"
AUTHORITY_IS_MANDATORY_IF_CONCEPT_ID_IS_MISSING = "if conceptId is absent then authority is mandatory"
ERROR_ACCESSING_CONCORDANCE_DATASTORE = "error accessing Concordance datastore"


class ConcordancesResponse(BaseModel):
    """Concordances for the requested identifiers."""

    concordances: list[Concordance] = Field(description="Matching concordances, possibly empty")


class ErrorResponse(BaseModel):
    message: str


router = APIRouter(tags=["Concordances"])


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def strip_thing_prefix(concept_id: str) -> str:
    """Accept both ``http://api.ft.com/things/<uuid>`` and bare uuids."""
    return concept_id[len(THING_URL) :] if concept_id.startswith(THING_URL) else concept_id


@router.get(
    "/concordances",
    response_model=ConcordancesResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Resolve concordances",
    description="""
Resolve concordances either by concept id or by authority.

- `conceptId` (repeatable): concept uuids or thing URIs
- `authority` (single) with `identifierValue` (repeatable): identifier values under that authority

`conceptId` and `authority` are mutually exclusive.
""",
)
def get_concordances(
    concept_id: Optional[list[str]] = Query(default=None, alias="conceptId", description="Concept uuid or thing URI"),
    authority: Optional[list[str]] = Query(default=None, description="Authority URI, e.g. http://api.ft.com/system/LEI"),
    identifier_value: Optional[list[str]] = Query(
        default=None, alias="identifierValue", description="Identifier value under the authority"
    ),
    service: ConcordanceReaderInterface = Depends(get_service),
    settings: Settings = Depends(get_settings),
    logger: ServiceLogger = Depends(get_logger),
    transaction_id: str = Depends(get_transaction_id),
) -> JSONResponse:
    log = logger.with_transaction_id(transaction_id)
    log.debug("Concordance request: conceptId=%s authority=%s identifierValue=%s", concept_id, authority, identifier_value)

    if concept_id is not None and authority is not None:
        return error_response(400, CONCEPT_AND_AUTHORITY_CANNOT_BE_BOTH_PRESENT)
    if authority is None:
        if concept_id is None:
            return error_response(400, AUTHORITY_IS_MANDATORY_IF_CONCEPT_ID_IS_MISSING)
        lookup = partial(service.read_by_concept_id, [strip_thing_prefix(c) for c in concept_id])
    elif len(authority) > 1:
        return error_response(400, MULTIPLE_AUTHORITIES_NOT_PERMITTED)
    else:
        lookup = partial(service.read_by_authority, authority[0], identifier_value or [])

    try:
        result, found = lookup()
    except ConcordanceError:
        log.exception("error looking up Concordances")
        return error_response(500, ERROR_ACCESSING_CONCORDANCE_DATASTORE)

    if not found:
        log.debug("No concordances found")
        result = Concordances()
    return JSONResponse(
        content=result.model_dump(mode="json", by_alias=True),
        headers={"Cache-Control": settings.cache_control_header},
    )
