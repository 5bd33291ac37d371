"""
Operational endpoints: health check, good-to-go and build info.

Connectivity to the graph store is probed on every call; nothing is cached
between requests.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

import concordances
from concordances.errors import GraphStoreError
from concordances.service import ConcordanceReaderInterface

from ..config import Settings
from ..service_factory import get_service, get_settings

PANIC_GUIDE = "https://runbooks.ftops.tech/public-concordances-api"


class HealthCheckResult(BaseModel):
    """Outcome of one health check."""

    id: str
    name: str
    ok: bool
    severity: int
    businessImpact: str
    technicalSummary: str
    panicGuide: str
    checkOutput: str
    lastUpdated: str


class HealthResponse(BaseModel):
    """Health document in the FT standard layout."""

    schemaVersion: int = 1
    systemCode: str
    name: str
    description: str
    checks: list[HealthCheckResult]
    ok: bool


class BuildInfo(BaseModel):
    systemCode: str
    version: str = Field(description="Package version")


router = APIRouter(tags=["Health"])


def database_connectivity_check(service: ConcordanceReaderInterface) -> tuple[bool, str]:
    """Return (ok, output) for the graph store connectivity check."""
    try:
        service.check_connectivity()
    except GraphStoreError as e:
        return False, f"Error connecting to the concordance store: {e}"
    return True, "Connectivity to the concordance store is ok"


@router.get("/__health", response_model=HealthResponse, summary="Health check")
def health(
    service: ConcordanceReaderInterface = Depends(get_service),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    ok, output = database_connectivity_check(service)
    check = HealthCheckResult(
        id="check-connectivity-to-concordance-store",
        name="Check connectivity to the concordance store",
        ok=ok,
        severity=1,
        businessImpact="Unable to respond to Public Concordances API requests",
        technicalSummary="Cannot connect to the concordance store holding the equivalence graph",
        panicGuide=PANIC_GUIDE,
        checkOutput=output,
        lastUpdated=datetime.now(timezone.utc).isoformat(),
    )
    return HealthResponse(
        systemCode=settings.app_system_code,
        name=settings.app_system_code,
        description="Concords concept identifiers",
        checks=[check],
        ok=ok,
    )


@router.get("/__gtg", response_class=PlainTextResponse, summary="Good to go")
def good_to_go(service: ConcordanceReaderInterface = Depends(get_service)) -> PlainTextResponse:
    ok, output = database_connectivity_check(service)
    if not ok:
        return PlainTextResponse(output, status_code=503)
    return PlainTextResponse("OK")


@router.get("/__build-info", response_model=BuildInfo, summary="Build information")
@router.get("/build-info", response_model=BuildInfo, include_in_schema=False)
def build_info(settings: Settings = Depends(get_settings)) -> BuildInfo:
    return BuildInfo(systemCode=settings.app_system_code, version=concordances.__version__)
