"""Partner relationship discovery endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from partner_network.errors import (
    DiscoveryError,
    InvalidInput,
    SeedNotFound,
    StorageUnavailable,
)
from partner_network.models import (
    DiscoveredLink,
    KinshipResult,
    NetworkResponse,
    PaginatedResponse,
)
from partner_network.services.direct_link_service import DirectLinkService
from partner_network.services.kinship_service import KinshipService
from partner_network.services.network_service import NetworkService

router = APIRouter()


def _to_http_error(error: DiscoveryError) -> HTTPException:
    """Map discovery outcomes to HTTP status codes."""
    if isinstance(error, SeedNotFound):
        status_code = 404
    elif isinstance(error, InvalidInput):
        status_code = 400
    elif isinstance(error, StorageUnavailable):
        status_code = 503
    else:
        status_code = 500
    return HTTPException(
        status_code=status_code,
        detail={"code": error.code, "message": error.message},
    )


@router.get("/network", response_model=NetworkResponse)
async def get_network(
    limit: Optional[int] = Query(None, ge=1, le=5000, description="Maximum edges to read"),
) -> NetworkResponse:
    """
    Direct links of every partner, built from one bulk edge read.

    Only partners with at least one link are reported.
    """
    try:
        return await NetworkService.build_network(limit=limit)
    except DiscoveryError as e:
        raise _to_http_error(e)


@router.get("/{person_id}/links", response_model=PaginatedResponse[DiscoveredLink])
async def get_direct_links(
    person_id: str,
    exclude_company: Optional[str] = Query(None, description="Company already being viewed"),
    max_companies: Optional[int] = Query(None, ge=1, le=100),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
) -> PaginatedResponse[DiscoveredLink]:
    """
    Companies a partner is directly linked to, strongest degree first.

    Example:
        GET /api/partners/12345678900/links?exclude_company=11222333000144
    """
    try:
        links = await DirectLinkService.resolve_direct_links(
            person_id,
            exclude_company_id=exclude_company,
            max_companies=max_companies,
        )
    except DiscoveryError as e:
        raise _to_http_error(e)

    links = sorted(links, key=lambda link: (link.degree, link.company_name))
    total = len(links)
    skip = (page - 1) * page_size

    return PaginatedResponse(
        items=links[skip:skip + page_size],
        total=total,
        page=page,
        page_size=page_size,
        pages=(total + page_size - 1) // page_size,
    )


@router.get("/{person_id}/relatives", response_model=KinshipResult)
async def get_relatives(person_id: str) -> KinshipResult:
    """
    Probable relatives of a partner, highest confidence first.

    Confidence is a heuristic score capped at 95, not a probability.
    """
    try:
        return await KinshipService.find_relatives(person_id)
    except DiscoveryError as e:
        raise _to_http_error(e)
