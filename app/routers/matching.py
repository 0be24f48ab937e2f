"""
Matching API Router

Match counts, ranked match details and batch counts in both directions:
- resources -> matching requirements
- requirements -> matching resources

The caller identity is supplied by the API gateway in trusted headers
(X-User-Id, X-Organization-Id, X-User-Type).
"""

from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Path, Query
import structlog

from app.config import settings
from app.database import get_session_factory
from app.models.match_schemas import (
    BatchCountItem,
    BatchCountRequest,
    BatchCountResponse,
    MatchCountResponse,
    MatchDetailsResponse,
    MatchedCandidateResponse,
    PaginationResponse,
)
from app.services.access import Principal
from app.services.entity_store import SqlAlchemyEntityStore
from app.services.matching import (
    AccessDeniedError,
    EntityNotFoundError,
    InvalidArgumentError,
    MatchDirection,
    MatchingError,
    get_policy,
)
from app.services.matching_engine import MatchDetails, MatchingEngine

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["matching"])


def get_matching_engine(session_factory=Depends(get_session_factory)) -> MatchingEngine:
    """Dependency building a MatchingEngine over the configured database."""
    if session_factory is None:
        raise HTTPException(status_code=503, detail="Database not configured")

    return MatchingEngine(
        store=SqlAlchemyEntityStore(session_factory),
        policy=get_policy(
            settings.match_skill_policy,
            threshold_max=settings.match_skill_threshold_max
        ),
    )


def get_principal(
    x_user_id: Optional[str] = Header(None),
    x_organization_id: Optional[str] = Header(None),
    x_user_type: Optional[str] = Header(None),
) -> Optional[Principal]:
    """Caller identity from gateway headers, None when unauthenticated."""
    if not x_user_id:
        return None
    return Principal(
        user_id=x_user_id,
        organization_id=x_organization_id or None,
        user_type=x_user_type or None,
    )


def require_principal(principal: Optional[Principal] = Depends(get_principal)) -> Principal:
    if principal is None:
        raise HTTPException(status_code=401, detail="Not authorized to access this route")
    return principal


def _http_error(error: MatchingError) -> HTTPException:
    if isinstance(error, EntityNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, AccessDeniedError):
        return HTTPException(status_code=403, detail=str(error))
    if isinstance(error, InvalidArgumentError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


def _count(engine: MatchingEngine, entity_id: str, direction: MatchDirection) -> MatchCountResponse:
    try:
        count = engine.count_matches(entity_id, direction)
    except MatchingError as e:
        raise _http_error(e) from e

    return MatchCountResponse(entity_id=entity_id, direction=direction.value, count=count)


def _details(
    engine: MatchingEngine,
    entity_id: str,
    direction: MatchDirection,
    principal: Principal,
    page: int,
    limit: int
) -> MatchDetailsResponse:
    try:
        details = engine.get_match_details(
            entity_id, direction, principal=principal, page=page, page_size=limit
        )
    except MatchingError as e:
        logger.info("match_details_rejected",
                   entity_id=entity_id,
                   direction=direction.value,
                   reason=type(e).__name__)
        raise _http_error(e) from e

    return _details_response(details)


def _details_response(details: MatchDetails) -> MatchDetailsResponse:
    return MatchDetailsResponse(
        direction=details.direction.value,
        source_summary=details.source_summary,
        results=[
            MatchedCandidateResponse(
                candidate=match.summary,
                match_percentage=match.match_percentage,
                matching_skill_count=match.matching_skill_count,
                total_required_skill_count=match.total_required_skill_count,
            )
            for match in details.results
        ],
        total_count=details.total_count,
        pagination=PaginationResponse(
            current_page=details.pagination.current_page,
            page_size=details.pagination.page_size,
            total_pages=details.pagination.total_pages,
            has_next=details.pagination.has_next,
            has_previous=details.pagination.has_previous,
        ),
        matching_criteria=details.matching_criteria,
    )


def _batch(
    engine: MatchingEngine,
    request: BatchCountRequest,
    direction: MatchDirection,
    principal: Optional[Principal]
) -> BatchCountResponse:
    try:
        results = engine.get_match_counts_batch(request.entity_ids, direction, principal=principal)
    except MatchingError as e:
        raise _http_error(e) from e

    return BatchCountResponse(
        direction=direction.value,
        results=[
            BatchCountItem(entity_id=result.entity_id, count=result.count, error=result.error)
            for result in results
        ],
    )


@router.get("/resources/{resource_id}/matching-requirements", response_model=MatchCountResponse)
def get_matching_requirements_count(
    resource_id: str = Path(..., description="Resource id"),
    engine: MatchingEngine = Depends(get_matching_engine)
):
    """Number of open requirements the resource qualifies for."""
    return _count(engine, resource_id, MatchDirection.resource_to_requirements)


@router.get("/requirements/{requirement_id}/matching-resources", response_model=MatchCountResponse)
def get_matching_resources_count(
    requirement_id: str = Path(..., description="Requirement id"),
    engine: MatchingEngine = Depends(get_matching_engine)
):
    """Number of active, available resources qualifying for the requirement."""
    return _count(engine, requirement_id, MatchDirection.requirement_to_resources)


@router.get(
    "/resources/{resource_id}/matching-requirements/details",
    response_model=MatchDetailsResponse
)
def get_matching_requirements_details(
    resource_id: str = Path(..., description="Resource id"),
    page: int = Query(1, description="Page number (1-based)"),
    limit: int = Query(settings.match_default_page_size, description="Page size"),
    principal: Principal = Depends(require_principal),
    engine: MatchingEngine = Depends(get_matching_engine)
):
    """
    Ranked matching requirements for a resource

    Only the resource owner or members of its organization may call this.
    Results are sorted by match percentage (highest first), then paginated.
    """
    return _details(engine, resource_id, MatchDirection.resource_to_requirements, principal, page, limit)


@router.get(
    "/requirements/{requirement_id}/matching-resources/details",
    response_model=MatchDetailsResponse
)
def get_matching_resources_details(
    requirement_id: str = Path(..., description="Requirement id"),
    page: int = Query(1, description="Page number (1-based)"),
    limit: int = Query(settings.match_default_page_size, description="Page size"),
    principal: Principal = Depends(require_principal),
    engine: MatchingEngine = Depends(get_matching_engine)
):
    """
    Ranked matching resources for a requirement

    Only the requirement owner or members of its organization may call this.
    Results are sorted by match percentage (highest first), then paginated.
    """
    return _details(engine, requirement_id, MatchDirection.requirement_to_resources, principal, page, limit)


@router.post(
    "/resources/matching-requirements/batch",
    response_model=BatchCountResponse,
    response_model_exclude_none=True
)
def get_matching_requirements_counts_batch(
    request: BatchCountRequest,
    principal: Optional[Principal] = Depends(get_principal),
    engine: MatchingEngine = Depends(get_matching_engine)
):
    """
    Matching requirement counts for many resources

    One entry per id, in request order. Missing or failing ids report
    count=0 with an error instead of failing the request.
    """
    return _batch(engine, request, MatchDirection.resource_to_requirements, principal)


@router.post(
    "/requirements/matching-resources/batch",
    response_model=BatchCountResponse,
    response_model_exclude_none=True
)
def get_matching_resources_counts_batch(
    request: BatchCountRequest,
    principal: Optional[Principal] = Depends(get_principal),
    engine: MatchingEngine = Depends(get_matching_engine)
):
    """
    Matching resource counts for many requirements

    One entry per id, in request order. Missing or failing ids report
    count=0 with an error instead of failing the request.
    """
    return _batch(engine, request, MatchDirection.requirement_to_resources, principal)
