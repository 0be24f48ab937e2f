"""
Matching API Schemas
Request/response models for the matching endpoints (camelCase on the wire)
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serializing field names as camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MatchCountResponse(CamelModel):
    """Count of qualifying candidates for one source entity."""
    entity_id: str
    direction: str
    count: int


class BatchCountRequest(CamelModel):
    """Ids of source entities to count matches for."""
    entity_ids: List[str] = Field(
        default_factory=list,
        description="Source entity ids, processed in order"
    )


class BatchCountItem(CamelModel):
    """One batch entry: either a count, or count=0 with an error."""
    entity_id: str
    count: int
    error: Optional[str] = None


class BatchCountResponse(CamelModel):
    direction: str
    results: List[BatchCountItem]


class MatchedCandidateResponse(CamelModel):
    candidate: Dict[str, Any]
    match_percentage: int = Field(ge=0, le=100)
    matching_skill_count: int
    total_required_skill_count: int


class PaginationResponse(CamelModel):
    current_page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool


class MatchDetailsResponse(CamelModel):
    """Ranked, paginated match set for one source entity."""
    direction: str
    source_summary: Dict[str, Any]
    results: List[MatchedCandidateResponse]
    total_count: int
    pagination: PaginationResponse
    matching_criteria: Dict[str, Any]
