"""
Entity Adapters

One matching code path serves both directions. The direction says which side
is the source; adapters give uniform access to skills and response summaries
for Resources and Requirements.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple


class EntityKind(str, Enum):
    resource = "resource"
    requirement = "requirement"


class MatchDirection(str, Enum):
    """Which side is the source entity of a matching query."""
    resource_to_requirements = "resource_to_requirements"  # Resource source, Requirement pool
    requirement_to_resources = "requirement_to_resources"  # Requirement source, Resource pool

    @property
    def source_kind(self) -> EntityKind:
        if self is MatchDirection.resource_to_requirements:
            return EntityKind.resource
        return EntityKind.requirement

    @property
    def candidate_kind(self) -> EntityKind:
        if self is MatchDirection.resource_to_requirements:
            return EntityKind.requirement
        return EntityKind.resource

    def as_pair(self, source: Any, candidate: Any) -> Tuple[Any, Any]:
        """Order (source, candidate) as (resource, requirement)."""
        if self is MatchDirection.resource_to_requirements:
            return source, candidate
        return candidate, source


def _number(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _skills(entity: Any) -> List[Dict[str, Any]]:
    return [{"id": skill.id, "name": skill.name} for skill in (entity.skills or [])]


def _summarize_resource(resource: Any) -> Dict[str, Any]:
    return {
        "id": resource.id,
        "name": resource.name,
        "description": resource.description,
        "categoryId": resource.category_id,
        "skills": _skills(resource),
        "experience": {
            "years": resource.experience_years,
            "level": resource.experience_level,
        },
        "rate": {
            "hourly": _number(resource.rate_hourly),
            "currency": resource.rate_currency,
        },
        "availability": {
            "status": resource.availability_status,
            "startDate": _iso(resource.availability_start_date),
            "hoursPerWeek": resource.availability_hours_per_week,
        },
    }


def _summarize_requirement(requirement: Any) -> Dict[str, Any]:
    return {
        "id": requirement.id,
        "title": requirement.title,
        "description": requirement.description,
        "categoryId": requirement.category_id,
        "skills": _skills(requirement),
        "experience": {
            "minYears": requirement.experience_min_years,
            "level": requirement.experience_level,
        },
        "budget": {
            "charge": _number(requirement.budget_charge),
            "currency": requirement.budget_currency,
            "type": requirement.budget_type,
        },
        "startDate": _iso(requirement.start_date),
        "durationWeeks": requirement.duration_weeks,
    }


@dataclass(frozen=True)
class EntityAdapter:
    """Field accessors for one entity kind."""
    kind: EntityKind
    summarize: Callable[[Any], Dict[str, Any]]

    def skill_ids(self, entity: Any) -> FrozenSet[str]:
        return frozenset(str(skill.id) for skill in (entity.skills or []))

    def summary(self, entity: Any) -> Dict[str, Any]:
        """Source entity summary shown at the top of a details response."""
        return self.summarize(entity)

    def describe_candidate(self, entity: Any) -> Dict[str, Any]:
        """Candidate payload for a details result, including ownership and status."""
        payload = self.summarize(entity)
        payload["organizationId"] = entity.organization_id
        payload["createdBy"] = entity.created_by
        payload["status"] = entity.status
        return payload


RESOURCE_ADAPTER = EntityAdapter(kind=EntityKind.resource, summarize=_summarize_resource)
REQUIREMENT_ADAPTER = EntityAdapter(kind=EntityKind.requirement, summarize=_summarize_requirement)

ADAPTERS = {
    EntityKind.resource: RESOURCE_ADAPTER,
    EntityKind.requirement: REQUIREMENT_ADAPTER,
}


def get_adapter(kind: EntityKind) -> EntityAdapter:
    return ADAPTERS[EntityKind(kind)]
