"""
Constraint Evaluator

Hard constraints a candidate must satisfy before skills are compared:
- Status: candidate is in its eligible state
- Experience: resource.experience_years >= requirement.experience_min_years
- Budget: resource.rate_hourly <= requirement.budget_charge
- Availability: resource.availability_start_date <= requirement.start_date

All constraints combine with AND. A missing value on the source entity
disables that axis (recorded as None on the filter). A missing value on a
candidate fails an active axis, since the bound cannot be shown to hold.

Comparators are plain operator expressions over (resource_value,
requirement_value), so the entity store can apply the same comparator to
SQLAlchemy columns and push the filter into the query.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.models.enums import (
    MATCHABLE_AVAILABILITY,
    RequirementStatus,
    ResourceStatus,
)
from app.services.matching.adapters import EntityKind, MatchDirection


def meets_experience(resource_years, required_min_years):
    """Resource has at least the required years of experience."""
    return resource_years >= required_min_years


def within_budget(hourly_rate, budget_charge):
    """Resource hourly rate does not exceed the requirement budget."""
    return hourly_rate <= budget_charge


def available_by(available_from, needed_by):
    """Resource is free on or before the requirement start date."""
    return available_from <= needed_by


def is_eligible_status(candidate: Any, kind: EntityKind) -> bool:
    """
    Candidate is in its matchable state.

    Resources: status 'active' and availability 'available' or
    'partially_available'. Requirements: status 'open'.
    """
    if EntityKind(kind) is EntityKind.resource:
        return (
            candidate.status == ResourceStatus.active.value
            and candidate.availability_status in MATCHABLE_AVAILABILITY
        )
    return candidate.status == RequirementStatus.open.value


@dataclass(frozen=True)
class Constraint:
    """One hard constraint axis between a resource and a requirement field."""
    name: str
    resource_field: str
    requirement_field: str
    holds: Callable[[Any, Any], Any]  # holds(resource_value, requirement_value)

    def field_for(self, kind: EntityKind) -> str:
        if EntityKind(kind) is EntityKind.resource:
            return self.resource_field
        return self.requirement_field


CONSTRAINTS: Tuple[Constraint, ...] = (
    Constraint("experience", "experience_years", "experience_min_years", meets_experience),
    Constraint("budget", "rate_hourly", "budget_charge", within_budget),
    Constraint("availability", "availability_start_date", "start_date", available_by),
)


@dataclass(frozen=True)
class CandidateFilter:
    """
    Predicate over the candidate pool, built from one source entity.

    bounds maps constraint name -> source value; None disables the axis.
    """
    direction: MatchDirection
    bounds: Dict[str, Any] = field(default_factory=dict)

    @property
    def candidate_kind(self) -> EntityKind:
        return self.direction.candidate_kind

    def active_constraints(self) -> List[Tuple[Constraint, Any]]:
        """Constraints enabled by the source, with the source-side value."""
        return [
            (constraint, self.bounds[constraint.name])
            for constraint in CONSTRAINTS
            if self.bounds.get(constraint.name) is not None
        ]

    def compare(self, constraint: Constraint, bound: Any, candidate_value: Any) -> Any:
        """Apply a comparator with the source bound on its correct side."""
        if self.candidate_kind is EntityKind.resource:
            return constraint.holds(candidate_value, bound)
        return constraint.holds(bound, candidate_value)

    def failed_constraints(self, candidate: Any) -> List[str]:
        """Names of the constraints the candidate does not satisfy."""
        failed = []
        if not is_eligible_status(candidate, self.candidate_kind):
            failed.append("status")

        for constraint, bound in self.active_constraints():
            candidate_value = getattr(candidate, constraint.field_for(self.candidate_kind))
            if candidate_value is None or not self.compare(constraint, bound, candidate_value):
                failed.append(constraint.name)

        return failed

    def matches(self, candidate: Any) -> bool:
        return not self.failed_constraints(candidate)

    def describe(self) -> Dict[str, Optional[Any]]:
        """Bound per axis, None where the axis is disabled."""
        return {constraint.name: self.bounds.get(constraint.name) for constraint in CONSTRAINTS}


def build_candidate_filter(source: Any, direction: MatchDirection) -> CandidateFilter:
    """
    Build the candidate filter for a source entity.

    Args:
        source: Resource or Requirement matching direction.source_kind
        direction: Query direction

    Returns:
        CandidateFilter with one bound per constraint axis (None = disabled)
    """
    direction = MatchDirection(direction)
    source_kind = direction.source_kind
    bounds = {
        constraint.name: getattr(source, constraint.field_for(source_kind), None)
        for constraint in CONSTRAINTS
    }
    return CandidateFilter(direction=direction, bounds=bounds)
