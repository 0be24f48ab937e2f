"""
Matching Criteria Builder

Produces the JSON "matchingCriteria" block attached to details responses so
callers can see which constraints were applied and which were disabled
because the source entity left the field empty.

maxBudget, requiredStartDate and minExperienceYears are the requirement's
limits; they are null when a resource is the source, whose bounds appear
under "constraints" only.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from app.services.matching.adapters import EntityKind
from app.services.matching.constraints import CandidateFilter
from app.services.matching.policies import SkillCompatibilityPolicy


def _json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


class MatchingCriteriaBuilder:
    """Build the matchingCriteria payload for one details query."""

    VERSION = "v1.0"

    @staticmethod
    def build(
        candidate_filter: CandidateFilter,
        policy: SkillCompatibilityPolicy,
        source_skills: frozenset,
        candidate_pool_size: Optional[int] = None,
    ) -> dict:
        """
        Args:
            candidate_filter: Filter built from the source entity
            policy: Skill policy applied to the pool
            source_skills: Skill ids of the source entity
            candidate_pool_size: Candidates fetched before skill filtering

        Returns:
            Dict suitable for the matchingCriteria response field

        Example:
            >>> payload = MatchingCriteriaBuilder.build(f, StrictSupersetPolicy(), frozenset({"x", "y"}))
            >>> payload["minSkillsToMatch"]
            2
        """
        bounds = candidate_filter.describe()

        # Requirement-side limits are only known when the requirement is the source
        if candidate_filter.direction.source_kind is EntityKind.requirement:
            min_skills = policy.min_skills_to_match(source_skills)
            requirement_bounds = bounds
        else:
            min_skills = None
            requirement_bounds = {}

        return {
            "version": MatchingCriteriaBuilder.VERSION,
            "direction": candidate_filter.direction.value,
            "skillPolicy": policy.name,
            "minSkillsToMatch": min_skills,
            "maxBudget": _json_value(requirement_bounds.get("budget")),
            "requiredStartDate": _json_value(requirement_bounds.get("availability")),
            "minExperienceYears": requirement_bounds.get("experience"),
            "constraints": {
                name: {
                    "applied": value is not None,
                    "value": _json_value(value),
                }
                for name, value in bounds.items()
            },
            "candidatePoolSize": candidate_pool_size,
        }
