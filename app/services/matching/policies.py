"""
Skill Compatibility Policies

Decide whether a resource's skill set is compatible with a requirement's
required skill set. Policies always receive (resource_skills,
requirement_skills), whichever side is the source of the query, so one
policy applies identically in both directions.

- StrictSupersetPolicy ("strict_superset"): resource has every required skill.
  Default: a qualifying resource must be able to do everything asked.
- ThresholdOverlapPolicy ("threshold_overlap"): resource has at least
  k = min(|required|, max_required) of the required skills.

The active policy is chosen by configuration (MATCH_SKILL_POLICY).
"""

from abc import ABC, abstractmethod
from typing import AbstractSet, Dict, Type


class SkillCompatibilityPolicy(ABC):
    """Base class for skill compatibility policies."""

    name: str = ""

    @abstractmethod
    def min_skills_to_match(self, requirement_skills: AbstractSet[str]) -> int:
        """Number of required skills a resource must hold."""
        pass

    def is_compatible(
        self,
        resource_skills: AbstractSet[str],
        requirement_skills: AbstractSet[str]
    ) -> bool:
        """
        Check a resource/requirement pair.

        Args:
            resource_skills: Skill ids held by the resource
            requirement_skills: Skill ids required by the requirement

        Returns:
            True if the resource holds enough of the required skills
        """
        matched = len(set(requirement_skills) & set(resource_skills))
        return matched >= self.min_skills_to_match(requirement_skills)

    def __repr__(self):
        return f"<{type(self).__name__}(name='{self.name}')>"


class StrictSupersetPolicy(SkillCompatibilityPolicy):
    """Resource skill set must be a superset of the required skills."""

    name = "strict_superset"

    def min_skills_to_match(self, requirement_skills: AbstractSet[str]) -> int:
        return len(requirement_skills)

    def is_compatible(
        self,
        resource_skills: AbstractSet[str],
        requirement_skills: AbstractSet[str]
    ) -> bool:
        return set(requirement_skills) <= set(resource_skills)


class ThresholdOverlapPolicy(SkillCompatibilityPolicy):
    """
    Resource must hold at least min(|required|, max_required) required skills.

    With the default max_required=3 a requirement asking for five skills is
    satisfied by any three of them.
    """

    name = "threshold_overlap"

    def __init__(self, max_required: int = 3):
        if max_required < 1:
            raise ValueError("max_required must be at least 1")
        self.max_required = max_required

    def min_skills_to_match(self, requirement_skills: AbstractSet[str]) -> int:
        return min(len(requirement_skills), self.max_required)


POLICIES: Dict[str, Type[SkillCompatibilityPolicy]] = {
    StrictSupersetPolicy.name: StrictSupersetPolicy,
    ThresholdOverlapPolicy.name: ThresholdOverlapPolicy,
}

DEFAULT_POLICY = StrictSupersetPolicy.name


def get_policy(name: str = DEFAULT_POLICY, threshold_max: int = 3) -> SkillCompatibilityPolicy:
    """
    Resolve a policy by its configured name.

    Raises:
        ValueError: Unknown policy name
    """
    key = (name or DEFAULT_POLICY).strip().lower()
    if key not in POLICIES:
        raise ValueError(
            f"Unknown skill policy '{name}'; expected one of {sorted(POLICIES)}"
        )
    if key == ThresholdOverlapPolicy.name:
        return ThresholdOverlapPolicy(max_required=threshold_max)
    return POLICIES[key]()
