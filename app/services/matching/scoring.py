"""
Match Scorer

Overlap-based fitness score for a resource/requirement pair that already
passed the hard constraints and the skill policy.

score = round(max(|∩| / |resource|, |∩| / |requirement|) * 100)

Taking the max means a resource holding every required skill scores 100 no
matter how many extra skills it has.
"""

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet


@dataclass(frozen=True)
class SkillOverlap:
    """Skill overlap between one resource and one requirement."""
    matching_skills: FrozenSet[str]
    resource_skill_count: int
    required_skill_count: int
    ratio_from_resource: float
    ratio_from_requirement: float
    match_percentage: int  # 0-100

    @property
    def matching_skill_count(self) -> int:
        return len(self.matching_skills)


def _ratio(part: int, whole: int) -> float:
    return part / whole if whole else 0.0


def score_skill_overlap(
    resource_skills: AbstractSet[str],
    requirement_skills: AbstractSet[str]
) -> SkillOverlap:
    """
    Score the skill overlap of a resource/requirement pair.

    Args:
        resource_skills: Skill ids held by the resource
        requirement_skills: Skill ids required by the requirement

    Returns:
        SkillOverlap with both ratios and the integer match percentage

    Example:
        >>> overlap = score_skill_overlap({"x", "y", "z"}, {"x", "y"})
        >>> overlap.match_percentage  # max(2/3, 2/2) -> 100
        100
    """
    matching = frozenset(requirement_skills) & frozenset(resource_skills)
    from_resource = _ratio(len(matching), len(resource_skills))
    from_requirement = _ratio(len(matching), len(requirement_skills))

    if not requirement_skills:
        # Nothing required: every requirement is met
        best = 1.0
    else:
        best = max(from_resource, from_requirement)

    # Round half up, bounded to [0, 100]
    percentage = min(100, max(0, int(best * 100 + 0.5)))

    return SkillOverlap(
        matching_skills=matching,
        resource_skill_count=len(resource_skills),
        required_skill_count=len(requirement_skills),
        ratio_from_resource=from_resource,
        ratio_from_requirement=from_requirement,
        match_percentage=percentage,
    )
