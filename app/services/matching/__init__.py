"""
Matching Engine Service Package

Provides constraint evaluation, skill compatibility policies, overlap
scoring, and matching criteria explanations for matching vendor resources
against client requirements.
"""

from app.services.matching.errors import (
    MatchingError,
    EntityNotFoundError,
    AccessDeniedError,
    InvalidArgumentError,
)
from app.services.matching.adapters import (
    EntityKind,
    MatchDirection,
    EntityAdapter,
    RESOURCE_ADAPTER,
    REQUIREMENT_ADAPTER,
    get_adapter,
)
from app.services.matching.constraints import (
    CandidateFilter,
    Constraint,
    CONSTRAINTS,
    build_candidate_filter,
    is_eligible_status,
    meets_experience,
    within_budget,
    available_by,
)
from app.services.matching.policies import (
    SkillCompatibilityPolicy,
    StrictSupersetPolicy,
    ThresholdOverlapPolicy,
    get_policy,
)
from app.services.matching.scoring import SkillOverlap, score_skill_overlap
from app.services.matching.explainability import MatchingCriteriaBuilder

__all__ = [
    # Errors
    "MatchingError",
    "EntityNotFoundError",
    "AccessDeniedError",
    "InvalidArgumentError",
    # Direction and adapters
    "EntityKind",
    "MatchDirection",
    "EntityAdapter",
    "RESOURCE_ADAPTER",
    "REQUIREMENT_ADAPTER",
    "get_adapter",
    # Constraints
    "CandidateFilter",
    "Constraint",
    "CONSTRAINTS",
    "build_candidate_filter",
    "is_eligible_status",
    "meets_experience",
    "within_budget",
    "available_by",
    # Skill policies
    "SkillCompatibilityPolicy",
    "StrictSupersetPolicy",
    "ThresholdOverlapPolicy",
    "get_policy",
    # Scoring
    "SkillOverlap",
    "score_skill_overlap",
    # Explainability
    "MatchingCriteriaBuilder",
]
