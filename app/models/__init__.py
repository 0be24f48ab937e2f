"""
Database Models
"""

from app.models.skill import Skill, resource_skills, requirement_skills
from app.models.resource import Resource
from app.models.requirement import Requirement
from app.models.enums import (
    ResourceStatus,
    AvailabilityStatus,
    RequirementStatus,
    RequirementPriority,
    BudgetType,
)

__all__ = [
    "Skill",
    "resource_skills",
    "requirement_skills",
    "Resource",
    "Requirement",
    "ResourceStatus",
    "AvailabilityStatus",
    "RequirementStatus",
    "RequirementPriority",
    "BudgetType",
]
