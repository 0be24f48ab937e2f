"""
Marketplace Enumerations
Status values and column defaults for Resource and Requirement records
"""

from enum import Enum


class ResourceStatus(str, Enum):
    """Listing status of a vendor resource. Only active resources are matched."""
    active = "active"
    inactive = "inactive"
    archived = "archived"


class AvailabilityStatus(str, Enum):
    """Current availability of a vendor resource."""
    available = "available"
    partially_available = "partially_available"
    unavailable = "unavailable"


class RequirementStatus(str, Enum):
    """Lifecycle status of a client requirement. Only open requirements are matched."""
    draft = "draft"
    open = "open"
    in_progress = "in_progress"
    on_hold = "on_hold"
    completed = "completed"
    cancelled = "cancelled"


class RequirementPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class BudgetType(str, Enum):
    hourly = "hourly"
    fixed = "fixed"


# Resource availability states that still count as matchable
MATCHABLE_AVAILABILITY = (
    AvailabilityStatus.available.value,
    AvailabilityStatus.partially_available.value,
)
