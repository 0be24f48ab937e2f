"""
Requirement Model
Client-posted needs that vendors' resources are matched against
"""

from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, Text, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.enums import BudgetType, RequirementPriority, RequirementStatus
from app.models.skill import requirement_skills


class Requirement(Base):
    """
    A client requirement posted on the marketplace.

    Owned and mutated by the requirement CRUD service; the matching engine
    only reads it. Matched against resources only while status is 'open'.
    """
    __tablename__ = "requirements"

    # Primary Key
    id = Column(String(64), primary_key=True)

    # Ownership
    organization_id = Column(String(64), nullable=False, index=True)  # Client organization
    created_by = Column(String(64), nullable=False, index=True)

    # Posting
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(String(64), nullable=True, index=True)

    # Required skills
    skills = relationship("Skill", secondary=requirement_skills, lazy="selectin")

    # Experience
    experience_min_years = Column(Integer, nullable=True)
    experience_level = Column(String(20), nullable=True)

    # Budget (charge = maximum acceptable hourly rate)
    budget_charge = Column(Numeric(10, 2), nullable=True)
    budget_currency = Column(String(3), default="USD")
    budget_type = Column(String(10), default=BudgetType.hourly.value)

    # Timing
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    duration_weeks = Column(Integer, nullable=True)

    # Status
    status = Column(String(20), nullable=False, default=RequirementStatus.draft.value)
    priority = Column(String(10), default=RequirementPriority.medium.value)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_requirements_matching", "status", "budget_charge", "start_date"),
    )

    def __repr__(self):
        return f"<Requirement(id={self.id}, title='{self.title}', status='{self.status}')>"
