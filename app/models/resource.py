"""
Resource Model
Vendor-supplied candidates (people/assets) available for work
"""

from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, Text, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.models.enums import AvailabilityStatus, ResourceStatus
from app.models.skill import resource_skills


class Resource(Base):
    """
    A vendor resource listed on the marketplace.

    Owned and mutated by the resource CRUD service; the matching engine
    only reads it. Matched against open requirements while status is
    'active' and availability is 'available' or 'partially_available'.
    """
    __tablename__ = "resources"

    # Primary Key
    id = Column(String(64), primary_key=True)

    # Ownership
    organization_id = Column(String(64), nullable=True, index=True)  # Vendor organization
    created_by = Column(String(64), nullable=False, index=True)

    # Listing
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(String(64), nullable=True, index=True)

    # Skills (many-to-many, eager loaded so detached rows stay readable)
    skills = relationship("Skill", secondary=resource_skills, lazy="selectin")

    # Experience
    experience_years = Column(Integer, nullable=True)
    experience_level = Column(String(20), nullable=True)  # junior, mid, senior, expert

    # Rate
    rate_hourly = Column(Numeric(10, 2), nullable=True)
    rate_currency = Column(String(3), default="USD")

    # Availability
    availability_status = Column(String(30), default=AvailabilityStatus.available.value)
    availability_start_date = Column(Date, nullable=True)
    availability_hours_per_week = Column(Integer, nullable=True)

    # Status
    status = Column(String(20), nullable=False, default=ResourceStatus.active.value)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_resources_matching", "status", "availability_status", "rate_hourly"),
    )

    def __repr__(self):
        return f"<Resource(id={self.id}, name='{self.name}', status='{self.status}')>"
