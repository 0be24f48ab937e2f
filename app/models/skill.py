"""
Skill Model
Admin-curated skill catalogue referenced by resources and requirements
"""

from sqlalchemy import Column, String, Table, ForeignKey
from app.database import Base


# Many-to-many association tables (no ownership implied, set membership only)
resource_skills = Table(
    "resource_skills",
    Base.metadata,
    Column("resource_id", String(64), ForeignKey("resources.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", String(64), ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)

requirement_skills = Table(
    "requirement_skills",
    Base.metadata,
    Column("requirement_id", String(64), ForeignKey("requirements.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", String(64), ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)


class Skill(Base):
    """A single skill from the admin skill catalogue."""
    __tablename__ = "skills"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False, index=True)

    def __repr__(self):
        return f"<Skill(id={self.id}, name='{self.name}')>"
