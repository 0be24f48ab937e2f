"""add_marketplace_matching_tables

Revision ID: 20261019_1000_add_matching
Revises:
Create Date: 2026-10-19 10:00:00

Adds: skills, resources, requirements, resource_skills, requirement_skills
Purpose: Read model for the resource-requirement matching engine
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261019_1000_add_matching'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Create marketplace tables read by the matching engine.

    Tables:
    - skills: Admin-curated skill catalogue
    - resources: Vendor resources (rate, experience, availability)
    - requirements: Client requirements (budget, min experience, start date)
    - resource_skills / requirement_skills: Skill set membership
    """

    op.create_table(
        'skills',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_skills_name', 'skills', ['name'])

    op.create_table(
        'resources',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=True),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category_id', sa.String(length=64), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        sa.Column('experience_level', sa.String(length=20), nullable=True),
        sa.Column('rate_hourly', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('rate_currency', sa.String(length=3), nullable=True),
        sa.Column('availability_status', sa.String(length=30), nullable=True),
        sa.Column('availability_start_date', sa.Date(), nullable=True),
        sa.Column('availability_hours_per_week', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_resources_organization_id', 'resources', ['organization_id'])
    op.create_index('ix_resources_created_by', 'resources', ['created_by'])
    op.create_index('ix_resources_category_id', 'resources', ['category_id'])
    # Candidate pool lookup for requirement -> resources queries
    op.create_index(
        'idx_resources_matching',
        'resources',
        ['status', 'availability_status', 'rate_hourly'],
    )

    op.create_table(
        'requirements',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category_id', sa.String(length=64), nullable=True),
        sa.Column('experience_min_years', sa.Integer(), nullable=True),
        sa.Column('experience_level', sa.String(length=20), nullable=True),
        sa.Column('budget_charge', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('budget_currency', sa.String(length=3), nullable=True),
        sa.Column('budget_type', sa.String(length=10), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('duration_weeks', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('priority', sa.String(length=10), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_requirements_organization_id', 'requirements', ['organization_id'])
    op.create_index('ix_requirements_created_by', 'requirements', ['created_by'])
    op.create_index('ix_requirements_category_id', 'requirements', ['category_id'])
    # Candidate pool lookup for resource -> requirements queries
    op.create_index(
        'idx_requirements_matching',
        'requirements',
        ['status', 'budget_charge', 'start_date'],
    )

    op.create_table(
        'resource_skills',
        sa.Column('resource_id', sa.String(length=64), nullable=False),
        sa.Column('skill_id', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['resource_id'], ['resources.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('resource_id', 'skill_id'),
    )

    op.create_table(
        'requirement_skills',
        sa.Column('requirement_id', sa.String(length=64), nullable=False),
        sa.Column('skill_id', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['requirement_id'], ['requirements.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('requirement_id', 'skill_id'),
    )


def downgrade() -> None:
    """Drop marketplace matching tables."""
    op.drop_table('requirement_skills')
    op.drop_table('resource_skills')

    op.drop_index('idx_requirements_matching', table_name='requirements')
    op.drop_index('ix_requirements_category_id', table_name='requirements')
    op.drop_index('ix_requirements_created_by', table_name='requirements')
    op.drop_index('ix_requirements_organization_id', table_name='requirements')
    op.drop_table('requirements')

    op.drop_index('idx_resources_matching', table_name='resources')
    op.drop_index('ix_resources_category_id', table_name='resources')
    op.drop_index('ix_resources_created_by', table_name='resources')
    op.drop_index('ix_resources_organization_id', table_name='resources')
    op.drop_table('resources')

    op.drop_index('ix_skills_name', table_name='skills')
    op.drop_table('skills')
