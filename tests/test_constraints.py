"""Tests for the constraint evaluator."""

from datetime import date
from decimal import Decimal

import pytest

from app.services.matching import (
    EntityKind,
    MatchDirection,
    available_by,
    build_candidate_filter,
    is_eligible_status,
    meets_experience,
    within_budget,
)
from tests.factories import make_requirement, make_resource


class TestConstraintFunctions:
    """Pairwise comparisons (resource value, requirement value)."""

    def test_experience_at_least_min_years(self):
        assert meets_experience(3, 2) is True
        assert meets_experience(2, 2) is True
        assert meets_experience(1, 2) is False

    def test_rate_within_budget(self):
        assert within_budget(Decimal("40"), Decimal("50")) is True
        assert within_budget(Decimal("50"), Decimal("50")) is True
        assert within_budget(Decimal("50.01"), Decimal("50")) is False

    def test_available_on_or_before_start(self):
        assert available_by(date(2024, 5, 1), date(2024, 6, 1)) is True
        assert available_by(date(2024, 6, 1), date(2024, 6, 1)) is True
        assert available_by(date(2024, 6, 2), date(2024, 6, 1)) is False


class TestEligibleStatus:

    def test_active_available_resource_is_eligible(self):
        assert is_eligible_status(make_resource("r"), EntityKind.resource)

    def test_partially_available_resource_is_eligible(self):
        resource = make_resource("r", availability="partially_available")
        assert is_eligible_status(resource, EntityKind.resource)

    @pytest.mark.parametrize("status,availability", [
        ("inactive", "available"),
        ("archived", "available"),
        ("active", "unavailable"),
    ])
    def test_ineligible_resources(self, status, availability):
        resource = make_resource("r", status=status, availability=availability)
        assert not is_eligible_status(resource, EntityKind.resource)

    def test_only_open_requirements_are_eligible(self):
        assert is_eligible_status(make_requirement("q"), EntityKind.requirement)
        for status in ("draft", "in_progress", "on_hold", "completed", "cancelled"):
            requirement = make_requirement("q", status=status)
            assert not is_eligible_status(requirement, EntityKind.requirement)


class TestCandidateFilterFromRequirement:
    """Requirement source, resource pool."""

    def test_bounds_taken_from_requirement(self, requirement_q):
        candidate_filter = build_candidate_filter(requirement_q, MatchDirection.requirement_to_resources)

        assert candidate_filter.candidate_kind is EntityKind.resource
        assert candidate_filter.describe() == {
            "experience": 2,
            "budget": Decimal("50"),
            "availability": date(2024, 6, 1),
        }

    def test_qualifying_resource_matches(self, requirement_q, resource_r1):
        candidate_filter = build_candidate_filter(requirement_q, MatchDirection.requirement_to_resources)
        assert candidate_filter.matches(resource_r1)
        assert candidate_filter.failed_constraints(resource_r1) == []

    def test_each_axis_rejects_independently(self, requirement_q):
        candidate_filter = build_candidate_filter(requirement_q, MatchDirection.requirement_to_resources)

        assert candidate_filter.failed_constraints(make_resource("a", years=1)) == ["experience"]
        assert candidate_filter.failed_constraints(make_resource("b", rate=60)) == ["budget"]
        assert candidate_filter.failed_constraints(
            make_resource("c", available_from=date(2024, 7, 1))
        ) == ["availability"]
        assert candidate_filter.failed_constraints(make_resource("d", status="inactive")) == ["status"]

    def test_missing_source_field_disables_axis(self):
        requirement = make_requirement("q", charge=None)
        candidate_filter = build_candidate_filter(requirement, MatchDirection.requirement_to_resources)

        assert candidate_filter.describe()["budget"] is None
        assert [c.name for c, _ in candidate_filter.active_constraints()] == ["experience", "availability"]
        # Any rate passes when the requirement has no budget
        assert candidate_filter.matches(make_resource("r", rate=10_000))

    def test_zero_min_years_is_still_a_constraint(self):
        requirement = make_requirement("q", min_years=0)
        candidate_filter = build_candidate_filter(requirement, MatchDirection.requirement_to_resources)

        assert candidate_filter.describe()["experience"] == 0
        assert candidate_filter.matches(make_resource("r", years=0))

    def test_missing_candidate_field_fails_active_axis(self, requirement_q):
        candidate_filter = build_candidate_filter(requirement_q, MatchDirection.requirement_to_resources)
        resource = make_resource("r", rate=None)

        assert candidate_filter.failed_constraints(resource) == ["budget"]


class TestCandidateFilterFromResource:
    """Resource source, requirement pool."""

    def test_bounds_taken_from_resource(self, resource_r1):
        candidate_filter = build_candidate_filter(resource_r1, MatchDirection.resource_to_requirements)

        assert candidate_filter.candidate_kind is EntityKind.requirement
        assert candidate_filter.describe() == {
            "experience": 3,
            "budget": Decimal("40"),
            "availability": date(2024, 5, 1),
        }

    def test_comparisons_mirror_requirement_direction(self, resource_r1):
        candidate_filter = build_candidate_filter(resource_r1, MatchDirection.resource_to_requirements)

        assert candidate_filter.matches(make_requirement("ok"))
        assert candidate_filter.failed_constraints(make_requirement("a", min_years=5)) == ["experience"]
        assert candidate_filter.failed_constraints(make_requirement("b", charge=30)) == ["budget"]
        assert candidate_filter.failed_constraints(
            make_requirement("c", start_date=date(2024, 4, 1))
        ) == ["availability"]
        assert candidate_filter.failed_constraints(make_requirement("d", status="draft")) == ["status"]

    def test_resource_without_start_date_ignores_timing(self):
        resource = make_resource("r", available_from=None)
        candidate_filter = build_candidate_filter(resource, MatchDirection.resource_to_requirements)

        assert candidate_filter.matches(make_requirement("q", start_date=date(2000, 1, 1)))
