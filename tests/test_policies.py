"""Tests for skill compatibility policies."""

import pytest

from app.services.matching import (
    StrictSupersetPolicy,
    ThresholdOverlapPolicy,
    get_policy,
)


class TestStrictSupersetPolicy:
    """Resource must hold every required skill."""

    def test_superset_is_compatible(self):
        policy = StrictSupersetPolicy()
        assert policy.is_compatible({"x", "y", "z"}, {"x", "y"}) is True

    def test_exact_set_is_compatible(self):
        assert StrictSupersetPolicy().is_compatible({"x", "y"}, {"x", "y"}) is True

    def test_missing_one_skill_is_incompatible(self):
        assert StrictSupersetPolicy().is_compatible({"x"}, {"x", "y"}) is False

    def test_no_required_skills_is_compatible(self):
        assert StrictSupersetPolicy().is_compatible({"x"}, set()) is True

    def test_min_skills_to_match_is_full_set(self):
        assert StrictSupersetPolicy().min_skills_to_match({"a", "b", "c", "d"}) == 4


class TestThresholdOverlapPolicy:
    """Resource must hold min(|required|, 3) required skills."""

    def test_three_of_five_is_enough(self):
        policy = ThresholdOverlapPolicy()
        assert policy.is_compatible({"a", "b", "c"}, {"a", "b", "c", "d", "e"}) is True

    def test_two_of_five_is_not_enough(self):
        policy = ThresholdOverlapPolicy()
        assert policy.is_compatible({"a", "b", "x"}, {"a", "b", "c", "d", "e"}) is False

    def test_small_requirement_needs_every_skill(self):
        policy = ThresholdOverlapPolicy()
        assert policy.min_skills_to_match({"a", "b"}) == 2
        assert policy.is_compatible({"a"}, {"a", "b"}) is False
        assert policy.is_compatible({"a", "b"}, {"a", "b"}) is True

    def test_custom_threshold(self):
        policy = ThresholdOverlapPolicy(max_required=1)
        assert policy.is_compatible({"e"}, {"a", "b", "c", "d", "e"}) is True

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValueError):
            ThresholdOverlapPolicy(max_required=0)


class TestPolicyDisagreement:

    def test_policies_disagree_on_same_pair(self):
        """Resource with 3 of 4 required skills: threshold accepts, superset rejects."""
        resource_skills = {"a", "b", "c"}
        requirement_skills = {"a", "b", "c", "d"}

        assert ThresholdOverlapPolicy().is_compatible(resource_skills, requirement_skills) is True
        assert StrictSupersetPolicy().is_compatible(resource_skills, requirement_skills) is False


class TestGetPolicy:

    def test_default_is_strict_superset(self):
        assert isinstance(get_policy(), StrictSupersetPolicy)

    def test_resolves_by_name(self):
        assert isinstance(get_policy("strict_superset"), StrictSupersetPolicy)
        assert isinstance(get_policy(" Threshold_Overlap "), ThresholdOverlapPolicy)

    def test_threshold_max_passed_through(self):
        policy = get_policy("threshold_overlap", threshold_max=2)
        assert policy.max_required == 2

    def test_unknown_policy_raises(self):
        with pytest.raises(ValueError, match="Unknown skill policy"):
            get_policy("jaccard")
