"""
Tests for MatchingEngine.get_match_counts_batch

Tests cover:
- Results follow input order, also when workers finish out of order
- Per-item isolation of not found, access denied and unexpected errors
- Batch size bounds
"""

import time
from unittest.mock import patch

import pytest

from app.services.access import Principal
from app.services.matching import (
    EntityKind,
    InvalidArgumentError,
    MatchDirection,
    StrictSupersetPolicy,
)
from app.services.matching_engine import BatchCountResult, MatchingEngine
from tests.factories import FakeEntityStore, make_requirement, make_resource


class FlakyEntityStore(FakeEntityStore):
    """Fails find_by_id for selected ids."""

    def __init__(self, failing_ids=(), **kwargs):
        super().__init__(**kwargs)
        self.failing_ids = set(failing_ids)

    def find_by_id(self, kind, entity_id):
        if entity_id in self.failing_ids:
            raise RuntimeError(f"store unavailable for {entity_id}")
        return super().find_by_id(kind, entity_id)


class SlowEntityStore(FakeEntityStore):
    """Earlier ids take longer, so workers complete in reverse order."""

    def __init__(self, delays, **kwargs):
        super().__init__(**kwargs)
        self.delays = delays

    def find_by_id(self, kind, entity_id):
        time.sleep(self.delays.get(entity_id, 0))
        return super().find_by_id(kind, entity_id)


@pytest.fixture
def batch_store():
    resources = [
        make_resource("r-xyz", skills=("x", "y", "z")),
        make_resource("r-xy", skills=("x", "y")),
        make_resource("r-x", skills=("x",)),
    ]
    requirements = [
        make_requirement("q-x", skills=("x",)),      # 3
        make_requirement("q-xy", skills=("x", "y")),  # 2
        make_requirement("q-w", skills=("w",)),      # 0
        make_requirement("q-other", skills=("x",), created_by="other-user", organization_id="other-org"),
    ]
    return FakeEntityStore(resources=resources, requirements=requirements)


class TestBatchCounts:

    def test_results_in_input_order(self, batch_store):
        engine = MatchingEngine(batch_store, policy=StrictSupersetPolicy(), batch_max_workers=4)

        results = engine.get_match_counts_batch(
            ["q-xy", "deadbeef", "q-x", "q-w"], MatchDirection.requirement_to_resources
        )

        assert results == [
            BatchCountResult(entity_id="q-xy", count=2),
            BatchCountResult(entity_id="deadbeef", count=0, error="not found"),
            BatchCountResult(entity_id="q-x", count=3),
            BatchCountResult(entity_id="q-w", count=0),
        ]
        assert [r.ok for r in results] == [True, False, True, True]

    def test_counts_equal_single_counts(self, batch_store):
        engine = MatchingEngine(batch_store, policy=StrictSupersetPolicy())
        ids = ["q-x", "q-xy", "q-w", "q-other"]

        results = engine.get_match_counts_batch(ids, MatchDirection.requirement_to_resources)

        for entity_id, result in zip(ids, results):
            assert result.count == engine.count_matches(entity_id, MatchDirection.requirement_to_resources)

    def test_resource_direction(self, batch_store):
        engine = MatchingEngine(batch_store, policy=StrictSupersetPolicy())

        results = engine.get_match_counts_batch(
            ["r-xyz", "r-x"], MatchDirection.resource_to_requirements
        )

        # r-xyz: q-x, q-xy, q-other; r-x: q-x, q-other
        assert [(r.entity_id, r.count) for r in results] == [("r-xyz", 3), ("r-x", 2)]

    def test_duplicate_ids_reported_per_position(self, batch_store):
        engine = MatchingEngine(batch_store, policy=StrictSupersetPolicy())

        results = engine.get_match_counts_batch(["q-x", "q-x"], MatchDirection.requirement_to_resources)

        assert [r.count for r in results] == [3, 3]

    def test_order_kept_when_workers_finish_out_of_order(self):
        requirements = [make_requirement(f"q{i}", skills=("x",)) for i in range(6)]
        delays = {f"q{i}": 0.01 * (6 - i) for i in range(6)}
        store = SlowEntityStore(
            delays,
            resources=[make_resource("r")],
            requirements=requirements
        )
        engine = MatchingEngine(store, policy=StrictSupersetPolicy(), batch_max_workers=6)
        ids = [f"q{i}" for i in range(6)]

        results = engine.get_match_counts_batch(ids, MatchDirection.requirement_to_resources)

        assert [r.entity_id for r in results] == ids
        assert all(r.count == 1 for r in results)


class TestBatchErrorIsolation:

    def test_unexpected_error_isolated(self, batch_store):
        store = FlakyEntityStore(
            failing_ids={"q-xy"},
            resources=batch_store.entities[EntityKind.resource],
            requirements=batch_store.entities[EntityKind.requirement],
        )
        engine = MatchingEngine(store, policy=StrictSupersetPolicy())

        with patch("app.services.matching_engine.capture_exception") as capture:
            results = engine.get_match_counts_batch(
                ["q-x", "q-xy", "q-w"], MatchDirection.requirement_to_resources
            )

        assert results[0] == BatchCountResult(entity_id="q-x", count=3)
        assert results[1].count == 0
        assert results[1].error == "internal error"
        assert "q-xy" not in results[1].error
        assert results[2] == BatchCountResult(entity_id="q-w", count=0)
        capture.assert_called_once()

    def test_access_denied_with_principal(self, batch_store):
        engine = MatchingEngine(batch_store, policy=StrictSupersetPolicy())
        principal = Principal(user_id="client-user", organization_id="client-org")

        results = engine.get_match_counts_batch(
            ["q-x", "q-other"], MatchDirection.requirement_to_resources, principal=principal
        )

        assert results[0] == BatchCountResult(entity_id="q-x", count=3)
        assert results[1] == BatchCountResult(entity_id="q-other", count=0, error="access denied")

    def test_no_principal_skips_access_check(self, batch_store):
        engine = MatchingEngine(batch_store, policy=StrictSupersetPolicy())

        results = engine.get_match_counts_batch(["q-other"], MatchDirection.requirement_to_resources)

        assert results[0].ok
        assert results[0].count == 3


class TestBatchBounds:

    def test_empty_batch_rejected(self, batch_store):
        engine = MatchingEngine(batch_store)
        with pytest.raises(InvalidArgumentError, match="required"):
            engine.get_match_counts_batch([], MatchDirection.requirement_to_resources)

    def test_oversized_batch_rejected(self, batch_store):
        engine = MatchingEngine(batch_store, batch_max_size=100)
        ids = [f"id-{i}" for i in range(101)]

        with pytest.raises(InvalidArgumentError, match="cannot exceed 100"):
            engine.get_match_counts_batch(ids, MatchDirection.requirement_to_resources)

    def test_max_size_batch_accepted(self, batch_store):
        engine = MatchingEngine(batch_store, batch_max_size=100, batch_max_workers=10)
        ids = [f"id-{i}" for i in range(100)]

        results = engine.get_match_counts_batch(ids, MatchDirection.requirement_to_resources)

        assert len(results) == 100
        assert [r.entity_id for r in results] == ids
        assert all(r.error == "not found" for r in results)
