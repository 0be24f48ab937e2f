"""
Shared fixtures for the worked matching example.
"""

from datetime import date

import pytest

from tests.factories import FakeEntityStore, make_requirement, make_resource


@pytest.fixture
def requirement_q():
    """Requirement Q: skills {X, Y}, budget 50, min 2 years, needed by 2024-06-01."""
    return make_requirement("q1", skills=("x", "y"), charge=50, min_years=2, start_date=date(2024, 6, 1))


@pytest.fixture
def resource_r1():
    """Resource R1: skills {X, Y, Z}, 40/h, 3 years, available 2024-05-01."""
    return make_resource("r1", skills=("x", "y", "z"), rate=40, years=3, available_from=date(2024, 5, 1))


@pytest.fixture
def resource_r2():
    """Resource R2: only skill X, otherwise qualifying."""
    return make_resource("r2", skills=("x",), rate=40, years=3, available_from=date(2024, 5, 1))


@pytest.fixture
def store(requirement_q, resource_r1, resource_r2):
    return FakeEntityStore(resources=[resource_r1, resource_r2], requirements=[requirement_q])
