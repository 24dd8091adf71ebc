"""Shared fixtures for engine tests."""

import pytest

from schedule_assist.services.availability_store import AvailabilityStore, Participant

from .helpers import weekly


@pytest.fixture
def alice():
    return Participant(id="alice", name="Alice Dubois", email="alice@example.com")


@pytest.fixture
def monday_store(alice):
    """Alice declares Monday 09:00-12:00 and 13:00-17:00."""
    return AvailabilityStore([weekly(alice.id, [0], ("09:00", "12:00"), ("13:00", "17:00"))])


@pytest.fixture
def roster_of_four():
    return [Participant(id=f"p{i}", name=f"Person {i}") for i in range(1, 5)]
