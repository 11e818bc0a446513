"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from pathlib import Path

import pytest

from gym_registry.db import init_db
from gym_registry.db.repositories import GymRepository, PendingOrderRepository
from gym_registry.ledger import InMemoryLedger
from gym_registry.models.gym import GymPayload, GymServicePayload, MembershipPayload
from gym_registry.principal import Principal
from gym_registry.services.registry import GymRegistry


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the schema applied."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def owner():
    return Principal(b"\x01gym-owner")


@pytest.fixture
def member():
    return Principal(b"\x02gym-member")


@pytest.fixture
def stranger():
    return Principal(b"\x03stranger")


@pytest.fixture
def service_principal():
    return Principal(b"\x09service")


@pytest.fixture
def ledger(service_principal):
    """An empty in-memory ledger paying from the service account."""
    return InMemoryLedger(account=service_principal.account_id(), fee_e8s=10_000)


@pytest.fixture
def registry(db_path):
    return GymRegistry(GymRepository(db_path))


@pytest.fixture
def order_repo(db_path):
    return PendingOrderRepository(db_path)


@pytest.fixture
def gym_payload():
    """A complete gym payload."""
    return GymPayload(
        gym_name="Iron Den",
        gym_img_url="https://example.com/iron-den.png",
        gym_location="12 Harbour Street",
        gym_description="Strength and conditioning",
        email_address="hello@ironden.example",
    )


@pytest.fixture
def membership_payload():
    return MembershipPayload(
        full_name="Dana Reyes",
        user_name="dreyes",
        email_address="dana@example.com",
    )


@pytest.fixture
def service_payload():
    return GymServicePayload(
        service_name="Yoga",
        service_description="Morning vinyasa",
        operating_days_start="Mon",
        operating_days_end="Fri",
    )
