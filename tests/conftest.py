"""Pytest fixtures for testing"""

from datetime import timedelta
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from factories import NOW
from tenant_insights.api.dependencies import get_clock, get_screening_provider
from tenant_insights.api.main import create_app
from tenant_insights.domain.clock import FixedClock
from tenant_insights.domain.models import ScreeningData
from tenant_insights.domain.screening import ScreeningProvider
from tenant_insights.infrastructure.database.models import (
    Base,
    Lease,
    MaintenanceRequest,
    Payment,
    Unit,
    User,
)
from tenant_insights.infrastructure.database.session import get_db

OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"

# Test database: one shared in-memory connection
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class StaticScreeningProvider(ScreeningProvider):
    """Returns the same checks every time"""

    def __init__(self, data: ScreeningData):
        self.data = data
        self.calls = 0

    def fetch(self, tenant, unit) -> ScreeningData:
        self.calls += 1
        return self.data


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def screening_provider() -> StaticScreeningProvider:
    """Credit 620 (+15) and unverified income (+15): score 30, MEDIUM"""
    return StaticScreeningProvider(
        ScreeningData(
            credit_score=620,
            criminal_background=True,
            eviction_history=True,
            employment_verification=True,
            income_verification=False,
        )
    )


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session, clock: FixedClock, screening_provider: StaticScreeningProvider) -> TestClient:
    """Create FastAPI test client with test database, fixed clock and static screening"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_screening_provider] = lambda: screening_provider
    return TestClient(app)


@pytest.fixture
def landlord_data(db: Session) -> dict:
    """
    Two tenants on owner-1's units and one on owner-2's:

    - alice: 7 on-time + 3 late (5 days) payments, 1 old plumbing request -> MEDIUM / AVERAGE
    - bob: 4 on-time payments, no requests -> LOW / EXCELLENT
    - carol: only leases from owner-2, invisible to owner-1
    """
    unit_a = Unit(id="unit-a", owner_id=OWNER_ID, property_title="Sunset Apartments", label="A1")
    unit_b = Unit(id="unit-b", owner_id=OWNER_ID, property_title="Sunset Apartments", label="B2")
    unit_c = Unit(id="unit-c", owner_id=OTHER_OWNER_ID, property_title="Harbor View", label="C3")

    alice = User(
        id="tenant-alice",
        first_name="Alice",
        last_name="Reyes",
        email="alice@example.com",
        created_at=NOW - timedelta(days=100),
        updated_at=NOW - timedelta(days=1),
    )
    bob = User(
        id="tenant-bob",
        first_name="Bob",
        last_name="Santos",
        email="bob@example.com",
        created_at=NOW - timedelta(days=50),
        updated_at=NOW - timedelta(days=1),
    )
    carol = User(
        id="tenant-carol",
        first_name="Carol",
        email="carol@example.com",
        created_at=NOW - timedelta(days=10),
        updated_at=NOW - timedelta(days=1),
    )
    db.add_all([unit_a, unit_b, unit_c, alice, bob, carol])
    db.flush()

    alice_lease = Lease(
        id="lease-alice",
        tenant_id=alice.id,
        unit_id=unit_a.id,
        status="ACTIVE",
        rent_amount=Decimal("1200.00"),
        start_date=NOW - timedelta(days=400),
    )
    bob_lease = Lease(
        id="lease-bob",
        tenant_id=bob.id,
        unit_id=unit_b.id,
        status="ACTIVE",
        rent_amount=Decimal("950.00"),
        start_date=NOW - timedelta(days=150),
    )
    carol_lease = Lease(
        id="lease-carol",
        tenant_id=carol.id,
        unit_id=unit_c.id,
        status="ACTIVE",
        start_date=NOW - timedelta(days=30),
    )
    db.add_all([alice_lease, bob_lease, carol_lease])
    db.flush()

    # Alice: the three oldest payments were late by 5 days
    for i in range(10):
        due = NOW - timedelta(days=(i + 1) * 30)
        late = i >= 7
        paid = due + timedelta(days=5 if late else -1)
        db.add(
            Payment(
                lease_id=alice_lease.id,
                amount=Decimal("1200.00"),
                status="PAID",
                timing_status="LATE" if late else "ONTIME",
                due_date=due,
                paid_at=paid,
                updated_at=paid,
            )
        )

    for i in range(4):
        due = NOW - timedelta(days=(i + 1) * 30)
        db.add(
            Payment(
                lease_id=bob_lease.id,
                amount=Decimal("950.00"),
                status="PAID",
                timing_status="ADVANCE" if i == 0 else "ONTIME",
                due_date=due,
                paid_at=due - timedelta(days=2),
                updated_at=due - timedelta(days=2),
            )
        )

    db.add(
        MaintenanceRequest(
            tenant_id=alice.id,
            unit_id=unit_a.id,
            description="Leaking water pipe under the sink",
            status="RESOLVED",
            created_at=NOW - timedelta(days=60),
            updated_at=NOW - timedelta(days=57),
        )
    )
    # Filed against another landlord's unit: never counted for owner-1
    db.add(
        MaintenanceRequest(
            tenant_id=carol.id,
            unit_id=unit_c.id,
            description="Power outage",
            status="OPEN",
            created_at=NOW - timedelta(days=2),
            updated_at=NOW - timedelta(days=2),
        )
    )
    db.commit()

    return {
        "alice": alice,
        "bob": bob,
        "carol": carol,
        "unit_a": unit_a,
        "unit_b": unit_b,
        "unit_c": unit_c,
        "bob_lease": bob_lease,
    }
