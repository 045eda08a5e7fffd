"""
Shared pytest fixtures for the FreightView test suite.

Environment is pinned BEFORE freightview is imported so settings pick up an
in-memory SQLite database and background jobs stay off.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from freightview.database import Base, get_db
from freightview.dependencies import get_current_user
from freightview.main import app
from freightview.models import Forwarder, Quote, ShipmentRequest, User


# ── Database (per-test isolation) ─────────────────────────────────────────────

@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# ── Seed rows ─────────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def user(db):
    u = User(email="ops@acme-electronics.example", company_name="Acme Electronics Inc.")
    db.add(u)
    await db.commit()
    return u


@pytest_asyncio.fixture
async def other_user(db):
    u = User(email="buyer@global-textiles.example", company_name="Global Textiles Ltd.")
    db.add(u)
    await db.commit()
    return u


@pytest_asyncio.fixture
async def forwarders(db):
    dhl = Forwarder(name="DHL Global Forwarding", short_code="DHL")
    kn = Forwarder(name="Kuehne + Nagel", short_code="KN")
    db.add_all([dhl, kn])
    await db.commit()
    return {"DHL": dhl, "KN": kn}


@pytest_asyncio.fixture
async def shipment(db, user):
    """Shanghai → Los Angeles, ready Jan 1, needed by Jan 30."""
    s = ShipmentRequest(
        user_id=user.id,
        reference="PO-4471",
        status="quotes_received",
        origin_country="CN",
        origin_city="Shanghai",
        dest_country="US",
        dest_city="Los Angeles",
        cargo_type="electronics",
        value_usd=Decimal("250000"),
        cargo_ready_date=date(2025, 1, 1),
        delivery_required_date=date(2025, 1, 30),
    )
    db.add(s)
    await db.commit()
    return s


@pytest_asyncio.fixture
async def quoted_shipment(db, shipment, forwarders):
    """Two air and one sea quote; the sea quote lands 5 days early."""
    db.add_all([
        Quote(request_id=shipment.id, forwarder_id=forwarders["DHL"].id, mode="air",
              total_amount=Decimal("12500"), transit_days=4, eta=date(2025, 1, 8)),
        Quote(request_id=shipment.id, forwarder_id=forwarders["KN"].id, mode="air",
              total_amount=Decimal("12000"), transit_days=5, eta=date(2025, 1, 9)),
        Quote(request_id=shipment.id, forwarder_id=forwarders["KN"].id, mode="sea",
              total_amount=Decimal("3000"), transit_days=21, eta=date(2025, 1, 25)),
    ])
    await db.commit()
    return shipment


# ── HTTP client ───────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def anon_client(session_factory):
    """Client with the test database but no caller identity override."""
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def client(anon_client, user):
    """Client authenticated as ``user``."""
    app.dependency_overrides[get_current_user] = lambda: user
    return anon_client
