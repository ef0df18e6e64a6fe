"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from travel_experts.core.database import Base, build_engine, get_db
from travel_experts.models import *  # noqa: F403 - Import all models
from travel_experts.models import Agency, Agent, Booking, Customer, Package, TripType

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = build_engine(TEST_DATABASE_URL, echo=False)

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def test_session(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_app(test_engine, test_session):
    """Create a test FastAPI application."""
    from fastapi import FastAPI

    from travel_experts.main import register_exception_handlers, register_routers

    # Create a simplified test app without lifespan
    app = FastAPI(
        title="Travel Experts API (Test)",
        version="1.0.0-test",
    )

    register_exception_handlers(app)
    register_routers(app)

    app.state.engine = test_engine

    # Override database dependency
    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    # Clean up
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def now():
    """Fixed reference time for catalog queries."""
    return datetime(2025, 10, 22, 12, 0, 0)


@pytest_asyncio.fixture(scope="function")
async def bali_package(test_session):
    """The Bali Escape package, started long ago and ending far in the future."""
    package = Package(
        package_id=7,
        pkg_name="Bali Escape",
        pkg_start_date=datetime(2020, 1, 1),
        pkg_end_date=datetime(2099, 1, 1),
        pkg_desc="Beaches and temples",
        pkg_base_price=Decimal("3200.0000"),
        pkg_agency_commission=Decimal("300.0000"),
    )
    test_session.add(package)
    await test_session.commit()
    return package.package_id


@pytest_asyncio.fixture(scope="function")
async def catalog_packages(test_session):
    """Packages relative to the current time: started, upcoming, and expired."""
    today = datetime.now().replace(microsecond=0)
    packages = [
        Package(
            package_id=1,
            pkg_name="Caribbean New Year",
            pkg_start_date=today - timedelta(days=30),
            pkg_end_date=today + timedelta(days=300),
            pkg_desc="Cruise the Caribbean",
            pkg_base_price=Decimal("4800.0000"),
            pkg_agency_commission=Decimal("400.0000"),
        ),
        Package(
            package_id=2,
            pkg_name="Polynesian Paradise",
            pkg_start_date=today + timedelta(days=10),
            pkg_end_date=today + timedelta(days=20),
            pkg_desc="Holiday in Hawaii",
            pkg_base_price=Decimal("4000.0000"),
            pkg_agency_commission=None,
        ),
        Package(
            package_id=3,
            pkg_name="Asian Expedition",
            pkg_start_date=today - timedelta(days=60),
            pkg_end_date=today - timedelta(days=1),
            pkg_desc="Airfare, hotel and eco tour",
            pkg_base_price=Decimal("2800.0000"),
            pkg_agency_commission=Decimal("300.0000"),
        ),
    ]
    test_session.add_all(packages)
    await test_session.commit()
    return {p.pkg_name: p.package_id for p in packages}


@pytest_asyncio.fixture(scope="function")
async def agencies_with_staff(test_session):
    """Two agencies with agents and one agency with none."""
    test_session.add_all([
        Agency(agency_id=1, agncy_address="1155 8th Ave SW", agncy_city="Calgary", agncy_prov="AB",
               agncy_postal="T2P1N3", agncy_country="Canada", agncy_phone="4032719873",
               agncy_fax="4032719872"),
        Agency(agency_id=2, agncy_address="110 Main Street", agncy_city="Okotoks", agncy_prov="AB",
               agncy_postal="T7R3J5", agncy_country="Canada", agncy_phone="4035632381",
               agncy_fax="4035632382"),
        Agency(agency_id=3, agncy_address="9 Stephen Ave", agncy_city="Banff", agncy_prov="AB",
               agncy_postal="T1L1A1", agncy_country="Canada", agncy_phone="4037620000",
               agncy_fax=None),
    ])
    await test_session.flush()
    test_session.add_all([
        Agent(agent_id=1, agt_first_name="Janet", agt_last_name="Delton", agt_bus_phone="4032649874",
              agt_email="janet.delton@travelexperts.com", agt_position="Senior Agent", agency_id=1),
        Agent(agent_id=2, agt_first_name="Judy", agt_last_name="Lisle", agt_bus_phone="4032108756",
              agt_email="judy.lisle@travelexperts.com", agt_position="Intermediate Agent", agency_id=1),
        Agent(agent_id=3, agt_first_name="Dennis", agt_last_name="Reichert", agt_bus_phone="4032643457",
              agt_email="dennis.reichert@travelexperts.com", agt_position="Junior Agent", agency_id=1),
        Agent(agent_id=4, agt_first_name="John", agt_last_name="Coville", agt_bus_phone="4032092399",
              agt_email="john.coville@travelexperts.com", agt_position="Intermediate Agent", agency_id=1),
        Agent(agent_id=5, agt_first_name="Bruce", agt_last_name="Dahl", agt_bus_phone="4032102257",
              agt_email="bruce.dahl@travelexperts.com", agt_position="Senior Agent", agency_id=2),
    ])
    await test_session.commit()


@pytest.fixture
def sample_booking_data():
    """Sample booking request body for testing."""
    return {
        "CustFirstName": "Ann",
        "CustLastName": "Lee",
        "CustEmail": "a@x.com",
        "TravelerCount": 2,
        "PackageId": 7,
    }


@pytest.fixture
def sample_registration_data():
    """Sample registration request body for testing."""
    return {
        "CustFirstName": "Laetia",
        "CustLastName": "Enison",
        "CustAddress": "144-56th Street NW",
        "CustCity": "Calgary",
        "CustProv": "AB",
        "CustPostal": "T3J 2K3",
        "CustCountry": "Canada",
        "CustHomePhone": "4035643212",
        "CustBusPhone": "4032695525",
        "CustEmail": "laetia@example.com",
    }


async def count_rows(session: AsyncSession, model) -> int:
    """Count rows of a model's table."""
    return await session.scalar(select(func.count()).select_from(model))


@pytest.fixture
def row_counts(test_session):
    """Return a coroutine counting customers, bookings and trip types."""
    async def _counts() -> dict[str, int]:
        return {
            "customers": await count_rows(test_session, Customer),
            "bookings": await count_rows(test_session, Booking),
            "triptypes": await count_rows(test_session, TripType),
        }
    return _counts


@pytest.fixture
def drop_table(test_session):
    """Return a coroutine dropping a table so the next query against it fails."""
    async def _drop(name: str) -> None:
        await test_session.execute(text(f'DROP TABLE "{name}"'))
        await test_session.commit()
    return _drop
