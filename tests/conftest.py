"""
Shared pytest fixtures for FuelEU Ledger tests.

CRITICAL: Environment must be set before api.config is imported anywhere,
because the settings object and the SQLAlchemy engine are created at import
time. DATABASE_URL points at an in-memory SQLite database, which
api.database serves from a StaticPool so every session shares it.
"""

import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# ---------------------------------------------------------------------------
# Section 1: Environment setup (before ANY api.* imports)
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("DB_ECHO", "false")
os.environ.setdefault("LOG_LEVEL", "warning")

from sqlalchemy.orm import sessionmaker  # noqa: E402

from api.database import Base, get_db, engine as test_engine  # noqa: E402
import api.models  # noqa: E402,F401 - ensure all ORM models are registered

from src.compliance.models import ComplianceBalance  # noqa: E402
from src.compliance.ports import (  # noqa: E402
    BankRepository,
    ComplianceRepository,
    PoolRepository,
    RouteRepository,
)

TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=test_engine
)
Base.metadata.create_all(bind=test_engine)

# ---------------------------------------------------------------------------
# Section 2: Core database + client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def db():
    """Create a test database session with transaction isolation."""
    connection = test_engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def client(db):
    """Create a FastAPI TestClient with database dependency override."""
    from api.main import app

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Section 3: Repository fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def compliance_repo(db):
    from api.repositories import SqlAlchemyComplianceRepository
    return SqlAlchemyComplianceRepository(db)


@pytest.fixture
def bank_repo(db):
    from api.repositories import SqlAlchemyBankRepository
    return SqlAlchemyBankRepository(db)


@pytest.fixture
def pool_repo(db):
    from api.repositories import SqlAlchemyPoolRepository
    return SqlAlchemyPoolRepository(db)


@pytest.fixture
def route_repo(db):
    from api.repositories import SqlAlchemyRouteRepository
    return SqlAlchemyRouteRepository(db)


@pytest.fixture
def mock_compliance_repo():
    """ComplianceRepository mock; no record exists unless a test says so."""
    repo = MagicMock(spec=ComplianceRepository)
    repo.find_by_ship_and_year.return_value = None
    return repo


@pytest.fixture
def mock_bank_repo():
    repo = MagicMock(spec=BankRepository)
    repo.find_available_balance.return_value = 0.0
    repo.find_by_ship_and_year.return_value = []
    repo.create.side_effect = lambda entry: entry
    return repo


@pytest.fixture
def mock_pool_repo():
    return MagicMock(spec=PoolRepository)


@pytest.fixture
def mock_route_repo():
    return MagicMock(spec=RouteRepository)


@pytest.fixture
def make_compliance():
    """Factory for ComplianceBalance records as a repository would return them."""
    def _make(ship_id="SHIP001", year=2024, cb=15000.0):
        return ComplianceBalance(
            id=f"{ship_id}-{year}", ship_id=ship_id, year=year, cb_gco2eq=cb
        )
    return _make


# ---------------------------------------------------------------------------
# Section 4: Seeded data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def seeded_db(db):
    """Database loaded with the reference routes and compliance balances."""
    from api.seed import seed_database

    seed_database(db)
    return db


@pytest.fixture
def test_ships(db):
    """TESTSHIP001-003 with 2024 balances of 15000, -8000 and 10000."""
    from api.models import ShipCompliance

    rows = [
        ShipCompliance(ship_id="TESTSHIP001", year=2024, cb_gco2eq=15000),
        ShipCompliance(ship_id="TESTSHIP002", year=2024, cb_gco2eq=-8000),
        ShipCompliance(ship_id="TESTSHIP003", year=2024, cb_gco2eq=10000),
    ]
    db.add_all(rows)
    db.commit()
    return rows
