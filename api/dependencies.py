"""
FastAPI dependency factories for the compliance services.

Every request gets services bound to its own database session; nothing is
shared between requests.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from api.database import get_db
from api.repositories import (
    SqlAlchemyBankRepository,
    SqlAlchemyComplianceRepository,
    SqlAlchemyPoolRepository,
    SqlAlchemyRouteRepository,
)
from src.compliance import (
    BankingLedger,
    ComparisonEngine,
    ComplianceService,
    PoolService,
    RouteService,
)


def get_compliance_service(db: Session = Depends(get_db)) -> ComplianceService:
    return ComplianceService(
        SqlAlchemyComplianceRepository(db), SqlAlchemyBankRepository(db)
    )


def get_banking_ledger(db: Session = Depends(get_db)) -> BankingLedger:
    return BankingLedger(SqlAlchemyBankRepository(db), SqlAlchemyComplianceRepository(db))


def get_pool_service(db: Session = Depends(get_db)) -> PoolService:
    return PoolService(SqlAlchemyPoolRepository(db), SqlAlchemyComplianceRepository(db))


def get_route_service(db: Session = Depends(get_db)) -> RouteService:
    return RouteService(SqlAlchemyRouteRepository(db))


def get_comparison_engine(db: Session = Depends(get_db)) -> ComparisonEngine:
    return ComparisonEngine(SqlAlchemyRouteRepository(db))
