"""
SQLAlchemy implementations of the compliance engine's repositories.

Each repository wraps the request's Session and returns domain dataclasses,
never ORM rows. Writes commit per call; pool creation and baseline changes
commit once for the whole unit of work.
"""

import logging
import uuid as uuid_mod
from typing import List, Optional

from sqlalchemy.orm import Session

from api import models
from src.compliance.banking import available_balance
from src.compliance.errors import RouteNotFound
from src.compliance.models import (
    BankEntry,
    ComplianceBalance,
    Pool,
    PoolAllocation,
    PoolMember,
    Route,
    RouteFilters,
)
from src.compliance.ports import (
    BankRepository,
    ComplianceRepository,
    PoolRepository,
    RouteRepository,
)

logger = logging.getLogger(__name__)


def _parse_uuid(value: str) -> Optional[uuid_mod.UUID]:
    try:
        return uuid_mod.UUID(str(value))
    except ValueError:
        return None


# =============================================================================
# Row -> domain converters
# =============================================================================

def _to_compliance(row: models.ShipCompliance) -> ComplianceBalance:
    return ComplianceBalance(
        id=str(row.id),
        ship_id=row.ship_id,
        year=row.year,
        cb_gco2eq=row.cb_gco2eq,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_bank_entry(row: models.BankEntry) -> BankEntry:
    return BankEntry(
        id=str(row.id),
        ship_id=row.ship_id,
        year=row.year,
        amount_gco2eq=row.amount_gco2eq,
        is_applied=row.is_applied,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_pool(row: models.Pool) -> Pool:
    return Pool(
        id=str(row.id),
        year=row.year,
        created_at=row.created_at,
        members=[
            PoolMember(
                id=str(m.id),
                pool_id=str(row.id),
                ship_id=m.ship_id,
                cb_before=m.cb_before,
                cb_after=m.cb_after,
            )
            for m in row.members
        ],
    )


def _to_route(row: models.Route) -> Route:
    return Route(
        id=str(row.id),
        route_id=row.route_id,
        vessel_type=row.vessel_type,
        fuel_type=row.fuel_type,
        year=row.year,
        ghg_intensity=row.ghg_intensity,
        fuel_consumption=row.fuel_consumption,
        distance=row.distance,
        total_emissions=row.total_emissions,
        is_baseline=row.is_baseline,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


# =============================================================================
# Repositories
# =============================================================================

class SqlAlchemyComplianceRepository(ComplianceRepository):

    def __init__(self, db: Session):
        self.db = db

    def _row(self, ship_id: str, year: int) -> Optional[models.ShipCompliance]:
        return (
            self.db.query(models.ShipCompliance)
            .filter(
                models.ShipCompliance.ship_id == ship_id,
                models.ShipCompliance.year == year,
            )
            .first()
        )

    def find_by_ship_and_year(self, ship_id: str, year: int) -> Optional[ComplianceBalance]:
        row = self._row(ship_id, year)
        return _to_compliance(row) if row else None

    def create(self, ship_id: str, year: int, cb_gco2eq: float) -> ComplianceBalance:
        row = models.ShipCompliance(ship_id=ship_id, year=year, cb_gco2eq=cb_gco2eq)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _to_compliance(row)

    def update(self, id: str, cb_gco2eq: float) -> ComplianceBalance:
        row_id = _parse_uuid(id)
        row = self.db.get(models.ShipCompliance, row_id) if row_id else None
        if row is None:
            raise LookupError(f"Compliance record {id} not found")
        row.cb_gco2eq = cb_gco2eq
        self.db.commit()
        self.db.refresh(row)
        return _to_compliance(row)

    def upsert(self, ship_id: str, year: int, cb_gco2eq: float) -> ComplianceBalance:
        row = self._row(ship_id, year)
        if row is None:
            row = models.ShipCompliance(ship_id=ship_id, year=year, cb_gco2eq=cb_gco2eq)
            self.db.add(row)
        else:
            row.cb_gco2eq = cb_gco2eq
        self.db.commit()
        self.db.refresh(row)
        return _to_compliance(row)


class SqlAlchemyBankRepository(BankRepository):

    def __init__(self, db: Session):
        self.db = db

    def find_by_ship(self, ship_id: str) -> List[BankEntry]:
        rows = (
            self.db.query(models.BankEntry)
            .filter(models.BankEntry.ship_id == ship_id)
            .order_by(models.BankEntry.created_at.desc())
            .all()
        )
        return [_to_bank_entry(r) for r in rows]

    def find_by_ship_and_year(self, ship_id: str, year: int) -> List[BankEntry]:
        rows = (
            self.db.query(models.BankEntry)
            .filter(models.BankEntry.ship_id == ship_id, models.BankEntry.year == year)
            .order_by(models.BankEntry.created_at.desc())
            .all()
        )
        return [_to_bank_entry(r) for r in rows]

    def find_available_balance(self, ship_id: str) -> float:
        rows = (
            self.db.query(models.BankEntry)
            .filter(
                models.BankEntry.ship_id == ship_id,
                models.BankEntry.is_applied.is_(False),
            )
            .all()
        )
        return available_balance(_to_bank_entry(r) for r in rows)

    def create(self, entry: BankEntry) -> BankEntry:
        row = models.BankEntry(
            ship_id=entry.ship_id,
            year=entry.year,
            amount_gco2eq=entry.amount_gco2eq,
            is_applied=entry.is_applied,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _to_bank_entry(row)

    def mark_as_applied(self, id: str) -> BankEntry:
        entry_id = _parse_uuid(id)
        row = self.db.get(models.BankEntry, entry_id) if entry_id else None
        if row is None:
            raise LookupError(f"Bank entry {id} not found")
        row.is_applied = True
        self.db.commit()
        self.db.refresh(row)
        return _to_bank_entry(row)


class SqlAlchemyPoolRepository(PoolRepository):

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, id: str) -> Optional[Pool]:
        pool_id = _parse_uuid(id)
        if pool_id is None:
            return None
        row = self.db.get(models.Pool, pool_id)
        return _to_pool(row) if row else None

    def find_by_year(self, year: int) -> List[Pool]:
        rows = (
            self.db.query(models.Pool)
            .filter(models.Pool.year == year)
            .order_by(models.Pool.created_at.desc())
            .all()
        )
        return [_to_pool(r) for r in rows]

    def create(self, year: int, members: List[PoolAllocation]) -> Pool:
        pool = models.Pool(year=year)
        for position, member in enumerate(members):
            pool.members.append(models.PoolMember(
                position=position,
                ship_id=member.ship_id,
                cb_before=member.cb_before,
                cb_after=member.cb_after,
            ))

        self.db.add(pool)
        self.db.commit()
        self.db.refresh(pool)
        return _to_pool(pool)


class SqlAlchemyRouteRepository(RouteRepository):

    # Columns callers may change through update()
    UPDATABLE = {
        "vessel_type", "fuel_type", "year", "ghg_intensity",
        "fuel_consumption", "distance", "total_emissions",
    }

    def __init__(self, db: Session):
        self.db = db

    def _row_by_route_id(self, route_id: str) -> Optional[models.Route]:
        return self.db.query(models.Route).filter(models.Route.route_id == route_id).first()

    def find_all(self, filters: Optional[RouteFilters] = None) -> List[Route]:
        query = self.db.query(models.Route)

        if filters is not None:
            if filters.vessel_type:
                query = query.filter(models.Route.vessel_type == filters.vessel_type)
            if filters.fuel_type:
                query = query.filter(models.Route.fuel_type == filters.fuel_type)
            if filters.year:
                query = query.filter(models.Route.year == filters.year)

        rows = query.order_by(models.Route.created_at, models.Route.route_id).all()
        return [_to_route(r) for r in rows]

    def find_by_id(self, id: str) -> Optional[Route]:
        row_id = _parse_uuid(id)
        row = self.db.get(models.Route, row_id) if row_id else None
        return _to_route(row) if row else None

    def find_by_route_id(self, route_id: str) -> Optional[Route]:
        row = self._row_by_route_id(route_id)
        return _to_route(row) if row else None

    def find_baseline(self) -> Optional[Route]:
        row = self.db.query(models.Route).filter(models.Route.is_baseline.is_(True)).first()
        return _to_route(row) if row else None

    def create(self, route: Route) -> Route:
        row = models.Route(
            route_id=route.route_id,
            vessel_type=route.vessel_type,
            fuel_type=route.fuel_type,
            year=route.year,
            ghg_intensity=route.ghg_intensity,
            fuel_consumption=route.fuel_consumption,
            distance=route.distance,
            total_emissions=route.total_emissions,
            is_baseline=False,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)

        if route.is_baseline:
            return self.set_baseline(route.route_id)
        return _to_route(row)

    def update(self, id: str, **changes) -> Route:
        row_id = _parse_uuid(id)
        row = self.db.get(models.Route, row_id) if row_id else None
        if row is None:
            raise LookupError(f"Route {id} not found")

        unknown = set(changes) - self.UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update route fields: {', '.join(sorted(unknown))}")

        for key, value in changes.items():
            setattr(row, key, value)
        self.db.commit()
        self.db.refresh(row)
        return _to_route(row)

    def set_baseline(self, route_id: str) -> Route:
        row = self._row_by_route_id(route_id)
        if row is None:
            raise RouteNotFound(route_id)

        # Clear and set in one transaction so at most one baseline is visible
        self.db.query(models.Route).filter(
            models.Route.is_baseline.is_(True),
            models.Route.id != row.id,
        ).update({models.Route.is_baseline: False}, synchronize_session="fetch")
        row.is_baseline = True
        self.db.commit()
        self.db.refresh(row)

        logger.debug("Route %s flagged as baseline", route_id)
        return _to_route(row)
