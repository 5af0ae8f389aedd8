"""
Repository interfaces consumed by the compliance engine.

The engine never talks to storage directly; every service receives the
repositories it needs in its constructor. ``api.repositories`` provides the
SQLAlchemy implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.compliance.models import (
    BankEntry,
    ComplianceBalance,
    Pool,
    PoolAllocation,
    Route,
    RouteFilters,
)


class ComplianceRepository(ABC):
    """Stored CB values, one row per (ship_id, year)."""

    @abstractmethod
    def find_by_ship_and_year(self, ship_id: str, year: int) -> Optional[ComplianceBalance]:
        ...

    @abstractmethod
    def create(self, ship_id: str, year: int, cb_gco2eq: float) -> ComplianceBalance:
        ...

    @abstractmethod
    def update(self, id: str, cb_gco2eq: float) -> ComplianceBalance:
        ...

    @abstractmethod
    def upsert(self, ship_id: str, year: int, cb_gco2eq: float) -> ComplianceBalance:
        """Insert, or overwrite the CB of the existing (ship_id, year) row."""
        ...


class BankRepository(ABC):
    """Append-only banking ledger."""

    @abstractmethod
    def find_by_ship(self, ship_id: str) -> List[BankEntry]:
        ...

    @abstractmethod
    def find_by_ship_and_year(self, ship_id: str, year: int) -> List[BankEntry]:
        ...

    @abstractmethod
    def find_available_balance(self, ship_id: str) -> float:
        """Sum of non-applied entries for the ship, across all years."""
        ...

    @abstractmethod
    def create(self, entry: BankEntry) -> BankEntry:
        ...

    @abstractmethod
    def mark_as_applied(self, id: str) -> BankEntry:
        ...


class PoolRepository(ABC):

    @abstractmethod
    def find_by_id(self, id: str) -> Optional[Pool]:
        ...

    @abstractmethod
    def find_by_year(self, year: int) -> List[Pool]:
        ...

    @abstractmethod
    def create(self, year: int, members: List[PoolAllocation]) -> Pool:
        """Insert the pool and all of its members in one transaction."""
        ...


class RouteRepository(ABC):

    @abstractmethod
    def find_all(self, filters: Optional[RouteFilters] = None) -> List[Route]:
        ...

    @abstractmethod
    def find_by_id(self, id: str) -> Optional[Route]:
        ...

    @abstractmethod
    def find_by_route_id(self, route_id: str) -> Optional[Route]:
        ...

    @abstractmethod
    def find_baseline(self) -> Optional[Route]:
        ...

    @abstractmethod
    def create(self, route: Route) -> Route:
        ...

    @abstractmethod
    def update(self, id: str, **changes) -> Route:
        ...

    @abstractmethod
    def set_baseline(self, route_id: str) -> Route:
        """Clear any existing baseline and flag ``route_id``, atomically."""
        ...
