"""
Domain records for the compliance engine.

Plain dataclasses shared by the calculator, the banking ledger, the pool
allocator and the comparison engine. Repository adapters translate their
storage rows into these.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


# =============================================================================
# Compliance balance
# =============================================================================

@dataclass
class ComplianceBalance:
    """Stored CB for one ship-year. Positive = surplus, negative = deficit."""
    ship_id: str
    year: int
    cb_gco2eq: float
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ComplianceCalculation:
    """Full derivation of a CB value."""
    ship_id: str
    year: int
    target_intensity: float  # gCO2eq/MJ
    actual_intensity: float  # gCO2eq/MJ
    energy_in_scope: float  # MJ
    compliance_balance: float  # gCO2eq


@dataclass
class AdjustedComplianceBalance:
    ship_id: str
    year: int
    original_cb: float
    banked_amount: float
    adjusted_cb: float


# =============================================================================
# Banking
# =============================================================================

@dataclass
class BankEntry:
    """
    One ledger transaction.

    ``is_applied=False`` is a banked surplus still counted in the available
    balance; ``is_applied=True`` records an application event. Amounts are
    always positive.
    """
    ship_id: str
    year: int
    amount_gco2eq: float
    is_applied: bool = False
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class BankingSummary:
    """Result of applying banked surplus. ``cb_after`` is a projection only."""
    ship_id: str
    year: int
    cb_before: float
    applied: float
    cb_after: float


# =============================================================================
# Pooling
# =============================================================================

@dataclass
class PoolMemberInput:
    """Caller-asserted CB snapshot for a ship joining a pool."""
    ship_id: str
    cb_before: float


@dataclass
class PoolAllocation:
    ship_id: str
    cb_before: float
    cb_after: float


@dataclass
class PoolMember:
    ship_id: str
    cb_before: float
    cb_after: float
    id: Optional[str] = None
    pool_id: Optional[str] = None


@dataclass
class Pool:
    year: int
    members: List[PoolMember] = field(default_factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class PoolValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


# =============================================================================
# Routes
# =============================================================================

@dataclass
class Route:
    """A voyage route with its reported GHG intensity."""
    route_id: str  # business key, e.g. "R001"
    vessel_type: str
    fuel_type: str
    year: int
    ghg_intensity: float  # gCO2eq/MJ
    fuel_consumption: float  # t
    distance: float  # km
    total_emissions: float  # t
    is_baseline: bool = False
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class RouteFilters:
    vessel_type: Optional[str] = None
    fuel_type: Optional[str] = None
    year: Optional[int] = None


@dataclass
class RouteComparison:
    baseline: Route
    comparison: Route
    percent_diff: float
    compliant: bool
