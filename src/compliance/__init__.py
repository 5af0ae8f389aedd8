"""Compliance engine for FuelEU Maritime (CB calculation, banking, pooling)."""

from .balance import ComplianceService
from .banking import BankingLedger
from .comparison import ComparisonEngine, RouteService
from .pooling import PoolService, PoolValidator

__all__ = [
    "BankingLedger",
    "ComparisonEngine",
    "ComplianceService",
    "PoolService",
    "PoolValidator",
    "RouteService",
]
