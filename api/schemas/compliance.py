"""Compliance balance API schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from api.schemas.common import CamelModel


class ComplianceBalanceResponse(CamelModel):
    """Stored CB plus the derivation that produced it."""
    id: Optional[str] = None
    ship_id: str
    year: int
    cb_gco2eq: float = Field(..., alias="cbGco2eq")
    target_intensity: Optional[float] = None
    actual_intensity: Optional[float] = None
    energy_in_scope: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdjustedComplianceBalanceResponse(CamelModel):
    ship_id: str
    year: int
    original_cb: float
    banked_amount: float
    adjusted_cb: float


class TargetIntensityYear(CamelModel):
    year: int
    target_intensity: float
    reduction_pct: float


class TargetIntensityLimitsResponse(CamelModel):
    limits: List[TargetIntensityYear]
    baseline_intensity: float
    energy_per_tonne_fuel: float
