"""
Compliance balance API router.

Handles CB computation (upsert per ship-year), bank-adjusted CB and the
target intensity reference table.
"""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.config import settings
from api.dependencies import get_compliance_service
from api.schemas import (
    AdjustedComplianceBalanceResponse,
    ComplianceBalanceResponse,
    TargetIntensityLimitsResponse,
    TargetIntensityYear,
)
from src.compliance import ComplianceService
from src.compliance.fueleu import (
    BASELINE_INTENSITY,
    ENERGY_PER_TONNE_FUEL,
    get_limits_by_year,
)

router = APIRouter(prefix="/compliance", tags=["Compliance"])


@router.get("/limits", response_model=TargetIntensityLimitsResponse)
async def get_target_limits():
    """Return target GHG intensity for every regulation threshold year."""
    return TargetIntensityLimitsResponse(
        limits=[TargetIntensityYear(**lim) for lim in get_limits_by_year()],
        baseline_intensity=BASELINE_INTENSITY,
        energy_per_tonne_fuel=ENERGY_PER_TONNE_FUEL,
    )


@router.get("/cb", response_model=ComplianceBalanceResponse)
async def compute_compliance_balance(
    ship_id: str = Query(..., alias="shipId", min_length=1),
    year: int = Query(..., ge=1900, le=2100),
    actual_intensity: Optional[float] = Query(None, alias="actualIntensity", allow_inf_nan=False),
    fuel_consumption: Optional[float] = Query(None, alias="fuelConsumption", ge=0, allow_inf_nan=False),
    service: ComplianceService = Depends(get_compliance_service),
):
    """Compute and store a ship's CB for a year.

    Missing or zero measurements fall back to the configured defaults.
    """
    if not actual_intensity:
        actual_intensity = settings.default_actual_intensity
    if not fuel_consumption:
        fuel_consumption = settings.default_fuel_consumption

    record, calc = service.compute_cb(ship_id, year, actual_intensity, fuel_consumption)
    return ComplianceBalanceResponse(
        **asdict(record),
        target_intensity=calc.target_intensity,
        actual_intensity=calc.actual_intensity,
        energy_in_scope=calc.energy_in_scope,
    )


@router.get("/adjusted-cb", response_model=AdjustedComplianceBalanceResponse)
async def get_adjusted_compliance_balance(
    ship_id: str = Query(..., alias="shipId", min_length=1),
    year: int = Query(..., ge=1900, le=2100),
    service: ComplianceService = Depends(get_compliance_service),
):
    """Stored CB plus banked surplus applied against that year."""
    return AdjustedComplianceBalanceResponse(**asdict(service.get_adjusted_cb(ship_id, year)))
