"""
Routes API router.

Route listing, baseline selection, and baseline-vs-route comparison.
"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_comparison_engine, get_route_service
from api.schemas import RouteComparisonResponse, RouteResponse
from src.compliance import ComparisonEngine, RouteService
from src.compliance.models import RouteFilters

router = APIRouter(prefix="/routes", tags=["Routes"])


def route_filters(
    vessel_type: Optional[str] = Query(None, alias="vesselType"),
    fuel_type: Optional[str] = Query(None, alias="fuelType"),
    year: Optional[int] = Query(None),
) -> RouteFilters:
    return RouteFilters(vessel_type=vessel_type, fuel_type=fuel_type, year=year)


@router.get("", response_model=List[RouteResponse])
async def list_routes(
    filters: RouteFilters = Depends(route_filters),
    service: RouteService = Depends(get_route_service),
):
    """List routes, optionally filtered by vessel type, fuel type and year."""
    return [RouteResponse(**asdict(r)) for r in service.list_routes(filters)]


@router.get("/comparison", response_model=List[RouteComparisonResponse])
async def get_comparison(
    filters: RouteFilters = Depends(route_filters),
    engine: ComparisonEngine = Depends(get_comparison_engine),
):
    """Compare filtered routes against the baseline route."""
    return [
        RouteComparisonResponse(
            baseline=RouteResponse(**asdict(c.baseline)),
            comparison=RouteResponse(**asdict(c.comparison)),
            percent_diff=c.percent_diff,
            compliant=c.compliant,
        )
        for c in engine.compute(filters)
    ]


@router.post("/{route_id}/baseline", response_model=RouteResponse)
async def set_baseline(route_id: str, service: RouteService = Depends(get_route_service)):
    """Make ``route_id`` the single baseline route."""
    return RouteResponse(**asdict(service.set_baseline(route_id)))
