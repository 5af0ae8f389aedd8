"""Route and comparison API schemas."""

from datetime import datetime
from typing import Optional

from api.schemas.common import CamelModel


class RouteResponse(CamelModel):
    id: Optional[str] = None
    route_id: str
    vessel_type: str
    fuel_type: str
    year: int
    ghg_intensity: float
    fuel_consumption: float
    distance: float
    total_emissions: float
    is_baseline: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RouteComparisonResponse(CamelModel):
    baseline: RouteResponse
    comparison: RouteResponse
    percent_diff: float
    compliant: bool
