"""
Route comparison against the baseline route.

For every route matching the filters (the baseline itself excluded), report
the percentage difference of its GHG intensity from the baseline and
whether it meets the target intensity of its own year.
"""

import logging
from typing import List, Optional

from src.compliance.errors import NoBaseline, RouteNotFound
from src.compliance.fueleu import (
    calculate_percent_diff,
    get_target_intensity,
    is_compliant,
)
from src.compliance.models import Route, RouteComparison, RouteFilters
from src.compliance.ports import RouteRepository

logger = logging.getLogger(__name__)


class ComparisonEngine:
    """Baseline-vs-route comparison."""

    def __init__(self, route_repository: RouteRepository):
        self.route_repository = route_repository

    def compute(self, filters: Optional[RouteFilters] = None) -> List[RouteComparison]:
        """
        Compare filtered routes with the baseline.

        Order follows the repository's filter query.

        Raises:
            NoBaseline: no route is flagged as baseline
        """
        baseline = self.route_repository.find_baseline()
        if baseline is None:
            raise NoBaseline()

        routes = self.route_repository.find_all(filters)

        comparisons = []
        for route in routes:
            if route.route_id == baseline.route_id:
                continue
            target = get_target_intensity(route.year)
            comparisons.append(RouteComparison(
                baseline=baseline,
                comparison=route,
                percent_diff=calculate_percent_diff(
                    route.ghg_intensity, baseline.ghg_intensity
                ),
                compliant=is_compliant(route.ghg_intensity, target),
            ))

        logger.debug(
            "Compared %d routes against baseline %s", len(comparisons), baseline.route_id
        )
        return comparisons


class RouteService:
    """Route listing and baseline selection."""

    def __init__(self, route_repository: RouteRepository):
        self.route_repository = route_repository

    def list_routes(self, filters: Optional[RouteFilters] = None) -> List[Route]:
        return self.route_repository.find_all(filters)

    def set_baseline(self, route_id: str) -> Route:
        """Flag ``route_id`` as the single baseline route."""
        if self.route_repository.find_by_route_id(route_id) is None:
            raise RouteNotFound(route_id)

        route = self.route_repository.set_baseline(route_id)
        logger.info("Baseline route set to %s", route_id)
        return route
