"""
Error taxonomy for the compliance engine.

Every failure the engine raises derives from ``ComplianceError`` and
carries the HTTP status the API boundary should map it to, plus the
offending identifiers/values as attributes.
"""

from typing import Optional


class ComplianceError(Exception):
    """Base class for all engine-level failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmount(ComplianceError):
    """Raised when a non-positive amount is supplied to bank or apply."""

    def __init__(self, action: str, amount: float):
        super().__init__(f"Cannot {action} non-positive amount")
        self.action = action
        self.amount = amount


class ComplianceRecordNotFound(ComplianceError):
    """No ComplianceBalance exists for the ship/year."""

    status_code = 404

    def __init__(self, ship_id: str, year: int):
        super().__init__(
            f"No compliance record found for ship {ship_id} in year {year}"
        )
        self.ship_id = ship_id
        self.year = year


class NoSurplus(ComplianceError):
    """Ship's CB is <= 0, nothing to bank."""

    def __init__(self, ship_id: str, cb_gco2eq: float):
        super().__init__(
            f"Ship {ship_id} has no surplus to bank (CB: {cb_gco2eq})"
        )
        self.ship_id = ship_id
        self.cb_gco2eq = cb_gco2eq


class NoBankedSurplus(ComplianceError):
    """Ship has no banked balance available to apply."""

    def __init__(self, ship_id: str, available: float = 0.0):
        super().__init__(f"Ship {ship_id} has no banked surplus to apply")
        self.ship_id = ship_id
        self.available = available


class ExceedsAvailable(ComplianceError):
    """Requested amount is above the surplus or banked ceiling."""

    def __init__(self, amount: float, available: float, ceiling: str = "surplus"):
        super().__init__(
            f"Amount {amount} exceeds available {ceiling} {available}"
        )
        self.amount = amount
        self.available = available
        self.ceiling = ceiling


class PoolValidationFailed(ComplianceError):
    """Pool pre- or post-allocation rules were violated."""

    def __init__(self, errors, stage: str = "Pool validation"):
        self.errors = list(errors)
        self.stage = stage
        super().__init__(f"{stage} failed: {', '.join(self.errors)}")


class PoolNotFound(ComplianceError):
    status_code = 404

    def __init__(self, pool_id: str):
        super().__init__(f"Pool {pool_id} not found")
        self.pool_id = pool_id


class NoBaseline(ComplianceError):
    """Comparison requested before any baseline route was set."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or "No baseline route set. Please set a baseline first."
        )


class RouteNotFound(ComplianceError):
    status_code = 404

    def __init__(self, route_id: str):
        super().__init__(f"Route {route_id} not found")
        self.route_id = route_id
