"""
FuelEU Ledger API Pydantic schemas.

Re-exports all schema classes:
    from api.schemas import BankingRequest, PoolResponse, ...
"""

# Common
from .common import CamelModel, ErrorResponse  # noqa: F401

# Compliance
from .compliance import (  # noqa: F401
    ComplianceBalanceResponse,
    AdjustedComplianceBalanceResponse,
    TargetIntensityYear,
    TargetIntensityLimitsResponse,
)

# Banking
from .banking import (  # noqa: F401
    BankingRequest,
    BankEntryResponse,
    BankingSummaryResponse,
)

# Pooling
from .pooling import (  # noqa: F401
    PoolMemberRequest,
    CreatePoolRequest,
    PoolMemberResponse,
    PoolResponse,
)

# Routes
from .routes import RouteResponse, RouteComparisonResponse  # noqa: F401
