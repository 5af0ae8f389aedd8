"""Banking ledger API schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from api.schemas.common import CamelModel


class BankingRequest(CamelModel):
    """Body for POST /banking/bank and POST /banking/apply.

    The amount is not range-checked here; the ledger rejects non-positive
    amounts with its own error.
    """
    ship_id: str = Field(..., min_length=1, max_length=100)
    year: int = Field(..., ge=1900, le=2100)
    amount_gco2eq: float = Field(..., alias="amountGco2eq")


class BankEntryResponse(CamelModel):
    id: Optional[str] = None
    ship_id: str
    year: int
    amount_gco2eq: float = Field(..., alias="amountGco2eq")
    is_applied: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BankingSummaryResponse(CamelModel):
    ship_id: str
    year: int
    cb_before: float
    applied: float
    cb_after: float
