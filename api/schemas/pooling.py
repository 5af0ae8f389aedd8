"""Pooling API schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from api.schemas.common import CamelModel


class PoolMemberRequest(CamelModel):
    ship_id: str = Field(..., min_length=1, max_length=100)
    cb_before: float


class CreatePoolRequest(CamelModel):
    """Member count and total CB are enforced by the pool validator, not here."""
    year: int = Field(..., ge=1900, le=2100)
    members: List[PoolMemberRequest]


class PoolMemberResponse(CamelModel):
    id: Optional[str] = None
    pool_id: Optional[str] = None
    ship_id: str
    cb_before: float
    cb_after: float


class PoolResponse(CamelModel):
    id: Optional[str] = None
    year: int
    created_at: Optional[datetime] = None
    members: List[PoolMemberResponse]
