"""
Pooling API router.

Create a pool (validate, allocate, persist) and look pools up.
"""

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_pool_service
from api.schemas import CreatePoolRequest, PoolResponse
from src.compliance import PoolService
from src.compliance.models import PoolMemberInput

router = APIRouter(prefix="/pools", tags=["Pooling"])


@router.post("", response_model=PoolResponse, status_code=201)
async def create_pool(
    body: CreatePoolRequest,
    service: PoolService = Depends(get_pool_service),
):
    """Create a pool from caller-supplied CB snapshots."""
    members = [PoolMemberInput(ship_id=m.ship_id, cb_before=m.cb_before) for m in body.members]
    pool = service.create_pool(body.year, members)
    return PoolResponse(**asdict(pool))


@router.get("", response_model=List[PoolResponse])
async def list_pools(
    year: int = Query(..., ge=1900, le=2100),
    service: PoolService = Depends(get_pool_service),
):
    return [PoolResponse(**asdict(p)) for p in service.list_pools(year)]


@router.get("/{pool_id}", response_model=PoolResponse)
async def get_pool(pool_id: str, service: PoolService = Depends(get_pool_service)):
    return PoolResponse(**asdict(service.get_pool(pool_id)))
