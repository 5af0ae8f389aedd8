"""
Banking ledger API router.

Bank a surplus CB, apply banked surplus, and list ledger records.
"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_banking_ledger
from api.schemas import BankEntryResponse, BankingRequest, BankingSummaryResponse
from src.compliance import BankingLedger

router = APIRouter(prefix="/banking", tags=["Banking"])


@router.get("/records", response_model=List[BankEntryResponse])
async def get_bank_records(
    ship_id: str = Query(..., alias="shipId", min_length=1),
    year: Optional[int] = Query(None),
    ledger: BankingLedger = Depends(get_banking_ledger),
):
    """Ledger entries for a ship, newest first, optionally for one year."""
    return [BankEntryResponse(**asdict(e)) for e in ledger.get_records(ship_id, year)]


@router.post("/bank", response_model=BankEntryResponse, status_code=201)
async def bank_surplus(
    body: BankingRequest,
    ledger: BankingLedger = Depends(get_banking_ledger),
):
    """Bank part or all of a positive CB."""
    entry = ledger.bank_surplus(body.ship_id, body.year, body.amount_gco2eq)
    return BankEntryResponse(**asdict(entry))


@router.post("/apply", response_model=BankingSummaryResponse)
async def apply_banked(
    body: BankingRequest,
    ledger: BankingLedger = Depends(get_banking_ledger),
):
    """Apply banked surplus to a ship-year and return the projected CB."""
    summary = ledger.apply_banked(body.ship_id, body.year, body.amount_gco2eq)
    return BankingSummaryResponse(**asdict(summary))
