"""
Banking ledger (FuelEU Art. 20 banking and borrowing).

The ledger is an append-only event log of ``BankEntry`` records:

- banking a surplus appends an entry with ``is_applied=False``
- applying banked surplus appends a *new* entry with ``is_applied=True``

Existing entries are never mutated. The available balance is the sum of
non-applied entries for a ship across every year; application records do
not reduce it. Both reductions are pure functions over the log so
repository adapters and services share one definition.

Preconditions are checked against a fresh read of the store on every call.
There is no locking, so two concurrent calls for the same ship may both
pass their checks before either write commits.
"""

import logging
from typing import Iterable, List, Optional

from src.compliance.errors import (
    ComplianceRecordNotFound,
    ExceedsAvailable,
    InvalidAmount,
    NoBankedSurplus,
    NoSurplus,
)
from src.compliance.models import BankEntry, BankingSummary
from src.compliance.ports import BankRepository, ComplianceRepository

logger = logging.getLogger(__name__)


# =============================================================================
# Reducers
# =============================================================================

def available_balance(entries: Iterable[BankEntry]) -> float:
    """Sum of still-banked (non-applied) amounts, year ignored."""
    return sum((e.amount_gco2eq for e in entries if not e.is_applied), 0.0)


def applied_total(entries: Iterable[BankEntry], year: int) -> float:
    """Sum of applied amounts recorded against exactly ``year``."""
    return sum(
        (e.amount_gco2eq for e in entries if e.is_applied and e.year == year),
        0.0,
    )


# =============================================================================
# Ledger
# =============================================================================

class BankingLedger:
    """Bank surplus CB and apply banked surplus for a ship."""

    def __init__(
        self,
        bank_repository: BankRepository,
        compliance_repository: ComplianceRepository,
    ):
        self.bank_repository = bank_repository
        self.compliance_repository = compliance_repository

    def bank_surplus(self, ship_id: str, year: int, amount: float) -> BankEntry:
        """
        Bank part or all of a ship's positive CB for ``year``.

        Args:
            ship_id: Ship identifier
            year: Compliance year the surplus comes from
            amount: gCO2eq to bank, must be > 0 and <= current CB

        Returns:
            The appended BankEntry (is_applied=False)

        Raises:
            InvalidAmount, ComplianceRecordNotFound, NoSurplus, ExceedsAvailable
        """
        if not amount > 0:
            raise InvalidAmount("bank", amount)

        compliance = self.compliance_repository.find_by_ship_and_year(ship_id, year)
        if compliance is None:
            raise ComplianceRecordNotFound(ship_id, year)

        if compliance.cb_gco2eq <= 0:
            raise NoSurplus(ship_id, compliance.cb_gco2eq)

        if amount > compliance.cb_gco2eq:
            raise ExceedsAvailable(amount, compliance.cb_gco2eq, "surplus")

        entry = self.bank_repository.create(BankEntry(
            ship_id=ship_id,
            year=year,
            amount_gco2eq=amount,
            is_applied=False,
        ))
        logger.info("Banked %s gCO2eq for %s (%d)", amount, ship_id, year)
        return entry

    def apply_banked(self, ship_id: str, year: int, amount: float) -> BankingSummary:
        """
        Apply banked surplus against a ship's CB for ``year``.

        The applied amount is recorded as a new ledger entry. The stored CB is
        left untouched; ``cb_after`` in the summary is a projection.

        Raises:
            InvalidAmount, ComplianceRecordNotFound, NoBankedSurplus,
            ExceedsAvailable
        """
        if not amount > 0:
            raise InvalidAmount("apply", amount)

        compliance = self.compliance_repository.find_by_ship_and_year(ship_id, year)
        if compliance is None:
            raise ComplianceRecordNotFound(ship_id, year)

        available = self.bank_repository.find_available_balance(ship_id)
        if available <= 0:
            raise NoBankedSurplus(ship_id, available)

        if amount > available:
            raise ExceedsAvailable(amount, available, "banked balance")

        self.bank_repository.create(BankEntry(
            ship_id=ship_id,
            year=year,
            amount_gco2eq=amount,
            is_applied=True,
        ))

        cb_before = compliance.cb_gco2eq
        logger.info(
            "Applied %s gCO2eq of banked surplus to %s (%d)", amount, ship_id, year
        )
        return BankingSummary(
            ship_id=ship_id,
            year=year,
            cb_before=cb_before,
            applied=amount,
            cb_after=cb_before + amount,
        )

    def get_records(self, ship_id: str, year: Optional[int] = None) -> List[BankEntry]:
        """Ledger entries for a ship, optionally restricted to one year."""
        if year is not None:
            return self.bank_repository.find_by_ship_and_year(ship_id, year)
        return self.bank_repository.find_by_ship(ship_id)
