"""
Compliance balance use cases: compute, look up and bank-adjust a ship's CB.
"""

import logging
from typing import Optional, Tuple

from src.compliance.banking import applied_total
from src.compliance.errors import ComplianceRecordNotFound
from src.compliance.fueleu import (
    calculate_compliance_balance,
    calculate_energy_in_scope,
    get_target_intensity,
)
from src.compliance.models import (
    AdjustedComplianceBalance,
    ComplianceBalance,
    ComplianceCalculation,
)
from src.compliance.ports import BankRepository, ComplianceRepository

logger = logging.getLogger(__name__)


class ComplianceService:
    """Computes and stores per ship-year compliance balances."""

    def __init__(
        self,
        compliance_repository: ComplianceRepository,
        bank_repository: Optional[BankRepository] = None,
    ):
        self.compliance_repository = compliance_repository
        self.bank_repository = bank_repository

    @staticmethod
    def calculate(
        ship_id: str, year: int, actual_intensity: float, fuel_consumption: float
    ) -> ComplianceCalculation:
        """Derive the CB for a ship-year without touching storage."""
        target = get_target_intensity(year)
        energy = calculate_energy_in_scope(fuel_consumption)
        cb = calculate_compliance_balance(target, actual_intensity, energy)
        logger.debug(
            "CB %s/%d: target=%s actual=%s energy=%s cb=%s",
            ship_id, year, target, actual_intensity, energy, cb,
        )
        return ComplianceCalculation(
            ship_id=ship_id,
            year=year,
            target_intensity=target,
            actual_intensity=actual_intensity,
            energy_in_scope=energy,
            compliance_balance=cb,
        )

    def compute_cb(
        self, ship_id: str, year: int, actual_intensity: float, fuel_consumption: float
    ) -> Tuple[ComplianceBalance, ComplianceCalculation]:
        """
        Compute a ship's CB and upsert it.

        Recomputing overwrites the stored value for that ship-year; no
        history is kept.

        Returns:
            (stored ComplianceBalance, ComplianceCalculation breakdown)
        """
        calc = self.calculate(ship_id, year, actual_intensity, fuel_consumption)
        record = self.compliance_repository.upsert(
            ship_id=ship_id, year=year, cb_gco2eq=calc.compliance_balance
        )
        logger.info("Stored CB %s gCO2eq for %s (%d)", record.cb_gco2eq, ship_id, year)
        return record, calc

    def get_cb(self, ship_id: str, year: int) -> ComplianceBalance:
        compliance = self.compliance_repository.find_by_ship_and_year(ship_id, year)
        if compliance is None:
            raise ComplianceRecordNotFound(ship_id, year)
        return compliance

    def get_adjusted_cb(self, ship_id: str, year: int) -> AdjustedComplianceBalance:
        """
        Stored CB plus banked surplus applied against exactly ``year``.

        Only application entries whose year equals ``year`` count here,
        unlike the available balance which spans all years.
        """
        if self.bank_repository is None:
            raise RuntimeError("ComplianceService needs a bank repository for adjusted CB")

        compliance = self.get_cb(ship_id, year)
        entries = self.bank_repository.find_by_ship_and_year(ship_id, year)
        banked = applied_total(entries, year)

        return AdjustedComplianceBalance(
            ship_id=ship_id,
            year=year,
            original_cb=compliance.cb_gco2eq,
            banked_amount=banked,
            adjusted_cb=compliance.cb_gco2eq + banked,
        )
