"""Tests for the banking ledger (bank / apply surplus)."""

import pytest

from src.compliance.banking import BankingLedger, applied_total, available_balance
from src.compliance.errors import (
    ComplianceRecordNotFound,
    ExceedsAvailable,
    InvalidAmount,
    NoBankedSurplus,
    NoSurplus,
)
from src.compliance.models import BankEntry


@pytest.fixture
def ledger(mock_bank_repo, mock_compliance_repo):
    return BankingLedger(mock_bank_repo, mock_compliance_repo)


# =============================================================================
# Reducers
# =============================================================================

class TestReducers:
    def test_available_balance_sums_unapplied_across_years(self):
        entries = [
            BankEntry(ship_id="S", year=2024, amount_gco2eq=5000),
            BankEntry(ship_id="S", year=2025, amount_gco2eq=3000),
            BankEntry(ship_id="S", year=2025, amount_gco2eq=2000, is_applied=True),
        ]
        assert available_balance(entries) == 8000

    def test_available_balance_empty(self):
        assert available_balance([]) == 0.0

    def test_applied_total_filters_by_exact_year(self):
        entries = [
            BankEntry(ship_id="S", year=2024, amount_gco2eq=5000),
            BankEntry(ship_id="S", year=2025, amount_gco2eq=2000, is_applied=True),
            BankEntry(ship_id="S", year=2024, amount_gco2eq=1500, is_applied=True),
        ]
        assert applied_total(entries, 2025) == 2000
        assert applied_total(entries, 2024) == 1500
        assert applied_total(entries, 2026) == 0.0


# =============================================================================
# Bank surplus
# =============================================================================

class TestBankSurplus:
    def test_banks_positive_cb(self, ledger, mock_bank_repo, mock_compliance_repo, make_compliance):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(cb=15000)

        entry = ledger.bank_surplus("SHIP001", 2024, 5000)

        assert entry.ship_id == "SHIP001"
        assert entry.year == 2024
        assert entry.amount_gco2eq == 5000
        assert entry.is_applied is False
        mock_bank_repo.create.assert_called_once()

    def test_bank_entire_surplus(self, ledger, mock_compliance_repo, make_compliance):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(cb=15000)
        entry = ledger.bank_surplus("SHIP001", 2024, 15000)
        assert entry.amount_gco2eq == 15000

    @pytest.mark.parametrize("amount", [0, -100, float("nan")])
    def test_non_positive_amount_rejected(self, ledger, mock_bank_repo, mock_compliance_repo, amount):
        with pytest.raises(InvalidAmount, match="Cannot bank non-positive amount"):
            ledger.bank_surplus("SHIP001", 2024, amount)
        mock_compliance_repo.find_by_ship_and_year.assert_not_called()
        mock_bank_repo.create.assert_not_called()

    def test_missing_record(self, ledger, mock_bank_repo):
        with pytest.raises(ComplianceRecordNotFound) as exc_info:
            ledger.bank_surplus("GHOST", 2024, 100)
        assert exc_info.value.status_code == 404
        assert "GHOST" in str(exc_info.value)
        mock_bank_repo.create.assert_not_called()

    @pytest.mark.parametrize("cb", [-8000, 0])
    def test_no_surplus(self, ledger, mock_bank_repo, mock_compliance_repo, make_compliance, cb):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(cb=cb)
        with pytest.raises(NoSurplus, match="has no surplus to bank"):
            ledger.bank_surplus("SHIP001", 2024, 100)
        mock_bank_repo.create.assert_not_called()

    def test_amount_above_cb(self, ledger, mock_bank_repo, mock_compliance_repo, make_compliance):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(cb=15000)
        with pytest.raises(ExceedsAvailable) as exc_info:
            ledger.bank_surplus("SHIP001", 2024, 20000)
        assert exc_info.value.available == 15000
        assert "exceeds available surplus" in exc_info.value.message
        mock_bank_repo.create.assert_not_called()


# =============================================================================
# Apply banked
# =============================================================================

class TestApplyBanked:
    def test_applies_to_deficit(self, ledger, mock_bank_repo, mock_compliance_repo, make_compliance):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(
            ship_id="SHIP002", cb=-8000
        )
        mock_bank_repo.find_available_balance.return_value = 10000

        summary = ledger.apply_banked("SHIP002", 2024, 5000)

        assert summary.cb_before == -8000
        assert summary.applied == 5000
        assert summary.cb_after == -3000

        created = mock_bank_repo.create.call_args[0][0]
        assert created.is_applied is True
        assert created.amount_gco2eq == 5000
        assert created.year == 2024

    def test_stored_cb_untouched(self, ledger, mock_bank_repo, mock_compliance_repo, make_compliance):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(cb=-8000)
        mock_bank_repo.find_available_balance.return_value = 10000

        ledger.apply_banked("SHIP001", 2024, 1000)

        mock_compliance_repo.update.assert_not_called()
        mock_compliance_repo.upsert.assert_not_called()
        mock_bank_repo.mark_as_applied.assert_not_called()

    def test_amount_above_available(self, ledger, mock_bank_repo, mock_compliance_repo, make_compliance):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(cb=-8000)
        mock_bank_repo.find_available_balance.return_value = 10000

        with pytest.raises(ExceedsAvailable, match="exceeds available banked balance"):
            ledger.apply_banked("SHIP001", 2024, 15000)
        mock_bank_repo.create.assert_not_called()

    def test_nothing_banked(self, ledger, mock_bank_repo, mock_compliance_repo, make_compliance):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(cb=-8000)
        mock_bank_repo.find_available_balance.return_value = 0

        with pytest.raises(NoBankedSurplus):
            ledger.apply_banked("SHIP001", 2024, 100)
        mock_bank_repo.create.assert_not_called()

    @pytest.mark.parametrize("amount", [0, -1, float("nan")])
    def test_non_positive_amount_rejected(self, ledger, mock_compliance_repo, amount):
        with pytest.raises(InvalidAmount, match="Cannot apply non-positive amount"):
            ledger.apply_banked("SHIP001", 2024, amount)
        mock_compliance_repo.find_by_ship_and_year.assert_not_called()

    def test_missing_record(self, ledger, mock_bank_repo):
        mock_bank_repo.find_available_balance.return_value = 10000
        with pytest.raises(ComplianceRecordNotFound):
            ledger.apply_banked("SHIP001", 2030, 100)

    def test_apply_to_surplus_ship_allowed(self, ledger, mock_bank_repo, mock_compliance_repo, make_compliance):
        mock_compliance_repo.find_by_ship_and_year.return_value = make_compliance(cb=2000)
        mock_bank_repo.find_available_balance.return_value = 500

        summary = ledger.apply_banked("SHIP001", 2024, 500)
        assert summary.cb_after == 2500


# =============================================================================
# Records
# =============================================================================

class TestGetRecords:
    def test_by_ship(self, ledger, mock_bank_repo):
        mock_bank_repo.find_by_ship.return_value = []
        assert ledger.get_records("SHIP001") == []
        mock_bank_repo.find_by_ship.assert_called_once_with("SHIP001")
        mock_bank_repo.find_by_ship_and_year.assert_not_called()

    def test_by_ship_and_year(self, ledger, mock_bank_repo):
        ledger.get_records("SHIP001", 2024)
        mock_bank_repo.find_by_ship_and_year.assert_called_once_with("SHIP001", 2024)
