"""
FuelEU Maritime (EU 2023/1805) compliance calculator.

Implements the regulatory arithmetic behind the compliance balance:
- Target GHG intensity per reporting year (step function)
- Energy in scope from fuel consumption
- Compliance balance (surplus/deficit vs target)
- Percentage difference between two intensities
- Compliance predicate

Reference: EU Regulation 2023/1805, Annex IV
Baseline: 91.16 gCO2eq/MJ (2020 EU MRV reference)
"""

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)


# =============================================================================
# Regulatory constants
# =============================================================================

# Target intensities (gCO2eq/MJ) applying from each threshold year onwards;
# get_limits_by_year() reports the reduction each implies versus 91.16
TARGET_INTENSITIES = {
    2025: 89.3368,
    2026: 87.9832,
    2027: 85.7176,
    2030: 78.7792,
    2035: 68.37,
    2040: 58.8176,
    2045: 49.6368,
    2050: 18.232,
}

# Energy conversion factor (MJ per tonne of fuel)
ENERGY_PER_TONNE_FUEL = 41_000.0

# Intensity applying before the first threshold year (gCO2eq/MJ)
BASELINE_INTENSITY = 91.16

# Highest threshold first: lookup returns on the first year <= the query
_THRESHOLDS_DESC = sorted(TARGET_INTENSITIES, reverse=True)


# =============================================================================
# Calculator
# =============================================================================

def get_target_intensity(year: int) -> float:
    """
    Target GHG intensity for a reporting year.

    Years at or above a threshold take that threshold's value, so 2060
    yields the 2050 target; years before 2025 yield the baseline.
    """
    for threshold in _THRESHOLDS_DESC:
        if year >= threshold:
            return TARGET_INTENSITIES[threshold]
    return BASELINE_INTENSITY


def calculate_energy_in_scope(fuel_consumption_tonnes: float) -> float:
    """Energy in scope (MJ) for a fuel consumption in tonnes."""
    return fuel_consumption_tonnes * ENERGY_PER_TONNE_FUEL


def calculate_compliance_balance(
    target_intensity: float,
    actual_intensity: float,
    energy_in_scope: float,
) -> float:
    """
    Compliance balance in gCO2eq.

    CB = (target - actual) * energy. Positive when the ship emits less than
    required (surplus), negative on a deficit.
    """
    return (target_intensity - actual_intensity) * energy_in_scope


def calculate_percent_diff(comparison: float, baseline: float) -> float:
    """Percentage difference of ``comparison`` against ``baseline``; 0 for a zero baseline."""
    if baseline == 0:
        return 0.0
    return ((comparison / baseline) - 1) * 100


def is_compliant(actual_intensity: float, target_intensity: float) -> bool:
    return actual_intensity <= target_intensity


def get_limits_by_year() -> List[Dict]:
    """Return target intensities for all threshold years."""
    limits = []
    for year, target in sorted(TARGET_INTENSITIES.items()):
        reduction_pct = (1 - target / BASELINE_INTENSITY) * 100
        limits.append({
            "year": year,
            "target_intensity": target,
            "reduction_pct": round(reduction_pct, 2),
        })
    return limits
