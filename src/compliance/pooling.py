"""
FuelEU Maritime pooling (EU 2023/1805 Art. 21).

Ships in a pool offset each other's deficits with surplus. Pool creation is
a three-step protocol:

1. ``PoolValidator.validate`` - at least two members and a non-negative
   total CB
2. ``PoolValidator.allocate_pool_balances`` - greedy transfer of surplus to
   deficits, largest surplus first
3. ``PoolValidator.validate_allocations`` - no deficit ship exits worse, no
   surplus ship exits negative

Allocation works on the ``cb_before`` values the caller supplies. Stored
compliance records are only checked for existence.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence

from src.compliance.errors import (
    ComplianceRecordNotFound,
    PoolNotFound,
    PoolValidationFailed,
)
from src.compliance.models import (
    Pool,
    PoolAllocation,
    PoolMemberInput,
    PoolValidationResult,
)
from src.compliance.ports import ComplianceRepository, PoolRepository

logger = logging.getLogger(__name__)

MIN_POOL_MEMBERS = 2


# =============================================================================
# Validator / allocator
# =============================================================================

class PoolValidator:
    """Pure pooling rules. Holds no state."""

    def validate(self, members: Sequence[PoolMemberInput]) -> PoolValidationResult:
        """Pre-allocation rules. Errors accumulate."""
        errors = []

        if len(members) < MIN_POOL_MEMBERS:
            errors.append(f"Pool must have at least {MIN_POOL_MEMBERS} members")

        for m in members:
            if not math.isfinite(m.cb_before):
                errors.append(f"Ship {m.ship_id} has a non-finite CB ({m.cb_before})")

        total_cb = sum((m.cb_before for m in members), 0.0)
        if total_cb < 0:
            errors.append(f"Total CB ({total_cb:.2f}) must be >= 0 for pool creation")

        return PoolValidationResult(is_valid=not errors, errors=errors)

    def allocate_pool_balances(
        self, members: Iterable[PoolMemberInput]
    ) -> List[PoolAllocation]:
        """
        Greedy surplus-to-deficit redistribution.

        Members are sorted by ``cb_before`` descending (stable, so equal
        values keep input order). Each deficit ship in turn draws from the
        surplus ships in that order until it reaches zero or the surplus
        runs out. Ships at exactly zero neither give nor take.

        Returns:
            One PoolAllocation per member, in sorted order. The sum of
            ``cb_after`` equals the sum of ``cb_before``.
        """
        ordered = sorted(members, key=lambda m: m.cb_before, reverse=True)
        result = [
            PoolAllocation(ship_id=m.ship_id, cb_before=m.cb_before, cb_after=m.cb_before)
            for m in ordered
        ]

        surplus_ships = [a for a in result if a.cb_before > 0]
        deficit_ships = [a for a in result if a.cb_before < 0]

        for deficit in deficit_ships:
            remaining = abs(deficit.cb_after)

            for surplus in surplus_ships:
                if remaining <= 0:
                    break
                if surplus.cb_after <= 0:
                    continue

                transfer = min(surplus.cb_after, remaining)
                surplus.cb_after -= transfer
                deficit.cb_after += transfer
                remaining -= transfer

        return result

    def validate_allocations(
        self, allocations: Iterable[PoolAllocation]
    ) -> PoolValidationResult:
        """Post-allocation fairness rules. Errors accumulate."""
        errors = []

        for a in allocations:
            if a.cb_before < 0 and a.cb_after < a.cb_before:
                errors.append(
                    f"Ship {a.ship_id} with deficit cannot exit worse "
                    f"(before: {a.cb_before}, after: {a.cb_after})"
                )
            if a.cb_before > 0 and a.cb_after < 0:
                errors.append(
                    f"Ship {a.ship_id} with surplus cannot exit negative "
                    f"(before: {a.cb_before}, after: {a.cb_after})"
                )

        return PoolValidationResult(is_valid=not errors, errors=errors)


# =============================================================================
# Use cases
# =============================================================================

class PoolService:
    """Create and look up compliance pools."""

    def __init__(
        self,
        pool_repository: PoolRepository,
        compliance_repository: ComplianceRepository,
        validator: Optional[PoolValidator] = None,
    ):
        self.pool_repository = pool_repository
        self.compliance_repository = compliance_repository
        self.validator = validator or PoolValidator()

    def create_pool(self, year: int, members: Sequence[PoolMemberInput]) -> Pool:
        """
        Validate, allocate and persist a pool.

        Args:
            year: Compliance year of the pool
            members: Ships with their caller-asserted ``cb_before``

        Raises:
            PoolValidationFailed: pre- or post-allocation rule violated
            ComplianceRecordNotFound: a member has no CB record for ``year``
        """
        validation = self.validator.validate(members)
        if not validation.is_valid:
            raise PoolValidationFailed(validation.errors, "Pool validation")

        for member in members:
            if self.compliance_repository.find_by_ship_and_year(member.ship_id, year) is None:
                raise ComplianceRecordNotFound(member.ship_id, year)

        allocations = self.validator.allocate_pool_balances(members)

        allocation_validation = self.validator.validate_allocations(allocations)
        if not allocation_validation.is_valid:
            raise PoolValidationFailed(
                allocation_validation.errors, "Pool allocation validation"
            )

        pool = self.pool_repository.create(year, allocations)
        logger.info(
            "Created pool %s for %d with %d members", pool.id, year, len(allocations)
        )
        return pool

    def list_pools(self, year: int) -> List[Pool]:
        return self.pool_repository.find_by_year(year)

    def get_pool(self, pool_id: str) -> Pool:
        pool = self.pool_repository.find_by_id(pool_id)
        if pool is None:
            raise PoolNotFound(pool_id)
        return pool
