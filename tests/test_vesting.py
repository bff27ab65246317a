"""
Tests for cliff-plus-linear vesting and checked arithmetic.
"""

import re

import pytest
from algopy import UInt64
from algopy_testing import AlgopyTestContext

from contracts.ido_launchpad.checked_math import (
    checked_add,
    checked_mul,
    checked_sub,
    mul_div_floor,
)
from contracts.ido_launchpad.errors import MATH_OVERFLOW
from contracts.ido_launchpad.vesting import claimable_amount, unlocked_amount

MAX_UINT64 = 2**64 - 1


def unlocked(entitlement: int, cliff: int, vesting_end: int, unlock_pct: int, now: int) -> UInt64:
    return unlocked_amount(
        UInt64(entitlement), UInt64(cliff), UInt64(vesting_end), UInt64(unlock_pct), UInt64(now)
    )


class TestVesting:
    """Unlock curve: nothing before the cliff, a step at the cliff, then linear."""

    @pytest.mark.parametrize(
        ("now", "expected"),
        [
            (0, 0),
            (99, 0),
            (100, 200),
            (150, 600),
            (199, 992),
            (200, 1000),
            (10_000, 1000),
        ],
    )
    def test_unlock_curve(self, context: AlgopyTestContext, now: int, expected: int):
        assert unlocked(1000, 100, 200, 20, now) == expected

    def test_unlock_is_monotonic(self, context: AlgopyTestContext):
        amounts = [unlocked(777, 1_000, 1_333, 13, now) for now in range(990, 1_340)]

        assert amounts == sorted(amounts)
        assert amounts[-1] == 777

    def test_full_unlock_at_cliff(self, context: AlgopyTestContext):
        assert unlocked(1000, 100, 200, 100, 100) == 1000
        assert unlocked(1000, 100, 200, 100, 150) == 1000

    def test_no_cliff_unlock(self, context: AlgopyTestContext):
        assert unlocked(1000, 100, 200, 0, 100) == 0
        assert unlocked(1000, 100, 200, 0, 125) == 250

    def test_large_entitlement_does_not_overflow(self, context: AlgopyTestContext):
        entitlement = MAX_UINT64 - 1

        assert unlocked(entitlement, 100, 200, 50, 100) == entitlement // 2
        assert unlocked(entitlement, 100, 200, 50, 200) == entitlement

    def test_claimable_subtracts_claimed(self, context: AlgopyTestContext):
        def claimable(claimed: int, now: int) -> UInt64:
            return claimable_amount(
                UInt64(1000), UInt64(claimed), UInt64(100), UInt64(200), UInt64(20), UInt64(now)
            )

        assert claimable(0, 150) == 600
        assert claimable(600, 150) == 0
        assert claimable(600, 200) == 400
        # never negative
        assert claimable(1000, 150) == 0


class TestCheckedMath:
    """Overflow-checked arithmetic helpers."""

    def test_checked_add(self, context: AlgopyTestContext):
        assert checked_add(UInt64(2), UInt64(3)) == 5

        with pytest.raises(AssertionError, match=re.escape(MATH_OVERFLOW)):
            checked_add(UInt64(MAX_UINT64), UInt64(1))

    def test_checked_sub(self, context: AlgopyTestContext):
        assert checked_sub(UInt64(5), UInt64(3)) == 2

        with pytest.raises(AssertionError, match=re.escape(MATH_OVERFLOW)):
            checked_sub(UInt64(3), UInt64(5))

    def test_checked_mul(self, context: AlgopyTestContext):
        assert checked_mul(UInt64(2**32), UInt64(2**31)) == 2**63

        with pytest.raises(AssertionError, match=re.escape(MATH_OVERFLOW)):
            checked_mul(UInt64(2), UInt64(2**63))

    def test_mul_div_floor(self, context: AlgopyTestContext):
        assert mul_div_floor(UInt64(10_000_190), UInt64(5), UInt64(100)) == 500_009
        # intermediate product exceeds 64 bits
        assert mul_div_floor(UInt64(MAX_UINT64), UInt64(3), UInt64(4)) == MAX_UINT64 * 3 // 4

        with pytest.raises(AssertionError, match=re.escape(MATH_OVERFLOW)):
            mul_div_floor(UInt64(MAX_UINT64), UInt64(2), UInt64(1))
        with pytest.raises(AssertionError, match=re.escape(MATH_OVERFLOW)):
            mul_div_floor(UInt64(1), UInt64(1), UInt64(0))
