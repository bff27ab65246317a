"""
Cliff-plus-linear vesting.

At the cliff a fixed percentage of the entitlement unlocks; the remainder
unlocks linearly until the vesting end, when everything is unlocked.
"""

from algopy import UInt64, subroutine

from contracts.ido_launchpad.checked_math import checked_add, mul_div_floor
from contracts.ido_launchpad.errors import INVALID_UNLOCK_PCT, INVALID_VESTING_END_TIME

PERCENT_BASE = 100


@subroutine
def unlocked_amount(
    entitlement: UInt64,
    cliff: UInt64,
    vesting_end: UInt64,
    unlock_pct: UInt64,
    now: UInt64,
) -> UInt64:
    """
    Total tokens unlocked at `now`, regardless of what was already claimed.

    Args:
        entitlement: Tokens owed to the participant
        cliff: Timestamp of the first unlock
        vesting_end: Timestamp from which everything is unlocked
        unlock_pct: Percentage of the entitlement unlocked at the cliff
        now: Current timestamp

    Returns:
        Unlocked token amount, never above the entitlement
    """
    if now < cliff:
        return UInt64(0)

    assert vesting_end > cliff, INVALID_VESTING_END_TIME
    assert unlock_pct <= PERCENT_BASE, INVALID_UNLOCK_PCT

    cliff_unlocked = mul_div_floor(entitlement, unlock_pct, UInt64(PERCENT_BASE))

    if now >= vesting_end:
        unlocked = entitlement
    elif now == cliff:
        unlocked = cliff_unlocked
    else:
        remaining = entitlement - cliff_unlocked
        linear = mul_div_floor(remaining, now - cliff, vesting_end - cliff)
        unlocked = checked_add(cliff_unlocked, linear)
        if unlocked > entitlement:
            unlocked = entitlement

    return unlocked


@subroutine
def claimable_amount(
    entitlement: UInt64,
    claimed: UInt64,
    cliff: UInt64,
    vesting_end: UInt64,
    unlock_pct: UInt64,
    now: UInt64,
) -> UInt64:
    """Tokens a participant may claim now. Zero is a valid answer, not an error."""
    unlocked = unlocked_amount(entitlement, cliff, vesting_end, unlock_pct, now)
    if unlocked <= claimed:
        return UInt64(0)
    return unlocked - claimed
