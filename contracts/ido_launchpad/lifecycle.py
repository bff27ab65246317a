"""
Campaign lifecycle: derived state and creation-time validation.

The state is never stored. It is computed from the one-way flags and the
schedule, first match wins:

    cancelled            -> STATE_CANCELLED
    funds_withdrawn      -> STATE_SETTLED
    sale_closed          -> STATE_CLOSED_AWAITING_SETTLEMENT
    now < start          -> STATE_PRE_SALE
    now <= end           -> STATE_OPEN
    otherwise            -> STATE_ENDED_UNRESOLVED

Legal operations per state:

    PRE_SALE                    deposit_tokens, close_campaign
    OPEN                        deposit_tokens, join, close_campaign (now < end)
    ENDED_UNRESOLVED            withdraw_funds (soft cap reached),
                                close_campaign_if_soft_cap_not_reached (not reached),
                                claim (soft cap reached, after the cliff)
    CLOSED_AWAITING_SETTLEMENT  refund, recover_tokens
    SETTLED                     claim (after a successful withdrawal), refund
                                (after token recovery)
    CANCELLED                   refund

At now == end the sale is still OPEN and the end-of-sale operations are
already allowed.
"""

from algopy import UInt64, subroutine

from contracts.ido_launchpad.errors import (
    INVALID_ALLOCATION,
    INVALID_ALLOCATIONS_PER_PARTICIPANT,
    INVALID_CLIFF,
    INVALID_END_SALE_TIME,
    INVALID_HARD_CAP,
    INVALID_PRICE,
    INVALID_SOFT_CAP,
    INVALID_START_SALE_TIME,
    INVALID_UNLOCK_PCT,
    INVALID_VESTING_END_TIME,
)
from contracts.ido_launchpad.records import Campaign
from contracts.ido_launchpad.vesting import PERCENT_BASE

STATE_PRE_SALE = 0
STATE_OPEN = 1
STATE_ENDED_UNRESOLVED = 2
STATE_CANCELLED = 3
STATE_CLOSED_AWAITING_SETTLEMENT = 4
STATE_SETTLED = 5


@subroutine
def campaign_state(campaign: Campaign, now: UInt64) -> UInt64:
    if campaign.cancelled.native:
        return UInt64(STATE_CANCELLED)
    if campaign.funds_withdrawn.native:
        return UInt64(STATE_SETTLED)
    if campaign.sale_closed.native:
        return UInt64(STATE_CLOSED_AWAITING_SETTLEMENT)
    if now < campaign.start_sale_time.as_uint64():
        return UInt64(STATE_PRE_SALE)
    if now <= campaign.end_sale_time.as_uint64():
        return UInt64(STATE_OPEN)
    return UInt64(STATE_ENDED_UNRESOLVED)


@subroutine
def validate_schedule(
    now: UInt64,
    start_sale_time: UInt64,
    end_sale_time: UInt64,
    cliff: UInt64,
    vesting_end_time: UInt64,
) -> None:
    assert start_sale_time > now, INVALID_START_SALE_TIME
    assert end_sale_time > start_sale_time, INVALID_END_SALE_TIME
    assert cliff > end_sale_time, INVALID_CLIFF
    assert vesting_end_time > cliff, INVALID_VESTING_END_TIME


@subroutine
def validate_economics(
    price_per_allocation: UInt64,
    allocation_unit_size: UInt64,
    allocations_per_participant: UInt64,
    soft_cap: UInt64,
    hard_cap: UInt64,
    unlock_pct: UInt64,
) -> None:
    assert price_per_allocation > 0, INVALID_PRICE
    assert allocation_unit_size > 0, INVALID_ALLOCATION
    assert allocations_per_participant > 0, INVALID_ALLOCATIONS_PER_PARTICIPANT
    assert soft_cap > 0, INVALID_SOFT_CAP
    assert hard_cap > soft_cap, INVALID_HARD_CAP
    assert unlock_pct <= PERCENT_BASE, INVALID_UNLOCK_PCT
