"""
Tests for campaign state derivation and creation-time validation.
"""

import re

import pytest
from algopy import UInt64
from algopy_testing import AlgopyTestContext

from contracts.ido_launchpad import errors
from contracts.ido_launchpad.lifecycle import (
    STATE_CANCELLED,
    STATE_CLOSED_AWAITING_SETTLEMENT,
    STATE_ENDED_UNRESOLVED,
    STATE_OPEN,
    STATE_PRE_SALE,
    STATE_SETTLED,
    campaign_state,
    validate_economics,
    validate_schedule,
)
from harness import make_campaign


class TestCampaignState:
    @pytest.mark.parametrize(
        ("now", "expected"),
        [
            (0, STATE_PRE_SALE),
            (99, STATE_PRE_SALE),
            (100, STATE_OPEN),
            (200, STATE_OPEN),
            (201, STATE_ENDED_UNRESOLVED),
        ],
    )
    def test_schedule_states(self, context: AlgopyTestContext, now: int, expected: int):
        campaign = make_campaign(context.any.account())

        assert campaign_state(campaign, UInt64(now)) == expected

    def test_flags_take_precedence_over_schedule(self, context: AlgopyTestContext):
        owner = context.any.account()

        assert (
            campaign_state(make_campaign(owner, sale_closed=True), UInt64(150))
            == STATE_CLOSED_AWAITING_SETTLEMENT
        )
        assert (
            campaign_state(make_campaign(owner, funds_withdrawn=True), UInt64(150))
            == STATE_SETTLED
        )
        assert (
            campaign_state(make_campaign(owner, sale_closed=True, funds_withdrawn=True), UInt64(50))
            == STATE_SETTLED
        )
        assert (
            campaign_state(
                make_campaign(owner, sale_closed=True, funds_withdrawn=True, cancelled=True),
                UInt64(150),
            )
            == STATE_CANCELLED
        )

    def test_campaign_record_size(self, context: AlgopyTestContext):
        campaign = make_campaign(context.any.account())

        # address + 14 uint64 + 4 packed bools
        assert campaign.bytes.length == 32 + 14 * 8 + 1


class TestValidation:
    def test_valid_schedule(self, context: AlgopyTestContext):
        validate_schedule(UInt64(10), UInt64(11), UInt64(12), UInt64(13), UInt64(14))

    @pytest.mark.parametrize(
        ("schedule", "message"),
        [
            ((10, 10, 12, 13, 14), errors.INVALID_START_SALE_TIME),
            ((10, 11, 11, 13, 14), errors.INVALID_END_SALE_TIME),
            ((10, 11, 12, 12, 14), errors.INVALID_CLIFF),
            ((10, 11, 12, 13, 13), errors.INVALID_VESTING_END_TIME),
        ],
    )
    def test_invalid_schedule(
        self, context: AlgopyTestContext, schedule: tuple, message: str
    ):
        with pytest.raises(AssertionError, match=re.escape(message)):
            validate_schedule(*[UInt64(value) for value in schedule])

    def test_valid_economics(self, context: AlgopyTestContext):
        validate_economics(UInt64(1), UInt64(1), UInt64(1), UInt64(1), UInt64(2), UInt64(100))
        validate_economics(UInt64(1), UInt64(1), UInt64(1), UInt64(1), UInt64(2), UInt64(0))

    @pytest.mark.parametrize(
        ("economics", "message"),
        [
            ((0, 1, 1, 1, 2, 10), errors.INVALID_PRICE),
            ((1, 0, 1, 1, 2, 10), errors.INVALID_ALLOCATION),
            ((1, 1, 0, 1, 2, 10), errors.INVALID_ALLOCATIONS_PER_PARTICIPANT),
            ((1, 1, 1, 0, 2, 10), errors.INVALID_SOFT_CAP),
            ((1, 1, 1, 2, 2, 10), errors.INVALID_HARD_CAP),
            ((1, 1, 1, 1, 2, 101), errors.INVALID_UNLOCK_PCT),
        ],
    )
    def test_invalid_economics(
        self, context: AlgopyTestContext, economics: tuple, message: str
    ):
        with pytest.raises(AssertionError, match=re.escape(message)):
            validate_economics(*[UInt64(value) for value in economics])
