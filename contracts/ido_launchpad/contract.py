"""
IDO Launchpad Smart Contract

A token-sale escrow: participants pre-pay Algos for allocations of a token,
the tokens unlock over a cliff-plus-linear vesting schedule, and the raised
funds are either paid out to the campaign owner (soft cap reached) or
refunded to participants (soft cap missed or campaign cancelled).

Features:
- Create campaigns with schedule, caps, price and vesting parameters
- Owner deposits the full hard cap of tokens before the sale
- Join once per campaign with a grouped payment
- Claim vested tokens after the cliff
- Owner withdrawal with a fixed 5% platform fee
- Owner cancellation, soft-cap failure closing and participant refunds
- Owner token recovery after a failed sale

Algorand Primitives Used:
- AVM Application (smart contract)
- Escrow pattern (application account holds Algos and tokens)
- Grouped transactions (payments and token deposits)
- Inner Transactions (payouts, refunds, token transfers)
- Boxes (campaigns, participations, treasuries)
"""

from algopy import (
    Account,
    ARC4Contract,
    Asset,
    Bytes,
    Global,
    GlobalState,
    Txn,
    UInt64,
    arc4,
    gtxn,
)

from contracts.ido_launchpad.checked_math import (
    checked_add,
    checked_mul,
    checked_sub,
    mul_div_floor,
)
from contracts.ido_launchpad.errors import (
    ALLOCATION_NOT_AVAILABLE,
    DEPOSIT_AMOUNT_MISMATCH,
    FUNDS_ALREADY_WITHDRAWN,
    INSUFFICIENT_MBR_PAYMENT,
    INSUFFICIENT_PAYMENT,
    INSUFFICIENT_TREASURY,
    INVALID_CAMPAIGN,
    INVALID_NUMBER_OF_ALLOCATIONS,
    INVALID_TOKEN,
    INVALID_TRANSFER_RECEIVER,
    INVALID_TRANSFER_SENDER,
    NOTHING_TO_CLAIM,
    NOTHING_TO_REFUND,
    PAYMENT_AMOUNT_MISMATCH,
    SALE_ALREADY_CLOSED,
    SALE_ENDED,
    SALE_NOT_CLOSED,
    SALE_NOT_ENDED,
    SALE_NOT_OPEN,
    SOFT_CAP_NOT_REACHED,
    SOFT_CAP_REACHED,
    TOKEN_SUPPLY_ALREADY_DEPOSITED,
    TOKEN_SUPPLY_NOT_DEPOSITED,
    TOTAL_CLAIMED_NOT_ZERO,
    UNAUTHORIZED_ADMIN,
    UNAUTHORIZED_OWNER,
    UNAUTHORIZED_PARTICIPANT,
    USER_ALREADY_JOINED,
)
from contracts.ido_launchpad.lifecycle import (
    STATE_OPEN,
    campaign_state,
    validate_economics,
    validate_schedule,
)
from contracts.ido_launchpad.records import (
    Campaign,
    Participation,
    box_min_balance,
    campaign_key,
    has_participation,
    load_campaign,
    load_participation,
    participation_reserve,
    save_campaign,
    save_participation,
)
from contracts.ido_launchpad.treasury import (
    ASSET_OPT_IN_MIN_BALANCE,
    CURRENCY_TREASURY,
    TOKEN_TREASURY,
    credit_treasury,
    open_treasury,
    opt_in_to_token,
    release_currency,
    release_tokens,
    treasury_balance,
    treasury_reserve,
)
from contracts.ido_launchpad.vesting import PERCENT_BASE, claimable_amount

# Share of the raised Algos paid to the platform on withdrawal
PLATFORM_FEE_PCT = 5


class IdoLaunchpad(ARC4Contract):
    """
    Token sale launchpad hosting any number of campaigns.

    State Schema:
    - Global State:
        - campaign_count: Total campaigns created
        - admin: Launchpad administrator (application creator)
        - fee_recipient: Receiver of the platform fee

    - Boxes:
        - camp_{id}: Campaign aggregate
        - part_{id}{address}: Participation record
        - trs_{id}currency / trs_{id}token: Treasury balances
    """

    def __init__(self) -> None:
        self.campaign_count = GlobalState(UInt64(0))
        self.admin = GlobalState(Account)
        self.fee_recipient = GlobalState(Account)

    @arc4.abimethod(create="require")
    def create(self, fee_recipient: arc4.Address) -> None:
        """
        Create the launchpad.

        Args:
            fee_recipient: Address receiving the platform fee on withdrawals
        """
        self.admin.value = Txn.sender
        self.fee_recipient.value = fee_recipient.native

    @arc4.abimethod
    def set_fee_recipient(self, fee_recipient: arc4.Address) -> None:
        """
        Replace the platform fee recipient. Only the admin can do this.

        Args:
            fee_recipient: New fee recipient address
        """
        assert Txn.sender == self.admin.value, UNAUTHORIZED_ADMIN
        self.fee_recipient.value = fee_recipient.native

    @arc4.abimethod
    def create_campaign(
        self,
        mbr_payment: gtxn.PaymentTransaction,
        token: Asset,
        start_sale_time: arc4.UInt64,
        end_sale_time: arc4.UInt64,
        cliff: arc4.UInt64,
        vesting_end_time: arc4.UInt64,
        price_per_allocation: arc4.UInt64,
        allocation_unit_size: arc4.UInt64,
        soft_cap: arc4.UInt64,
        hard_cap: arc4.UInt64,
        unlock_pct: arc4.UInt64,
        allocations_per_participant: arc4.UInt64,
    ) -> arc4.UInt64:
        """
        Create a new sale campaign owned by the caller.

        Must be grouped with a payment to the launchpad covering the storage
        of the campaign and its treasuries plus the token opt-in.

        Args:
            mbr_payment: Payment covering the campaign's minimum balance
            token: Asset being sold
            start_sale_time: Unix timestamp when joining opens
            end_sale_time: Unix timestamp when joining closes
            cliff: Unix timestamp of the first token unlock
            vesting_end_time: Unix timestamp when all tokens are unlocked
            price_per_allocation: Price of one allocation unit in microAlgos
            allocation_unit_size: Tokens in one allocation unit
            soft_cap: Minimum tokens sold for the sale to succeed
            hard_cap: Maximum tokens sold
            unlock_pct: Percentage of tokens unlocked at the cliff
            allocations_per_participant: Maximum allocation units per participant

        Returns:
            Campaign ID
        """
        validate_schedule(
            Global.latest_timestamp,
            start_sale_time.as_uint64(),
            end_sale_time.as_uint64(),
            cliff.as_uint64(),
            vesting_end_time.as_uint64(),
        )
        validate_economics(
            price_per_allocation.as_uint64(),
            allocation_unit_size.as_uint64(),
            allocations_per_participant.as_uint64(),
            soft_cap.as_uint64(),
            hard_cap.as_uint64(),
            unlock_pct.as_uint64(),
        )

        campaign_id = self.campaign_count.value
        campaign = Campaign(
            owner=arc4.Address(Txn.sender),
            token_id=arc4.UInt64(token.id),
            start_sale_time=start_sale_time,
            end_sale_time=end_sale_time,
            cliff=cliff,
            vesting_end_time=vesting_end_time,
            price_per_allocation=price_per_allocation,
            allocation_unit_size=allocation_unit_size,
            soft_cap=soft_cap,
            hard_cap=hard_cap,
            unlock_pct=unlock_pct,
            allocations_per_participant=allocations_per_participant,
            total_sold=arc4.UInt64(0),
            total_participants=arc4.UInt64(0),
            total_claimed=arc4.UInt64(0),
            token_supply_deposited=arc4.Bool(False),
            sale_closed=arc4.Bool(False),
            funds_withdrawn=arc4.Bool(False),
            cancelled=arc4.Bool(False),
        )

        # Campaign box + both treasury boxes + token opt-in
        storage_cost = box_min_balance(
            campaign_key(campaign_id).length, campaign.bytes.length
        )
        storage_cost += treasury_reserve(Bytes(CURRENCY_TREASURY))
        storage_cost += treasury_reserve(Bytes(TOKEN_TREASURY))
        storage_cost += ASSET_OPT_IN_MIN_BALANCE
        assert mbr_payment.sender == Txn.sender, INVALID_TRANSFER_SENDER
        assert (
            mbr_payment.receiver == Global.current_application_address
        ), INVALID_TRANSFER_RECEIVER
        assert mbr_payment.amount >= storage_cost, INSUFFICIENT_MBR_PAYMENT

        self.campaign_count.value = campaign_id + 1
        save_campaign(campaign_id, campaign)
        open_treasury(campaign_id, Bytes(CURRENCY_TREASURY))
        open_treasury(campaign_id, Bytes(TOKEN_TREASURY))
        opt_in_to_token(token)

        return arc4.UInt64(campaign_id)

    @arc4.abimethod
    def deposit_tokens(
        self,
        campaign_id: arc4.UInt64,
        deposit: gtxn.AssetTransferTransaction,
    ) -> None:
        """
        Deposit the campaign's token supply. Only the owner can deposit.

        Must be grouped with a transfer of exactly `hard_cap` campaign
        tokens to the launchpad.

        Args:
            campaign_id: ID of the campaign
            deposit: Token transfer to the launchpad
        """
        campaign = load_campaign(campaign_id.as_uint64())

        assert campaign.owner.native == Txn.sender, UNAUTHORIZED_OWNER
        assert (
            not campaign.token_supply_deposited.native
        ), TOKEN_SUPPLY_ALREADY_DEPOSITED
        assert not campaign.sale_closed.native, SALE_ALREADY_CLOSED
        assert Global.latest_timestamp < campaign.end_sale_time.as_uint64(), SALE_ENDED
        assert deposit.xfer_asset.id == campaign.token_id.as_uint64(), INVALID_TOKEN
        assert deposit.sender == Txn.sender, INVALID_TRANSFER_SENDER
        assert (
            deposit.asset_receiver == Global.current_application_address
        ), INVALID_TRANSFER_RECEIVER
        assert deposit.asset_amount == campaign.hard_cap.as_uint64(), DEPOSIT_AMOUNT_MISMATCH

        credit_treasury(campaign_id.as_uint64(), Bytes(TOKEN_TREASURY), deposit.asset_amount)

        campaign.token_supply_deposited = arc4.Bool(True)
        save_campaign(campaign_id.as_uint64(), campaign)

    @arc4.abimethod
    def join(
        self,
        campaign_id: arc4.UInt64,
        number_of_allocations: arc4.UInt64,
        payment: gtxn.PaymentTransaction,
    ) -> None:
        """
        Buy allocation units in an open sale. Each account joins once.

        Must be grouped with a payment to the launchpad of the allocation
        cost plus the minimum balance of the new participation record.

        Args:
            campaign_id: ID of the campaign
            number_of_allocations: Allocation units to buy
            payment: Payment covering cost and record reserve
        """
        now = Global.latest_timestamp
        campaign = load_campaign(campaign_id.as_uint64())
        units = number_of_allocations.as_uint64()

        assert campaign.token_supply_deposited.native, TOKEN_SUPPLY_NOT_DEPOSITED
        assert not campaign.sale_closed.native, SALE_ALREADY_CLOSED
        assert (
            units > 0 and units <= campaign.allocations_per_participant.as_uint64()
        ), INVALID_NUMBER_OF_ALLOCATIONS
        assert campaign_state(campaign, now) == STATE_OPEN, SALE_NOT_OPEN

        amount_to_buy = checked_mul(units, campaign.allocation_unit_size.as_uint64())
        cost = checked_mul(units, campaign.price_per_allocation.as_uint64())
        new_total_sold = checked_add(campaign.total_sold.as_uint64(), amount_to_buy)
        assert new_total_sold <= campaign.hard_cap.as_uint64(), ALLOCATION_NOT_AVAILABLE
        assert not has_participation(campaign_id.as_uint64(), Txn.sender), USER_ALREADY_JOINED

        required = checked_add(cost, participation_reserve())
        assert payment.sender == Txn.sender, INVALID_TRANSFER_SENDER
        assert (
            payment.receiver == Global.current_application_address
        ), INVALID_TRANSFER_RECEIVER
        assert payment.amount >= required, INSUFFICIENT_PAYMENT
        assert payment.amount == required, PAYMENT_AMOUNT_MISMATCH

        record = Participation(
            campaign_id=campaign_id,
            participant=arc4.Address(Txn.sender),
            entitlement_amount=arc4.UInt64(amount_to_buy),
            paid_amount=arc4.UInt64(cost),
            claimed_amount=arc4.UInt64(0),
            joined_at=arc4.UInt64(now),
        )
        save_participation(campaign_id.as_uint64(), Txn.sender, record)
        credit_treasury(campaign_id.as_uint64(), Bytes(CURRENCY_TREASURY), cost)

        campaign.total_sold = arc4.UInt64(new_total_sold)
        campaign.total_participants = arc4.UInt64(
            checked_add(campaign.total_participants.as_uint64(), UInt64(1))
        )
        save_campaign(campaign_id.as_uint64(), campaign)

    @arc4.abimethod
    def claim(self, campaign_id: arc4.UInt64) -> arc4.UInt64:
        """
        Claim the caller's vested tokens.

        Args:
            campaign_id: ID of the campaign

        Returns:
            Amount of tokens transferred
        """
        now = Global.latest_timestamp
        campaign = load_campaign(campaign_id.as_uint64())
        record = load_participation(campaign_id.as_uint64(), Txn.sender)

        assert record.participant.native == Txn.sender, UNAUTHORIZED_PARTICIPANT
        assert record.campaign_id.as_uint64() == campaign_id.as_uint64(), INVALID_CAMPAIGN
        assert (
            record.claimed_amount.as_uint64() < record.entitlement_amount.as_uint64()
        ), NOTHING_TO_CLAIM
        assert campaign.token_supply_deposited.native, TOKEN_SUPPLY_NOT_DEPOSITED
        # No claims once refunds are possible, so nobody holds both tokens and a refund
        assert not campaign.sale_closed.native, SALE_ALREADY_CLOSED
        assert (
            campaign.total_sold.as_uint64() >= campaign.soft_cap.as_uint64()
        ), SOFT_CAP_NOT_REACHED

        amount_to_claim = claimable_amount(
            record.entitlement_amount.as_uint64(),
            record.claimed_amount.as_uint64(),
            campaign.cliff.as_uint64(),
            campaign.vesting_end_time.as_uint64(),
            campaign.unlock_pct.as_uint64(),
            now,
        )
        assert amount_to_claim > 0, NOTHING_TO_CLAIM
        assert (
            treasury_balance(campaign_id.as_uint64(), Bytes(TOKEN_TREASURY)) >= amount_to_claim
        ), INSUFFICIENT_TREASURY

        claimed = checked_add(record.claimed_amount.as_uint64(), amount_to_claim)
        total_claimed = checked_add(campaign.total_claimed.as_uint64(), amount_to_claim)

        release_tokens(
            campaign_id.as_uint64(),
            Asset(campaign.token_id.as_uint64()),
            Txn.sender,
            amount_to_claim,
        )

        record.claimed_amount = arc4.UInt64(claimed)
        save_participation(campaign_id.as_uint64(), Txn.sender, record)
        campaign.total_claimed = arc4.UInt64(total_claimed)
        save_campaign(campaign_id.as_uint64(), campaign)

        return arc4.UInt64(amount_to_claim)

    @arc4.abimethod
    def close_campaign(self, campaign_id: arc4.UInt64) -> None:
        """
        Cancel a campaign before its sale ends. Only the owner can cancel.

        The whole token treasury goes back to the owner; the raised Algos
        stay in escrow so participants can claim refunds.

        Args:
            campaign_id: ID of the campaign
        """
        campaign = load_campaign(campaign_id.as_uint64())

        assert campaign.owner.native == Txn.sender, UNAUTHORIZED_OWNER
        assert not campaign.sale_closed.native, SALE_ALREADY_CLOSED
        assert Global.latest_timestamp < campaign.end_sale_time.as_uint64(), SALE_ENDED
        assert not campaign.funds_withdrawn.native, FUNDS_ALREADY_WITHDRAWN
        assert campaign.total_claimed.as_uint64() == 0, TOTAL_CLAIMED_NOT_ZERO
        assert campaign.token_supply_deposited.native, TOKEN_SUPPLY_NOT_DEPOSITED

        remaining_tokens = treasury_balance(campaign_id.as_uint64(), Bytes(TOKEN_TREASURY))
        if remaining_tokens > 0:
            release_tokens(
                campaign_id.as_uint64(),
                Asset(campaign.token_id.as_uint64()),
                Txn.sender,
                remaining_tokens,
            )

        campaign.sale_closed = arc4.Bool(True)
        campaign.funds_withdrawn = arc4.Bool(True)
        campaign.cancelled = arc4.Bool(True)
        save_campaign(campaign_id.as_uint64(), campaign)

    @arc4.abimethod
    def close_campaign_if_soft_cap_not_reached(self, campaign_id: arc4.UInt64) -> None:
        """
        Close an ended sale that missed its soft cap, enabling refunds.
        Anyone can call this.

        Args:
            campaign_id: ID of the campaign
        """
        campaign = load_campaign(campaign_id.as_uint64())

        assert not campaign.sale_closed.native, SALE_ALREADY_CLOSED
        assert Global.latest_timestamp >= campaign.end_sale_time.as_uint64(), SALE_NOT_ENDED
        assert campaign.total_sold.as_uint64() < campaign.soft_cap.as_uint64(), SOFT_CAP_REACHED

        campaign.sale_closed = arc4.Bool(True)
        save_campaign(campaign_id.as_uint64(), campaign)

    @arc4.abimethod
    def withdraw_funds(self, campaign_id: arc4.UInt64) -> None:
        """
        Pay out a successful sale. Only the owner can withdraw.

        The raised Algos are split between the platform fee recipient and
        the owner; unsold tokens go back to the owner.

        Args:
            campaign_id: ID of the campaign
        """
        campaign = load_campaign(campaign_id.as_uint64())

        assert not campaign.funds_withdrawn.native, FUNDS_ALREADY_WITHDRAWN
        assert campaign.owner.native == Txn.sender, UNAUTHORIZED_OWNER
        assert Global.latest_timestamp >= campaign.end_sale_time.as_uint64(), SALE_NOT_ENDED
        assert campaign.token_supply_deposited.native, TOKEN_SUPPLY_NOT_DEPOSITED
        assert (
            campaign.total_sold.as_uint64() >= campaign.soft_cap.as_uint64()
        ), SOFT_CAP_NOT_REACHED

        raised = treasury_balance(campaign_id.as_uint64(), Bytes(CURRENCY_TREASURY))
        platform_fee = mul_div_floor(
            raised, UInt64(PLATFORM_FEE_PCT), UInt64(PERCENT_BASE)
        )
        owner_amount = raised - platform_fee
        unsold_tokens = checked_sub(campaign.hard_cap.as_uint64(), campaign.total_sold.as_uint64())
        assert (
            treasury_balance(campaign_id.as_uint64(), Bytes(TOKEN_TREASURY)) >= unsold_tokens
        ), INSUFFICIENT_TREASURY

        if owner_amount > 0:
            release_currency(campaign_id.as_uint64(), Txn.sender, owner_amount)
        if platform_fee > 0:
            release_currency(campaign_id.as_uint64(), self.fee_recipient.value, platform_fee)
        if unsold_tokens > 0:
            release_tokens(
                campaign_id.as_uint64(),
                Asset(campaign.token_id.as_uint64()),
                Txn.sender,
                unsold_tokens,
            )

        campaign.funds_withdrawn = arc4.Bool(True)
        save_campaign(campaign_id.as_uint64(), campaign)

    @arc4.abimethod
    def refund(self, campaign_id: arc4.UInt64) -> arc4.UInt64:
        """
        Refund the caller's payment from a closed campaign.

        Args:
            campaign_id: ID of the campaign

        Returns:
            Amount of microAlgos refunded
        """
        campaign = load_campaign(campaign_id.as_uint64())
        assert campaign.sale_closed.native, SALE_NOT_CLOSED

        record = load_participation(campaign_id.as_uint64(), Txn.sender)
        assert record.entitlement_amount.as_uint64() > 0, NOTHING_TO_REFUND
        assert record.participant.native == Txn.sender, UNAUTHORIZED_PARTICIPANT
        assert record.campaign_id.as_uint64() == campaign_id.as_uint64(), INVALID_CAMPAIGN

        refund_amount = record.paid_amount.as_uint64()
        assert (
            treasury_balance(campaign_id.as_uint64(), Bytes(CURRENCY_TREASURY)) >= refund_amount
        ), INSUFFICIENT_TREASURY

        if refund_amount > 0:
            release_currency(campaign_id.as_uint64(), Txn.sender, refund_amount)

        record.entitlement_amount = arc4.UInt64(0)
        record.paid_amount = arc4.UInt64(0)
        save_participation(campaign_id.as_uint64(), Txn.sender, record)

        return arc4.UInt64(refund_amount)

    @arc4.abimethod
    def recover_tokens(self, campaign_id: arc4.UInt64) -> None:
        """
        Return the token supply of a failed sale to the owner.
        Only the owner can recover tokens; refunds stay available.

        Args:
            campaign_id: ID of the campaign
        """
        campaign = load_campaign(campaign_id.as_uint64())

        assert campaign.owner.native == Txn.sender, UNAUTHORIZED_OWNER
        assert campaign.sale_closed.native, SALE_NOT_CLOSED
        assert not campaign.funds_withdrawn.native, FUNDS_ALREADY_WITHDRAWN
        assert campaign.total_sold.as_uint64() < campaign.soft_cap.as_uint64(), SOFT_CAP_REACHED
        assert campaign.token_supply_deposited.native, TOKEN_SUPPLY_NOT_DEPOSITED

        remaining_tokens = treasury_balance(campaign_id.as_uint64(), Bytes(TOKEN_TREASURY))
        if remaining_tokens > 0:
            release_tokens(
                campaign_id.as_uint64(),
                Asset(campaign.token_id.as_uint64()),
                Txn.sender,
                remaining_tokens,
            )

        campaign.funds_withdrawn = arc4.Bool(True)
        save_campaign(campaign_id.as_uint64(), campaign)

    @arc4.abimethod(readonly=True)
    def get_campaign(self, campaign_id: arc4.UInt64) -> Campaign:
        """
        Get campaign details.

        Args:
            campaign_id: ID of the campaign

        Returns:
            The campaign record
        """
        return load_campaign(campaign_id.as_uint64())

    @arc4.abimethod(readonly=True)
    def get_participation(
        self, campaign_id: arc4.UInt64, participant: arc4.Address
    ) -> Participation:
        """
        Get a participant's record in a campaign.

        Args:
            campaign_id: ID of the campaign
            participant: Address of the participant

        Returns:
            The participation record
        """
        return load_participation(campaign_id.as_uint64(), participant.native)

    @arc4.abimethod(readonly=True)
    def get_claimable(
        self, campaign_id: arc4.UInt64, participant: arc4.Address
    ) -> arc4.UInt64:
        """
        Get the tokens a participant could claim right now.

        Args:
            campaign_id: ID of the campaign
            participant: Address of the participant

        Returns:
            Claimable amount, 0 if the address never joined or claim would be rejected
        """
        campaign = load_campaign(campaign_id.as_uint64())
        if not has_participation(campaign_id.as_uint64(), participant.native):
            return arc4.UInt64(0)
        if (
            not campaign.token_supply_deposited.native
            or campaign.sale_closed.native
            or campaign.total_sold.as_uint64() < campaign.soft_cap.as_uint64()
        ):
            return arc4.UInt64(0)

        record = load_participation(campaign_id.as_uint64(), participant.native)
        return arc4.UInt64(
            claimable_amount(
                record.entitlement_amount.as_uint64(),
                record.claimed_amount.as_uint64(),
                campaign.cliff.as_uint64(),
                campaign.vesting_end_time.as_uint64(),
                campaign.unlock_pct.as_uint64(),
                Global.latest_timestamp,
            )
        )

    @arc4.abimethod(readonly=True)
    def get_campaign_state(self, campaign_id: arc4.UInt64) -> arc4.UInt64:
        """
        Get the derived lifecycle state of a campaign.

        Args:
            campaign_id: ID of the campaign

        Returns:
            One of the STATE_* values from lifecycle.py
        """
        campaign = load_campaign(campaign_id.as_uint64())
        return arc4.UInt64(campaign_state(campaign, Global.latest_timestamp))

    @arc4.abimethod(readonly=True)
    def get_treasury_balances(
        self, campaign_id: arc4.UInt64
    ) -> arc4.Tuple[arc4.UInt64, arc4.UInt64]:
        """
        Get the escrowed balances of a campaign.

        Args:
            campaign_id: ID of the campaign

        Returns:
            Tuple of (currency balance in microAlgos, token balance)
        """
        load_campaign(campaign_id.as_uint64())
        return arc4.Tuple(
            (
                arc4.UInt64(
                    treasury_balance(campaign_id.as_uint64(), Bytes(CURRENCY_TREASURY))
                ),
                arc4.UInt64(treasury_balance(campaign_id.as_uint64(), Bytes(TOKEN_TREASURY))),
            )
        )

    @arc4.abimethod(readonly=True)
    def get_join_cost(
        self, campaign_id: arc4.UInt64, number_of_allocations: arc4.UInt64
    ) -> arc4.UInt64:
        """
        Get the payment a join of `number_of_allocations` units requires.

        Args:
            campaign_id: ID of the campaign
            number_of_allocations: Allocation units to buy

        Returns:
            Allocation cost plus participation record reserve, in microAlgos
        """
        campaign = load_campaign(campaign_id.as_uint64())
        cost = checked_mul(
            number_of_allocations.as_uint64(), campaign.price_per_allocation.as_uint64()
        )
        return arc4.UInt64(checked_add(cost, participation_reserve()))

    @arc4.abimethod(readonly=True)
    def get_campaign_count(self) -> arc4.UInt64:
        """
        Get total number of campaigns.

        Returns:
            Campaign count
        """
        return arc4.UInt64(self.campaign_count.value)
