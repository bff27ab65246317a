"""
Box records for the IDO Launchpad.

Boxes:
    - camp_{campaign_id}: Campaign aggregate
    - part_{campaign_id}{participant}: Participation record, one per participant
    - trs_{campaign_id}{label}: treasury balance (see treasury.py)

Records are fixed-size ARC-4 structs, so a box is always rewritten in place.
"""

from algopy import Account, Bytes, UInt64, arc4, op, subroutine

from contracts.ido_launchpad.errors import CAMPAIGN_NOT_FOUND, USER_NOT_JOINED

CAMPAIGN_PREFIX = b"camp_"
PARTICIPATION_PREFIX = b"part_"

# AVM box minimum balance: flat fee plus a per-byte fee over key and value
BOX_FLAT_MIN_BALANCE = 2_500
BOX_BYTE_MIN_BALANCE = 400

# part_ (5) + campaign id (8) + address (32)
PARTICIPATION_KEY_SIZE = 45
# campaign id (8) + address (32) + four uint64 fields (32)
PARTICIPATION_RECORD_SIZE = 72


class Campaign(arc4.Struct):
    """One token sale: identity, schedule, economics, totals and flags."""

    owner: arc4.Address
    token_id: arc4.UInt64
    start_sale_time: arc4.UInt64
    end_sale_time: arc4.UInt64
    cliff: arc4.UInt64
    vesting_end_time: arc4.UInt64
    price_per_allocation: arc4.UInt64
    allocation_unit_size: arc4.UInt64
    soft_cap: arc4.UInt64
    hard_cap: arc4.UInt64
    unlock_pct: arc4.UInt64
    allocations_per_participant: arc4.UInt64
    total_sold: arc4.UInt64
    total_participants: arc4.UInt64
    total_claimed: arc4.UInt64
    token_supply_deposited: arc4.Bool
    sale_closed: arc4.Bool
    funds_withdrawn: arc4.Bool
    cancelled: arc4.Bool


class Participation(arc4.Struct):
    """A participant's entitlement, payment and claim progress in one campaign."""

    campaign_id: arc4.UInt64
    participant: arc4.Address
    entitlement_amount: arc4.UInt64
    paid_amount: arc4.UInt64
    claimed_amount: arc4.UInt64
    joined_at: arc4.UInt64


@subroutine
def box_min_balance(key_size: UInt64, value_size: UInt64) -> UInt64:
    return UInt64(BOX_FLAT_MIN_BALANCE) + UInt64(BOX_BYTE_MIN_BALANCE) * (
        key_size + value_size
    )


@subroutine
def participation_reserve() -> UInt64:
    """Minimum balance backing one Participation box."""
    return box_min_balance(
        UInt64(PARTICIPATION_KEY_SIZE), UInt64(PARTICIPATION_RECORD_SIZE)
    )


@subroutine
def campaign_key(campaign_id: UInt64) -> Bytes:
    return Bytes(CAMPAIGN_PREFIX) + op.itob(campaign_id)


@subroutine
def participation_key(campaign_id: UInt64, participant: Account) -> Bytes:
    return Bytes(PARTICIPATION_PREFIX) + op.itob(campaign_id) + participant.bytes


@subroutine
def load_campaign(campaign_id: UInt64) -> Campaign:
    data, exists = op.Box.get(campaign_key(campaign_id))
    assert exists, CAMPAIGN_NOT_FOUND
    return Campaign.from_bytes(data)


@subroutine
def save_campaign(campaign_id: UInt64, campaign: Campaign) -> None:
    op.Box.put(campaign_key(campaign_id), campaign.bytes)


@subroutine
def has_participation(campaign_id: UInt64, participant: Account) -> bool:
    _data, exists = op.Box.get(participation_key(campaign_id, participant))
    return exists


@subroutine
def load_participation(campaign_id: UInt64, participant: Account) -> Participation:
    data, exists = op.Box.get(participation_key(campaign_id, participant))
    assert exists, USER_NOT_JOINED
    return Participation.from_bytes(data)


@subroutine
def save_participation(
    campaign_id: UInt64, participant: Account, record: Participation
) -> None:
    op.Box.put(participation_key(campaign_id, participant), record.bytes)
