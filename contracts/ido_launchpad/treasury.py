"""
Campaign treasuries and settlement transfers.

The application account holds every campaign's Algos and sale tokens. Each
campaign gets two escrow sub-ledgers, derived from its id and a fixed label,
and only the approval program can move funds out of them:

    trs_{campaign_id}currency: pooled microAlgos paid by participants
    trs_{campaign_id}token:    pooled sale tokens deposited by the owner

A release first debits the sub-ledger, then issues the inner transaction.
"""

from algopy import Account, Asset, Bytes, Global, UInt64, itxn, op, subroutine

from contracts.ido_launchpad.checked_math import checked_add
from contracts.ido_launchpad.errors import INSUFFICIENT_TREASURY
from contracts.ido_launchpad.records import box_min_balance

TREASURY_PREFIX = b"trs_"
CURRENCY_TREASURY = b"currency"
TOKEN_TREASURY = b"token"

# Minimum balance the application keeps per opted-in asset
ASSET_OPT_IN_MIN_BALANCE = 100_000


@subroutine
def treasury_key(campaign_id: UInt64, label: Bytes) -> Bytes:
    return Bytes(TREASURY_PREFIX) + op.itob(campaign_id) + label


@subroutine
def treasury_reserve(label: Bytes) -> UInt64:
    """Minimum balance backing one treasury box."""
    return box_min_balance(treasury_key(UInt64(0), label).length, UInt64(8))


@subroutine
def open_treasury(campaign_id: UInt64, label: Bytes) -> None:
    op.Box.put(treasury_key(campaign_id, label), op.itob(0))


@subroutine
def treasury_balance(campaign_id: UInt64, label: Bytes) -> UInt64:
    data, exists = op.Box.get(treasury_key(campaign_id, label))
    if not exists:
        return UInt64(0)
    return op.btoi(data)


@subroutine
def credit_treasury(campaign_id: UInt64, label: Bytes, amount: UInt64) -> None:
    balance = treasury_balance(campaign_id, label)
    op.Box.put(treasury_key(campaign_id, label), op.itob(checked_add(balance, amount)))


@subroutine
def debit_treasury(campaign_id: UInt64, label: Bytes, amount: UInt64) -> None:
    balance = treasury_balance(campaign_id, label)
    assert balance >= amount, INSUFFICIENT_TREASURY
    op.Box.put(treasury_key(campaign_id, label), op.itob(balance - amount))


@subroutine
def release_currency(campaign_id: UInt64, receiver: Account, amount: UInt64) -> None:
    """Pay microAlgos out of the campaign's currency treasury."""
    debit_treasury(campaign_id, Bytes(CURRENCY_TREASURY), amount)
    itxn.Payment(
        receiver=receiver,
        amount=amount,
        fee=Global.min_txn_fee,
    ).submit()


@subroutine
def release_tokens(
    campaign_id: UInt64, token: Asset, receiver: Account, amount: UInt64
) -> None:
    """Transfer sale tokens out of the campaign's token treasury."""
    debit_treasury(campaign_id, Bytes(TOKEN_TREASURY), amount)
    itxn.AssetTransfer(
        xfer_asset=token,
        asset_receiver=receiver,
        asset_amount=amount,
        fee=Global.min_txn_fee,
    ).submit()


@subroutine
def opt_in_to_token(token: Asset) -> None:
    itxn.AssetTransfer(
        xfer_asset=token,
        asset_receiver=Global.current_application_address,
        asset_amount=0,
        fee=Global.min_txn_fee,
    ).submit()
