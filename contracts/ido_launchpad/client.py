"""
Off-chain helpers for the IDO Launchpad.

Builds the grouped application calls the contract expects (payments and
token transfers travel next to the method call), reads campaign boxes
straight from algod and decodes them into plain dicts.

Every compose_* function adds to an AtomicTransactionComposer without
submitting, so callers can sign with any signer and inspect the group
before sending it.
"""

import base64
import os
from enum import IntEnum
from typing import Optional

from algosdk import abi, account, encoding, mnemonic, transaction
from algosdk.logic import get_application_address
from algosdk.atomic_transaction_composer import (
    AtomicTransactionComposer,
    TransactionSigner,
    TransactionWithSigner,
)
from algosdk.v2client import algod

CAMPAIGN_PREFIX = b"camp_"
PARTICIPATION_PREFIX = b"part_"
TREASURY_PREFIX = b"trs_"
CURRENCY_TREASURY = b"currency"
TOKEN_TREASURY = b"token"

BOX_FLAT_MIN_BALANCE = 2_500
BOX_BYTE_MIN_BALANCE = 400
ASSET_OPT_IN_MIN_BALANCE = 100_000
CAMPAIGN_RECORD_SIZE = 145
PARTICIPATION_KEY_SIZE = 45
PARTICIPATION_RECORD_SIZE = 72

CAMPAIGN_FIELDS = [
    "owner",
    "token_id",
    "start_sale_time",
    "end_sale_time",
    "cliff",
    "vesting_end_time",
    "price_per_allocation",
    "allocation_unit_size",
    "soft_cap",
    "hard_cap",
    "unlock_pct",
    "allocations_per_participant",
    "total_sold",
    "total_participants",
    "total_claimed",
    "token_supply_deposited",
    "sale_closed",
    "funds_withdrawn",
    "cancelled",
]
PARTICIPATION_FIELDS = [
    "campaign_id",
    "participant",
    "entitlement_amount",
    "paid_amount",
    "claimed_amount",
    "joined_at",
]

CAMPAIGN_STRUCT = "(address," + ",".join(["uint64"] * 14) + ",bool,bool,bool,bool)"
PARTICIPATION_STRUCT = "(uint64,address,uint64,uint64,uint64,uint64)"
CAMPAIGN_ARGS = ",".join(["uint64"] * 10)

CAMPAIGN_TYPE = abi.ABIType.from_string(CAMPAIGN_STRUCT)
PARTICIPATION_TYPE = abi.ABIType.from_string(PARTICIPATION_STRUCT)

METHODS = {
    name: abi.Method.from_signature(signature)
    for name, signature in {
        "create": "create(address)void",
        "set_fee_recipient": "set_fee_recipient(address)void",
        "create_campaign": f"create_campaign(pay,asset,{CAMPAIGN_ARGS})uint64",
        "deposit_tokens": "deposit_tokens(uint64,axfer)void",
        "join": "join(uint64,uint64,pay)void",
        "claim": "claim(uint64)uint64",
        "close_campaign": "close_campaign(uint64)void",
        "close_campaign_if_soft_cap_not_reached": (
            "close_campaign_if_soft_cap_not_reached(uint64)void"
        ),
        "withdraw_funds": "withdraw_funds(uint64)void",
        "refund": "refund(uint64)uint64",
        "recover_tokens": "recover_tokens(uint64)void",
        "get_campaign": f"get_campaign(uint64){CAMPAIGN_STRUCT}",
        "get_participation": f"get_participation(uint64,address){PARTICIPATION_STRUCT}",
        "get_claimable": "get_claimable(uint64,address)uint64",
        "get_campaign_state": "get_campaign_state(uint64)uint64",
        "get_treasury_balances": "get_treasury_balances(uint64)(uint64,uint64)",
        "get_join_cost": "get_join_cost(uint64,uint64)uint64",
        "get_campaign_count": "get_campaign_count()uint64",
    }.items()
}


class CampaignState(IntEnum):
    """Derived campaign state, as returned by get_campaign_state."""

    PRE_SALE = 0
    OPEN = 1
    ENDED_UNRESOLVED = 2
    CANCELLED = 3
    CLOSED_AWAITING_SETTLEMENT = 4
    SETTLED = 5


def get_algod_client() -> algod.AlgodClient:
    """Create Algorand client from environment variables."""
    server = os.getenv("ALGOD_SERVER", "http://localhost:4001")
    token = os.getenv("ALGOD_TOKEN", "a" * 64)

    return algod.AlgodClient(token, server)


def get_account(env_var: str = "DEPLOYER_MNEMONIC") -> tuple[str, str]:
    """
    Load an account from a 25-word mnemonic stored in an environment variable.

    Returns:
        Tuple of (private_key, address)
    """
    mnemonic_phrase = os.getenv(env_var)
    if not mnemonic_phrase:
        raise ValueError(f"{env_var} is not set")

    private_key = mnemonic.to_private_key(mnemonic_phrase)
    address = account.address_from_private_key(private_key)

    return private_key, address


def campaign_box_name(campaign_id: int) -> bytes:
    return CAMPAIGN_PREFIX + campaign_id.to_bytes(8, "big")


def participation_box_name(campaign_id: int, participant: str) -> bytes:
    return (
        PARTICIPATION_PREFIX
        + campaign_id.to_bytes(8, "big")
        + encoding.decode_address(participant)
    )


def treasury_box_name(campaign_id: int, label: bytes) -> bytes:
    return TREASURY_PREFIX + campaign_id.to_bytes(8, "big") + label


def box_min_balance(key_size: int, value_size: int) -> int:
    """Minimum balance in microAlgos that one box locks in the application."""
    return BOX_FLAT_MIN_BALANCE + BOX_BYTE_MIN_BALANCE * (key_size + value_size)


def participation_reserve() -> int:
    """Record reserve added on top of the allocation cost when joining."""
    return box_min_balance(PARTICIPATION_KEY_SIZE, PARTICIPATION_RECORD_SIZE)


def campaign_storage_cost() -> int:
    """Minimum payment accompanying create_campaign."""
    return (
        box_min_balance(len(campaign_box_name(0)), CAMPAIGN_RECORD_SIZE)
        + box_min_balance(len(treasury_box_name(0, CURRENCY_TREASURY)), 8)
        + box_min_balance(len(treasury_box_name(0, TOKEN_TREASURY)), 8)
        + ASSET_OPT_IN_MIN_BALANCE
    )


def join_cost(campaign: dict, number_of_allocations: int) -> int:
    """Exact payment a join requires: allocation cost plus record reserve."""
    return number_of_allocations * campaign["price_per_allocation"] + participation_reserve()


def decode_campaign(data: bytes) -> dict:
    return dict(zip(CAMPAIGN_FIELDS, CAMPAIGN_TYPE.decode(data)))


def decode_participation(data: bytes) -> dict:
    return dict(zip(PARTICIPATION_FIELDS, PARTICIPATION_TYPE.decode(data)))


def campaign_state(campaign: dict, now: int) -> CampaignState:
    """Derive a campaign's state the same way the contract does."""
    if campaign["cancelled"]:
        return CampaignState.CANCELLED
    if campaign["funds_withdrawn"]:
        return CampaignState.SETTLED
    if campaign["sale_closed"]:
        return CampaignState.CLOSED_AWAITING_SETTLEMENT
    if now < campaign["start_sale_time"]:
        return CampaignState.PRE_SALE
    if now <= campaign["end_sale_time"]:
        return CampaignState.OPEN
    return CampaignState.ENDED_UNRESOLVED


def read_global_state(algod_client: algod.AlgodClient, app_id: int) -> dict:
    """Read the launchpad's global state, decoding account values to addresses."""
    app_info = algod_client.application_info(app_id)

    state = {}
    for item in app_info["params"].get("global-state", []):
        key = base64.b64decode(item["key"]).decode("utf-8")
        value = item["value"]
        if value["type"] == 1:  # bytes
            state[key] = encoding.encode_address(base64.b64decode(value["bytes"]))
        else:  # uint
            state[key] = value["uint"]

    return state


def read_box(algod_client: algod.AlgodClient, app_id: int, name: bytes) -> bytes:
    response = algod_client.application_box_by_name(app_id, name)
    return base64.b64decode(response["value"])


def read_campaign(algod_client: algod.AlgodClient, app_id: int, campaign_id: int) -> dict:
    """Fetch and decode a campaign box."""
    return decode_campaign(read_box(algod_client, app_id, campaign_box_name(campaign_id)))


def read_participation(
    algod_client: algod.AlgodClient, app_id: int, campaign_id: int, participant: str
) -> dict:
    """Fetch and decode a participation box."""
    return decode_participation(
        read_box(algod_client, app_id, participation_box_name(campaign_id, participant))
    )


def is_opted_in(algod_client: algod.AlgodClient, address: str, asset_id: int) -> bool:
    """Whether the account holds an opt-in for the asset."""
    assets = algod_client.account_info(address).get("assets", [])
    return any(holding["asset-id"] == asset_id for holding in assets)


def read_treasury_balances(
    algod_client: algod.AlgodClient, app_id: int, campaign_id: int
) -> tuple[int, int]:
    """Fetch the (currency, token) treasury balances of a campaign."""
    currency = read_box(algod_client, app_id, treasury_box_name(campaign_id, CURRENCY_TREASURY))
    token = read_box(algod_client, app_id, treasury_box_name(campaign_id, TOKEN_TREASURY))
    return int.from_bytes(currency, "big"), int.from_bytes(token, "big")


def _call_params(
    algod_client: algod.AlgodClient, inner_transactions: int = 0
) -> transaction.SuggestedParams:
    # The app call pays for its own inner transactions
    params = algod_client.suggested_params()
    params.flat_fee = True
    params.fee = params.min_fee * (1 + inner_transactions)
    return params


def _add_call(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    sender: str,
    signer: TransactionSigner,
    method: str,
    method_args: list,
    boxes: list[bytes],
    inner_transactions: int = 0,
    foreign_assets: Optional[list[int]] = None,
    accounts: Optional[list[str]] = None,
) -> AtomicTransactionComposer:
    atc.add_method_call(
        app_id=app_id,
        method=METHODS[method],
        sender=sender,
        sp=_call_params(algod_client, inner_transactions),
        signer=signer,
        method_args=method_args,
        boxes=[(0, name) for name in boxes],
        foreign_assets=foreign_assets,
        accounts=accounts,
    )
    return atc


def compose_create_campaign(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
    token_id: int,
    start_sale_time: int,
    end_sale_time: int,
    cliff: int,
    vesting_end_time: int,
    price_per_allocation: int,
    allocation_unit_size: int,
    soft_cap: int,
    hard_cap: int,
    unlock_pct: int,
    allocations_per_participant: int,
) -> AtomicTransactionComposer:
    """
    Add a create_campaign call and its storage payment to the group.

    Args:
        campaign_id: Expected ID of the new campaign (the current campaign count)
    """
    payment = transaction.PaymentTxn(
        sender=sender,
        sp=algod_client.suggested_params(),
        receiver=get_application_address(app_id),
        amt=campaign_storage_cost(),
    )
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "create_campaign",
        [
            TransactionWithSigner(payment, signer),
            token_id,
            start_sale_time,
            end_sale_time,
            cliff,
            vesting_end_time,
            price_per_allocation,
            allocation_unit_size,
            soft_cap,
            hard_cap,
            unlock_pct,
            allocations_per_participant,
        ],
        [
            campaign_box_name(campaign_id),
            treasury_box_name(campaign_id, CURRENCY_TREASURY),
            treasury_box_name(campaign_id, TOKEN_TREASURY),
        ],
        inner_transactions=1,
    )


def compose_deposit_tokens(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
    token_id: int,
    amount: int,
) -> AtomicTransactionComposer:
    """Add a deposit_tokens call and its token transfer to the group."""
    deposit = transaction.AssetTransferTxn(
        sender=sender,
        sp=algod_client.suggested_params(),
        receiver=get_application_address(app_id),
        amt=amount,
        index=token_id,
    )
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "deposit_tokens",
        [campaign_id, TransactionWithSigner(deposit, signer)],
        [campaign_box_name(campaign_id), treasury_box_name(campaign_id, TOKEN_TREASURY)],
    )


def compose_join(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
    number_of_allocations: int,
    amount: int,
) -> AtomicTransactionComposer:
    """
    Add a join call and its payment to the group.

    Args:
        amount: Payment in microAlgos, see join_cost()
    """
    payment = transaction.PaymentTxn(
        sender=sender,
        sp=algod_client.suggested_params(),
        receiver=get_application_address(app_id),
        amt=amount,
    )
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "join",
        [campaign_id, number_of_allocations, TransactionWithSigner(payment, signer)],
        [
            campaign_box_name(campaign_id),
            participation_box_name(campaign_id, sender),
            treasury_box_name(campaign_id, CURRENCY_TREASURY),
        ],
    )


def compose_claim(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
    token_id: int,
    opt_in: bool = False,
) -> AtomicTransactionComposer:
    """
    Add a claim call to the group.

    The token transfer fails unless the sender has opted into the token. With
    opt_in set, a 0-amount self transfer of the token goes ahead of the call.
    """
    if opt_in:
        opt_in_txn = transaction.AssetTransferTxn(
            sender=sender,
            sp=algod_client.suggested_params(),
            receiver=sender,
            amt=0,
            index=token_id,
        )
        atc.add_transaction(TransactionWithSigner(opt_in_txn, signer))
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "claim",
        [campaign_id],
        [
            campaign_box_name(campaign_id),
            participation_box_name(campaign_id, sender),
            treasury_box_name(campaign_id, TOKEN_TREASURY),
        ],
        inner_transactions=1,
        foreign_assets=[token_id],
    )


def compose_close_campaign(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
    token_id: int,
) -> AtomicTransactionComposer:
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "close_campaign",
        [campaign_id],
        [campaign_box_name(campaign_id), treasury_box_name(campaign_id, TOKEN_TREASURY)],
        inner_transactions=1,
        foreign_assets=[token_id],
    )


def compose_close_if_soft_cap_not_reached(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
) -> AtomicTransactionComposer:
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "close_campaign_if_soft_cap_not_reached",
        [campaign_id],
        [campaign_box_name(campaign_id)],
    )


def compose_withdraw_funds(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
    token_id: int,
    fee_recipient: str,
) -> AtomicTransactionComposer:
    """
    Add a withdraw_funds call to the group.

    Covers fees for up to three inner transactions: owner payout, platform
    fee and unsold tokens.
    """
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "withdraw_funds",
        [campaign_id],
        [
            campaign_box_name(campaign_id),
            treasury_box_name(campaign_id, CURRENCY_TREASURY),
            treasury_box_name(campaign_id, TOKEN_TREASURY),
        ],
        inner_transactions=3,
        foreign_assets=[token_id],
        accounts=[fee_recipient],
    )


def compose_refund(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
) -> AtomicTransactionComposer:
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "refund",
        [campaign_id],
        [
            campaign_box_name(campaign_id),
            participation_box_name(campaign_id, sender),
            treasury_box_name(campaign_id, CURRENCY_TREASURY),
        ],
        inner_transactions=1,
    )


def compose_recover_tokens(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    campaign_id: int,
    sender: str,
    signer: TransactionSigner,
    token_id: int,
) -> AtomicTransactionComposer:
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "recover_tokens",
        [campaign_id],
        [campaign_box_name(campaign_id), treasury_box_name(campaign_id, TOKEN_TREASURY)],
        inner_transactions=1,
        foreign_assets=[token_id],
    )


def compose_set_fee_recipient(
    atc: AtomicTransactionComposer,
    algod_client: algod.AlgodClient,
    app_id: int,
    sender: str,
    signer: TransactionSigner,
    fee_recipient: str,
) -> AtomicTransactionComposer:
    return _add_call(
        atc,
        algod_client,
        app_id,
        sender,
        signer,
        "set_fee_recipient",
        [fee_recipient],
        [],
    )
