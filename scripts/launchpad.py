"""
IDO Launchpad Command Line

Drive a deployed launchpad: create campaigns, join sales, claim vested
tokens and settle campaigns.

Usage:
    python scripts/launchpad.py status --campaign 0
    python scripts/launchpad.py join --campaign 0 --allocations 2 --account-env BUYER_MNEMONIC
    python scripts/launchpad.py claim --campaign 0 --account-env BUYER_MNEMONIC

Environment variables:
- ALGOD_SERVER / ALGOD_TOKEN: Algorand node
- LAUNCHPAD_APP_ID: Deployed launchpad application ID
- DEPLOYER_MNEMONIC (or the variable named by --account-env): signing account
"""

import argparse
import os
import sys
import time

from algosdk.atomic_transaction_composer import (
    AccountTransactionSigner,
    AtomicTransactionComposer,
)
from algosdk.error import AlgodHTTPError
from dotenv import load_dotenv

from contracts.ido_launchpad import client as launchpad

load_dotenv()


def print_campaign(campaign_id: int, campaign: dict, balances: tuple[int, int]):
    state = launchpad.campaign_state(campaign, int(time.time()))
    print(f"\nCampaign #{campaign_id} [{state.name}]")
    print(f"   Owner: {campaign['owner']}")
    print(f"   Token: {campaign['token_id']}")
    print(f"   Sale: {campaign['start_sale_time']} -> {campaign['end_sale_time']}")
    print(f"   Vesting: cliff {campaign['cliff']} ({campaign['unlock_pct']}%), "
          f"end {campaign['vesting_end_time']}")
    print(f"   Price: {campaign['price_per_allocation']} microALGO "
          f"per {campaign['allocation_unit_size']} tokens")
    print(f"   Caps: soft {campaign['soft_cap']}, hard {campaign['hard_cap']}")
    print(f"   Sold: {campaign['total_sold']} to {campaign['total_participants']} participants")
    print(f"   Claimed: {campaign['total_claimed']}")
    print(f"   Treasury: {balances[0] / 1_000_000:.6f} ALGO, {balances[1]} tokens")
    print(f"   Flags: deposited={campaign['token_supply_deposited']} "
          f"closed={campaign['sale_closed']} withdrawn={campaign['funds_withdrawn']} "
          f"cancelled={campaign['cancelled']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interact with the IDO Launchpad")
    parser.add_argument(
        "--account-env",
        default="DEPLOYER_MNEMONIC",
        help="Environment variable holding the signing account mnemonic",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-campaign", help="Create a sale campaign")
    for name in (
        "token",
        "start",
        "end",
        "cliff",
        "vesting-end",
        "price",
        "allocation-size",
        "soft-cap",
        "hard-cap",
        "unlock-pct",
        "max-allocations",
    ):
        create.add_argument(f"--{name}", type=int, required=True)

    for name, help_text in (
        ("deposit", "Deposit the hard cap of tokens"),
        ("claim", "Claim vested tokens"),
        ("close", "Cancel a campaign before its sale ends"),
        ("close-failed", "Close an ended campaign that missed its soft cap"),
        ("withdraw", "Withdraw raised funds of a successful campaign"),
        ("refund", "Refund your payment from a closed campaign"),
        ("recover", "Recover the tokens of a failed campaign"),
        ("status", "Show campaign details"),
    ):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("--campaign", type=int, required=True)

    join = subparsers.add_parser("join", help="Buy allocation units")
    join.add_argument("--campaign", type=int, required=True)
    join.add_argument("--allocations", type=int, required=True)

    fee = subparsers.add_parser("set-fee-recipient", help="Change the platform fee recipient")
    fee.add_argument("--address", required=True)

    return parser


def run(args: argparse.Namespace):
    algod_client = launchpad.get_algod_client()
    app_id = int(os.getenv("LAUNCHPAD_APP_ID", "0"))
    if not app_id:
        print("Error: Set LAUNCHPAD_APP_ID to the deployed application ID")
        sys.exit(1)

    if args.command == "status":
        campaign = launchpad.read_campaign(algod_client, app_id, args.campaign)
        balances = launchpad.read_treasury_balances(algod_client, app_id, args.campaign)
        print_campaign(args.campaign, campaign, balances)
        return

    private_key, sender = launchpad.get_account(args.account_env)
    signer = AccountTransactionSigner(private_key)
    print(f"Account: {sender}")

    atc = AtomicTransactionComposer()
    common = dict(atc=atc, algod_client=algod_client, app_id=app_id, sender=sender, signer=signer)

    if args.command == "create-campaign":
        campaign_id = launchpad.read_global_state(algod_client, app_id)["campaign_count"]
        launchpad.compose_create_campaign(
            **common,
            campaign_id=campaign_id,
            token_id=args.token,
            start_sale_time=args.start,
            end_sale_time=args.end,
            cliff=args.cliff,
            vesting_end_time=args.vesting_end,
            price_per_allocation=args.price,
            allocation_unit_size=args.allocation_size,
            soft_cap=args.soft_cap,
            hard_cap=args.hard_cap,
            unlock_pct=args.unlock_pct,
            allocations_per_participant=args.max_allocations,
        )
    elif args.command == "set-fee-recipient":
        launchpad.compose_set_fee_recipient(**common, fee_recipient=args.address)
    else:
        campaign = launchpad.read_campaign(algod_client, app_id, args.campaign)
        token_id = campaign["token_id"]

        if args.command == "deposit":
            launchpad.compose_deposit_tokens(
                **common, campaign_id=args.campaign, token_id=token_id, amount=campaign["hard_cap"]
            )
        elif args.command == "join":
            launchpad.compose_join(
                **common,
                campaign_id=args.campaign,
                number_of_allocations=args.allocations,
                amount=launchpad.join_cost(campaign, args.allocations),
            )
        elif args.command == "claim":
            opt_in = not launchpad.is_opted_in(algod_client, sender, token_id)
            if opt_in:
                print(f"Opting {sender} into token {token_id}")
            launchpad.compose_claim(
                **common, campaign_id=args.campaign, token_id=token_id, opt_in=opt_in
            )
        elif args.command == "close":
            launchpad.compose_close_campaign(**common, campaign_id=args.campaign, token_id=token_id)
        elif args.command == "close-failed":
            launchpad.compose_close_if_soft_cap_not_reached(**common, campaign_id=args.campaign)
        elif args.command == "withdraw":
            fee_recipient = launchpad.read_global_state(algod_client, app_id)["fee_recipient"]
            launchpad.compose_withdraw_funds(
                **common, campaign_id=args.campaign, token_id=token_id, fee_recipient=fee_recipient
            )
        elif args.command == "refund":
            launchpad.compose_refund(**common, campaign_id=args.campaign)
        elif args.command == "recover":
            launchpad.compose_recover_tokens(**common, campaign_id=args.campaign, token_id=token_id)

    result = atc.execute(algod_client, 4)
    print(f"✅ {args.command} confirmed in round {result.confirmed_round}")
    print(f"   Transaction ID: {result.tx_ids[-1]}")
    for abi_result in result.abi_results:
        if abi_result.return_value is not None:
            print(f"   Returned: {abi_result.return_value}")


def main():
    args = build_parser().parse_args()

    print("=" * 60)
    print("IDO Launchpad")
    print("=" * 60)

    try:
        run(args)
    except AlgodHTTPError as e:
        print(f"❌ Rejected: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
