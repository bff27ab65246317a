"""
Deployment Script for the IDO Launchpad

Deploys the compiled launchpad contract to the Algorand network.
Run with: python scripts/deploy.py

Build the contract first:
    algokit compile py contracts/ido_launchpad/contract.py --out-dir artifacts

Environment variables:
- ALGOD_SERVER: Algorand node URL
- ALGOD_TOKEN: Algorand node token
- DEPLOYER_MNEMONIC: 25-word mnemonic for deployer account
- FEE_RECIPIENT: Address receiving the platform fee (defaults to deployer)
- NETWORK: localnet | testnet | mainnet
- ARTIFACTS_DIR: Directory holding the compiled TEAL
"""

import base64
import json
import math
import os
from pathlib import Path

from algosdk import transaction
from algosdk.atomic_transaction_composer import (
    AccountTransactionSigner,
    AtomicTransactionComposer,
)
from algosdk.logic import get_application_address
from algosdk.v2client import algod
from dotenv import load_dotenv

from contracts.ido_launchpad.client import METHODS, get_account, get_algod_client

# Load environment variables
load_dotenv()

CONTRACT_NAME = "IdoLaunchpad"
# campaign_count / admin + fee_recipient
GLOBAL_INTS = 1
GLOBAL_BYTES = 2
# Base minimum balance of the application account
APP_ACCOUNT_FUNDING = 100_000
PROGRAM_PAGE_SIZE = 2048


def compile_contract(client: algod.AlgodClient, source_code: str) -> bytes:
    """Compile TEAL source code."""
    compile_response = client.compile(source_code)
    return base64.b64decode(compile_response["result"])


def load_programs(client: algod.AlgodClient, artifacts_dir: Path) -> tuple[bytes, bytes]:
    """Compile the approval and clear programs produced by puyapy."""
    approval_path = artifacts_dir / f"{CONTRACT_NAME}.approval.teal"
    clear_path = artifacts_dir / f"{CONTRACT_NAME}.clear.teal"

    if not approval_path.exists() or not clear_path.exists():
        raise FileNotFoundError(
            f"Compiled TEAL not found in {artifacts_dir}. Build the contract first."
        )

    approval_program = compile_contract(client, approval_path.read_text())
    clear_program = compile_contract(client, clear_path.read_text())

    return approval_program, clear_program


def deploy_contract(
    client: algod.AlgodClient,
    private_key: str,
    sender: str,
    approval_program: bytes,
    clear_program: bytes,
    fee_recipient: str,
) -> int:
    """Create the launchpad application and return the app ID."""
    signer = AccountTransactionSigner(private_key)
    program_size = len(approval_program) + len(clear_program)
    extra_pages = max(0, math.ceil(program_size / PROGRAM_PAGE_SIZE) - 1)

    atc = AtomicTransactionComposer()
    atc.add_method_call(
        app_id=0,
        method=METHODS["create"],
        sender=sender,
        sp=client.suggested_params(),
        signer=signer,
        method_args=[fee_recipient],
        on_complete=transaction.OnComplete.NoOpOC,
        approval_program=approval_program,
        clear_program=clear_program,
        global_schema=transaction.StateSchema(GLOBAL_INTS, GLOBAL_BYTES),
        local_schema=transaction.StateSchema(0, 0),
        extra_pages=extra_pages,
    )

    result = atc.execute(client, 4)
    tx_info = client.pending_transaction_info(result.tx_ids[0])
    return tx_info["application-index"]


def fund_application(
    client: algod.AlgodClient, private_key: str, sender: str, app_id: int
) -> str:
    """Cover the application account's base minimum balance."""
    txn = transaction.PaymentTxn(
        sender=sender,
        sp=client.suggested_params(),
        receiver=get_application_address(app_id),
        amt=APP_ACCOUNT_FUNDING,
    )

    signed_txn = txn.sign(private_key)
    tx_id = client.send_transaction(signed_txn)
    transaction.wait_for_confirmation(client, tx_id, 4)

    return tx_id


def main():
    """Main deployment function."""
    print("=" * 60)
    print("IDO Launchpad - Smart Contract Deployment")
    print("=" * 60)

    network = os.getenv("NETWORK", "localnet")
    print(f"\nNetwork: {network}")

    client = get_algod_client()

    private_key, deployer = get_account("DEPLOYER_MNEMONIC")
    print(f"Deployer: {deployer}")

    fee_recipient = os.getenv("FEE_RECIPIENT") or deployer
    print(f"Fee recipient: {fee_recipient}")

    account_info = client.account_info(deployer)
    balance = account_info["amount"] / 1_000_000
    print(f"Balance: {balance:.6f} ALGO")
    if balance < 1:
        print("\nWarning: Low balance. Fund your account before deploying.")
        if network == "localnet":
            print("Run: algokit goal clerk send -a 10000000 -f <dispenser> -t " + deployer)

    print("\n" + "-" * 60)
    print("Contract Deployment")
    print("-" * 60)

    artifacts_dir = Path(os.getenv("ARTIFACTS_DIR", "contracts/ido_launchpad/artifacts"))
    approval_program, clear_program = load_programs(client, artifacts_dir)
    print(f"\n📄 {CONTRACT_NAME}")
    print(f"   Approval: {len(approval_program)} bytes")
    print(f"   Clear: {len(clear_program)} bytes")
    print(f"   Global: {GLOBAL_INTS} ints, {GLOBAL_BYTES} bytes")

    app_id = deploy_contract(
        client=client,
        private_key=private_key,
        sender=deployer,
        approval_program=approval_program,
        clear_program=clear_program,
        fee_recipient=fee_recipient,
    )
    print(f"   ✅ Deployed: App ID {app_id}")

    fund_application(client, private_key, deployer, app_id)
    print(f"   ✅ Funded: {get_application_address(app_id)}")

    output_path = Path("deployment.json")
    deployment_info = {
        "network": network,
        "deployer": deployer,
        "fee_recipient": fee_recipient,
        "contracts": {CONTRACT_NAME: app_id},
    }

    with open(output_path, "w") as f:
        json.dump(deployment_info, f, indent=2)

    print(f"\nDeployment info saved to: {output_path}")
    print(f"Set LAUNCHPAD_APP_ID={app_id} in your .env to use scripts/launchpad.py")


if __name__ == "__main__":
    main()
