"""
Test harness for the IDO Launchpad.

All timestamps are fixed offsets from NOW so every test sees the same
schedule:

    NOW < START < END < CLIFF < VESTING_END
"""

from algopy import Account, Asset, UInt64, arc4
from algopy_testing import AlgopyTestContext

from contracts.ido_launchpad.contract import IdoLaunchpad
from contracts.ido_launchpad.records import Campaign

NOW = 1_700_000_000
START = NOW + 100
END = NOW + 1_000
CLIFF = NOW + 2_000
VESTING_END = NOW + 3_000

PRICE = 1_000_000  # microAlgos per allocation unit
ALLOCATION = 500  # tokens per allocation unit
SOFT_CAP = 5_000
HARD_CAP = 10_000
UNLOCK_PCT = 20
MAX_ALLOCATIONS = 20

# part_ key (45 bytes) + record (72 bytes) box minimum balance
PARTICIPATION_RESERVE = 49_300
CAMPAIGN_FUNDING = 1_000_000

CAMPAIGN_PARAMS = (
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
)
DEFAULT_CAMPAIGN = {
    "start_sale_time": START,
    "end_sale_time": END,
    "cliff": CLIFF,
    "vesting_end_time": VESTING_END,
    "price_per_allocation": PRICE,
    "allocation_unit_size": ALLOCATION,
    "soft_cap": SOFT_CAP,
    "hard_cap": HARD_CAP,
    "unlock_pct": UNLOCK_PCT,
    "allocations_per_participant": MAX_ALLOCATIONS,
}


class LaunchpadHarness:
    """A created launchpad plus the accounts and token most tests need."""

    def __init__(self, context: AlgopyTestContext):
        self.context = context
        self.set_time(NOW)

        self.admin = context.default_sender
        self.fee_recipient = context.any.account()
        self.owner = context.any.account()
        self.token = context.any.asset(total=UInt64(10**12), decimals=UInt64(0))

        self.contract = IdoLaunchpad()
        self.contract.create(arc4.Address(self.fee_recipient))
        self.app_address = context.ledger.get_app(self.contract).address

    def set_time(self, timestamp: int):
        self.context.ledger.patch_global_fields(latest_timestamp=UInt64(timestamp))

    def as_sender(self, account: Account):
        return self.context.txn.create_group(active_txn_overrides={"sender": account})

    def create_campaign(self, funding: int = CAMPAIGN_FUNDING, **overrides) -> int:
        params = {**DEFAULT_CAMPAIGN, **overrides}
        payment = self.context.any.txn.payment(
            sender=self.owner,
            receiver=self.app_address,
            amount=UInt64(funding),
        )
        with self.as_sender(self.owner):
            campaign_id = self.contract.create_campaign(
                payment,
                self.token,
                *[arc4.UInt64(params[name]) for name in CAMPAIGN_PARAMS],
            )
        return campaign_id.as_uint64()

    def deposit(
        self,
        campaign_id: int,
        amount: int = HARD_CAP,
        sender: Account | None = None,
        token: Asset | None = None,
    ):
        sender = sender or self.owner
        deposit = self.context.any.txn.asset_transfer(
            sender=sender,
            asset_receiver=self.app_address,
            xfer_asset=token or self.token,
            asset_amount=UInt64(amount),
        )
        with self.as_sender(sender):
            self.contract.deposit_tokens(arc4.UInt64(campaign_id), deposit)

    def join(
        self,
        campaign_id: int,
        participant: Account,
        units: int,
        amount: int | None = None,
        price: int = PRICE,
    ):
        if amount is None:
            amount = units * price + PARTICIPATION_RESERVE
        payment = self.context.any.txn.payment(
            sender=participant,
            receiver=self.app_address,
            amount=UInt64(amount),
        )
        with self.as_sender(participant):
            self.contract.join(arc4.UInt64(campaign_id), arc4.UInt64(units), payment)

    def call(self, method: str, sender: Account, campaign_id: int):
        """Call a single-argument campaign operation as `sender`."""
        with self.as_sender(sender):
            return getattr(self.contract, method)(arc4.UInt64(campaign_id))

    def funded_campaign(self, **overrides) -> int:
        """A campaign with its token supply deposited, clock at sale start."""
        campaign_id = self.create_campaign(**overrides)
        self.deposit(campaign_id, amount=overrides.get("hard_cap", HARD_CAP))
        self.set_time(START)
        return campaign_id

    def campaign(self, campaign_id: int):
        return self.contract.get_campaign(arc4.UInt64(campaign_id))

    def participation(self, campaign_id: int, participant: Account):
        return self.contract.get_participation(
            arc4.UInt64(campaign_id), arc4.Address(participant)
        )

    def state(self, campaign_id: int) -> int:
        return self.contract.get_campaign_state(arc4.UInt64(campaign_id)).as_uint64()

    def balances(self, campaign_id: int) -> tuple[int, int]:
        balances = self.contract.get_treasury_balances(arc4.UInt64(campaign_id))
        return balances[0].as_uint64(), balances[1].as_uint64()

    def claimable(self, campaign_id: int, participant: Account) -> int:
        return self.contract.get_claimable(
            arc4.UInt64(campaign_id), arc4.Address(participant)
        ).as_uint64()


def make_campaign(
    owner: Account,
    sale_closed: bool = False,
    funds_withdrawn: bool = False,
    cancelled: bool = False,
) -> Campaign:
    """A deposited campaign record on a 100/200/300/400 schedule, outside any launchpad."""
    return Campaign(
        owner=arc4.Address(owner),
        token_id=arc4.UInt64(1),
        start_sale_time=arc4.UInt64(100),
        end_sale_time=arc4.UInt64(200),
        cliff=arc4.UInt64(300),
        vesting_end_time=arc4.UInt64(400),
        price_per_allocation=arc4.UInt64(10),
        allocation_unit_size=arc4.UInt64(5),
        soft_cap=arc4.UInt64(50),
        hard_cap=arc4.UInt64(100),
        unlock_pct=arc4.UInt64(10),
        allocations_per_participant=arc4.UInt64(2),
        total_sold=arc4.UInt64(0),
        total_participants=arc4.UInt64(0),
        total_claimed=arc4.UInt64(0),
        token_supply_deposited=arc4.Bool(True),
        sale_closed=arc4.Bool(sale_closed),
        funds_withdrawn=arc4.Bool(funds_withdrawn),
        cancelled=arc4.Bool(cancelled),
    )
