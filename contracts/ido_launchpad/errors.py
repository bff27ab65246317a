"""
Failure messages for the IDO Launchpad contract.

Every message starts with its error kind so that a rejected call can be
classified from the logic error text alone:

- Unauthorized: caller identity does not match
- InvalidSchedule: malformed time ordering at creation
- InvalidEconomicParameter: non-positive price or caps, bad percentage
- ArithmeticOverflow: a checked operation overflowed
- PreconditionNotMet: state, flag or time checks failed
- InsufficientBalance: a treasury or a payment lacks funds
- NothingToDo: zero-amount claim or refund
"""

# Unauthorized
UNAUTHORIZED_ADMIN = "Unauthorized: only the launchpad admin can do this"
UNAUTHORIZED_OWNER = "Unauthorized: only the campaign owner can do this"
UNAUTHORIZED_PARTICIPANT = "Unauthorized: caller is not the participant"
INVALID_TRANSFER_SENDER = "Unauthorized: transfer must be sent by the caller"

# InvalidSchedule
INVALID_START_SALE_TIME = "InvalidSchedule: start sale time must be in the future"
INVALID_END_SALE_TIME = "InvalidSchedule: end sale time must be after start sale time"
INVALID_CLIFF = "InvalidSchedule: cliff must be after end sale time"
INVALID_VESTING_END_TIME = "InvalidSchedule: vesting end time must be after cliff"

# InvalidEconomicParameter
INVALID_PRICE = "InvalidEconomicParameter: price per allocation must be positive"
INVALID_ALLOCATION = "InvalidEconomicParameter: allocation unit size must be positive"
INVALID_ALLOCATIONS_PER_PARTICIPANT = (
    "InvalidEconomicParameter: allocations per participant must be positive"
)
INVALID_SOFT_CAP = "InvalidEconomicParameter: soft cap must be positive"
INVALID_HARD_CAP = "InvalidEconomicParameter: hard cap must exceed soft cap"
INVALID_UNLOCK_PCT = "InvalidEconomicParameter: unlock percentage must be within 0..100"

# ArithmeticOverflow
MATH_OVERFLOW = "ArithmeticOverflow: math overflow"

# PreconditionNotMet
CAMPAIGN_NOT_FOUND = "PreconditionNotMet: campaign does not exist"
INVALID_TOKEN = "PreconditionNotMet: transfer is not for the campaign token"
INVALID_TRANSFER_RECEIVER = "PreconditionNotMet: transfer must be sent to the launchpad"
TOKEN_SUPPLY_NOT_DEPOSITED = "PreconditionNotMet: token supply not deposited"
TOKEN_SUPPLY_ALREADY_DEPOSITED = "PreconditionNotMet: token supply already deposited"
INVALID_NUMBER_OF_ALLOCATIONS = "PreconditionNotMet: invalid number of allocations"
SALE_NOT_OPEN = "PreconditionNotMet: now is not in sale period"
SALE_ENDED = "PreconditionNotMet: sale is ended"
SALE_NOT_ENDED = "PreconditionNotMet: sale has not ended"
SALE_ALREADY_CLOSED = "PreconditionNotMet: sale already closed"
SALE_NOT_CLOSED = "PreconditionNotMet: sale not closed"
ALLOCATION_NOT_AVAILABLE = "PreconditionNotMet: this allocation is not available"
USER_ALREADY_JOINED = "PreconditionNotMet: user already joined"
USER_NOT_JOINED = "PreconditionNotMet: user not joined"
INVALID_CAMPAIGN = "PreconditionNotMet: participation belongs to another campaign"
FUNDS_ALREADY_WITHDRAWN = "PreconditionNotMet: funds already withdrawn"
SOFT_CAP_NOT_REACHED = "PreconditionNotMet: soft cap not reached"
SOFT_CAP_REACHED = "PreconditionNotMet: soft cap reached"
TOTAL_CLAIMED_NOT_ZERO = "PreconditionNotMet: total claimed not zero"
PAYMENT_AMOUNT_MISMATCH = "PreconditionNotMet: payment must equal cost plus record reserve"
DEPOSIT_AMOUNT_MISMATCH = "PreconditionNotMet: deposit must equal the hard cap"

# InsufficientBalance
INSUFFICIENT_PAYMENT = "InsufficientBalance: payment does not cover cost and record reserve"
INSUFFICIENT_MBR_PAYMENT = "InsufficientBalance: payment does not cover campaign storage"
INSUFFICIENT_TREASURY = "InsufficientBalance: insufficient funds in treasury"

# NothingToDo
NOTHING_TO_CLAIM = "NothingToDo: nothing to claim"
NOTHING_TO_REFUND = "NothingToDo: nothing to refund"
