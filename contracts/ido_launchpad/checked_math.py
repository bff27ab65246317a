"""
Overflow-checked uint64 arithmetic.

The AVM already panics on uint64 overflow; these helpers fail with an
ArithmeticOverflow message instead so callers can tell the cause apart.
Products that need more than 64 bits are kept in a 128-bit (high, low) pair.
"""

from algopy import UInt64, op, subroutine

from contracts.ido_launchpad.errors import MATH_OVERFLOW


@subroutine
def checked_add(a: UInt64, b: UInt64) -> UInt64:
    carry, total = op.addw(a, b)
    assert carry == 0, MATH_OVERFLOW
    return total


@subroutine
def checked_sub(a: UInt64, b: UInt64) -> UInt64:
    assert a >= b, MATH_OVERFLOW
    return a - b


@subroutine
def checked_mul(a: UInt64, b: UInt64) -> UInt64:
    high, low = op.mulw(a, b)
    assert high == 0, MATH_OVERFLOW
    return low


@subroutine
def mul_div_floor(a: UInt64, b: UInt64, divisor: UInt64) -> UInt64:
    """floor(a * b / divisor) with a 128-bit intermediate product."""
    assert divisor > 0, MATH_OVERFLOW
    high, low = op.mulw(a, b)
    # quotient must fit back into 64 bits
    assert high < divisor, MATH_OVERFLOW
    return op.divw(high, low, divisor)
