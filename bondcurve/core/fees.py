"""
Basis-point fee kernels (deterministic, integer-only).

`compute_fee` is the single fee rule applied by the pricing engine to the gross
output of either trade direction:

    fee = floor(amount * fee_bps / 10_000)        (u128 intermediate)

`gross_up_for_fee` inverts it for exact-out quoting.
"""

from __future__ import annotations

from ..errors import InvalidConfiguration
from ..kernels.python.fixed_point import (
    U128_MAX,
    checked_div,
    checked_mul,
    narrow,
    require_int,
    require_uint,
)

BPS_DENOM = 10_000


def validate_fee_bps(fee_bps: int) -> int:
    """Return `fee_bps` if it lies in ``[0, 10_000]``, else raise InvalidConfiguration."""
    require_int("fee_bps", fee_bps)
    if not (0 <= fee_bps <= BPS_DENOM):
        raise InvalidConfiguration(f"fee_bps must be in [0, {BPS_DENOM}]: {fee_bps}")
    return fee_bps


def compute_fee(amount: int, fee_bps: int) -> int:
    require_uint("amount", amount)
    validate_fee_bps(fee_bps)
    if fee_bps == 0:
        return 0
    return narrow(checked_div(checked_mul(amount, fee_bps, bound=U128_MAX), BPS_DENOM), name="fee")


def gross_up_for_fee(net_amount: int, fee_bps: int) -> int:
    """
    Smallest gross amount whose post-fee remainder is at least `net_amount`.

    With the floor fee rule, ``gross - fee(gross) = ceil(gross * (10_000 - bps) / 10_000)``,
    so ``gross = ceil(net * 10_000 / (10_000 - bps))`` is sufficient.
    """
    require_uint("net_amount", net_amount)
    validate_fee_bps(fee_bps)
    if fee_bps == BPS_DENOM:
        raise InvalidConfiguration("cannot gross up through a 100% fee")
    keep = BPS_DENOM - fee_bps
    numerator = checked_mul(net_amount, BPS_DENOM, bound=U128_MAX)
    return narrow((numerator + keep - 1) // keep, name="gross_amount")
