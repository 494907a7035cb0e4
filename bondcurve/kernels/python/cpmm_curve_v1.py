"""
Constant-product bonding-curve kernel (v1 semantics).

The curve holds virtual reserves ``(x, y)`` and prices every move against
``k = x * y`` computed in the u128 domain. Fees are NOT handled here; the kernel
only returns the gross output and the reserves implied by the curve.

Rounding rule (consensus-critical): the post-trade output reserve is
``ceil(k / new_reserve_in)``. Ceiling keeps the division remainder inside the
curve, so ``new_reserve_in * new_reserve_out >= k`` and the gross output is
never larger than the exact real-valued answer.

Directions are symmetric:
- buy:  ``reserve_in`` = virtual quote, ``reserve_out`` = virtual base,
- sell: ``reserve_in`` = virtual base,  ``reserve_out`` = virtual quote.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import DegenerateCurve, InsufficientReserves, InvalidAmount
from .fixed_point import (
    U64_MAX,
    checked_add,
    checked_ceil_div,
    checked_div,
    checked_mul,
    checked_sub,
    narrow,
    require_uint,
    widen_mul,
)

# Spot prices are quote units per PRICE_SCALE base units.
PRICE_SCALE = 1_000_000


@dataclass(frozen=True)
class CurveMove:
    amount_in: int
    gross_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int


@dataclass(frozen=True)
class CurveExactOut:
    amount_in: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int


def _require_reserves(reserve_in: int, reserve_out: int) -> None:
    require_uint("reserve_in", reserve_in)
    require_uint("reserve_out", reserve_out)
    if reserve_in == 0 or reserve_out == 0:
        raise DegenerateCurve(f"zero virtual reserve: ({reserve_in}, {reserve_out})")


def constant_product(reserve_a: int, reserve_b: int) -> int:
    return widen_mul(reserve_a, reserve_b)


def swap_exact_in(*, reserve_in: int, reserve_out: int, amount_in: int) -> CurveMove:
    """
    Move along the curve by adding exactly `amount_in` to `reserve_in`.

        k = reserve_in * reserve_out
        new_reserve_in = reserve_in + amount_in
        new_reserve_out = ceil(k / new_reserve_in)
        gross_out = reserve_out - new_reserve_out

    Raises:
        DegenerateCurve: a reserve is zero.
        InvalidAmount: `amount_in` is zero.
        Overflow: `new_reserve_in` leaves the u64 range.
        InsufficientReserves: the move yields nothing or would drain `reserve_out`.
    """
    _require_reserves(reserve_in, reserve_out)
    require_uint("amount_in", amount_in)
    if amount_in == 0:
        raise InvalidAmount("amount_in must be positive")

    k_before = widen_mul(reserve_in, reserve_out)
    new_reserve_in = checked_add(reserve_in, amount_in, bound=U64_MAX)
    new_reserve_out = checked_ceil_div(k_before, new_reserve_in)
    gross_out = checked_sub(reserve_out, new_reserve_out)

    if gross_out == 0:
        raise InsufficientReserves("amount_in too small to move the curve")
    if gross_out >= reserve_out:
        raise InsufficientReserves("output would exhaust reserve_out")

    return CurveMove(
        amount_in=amount_in,
        gross_out=gross_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
    )


def swap_exact_out(*, reserve_in: int, reserve_out: int, amount_out: int) -> CurveExactOut:
    """
    Smallest input that makes `swap_exact_in` return at least `amount_out`.

        new_reserve_out = reserve_out - amount_out
        new_reserve_in = ceil(k / new_reserve_out)
        amount_in = new_reserve_in - reserve_in
    """
    _require_reserves(reserve_in, reserve_out)
    require_uint("amount_out", amount_out)
    if amount_out == 0:
        raise InvalidAmount("amount_out must be positive")
    if amount_out >= reserve_out:
        raise InsufficientReserves(
            f"cannot drain full reserve: amount_out ({amount_out}) >= reserve_out ({reserve_out})"
        )

    k_before = widen_mul(reserve_in, reserve_out)
    new_reserve_out = reserve_out - amount_out
    new_reserve_in = narrow(checked_ceil_div(k_before, new_reserve_out), name="new_reserve_in")
    amount_in = checked_sub(new_reserve_in, reserve_in)

    return CurveExactOut(
        amount_in=amount_in,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
    )


def spot_price(*, reserve_base: int, reserve_quote: int) -> int:
    """Marginal price in quote per PRICE_SCALE base: ``floor(y * PRICE_SCALE / x)``."""
    _require_reserves(reserve_base, reserve_quote)
    return checked_div(checked_mul(reserve_quote, PRICE_SCALE), reserve_base)
