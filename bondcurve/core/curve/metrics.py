"""
Read-only curve metrics for dashboards and pre-trade checks.

All values are integers: prices in quote per ``PRICE_SCALE`` base units, rates
in basis points. Nothing here changes a snapshot.
"""

from __future__ import annotations

from ...errors import DivisionByZero, PriceOutOfBounds
from ...kernels.python.cpmm_curve_v1 import PRICE_SCALE
from ...kernels.python.fixed_point import (
    U128_MAX,
    checked_div,
    checked_mul,
    narrow,
    require_uint,
)
from ..fees import BPS_DENOM
from .engine import execute_trade
from .pricing import spot_price
from .types import ReserveSnapshot, TradeRequest


def market_cap(snapshot: ReserveSnapshot) -> int:
    """``total_supply * spot_price / PRICE_SCALE`` in quote units."""
    price = spot_price(snapshot)
    return narrow(
        checked_div(checked_mul(snapshot.total_supply, price, bound=U128_MAX), PRICE_SCALE),
        name="market_cap",
    )


def progress_bps(snapshot: ReserveSnapshot) -> int:
    """Progress toward graduation in basis points, capped at 10_000."""
    if snapshot.is_complete or snapshot.real_quote_reserves >= snapshot.graduation_threshold:
        return BPS_DENOM
    return checked_div(
        checked_mul(snapshot.real_quote_reserves, BPS_DENOM, bound=U128_MAX),
        snapshot.graduation_threshold,
    )


def slippage_bps(expected_price: int, actual_price: int) -> int:
    """``|actual - expected| * 10_000 / expected``."""
    require_uint("expected_price", expected_price)
    require_uint("actual_price", actual_price)
    if expected_price == 0:
        raise DivisionByZero("expected_price must be positive")
    difference = abs(actual_price - expected_price)
    return checked_div(checked_mul(difference, BPS_DENOM, bound=U128_MAX), expected_price)


def validate_price_bounds(price: int, min_price: int, max_price: int) -> None:
    if price < min_price:
        raise PriceOutOfBounds(f"price {price} below minimum {min_price}")
    if price > max_price:
        raise PriceOutOfBounds(f"price {price} above maximum {max_price}")


def price_impact_bps(snapshot: ReserveSnapshot, request: TradeRequest) -> int:
    """Spot-price move, in bps, that `request` would cause. The trade is simulated, not committed."""
    before = spot_price(snapshot)
    result = execute_trade(snapshot, request)
    after = spot_price(result.new_snapshot)
    return slippage_bps(before, after)
