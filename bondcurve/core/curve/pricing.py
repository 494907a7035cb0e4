"""
Pricing engine: strategy dispatch from a snapshot to a ``TradeQuote``.

The curve's `strategy` (fixed at creation) selects the kernel:

- ``CONSTANT_PRODUCT`` -> `kernels/python/cpmm_curve_v1.py`
- ``POLYNOMIAL``       -> `kernels/python/poly_curve_v1.py`

Fee placement is uniform: `fee_basis_points` is charged on the gross output of
BOTH directions (base units on a buy, quote units on a sell), and the fee share
stays in the curve's reserves.
"""

from __future__ import annotations

from ...errors import InsufficientReserves, InvalidAmount, SupplyExceeded
from ...kernels.python import cpmm_curve_v1, poly_curve_v1
from ...kernels.python.fixed_point import checked_sub, require_uint
from ..fees import BPS_DENOM, compute_fee, gross_up_for_fee
from .completion import ensure_active
from .guards import guard_curve_shape, guard_request, guard_trade
from .types import (
    CurveStrategy,
    ReserveSnapshot,
    TradeDirection,
    TradeQuote,
    TradeRequest,
)


def _finish_quote(
    snapshot: ReserveSnapshot,
    direction: TradeDirection,
    requested_amount: int,
    amount_in: int,
    gross_out: int,
) -> TradeQuote:
    fee = compute_fee(gross_out, snapshot.fee_basis_points)
    net_out = checked_sub(gross_out, fee)
    if net_out == 0:
        raise InsufficientReserves("output is zero after fees")
    if direction is TradeDirection.BUY:
        available = snapshot.real_base_reserves
        virtual = snapshot.virtual_base_reserves
    else:
        available = snapshot.real_quote_reserves
        virtual = snapshot.virtual_quote_reserves
    # Virtual reserves only price the constant-product curve.
    if snapshot.strategy is CurveStrategy.CONSTANT_PRODUCT and net_out >= virtual:
        raise InsufficientReserves(f"payout {net_out} would exhaust virtual reserve {virtual}")
    if net_out > available:
        raise InsufficientReserves(f"real reserve holds {available}, trade pays out {net_out}")
    return TradeQuote(
        direction=direction,
        strategy=snapshot.strategy,
        requested_amount=requested_amount,
        amount_in=amount_in,
        gross_amount_out=gross_out,
        fee_amount=fee,
        net_amount_out=net_out,
    )


def _price_constant_product(
    snapshot: ReserveSnapshot, direction: TradeDirection, amount: int
) -> TradeQuote:
    if direction is TradeDirection.BUY:
        reserve_in, reserve_out = snapshot.virtual_quote_reserves, snapshot.virtual_base_reserves
    else:
        reserve_in, reserve_out = snapshot.virtual_base_reserves, snapshot.virtual_quote_reserves
    move = cpmm_curve_v1.swap_exact_in(
        reserve_in=reserve_in, reserve_out=reserve_out, amount_in=amount
    )
    return _finish_quote(snapshot, direction, amount, move.amount_in, move.gross_out)


def _price_polynomial(
    snapshot: ReserveSnapshot, direction: TradeDirection, amount: int
) -> TradeQuote:
    curve = dict(base_price=snapshot.base_price, max_supply=snapshot.max_supply)
    supply = snapshot.circulating_supply

    if direction is TradeDirection.BUY:
        if supply >= snapshot.max_supply:
            raise SupplyExceeded(f"supply already at max_supply ({snapshot.max_supply})")
        if amount > poly_curve_v1.remaining_cost(supply, **curve):
            raise SupplyExceeded(
                f"budget {amount} exceeds the cost of the remaining supply up to max_supply ({snapshot.max_supply})"
            )
        gross_out = poly_curve_v1.max_affordable_amount(supply, amount, **curve)
        if gross_out == 0:
            raise InsufficientReserves("budget does not cover a single base unit")
        cost = poly_curve_v1.buy_cost(supply, gross_out, **curve)
        if cost == 0:
            raise InsufficientReserves("buy rounds to zero cost")
        return _finish_quote(snapshot, direction, amount, cost, gross_out)

    proceeds = poly_curve_v1.sell_proceeds(supply, amount, **curve)
    if proceeds == 0:
        raise InsufficientReserves("sell releases no quote")
    return _finish_quote(snapshot, direction, amount, amount, proceeds)


def price_trade(snapshot: ReserveSnapshot, direction: TradeDirection, amount: int) -> TradeQuote:
    """Price a trade of `amount` against `snapshot` (shared by quoting and the ledger)."""
    guard_trade(snapshot, direction, amount)
    if snapshot.strategy is CurveStrategy.CONSTANT_PRODUCT:
        return _price_constant_product(snapshot, direction, amount)
    return _price_polynomial(snapshot, direction, amount)


def quote_trade(snapshot: ReserveSnapshot, request: TradeRequest) -> TradeQuote:
    guard_request(snapshot, request)
    return price_trade(snapshot, request.direction, request.amount)


def quote_buy_cost(snapshot: ReserveSnapshot, net_base_out: int) -> int:
    """
    Quote needed to receive at least `net_base_out` base units after fees.

    The net amount is grossed up for the fee, then priced exact-out on the
    curve. Submitting the returned cost as a BUY yields ``>= net_base_out``.
    """
    ensure_active(snapshot)
    guard_curve_shape(snapshot)
    require_uint("net_base_out", net_base_out)
    if net_base_out == 0:
        raise InvalidAmount("net_base_out must be positive")
    if snapshot.fee_basis_points == BPS_DENOM:
        raise InsufficientReserves("a 100% fee leaves no output to buy")
    gross = gross_up_for_fee(net_base_out, snapshot.fee_basis_points)

    if snapshot.strategy is CurveStrategy.CONSTANT_PRODUCT:
        return cpmm_curve_v1.swap_exact_out(
            reserve_in=snapshot.virtual_quote_reserves,
            reserve_out=snapshot.virtual_base_reserves,
            amount_out=gross,
        ).amount_in

    return poly_curve_v1.buy_cost(
        snapshot.circulating_supply,
        gross,
        base_price=snapshot.base_price,
        max_supply=snapshot.max_supply,
    )


def spot_price(snapshot: ReserveSnapshot) -> int:
    """Marginal price in quote per PRICE_SCALE base units."""
    guard_curve_shape(snapshot)
    if snapshot.strategy is CurveStrategy.CONSTANT_PRODUCT:
        return cpmm_curve_v1.spot_price(
            reserve_base=snapshot.virtual_base_reserves,
            reserve_quote=snapshot.virtual_quote_reserves,
        )
    return poly_curve_v1.price_at(
        snapshot.circulating_supply,
        base_price=snapshot.base_price,
        max_supply=snapshot.max_supply,
    )
