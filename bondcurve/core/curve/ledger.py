"""Reserve ledger: applies a priced quote to a snapshot.

The ledger never trusts caller-supplied deltas. It re-prices the quote from
``(snapshot, direction, requested_amount)`` and refuses to apply anything that
drifted (``StaleQuote``). The matching deltas are then applied to the reserves
and the circulating supply in one step:

- BUY:  quote reserves ``+= amount_in``; base reserves ``-= net_out``;
        circulating ``+= net_out``.
- SELL: base reserves ``+= amount_in``; quote reserves ``-= net_out``;
        circulating ``-= amount_in``.

Virtual reserves only move on the constant-product curve; the polynomial
curve is priced from the circulating supply and leaves them untouched.

The fee share of the gross output is never paid out, so it stays in reserves.
Every field update is a checked operation; the new snapshot is only built once
all of them succeeded, so a failure leaves nothing half-applied.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ...errors import InvariantViolation, StaleQuote, SupplyExceeded
from ...kernels.python.cpmm_curve_v1 import constant_product
from ...kernels.python.fixed_point import U64_MAX, checked_add, checked_sub
from .completion import ensure_active
from .pricing import price_trade
from .types import CurveStrategy, ReserveSnapshot, TradeDirection, TradeQuote

logger = logging.getLogger(__name__)


def _apply_buy(snapshot: ReserveSnapshot, quote: TradeQuote) -> ReserveSnapshot:
    paid, received = quote.amount_in, quote.net_amount_out
    circulating = checked_add(snapshot.circulating_supply, received, bound=U64_MAX)
    if circulating > snapshot.total_supply:
        raise SupplyExceeded(
            f"circulating supply {circulating} would exceed total_supply {snapshot.total_supply}"
        )
    updates = dict(
        real_quote_reserves=checked_add(snapshot.real_quote_reserves, paid),
        real_base_reserves=checked_sub(snapshot.real_base_reserves, received),
        circulating_supply=circulating,
    )
    if snapshot.strategy is CurveStrategy.CONSTANT_PRODUCT:
        updates.update(
            virtual_quote_reserves=checked_add(snapshot.virtual_quote_reserves, paid),
            virtual_base_reserves=checked_sub(snapshot.virtual_base_reserves, received),
        )
    return replace(snapshot, **updates)


def _apply_sell(snapshot: ReserveSnapshot, quote: TradeQuote) -> ReserveSnapshot:
    returned, received = quote.amount_in, quote.net_amount_out
    updates = dict(
        real_base_reserves=checked_add(snapshot.real_base_reserves, returned),
        real_quote_reserves=checked_sub(snapshot.real_quote_reserves, received),
        circulating_supply=checked_sub(snapshot.circulating_supply, returned),
    )
    if snapshot.strategy is CurveStrategy.CONSTANT_PRODUCT:
        updates.update(
            virtual_base_reserves=checked_add(snapshot.virtual_base_reserves, returned),
            virtual_quote_reserves=checked_sub(snapshot.virtual_quote_reserves, received),
        )
    return replace(snapshot, **updates)


def apply_quote(snapshot: ReserveSnapshot, quote: TradeQuote) -> ReserveSnapshot:
    """
    Return the candidate snapshot after applying `quote` to `snapshot`.

    Raises:
        CurveComplete: the curve already graduated.
        StaleQuote: `quote` does not match a fresh pricing of the same request.
        InsufficientReserves / SupplyExceeded / Overflow / Underflow: a field
            update is out of range.
        InvariantViolation: constant product decreased.
    """
    ensure_active(snapshot)
    if quote.strategy is not snapshot.strategy:
        raise StaleQuote(f"quote priced for {quote.strategy.value!r}, curve is {snapshot.strategy.value!r}")
    expected = price_trade(snapshot, quote.direction, quote.requested_amount)
    if expected != quote:
        raise StaleQuote(f"quote does not match snapshot: expected {expected}, got {quote}")

    if quote.direction is TradeDirection.BUY:
        candidate = _apply_buy(snapshot, quote)
    else:
        candidate = _apply_sell(snapshot, quote)

    if snapshot.strategy is CurveStrategy.CONSTANT_PRODUCT:
        k_before = constant_product(snapshot.virtual_base_reserves, snapshot.virtual_quote_reserves)
        k_after = constant_product(candidate.virtual_base_reserves, candidate.virtual_quote_reserves)
        if k_after < k_before:
            raise InvariantViolation(["trans_constant_product_non_decreasing"])

    logger.debug(
        "applied %s: in=%d out=%d fee=%d real_quote=%d",
        quote.direction.value,
        quote.amount_in,
        quote.net_amount_out,
        quote.fee_amount,
        candidate.real_quote_reserves,
    )
    return candidate
