"""Guard functions for the bonding-curve engine.

Each guard inspects the PRE-state (and request) and raises the matching
``CurveError`` when the trade must not proceed. Guards run before any curve
arithmetic, in this order:

1. completion (``CurveComplete``),
2. curve shape (``DegenerateCurve``),
3. request domain (``StrategyMismatch``, ``InvalidAmount``, ``SupplyExceeded``).
"""

from __future__ import annotations

from ...errors import DegenerateCurve, InvalidAmount, StrategyMismatch, SupplyExceeded
from ...kernels.python.fixed_point import require_int, require_uint
from .completion import ensure_active
from .types import CurveStrategy, ReserveSnapshot, TradeDirection, TradeRequest


def guard_curve_shape(snapshot: ReserveSnapshot) -> None:
    if snapshot.virtual_base_reserves == 0 or snapshot.virtual_quote_reserves == 0:
        raise DegenerateCurve(
            "zero virtual reserve: "
            f"({snapshot.virtual_base_reserves}, {snapshot.virtual_quote_reserves})"
        )
    if snapshot.strategy is CurveStrategy.POLYNOMIAL and snapshot.max_supply == 0:
        raise DegenerateCurve("polynomial curve has zero max_supply")


def guard_amount(snapshot: ReserveSnapshot, direction: TradeDirection, amount: int) -> None:
    require_int("amount", amount)
    if amount <= 0:
        raise InvalidAmount(f"amount must be positive: {amount}")
    require_uint("amount", amount)
    if direction is TradeDirection.SELL and amount > snapshot.circulating_supply:
        raise SupplyExceeded(
            f"sell of {amount} exceeds circulating supply ({snapshot.circulating_supply})"
        )


def guard_trade(snapshot: ReserveSnapshot, direction: TradeDirection, amount: int) -> None:
    """Guards shared by quoting and by the ledger's re-derivation."""
    ensure_active(snapshot)
    guard_curve_shape(snapshot)
    guard_amount(snapshot, direction, amount)


def guard_request(snapshot: ReserveSnapshot, request: TradeRequest) -> None:
    ensure_active(snapshot)
    if request.strategy is not snapshot.strategy:
        raise StrategyMismatch(
            f"request strategy {request.strategy.value!r} != curve strategy {snapshot.strategy.value!r}"
        )
    for name, bound in (
        ("min_amount_out", request.min_amount_out),
        ("max_amount_in", request.max_amount_in),
    ):
        if bound is not None:
            require_uint(name, bound)
    guard_trade(snapshot, request.direction, request.amount)
