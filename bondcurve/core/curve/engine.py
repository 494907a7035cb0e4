"""Engine entry points for the bonding curve.

``execute_trade(snapshot, request)`` is the single mutating entry point. It:

1. Runs the guards (completion, curve shape, request domain).
2. Prices the request with the curve's strategy.
3. Enforces the caller's slippage bounds.
4. Applies the quote through the reserve ledger.
5. Checks all invariants on the candidate snapshot.
6. Lets the completion gate finalize the committed snapshot.

``step(snapshot, request)`` runs the same pipeline and returns a ``StepResult``
instead of raising. ``quote(snapshot, request)`` is a read-only preview.

The engine holds no lock and no global state; callers serialize trades per
curve and persist ``result.new_snapshot`` themselves.
"""

from __future__ import annotations

import logging

from ...errors import CurveError, InvariantViolation, SlippageExceeded
from .completion import evaluate, migration_handoff
from .invariants import check_all, check_transition
from .ledger import apply_quote
from .pricing import quote_trade
from .types import ReserveSnapshot, StepResult, TradeQuote, TradeRequest, TradeResult

logger = logging.getLogger(__name__)


def _check_slippage(request: TradeRequest, priced: TradeQuote) -> None:
    if request.min_amount_out is not None and priced.net_amount_out < request.min_amount_out:
        raise SlippageExceeded(
            f"amount_out {priced.net_amount_out} < min_amount_out {request.min_amount_out}"
        )
    if request.max_amount_in is not None and priced.amount_in > request.max_amount_in:
        raise SlippageExceeded(
            f"amount_in {priced.amount_in} > max_amount_in {request.max_amount_in}"
        )


def quote(snapshot: ReserveSnapshot, request: TradeRequest) -> TradeQuote:
    """Price `request` without applying it."""
    return quote_trade(snapshot, request)


def execute_trade(snapshot: ReserveSnapshot, request: TradeRequest) -> TradeResult:
    """Price, apply and gate one trade.

    Raises:
        CurveError: any rejection; `snapshot` is untouched.
    """
    priced = quote_trade(snapshot, request)
    _check_slippage(request, priced)

    candidate = apply_quote(snapshot, priced)

    violations = check_all(candidate) + check_transition(snapshot, candidate)
    if violations:
        raise InvariantViolation(violations)

    committed, completed = evaluate(candidate)

    logger.debug(
        "trade %s accepted: amount_in=%d amount_out=%d fee=%d completed=%s",
        request.direction.value,
        priced.amount_in,
        priced.net_amount_out,
        priced.fee_amount,
        completed,
    )
    return TradeResult(
        amount_in=priced.amount_in,
        amount_out=priced.net_amount_out,
        fee_amount=priced.fee_amount,
        new_snapshot=committed,
        completed_this_trade=completed,
        quote=priced,
        migration=migration_handoff(committed) if completed else None,
    )


def step(snapshot: ReserveSnapshot, request: TradeRequest) -> StepResult:
    """Like ``execute_trade()`` but returns the rejection code instead of raising."""
    try:
        result = execute_trade(snapshot, request)
    except CurveError as exc:
        logger.debug("trade %s rejected: %s (%s)", request.direction.value, exc.code, exc)
        return StepResult(accepted=False, rejection=exc.code)
    return StepResult(accepted=True, result=result)
