"""Exception types for the bonding-curve engine.

Every failure the engine can report is a ``CurveError`` subclass carrying a
stable ``code``. ``step()`` in ``core/curve/engine.py`` returns that code as the
rejection reason for callers that prefer result inspection over exceptions.

Errors are always raised before a new snapshot escapes, and snapshots are
frozen, so a failed call never leaves the caller's state half-updated.
"""

from __future__ import annotations


class CurveError(Exception):
    """Base class for all engine rejections."""

    code: str = "curve_error"


class InvalidAmount(CurveError):
    """Input amount is zero or otherwise outside its domain."""

    code = "invalid_amount"


class CurveArithmeticError(CurveError):
    """A checked fixed-width operation failed."""

    code = "arithmetic"


class Overflow(CurveArithmeticError):
    code = "overflow"


class Underflow(CurveArithmeticError):
    code = "underflow"


class DivisionByZero(CurveArithmeticError):
    code = "division_by_zero"


class DegenerateCurve(CurveError):
    """Zero virtual reserves or zero max supply."""

    code = "degenerate_curve"


class InsufficientReserves(CurveError):
    """Computed output is zero or would exhaust a reserve."""

    code = "insufficient_reserves"


class SupplyExceeded(CurveError):
    """Resulting supply would leave ``[0, max_supply]`` (or the circulating supply)."""

    code = "supply_exceeded"


class CurveComplete(CurveError):
    """Trade attempted after the curve graduated."""

    code = "curve_complete"


class CurveNotComplete(CurveError):
    """Migration handoff requested for a curve that is still trading."""

    code = "curve_not_complete"


class SlippageExceeded(CurveError):
    """Result violates the caller's ``min_amount_out`` / ``max_amount_in`` bound."""

    code = "slippage_exceeded"


class PriceOutOfBounds(CurveError):
    code = "price_out_of_bounds"


class StaleQuote(CurveError):
    """The quote handed to the ledger does not match the snapshot it is applied to."""

    code = "stale_quote"


class StrategyMismatch(CurveError):
    """Request strategy differs from the strategy the curve was created with."""

    code = "strategy_mismatch"


class InvalidConfiguration(CurveError):
    """Curve creation parameters are out of range or inconsistent."""

    code = "invalid_configuration"


class InvariantViolation(CurveError):
    """Raised when a candidate snapshot violates one or more invariants."""

    code = "invariant"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
