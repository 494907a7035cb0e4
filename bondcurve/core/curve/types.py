"""Data types for the bonding-curve engine.

All types are frozen dataclasses (immutable). A trade never edits a snapshot;
it returns a new one, and the caller's prior snapshot stays the canonical state
until it chooses to persist the result.

Units/conventions:
- `*_base_*` amounts are integer base-asset units (the launched token).
- `*_quote_*` amounts are integer quote-asset units (what buyers pay with).
- prices are quote units per ``PRICE_SCALE`` (1e6) base units.
- `*_basis_points` rates are 1/10_000.
- BUY spends quote and receives base; SELL spends base and receives quote.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique


@unique
class TradeDirection(Enum):
    BUY = "buy"
    SELL = "sell"


@unique
class CurveStrategy(Enum):
    """Pricing model, fixed for the lifetime of a curve."""
    CONSTANT_PRODUCT = "constant_product"
    POLYNOMIAL = "polynomial"


@unique
class CurvePhase(Enum):
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ReserveSnapshot:
    """State of one curve at a point in time."""

    # Reserves
    virtual_base_reserves: int
    virtual_quote_reserves: int
    real_base_reserves: int
    real_quote_reserves: int

    # Immutable configuration
    total_supply: int
    graduation_threshold: int
    fee_basis_points: int = 0
    strategy: CurveStrategy = CurveStrategy.CONSTANT_PRODUCT

    # Polynomial strategy parameters (unused by constant product)
    base_price: int = 0
    max_supply: int = 0

    # Base units held outside the curve
    circulating_supply: int = 0

    # Completion
    is_complete: bool = False

    @property
    def phase(self) -> CurvePhase:
        return CurvePhase.COMPLETE if self.is_complete else CurvePhase.ACTIVE


@dataclass(frozen=True)
class TradeRequest:
    """A trade intent. `amount` is quote for BUY (a budget on polynomial curves), base for SELL."""

    direction: TradeDirection
    amount: int
    strategy: CurveStrategy = CurveStrategy.CONSTANT_PRODUCT
    min_amount_out: int | None = None
    max_amount_in: int | None = None


@dataclass(frozen=True)
class TradeQuote:
    """Priced trade, consumed by the ledger within one quote -> apply cycle."""

    direction: TradeDirection
    strategy: CurveStrategy
    requested_amount: int
    amount_in: int
    gross_amount_out: int
    fee_amount: int
    net_amount_out: int


@dataclass(frozen=True)
class MigrationHandoff:
    """Final real reserves handed to the liquidity-migration collaborator, once per curve."""

    real_base_reserves: int
    real_quote_reserves: int
    circulating_supply: int
    total_supply: int


@dataclass(frozen=True)
class TradeResult:
    amount_in: int
    amount_out: int
    fee_amount: int
    new_snapshot: ReserveSnapshot
    completed_this_trade: bool
    quote: TradeQuote
    migration: MigrationHandoff | None = None


@dataclass(frozen=True)
class StepResult:
    """Result of a single non-raising engine step."""

    accepted: bool
    result: TradeResult | None = None
    rejection: str | None = None
