"""`curve`: pure-Python bonding-curve pricing and reserve-ledger engine.

This package prices and settles trades against one bonding curve:
- deterministic, integer-only transitions,
- immutable state (frozen dataclasses),
- fail-closed guards and invariant checks.

The engine never moves assets, persists state or checks signatures; callers
serialize trades per curve and commit `TradeResult.new_snapshot` themselves.

Public API:
- `create_snapshot(...) -> ReserveSnapshot`
- `quote(snapshot, request) -> TradeQuote`
- `execute_trade(snapshot, request) -> TradeResult` (raises on rejection)
- `step(snapshot, request) -> StepResult`
"""

from .completion import ensure_active, evaluate, migration_handoff
from .config import CurveConfig, load_curve_config, snapshot_from_config
from .engine import execute_trade, quote, step
from .invariants import check_all, check_transition
from .ledger import apply_quote
from .metrics import market_cap, price_impact_bps, progress_bps, slippage_bps, validate_price_bounds
from .pricing import price_trade, quote_buy_cost, quote_trade, spot_price
from .state import create_snapshot, snapshot_from_dict, snapshot_to_dict
from .types import (
    CurvePhase,
    CurveStrategy,
    MigrationHandoff,
    ReserveSnapshot,
    StepResult,
    TradeDirection,
    TradeQuote,
    TradeRequest,
    TradeResult,
)

__all__ = [
    "create_snapshot",
    "snapshot_from_dict",
    "snapshot_to_dict",
    "CurveConfig",
    "load_curve_config",
    "snapshot_from_config",
    "quote",
    "execute_trade",
    "step",
    "price_trade",
    "quote_trade",
    "quote_buy_cost",
    "spot_price",
    "apply_quote",
    "ensure_active",
    "evaluate",
    "migration_handoff",
    "check_all",
    "check_transition",
    "market_cap",
    "price_impact_bps",
    "progress_bps",
    "slippage_bps",
    "validate_price_bounds",
    "CurvePhase",
    "CurveStrategy",
    "MigrationHandoff",
    "ReserveSnapshot",
    "StepResult",
    "TradeDirection",
    "TradeQuote",
    "TradeRequest",
    "TradeResult",
]
