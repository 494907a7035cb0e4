"""
bondcurve: integer-only bonding-curve pricing and reserve-ledger engine.
"""

from .core.curve import (
    CurveConfig,
    CurvePhase,
    CurveStrategy,
    MigrationHandoff,
    ReserveSnapshot,
    StepResult,
    TradeDirection,
    TradeQuote,
    TradeRequest,
    TradeResult,
    create_snapshot,
    execute_trade,
    load_curve_config,
    quote,
    snapshot_from_config,
    step,
)
from .errors import CurveError

__version__ = "0.1.0"

__all__ = [
    "CurveConfig",
    "CurveError",
    "CurvePhase",
    "CurveStrategy",
    "MigrationHandoff",
    "ReserveSnapshot",
    "StepResult",
    "TradeDirection",
    "TradeQuote",
    "TradeRequest",
    "TradeResult",
    "create_snapshot",
    "execute_trade",
    "load_curve_config",
    "quote",
    "snapshot_from_config",
    "step",
]
