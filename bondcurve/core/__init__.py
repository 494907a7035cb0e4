"""
Core bonding-curve algorithms
"""

from .fees import BPS_DENOM, compute_fee, gross_up_for_fee, validate_fee_bps
from .curve import (
    CurveStrategy,
    ReserveSnapshot,
    TradeDirection,
    TradeRequest,
    TradeResult,
    create_snapshot,
    execute_trade,
    quote,
    step,
)

__all__ = [
    "BPS_DENOM",
    "compute_fee",
    "gross_up_for_fee",
    "validate_fee_bps",
    "CurveStrategy",
    "ReserveSnapshot",
    "TradeDirection",
    "TradeRequest",
    "TradeResult",
    "create_snapshot",
    "execute_trade",
    "quote",
    "step",
]
