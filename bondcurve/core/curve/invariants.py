"""Invariant checkers for the bonding-curve engine.

Each ``inv_*`` function returns True when the invariant holds on a single
snapshot; ``check_all()`` returns the list of violated invariant IDs (empty =
all pass).

``trans_*`` functions relate the snapshot before a trade to the candidate after
it, and ``check_transition()`` collects their violations the same way.
"""

from __future__ import annotations

from typing import Callable

from ...kernels.python.cpmm_curve_v1 import constant_product
from ...kernels.python.fixed_point import U64_MAX
from ..fees import BPS_DENOM
from .types import CurveStrategy, ReserveSnapshot

_U64_FIELDS: tuple[str, ...] = (
    "virtual_base_reserves",
    "virtual_quote_reserves",
    "real_base_reserves",
    "real_quote_reserves",
    "total_supply",
    "graduation_threshold",
    "base_price",
    "max_supply",
    "circulating_supply",
)

# Fixed at creation; a trade must never change them.
_IMMUTABLE_FIELDS: tuple[str, ...] = (
    "total_supply",
    "graduation_threshold",
    "fee_basis_points",
    "strategy",
    "base_price",
    "max_supply",
)


def inv_fields_in_range(s: ReserveSnapshot) -> bool:
    for name in _U64_FIELDS:
        v = getattr(s, name)
        if not isinstance(v, int) or isinstance(v, bool) or not (0 <= v <= U64_MAX):
            return False
    return True


def inv_fee_bps_in_range(s: ReserveSnapshot) -> bool:
    return 0 <= s.fee_basis_points <= BPS_DENOM


def inv_virtual_reserves_positive(s: ReserveSnapshot) -> bool:
    if s.is_complete:
        return True
    return s.virtual_base_reserves > 0 and s.virtual_quote_reserves > 0


def inv_threshold_positive(s: ReserveSnapshot) -> bool:
    return s.graduation_threshold > 0


def inv_circulating_within_total(s: ReserveSnapshot) -> bool:
    return s.circulating_supply <= s.total_supply


def inv_polynomial_supply_bounded(s: ReserveSnapshot) -> bool:
    if s.strategy is not CurveStrategy.POLYNOMIAL:
        return True
    return 0 < s.max_supply <= s.total_supply and s.circulating_supply <= s.max_supply


def inv_complete_only_past_threshold(s: ReserveSnapshot) -> bool:
    if not s.is_complete:
        return True
    return s.real_quote_reserves >= s.graduation_threshold


def trans_config_unchanged(before: ReserveSnapshot, after: ReserveSnapshot) -> bool:
    return all(getattr(before, name) == getattr(after, name) for name in _IMMUTABLE_FIELDS)


def trans_completion_monotone(before: ReserveSnapshot, after: ReserveSnapshot) -> bool:
    return after.is_complete or not before.is_complete


def trans_constant_product_non_decreasing(before: ReserveSnapshot, after: ReserveSnapshot) -> bool:
    if before.strategy is not CurveStrategy.CONSTANT_PRODUCT:
        return True
    k_before = constant_product(before.virtual_base_reserves, before.virtual_quote_reserves)
    k_after = constant_product(after.virtual_base_reserves, after.virtual_quote_reserves)
    return k_after >= k_before


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[ReserveSnapshot], bool]] = {
    "inv_fields_in_range": inv_fields_in_range,
    "inv_fee_bps_in_range": inv_fee_bps_in_range,
    "inv_virtual_reserves_positive": inv_virtual_reserves_positive,
    "inv_threshold_positive": inv_threshold_positive,
    "inv_circulating_within_total": inv_circulating_within_total,
    "inv_polynomial_supply_bounded": inv_polynomial_supply_bounded,
    "inv_complete_only_past_threshold": inv_complete_only_past_threshold,
}

TRANSITION_REGISTRY: dict[str, Callable[[ReserveSnapshot, ReserveSnapshot], bool]] = {
    "trans_config_unchanged": trans_config_unchanged,
    "trans_completion_monotone": trans_completion_monotone,
    "trans_constant_product_non_decreasing": trans_constant_product_non_decreasing,
}


def check_all(state: ReserveSnapshot) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]


def check_transition(before: ReserveSnapshot, after: ReserveSnapshot) -> list[str]:
    return [
        inv_id
        for inv_id, check_fn in TRANSITION_REGISTRY.items()
        if not check_fn(before, after)
    ]
