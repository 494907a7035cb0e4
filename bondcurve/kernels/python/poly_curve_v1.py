"""
Polynomial bonding-curve kernel (v1 semantics).

Price curve (quote per PRICE_SCALE base units at supply ``s``):

    price(s) = base_price * (1 + s / M)^2            M = max_supply

The quote amount for moving supply between two points is the definite integral
of ``price`` over that range. Its antiderivative, expanded binomially to cubic
order and put over one denominator, is

    integral(S) = base_price * (3*M^2*S + 3*M*S^2 + S^3) / (3 * M^2 * PRICE_SCALE)

The numerator is exact in the u256 domain, so the only precision loss is the
single floor division at the end. `integral` is therefore a pure function of the
supply point: buying and then selling the same amount from the same supply
prices to the same value in both directions.

Because `integral` is non-decreasing in ``S``, `buy_cost(s, a)` is
non-decreasing in ``a`` and `max_affordable_amount` can binary-search it.
"""

from __future__ import annotations

from ...errors import DegenerateCurve, InvalidAmount, SupplyExceeded
from .fixed_point import (
    U64_MAX,
    U128_MAX,
    U256_MAX,
    checked_add,
    checked_div,
    checked_mul,
    narrow,
    require_uint,
)

# Fixed-point scale of base_price (matches the constant-product spot price scale).
PRICE_SCALE = 1_000_000


def _require_curve(base_price: int, max_supply: int) -> None:
    require_uint("base_price", base_price)
    require_uint("max_supply", max_supply)
    if max_supply == 0:
        raise DegenerateCurve("max_supply must be positive")


def _require_supply(supply: int, max_supply: int) -> None:
    require_uint("supply", supply)
    if supply > max_supply:
        raise SupplyExceeded(f"supply ({supply}) > max_supply ({max_supply})")


def integral(supply: int, *, base_price: int, max_supply: int) -> int:
    """Total quote paid to move supply from 0 to `supply` (floored, u256 intermediate)."""
    _require_curve(base_price, max_supply)
    _require_supply(supply, max_supply)
    if supply == 0:
        return 0

    m2 = checked_mul(max_supply, max_supply, bound=U128_MAX)
    s2 = checked_mul(supply, supply, bound=U128_MAX)
    s3 = checked_mul(s2, supply, bound=U256_MAX)

    linear = checked_mul(checked_mul(3, m2, bound=U256_MAX), supply, bound=U256_MAX)
    quadratic = checked_mul(checked_mul(3, max_supply, bound=U128_MAX), s2, bound=U256_MAX)
    poly = checked_add(checked_add(linear, quadratic, bound=U256_MAX), s3, bound=U256_MAX)

    numerator = checked_mul(base_price, poly, bound=U256_MAX)
    denominator = checked_mul(checked_mul(3, m2, bound=U256_MAX), PRICE_SCALE, bound=U256_MAX)
    return checked_div(numerator, denominator)


def price_at(supply: int, *, base_price: int, max_supply: int) -> int:
    """Marginal price ``floor(base_price * (M + s)^2 / M^2)``."""
    _require_curve(base_price, max_supply)
    _require_supply(supply, max_supply)
    shifted = checked_add(max_supply, supply, bound=U128_MAX)
    numerator = checked_mul(base_price, checked_mul(shifted, shifted, bound=U256_MAX), bound=U256_MAX)
    return narrow(
        checked_div(numerator, checked_mul(max_supply, max_supply, bound=U128_MAX)),
        name="price",
    )


def _cost_between(lower: int, upper: int, *, base_price: int, max_supply: int) -> int:
    return integral(upper, base_price=base_price, max_supply=max_supply) - integral(
        lower, base_price=base_price, max_supply=max_supply
    )


def remaining_cost(supply: int, *, base_price: int, max_supply: int) -> int:
    """Quote needed to buy out every unit between `supply` and `max_supply` (not narrowed)."""
    return _cost_between(supply, max_supply, base_price=base_price, max_supply=max_supply)


def buy_cost(supply: int, amount: int, *, base_price: int, max_supply: int) -> int:
    """
    Quote cost of raising supply from `supply` to `supply + amount`.

    Raises:
        InvalidAmount: `amount` is zero.
        SupplyExceeded: `supply + amount > max_supply`.
        Overflow: the cost does not fit in u64.
    """
    _require_curve(base_price, max_supply)
    _require_supply(supply, max_supply)
    require_uint("amount", amount)
    if amount == 0:
        raise InvalidAmount("amount must be positive")
    new_supply = checked_add(supply, amount, bound=U64_MAX)
    if new_supply > max_supply:
        raise SupplyExceeded(f"buy would raise supply to {new_supply} > max_supply ({max_supply})")
    return narrow(
        _cost_between(supply, new_supply, base_price=base_price, max_supply=max_supply),
        name="buy_cost",
    )


def sell_proceeds(supply: int, amount: int, *, base_price: int, max_supply: int) -> int:
    """Quote released by lowering supply from `supply` to `supply - amount`."""
    _require_curve(base_price, max_supply)
    _require_supply(supply, max_supply)
    require_uint("amount", amount)
    if amount == 0:
        raise InvalidAmount("amount must be positive")
    if amount > supply:
        raise SupplyExceeded(f"sell of {amount} exceeds current supply ({supply})")
    return narrow(
        _cost_between(supply - amount, supply, base_price=base_price, max_supply=max_supply),
        name="sell_proceeds",
    )


def max_affordable_amount(supply: int, budget: int, *, base_price: int, max_supply: int) -> int:
    """
    Largest `amount` in ``[0, max_supply - supply]`` with ``buy_cost(supply, amount) <= budget``.

    Binary search is valid because the cost is monotone in `amount`; it runs
    in O(log max_supply) integral evaluations. Candidates whose cost would not
    fit in u64 simply compare as unaffordable.
    """
    _require_curve(base_price, max_supply)
    _require_supply(supply, max_supply)
    require_uint("budget", budget)
    if budget == 0:
        raise InvalidAmount("budget must be positive")

    start = integral(supply, base_price=base_price, max_supply=max_supply)
    lo = 0
    hi = max_supply - supply
    while lo < hi:
        mid = (lo + hi + 1) // 2
        cost = integral(supply + mid, base_price=base_price, max_supply=max_supply) - start
        if cost <= budget:
            lo = mid
        else:
            hi = mid - 1
    return lo
