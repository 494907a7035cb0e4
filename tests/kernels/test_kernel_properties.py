"""Property tests for the curve kernels: rounding direction and search correctness."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from bondcurve.errors import InsufficientReserves
from bondcurve.kernels.python import cpmm_curve_v1, poly_curve_v1

_reserve = st.integers(min_value=1, max_value=10**9)
_amount = st.integers(min_value=1, max_value=10**9)


# ---------------------------------------------------------------------------
# Constant product
# ---------------------------------------------------------------------------

class TestConstantProduct:
    @given(reserve_in=_reserve, reserve_out=_reserve, amount_in=_amount)
    @settings(max_examples=300, deadline=None)
    def test_k_never_decreases(self, reserve_in, reserve_out, amount_in):
        try:
            move = cpmm_curve_v1.swap_exact_in(
                reserve_in=reserve_in, reserve_out=reserve_out, amount_in=amount_in
            )
        except InsufficientReserves:
            return
        assert move.new_reserve_in * move.new_reserve_out >= move.k_before
        assert 0 < move.gross_out < reserve_out

    @given(reserve_in=_reserve, reserve_out=_reserve, data=st.data())
    @settings(max_examples=300, deadline=None)
    def test_exact_out_input_buys_at_least_requested(self, reserve_in, reserve_out, data):
        assume(reserve_out > 1)
        amount_out = data.draw(st.integers(min_value=1, max_value=reserve_out - 1))
        out = cpmm_curve_v1.swap_exact_out(
            reserve_in=reserve_in, reserve_out=reserve_out, amount_out=amount_out
        )
        move = cpmm_curve_v1.swap_exact_in(
            reserve_in=reserve_in, reserve_out=reserve_out, amount_in=out.amount_in
        )
        assert move.gross_out >= amount_out

    @given(vb=_reserve, vq=_reserve, amount_in=_amount)
    @settings(max_examples=300, deadline=None)
    def test_round_trip_never_profits(self, vb, vq, amount_in):
        try:
            buy = cpmm_curve_v1.swap_exact_in(reserve_in=vq, reserve_out=vb, amount_in=amount_in)
            sell = cpmm_curve_v1.swap_exact_in(
                reserve_in=buy.new_reserve_out,
                reserve_out=buy.new_reserve_in,
                amount_in=buy.gross_out,
            )
        except InsufficientReserves:
            return
        assert sell.gross_out <= amount_in


# ---------------------------------------------------------------------------
# Polynomial
# ---------------------------------------------------------------------------

@st.composite
def _poly_point(draw):
    max_supply = draw(st.integers(min_value=1, max_value=10**6))
    supply = draw(st.integers(min_value=0, max_value=max_supply))
    base_price = draw(st.integers(min_value=1, max_value=10**9))
    return supply, dict(base_price=base_price, max_supply=max_supply)


class TestPolynomial:
    @given(point=_poly_point(), budget=st.integers(min_value=1, max_value=10**12))
    @settings(max_examples=300, deadline=None)
    def test_max_affordable_is_largest_affordable(self, point, budget):
        supply, curve = point
        amount = poly_curve_v1.max_affordable_amount(supply, budget, **curve)
        assert 0 <= amount <= curve["max_supply"] - supply
        if amount > 0:
            assert poly_curve_v1.buy_cost(supply, amount, **curve) <= budget
        if amount < curve["max_supply"] - supply:
            assert poly_curve_v1.buy_cost(supply, amount + 1, **curve) > budget

    @given(point=_poly_point(), data=st.data())
    @settings(max_examples=300, deadline=None)
    def test_buy_then_sell_returns_cost(self, point, data):
        supply, curve = point
        assume(supply < curve["max_supply"])
        amount = data.draw(st.integers(min_value=1, max_value=curve["max_supply"] - supply))
        cost = poly_curve_v1.buy_cost(supply, amount, **curve)
        assert poly_curve_v1.sell_proceeds(supply + amount, amount, **curve) == cost

    @given(point=_poly_point(), data=st.data())
    @settings(max_examples=200, deadline=None)
    def test_cost_monotone_in_amount(self, point, data):
        supply, curve = point
        assume(supply + 1 < curve["max_supply"])
        a = data.draw(st.integers(min_value=1, max_value=curve["max_supply"] - supply - 1))
        assert poly_curve_v1.buy_cost(supply, a, **curve) <= poly_curve_v1.buy_cost(supply, a + 1, **curve)
