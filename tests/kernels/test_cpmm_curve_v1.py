"""Tests for the constant-product bonding-curve kernel."""

from __future__ import annotations

import pytest

from bondcurve.errors import DegenerateCurve, InsufficientReserves, InvalidAmount
from bondcurve.kernels.python.cpmm_curve_v1 import (
    PRICE_SCALE,
    constant_product,
    spot_price,
    swap_exact_in,
    swap_exact_out,
)


class TestSwapExactIn:
    def test_exact_division_keeps_k(self):
        move = swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=1_000)
        assert move.gross_out == 500
        assert move.new_reserve_in == 2_000
        assert move.new_reserve_out == 500
        assert move.new_reserve_in * move.new_reserve_out == move.k_before == 1_000_000

    def test_remainder_stays_in_curve(self):
        # 1_000_000 / 1_003 = 997.008...; ceil keeps the remainder in reserve_out.
        move = swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=3)
        assert move.new_reserve_out == 998
        assert move.gross_out == 2
        assert move.new_reserve_in * move.new_reserve_out > move.k_before

    def test_zero_amount_rejected(self):
        with pytest.raises(InvalidAmount):
            swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=0)

    def test_zero_reserve_rejected(self):
        with pytest.raises(DegenerateCurve):
            swap_exact_in(reserve_in=0, reserve_out=1_000, amount_in=1)
        with pytest.raises(DegenerateCurve):
            swap_exact_in(reserve_in=1_000, reserve_out=0, amount_in=1)

    def test_dust_input_yields_nothing(self):
        with pytest.raises(InsufficientReserves):
            swap_exact_in(reserve_in=1_000_000, reserve_out=10, amount_in=1)


class TestSwapExactOut:
    def test_basic(self):
        out = swap_exact_out(reserve_in=1_000, reserve_out=1_000, amount_out=500)
        assert out.amount_in == 1_000
        assert out.new_reserve_in == 2_000

    def test_cannot_drain(self):
        with pytest.raises(InsufficientReserves):
            swap_exact_out(reserve_in=1_000, reserve_out=1_000, amount_out=1_000)

    def test_zero_amount_rejected(self):
        with pytest.raises(InvalidAmount):
            swap_exact_out(reserve_in=1_000, reserve_out=1_000, amount_out=0)


class TestSpotPrice:
    def test_ratio(self):
        assert spot_price(reserve_base=1_000, reserve_quote=2_000) == 2 * PRICE_SCALE

    def test_floors(self):
        assert spot_price(reserve_base=3, reserve_quote=1) == PRICE_SCALE // 3

