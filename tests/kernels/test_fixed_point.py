"""Tests for bondcurve/kernels/python/fixed_point.py."""

import pytest

from bondcurve.errors import DivisionByZero, Overflow, Underflow
from bondcurve.kernels.python.fixed_point import (
    U64_MAX,
    U128_MAX,
    U256_MAX,
    checked_add,
    checked_ceil_div,
    checked_div,
    checked_mul,
    checked_sub,
    narrow,
    require_uint,
    widen_mul,
)


# ---------------------------------------------------------------------------
# Domain checks
# ---------------------------------------------------------------------------

class TestRequireUint:
    def test_accepts_bounds(self):
        assert require_uint("x", 0) == 0
        assert require_uint("x", U64_MAX) == U64_MAX

    def test_negative_underflows(self):
        with pytest.raises(Underflow):
            require_uint("x", -1)

    def test_above_bound_overflows(self):
        with pytest.raises(Overflow):
            require_uint("x", U64_MAX + 1)

    def test_custom_bound(self):
        assert require_uint("x", U128_MAX, bound=U128_MAX) == U128_MAX

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            require_uint("x", True)


# ---------------------------------------------------------------------------
# Checked operations
# ---------------------------------------------------------------------------

class TestCheckedOps:
    def test_add(self):
        assert checked_add(1, 2) == 3
        with pytest.raises(Overflow):
            checked_add(U64_MAX, 1)

    def test_add_wide_bound(self):
        assert checked_add(U64_MAX, 1, bound=U128_MAX) == U64_MAX + 1

    def test_sub(self):
        assert checked_sub(5, 5) == 0
        with pytest.raises(Underflow):
            checked_sub(1, 2)

    def test_mul(self):
        assert checked_mul(U64_MAX, U64_MAX) == U64_MAX * U64_MAX
        with pytest.raises(Overflow):
            checked_mul(U128_MAX, 2)
        assert checked_mul(U128_MAX, 2, bound=U256_MAX) == U128_MAX * 2

    def test_div_floors(self):
        assert checked_div(7, 2) == 3
        assert checked_div(6, 2) == 3

    def test_ceil_div_rounds_up(self):
        assert checked_ceil_div(7, 2) == 4
        assert checked_ceil_div(6, 2) == 3
        assert checked_ceil_div(0, 5) == 0

    def test_div_by_zero(self):
        with pytest.raises(DivisionByZero):
            checked_div(1, 0)
        with pytest.raises(DivisionByZero):
            checked_ceil_div(1, 0)


class TestWidenNarrow:
    def test_widen_mul_max(self):
        assert widen_mul(U64_MAX, U64_MAX) == U64_MAX * U64_MAX

    def test_widen_mul_rejects_wide_operand(self):
        with pytest.raises(Overflow):
            widen_mul(U64_MAX + 1, 1)

    def test_narrow(self):
        assert narrow(U64_MAX) == U64_MAX
        with pytest.raises(Overflow):
            narrow(U64_MAX + 1, name="k")
        with pytest.raises(Underflow):
            narrow(-1)
