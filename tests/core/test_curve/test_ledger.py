"""Tests for bondcurve/core/curve/ledger.py: re-derivation and delta application."""

import pytest
from dataclasses import replace

from bondcurve.core.curve import (
    CurveStrategy,
    TradeDirection,
    apply_quote,
    create_snapshot,
    price_trade,
)
from bondcurve.errors import CurveComplete, StaleQuote, SupplyExceeded


def _snapshot(**overrides):
    params = dict(
        virtual_base_reserves=1_000,
        virtual_quote_reserves=1_000,
        real_base_reserves=800,
        total_supply=1_000,
        graduation_threshold=10_000,
        fee_basis_points=100,
    )
    params.update(overrides)
    return create_snapshot(**params)


class TestApplyBuy:
    def test_deltas(self):
        s = _snapshot()
        q = price_trade(s, TradeDirection.BUY, 1_000)
        n = apply_quote(s, q)
        assert n.virtual_quote_reserves == s.virtual_quote_reserves + q.amount_in
        assert n.real_quote_reserves == s.real_quote_reserves + q.amount_in
        assert n.virtual_base_reserves == s.virtual_base_reserves - q.net_amount_out
        assert n.real_base_reserves == s.real_base_reserves - q.net_amount_out
        assert n.circulating_supply == s.circulating_supply + q.net_amount_out

    def test_config_untouched(self):
        s = _snapshot()
        n = apply_quote(s, price_trade(s, TradeDirection.BUY, 1_000))
        for name in ("total_supply", "graduation_threshold", "fee_basis_points", "strategy"):
            assert getattr(n, name) == getattr(s, name)

    def test_does_not_complete(self):
        s = _snapshot(graduation_threshold=500)
        n = apply_quote(s, price_trade(s, TradeDirection.BUY, 1_000))
        assert n.real_quote_reserves >= n.graduation_threshold
        assert not n.is_complete

    def test_circulating_cannot_pass_total_supply(self):
        # an inconsistent snapshot: 990 of 1_000 already circulate
        s = replace(_snapshot(), circulating_supply=990)
        with pytest.raises(SupplyExceeded):
            apply_quote(s, price_trade(s, TradeDirection.BUY, 1_000))


class TestPolynomialLedger:
    def test_virtual_reserves_untouched(self):
        s = _snapshot(
            strategy=CurveStrategy.POLYNOMIAL,
            base_price=1_000_000,
            max_supply=1_000,
            real_base_reserves=1_000,
        )
        q = price_trade(s, TradeDirection.BUY, 100)
        n = apply_quote(s, q)
        assert (n.virtual_base_reserves, n.virtual_quote_reserves) == (1_000, 1_000)
        assert n.real_quote_reserves == q.amount_in
        assert n.real_base_reserves == 1_000 - q.net_amount_out
        assert n.circulating_supply == q.net_amount_out


class TestApplySell:
    def test_deltas(self):
        s = _snapshot()
        s = apply_quote(s, price_trade(s, TradeDirection.BUY, 1_000))
        q = price_trade(s, TradeDirection.SELL, 200)
        n = apply_quote(s, q)
        assert n.virtual_base_reserves == s.virtual_base_reserves + 200
        assert n.real_base_reserves == s.real_base_reserves + 200
        assert n.virtual_quote_reserves == s.virtual_quote_reserves - q.net_amount_out
        assert n.real_quote_reserves == s.real_quote_reserves - q.net_amount_out
        assert n.circulating_supply == s.circulating_supply - 200


class TestStaleQuote:
    def test_tampered_output(self):
        s = _snapshot()
        q = price_trade(s, TradeDirection.BUY, 1_000)
        with pytest.raises(StaleQuote):
            apply_quote(s, replace(q, net_amount_out=q.net_amount_out + 1))

    def test_tampered_fee(self):
        s = _snapshot()
        q = price_trade(s, TradeDirection.BUY, 1_000)
        with pytest.raises(StaleQuote):
            apply_quote(s, replace(q, fee_amount=0, net_amount_out=q.gross_amount_out))

    def test_quote_from_older_snapshot(self):
        s = _snapshot()
        q = price_trade(s, TradeDirection.BUY, 100)
        moved = apply_quote(s, q)
        with pytest.raises(StaleQuote):
            apply_quote(moved, q)

    def test_strategy_mismatch(self):
        s = _snapshot()
        q = price_trade(s, TradeDirection.BUY, 1_000)
        with pytest.raises(StaleQuote):
            apply_quote(s, replace(q, strategy=CurveStrategy.POLYNOMIAL))


class TestCompleteCurve:
    def test_apply_rejected(self):
        s = _snapshot()
        q = price_trade(s, TradeDirection.BUY, 1_000)
        with pytest.raises(CurveComplete):
            apply_quote(replace(s, is_complete=True), q)
