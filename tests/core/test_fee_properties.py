"""Property tests for fee rounding."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from bondcurve.core.fees import BPS_DENOM, compute_fee, gross_up_for_fee


@given(
    amount=st.integers(min_value=0, max_value=2**64 - 1),
    bps=st.integers(min_value=0, max_value=BPS_DENOM),
)
@settings(max_examples=300, deadline=None)
def test_fee_never_exceeds_amount(amount, bps):
    fee = compute_fee(amount, bps)
    assert 0 <= fee <= amount
    assert fee * BPS_DENOM <= amount * bps < (fee + 1) * BPS_DENOM


@given(
    net=st.integers(min_value=0, max_value=10**15),
    bps=st.integers(min_value=0, max_value=BPS_DENOM - 1),
)
@settings(max_examples=300, deadline=None)
def test_gross_up_covers_net(net, bps):
    gross = gross_up_for_fee(net, bps)
    assert gross - compute_fee(gross, bps) >= net

