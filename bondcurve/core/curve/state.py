"""Snapshot construction and serialization.

`create_snapshot()` is the launch-time constructor: it validates the immutable
configuration and returns an ACTIVE snapshot. `snapshot_to_dict` /
`snapshot_from_dict` give the persistence collaborator a plain-dict form.

Round-trip property (tested): `snapshot_from_dict(snapshot_to_dict(s)) == s`.
"""

from __future__ import annotations

from typing import Any, Mapping

from ...errors import CurveError, InvalidConfiguration
from ...kernels.python.fixed_point import require_uint
from ..fees import validate_fee_bps
from .invariants import check_all
from .types import CurveStrategy, ReserveSnapshot

# Auto-derived from ReserveSnapshot field definitions (single source of truth).
SNAPSHOT_FIELD_NAMES: tuple[str, ...] = tuple(ReserveSnapshot.__dataclass_fields__)

_ENUM_FIELDS = {"strategy": CurveStrategy}


def create_snapshot(
    *,
    virtual_base_reserves: int,
    virtual_quote_reserves: int,
    real_base_reserves: int,
    total_supply: int,
    graduation_threshold: int,
    fee_basis_points: int = 0,
    real_quote_reserves: int = 0,
    strategy: CurveStrategy = CurveStrategy.CONSTANT_PRODUCT,
    base_price: int = 0,
    max_supply: int = 0,
    circulating_supply: int | None = None,
) -> ReserveSnapshot:
    """
    Build the initial snapshot of a new curve.

    Base units not held by the curve (``total_supply - real_base_reserves``, e.g.
    the creator allocation) already circulate and can be sold back. Pass
    `circulating_supply` explicitly only to override that default.

    Raises:
        InvalidConfiguration: any parameter is out of range or inconsistent.
    """
    if circulating_supply is None:
        circulating_supply = max(total_supply - real_base_reserves, 0)

    try:
        for name, v in (
            ("virtual_base_reserves", virtual_base_reserves),
            ("virtual_quote_reserves", virtual_quote_reserves),
            ("real_base_reserves", real_base_reserves),
            ("real_quote_reserves", real_quote_reserves),
            ("total_supply", total_supply),
            ("graduation_threshold", graduation_threshold),
            ("base_price", base_price),
            ("max_supply", max_supply),
            ("circulating_supply", circulating_supply),
        ):
            require_uint(name, v)
        validate_fee_bps(fee_basis_points)
    except CurveError as exc:
        raise InvalidConfiguration(str(exc)) from exc

    if not isinstance(strategy, CurveStrategy):
        raise InvalidConfiguration(f"unknown strategy: {strategy!r}")
    if virtual_base_reserves == 0 or virtual_quote_reserves == 0:
        raise InvalidConfiguration("virtual reserves must be positive")
    if graduation_threshold == 0:
        raise InvalidConfiguration("graduation_threshold must be positive")
    if real_quote_reserves >= graduation_threshold:
        raise InvalidConfiguration("curve would start past its graduation threshold")
    if real_base_reserves + circulating_supply > total_supply:
        raise InvalidConfiguration(
            "real_base_reserves + circulating_supply exceeds total_supply"
        )

    if strategy is CurveStrategy.POLYNOMIAL:
        if base_price == 0:
            raise InvalidConfiguration("polynomial curve needs a positive base_price")
        if not (0 < max_supply <= total_supply):
            raise InvalidConfiguration("polynomial curve needs 0 < max_supply <= total_supply")
        if circulating_supply > max_supply:
            raise InvalidConfiguration("circulating_supply exceeds max_supply")

    snapshot = ReserveSnapshot(
        virtual_base_reserves=virtual_base_reserves,
        virtual_quote_reserves=virtual_quote_reserves,
        real_base_reserves=real_base_reserves,
        real_quote_reserves=real_quote_reserves,
        total_supply=total_supply,
        graduation_threshold=graduation_threshold,
        fee_basis_points=fee_basis_points,
        strategy=strategy,
        base_price=base_price,
        max_supply=max_supply,
        circulating_supply=circulating_supply,
    )
    violations = check_all(snapshot)
    if violations:
        raise InvalidConfiguration(f"invariant violations: {', '.join(violations)}")
    return snapshot


def snapshot_to_dict(snapshot: ReserveSnapshot) -> dict[str, bool | int | str]:
    """Serialize a ReserveSnapshot to a plain dict (enums by value)."""
    out: dict[str, bool | int | str] = {}
    for name in SNAPSHOT_FIELD_NAMES:
        val = getattr(snapshot, name)
        out[name] = val.value if name in _ENUM_FIELDS else val
    return out


def snapshot_from_dict(d: Mapping[str, Any]) -> ReserveSnapshot:
    """Deserialize a dict to a ReserveSnapshot. Raises KeyError on missing fields."""
    kwargs: dict[str, Any] = {}
    for name in SNAPSHOT_FIELD_NAMES:
        val = d[name]
        if name in _ENUM_FIELDS:
            kwargs[name] = _ENUM_FIELDS[name](val)
        elif name == "is_complete":
            if not isinstance(val, bool):
                raise TypeError(f"snapshot field {name!r} must be bool, got {type(val).__name__}")
            kwargs[name] = val
        elif isinstance(val, int) and not isinstance(val, bool):
            kwargs[name] = int(val)  # normalize int subclasses
        else:
            raise TypeError(f"snapshot field {name!r} must be int, got {type(val).__name__}")
    return ReserveSnapshot(**kwargs)
