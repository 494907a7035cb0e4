"""
Curve launch configuration.

A `CurveConfig` carries the parameters an external launcher supplies when it
creates a curve. Defaults reproduce the standard launch profile (6-decimal
token, 1e9 whole tokens, lamport-denominated quote):

- total supply            1_000_000_000 * 10^6
- virtual base reserves   1_073_000_000 * 10^6
- virtual quote reserves  30 * 10^9
- real base reserves        793_100_000 * 10^6
- graduation threshold    85 * 10^9
- fee                     100 bps

Configs can be loaded from YAML (`load_curve_config`) the same way kernel
models are loaded elsewhere: `yaml.safe_load`, mapping check, then strict
field validation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from ...errors import InvalidConfiguration
from .state import create_snapshot
from .types import CurveStrategy, ReserveSnapshot

TOKEN_DECIMALS = 6
_UNIT = 10**TOKEN_DECIMALS


@dataclass(frozen=True)
class CurveConfig:
    total_supply: int = 1_000_000_000 * _UNIT
    virtual_base_reserves: int = 1_073_000_000 * _UNIT
    virtual_quote_reserves: int = 30_000_000_000
    real_base_reserves: int = 793_100_000 * _UNIT
    graduation_threshold: int = 85_000_000_000
    fee_basis_points: int = 100
    strategy: CurveStrategy = CurveStrategy.CONSTANT_PRODUCT

    # Polynomial strategy only
    base_price: int = 0
    max_supply: int = 0


CONFIG_FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in fields(CurveConfig))


def curve_config_from_mapping(d: Mapping[str, Any]) -> CurveConfig:
    """Build a CurveConfig from a mapping. Missing keys take defaults; unknown keys are rejected."""
    unknown = sorted(set(d) - set(CONFIG_FIELD_NAMES))
    if unknown:
        raise InvalidConfiguration(f"unknown curve config keys: {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for name, val in d.items():
        if name == "strategy":
            try:
                kwargs[name] = CurveStrategy(val)
            except ValueError as exc:
                raise InvalidConfiguration(f"unknown strategy: {val!r}") from exc
        elif isinstance(val, int) and not isinstance(val, bool):
            kwargs[name] = int(val)
        else:
            raise InvalidConfiguration(f"config key {name!r} must be an int, got {type(val).__name__}")
    return CurveConfig(**kwargs)


def curve_config_to_dict(config: CurveConfig) -> dict[str, int | str]:
    out: dict[str, int | str] = asdict(config)
    out["strategy"] = config.strategy.value
    return out


def load_curve_config(path: Path | str) -> CurveConfig:
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return CurveConfig()
    if not isinstance(obj, Mapping):
        raise InvalidConfiguration("curve config YAML must be a mapping")
    return curve_config_from_mapping(obj)


def dump_curve_config(config: CurveConfig) -> str:
    return yaml.safe_dump(curve_config_to_dict(config), sort_keys=True)


def snapshot_from_config(config: CurveConfig) -> ReserveSnapshot:
    """Create the launch snapshot for `config` (validated by `create_snapshot`)."""
    return create_snapshot(
        virtual_base_reserves=config.virtual_base_reserves,
        virtual_quote_reserves=config.virtual_quote_reserves,
        real_base_reserves=config.real_base_reserves,
        total_supply=config.total_supply,
        graduation_threshold=config.graduation_threshold,
        fee_basis_points=config.fee_basis_points,
        strategy=config.strategy,
        base_price=config.base_price,
        max_supply=config.max_supply,
    )
