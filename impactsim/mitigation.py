from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Literal, Optional

from .impact_model import AsteroidParameters, InvalidParameterError

StrategyType = Literal["kinetic_impactor", "gravity_tractor", "nuclear_device"]

# type -> (delta_v km/s, azimuth change deg, angle change deg); None = not used by the strategy
STRATEGY_DEFAULTS = {
    "kinetic_impactor": (0.01, 1.0, None),
    "gravity_tractor":  (None, 0.5, 0.5),
    "nuclear_device":   (0.1, None, None),
}


@dataclass(frozen=True)
class MitigationStrategy:
    type: StrategyType
    delta_v_kmps: Optional[float] = None
    azimuth_change_deg: Optional[float] = None
    angle_change_deg: Optional[float] = None


def _pick(strategy: MitigationStrategy, field: str, default: Optional[float]) -> float:
    value = getattr(strategy, field)
    if value is None:
        return default or 0.0
    if default is None:
        raise InvalidParameterError(f"{field} does not apply to strategy '{strategy.type}'.")
    return value


def apply_mitigation(asteroid: AsteroidParameters, strategy: MitigationStrategy) -> AsteroidParameters:
    """
    Deflected copy of ``asteroid``. Unset strategy fields fall back to the
    per-strategy defaults and an explicit 0 is applied as given. Setting a
    field the strategy does not use raises InvalidParameterError, as does a
    deflection that leaves the asteroid invalid.
    """
    if strategy.type not in STRATEGY_DEFAULTS:
        raise InvalidParameterError(f"Unknown mitigation strategy '{strategy.type}'.")
    dv_default, daz_default, dang_default = STRATEGY_DEFAULTS[strategy.type]
    dv = _pick(strategy, "delta_v_kmps", dv_default)
    daz = _pick(strategy, "azimuth_change_deg", daz_default)
    dang = _pick(strategy, "angle_change_deg", dang_default)

    return replace(
        asteroid,
        velocity_kmps=asteroid.velocity_kmps + dv,
        azimuth_deg=asteroid.azimuth_deg + daz,
        angle_deg=asteroid.angle_deg + dang,
    ).validate()
