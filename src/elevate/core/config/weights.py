"""Model constants for the Elevate scoring engine.

Every weight the engine uses lives in one frozen ``ElevateWeights`` value.
Components receive it explicitly, so an alternative weight set (loaded from
a YAML profile or built in a test) never leaks into other callers.

Weights encode coaching theory, not fitted coefficients:
    Exercise & Nutrition (0.30 each): the two habits a coach moves fastest
    Sleep & Stress (0.20 each): slower, mostly indirect levers
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

PILLAR_KEYS = ("ex", "nu", "sl", "st")

PILLAR_LABELS = {
    "ex": "Exercise",
    "nu": "Nutrition",
    "sl": "Sleep",
    "st": "Stress",
}

DEFAULT_PILLAR_ITEMS: dict[str, tuple[str, ...]] = {
    "ex": ("ex_mvpa", "ex_steps", "ex_strength_days"),
    "nu": ("nu_protein", "nu_upf", "nu_vegfruit", "nu_water"),
    "sl": ("sl_duration", "sl_quality"),
    "st": ("st_stress_load", "st_coping"),
}

# Items absent from item_weights count with this weight.
DEFAULT_ITEM_WEIGHT = 1.0

_SUM_TOLERANCE = 1e-6


class WeightsConfigError(ValueError):
    """Raised when the model constants are misconfigured."""


@dataclass(frozen=True)
class PeakWeights:
    """Contribution of each pillar to the composite Peak score."""

    ex: float = 0.30
    nu: float = 0.30
    sl: float = 0.20
    st: float = 0.20

    def total(self) -> float:
        return self.ex + self.nu + self.sl + self.st


@dataclass(frozen=True)
class HealthAgeWeights:
    """Weights of the six Z-like terms in the composite health-age Z."""

    rhr: float = 0.15
    sbp: float = 0.15
    bf: float = 0.20
    whtr: float = 0.20
    grip: float = 0.10
    peak: float = 0.20
    years_per_z: float = 5.5


@dataclass(frozen=True)
class BodyCompositionRates:
    """Monthly body-composition change at full training effect."""

    k: float = 0.35                 # saturation constant on effective effort
    bf_per_month: float = -0.6      # body-fat %-points
    smm_per_month: float = 0.1      # skeletal muscle kg
    vat_per_month: float = -0.8     # visceral fat index units


@dataclass(frozen=True)
class SaturationCurve:
    """Per-pillar projection curve: uplift per 6 months at full effect."""

    uplift: float
    k: float


def _default_pillar_projection() -> dict[str, SaturationCurve]:
    return {
        "ex": SaturationCurve(uplift=10.0, k=0.40),
        "nu": SaturationCurve(uplift=6.0, k=0.30),
        "sl": SaturationCurve(uplift=4.0, k=0.25),
        "st": SaturationCurve(uplift=8.0, k=0.35),
    }


@dataclass(frozen=True)
class RiskWeights:
    """Reference baselines, scales and step offsets of the condition logits.

    Each continuous term is ``(feature - ref) / scale``; step terms add a
    fixed bonus when the feature crosses its threshold.
    """

    t2d_bf_ref: float = 25.0
    t2d_bf_scale: float = 6.0
    t2d_whtr_ref: float = 0.52
    t2d_low_nu_threshold: float = 50.0
    t2d_low_nu_bonus: float = 0.3

    osa_whtr_ref: float = 0.5
    osa_whtr_scale: float = 0.05
    osa_bf_ref: float = 22.0
    osa_bf_scale: float = 10.0

    htn_sbp_ref: float = 120.0
    htn_sbp_scale: float = 15.0
    htn_rhr_ref: float = 60.0
    htn_rhr_scale: float = 12.0

    nafld_bf_ref: float = 25.0
    nafld_bf_scale: float = 7.0
    nafld_vat_ref: float = 10.0
    nafld_vat_scale: float = 5.0

    sarcopenia_smm_rel_threshold: float = 0.30
    sarcopenia_low_muscle_bonus: float = 0.5
    sarcopenia_grip_z_threshold: float = -1.0
    sarcopenia_low_grip_bonus: float = 0.6

    lowcrf_peak_ref: float = 60.0
    lowcrf_peak_scale: float = 15.0


@dataclass(frozen=True)
class ElevateWeights:
    """Immutable bundle of every constant the engine reads.

    Mapping fields are stored as read-only views, so a shared instance such
    as ``DEFAULT_WEIGHTS`` cannot be changed in place.
    """

    pillar_items: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_PILLAR_ITEMS)
    )
    item_weights: Mapping[str, float] = field(default_factory=dict)
    peak: PeakWeights = field(default_factory=PeakWeights)
    nu_food_env_k: float = 0.10
    health_age: HealthAgeWeights = field(default_factory=HealthAgeWeights)
    risk: RiskWeights = field(default_factory=RiskWeights)
    body_composition: BodyCompositionRates = field(default_factory=BodyCompositionRates)
    pillar_projection: Mapping[str, SaturationCurve] = field(
        default_factory=_default_pillar_projection
    )

    def __post_init__(self) -> None:
        # Copy first so the caller's dicts are not aliased
        object.__setattr__(self, "pillar_items", MappingProxyType(
            {str(p): tuple(codes) for p, codes in self.pillar_items.items()}
        ))
        object.__setattr__(self, "item_weights", MappingProxyType(dict(self.item_weights)))
        object.__setattr__(
            self, "pillar_projection", MappingProxyType(dict(self.pillar_projection))
        )

    def item_weight(self, code: str) -> float:
        return self.item_weights.get(code, DEFAULT_ITEM_WEIGHT)

    def as_dict(self) -> dict[str, Any]:
        """Plain-data view, suitable for JSON or YAML output."""
        return {
            "pillar_items": {k: list(v) for k, v in self.pillar_items.items()},
            "item_weights": dict(self.item_weights),
            "peak": asdict(self.peak),
            "nu_food_env_k": self.nu_food_env_k,
            "health_age": asdict(self.health_age),
            "risk": asdict(self.risk),
            "body_composition": asdict(self.body_composition),
            "pillar_projection": {
                k: asdict(v) for k, v in self.pillar_projection.items()
            },
        }


DEFAULT_WEIGHTS = ElevateWeights()


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _require_non_negative(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise WeightsConfigError(f"{name} must be a non-negative number, got {value!r}")


def validate_weights(weights: ElevateWeights) -> ElevateWeights:
    """Check the invariants of a weight set; return it unchanged if valid."""
    missing = [p for p in PILLAR_KEYS if p not in weights.pillar_items]
    if missing:
        raise WeightsConfigError(f"pillar_items is missing pillars: {missing}")

    for code, value in weights.item_weights.items():
        _require_non_negative(f"item_weights[{code!r}]", value)

    for pillar in PILLAR_KEYS:
        _require_non_negative(f"peak.{pillar}", getattr(weights.peak, pillar))
    if abs(weights.peak.total() - 1.0) > _SUM_TOLERANCE:
        raise WeightsConfigError(
            f"peak weights must sum to 1, got {weights.peak.total():.6f}"
        )

    _require_non_negative("nu_food_env_k", weights.nu_food_env_k)

    for name in ("rhr", "sbp", "bf", "whtr", "grip", "peak", "years_per_z"):
        _require_non_negative(f"health_age.{name}", getattr(weights.health_age, name))

    _require_non_negative("body_composition.k", weights.body_composition.k)

    for name, value in asdict(weights.risk).items():
        if name.endswith("_scale"):
            # Scales divide feature deviations
            if not math.isfinite(value) or value <= 0:
                raise WeightsConfigError(f"risk.{name} must be positive, got {value!r}")
        elif name.endswith("_bonus"):
            _require_non_negative(f"risk.{name}", value)
        elif not math.isfinite(value):
            raise WeightsConfigError(f"risk.{name} must be finite, got {value!r}")

    for pillar in PILLAR_KEYS:
        curve = weights.pillar_projection.get(pillar)
        if curve is None:
            raise WeightsConfigError(f"pillar_projection is missing pillar {pillar!r}")
        _require_non_negative(f"pillar_projection.{pillar}.uplift", curve.uplift)
        _require_non_negative(f"pillar_projection.{pillar}.k", curve.k)

    return weights


# ---------------------------------------------------------------------------
# YAML profiles
# ---------------------------------------------------------------------------

_PROFILE_KEYS = frozenset({
    "version",
    "pillar_items",
    "item_weights",
    "peak_weights",
    "nu_food_env_k",
    "health_age",
    "risk",
    "body_composition",
    "pillar_projection",
})


def weights_from_mapping(data: Mapping[str, Any]) -> ElevateWeights:
    """Build validated weights from a parsed profile; absent keys keep defaults."""
    unknown = sorted(set(data) - _PROFILE_KEYS)
    if unknown:
        raise WeightsConfigError(f"Unknown weight profile sections: {unknown}")
    try:
        weights = _apply_profile(DEFAULT_WEIGHTS, data)
    except (TypeError, AttributeError) as exc:
        # replace() rejects unknown fields; non-mapping sections lack .items()
        raise WeightsConfigError(f"Malformed weight profile: {exc}") from exc
    return validate_weights(weights)


def _apply_profile(base: ElevateWeights, data: Mapping[str, Any]) -> ElevateWeights:
    changes: dict[str, Any] = {}

    if "pillar_items" in data:
        changes["pillar_items"] = {
            str(pillar): tuple(str(c) for c in codes)
            for pillar, codes in (data["pillar_items"] or {}).items()
        }
    if "item_weights" in data:
        changes["item_weights"] = {
            str(code): float(w) for code, w in (data["item_weights"] or {}).items()
        }
    if "peak_weights" in data:
        changes["peak"] = replace(
            base.peak, **{k: float(v) for k, v in data["peak_weights"].items()}
        )
    if "nu_food_env_k" in data:
        changes["nu_food_env_k"] = float(data["nu_food_env_k"])
    if "health_age" in data:
        changes["health_age"] = replace(
            base.health_age, **{k: float(v) for k, v in data["health_age"].items()}
        )
    if "risk" in data:
        changes["risk"] = replace(
            base.risk, **{k: float(v) for k, v in data["risk"].items()}
        )
    if "body_composition" in data:
        changes["body_composition"] = replace(
            base.body_composition,
            **{k: float(v) for k, v in data["body_composition"].items()},
        )
    if "pillar_projection" in data:
        curves = dict(base.pillar_projection)
        for pillar, curve in (data["pillar_projection"] or {}).items():
            current = curves.get(pillar, SaturationCurve(uplift=0.0, k=0.0))
            curves[pillar] = replace(current, **{k: float(v) for k, v in curve.items()})
        changes["pillar_projection"] = curves

    return replace(base, **changes)


def load_weights_file(path: str | Path) -> ElevateWeights:
    """Parse a YAML weight profile into a validated ``ElevateWeights``."""
    path = Path(path).expanduser()
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise WeightsConfigError(f"Weight profile {path} must be a YAML mapping")
    weights = weights_from_mapping(data)
    logger.info("Loaded weight profile %s (version %s)", path, data.get("version", "?"))
    return weights
