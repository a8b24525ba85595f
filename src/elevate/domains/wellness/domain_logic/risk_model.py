"""Condition risk indices from body composition, pillars and vitals.

Each condition is a linear blend of feature deviations from the reference
baselines in ``ElevateWeights.risk``, squashed through a sigmoid and scaled
to an integer 0-100 score.
The model performs no null handling: optional vitals are defaulted when the
feature bundle is built (see ``risk_features``).

All formulas are deterministic. Not a validated clinical tool.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from elevate.core.config.weights import DEFAULT_WEIGHTS, ElevateWeights
from elevate.domains.wellness.domain_logic.body_metrics import (
    relative_muscle_mass,
    waist_to_height_ratio,
)
from elevate.domains.wellness.domain_logic.models import (
    InBody,
    PillarScores,
    RiskBand,
    RiskDriver,
    RiskMap,
    RiskResult,
    Vitals,
)
from elevate.domains.wellness.domain_logic.numeric import clamp, finite_or, sigmoid

logger = logging.getLogger(__name__)

# Systolic BP assumed when none was measured
DEFAULT_SBP = 120.0

# Driver lists per condition, in reporting order. Each list names exactly the
# features that enter that condition's logit below.
CONDITION_DRIVERS: dict[str, tuple[RiskDriver, ...]] = {
    "t2d": (RiskDriver.BODY_FAT, RiskDriver.WAIST_TO_HEIGHT, RiskDriver.NUTRITION),
    "osa": (RiskDriver.WAIST_TO_HEIGHT, RiskDriver.BODY_FAT),
    "htn": (RiskDriver.SYSTOLIC_BP, RiskDriver.RESTING_HR),
    "nafld": (RiskDriver.VISCERAL_FAT, RiskDriver.BODY_FAT),
    "sarcopenia": (RiskDriver.LOW_MUSCLE, RiskDriver.GRIP_Z),
    "lowcrf": (RiskDriver.PEAK,),
}

# Band upper bounds (exclusive). Scores at or above the last bound are Very High.
_BAND_BOUNDS: tuple[tuple[float, RiskBand], ...] = (
    (25, RiskBand.LOW),
    (50, RiskBand.MOD),
    (75, RiskBand.HIGH),
)


@dataclass(frozen=True)
class RiskFeatures:
    """Feature bundle consumed by the risk model. All fields are defined reals."""

    bf: float
    waist: float
    height: float
    whtr: float
    nu: float
    sbp: float
    rhr: float
    vat: float
    smm_rel: float
    grip_z: float
    peak: float


def risk_features(
    vitals: Vitals,
    inbody: InBody,
    pillars: PillarScores,
    grip_z: float | None,
) -> RiskFeatures:
    """Assemble the feature bundle, defaulting missing SBP and grip Z."""
    return RiskFeatures(
        bf=inbody.bf,
        waist=inbody.waist,
        height=inbody.height,
        whtr=waist_to_height_ratio(inbody.waist, inbody.height),
        nu=pillars.nu,
        sbp=vitals.sbp if vitals.sbp is not None else DEFAULT_SBP,
        rhr=vitals.rhr,
        vat=inbody.vat,
        smm_rel=relative_muscle_mass(inbody.smm, inbody.weight),
        grip_z=finite_or(grip_z, 0.0),
        peak=pillars.peak,
    )


def band_from_score(score: float) -> RiskBand:
    """Half-open banding: [0,25) Low, [25,50) Mod, [50,75) High, [75,100] Very High."""
    for upper, band in _BAND_BOUNDS:
        if score < upper:
            return band
    return RiskBand.VERY_HIGH


def _score(logit: float) -> int:
    # Half-up rounding of the percentage
    return int(math.floor(clamp(sigmoid(logit)) * 100 + 0.5))


def condition_logits(
    f: RiskFeatures,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> dict[str, float]:
    """Pre-sigmoid logit per condition."""
    r = weights.risk
    return {
        "t2d": (
            (f.bf - r.t2d_bf_ref) / r.t2d_bf_scale
            + (f.waist / max(1.0, f.height) - r.t2d_whtr_ref)
            + (r.t2d_low_nu_bonus if f.nu < r.t2d_low_nu_threshold else 0.0)
        ),
        "osa": (
            (f.whtr - r.osa_whtr_ref) / r.osa_whtr_scale
            + (f.bf - r.osa_bf_ref) / r.osa_bf_scale
        ),
        "htn": (
            (f.sbp - r.htn_sbp_ref) / r.htn_sbp_scale
            + (f.rhr - r.htn_rhr_ref) / r.htn_rhr_scale
        ),
        "nafld": (
            (f.bf - r.nafld_bf_ref) / r.nafld_bf_scale
            + (f.vat - r.nafld_vat_ref) / r.nafld_vat_scale
        ),
        # Step terms: each threshold adds a fixed offset, nothing below it
        "sarcopenia": (
            (r.sarcopenia_low_muscle_bonus
             if f.smm_rel < r.sarcopenia_smm_rel_threshold else 0.0)
            + (r.sarcopenia_low_grip_bonus
               if f.grip_z < r.sarcopenia_grip_z_threshold else 0.0)
        ),
        "lowcrf": (r.lowcrf_peak_ref - f.peak) / r.lowcrf_peak_scale,
    }


def compute_risk_indices(
    features: RiskFeatures,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> RiskMap:
    """Score all six conditions from a feature bundle."""
    results: dict[str, RiskResult] = {}
    for condition, logit in condition_logits(features, weights).items():
        score = _score(logit)
        results[condition] = RiskResult(
            score=score,
            band=band_from_score(score),
            drivers=CONDITION_DRIVERS[condition],
        )
    logger.debug(
        "Risk indices: %s",
        {name: r.score for name, r in results.items()},
    )
    return RiskMap(**results)
