"""Health age: a linear biological-age delta from vitals, body and habits.

Five Z-like deviations plus the sign-inverted grip Z are blended into one
composite Z, converted to years. No clamping: extreme inputs give large
deltas because the model is linear and illustrative.
"""

from __future__ import annotations

from elevate.core.config.weights import DEFAULT_WEIGHTS, ElevateWeights
from elevate.domains.wellness.domain_logic.body_metrics import waist_to_height_ratio
from elevate.domains.wellness.domain_logic.models import (
    HealthAge,
    InBody,
    PillarScores,
    Vitals,
)
from elevate.domains.wellness.domain_logic.numeric import finite_or


def health_age_terms(
    vitals: Vitals,
    inbody: InBody,
    pillars: PillarScores,
    grip_z: float | None,
) -> dict[str, float]:
    """Per-term deviations before weighting. Positive = ages the client."""
    whtr = waist_to_height_ratio(inbody.waist, inbody.height)
    return {
        "rhr": (vitals.rhr - 60) / 12,
        "sbp": (vitals.sbp - 120) / 15 if vitals.sbp else 0.0,
        "bf": (inbody.bf - 22) / 8,
        "whtr": (whtr - 0.5) / 0.05,
        # Stronger grip lowers biological age
        "grip": -finite_or(grip_z, 0.0),
        "peak": (100 - pillars.peak) / 25,
    }


def compute_health_age(
    vitals: Vitals,
    inbody: InBody,
    pillars: PillarScores,
    grip_z: float | None,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> HealthAge:
    """Estimate health age; delta and age are rounded to 1 decimal."""
    w = weights.health_age
    terms = health_age_terms(vitals, inbody, pillars, grip_z)
    composite_z = (
        w.rhr * terms["rhr"]
        + w.sbp * terms["sbp"]
        + w.bf * terms["bf"]
        + w.whtr * terms["whtr"]
        + w.grip * terms["grip"]
        + w.peak * terms["peak"]
    )
    # round() can yield -0.0; normalise so callers never see a signed zero
    delta = round(composite_z * w.years_per_z, 1) + 0.0
    age = round(vitals.chron_age + delta, 1)
    return HealthAge(age=age, delta=delta)
