"""Current-state assessment: raw session inputs -> immutable report.

This is the main entry point for scoring a session. It runs the pillar
aggregator, the body-composition ratios, then the risk and health-age
models, and returns a typed ``Assessment``.

All computation is deterministic; no I/O, no shared state.
"""

from __future__ import annotations

import logging

from elevate.core.config.weights import DEFAULT_WEIGHTS, ElevateWeights
from elevate.domains.wellness.domain_logic.body_metrics import (
    grip_summary,
    relative_muscle_mass,
    waist_to_height_ratio,
)
from elevate.domains.wellness.domain_logic.health_age import compute_health_age
from elevate.domains.wellness.domain_logic.models import Assessment, AssessmentInputs
from elevate.domains.wellness.domain_logic.pillar_aggregator import score_pillars
from elevate.domains.wellness.domain_logic.risk_model import (
    compute_risk_indices,
    risk_features,
)

logger = logging.getLogger(__name__)


def build_assessment(
    inputs: AssessmentInputs,
    weights: ElevateWeights = DEFAULT_WEIGHTS,
) -> Assessment:
    """Score one client session."""
    fe = inputs.food.fe
    pillars = score_pillars(inputs.items, fe, weights)
    grip = grip_summary(
        inputs.grip_left, inputs.grip_right, inputs.inbody.weight, inputs.grip_z
    )
    grip_z = grip.z if grip.z is not None else 0.0

    risks = compute_risk_indices(
        risk_features(inputs.vitals, inputs.inbody, pillars, grip_z),
        weights,
    )
    health_age = compute_health_age(
        inputs.vitals, inputs.inbody, pillars, grip_z, weights
    )

    assessment = Assessment(
        pillars=pillars,
        food_env_score=fe,
        grip=grip,
        whtr=waist_to_height_ratio(inputs.inbody.waist, inputs.inbody.height),
        smm_rel=round(relative_muscle_mass(inputs.inbody.smm, inputs.inbody.weight), 3),
        risks=risks,
        health_age=health_age,
        referral_required=inputs.parq.requires_referral(),
    )
    logger.debug(
        "Assessment built: peak=%.1f health_age_delta=%.1f referral=%s",
        pillars.peak, health_age.delta, assessment.referral_required,
    )
    return assessment
